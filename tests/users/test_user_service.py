from __future__ import annotations

import threading

import pytest

from card_attendance.core.exceptions import DuplicateIdentifier, ValidationError


def test_register_normalizes_identifier(user_service):
    user = user_service.register("Asha", "ab12")

    assert user.identifier == "0000AB12"
    assert user.name == "Asha"


def test_register_trims_name(user_service):
    assert user_service.register("  Asha  ", "ab12").name == "Asha"


def test_name_shorter_than_three_characters_is_rejected(user_service):
    with pytest.raises(ValidationError):
        user_service.register("Al", "ab12c")


def test_identifier_of_three_characters_is_rejected(user_service):
    with pytest.raises(ValidationError):
        user_service.register("Asha", "ab1")


def test_identifier_longer_than_sixteen_characters_is_rejected(user_service):
    with pytest.raises(ValidationError):
        user_service.register("Asha", "a" * 17)


def test_duplicate_after_normalization_is_rejected(user_service):
    user_service.register("Asha", "ab12")

    with pytest.raises(DuplicateIdentifier):
        user_service.register("Someone Else", "00AB12")


def test_find_by_identifier_uses_same_normalization(user_service):
    user_service.register("Asha", "ab12")

    assert user_service.find_by_identifier(" AB12").name == "Asha"
    assert user_service.find_by_identifier("ffff") is None


def test_racing_registrations_only_one_succeeds(user_service):
    barrier = threading.Barrier(8)
    outcomes: list[str] = []
    lock = threading.Lock()

    def attempt(i: int) -> None:
        barrier.wait()
        try:
            user_service.register(f"User {i}", "ab12" if i % 2 else "AB12")
            result = "ok"
        except DuplicateIdentifier:
            result = "dup"
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=attempt, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes.count("ok") == 1
    assert outcomes.count("dup") == 7
    assert len(user_service.list_users()) == 1


class _RacingRepo:
    """Pre-check sees nothing; the insert then hits the unique constraint."""

    def get_by_identifier(self, identifier):
        return None

    def create_user(self, *, identifier, name):
        raise DuplicateIdentifier(f"Card {identifier} is already registered")

    def list_all(self):
        return []


def test_store_constraint_decides_when_precheck_misses():
    from card_attendance.users.service import UserService

    with pytest.raises(DuplicateIdentifier):
        UserService(_RacingRepo()).register("Asha", "ab12")


def test_list_users_sorted_by_name(user_service):
    user_service.register("Zara", "zz001")
    user_service.register("Asha", "ab12")

    assert [u.name for u in user_service.list_users()] == ["Asha", "Zara"]

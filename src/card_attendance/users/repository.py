from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """Repository interface for users.

    Note (DIP): the service layer depends on this interface, not on a concrete store.
    Implementations must enforce identifier uniqueness themselves and raise
    ``DuplicateIdentifier`` from ``create_user`` when it is violated.
    """

    def get_by_identifier(self, identifier: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(self, *, identifier: str, name: str) -> User:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

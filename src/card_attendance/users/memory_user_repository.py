from __future__ import annotations

import threading
from datetime import datetime
from typing import Optional, Sequence

from ..core.exceptions import DuplicateIdentifier
from .model import User
from .repository import UserRepository


class InMemoryUserRepository(UserRepository):
    """Process-local user store for the ``memory`` backend and tests.

    The lock makes check-and-insert a single step, standing in for the
    unique index the MySQL table carries.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._by_identifier: dict[str, User] = {}
        self._next_id = 1

    def get_by_identifier(self, identifier: str) -> Optional[User]:
        with self._lock:
            return self._by_identifier.get(identifier)

    def create_user(self, *, identifier: str, name: str) -> User:
        with self._lock:
            if identifier in self._by_identifier:
                raise DuplicateIdentifier(f"Card {identifier} is already registered")
            user = User(identifier=identifier, name=name, user_id=self._next_id, created_at=datetime.now())
            self._next_id += 1
            self._by_identifier[identifier] = user
            return user

    def list_all(self) -> Sequence[User]:
        with self._lock:
            users = list(self._by_identifier.values())
        users.sort(key=lambda u: (u.name, u.identifier))
        return users

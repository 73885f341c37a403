from __future__ import annotations

import logging
from typing import Optional

from ..common.validators import require_length_between, require_min_length, require_non_empty
from ..core.constants import NAME_MIN_LENGTH, RAW_IDENTIFIER_MAX_LENGTH, RAW_IDENTIFIER_MIN_LENGTH
from ..core.exceptions import DuplicateIdentifier
from .identity import normalize_identifier
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Use case: register card holders and resolve scanned cards to users."""

    def __init__(self, users: UserRepository):
        self._users = users

    def register(self, name: str, raw_identifier: str) -> User:
        name = require_non_empty(name, "Name")
        require_min_length(name, "Name", NAME_MIN_LENGTH)
        raw = require_non_empty(raw_identifier, "Card identifier")
        require_length_between(raw, "Card identifier", RAW_IDENTIFIER_MIN_LENGTH, RAW_IDENTIFIER_MAX_LENGTH)

        identifier = normalize_identifier(raw)

        # Fast path only; the store's unique constraint decides races.
        if self._users.get_by_identifier(identifier):
            raise DuplicateIdentifier(f"Card {identifier} is already registered")

        user = self._users.create_user(identifier=identifier, name=name)
        logger.info("Registered card %s for %s", user.identifier, user.name)
        return user

    def find_by_identifier(self, raw_identifier: str) -> Optional[User]:
        return self._users.get_by_identifier(normalize_identifier(raw_identifier))

    def list_users(self) -> list[User]:
        return list(self._users.list_all())

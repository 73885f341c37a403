from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..core.exceptions import DuplicateIdentifier
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import User
from .repository import UserRepository


def _to_user(row: dict) -> User:
    return User(
        identifier=row["identifier"],
        name=row["name"],
        user_id=int(row["user_id"]),
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_identifier(self, identifier: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, identifier, name, created_at
                FROM users
                WHERE identifier=%s
                """,
                (identifier,),
            )
            row = fetchone(cur)
            return _to_user(row) if row else None

    def create_user(self, *, identifier: str, name: str) -> User:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO users(identifier, name) VALUES(%s,%s)",
                    (identifier, name),
                )
                user_id = int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateIdentifier(f"Card {identifier} is already registered") from e
            raise
        # Re-read so created_at carries the server default.
        return self.get_by_identifier(identifier) or User(identifier=identifier, name=name, user_id=user_id)

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, identifier, name, created_at
                FROM users
                ORDER BY name ASC, identifier ASC
                """
            )
            return [_to_user(r) for r in fetchall(cur)]

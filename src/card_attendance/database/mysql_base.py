from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import StoreUnavailable
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)`` and commit on success.

    Integrity errors pass through untouched so repositories can map unique-key
    violations; any other driver error surfaces as ``StoreUnavailable``.
    """
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError:
        _rollback_quietly(conn)
        raise
    except mysql.connector.Error as e:
        _rollback_quietly(conn)
        raise StoreUnavailable(str(e)) from e
    except Exception:
        _rollback_quietly(conn)
        raise
    finally:
        _close_quietly(conn)


def _rollback_quietly(conn) -> None:
    # Lost connection (errno 2013): the server already discarded the transaction.
    try:
        conn.rollback()
    except mysql.connector.Error:
        pass


def _close_quietly(conn) -> None:
    try:
        conn.close()
    except mysql.connector.Error:
        pass


def is_duplicate_key(error: mysql.connector.Error) -> bool:
    return getattr(error, "errno", None) == errorcode.ER_DUP_ENTRY


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])

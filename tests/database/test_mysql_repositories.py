from __future__ import annotations

from datetime import datetime

import mysql.connector
import pytest
from mysql.connector import errorcode

from card_attendance.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from card_attendance.container import build_container
from card_attendance.core.exceptions import DuplicateIdentifier, StoreUnavailable
from card_attendance.users.mysql_user_repository import MySQLUserRepository


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self.lastrowid = 0
        self.rowcount = 0

    def execute(self, sql, params=None):
        self._conn.executed.append((" ".join(sql.split()), params))
        if self._conn.error is not None:
            raise self._conn.error
        self.lastrowid = 7
        self.rowcount = self._conn.rowcount

    def fetchone(self):
        return self._conn.rows[0] if self._conn.rows else None

    def fetchall(self):
        return list(self._conn.rows)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, *, error=None, rows=None, rowcount=1):
        self.error = error
        self.rows = rows or []
        self.rowcount = rowcount
        self.executed: list[tuple[str, object]] = []
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, conn: FakeConnection):
        self.conn = conn

    def connect(self):
        return self.conn


def duplicate_error():
    return mysql.connector.IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY)


def test_duplicate_user_insert_maps_to_duplicate_identifier():
    conn = FakeConnection(error=duplicate_error())

    with pytest.raises(DuplicateIdentifier):
        MySQLUserRepository(FakeFactory(conn)).create_user(identifier="0000AB12", name="Asha")

    assert conn.rolled_back
    assert conn.closed


def test_user_insert_returns_user_with_store_id():
    conn = FakeConnection()

    user = MySQLUserRepository(FakeFactory(conn)).create_user(identifier="0000AB12", name="Asha")

    assert user.user_id == 7
    assert conn.committed


def test_duplicate_checkin_insert_returns_none():
    conn = FakeConnection(error=duplicate_error())

    created = MySQLAttendanceRepository(FakeFactory(conn)).create_checkin(
        user_identifier="0000AB12", calendar_date="2024-03-01", check_in_time="09:00:00", name="Asha"
    )

    assert created is None


def test_close_if_open_is_conditional_on_missing_checkout():
    conn = FakeConnection(rowcount=0)

    closed = MySQLAttendanceRepository(FakeFactory(conn)).close_if_open(
        user_identifier="0000AB12", calendar_date="2024-03-01", check_out_time="18:00:00"
    )

    sql, params = conn.executed[0]
    assert closed is False
    assert "check_out_time IS NULL" in sql
    assert "GREATEST(check_in_time, %s)" in sql
    assert params == ("18:00:00", "0000AB12", "2024-03-01")


def test_sweep_update_reports_rowcount():
    conn = FakeConnection(rowcount=3)

    modified = MySQLAttendanceRepository(FakeFactory(conn)).close_open_for_date(
        calendar_date="2024-03-01", check_out_time="23:59:59"
    )

    assert modified == 3
    assert "check_out_time IS NULL" in conn.executed[0][0]


def test_driver_errors_surface_as_store_unavailable():
    conn = FakeConnection(error=mysql.connector.OperationalError(msg="Lost connection", errno=2013))

    with pytest.raises(StoreUnavailable):
        MySQLAttendanceRepository(FakeFactory(conn)).list_for_date("2024-03-01")

    assert conn.rolled_back


def test_rows_map_to_day_records():
    conn = FakeConnection(
        rows=[
            {
                "record_id": 1,
                "user_identifier": "0000AB12",
                "name": "Asha",
                "calendar_date": "2024-03-01",
                "check_in_time": "09:00:00",
                "check_out_time": None,
            }
        ]
    )

    records = MySQLAttendanceRepository(FakeFactory(conn)).list_for_date("2024-03-01")

    assert records[0].user_identifier == "0000AB12"
    assert records[0].check_out_time is None


class LostConnection(FakeConnection):
    """Connection dropped mid-statement: rollback fails too."""

    def rollback(self):
        self.rolled_back = True
        raise mysql.connector.OperationalError(msg="Lost connection to MySQL server", errno=2013)


def test_failed_rollback_still_surfaces_as_store_unavailable():
    conn = LostConnection(error=mysql.connector.OperationalError(msg="Lost connection", errno=2013))

    with pytest.raises(StoreUnavailable):
        MySQLAttendanceRepository(FakeFactory(conn)).list_for_date("2024-03-01")

    assert conn.rolled_back
    assert conn.closed


def test_failed_rollback_keeps_duplicate_mapping():
    conn = LostConnection(error=duplicate_error())

    with pytest.raises(DuplicateIdentifier):
        MySQLUserRepository(FakeFactory(conn)).create_user(identifier="0000AB12", name="Asha")


def test_user_insert_returns_stored_created_at():
    stored = datetime(2024, 3, 1, 9, 0, 0)
    conn = FakeConnection(
        rows=[{"user_id": 7, "identifier": "0000AB12", "name": "Asha", "created_at": stored}]
    )

    user = MySQLUserRepository(FakeFactory(conn)).create_user(identifier="0000AB12", name="Asha")

    assert user.created_at == stored
    assert user.to_dict()["created_at"] == "2024-03-01T09:00:00"
    assert conn.executed[0][0].startswith("INSERT INTO users")
    assert conn.executed[1][0].startswith("SELECT user_id, identifier, name, created_at")


def _db_config(database):
    return {"host": "localhost", "port": 3306, "user": "app", "password": "secret", "database": database}


def test_each_container_connects_to_its_own_database():
    first = build_container(db_config=_db_config("attendance_a"))
    second = build_container(db_config=_db_config("attendance_b"))

    assert first.users_repo._conn_factory._config.database == "attendance_a"
    assert second.users_repo._conn_factory._config.database == "attendance_b"
    assert second.attendance_repo._conn_factory._config.database == "attendance_b"

from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import DayRecord
from .repository import AttendanceRepository

_COLUMNS = "record_id, user_identifier, name, calendar_date, check_in_time, check_out_time"


def _to_record(r: dict) -> DayRecord:
    return DayRecord(
        record_id=int(r["record_id"]),
        user_identifier=r["user_identifier"],
        name=r.get("name"),
        calendar_date=r["calendar_date"],
        check_in_time=r["check_in_time"],
        check_out_time=r.get("check_out_time"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_identifier: str, calendar_date: str) -> Optional[DayRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM day_records
                WHERE user_identifier=%s AND calendar_date=%s
                """,
                (user_identifier, calendar_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create_checkin(
        self,
        *,
        user_identifier: str,
        calendar_date: str,
        check_in_time: str,
        name: Optional[str] = None,
    ) -> Optional[DayRecord]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO day_records(user_identifier, name, calendar_date, check_in_time)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (user_identifier, name, calendar_date, check_in_time),
                )
                record_id = int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            # uq_day_records_user_date: someone else opened the day first.
            if is_duplicate_key(e):
                return None
            raise
        return DayRecord(
            record_id=record_id,
            user_identifier=user_identifier,
            name=name,
            calendar_date=calendar_date,
            check_in_time=check_in_time,
        )

    def close_if_open(self, *, user_identifier: str, calendar_date: str, check_out_time: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE day_records
                SET check_out_time=GREATEST(check_in_time, %s)
                WHERE user_identifier=%s AND calendar_date=%s AND check_out_time IS NULL
                """,
                (check_out_time, user_identifier, calendar_date),
            )
            return cur.rowcount > 0

    def close_open_for_date(self, *, calendar_date: str, check_out_time: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE day_records
                SET check_out_time=GREATEST(check_in_time, %s)
                WHERE calendar_date=%s AND check_out_time IS NULL
                """,
                (check_out_time, calendar_date),
            )
            return int(cur.rowcount)

    def list_for_date(self, calendar_date: str) -> Sequence[DayRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM day_records
                WHERE calendar_date=%s
                ORDER BY check_in_time ASC, user_identifier ASC
                """,
                (calendar_date,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_between(self, *, start_date: str, end_date: str) -> Sequence[DayRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM day_records
                WHERE calendar_date BETWEEN %s AND %s
                ORDER BY calendar_date ASC, check_in_time ASC, user_identifier ASC
                """,
                (start_date, end_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def count_days_by_user(self, *, start_date: str, end_date: str) -> dict[str, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_identifier, COUNT(DISTINCT calendar_date) AS days_present
                FROM day_records
                WHERE calendar_date BETWEEN %s AND %s
                GROUP BY user_identifier
                """,
                (start_date, end_date),
            )
            return {r["user_identifier"]: int(r["days_present"]) for r in fetchall(cur)}

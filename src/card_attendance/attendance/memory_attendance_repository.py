from __future__ import annotations

import threading
from dataclasses import replace
from typing import Optional, Sequence

from .model import DayRecord
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    """Process-local ledger keyed by (user identifier, calendar date)."""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_user_date: dict[tuple[str, str], DayRecord] = {}
        self._next_id = 1

    def get_for_user_and_date(self, user_identifier: str, calendar_date: str) -> Optional[DayRecord]:
        with self._lock:
            return self._by_user_date.get((user_identifier, calendar_date))

    def create_checkin(
        self,
        *,
        user_identifier: str,
        calendar_date: str,
        check_in_time: str,
        name: Optional[str] = None,
    ) -> Optional[DayRecord]:
        key = (user_identifier, calendar_date)
        with self._lock:
            if key in self._by_user_date:
                return None
            rec = DayRecord(
                record_id=self._next_id,
                user_identifier=user_identifier,
                name=name,
                calendar_date=calendar_date,
                check_in_time=check_in_time,
            )
            self._next_id += 1
            self._by_user_date[key] = rec
            return rec

    def close_if_open(self, *, user_identifier: str, calendar_date: str, check_out_time: str) -> bool:
        key = (user_identifier, calendar_date)
        with self._lock:
            rec = self._by_user_date.get(key)
            if rec is None or rec.check_out_time is not None:
                return False
            self._by_user_date[key] = replace(rec, check_out_time=max(rec.check_in_time, check_out_time))
            return True

    def close_open_for_date(self, *, calendar_date: str, check_out_time: str) -> int:
        modified = 0
        with self._lock:
            for key, rec in list(self._by_user_date.items()):
                if rec.calendar_date == calendar_date and rec.check_out_time is None:
                    self._by_user_date[key] = replace(rec, check_out_time=max(rec.check_in_time, check_out_time))
                    modified += 1
        return modified

    def list_for_date(self, calendar_date: str) -> Sequence[DayRecord]:
        with self._lock:
            items = [r for r in self._by_user_date.values() if r.calendar_date == calendar_date]
        items.sort(key=lambda r: (r.check_in_time, r.user_identifier))
        return items

    def list_between(self, *, start_date: str, end_date: str) -> Sequence[DayRecord]:
        with self._lock:
            items = [r for r in self._by_user_date.values() if start_date <= r.calendar_date <= end_date]
        items.sort(key=lambda r: (r.calendar_date, r.check_in_time, r.user_identifier))
        return items

    def count_days_by_user(self, *, start_date: str, end_date: str) -> dict[str, int]:
        days: dict[str, set[str]] = {}
        for r in self.list_between(start_date=start_date, end_date=end_date):
            days.setdefault(r.user_identifier, set()).add(r.calendar_date)
        return {identifier: len(dates) for identifier, dates in days.items()}

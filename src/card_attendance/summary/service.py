from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.clock import CalendarClock
from ..core.constants import DEFAULT_SUMMARY_DAYS
from ..core.exceptions import ValidationError
from ..users.repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PresenceSummaryRow:
    identifier: str
    name: str
    days_present: int
    window_days: int

    def to_dict(self) -> dict:
        return {
            "cardUID": self.identifier,
            "name": self.name,
            "daysPresent": self.days_present,
            "windowDays": self.window_days,
        }


@dataclass(frozen=True)
class HomeView:
    date: str
    records: list[dict]
    summary: list[dict]

    def to_dict(self) -> dict:
        return {"date": self.date, "records": self.records, "summary": self.summary}


class PresenceSummaryService:
    """Rolling presence counts, recomputed from the ledger on every call.

    Nothing here is stored; a day counts as present when any record exists for
    it, open or closed.
    """

    def __init__(self, attendance: AttendanceRepository, users: UserRepository, clock: CalendarClock):
        self._attendance = attendance
        self._users = users
        self._clock = clock

    def build(
        self,
        days: int = DEFAULT_SUMMARY_DAYS,
        *,
        include_today: bool = True,
        today: Optional[date] = None,
    ) -> list[PresenceSummaryRow]:
        if int(days) < 1:
            raise ValidationError("Summary window must be at least 1 day")

        start, end = self._clock.trailing_window(int(days), include_today=include_today, today=today)
        counts = self._attendance.count_days_by_user(start_date=start, end_date=end)

        rows = [
            PresenceSummaryRow(
                identifier=u.identifier,
                name=u.name,
                days_present=int(counts.get(u.identifier, 0)),
                window_days=int(days),
            )
            for u in self._users.list_all()
        ]
        rows.sort(key=lambda r: (-r.days_present, r.name))
        return rows

    def home(self, days: int = DEFAULT_SUMMARY_DAYS) -> HomeView:
        """Today's records plus the rolling summary; empty on any failure."""
        today = self._clock.date_key()
        try:
            records = [r.to_dict() for r in self._attendance.list_for_date(today)]
            summary = [r.to_dict() for r in self.build(days)]
        except Exception:
            logger.exception("Home summary failed, returning empty view")
            return HomeView(date=today, records=[], summary=[])
        return HomeView(date=today, records=records, summary=summary)

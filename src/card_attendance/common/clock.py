"""Clock/calendar provider.

Every "calendar day" in the system is a ``YYYY-MM-DD`` key computed in one
fixed timezone, and every time of day is an ``HH:MM:SS`` string in that same
zone. The zone is passed in at construction; nothing reads a process-wide
default.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from ..core.constants import DATE_FORMAT, DEFAULT_TIMEZONE, TIME_FORMAT


class CalendarClock:
    def __init__(self, timezone: str = DEFAULT_TIMEZONE, *, now_fn: Optional[Callable[[], datetime]] = None):
        self._tz = ZoneInfo(timezone)
        self._now_fn = now_fn

    def now(self) -> datetime:
        """Current instant as an aware datetime in the configured zone."""
        if self._now_fn is not None:
            return self.localize(self._now_fn())
        return datetime.now(self._tz)

    def localize(self, instant: datetime) -> datetime:
        # Naive instants are taken to be wall-clock time in the configured zone.
        if instant.tzinfo is None:
            return instant.replace(tzinfo=self._tz)
        return instant.astimezone(self._tz)

    def date_key(self, instant: Optional[datetime] = None) -> str:
        instant = self.now() if instant is None else self.localize(instant)
        return instant.strftime(DATE_FORMAT)

    def time_of_day(self, instant: Optional[datetime] = None) -> str:
        instant = self.now() if instant is None else self.localize(instant)
        return instant.strftime(TIME_FORMAT)

    def today(self) -> date:
        return self.now().date()

    def trailing_date_keys(self, days: int, *, include_today: bool = True, today: Optional[date] = None) -> list[str]:
        """Date keys of the trailing window, newest first."""
        end = today or self.today()
        if not include_today:
            end = end - timedelta(days=1)
        return [(end - timedelta(days=i)).strftime(DATE_FORMAT) for i in range(max(int(days), 0))]

    def trailing_window(self, days: int, *, include_today: bool = True, today: Optional[date] = None) -> tuple[str, str]:
        """Inclusive ``(start, end)`` date keys of a trailing window of ``days`` days."""
        if int(days) < 1:
            raise ValueError("days must be at least 1")
        end = today or self.today()
        if not include_today:
            end = end - timedelta(days=1)
        start = end - timedelta(days=int(days) - 1)
        return start.strftime(DATE_FORMAT), end.strftime(DATE_FORMAT)

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.clock import CalendarClock
from ..common.datetime_utils import require_date_key, require_month_key
from ..common.locks import KeyedLock
from ..core.constants import DEFAULT_CALENDAR_DAYS
from ..core.enums import ScanStatus
from ..core.exceptions import UnknownCard
from ..users.identity import normalize_identifier
from ..users.repository import UserRepository
from .model import CalendarView, DayRecord, ScanResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: toggle a card holder's day record between IN and OUT.

    A day record is OPEN after the first scan of the day and CLOSED after the
    second. Further scans that day are rejected with ``ALREADY_OUT`` and leave
    the record untouched. Both transitions go through the repository's atomic
    primitives, so a double tap never creates two records or writes two
    checkout times; the keyed lock only serializes scans within this process.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        clock: CalendarClock,
        *,
        key_lock: KeyedLock | None = None,
    ):
        self._attendance = attendance
        self._users = users
        self._clock = clock
        self._key_lock = key_lock or KeyedLock()

    def record_scan(self, raw_identifier: str, *, now: datetime | None = None) -> ScanResult:
        identifier = normalize_identifier(raw_identifier)
        user = self._users.get_by_identifier(identifier)
        if not user:
            logger.info("Scan from unregistered card %s", identifier)
            raise UnknownCard(f"Card {identifier} is not registered")

        now = self._clock.now() if now is None else now
        calendar_date = self._clock.date_key(now)
        time_of_day = self._clock.time_of_day(now)

        with self._key_lock.hold((identifier, calendar_date)):
            created = self._attendance.create_checkin(
                user_identifier=identifier,
                calendar_date=calendar_date,
                check_in_time=time_of_day,
                name=user.name,
            )
            if created is not None:
                logger.info("%s (%s) IN at %s %s", user.name, identifier, calendar_date, time_of_day)
                return ScanResult(ScanStatus.IN, created)

            closed = self._attendance.close_if_open(
                user_identifier=identifier,
                calendar_date=calendar_date,
                check_out_time=time_of_day,
            )
            record = self._attendance.get_for_user_and_date(identifier, calendar_date)

        if closed:
            logger.info("%s (%s) OUT at %s %s", user.name, identifier, calendar_date, time_of_day)
            return ScanResult(ScanStatus.OUT, record)

        logger.info("%s (%s) already OUT on %s", user.name, identifier, calendar_date)
        return ScanResult(ScanStatus.ALREADY_OUT, record)

    def resolve_date_key(self, date_key: Optional[str]) -> str:
        if date_key is None or (isinstance(date_key, str) and date_key.strip().lower() in {"", "today"}):
            return self._clock.date_key()
        return require_date_key(date_key)

    def records_for_date(self, date_key: Optional[str] = "today") -> list[DayRecord]:
        return list(self._attendance.list_for_date(self.resolve_date_key(date_key)))

    def records_for_month(self, month_key: str) -> list[DayRecord]:
        month_key = require_month_key(month_key)
        return list(self._attendance.list_between(start_date=f"{month_key}-01", end_date=f"{month_key}-31"))

    def calendar_view(self, date_key: Optional[str] = None, *, days: int = DEFAULT_CALENDAR_DAYS) -> CalendarView:
        selected = self.resolve_date_key(date_key)
        return CalendarView(
            selected_date=selected,
            dates=self._clock.trailing_date_keys(days),
            records=list(self._attendance.list_for_date(selected)),
        )

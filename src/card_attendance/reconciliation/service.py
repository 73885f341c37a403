from __future__ import annotations

import logging
from datetime import timedelta
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.clock import CalendarClock
from ..common.datetime_utils import require_date_key
from ..core.constants import DATE_FORMAT, SWEEP_CLOSE_TIME, SWEEP_HOUR, SWEEP_MINUTE

logger = logging.getLogger(__name__)


class ReconciliationService:
    """End-of-day sweep: close every record of the day still missing a checkout.

    The update is conditional on the checkout being unset, so running it again
    only touches records opened since the last run.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        clock: CalendarClock,
        *,
        close_time: str = SWEEP_CLOSE_TIME,
        sweep_hour: int = SWEEP_HOUR,
        sweep_minute: int = SWEEP_MINUTE,
    ):
        self._attendance = attendance
        self._clock = clock
        self._close_time = close_time
        self._sweep_hour = int(sweep_hour)
        self._sweep_minute = int(sweep_minute)

    def sweep(self, date_key: Optional[str] = None) -> int:
        calendar_date = self._clock.date_key() if date_key is None else require_date_key(date_key)
        modified = self._attendance.close_open_for_date(calendar_date=calendar_date, check_out_time=self._close_time)
        logger.info("Auto OUT set to %s for %d record(s) on %s", self._close_time, modified, calendar_date)
        return modified

    def scheduled_date_key(self) -> str:
        """Day the latest firing belongs to.

        A late run that lands before the sweep time (after midnight) still
        belongs to the previous day.
        """
        now = self._clock.now()
        day = now.date()
        if (now.hour, now.minute) < (self._sweep_hour, self._sweep_minute):
            day = day - timedelta(days=1)
        return day.strftime(DATE_FORMAT)

    def run_scheduled(self) -> Optional[int]:
        """Entry point for the timer; failures are logged and never raised.

        A failed run is not retried until the next firing.
        """
        try:
            return self.sweep(self.scheduled_date_key())
        except Exception:
            logger.exception("Auto OUT sweep failed")
            return None

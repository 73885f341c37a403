from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import DayRecord


class AttendanceRepository(Protocol):
    """Repository interface for day records.

    The two write primitives are atomic at the store:
    ``create_checkin`` inserts only when no record exists for the
    (user, date) pair, and ``close_if_open`` writes a checkout time only when
    none is set yet.
    """

    def get_for_user_and_date(self, user_identifier: str, calendar_date: str) -> Optional[DayRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        user_identifier: str,
        calendar_date: str,
        check_in_time: str,
        name: Optional[str] = None,
    ) -> Optional[DayRecord]:
        """Insert an open record; ``None`` when one already exists."""

        raise NotImplementedError

    def close_if_open(self, *, user_identifier: str, calendar_date: str, check_out_time: str) -> bool:
        """Set the checkout time unless already set; True when a row changed.

        The stored value is never earlier than the check-in time.
        """

        raise NotImplementedError

    def close_open_for_date(self, *, calendar_date: str, check_out_time: str) -> int:
        raise NotImplementedError

    def list_for_date(self, calendar_date: str) -> Sequence[DayRecord]:
        raise NotImplementedError

    def list_between(self, *, start_date: str, end_date: str) -> Sequence[DayRecord]:
        """Records with ``start_date <= calendar_date <= end_date`` (inclusive)."""

        raise NotImplementedError

    def count_days_by_user(self, *, start_date: str, end_date: str) -> dict[str, int]:
        """Distinct calendar dates with a record, per user identifier."""

        raise NotImplementedError

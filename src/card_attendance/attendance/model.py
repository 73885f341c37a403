from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import RecordState, ScanStatus


@dataclass(frozen=True)
class DayRecord:
    """Domain entity: one user's attendance for one calendar day.

    ``calendar_date`` is ``YYYY-MM-DD`` and both times are ``HH:MM:SS``, all in
    the configured timezone.
    """

    user_identifier: str
    calendar_date: str
    check_in_time: str
    check_out_time: Optional[str] = None
    name: Optional[str] = None
    record_id: Optional[int] = None

    @property
    def state(self) -> RecordState:
        return RecordState.OPEN if self.check_out_time is None else RecordState.CLOSED

    def to_dict(self) -> dict:
        return {
            "cardUID": self.user_identifier,
            "name": self.name,
            "date": self.calendar_date,
            "inTime": self.check_in_time,
            "outTime": self.check_out_time,
            "state": self.state.value,
        }


@dataclass(frozen=True)
class ScanResult:
    status: ScanStatus
    record: DayRecord

    @property
    def message(self) -> str:
        return {
            ScanStatus.IN: "Marked IN",
            ScanStatus.OUT: "Marked OUT",
            ScanStatus.ALREADY_OUT: "Already marked OUT today",
        }[self.status]

    def to_dict(self) -> dict:
        return {"status": self.status.value, "message": self.message, "record": self.record.to_dict()}


@dataclass(frozen=True)
class CalendarView:
    """Read-model for the date picker: the selected day plus recent date keys."""

    selected_date: str
    dates: list[str]
    records: list[DayRecord]

    def to_dict(self) -> dict:
        return {
            "selectedDate": self.selected_date,
            "dates": list(self.dates),
            "records": [r.to_dict() for r in self.records],
        }

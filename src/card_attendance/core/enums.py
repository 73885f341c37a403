from __future__ import annotations

from enum import Enum


class ScanStatus(str, Enum):
    """Outcome of a card scan against the day's record."""

    IN = "IN"
    OUT = "OUT"
    ALREADY_OUT = "ALREADY_OUT"


class RecordState(str, Enum):
    """State of a day record: open until a checkout time is written."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"

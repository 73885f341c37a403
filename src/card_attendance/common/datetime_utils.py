from __future__ import annotations

from datetime import date, datetime

from ..core.constants import DATE_FORMAT, MONTH_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def require_date_key(value: str) -> str:
    """Validate a YYYY-MM-DD key and return it unchanged.

    Stored keys are compared as strings, so the canonical zero-padded form is
    required (``2024-3-1`` parses but is rejected).
    """
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")
    value = (value or "").strip()
    try:
        parsed = parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")
    if parsed.strftime(DATE_FORMAT) != value:
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")
    return value


def require_month_key(value: str) -> str:
    """Validate a YYYY-MM key and return it unchanged."""
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"Invalid month {value!r}, expected YYYY-MM")
    value = (value or "").strip()
    try:
        parsed = datetime.strptime(value, MONTH_FORMAT)
    except ValueError:
        raise ValidationError(f"Invalid month {value!r}, expected YYYY-MM")
    if parsed.strftime(MONTH_FORMAT) != value:
        raise ValidationError(f"Invalid month {value!r}, expected YYYY-MM")
    return value

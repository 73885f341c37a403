from __future__ import annotations

from ..core.constants import IDENTIFIER_FILL_CHAR, IDENTIFIER_MIN_LENGTH
from ..core.exceptions import InvalidIdentifier


def normalize_identifier(raw: str) -> str:
    """Canonical lookup key for a raw card identifier.

    Trimmed, upper-cased and left-padded with ``"0"`` to 8 characters, so
    ``"ab12"`` and ``" AB12 "`` both become ``"0000AB12"``. Longer keys are
    kept as they are.
    """
    if raw is None or not str(raw).strip():
        raise InvalidIdentifier("Card identifier is required")
    return str(raw).strip().upper().rjust(IDENTIFIER_MIN_LENGTH, IDENTIFIER_FILL_CHAR)

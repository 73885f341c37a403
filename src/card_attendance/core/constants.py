"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"
TIME_FORMAT = "%H:%M:%S"

DEFAULT_TIMEZONE = "Asia/Kolkata"

IDENTIFIER_MIN_LENGTH = 8
IDENTIFIER_FILL_CHAR = "0"
RAW_IDENTIFIER_MIN_LENGTH = 4
RAW_IDENTIFIER_MAX_LENGTH = 16
NAME_MIN_LENGTH = 3

SWEEP_HOUR = 23
SWEEP_MINUTE = 59
SWEEP_CLOSE_TIME = "23:59:59"
DEFAULT_MISFIRE_GRACE_SECONDS = 3600

DEFAULT_SUMMARY_DAYS = 30
MAX_SUMMARY_DAYS = 366
DEFAULT_CALENDAR_DAYS = 30

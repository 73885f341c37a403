import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "card_attendance_test"),
}

STORE_BACKEND = "memory"
TIMEZONE = "Asia/Kolkata"

SCHEDULER_ENABLED = False
SWEEP_HOUR = 23
SWEEP_MINUTE = 59
SWEEP_MISFIRE_GRACE_SECONDS = 3600

SUMMARY_DAYS = 30

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True

AUTO_INIT_DB = False

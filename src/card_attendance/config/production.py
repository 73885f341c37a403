import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "card_attendance"),
}

STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")
TIMEZONE = os.getenv("TIMEZONE", "Asia/Kolkata")

SCHEDULER_ENABLED = bool(int(os.getenv("SCHEDULER_ENABLED", "1")))
SWEEP_HOUR = int(os.getenv("SWEEP_HOUR", "23"))
SWEEP_MINUTE = int(os.getenv("SWEEP_MINUTE", "59"))
SWEEP_MISFIRE_GRACE_SECONDS = int(os.getenv("SWEEP_MISFIRE_GRACE_SECONDS", "3600"))

SUMMARY_DAYS = int(os.getenv("SUMMARY_DAYS", "30"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

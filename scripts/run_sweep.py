"""Run the end-of-day auto OUT once.

Usage: python scripts/run_sweep.py [YYYY-MM-DD]

For deployments that trigger the sweep from system cron instead of the
in-process scheduler (SCHEDULER_ENABLED=0).
"""

from __future__ import annotations

import importlib
import logging
import sys

from dotenv import load_dotenv

from card_attendance.config import get_settings_module
from card_attendance.container import build_container


def main(argv: list[str]) -> int:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(
        db_config=settings.DB_CONFIG,
        backend=getattr(settings, "STORE_BACKEND", "mysql"),
        timezone=getattr(settings, "TIMEZONE", "Asia/Kolkata"),
    )
    date_key = argv[1] if len(argv) > 1 else None
    modified = container.reconciliation_service.sweep(date_key)
    print(f"OK: auto OUT applied to {modified} record(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))

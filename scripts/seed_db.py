"""Register demo cards.

Note: goes through UserService, so the same normalization and validation apply
as for /register. Cards that already exist are skipped.
"""

from __future__ import annotations

import importlib

from dotenv import load_dotenv

from card_attendance.config import get_settings_module
from card_attendance.container import build_container
from card_attendance.core.exceptions import DuplicateIdentifier

DEMO_USERS = [
    ("Asha Verma", "ab12c"),
    ("Ravi Kumar", "7f3e9a"),
    ("Meera Iyer", "c0ffee01"),
]


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        backend=getattr(settings, "STORE_BACKEND", "mysql"),
        timezone=getattr(settings, "TIMEZONE", "Asia/Kolkata"),
    )

    for name, card in DEMO_USERS:
        try:
            user = container.user_service.register(name, card)
            print(f"registered {user.identifier} -> {user.name}")
        except DuplicateIdentifier:
            print(f"skip {card}: already registered")


if __name__ == "__main__":
    main()

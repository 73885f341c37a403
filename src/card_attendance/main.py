from __future__ import annotations

import atexit
import importlib
import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .config import get_settings_module
from .container import Container, build_container
from .core.exceptions import StoreUnavailable
from .database.bootstrap import apply_schema, list_tables
from .reconciliation.scheduler import build_scheduler
from .attendance.controller import register as register_attendance
from .reconciliation.controller import register as register_reconciliation
from .summary.controller import register as register_summary
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "database" / "schema.sql"

_SETTING_NAMES = (
    "SECRET_KEY",
    "DB_CONFIG",
    "STORE_BACKEND",
    "TIMEZONE",
    "SCHEDULER_ENABLED",
    "SWEEP_HOUR",
    "SWEEP_MINUTE",
    "SWEEP_MISFIRE_GRACE_SECONDS",
    "SUMMARY_DAYS",
    "LOG_LEVEL",
    "DEBUG",
    "TESTING",
    "AUTO_INIT_DB",
)


def _load_settings(settings_module: Optional[str], overrides: Optional[dict]) -> dict:
    settings = importlib.import_module(settings_module or get_settings_module())
    values = {name: getattr(settings, name) for name in _SETTING_NAMES if hasattr(settings, name)}
    values.update(overrides or {})
    return values


def create_app(
    settings_module: Optional[str] = None,
    *,
    overrides: Optional[dict] = None,
    now_fn: Optional[Callable[[], datetime]] = None,
) -> Flask:
    load_dotenv(override=False)
    settings = _load_settings(settings_module, overrides)

    logging.basicConfig(
        level=str(settings.get("LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = settings.get("SECRET_KEY")
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))
    app.config["TESTING"] = bool(settings.get("TESTING", False))
    app.config["SUMMARY_DAYS"] = int(settings.get("SUMMARY_DAYS", 30))

    backend = str(settings.get("STORE_BACKEND", "mysql"))
    db_config = settings.get("DB_CONFIG")
    timezone = str(settings.get("TIMEZONE", "Asia/Kolkata"))

    logger.info("settings backend=%s timezone=%s", backend, timezone)

    if backend == "mysql" and settings.get("AUTO_INIT_DB"):
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(
        db_config=db_config,
        backend=backend,
        timezone=timezone,
        now_fn=now_fn,
        sweep_hour=int(settings.get("SWEEP_HOUR", 23)),
        sweep_minute=int(settings.get("SWEEP_MINUTE", 59)),
    )
    app.extensions["card_attendance"] = container

    register_users(app, container)
    register_attendance(app, container)
    register_reconciliation(app, container)
    register_summary(app, container)
    _register_error_handlers(app)

    if settings.get("SCHEDULER_ENABLED"):
        _start_scheduler(app, container, settings, timezone)

    return app


def _start_scheduler(app: Flask, container: Container, settings: dict, timezone: str) -> None:
    scheduler = build_scheduler(
        container.reconciliation_service,
        timezone=timezone,
        hour=int(settings.get("SWEEP_HOUR", 23)),
        minute=int(settings.get("SWEEP_MINUTE", 59)),
        misfire_grace_time=int(settings.get("SWEEP_MISFIRE_GRACE_SECONDS", 3600)),
    )
    try:
        scheduler.start()
    except Exception:
        # The API stays up without the sweep; open days then wait for a manual /admin/sweep.
        logger.exception("Scheduler start failed, continuing without auto OUT")
        return
    app.extensions["sweep_scheduler"] = scheduler
    atexit.register(lambda: scheduler.shutdown(wait=False))


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(StoreUnavailable)
    def store_unavailable(e: StoreUnavailable):
        logger.exception("Store unavailable")
        return jsonify({"error": "Store unavailable"}), 500

    @app.errorhandler(Exception)
    def unhandled(e: Exception):
        # 404/405 and other HTTP errors keep Flask's own response.
        if isinstance(e, HTTPException):
            return e
        logger.exception("Unhandled error")
        return jsonify({"error": "Internal server error"}), 500

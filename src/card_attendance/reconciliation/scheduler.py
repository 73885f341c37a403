from __future__ import annotations

import logging

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from ..core.constants import DEFAULT_MISFIRE_GRACE_SECONDS, SWEEP_HOUR, SWEEP_MINUTE
from .service import ReconciliationService

logger = logging.getLogger(__name__)

SWEEP_JOB_ID = "auto-out-sweep"


def build_scheduler(
    service: ReconciliationService,
    *,
    timezone: str,
    hour: int = SWEEP_HOUR,
    minute: int = SWEEP_MINUTE,
    misfire_grace_time: int = DEFAULT_MISFIRE_GRACE_SECONDS,
) -> BackgroundScheduler:
    """Background scheduler with the daily sweep registered but not started."""
    scheduler = BackgroundScheduler(
        timezone=timezone,
        job_defaults={
            "coalesce": True,
            "max_instances": 1,
            "misfire_grace_time": int(misfire_grace_time),
        },
    )
    scheduler.add_job(
        service.run_scheduled,
        CronTrigger(hour=int(hour), minute=int(minute), timezone=timezone),
        id=SWEEP_JOB_ID,
        replace_existing=True,
    )
    logger.info("Auto OUT sweep scheduled daily at %02d:%02d (%s)", int(hour), int(minute), timezone)
    return scheduler

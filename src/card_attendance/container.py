from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.clock import CalendarClock
from .core.constants import DEFAULT_TIMEZONE, SWEEP_CLOSE_TIME, SWEEP_HOUR, SWEEP_MINUTE
from .database.connection import DBConfig, DatabaseConnection
from .reconciliation.service import ReconciliationService
from .summary.service import PresenceSummaryService
from .users.memory_user_repository import InMemoryUserRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    clock: CalendarClock

    users_repo: UserRepository
    attendance_repo: AttendanceRepository

    user_service: UserService
    attendance_service: AttendanceService
    reconciliation_service: ReconciliationService
    summary_service: PresenceSummaryService


def build_container(
    *,
    db_config: Optional[dict] = None,
    backend: str = "mysql",
    timezone: str = DEFAULT_TIMEZONE,
    now_fn: Optional[Callable[[], datetime]] = None,
    sweep_hour: int = SWEEP_HOUR,
    sweep_minute: int = SWEEP_MINUTE,
) -> Container:
    clock = CalendarClock(timezone, now_fn=now_fn)

    if backend == "memory":
        users_repo: UserRepository = InMemoryUserRepository()
        attendance_repo: AttendanceRepository = InMemoryAttendanceRepository()
    elif backend == "mysql":
        if not db_config:
            raise ValueError("db_config is required for the mysql backend")
        conn = DatabaseConnection(DBConfig.from_dict(db_config))
        users_repo = MySQLUserRepository(conn)
        attendance_repo = MySQLAttendanceRepository(conn)
    else:
        raise ValueError(f"Unknown store backend: {backend!r}")

    return Container(
        clock=clock,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        user_service=UserService(users_repo),
        attendance_service=AttendanceService(attendance_repo, users_repo, clock),
        reconciliation_service=ReconciliationService(
            attendance_repo,
            clock,
            close_time=SWEEP_CLOSE_TIME,
            sweep_hour=sweep_hour,
            sweep_minute=sweep_minute,
        ),
        summary_service=PresenceSummaryService(attendance_repo, users_repo, clock),
    )

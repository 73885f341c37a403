from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from card_attendance.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from card_attendance.attendance.service import AttendanceService
from card_attendance.common.clock import CalendarClock
from card_attendance.main import create_app
from card_attendance.reconciliation.service import ReconciliationService
from card_attendance.summary.service import PresenceSummaryService
from card_attendance.users.memory_user_repository import InMemoryUserRepository
from card_attendance.users.service import UserService

IST = ZoneInfo("Asia/Kolkata")


class SettableNow:
    """Callable clock source that tests move forward by hand."""

    def __init__(self, value: datetime):
        self.value = value

    def __call__(self) -> datetime:
        return self.value

    def set(self, *args) -> None:
        self.value = datetime(*args, tzinfo=IST)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 1, 9, 0, 0, tzinfo=IST)


@pytest.fixture
def now_source(fixed_now) -> SettableNow:
    return SettableNow(fixed_now)


@pytest.fixture
def clock(now_source) -> CalendarClock:
    return CalendarClock("Asia/Kolkata", now_fn=now_source)


@pytest.fixture
def users_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def attendance_repo() -> InMemoryAttendanceRepository:
    return InMemoryAttendanceRepository()


@pytest.fixture
def user_service(users_repo) -> UserService:
    return UserService(users_repo)


@pytest.fixture
def attendance_service(attendance_repo, users_repo, clock) -> AttendanceService:
    return AttendanceService(attendance_repo, users_repo, clock)


@pytest.fixture
def reconciliation_service(attendance_repo, clock) -> ReconciliationService:
    return ReconciliationService(attendance_repo, clock)


@pytest.fixture
def summary_service(attendance_repo, users_repo, clock) -> PresenceSummaryService:
    return PresenceSummaryService(attendance_repo, users_repo, clock)


@pytest.fixture
def app(now_source):
    return create_app("card_attendance.config.testing", now_fn=now_source)


@pytest.fixture
def client(app):
    return app.test_client()

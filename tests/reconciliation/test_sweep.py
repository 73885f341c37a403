from __future__ import annotations

import logging
from datetime import datetime

from card_attendance.core.enums import ScanStatus
from card_attendance.reconciliation.scheduler import SWEEP_JOB_ID, build_scheduler
from card_attendance.reconciliation.service import ReconciliationService

from ..conftest import IST


def test_sweep_closes_open_records_for_today(user_service, attendance_service, reconciliation_service, attendance_repo):
    user_service.register("Asha", "ab12")
    user_service.register("Ravi", "7f3e9a")
    attendance_service.record_scan("ab12", now=datetime(2024, 3, 1, 9, tzinfo=IST))
    attendance_service.record_scan("7f3e9a", now=datetime(2024, 3, 1, 9, 30, tzinfo=IST))
    attendance_service.record_scan("7f3e9a", now=datetime(2024, 3, 1, 17, tzinfo=IST))

    assert reconciliation_service.sweep() == 1

    records = {r.user_identifier: r for r in attendance_repo.list_for_date("2024-03-01")}
    assert records["0000AB12"].check_out_time == "23:59:59"
    assert records["007F3E9A"].check_out_time == "17:00:00"


def test_second_sweep_modifies_nothing(user_service, attendance_service, reconciliation_service, attendance_repo):
    user_service.register("Asha", "ab12")
    attendance_service.record_scan("ab12", now=datetime(2024, 3, 1, 9, tzinfo=IST))

    assert reconciliation_service.sweep() == 1
    before = attendance_repo.list_for_date("2024-03-01")
    assert reconciliation_service.sweep() == 0
    assert attendance_repo.list_for_date("2024-03-01") == before


def test_sweep_only_touches_the_given_day(user_service, attendance_service, reconciliation_service, attendance_repo):
    user_service.register("Asha", "ab12")
    attendance_service.record_scan("ab12", now=datetime(2024, 2, 29, 9, tzinfo=IST))
    attendance_service.record_scan("ab12", now=datetime(2024, 3, 1, 9, tzinfo=IST))

    assert reconciliation_service.sweep("2024-03-01") == 1
    assert attendance_repo.get_for_user_and_date("0000AB12", "2024-02-29").check_out_time is None


def test_scan_after_sweep_reports_already_out(user_service, attendance_service, reconciliation_service):
    user_service.register("Asha", "ab12")
    attendance_service.record_scan("ab12", now=datetime(2024, 3, 1, 9, tzinfo=IST))
    reconciliation_service.sweep()

    result = attendance_service.record_scan("ab12", now=datetime(2024, 3, 1, 23, 59, 59, tzinfo=IST))

    assert result.status == ScanStatus.ALREADY_OUT
    assert result.record.check_out_time == "23:59:59"


class _BrokenRepo:
    def close_open_for_date(self, *, calendar_date, check_out_time):
        raise RuntimeError("database went away")


def test_scheduled_run_logs_and_swallows_failures(clock, caplog):
    service = ReconciliationService(_BrokenRepo(), clock)

    with caplog.at_level(logging.ERROR):
        assert service.run_scheduled() is None

    assert "Auto OUT sweep failed" in caplog.text


def test_scheduled_run_returns_count(user_service, attendance_service, reconciliation_service, now_source):
    user_service.register("Asha", "ab12")
    attendance_service.record_scan("ab12", now=datetime(2024, 3, 1, 9, tzinfo=IST))
    now_source.set(2024, 3, 1, 23, 59, 0)

    assert reconciliation_service.run_scheduled() == 1


def test_late_run_after_midnight_closes_the_previous_day(
    user_service, attendance_service, reconciliation_service, attendance_repo, now_source
):
    user_service.register("Asha", "ab12")
    attendance_service.record_scan("ab12", now=datetime(2024, 3, 1, 9, tzinfo=IST))
    attendance_service.record_scan("ab12", now=datetime(2024, 3, 2, 0, 5, tzinfo=IST))

    # The 23:59 firing was missed and ran inside the misfire grace period.
    now_source.set(2024, 3, 2, 0, 20, 0)
    assert reconciliation_service.run_scheduled() == 1

    assert attendance_repo.get_for_user_and_date("0000AB12", "2024-03-01").check_out_time == "23:59:59"
    assert attendance_repo.get_for_user_and_date("0000AB12", "2024-03-02").check_out_time is None

    result = attendance_service.record_scan("ab12", now=datetime(2024, 3, 2, 18, tzinfo=IST))
    assert result.status == ScanStatus.OUT
    assert result.record.check_out_time == "18:00:00"


def test_scheduled_date_follows_configured_sweep_time(attendance_repo, clock, now_source):
    service = ReconciliationService(attendance_repo, clock, sweep_hour=6, sweep_minute=30)

    now_source.set(2024, 3, 2, 6, 29, 0)
    assert service.scheduled_date_key() == "2024-03-01"

    now_source.set(2024, 3, 2, 6, 30, 0)
    assert service.scheduled_date_key() == "2024-03-02"


def test_scheduler_registers_daily_job_without_starting(reconciliation_service):
    scheduler = build_scheduler(reconciliation_service, timezone="Asia/Kolkata", hour=23, minute=59)

    job = scheduler.get_job(SWEEP_JOB_ID)

    assert not scheduler.running
    assert job is not None
    assert job.func == reconciliation_service.run_scheduled
    fields = {f.name: str(f) for f in job.trigger.fields}
    assert fields["hour"] == "23"
    assert fields["minute"] == "59"

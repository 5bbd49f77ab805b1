from __future__ import annotations

import threading
from datetime import date, time
from decimal import Decimal

import pytest

from hr_portal.attendance.model import ScanOutcome
from hr_portal.core.enums import AttendanceRemarks, AttendanceStatus, ScanSource
from hr_portal.core.exceptions import (
    AlreadyCompleteError,
    MissingConfigurationError,
    OutOfWindowError,
    ValidationError,
)

DAY = date(2025, 3, 3)


@pytest.mark.parametrize("scan_time", [time(6, 0), time(20, 0)])
def test_window_boundaries_are_accepted(container, office_hours, scan_time):
    result = container.attendance_resolver.record_scan(work_date=DAY, scan_time=scan_time, employee_code="EMP-0002")

    assert result.outcome == ScanOutcome.CHECKED_IN


@pytest.mark.parametrize("scan_time", [time(5, 59), time(20, 1)])
def test_scans_outside_window_are_rejected_without_side_effects(
    container, office_hours, logs_repo, attendance_repo, scan_time
):
    with pytest.raises(OutOfWindowError):
        container.attendance_resolver.record_scan(work_date=DAY, scan_time=scan_time, employee_code="EMP-0002")

    assert logs_repo.rows == {}
    assert attendance_repo.rows == {}


def test_unmatched_code_keeps_raw_log_only(container, office_hours, logs_repo, attendance_repo):
    result = container.attendance_resolver.record_scan(work_date=DAY, scan_time=time(8, 0), employee_code="NOPE-1")

    assert result.outcome == ScanOutcome.LOGGED_UNMATCHED
    assert result.attendance is None
    assert len(logs_repo.rows) == 1
    assert attendance_repo.rows == {}


def test_late_checkin_then_checkout_completes_the_day(container, office_hours, attendance_repo):
    resolver = container.attendance_resolver

    first = resolver.record_scan(work_date=DAY, scan_time=time(8, 5), employee_code="EMP-0002")
    assert first.outcome == ScanOutcome.CHECKED_IN
    assert first.attendance.status == AttendanceStatus.LATE
    assert first.attendance.remarks == AttendanceRemarks.INCOMPLETE
    assert first.attendance.total_hours == Decimal("0.00")

    second = resolver.record_scan(work_date=DAY, scan_time=time(18, 30), employee_code="EMP-0002")
    row = attendance_repo.get_for_employee_and_date(2, DAY)

    assert second.outcome == ScanOutcome.CHECKED_OUT
    assert row.time_in == time(8, 5)
    assert row.time_out == time(18, 30)
    assert row.status == AttendanceStatus.LATE
    assert row.remarks == AttendanceRemarks.COMPLETE
    assert row.total_hours == Decimal("9.42")


def test_on_time_checkin_is_present(container, office_hours):
    result = container.attendance_resolver.record_scan(work_date=DAY, scan_time=time(7, 55), employee_code="EMP-0002")

    assert result.attendance.status == AttendanceStatus.PRESENT


def test_third_scan_is_rejected_and_row_is_unchanged(container, office_hours, attendance_repo, logs_repo):
    resolver = container.attendance_resolver
    resolver.record_scan(work_date=DAY, scan_time=time(8, 0), employee_code="EMP-0002")
    resolver.record_scan(work_date=DAY, scan_time=time(17, 0), employee_code="EMP-0002")
    before = attendance_repo.get_for_employee_and_date(2, DAY)

    with pytest.raises(AlreadyCompleteError):
        resolver.record_scan(work_date=DAY, scan_time=time(19, 0), employee_code="EMP-0002")

    assert attendance_repo.get_for_employee_and_date(2, DAY) == before
    # The raw scan is still kept for audit.
    assert len(logs_repo.rows) == 3


def test_checkout_not_after_time_in_is_rejected(container, office_hours):
    resolver = container.attendance_resolver
    resolver.record_scan(work_date=DAY, scan_time=time(9, 0), employee_code="EMP-0002")

    with pytest.raises(ValidationError):
        resolver.record_scan(work_date=DAY, scan_time=time(9, 0), employee_code="EMP-0002")


def test_missing_settings_without_fallback_fails_loudly(container, attendance_repo):
    with pytest.raises(MissingConfigurationError):
        container.attendance_resolver.record_scan(work_date=DAY, scan_time=time(8, 0), employee_code="EMP-0002")

    assert attendance_repo.rows == {}


def test_manual_entry_by_employee_id(container, office_hours, logs_repo):
    result = container.attendance_resolver.record_scan(
        work_date=DAY,
        scan_time=time(8, 0),
        employee_id=2,
        source=ScanSource.MANUAL,
    )

    assert result.employee.employee_code == "EMP-0002"
    assert logs_repo.rows[result.log.log_id].source == ScanSource.MANUAL


def test_manual_entry_with_unknown_employee_id_is_invalid(container, office_hours):
    with pytest.raises(ValidationError) as exc:
        container.attendance_resolver.record_scan(work_date=DAY, scan_time=time(8, 0), employee_id=99)

    assert exc.value.field == "employee_id"


def test_finalize_day_marks_absent_and_missing_time_out_once(container, office_hours, attendance_repo):
    resolver = container.attendance_resolver
    resolver.record_scan(work_date=DAY, scan_time=time(8, 0), employee_code="EMP-0002")

    summary = resolver.finalize_day(work_date=DAY)

    assert summary.absent == 1
    assert summary.missing_time_out == 1
    assert attendance_repo.get_for_employee_and_date(1, DAY).status == AttendanceStatus.ABSENT
    assert attendance_repo.get_for_employee_and_date(2, DAY).remarks == AttendanceRemarks.MISSING_TIME_OUT

    again = resolver.finalize_day(work_date=DAY)

    assert again.absent == 0
    assert again.missing_time_out == 0
    assert len(attendance_repo.list_for_date(DAY)) == 2


def test_scan_after_absent_placeholder_checks_in(container, office_hours, attendance_repo):
    resolver = container.attendance_resolver
    resolver.finalize_day(work_date=DAY)

    result = resolver.record_scan(work_date=DAY, scan_time=time(9, 0), employee_code="EMP-0001")

    assert result.outcome == ScanOutcome.CHECKED_IN
    assert attendance_repo.get_for_employee_and_date(1, DAY).status == AttendanceStatus.LATE


def test_simultaneous_first_scans_create_one_checked_in_row(container, office_hours, attendance_repo, logs_repo):
    resolver = container.attendance_resolver
    start = threading.Barrier(2)
    outcomes, errors = [], []

    def scan():
        start.wait()
        try:
            result = resolver.record_scan(work_date=DAY, scan_time=time(8, 0), employee_code="EMP-0002")
            outcomes.append(result.outcome)
        except ValidationError as e:
            errors.append(e)

    threads = [threading.Thread(target=scan) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)

    # The loser is serialized behind the winner and reads as a too-early checkout.
    assert outcomes == [ScanOutcome.CHECKED_IN]
    assert [e.field for e in errors] == ["scan_time"]
    assert len(attendance_repo.list_for_date(DAY)) == 1
    assert len(logs_repo.rows) == 2

    checkout = resolver.record_scan(work_date=DAY, scan_time=time(17, 0), employee_code="EMP-0002")

    assert checkout.outcome == ScanOutcome.CHECKED_OUT
    assert checkout.attendance.attendance_id == attendance_repo.get_for_employee_and_date(2, DAY).attendance_id
    assert checkout.attendance.total_hours == Decimal("8.00")

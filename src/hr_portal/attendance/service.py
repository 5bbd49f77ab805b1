from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ..attendance_settings.model import AttendanceSetting
from ..attendance_settings.service import AttendanceSettingsService
from ..biometrics.repository import BiometricLogRepository
from ..common.datetime_utils import parse_hhmm
from ..common.validators import require_max_length, require_non_empty
from ..core.constants import OUT_OF_WINDOW_MESSAGE, SCAN_WINDOW_END, SCAN_WINDOW_START
from ..core.enums import AttendanceRemarks, AttendanceStatus, ScanSource
from ..core.exceptions import AlreadyCompleteError, NotFoundError, OutOfWindowError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .calculator.base import WorkedHoursCalculator
from .calculator.standard_calculator import StandardHoursCalculator
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, DaySummary, ScanOutcome, ScanResult, SyncSummary
from .repository import AttendanceRepository
from .state import AttendanceState, next_state, state_of

logger = logging.getLogger(__name__)


def in_scan_window(scan_time: time) -> bool:
    return SCAN_WINDOW_START <= scan_time <= SCAN_WINDOW_END


def _optional_hhmm(payload: Mapping[str, Any], name: str, default: Optional[time]) -> Optional[time]:
    if name not in payload:
        return default
    value = payload[name]
    if value is None or value == "":
        return None
    return parse_hhmm(str(value), name)


def ensure_in_scan_window(scan_time: time) -> None:
    if not in_scan_window(scan_time):
        raise OutOfWindowError(OUT_OF_WINDOW_MESSAGE)


class AttendanceResolver:
    """Turns one scan (biometric or manual) into an updated attendance row.

    The first scan of the day checks the employee in, the second checks them
    out; anything after that is rejected. The raw scan is always kept in the
    biometric log, even when the employee code matches nobody.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        logs: BiometricLogRepository,
        settings: AttendanceSettingsService,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        calculator: WorkedHoursCalculator | None = None,
        grace_minutes: int = 0,
    ):
        self._attendance = attendance
        self._employees = employees
        self._logs = logs
        self._settings = settings
        self._factory = strategy_factory or AttendanceStrategyFactory(grace_minutes=int(grace_minutes))
        self._calculator = calculator or StandardHoursCalculator()

    def record_scan(
        self,
        *,
        work_date: date,
        scan_time: time,
        employee_code: Optional[str] = None,
        employee_id: Optional[int] = None,
        source: ScanSource = ScanSource.BIOMETRIC,
    ) -> ScanResult:
        ensure_in_scan_window(scan_time)

        employee = self._resolve_employee(employee_code=employee_code, employee_id=employee_id)
        code = employee.employee_code if employee else require_non_empty(employee_code, "employee_code")

        log = self._logs.create(
            employee_code=code,
            scan_time=datetime.combine(work_date, scan_time),
            source=source,
        )

        if not employee:
            logger.info("Scan %s for unknown employee code %r logged without attendance update", log.log_id, code)
            return ScanResult(outcome=ScanOutcome.LOGGED_UNMATCHED, log=log)

        settings = self._settings.resolve_for_scan()
        record = self._attendance.apply_scan(
            employee_id=employee.employee_id,
            work_date=work_date,
            decide=lambda current: self._next_record(
                current,
                employee_id=employee.employee_id,
                work_date=work_date,
                scan_time=scan_time,
                settings=settings,
            ),
        )

        outcome = ScanOutcome.CHECKED_OUT if record.time_out is not None else ScanOutcome.CHECKED_IN
        logger.info(
            "Scan %s: employee %s %s on %s at %s (status=%s)",
            log.log_id,
            employee.employee_code,
            outcome.value,
            work_date,
            scan_time,
            record.status.value,
        )
        return ScanResult(outcome=outcome, log=log, attendance=record, employee=employee)

    def _resolve_employee(self, *, employee_code: Optional[str], employee_id: Optional[int]) -> Optional[Employee]:
        if employee_id is not None:
            employee = self._employees.get_by_id(int(employee_id))
            if not employee:
                raise ValidationError("The selected employee id is invalid.", field="employee_id")
            return employee

        code = require_max_length(require_non_empty(employee_code, "employee_code"), "employee_code", 255)
        return self._employees.get_by_code(code)

    def _next_record(
        self,
        current: Optional[AttendanceRecord],
        *,
        employee_id: int,
        work_date: date,
        scan_time: time,
        settings: AttendanceSetting,
    ) -> AttendanceRecord:
        if next_state(current) is None:
            # TODO: product owners to decide whether a third scan should overwrite the checkout instead.
            raise AlreadyCompleteError(
                f"Attendance for {work_date.strftime('%Y-%m-%d')} already has both time in and time out."
            )

        if state_of(current) == AttendanceState.EMPTY:
            return self._check_in(
                attendance_id=current.attendance_id if current else None,
                employee_id=employee_id,
                work_date=work_date,
                scan_time=scan_time,
                settings=settings,
            )
        return self._check_out(current, scan_time=scan_time, settings=settings)

    def _check_in(
        self,
        *,
        attendance_id: Optional[int],
        employee_id: int,
        work_date: date,
        scan_time: time,
        settings: AttendanceSetting,
    ) -> AttendanceRecord:
        strategy = self._factory.for_checkin(scan_time=scan_time, settings=settings)
        decision = strategy.decide_checkin(scan_time=scan_time, settings=settings)
        return AttendanceRecord(
            attendance_id=attendance_id,
            employee_id=employee_id,
            work_date=work_date,
            time_in=scan_time,
            time_out=None,
            status=decision.status,
            remarks=AttendanceRemarks.INCOMPLETE,
            total_hours=Decimal("0.00"),
        )

    def _check_out(
        self,
        record: AttendanceRecord,
        *,
        scan_time: time,
        settings: AttendanceSetting,
        field: str = "scan_time",
    ) -> AttendanceRecord:
        if scan_time <= record.time_in:
            raise ValidationError("The time out must be later than the recorded time in.", field=field)

        strategy = self._factory.for_checkout(record=record, settings=settings)
        decision = strategy.decide_checkout(record=record, settings=settings)
        return replace(
            record,
            time_out=scan_time,
            status=decision.status,
            remarks=AttendanceRemarks.COMPLETE,
            total_hours=self._calculator.worked_hours(
                time_in=record.time_in,
                time_out=scan_time,
                settings=settings,
            ),
        )

    def _rebuild(
        self,
        current: Optional[AttendanceRecord],
        *,
        employee_id: int,
        work_date: date,
        time_in: time,
        time_out: Optional[time],
        settings: AttendanceSetting,
    ) -> AttendanceRecord:
        """Replay a whole day as a check-in plus an optional check-out."""

        record = self._check_in(
            attendance_id=current.attendance_id if current else None,
            employee_id=employee_id,
            work_date=work_date,
            scan_time=time_in,
            settings=settings,
        )
        if time_out is None:
            return record
        return self._check_out(record, scan_time=time_out, settings=settings, field="time_out")

    def correct(self, *, attendance_id: int, payload: Mapping[str, Any]) -> AttendanceRecord:
        """Manual time in / time out correction; status, remarks and hours are recomputed.

        Omitted fields keep their stored value, an explicit null clears it.
        """

        existing = self._attendance.get_by_id(int(attendance_id))
        if not existing:
            raise NotFoundError("Attendance record not found.")

        time_in = _optional_hhmm(payload, "time_in", existing.time_in)
        time_out = _optional_hhmm(payload, "time_out", existing.time_out)
        if time_in is None:
            raise ValidationError("The time in field is required.", field="time_in")

        settings = self._settings.resolve_for_scan()

        def rebuild(current: Optional[AttendanceRecord]) -> AttendanceRecord:
            if current is None or current.attendance_id != existing.attendance_id:
                raise NotFoundError("Attendance record not found.")
            return self._rebuild(
                current,
                employee_id=current.employee_id,
                work_date=current.work_date,
                time_in=time_in,
                time_out=time_out,
                settings=settings,
            )

        record = self._attendance.apply_scan(
            employee_id=existing.employee_id,
            work_date=existing.work_date,
            decide=rebuild,
        )
        logger.info(
            "Attendance %s corrected: %s-%s (status=%s)",
            record.attendance_id,
            time_in,
            time_out,
            record.status.value,
        )
        return record

    def sync_from_logs(self, *, start: Optional[date] = None, end: Optional[date] = None) -> SyncSummary:
        """Rebuild attendance rows from the stored biometric logs.

        Each (employee code, day) becomes earliest in-window scan as time in and
        the latest as time out. Codes still matching no employee are counted and
        left alone, so scans logged before an employee existed are picked up here.
        """

        if start and end and end < start:
            raise ValidationError("The end date must be a date after or equal to start date.", field="end_date")

        groups: Dict[Tuple[str, date], List[time]] = {}
        for log in self._logs.list_between(start=start, end=end):
            key = (log.employee_code, log.scan_time.date())
            groups.setdefault(key, []).append(log.scan_time.time().replace(microsecond=0))
        if not groups:
            return SyncSummary()

        settings = self._settings.resolve_for_scan()
        created = updated = unmatched = skipped = 0
        for (code, work_date), scans in sorted(groups.items()):
            employee = self._employees.get_by_code(code)
            if not employee:
                unmatched += 1
                continue

            in_window = sorted(t for t in scans if in_scan_window(t))
            if not in_window:
                logger.warning("Sync: no in-window scans for %s on %s, left untouched", code, work_date)
                skipped += 1
                continue

            time_in, last = in_window[0], in_window[-1]
            time_out = last if last > time_in else None
            seen: List[Optional[AttendanceRecord]] = []

            def rebuild(current: Optional[AttendanceRecord]) -> AttendanceRecord:
                seen.append(current)
                return self._rebuild(
                    current,
                    employee_id=employee.employee_id,
                    work_date=work_date,
                    time_in=time_in,
                    time_out=time_out,
                    settings=settings,
                )

            self._attendance.apply_scan(employee_id=employee.employee_id, work_date=work_date, decide=rebuild)
            if seen[-1] is None:
                created += 1
            else:
                updated += 1

        summary = SyncSummary(created=created, updated=updated, unmatched=unmatched, skipped=skipped)
        logger.info("Attendance sync from biometric logs: %s", summary)
        return summary

    def finalize_day(self, *, work_date: date) -> DaySummary:
        """Close a work day: absentees get an Absent row, open rows are flagged.

        Safe to run more than once for the same date.
        """

        present_ids = {r.employee_id for r in self._attendance.list_for_date(work_date)}
        absent = 0
        for employee in self._employees.list_active():
            if employee.employee_id in present_ids:
                continue
            created = self._attendance.create_if_absent(
                AttendanceRecord(
                    attendance_id=None,
                    employee_id=employee.employee_id,
                    work_date=work_date,
                    time_in=None,
                    time_out=None,
                    status=AttendanceStatus.ABSENT,
                    remarks=AttendanceRemarks.MISSING_TIME_IN_AND_OUT,
                )
            )
            absent += int(created)

        missing_time_out = self._attendance.mark_missing_time_out(work_date)
        logger.info("Finalized %s: %s absent, %s missing time out", work_date, absent, missing_time_out)
        return DaySummary(work_date=work_date, absent=absent, missing_time_out=missing_time_out)

    def list_for_date(self, *, work_date: date) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_date(work_date)

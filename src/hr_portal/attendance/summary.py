from __future__ import annotations

from datetime import date
from typing import Optional

from ..attendance_settings.service import AttendanceSettingsService
from ..common.datetime_utils import now_local
from ..core.enums import AttendanceStatus, ThresholdLevel
from ..core.exceptions import NotFoundError
from ..employees.repository import EmployeeRepository
from .model import EmployeeSummary
from .repository import AttendanceRepository


def threshold_level(count: int, *, warning: int, memo: int) -> Optional[ThresholdLevel]:
    """Highest level reached by ``count``; a threshold of 0 is switched off."""

    if memo and count >= memo:
        return ThresholdLevel.MEMO
    if warning and count >= warning:
        return ThresholdLevel.WARNING
    return None


class AttendanceSummaryService:
    """Lates are counted per calendar month, absences per calendar year."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        settings: AttendanceSettingsService,
    ):
        self._attendance = attendance
        self._employees = employees
        self._settings = settings

    def for_employee(self, employee_id: int, *, today: Optional[date] = None) -> EmployeeSummary:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found.")

        today = today or now_local().date()
        late_count = self._attendance.count_by_status(
            employee.employee_id,
            status=AttendanceStatus.LATE,
            start=today.replace(day=1),
            end=today,
        )
        absent_count = self._attendance.count_by_status(
            employee.employee_id,
            status=AttendanceStatus.ABSENT,
            start=date(today.year, 1, 1),
            end=today,
        )

        setting = self._settings.get_active()
        late_level = absent_level = None
        if setting:
            late_level = threshold_level(
                late_count,
                warning=setting.late_threshold_warning,
                memo=setting.late_threshold_memo,
            )
            absent_level = threshold_level(
                absent_count,
                warning=setting.absent_threshold_warning,
                memo=setting.absent_threshold_memo,
            )

        return EmployeeSummary(
            employee=employee,
            as_of=today,
            late_count=late_count,
            absent_count=absent_count,
            late_level=late_level,
            absent_level=absent_level,
        )

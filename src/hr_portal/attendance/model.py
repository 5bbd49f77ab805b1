from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal
from enum import Enum
from typing import Optional

from ..biometrics.model import BiometricLog
from ..common.datetime_utils import format_time
from ..core.enums import AttendanceRemarks, AttendanceStatus, ThresholdLevel
from ..employees.model import Employee


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance row per (employee, date)."""

    attendance_id: Optional[int]
    employee_id: int
    work_date: date
    time_in: Optional[time]
    time_out: Optional[time]
    status: AttendanceStatus
    remarks: AttendanceRemarks
    total_hours: Decimal = Decimal("0.00")

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "employee_id": self.employee_id,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "time_in": format_time(self.time_in),
            "time_out": format_time(self.time_out),
            "total_hours": float(self.total_hours),
            "status": self.status.value,
            "remarks": self.remarks.value,
        }


class ScanOutcome(str, Enum):
    LOGGED_UNMATCHED = "logged_unmatched"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"


@dataclass(frozen=True)
class ScanResult:
    outcome: ScanOutcome
    log: BiometricLog
    attendance: Optional[AttendanceRecord] = None
    employee: Optional[Employee] = None

    @property
    def matched(self) -> bool:
        return self.outcome != ScanOutcome.LOGGED_UNMATCHED


@dataclass(frozen=True)
class DaySummary:
    work_date: date
    absent: int
    missing_time_out: int


@dataclass(frozen=True)
class SyncSummary:
    created: int = 0
    updated: int = 0
    unmatched: int = 0
    skipped: int = 0


@dataclass(frozen=True)
class EmployeeSummary:
    """Late count for the month and absent count for the year, graded against the thresholds."""

    employee: Employee
    as_of: date
    late_count: int
    absent_count: int
    late_level: Optional[ThresholdLevel] = None
    absent_level: Optional[ThresholdLevel] = None

    def to_dict(self) -> dict:
        return {
            "employee": {
                "id": self.employee.employee_id,
                "employee_code": self.employee.employee_code,
                "name": self.employee.full_name,
                "email": self.employee.email,
            },
            "month": self.as_of.strftime("%Y-%m"),
            "year": self.as_of.year,
            "late_count": self.late_count,
            "absent_count": self.absent_count,
            "late_level": self.late_level.value if self.late_level else None,
            "absent_level": self.absent_level.value if self.absent_level else None,
        }

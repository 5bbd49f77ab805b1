from __future__ import annotations

from datetime import date
from typing import Callable, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord

ScanDecision = Callable[[Optional[AttendanceRecord]], AttendanceRecord]


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def apply_scan(self, *, employee_id: int, work_date: date, decide: ScanDecision) -> AttendanceRecord:
        """Locked read-modify-write of the (employee, date) row.

        ``decide`` receives the current row (None when absent) and returns the
        state to persist; it runs while the row is locked, so concurrent scans
        for the same employee and day are serialized. Exceptions raised by
        ``decide`` abort the write.
        """

        raise NotImplementedError

    def create_if_absent(self, record: AttendanceRecord) -> bool:
        raise NotImplementedError

    def mark_missing_time_out(self, work_date: date) -> int:
        """Flag rows still waiting for a checkout; returns the number of rows changed."""

        raise NotImplementedError

    def count_by_status(self, employee_id: int, *, status: AttendanceStatus, start: date, end: date) -> int:
        """Rows of one employee with ``status`` between ``start`` and ``end`` inclusive."""

        raise NotImplementedError

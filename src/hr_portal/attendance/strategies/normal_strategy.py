from __future__ import annotations

from datetime import time

from ...attendance_settings.model import AttendanceSetting
from ...core.enums import AttendanceStatus
from ..model import AttendanceRecord
from .base import AttendanceStrategy, StatusDecision


class NormalStrategy(AttendanceStrategy):
    """On-time check-in; checkout keeps the check-in status."""

    def decide_checkin(self, *, scan_time: time, settings: AttendanceSetting) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)

    def decide_checkout(self, *, record: AttendanceRecord, settings: AttendanceSetting) -> StatusDecision:
        return StatusDecision(status=record.status)

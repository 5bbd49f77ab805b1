from __future__ import annotations

from datetime import time

from ...attendance_settings.model import AttendanceSetting
from ...core.enums import AttendanceStatus
from ..model import AttendanceRecord
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late check-in. Late is never downgraded on checkout."""

    def decide_checkin(self, *, scan_time: time, settings: AttendanceSetting) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE)

    def decide_checkout(self, *, record: AttendanceRecord, settings: AttendanceSetting) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE)

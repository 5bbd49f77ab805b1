from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from ..attendance_settings.model import AttendanceSetting
from ..common.datetime_utils import add_minutes
from ..core.constants import DEFAULT_LATE_GRACE_MINUTES
from ..core.enums import AttendanceStatus
from .model import AttendanceRecord
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES

    def is_late(self, check_in: time, settings: AttendanceSetting) -> bool:
        threshold = add_minutes(settings.required_time_in, self.grace_minutes)
        return check_in > threshold

    def for_checkin(self, *, scan_time: time, settings: AttendanceSetting) -> AttendanceStrategy:
        if self.is_late(scan_time, settings):
            return LateStrategy()
        return NormalStrategy()

    def for_checkout(self, *, record: AttendanceRecord, settings: AttendanceSetting) -> AttendanceStrategy:
        if record.status == AttendanceStatus.LATE:
            return LateStrategy()
        # Re-decided from the recorded time in, never from the checkout time.
        if record.time_in is not None and self.is_late(record.time_in, settings):
            return LateStrategy()
        return NormalStrategy()

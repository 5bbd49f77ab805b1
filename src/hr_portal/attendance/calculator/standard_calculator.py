from __future__ import annotations

from datetime import time
from decimal import Decimal

from ...attendance_settings.model import AttendanceSetting
from ...common.datetime_utils import round_hours, seconds_between
from .base import WorkedHoursCalculator


class StandardHoursCalculator(WorkedHoursCalculator):
    """Standard rule: (out - in) - break (unless the break is counted), not below 0."""

    def worked_hours(self, *, time_in: time, time_out: time, settings: AttendanceSetting) -> Decimal:
        seconds = seconds_between(time_in, time_out)
        if not settings.break_is_counted:
            seconds -= int(settings.break_duration_minutes or 0) * 60
        return round_hours(max(seconds, 0))

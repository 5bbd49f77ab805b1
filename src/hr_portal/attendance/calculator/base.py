from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import time
from decimal import Decimal

from ...attendance_settings.model import AttendanceSetting


class WorkedHoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked hours)."""

    @abstractmethod
    def worked_hours(self, *, time_in: time, time_out: time, settings: AttendanceSetting) -> Decimal:
        raise NotImplementedError

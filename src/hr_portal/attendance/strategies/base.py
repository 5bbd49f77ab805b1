from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import time

from ...attendance_settings.model import AttendanceSetting
from ...core.enums import AttendanceStatus
from ..model import AttendanceRecord


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status."""

    @abstractmethod
    def decide_checkin(self, *, scan_time: time, settings: AttendanceSetting) -> StatusDecision:
        raise NotImplementedError

    @abstractmethod
    def decide_checkout(self, *, record: AttendanceRecord, settings: AttendanceSetting) -> StatusDecision:
        raise NotImplementedError

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import time
from typing import Optional


@dataclass(frozen=True)
class AttendanceSetting:
    """Active work-hour policy used by the attendance resolver.

    ``setting_id`` is None for the fallback built from app configuration.
    """

    setting_id: Optional[int]
    required_time_in: time
    required_time_out: time
    break_duration_minutes: int = 0
    break_is_counted: bool = False
    late_threshold_warning: int = 0
    late_threshold_memo: int = 0
    absent_threshold_warning: int = 0
    absent_threshold_memo: int = 0

    def to_dict(self) -> dict:
        data = asdict(self)
        data["id"] = data.pop("setting_id")
        data["required_time_in"] = self.required_time_in.strftime("%H:%M")
        data["required_time_out"] = self.required_time_out.strftime("%H:%M")
        return data

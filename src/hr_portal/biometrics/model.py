from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ScanSource


@dataclass(frozen=True)
class BiometricLog:
    """Immutable raw scan record (audit trail)."""

    log_id: int
    employee_code: str
    scan_time: datetime
    source: ScanSource = ScanSource.BIOMETRIC
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.log_id,
            "employee_code": self.employee_code,
            "date": self.scan_time.strftime("%Y-%m-%d"),
            "time": self.scan_time.strftime("%H:%M"),
            "scan_time": self.scan_time.strftime("%Y-%m-%d %H:%M:%S"),
            "source": self.source.value,
        }

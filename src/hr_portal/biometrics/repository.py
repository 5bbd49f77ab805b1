from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence, Tuple

from ..core.enums import ScanSource
from .model import BiometricLog


class BiometricLogRepository(Protocol):
    def create(self, *, employee_code: str, scan_time: datetime, source: ScanSource) -> BiometricLog:
        raise NotImplementedError

    def get_by_id(self, log_id: int) -> Optional[BiometricLog]:
        raise NotImplementedError

    def delete_by_id(self, log_id: int) -> bool:
        raise NotImplementedError

    def list_page(self, *, page: int, per_page: int) -> Tuple[Sequence[BiometricLog], int]:
        """Newest first; returns (items, total)."""

        raise NotImplementedError

    def list_between(self, *, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[BiometricLog]:
        """Oldest first; either bound may be omitted."""

        raise NotImplementedError

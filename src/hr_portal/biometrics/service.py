from __future__ import annotations

import logging
import math

from ..core.constants import BIOMETRIC_LOGS_PER_PAGE
from ..core.exceptions import NotFoundError
from .repository import BiometricLogRepository

logger = logging.getLogger(__name__)


class BiometricLogService:
    """Admin views over the raw scan audit trail."""

    def __init__(self, logs: BiometricLogRepository, *, per_page: int = BIOMETRIC_LOGS_PER_PAGE):
        self._logs = logs
        self._per_page = int(per_page)

    def list_page(self, page: int = 1) -> dict:
        page = max(int(page), 1)
        items, total = self._logs.list_page(page=page, per_page=self._per_page)
        return {
            "data": [log.to_dict() for log in items],
            "current_page": page,
            "per_page": self._per_page,
            "total": total,
            "last_page": max(math.ceil(total / self._per_page), 1),
        }

    def delete(self, log_id: int) -> None:
        """Delete a raw log. Attendance rows derived from it are left as they are."""

        log = self._logs.get_by_id(int(log_id))
        if not log:
            raise NotFoundError("Biometric log not found.")
        self._logs.delete_by_id(log.log_id)
        logger.info("Biometric log %s (%s at %s) deleted", log.log_id, log.employee_code, log.scan_time)

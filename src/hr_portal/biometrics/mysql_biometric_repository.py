from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..core.enums import ScanSource
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import BiometricLog
from .repository import BiometricLogRepository

_COLUMNS = "log_id, employee_code, scan_time, source, created_at"


def _to_log(row: Dict[str, Any]) -> BiometricLog:
    return BiometricLog(
        log_id=int(row["log_id"]),
        employee_code=row["employee_code"],
        scan_time=row["scan_time"],
        source=ScanSource(row.get("source") or ScanSource.BIOMETRIC.value),
        created_at=row.get("created_at"),
    )


class MySQLBiometricLogRepository(BiometricLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, employee_code: str, scan_time: datetime, source: ScanSource) -> BiometricLog:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO biometric_logs(employee_code, scan_time, source) VALUES(%s,%s,%s)",
                (employee_code, scan_time, source.value),
            )
            log_id = int(cur.lastrowid)
        return BiometricLog(log_id=log_id, employee_code=employee_code, scan_time=scan_time, source=source)

    def get_by_id(self, log_id: int) -> Optional[BiometricLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM biometric_logs WHERE log_id=%s", (log_id,))
            row = fetchone(cur)
            return _to_log(row) if row else None

    def delete_by_id(self, log_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM biometric_logs WHERE log_id=%s", (log_id,))
            return cur.rowcount > 0

    def list_page(self, *, page: int, per_page: int) -> Tuple[Sequence[BiometricLog], int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM biometric_logs")
            total = int((fetchone(cur) or {}).get("total") or 0)
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM biometric_logs
                ORDER BY scan_time DESC, log_id DESC
                LIMIT %s OFFSET %s
                """,
                (int(per_page), int((page - 1) * per_page)),
            )
            return [_to_log(r) for r in fetchall(cur)], total

    def list_between(self, *, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[BiometricLog]:
        clauses: List[str] = []
        params: List[Any] = []
        if start is not None:
            clauses.append("scan_time >= %s")
            params.append(datetime.combine(start, datetime.min.time()))
        if end is not None:
            clauses.append("scan_time < %s")
            params.append(datetime.combine(end + timedelta(days=1), datetime.min.time()))
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM biometric_logs {where} ORDER BY scan_time ASC, log_id ASC",
                tuple(params),
            )
            return [_to_log(r) for r in fetchall(cur)]

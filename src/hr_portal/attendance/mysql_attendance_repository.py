from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..core.constants import SCAN_TRANSACTION_ATTEMPTS
from ..core.enums import AttendanceRemarks, AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_retryable, normalize_mysql_time
from .model import AttendanceRecord
from .repository import AttendanceRepository, ScanDecision

logger = logging.getLogger(__name__)

_COLUMNS = "attendance_id, employee_id, work_date, time_in, time_out, status, remarks, total_hours"


def _to_record(row: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(row["attendance_id"]),
        employee_id=int(row["employee_id"]),
        work_date=row["work_date"],
        time_in=normalize_mysql_time(row.get("time_in")),
        time_out=normalize_mysql_time(row.get("time_out")),
        status=AttendanceStatus(row["status"]),
        remarks=AttendanceRemarks(row["remarks"]),
        total_hours=Decimal(str(row.get("total_hours") or "0")).quantize(Decimal("0.01")),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance WHERE attendance_id=%s", (attendance_id,))
            row = fetchone(cur)
            return _to_record(row) if row else None

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE employee_id=%s AND work_date=%s",
                (employee_id, work_date),
            )
            row = fetchone(cur)
            return _to_record(row) if row else None

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE work_date=%s ORDER BY employee_id",
                (work_date,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def apply_scan(self, *, employee_id: int, work_date: date, decide: ScanDecision) -> AttendanceRecord:
        # Two first scans racing on a missing row: the loser hits the unique key
        # (or a gap-lock deadlock) and retries, then sees the winner's row.
        for attempt in range(1, SCAN_TRANSACTION_ATTEMPTS + 1):
            try:
                return self._apply_scan_once(employee_id=employee_id, work_date=work_date, decide=decide)
            except mysql.connector.Error as exc:
                if not is_retryable(exc) or attempt == SCAN_TRANSACTION_ATTEMPTS:
                    raise
                logger.warning(
                    "Retrying attendance write for employee_id=%s date=%s (attempt %s): %s",
                    employee_id,
                    work_date,
                    attempt,
                    exc,
                )
        raise RuntimeError("unreachable")

    def _apply_scan_once(self, *, employee_id: int, work_date: date, decide: ScanDecision) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE employee_id=%s AND work_date=%s FOR UPDATE",
                (employee_id, work_date),
            )
            row = fetchone(cur)
            current = _to_record(row) if row else None
            new = decide(current)

            if current is None:
                cur.execute(
                    """
                    INSERT INTO attendance(employee_id, work_date, time_in, time_out, status, remarks, total_hours)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        new.employee_id,
                        new.work_date,
                        new.time_in,
                        new.time_out,
                        new.status.value,
                        new.remarks.value,
                        new.total_hours,
                    ),
                )
                return replace(new, attendance_id=int(cur.lastrowid))

            cur.execute(
                """
                UPDATE attendance
                SET time_in=%s, time_out=%s, status=%s, remarks=%s, total_hours=%s
                WHERE attendance_id=%s
                """,
                (
                    new.time_in,
                    new.time_out,
                    new.status.value,
                    new.remarks.value,
                    new.total_hours,
                    current.attendance_id,
                ),
            )
            return replace(new, attendance_id=current.attendance_id)

    def create_if_absent(self, record: AttendanceRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT IGNORE INTO attendance(employee_id, work_date, time_in, time_out, status, remarks, total_hours)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.employee_id,
                    record.work_date,
                    record.time_in,
                    record.time_out,
                    record.status.value,
                    record.remarks.value,
                    record.total_hours,
                ),
            )
            return cur.rowcount == 1

    def mark_missing_time_out(self, work_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET remarks=%s
                WHERE work_date=%s AND time_in IS NOT NULL AND time_out IS NULL AND remarks<>%s
                """,
                (AttendanceRemarks.MISSING_TIME_OUT.value, work_date, AttendanceRemarks.MISSING_TIME_OUT.value),
            )
            return int(cur.rowcount)

    def count_by_status(self, employee_id: int, *, status: AttendanceStatus, start: date, end: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS total
                FROM attendance
                WHERE employee_id=%s AND status=%s AND work_date BETWEEN %s AND %s
                """,
                (employee_id, status.value, start, end),
            )
            return int((fetchone(cur) or {}).get("total") or 0)

from __future__ import annotations

from typing import Any, Dict, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from .model import AttendanceSetting
from .repository import AttendanceSettingRepository

_COLUMNS = """
    setting_id, required_time_in, required_time_out, break_duration_minutes, break_is_counted,
    late_threshold_warning, late_threshold_memo, absent_threshold_warning, absent_threshold_memo
"""


def _to_setting(row: Dict[str, Any]) -> AttendanceSetting:
    return AttendanceSetting(
        setting_id=int(row["setting_id"]),
        required_time_in=normalize_mysql_time(row["required_time_in"]),
        required_time_out=normalize_mysql_time(row["required_time_out"]),
        break_duration_minutes=int(row["break_duration_minutes"] or 0),
        break_is_counted=bool(row["break_is_counted"]),
        late_threshold_warning=int(row.get("late_threshold_warning") or 0),
        late_threshold_memo=int(row.get("late_threshold_memo") or 0),
        absent_threshold_warning=int(row.get("absent_threshold_warning") or 0),
        absent_threshold_memo=int(row.get("absent_threshold_memo") or 0),
    )


class MySQLAttendanceSettingRepository(AttendanceSettingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_active(self) -> Optional[AttendanceSetting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_settings ORDER BY created_at DESC, setting_id DESC LIMIT 1")
            row = fetchone(cur)
            return _to_setting(row) if row else None

    def get_by_id(self, setting_id: int) -> Optional[AttendanceSetting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_settings WHERE setting_id=%s", (setting_id,))
            row = fetchone(cur)
            return _to_setting(row) if row else None

    def exists(self) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS found FROM attendance_settings LIMIT 1")
            return fetchone(cur) is not None

    def create(self, setting: AttendanceSetting) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_settings(
                    required_time_in, required_time_out, break_duration_minutes, break_is_counted,
                    late_threshold_warning, late_threshold_memo, absent_threshold_warning, absent_threshold_memo
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    setting.required_time_in,
                    setting.required_time_out,
                    setting.break_duration_minutes,
                    int(setting.break_is_counted),
                    setting.late_threshold_warning,
                    setting.late_threshold_memo,
                    setting.absent_threshold_warning,
                    setting.absent_threshold_memo,
                ),
            )
            return int(cur.lastrowid)

    def update(self, setting: AttendanceSetting) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_settings
                SET required_time_in=%s, required_time_out=%s, break_duration_minutes=%s, break_is_counted=%s,
                    late_threshold_warning=%s, late_threshold_memo=%s,
                    absent_threshold_warning=%s, absent_threshold_memo=%s
                WHERE setting_id=%s
                """,
                (
                    setting.required_time_in,
                    setting.required_time_out,
                    setting.break_duration_minutes,
                    int(setting.break_is_counted),
                    setting.late_threshold_warning,
                    setting.late_threshold_memo,
                    setting.absent_threshold_warning,
                    setting.absent_threshold_memo,
                    int(setting.setting_id),
                ),
            )

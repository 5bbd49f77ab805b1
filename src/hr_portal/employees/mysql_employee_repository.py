from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "employee_id, employee_code, full_name, email, role, department_id, position_id, is_active"


def _to_employee(row: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        employee_code=row["employee_code"],
        full_name=row["full_name"],
        email=row.get("email"),
        role=Role(row["role"]),
        department_id=row.get("department_id"),
        position_id=row.get("position_id"),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (employee_id,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_code=%s", (employee_code,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE email=%s LIMIT 1", (email,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_active(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE is_active=1 ORDER BY employee_id")
            return [_to_employee(r) for r in fetchall(cur)]

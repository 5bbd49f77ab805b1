from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: employee record referenced by attendance and scans."""

    employee_id: int
    employee_code: str
    full_name: str
    email: Optional[str]
    role: Role
    department_id: Optional[int] = None
    position_id: Optional[int] = None
    is_active: bool = True

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, InvalidCredentialError
from ..employees.repository import EmployeeRepository
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    name: str
    email: str
    role: Role
    employee_id: Optional[int]


def _password_matches(password_hash: str, password: str) -> bool:
    try:
        return check_password_hash(password_hash, password or "")
    except (TypeError, ValueError):
        # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
        return False


class AuthService:
    """Use cases: login and password re-confirmation."""

    def __init__(self, users: UserRepository, employees: EmployeeRepository):
        self._users = users
        self._employees = employees

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email((email or "").strip())
        if not user or not user.is_active or not _password_matches(user.password_hash, password):
            raise AuthenticationError("These credentials do not match our records.")

        employee = self._employees.get_by_email(user.email)
        return SessionUser(
            user_id=user.user_id,
            name=user.name,
            email=user.email,
            role=employee.role if employee else Role.EMPLOYEE,
            employee_id=employee.employee_id if employee else None,
        )

    def confirm_password(self, user_id: int, password: Optional[str]) -> None:
        """Re-check the acting user's current password before a sensitive change."""

        if password is None or password == "":
            raise InvalidCredentialError("The password field is required.")

        user = self._users.get_by_id(int(user_id))
        if not user or not _password_matches(user.password_hash, password):
            logger.warning("Password re-confirmation failed for user_id=%s", user_id)
            raise InvalidCredentialError()

    def resolve_role(self, user_id: int) -> Optional[Role]:
        """Role of the employee linked to the account (by email), if any."""

        user = self._users.get_by_id(int(user_id))
        if not user:
            return None
        employee = self._employees.get_by_email(user.email)
        return employee.role if employee else None

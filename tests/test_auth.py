from __future__ import annotations

import pytest

from hr_portal.core.enums import Role
from hr_portal.core.exceptions import AuthenticationError, InvalidCredentialError
from hr_portal.users.service import AuthService


def test_authenticate_wrong_password_raises(users, employees):
    auth = AuthService(users, employees)

    with pytest.raises(AuthenticationError):
        auth.authenticate("admin@hr.local", "wrong")


def test_authenticate_resolves_employee_role(users, employees):
    s_user = AuthService(users, employees).authenticate("admin@hr.local", "admin-secret")

    assert s_user.role == Role.ADMIN
    assert s_user.employee_id == 1


def test_confirm_password_requires_a_value(users, employees):
    with pytest.raises(InvalidCredentialError) as exc:
        AuthService(users, employees).confirm_password(1, "")

    assert str(exc.value) == "The password field is required."


def test_login_and_logout(client):
    resp = client.post("/login", json={"email": "employee@hr.local", "password": "employee-secret"})

    assert resp.status_code == 200
    assert resp.get_json()["role"] == "employee"
    assert client.post("/logout").status_code == 200
    assert client.get("/api/attendance-settings").status_code == 401


def test_login_with_bad_credentials(client):
    resp = client.post("/login", json={"email": "employee@hr.local", "password": "nope"})

    assert resp.status_code == 401

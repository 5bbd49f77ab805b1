from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..common.http import error_response, login_required, server_error
from ..core.exceptions import AuthenticationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or {}
        try:
            s_user = container.auth_service.authenticate(str(data.get("email", "")), str(data.get("password", "")))
        except AuthenticationError as e:
            return error_response(e)
        except Exception:
            return server_error("login")

        session.clear()
        session.permanent = bool(data.get("remember"))
        app.permanent_session_lifetime = timedelta(days=7)

        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value
        session["employee_id"] = s_user.employee_id

        return jsonify(
            {
                "user_id": s_user.user_id,
                "name": s_user.name,
                "email": s_user.email,
                "role": s_user.role.value,
                "employee_id": s_user.employee_id,
            }
        )

    @app.route("/logout", methods=["POST"], endpoint="logout")
    @login_required
    def logout():
        session.clear()
        return jsonify({"message": "Logged out."})

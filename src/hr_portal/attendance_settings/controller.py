from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.http import admin_required, error_response, login_required, server_error
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.settings_service

    @app.route("/api/attendance-settings", methods=["GET"], endpoint="attendance_settings_index")
    @login_required
    def attendance_settings_index():
        active = service.get_active()
        return jsonify(active.to_dict() if active else None)

    @app.route("/api/attendance-settings", methods=["POST"], endpoint="attendance_settings_store")
    @login_required
    def attendance_settings_store():
        payload = request.get_json(silent=True) or {}
        try:
            setting = service.create(user_id=int(session["user_id"]), payload=payload)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("attendance_settings_store")
        return jsonify(setting.to_dict()), 201

    @app.route("/api/attendance-settings/<int:setting_id>", methods=["GET"], endpoint="attendance_settings_show")
    @login_required
    def attendance_settings_show(setting_id: int):
        try:
            return jsonify(service.get(setting_id).to_dict())
        except DomainError as e:
            return error_response(e)

    @app.route("/api/attendance-settings/<int:setting_id>", methods=["PUT", "PATCH"], endpoint="attendance_settings_update")
    @login_required
    def attendance_settings_update(setting_id: int):
        payload = request.get_json(silent=True) or {}
        try:
            setting = service.update(user_id=int(session["user_id"]), setting_id=setting_id, payload=payload)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("attendance_settings_update")
        return jsonify(setting.to_dict())

    @app.route("/api/attendance-settings/<int:setting_id>", methods=["DELETE"], endpoint="attendance_settings_destroy")
    @admin_required
    def attendance_settings_destroy(setting_id: int):
        return jsonify({"message": "Attendance settings cannot be deleted."}), 405

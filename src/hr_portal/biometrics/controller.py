from __future__ import annotations

from flask import Flask, jsonify, request

from ..attendance.controller import parse_scan_request, serialize_scan_result
from ..common.http import admin_required, error_response, login_required, server_error
from ..core.enums import ScanSource
from ..core.exceptions import DomainError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    resolver = container.attendance_resolver
    logs = container.biometric_log_service

    @app.route("/api/biometric-logs", methods=["POST"], endpoint="biometric_logs_store")
    @login_required
    def biometric_logs_store():
        data = request.get_json(silent=True) or {}
        try:
            code = data.get("employee_code")
            if not isinstance(code, str) or not code.strip():
                raise ValidationError("The employee code field is required.", field="employee_code")
            work_date, scan_time = parse_scan_request(data)
            result = resolver.record_scan(
                work_date=work_date,
                scan_time=scan_time,
                employee_code=code,
                source=ScanSource.BIOMETRIC,
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("biometric_logs_store")
        return jsonify(serialize_scan_result(result)), 201

    @app.route("/api/biometric-logs", methods=["GET"], endpoint="biometric_logs_index")
    @admin_required
    def biometric_logs_index():
        page = request.args.get("page", "1")
        return jsonify(logs.list_page(int(page) if page.isdigit() else 1))

    @app.route("/api/biometric-logs/<int:log_id>", methods=["DELETE"], endpoint="biometric_logs_destroy")
    @admin_required
    def biometric_logs_destroy(log_id: int):
        try:
            logs.delete(log_id)
        except DomainError as e:
            return error_response(e)
        return jsonify({"message": "Biometric log deleted successfully."})

from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_hhmm, parse_iso_date
from ..common.http import admin_required, error_response, login_required, server_error
from ..core.enums import ScanSource
from ..core.exceptions import DomainError, ValidationError
from ..container import Container
from .model import ScanResult


def parse_scan_request(data: dict) -> tuple[date, object]:
    """Validate the shared {scan_date, scan_time} shape of scan requests."""

    if not data.get("scan_date"):
        raise ValidationError("The scan date field is required.", field="scan_date")
    if not data.get("scan_time"):
        raise ValidationError("The scan time field is required.", field="scan_time")
    return parse_iso_date(str(data["scan_date"]), "scan_date"), parse_hhmm(str(data["scan_time"]), "scan_time")


def serialize_scan_result(result: ScanResult) -> dict:
    if not result.matched:
        return {
            "message": "Biometric log saved but no employee matched this code.",
            "biometric_log": result.log.to_dict(),
        }

    attendance = result.attendance.to_dict()
    attendance["employee_code"] = result.employee.employee_code
    attendance["name"] = result.employee.full_name
    return {
        "message": "Biometric log saved and attendance updated.",
        "biometric_log": result.log.to_dict(),
        "attendance": attendance,
    }


def register(app: Flask, container: Container) -> None:
    resolver = container.attendance_resolver

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_index")
    @login_required
    def attendance_index():
        try:
            work_date = parse_iso_date(request.args.get("date") or now_local().strftime("%Y-%m-%d"))
        except ValidationError as e:
            return error_response(e)
        rows = resolver.list_for_date(work_date=work_date)
        return jsonify({"date": work_date.strftime("%Y-%m-%d"), "data": [r.to_dict() for r in rows]})

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_store")
    @login_required
    def attendance_store():
        data = request.get_json(silent=True) or {}
        try:
            work_date, scan_time = parse_scan_request(data)
            employee_id = data.get("employee_id")
            if employee_id is not None:
                try:
                    employee_id = int(employee_id)
                except (TypeError, ValueError):
                    raise ValidationError("The employee id field must be an integer.", field="employee_id")
            elif not data.get("employee_code"):
                raise ValidationError("The employee id field is required.", field="employee_id")

            result = resolver.record_scan(
                work_date=work_date,
                scan_time=scan_time,
                employee_id=employee_id,
                employee_code=data.get("employee_code"),
                source=ScanSource.MANUAL,
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("attendance_store")

        body = serialize_scan_result(result)
        if result.matched:
            body["message"] = "Attendance recorded successfully."
        return jsonify(body), 201

    @app.route("/api/attendance/finalize", methods=["POST"], endpoint="attendance_finalize")
    @admin_required
    def attendance_finalize():
        data = request.get_json(silent=True) or {}
        try:
            work_date = parse_iso_date(str(data.get("date") or ""))
            summary = resolver.finalize_day(work_date=work_date)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("attendance_finalize")
        return jsonify(
            {
                "date": summary.work_date.strftime("%Y-%m-%d"),
                "absent": summary.absent,
                "missing_time_out": summary.missing_time_out,
            }
        )

    @app.route("/api/attendance/<int:attendance_id>", methods=["PUT", "PATCH"], endpoint="attendance_update")
    @admin_required
    def attendance_update(attendance_id: int):
        payload = request.get_json(silent=True) or {}
        try:
            record = resolver.correct(attendance_id=attendance_id, payload=payload)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("attendance_update")
        return jsonify({"message": "Attendance record updated successfully.", "attendance": record.to_dict()})

    @app.route("/api/attendance/sync", methods=["POST"], endpoint="attendance_sync")
    @admin_required
    def attendance_sync():
        data = request.get_json(silent=True) or {}
        try:
            start = parse_iso_date(str(data["start_date"]), "start_date") if data.get("start_date") else None
            end = parse_iso_date(str(data["end_date"]), "end_date") if data.get("end_date") else None
            summary = resolver.sync_from_logs(start=start, end=end)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("attendance_sync")
        return jsonify(
            {
                "message": "Sync completed successfully.",
                "created": summary.created,
                "updated": summary.updated,
                "unmatched": summary.unmatched,
                "skipped": summary.skipped,
            }
        )

    @app.route("/api/attendance/employees/<int:employee_id>/summary", methods=["GET"], endpoint="attendance_employee_summary")
    @admin_required
    def attendance_employee_summary(employee_id: int):
        try:
            return jsonify(container.attendance_summary.for_employee(employee_id).to_dict())
        except DomainError as e:
            return error_response(e)

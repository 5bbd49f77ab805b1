from __future__ import annotations


def _scan(client, code="EMP-0002", scan_time="08:05", scan_date="2025-03-03"):
    return client.post(
        "/api/biometric-logs",
        json={"employee_code": code, "scan_date": scan_date, "scan_time": scan_time},
    )


def test_out_of_window_scan_is_rejected(employee_client, office_hours, logs_repo):
    resp = _scan(employee_client, scan_time="05:59")

    assert resp.status_code == 422
    assert resp.get_json()["message"] == "Scan falls outside the supported time window (06:00-20:00)."
    assert logs_repo.rows == {}


def test_unmatched_code_returns_log_without_attendance(employee_client, office_hours, attendance_repo):
    resp = _scan(employee_client, code="UNKNOWN-7")
    body = resp.get_json()

    assert resp.status_code == 201
    assert body["message"] == "Biometric log saved but no employee matched this code."
    assert body["biometric_log"]["employee_code"] == "UNKNOWN-7"
    assert "attendance" not in body
    assert attendance_repo.rows == {}


def test_matched_scan_updates_attendance(employee_client, office_hours):
    resp = _scan(employee_client)
    body = resp.get_json()

    assert resp.status_code == 201
    assert body["message"] == "Biometric log saved and attendance updated."
    assert body["attendance"]["employee_code"] == "EMP-0002"
    assert body["attendance"]["status"] == "Late"
    assert body["attendance"]["time_in"] == "08:05:00"


def test_third_scan_conflicts(employee_client, office_hours):
    _scan(employee_client, scan_time="08:00")
    _scan(employee_client, scan_time="17:00")

    resp = _scan(employee_client, scan_time="18:00")

    assert resp.status_code == 409


def test_scan_without_settings_is_unavailable(employee_client):
    resp = _scan(employee_client)

    assert resp.status_code == 503


def test_missing_employee_code_is_validation_error(employee_client, office_hours):
    resp = employee_client.post("/api/biometric-logs", json={"scan_date": "2025-03-03", "scan_time": "08:00"})

    assert resp.status_code == 422
    assert "employee_code" in resp.get_json()["errors"]


def test_bad_time_format_is_validation_error(employee_client, office_hours):
    resp = _scan(employee_client, scan_time="8am")

    assert resp.status_code == 422
    assert "scan_time" in resp.get_json()["errors"]


def test_listing_and_deleting_logs_requires_admin(employee_client, office_hours):
    _scan(employee_client)

    assert employee_client.get("/api/biometric-logs").status_code == 403
    assert employee_client.delete("/api/biometric-logs/1").status_code == 403


def test_admin_lists_logs_newest_first(admin_client, office_hours):
    _scan(admin_client, scan_time="08:00")
    _scan(admin_client, scan_time="17:00")

    body = admin_client.get("/api/biometric-logs?page=1").get_json()

    assert body["total"] == 2
    assert [log["time"] for log in body["data"]] == ["17:00", "08:00"]


def test_deleting_log_leaves_attendance_untouched(admin_client, office_hours, logs_repo, attendance_repo):
    created = _scan(admin_client).get_json()
    before = dict(attendance_repo.rows)

    resp = admin_client.delete(f"/api/biometric-logs/{created['biometric_log']['id']}")

    assert resp.status_code == 200
    assert resp.get_json()["message"] == "Biometric log deleted successfully."
    assert logs_repo.rows == {}
    assert attendance_repo.rows == before


def test_deleting_missing_log_is_404(admin_client):
    assert admin_client.delete("/api/biometric-logs/999").status_code == 404

from __future__ import annotations


def test_manual_entry_records_attendance(admin_client, office_hours):
    resp = admin_client.post(
        "/api/attendance",
        json={"employee_id": 2, "scan_date": "2025-03-03", "scan_time": "07:50"},
    )
    body = resp.get_json()

    assert resp.status_code == 201
    assert body["message"] == "Attendance recorded successfully."
    assert body["attendance"]["status"] == "Present"
    assert body["biometric_log"]["source"] == "manual"


def test_manual_entry_unknown_employee(admin_client, office_hours):
    resp = admin_client.post(
        "/api/attendance",
        json={"employee_id": 404, "scan_date": "2025-03-03", "scan_time": "07:50"},
    )

    assert resp.status_code == 422
    assert "employee_id" in resp.get_json()["errors"]


def test_list_for_date(admin_client, office_hours):
    admin_client.post("/api/attendance", json={"employee_id": 2, "scan_date": "2025-03-03", "scan_time": "08:00"})

    body = admin_client.get("/api/attendance?date=2025-03-03").get_json()

    assert body["date"] == "2025-03-03"
    assert [row["employee_id"] for row in body["data"]] == [2]


def test_finalize_is_admin_only(employee_client, office_hours):
    resp = employee_client.post("/api/attendance/finalize", json={"date": "2025-03-03"})

    assert resp.status_code == 403


def test_finalize_reports_counts(admin_client, office_hours):
    admin_client.post("/api/attendance", json={"employee_id": 2, "scan_date": "2025-03-03", "scan_time": "08:00"})

    body = admin_client.post("/api/attendance/finalize", json={"date": "2025-03-03"}).get_json()

    assert body == {"date": "2025-03-03", "absent": 1, "missing_time_out": 1}


def test_correction_endpoint(admin_client, office_hours):
    created = admin_client.post(
        "/api/attendance", json={"employee_id": 2, "scan_date": "2025-03-03", "scan_time": "08:05"}
    ).get_json()

    resp = admin_client.put(
        f"/api/attendance/{created['attendance']['id']}",
        json={"time_in": "07:55", "time_out": "17:00"},
    )
    body = resp.get_json()

    assert resp.status_code == 200
    assert body["message"] == "Attendance record updated successfully."
    assert body["attendance"]["status"] == "Present"
    assert body["attendance"]["time_out"] == "17:00:00"


def test_correction_endpoint_validates_times(admin_client, office_hours):
    created = admin_client.post(
        "/api/attendance", json={"employee_id": 2, "scan_date": "2025-03-03", "scan_time": "08:05"}
    ).get_json()

    resp = admin_client.put(f"/api/attendance/{created['attendance']['id']}", json={"time_out": "7pm"})

    assert resp.status_code == 422
    assert "time_out" in resp.get_json()["errors"]


def test_correction_of_missing_record(admin_client, office_hours):
    assert admin_client.put("/api/attendance/999", json={"time_in": "08:00"}).status_code == 404


def test_correction_is_admin_only(employee_client, office_hours):
    assert employee_client.put("/api/attendance/1", json={"time_in": "08:00"}).status_code == 403


def test_sync_endpoint_reports_counts(admin_client, office_hours):
    admin_client.post("/api/biometric-logs", json={"employee_code": "EMP-0002", "scan_date": "2025-03-03", "scan_time": "08:00"})
    admin_client.post("/api/biometric-logs", json={"employee_code": "GHOST", "scan_date": "2025-03-03", "scan_time": "08:00"})

    resp = admin_client.post("/api/attendance/sync", json={"start_date": "2025-03-01", "end_date": "2025-03-31"})

    assert resp.status_code == 200
    assert resp.get_json() == {
        "message": "Sync completed successfully.",
        "created": 0,
        "updated": 1,
        "unmatched": 1,
        "skipped": 0,
    }


def test_sync_endpoint_rejects_bad_dates(admin_client, office_hours):
    resp = admin_client.post("/api/attendance/sync", json={"start_date": "03/01/2025"})

    assert resp.status_code == 422
    assert "start_date" in resp.get_json()["errors"]


def test_employee_summary_endpoint(admin_client, employee_client, office_hours):
    body = admin_client.get("/api/attendance/employees/2/summary").get_json()

    assert body["employee"]["employee_code"] == "EMP-0002"
    assert body["late_count"] == 0
    assert body["late_level"] is None
    assert admin_client.get("/api/attendance/employees/404/summary").status_code == 404
    assert employee_client.get("/api/attendance/employees/2/summary").status_code == 403

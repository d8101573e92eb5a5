from __future__ import annotations

from datetime import date

import pytest

from attendance_tracker.container import Container
from attendance_tracker.core.exceptions import ConstraintViolation, StoreUnavailable
from attendance_tracker.database.connection import DBConfig, DatabaseConnection
from attendance_tracker.main import create_app


@pytest.fixture
def client(monkeypatch, attendance_repo, employees_repo, attendance_service, employee_service):
    monkeypatch.setenv("APP_ENV", "testing")
    container = Container(
        conn=DatabaseConnection(DBConfig(host="localhost", port=3306, user="u", password="p", database="test")),
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        employee_service=employee_service,
        attendance_service=attendance_service,
    )
    app = create_app(container=container)
    return app.test_client()


def _post_alice(client):
    client.post(
        "/api/attendance",
        json={"employeeId": "E1", "employeeName": "Alice", "type": "WFO", "date": "2024-01-10"},
    )
    return client.post(
        "/api/attendance",
        json={
            "employeeId": "E1",
            "employeeName": "Alice",
            "type": "Sick Leave",
            "fromDate": "2024-01-10",
            "toDate": "2024-01-12",
        },
    )


def test_submit_range_returns_created(client):
    resp = _post_alice(client)

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["requested"] == 3
    assert body["succeeded"] == ["2024-01-10", "2024-01-11", "2024-01-12"]
    assert body["message"] == "3 attendance records added successfully"


def test_submit_accepts_snake_case_fields(client):
    resp = client.post(
        "/api/attendance",
        json={"emp_id": "E9", "emp_name": "Ines", "attendance_type": "WFH", "date": "2024-01-10"},
    )
    assert resp.status_code == 201
    assert resp.get_json()["message"] == "Attendance record added successfully"


def test_submit_missing_field(client):
    resp = client.post("/api/attendance", json={"employeeId": "E1", "type": "WFO", "date": "2024-01-10"})

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "MissingField"
    assert "employeeName" in resp.get_json()["message"]


def test_submit_inverted_range(client):
    resp = client.post(
        "/api/attendance",
        json={
            "employeeId": "E1",
            "employeeName": "Alice",
            "type": "Annual Leave",
            "fromDate": "2024-01-12",
            "toDate": "2024-01-10",
        },
    )
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "InvalidRange"


def test_submit_partial_outage_reports_multi_status(client, attendance_repo):
    attendance_repo.fail_on[date(2024, 1, 11)] = StoreUnavailable("gone away")

    resp = _post_alice(client)

    assert resp.status_code == 207
    body = resp.get_json()
    assert body["succeeded"] == ["2024-01-10"]
    assert body["skipped"] == ["2024-01-12"]
    assert body["failed"][0]["error"] == "StoreUnavailable"


def test_submit_total_outage_returns_503(client, attendance_repo):
    attendance_repo.fail_on[date(2024, 1, 10)] = StoreUnavailable("connection refused")

    resp = client.post(
        "/api/attendance",
        json={"employeeId": "E1", "employeeName": "Alice", "type": "WFO", "date": "2024-01-10"},
    )

    assert resp.status_code == 503
    assert resp.get_json() == {"error": "StoreUnavailable", "message": "Attendance store is unavailable"}


def test_submit_every_date_rejected_keeps_per_date_detail(client, attendance_repo):
    for day in (10, 11, 12):
        attendance_repo.fail_on[date(2024, 1, day)] = ConstraintViolation("duplicate entry")

    resp = client.post(
        "/api/attendance",
        json={
            "employeeId": "E1",
            "employeeName": "Alice",
            "type": "Sick Leave",
            "fromDate": "2024-01-10",
            "toDate": "2024-01-12",
        },
    )

    assert resp.status_code == 409
    body = resp.get_json()
    assert body["succeeded"] == []
    assert [f["date"] for f in body["failed"]] == ["2024-01-10", "2024-01-11", "2024-01-12"]
    assert {f["error"] for f in body["failed"]} == {"ConstraintViolation"}


def test_submit_single_date_rejected_is_plain_error(client, attendance_repo):
    attendance_repo.fail_on[date(2024, 1, 10)] = ConstraintViolation("duplicate entry")

    resp = client.post(
        "/api/attendance",
        json={"employeeId": "E1", "employeeName": "Alice", "type": "WFO", "date": "2024-01-10"},
    )

    assert resp.status_code == 409
    assert resp.get_json() == {"error": "ConstraintViolation", "message": "Attendance store rejected the write"}


def test_employee_records_newest_first(client):
    _post_alice(client)

    rows = client.get("/api/attendance/E1").get_json()

    assert [r["date"] for r in rows] == ["2024-01-12", "2024-01-11", "2024-01-10"]
    assert set(rows[0]) == {"id", "employeeId", "employeeName", "type", "date", "recordedAt", "badge"}
    assert rows[0]["type"] == "Sick Leave"


def test_unknown_employee_is_empty_list(client):
    resp = client.get("/api/attendance/NOBODY")
    assert resp.status_code == 200
    assert resp.get_json() == []


def test_filtered_listing(client):
    _post_alice(client)
    client.post(
        "/api/attendance",
        json={"employeeId": "E2", "employeeName": "Bob", "type": "WFO", "date": "2024-01-11"},
    )

    rows = client.get(
        "/api/attendance",
        query_string={"start_date": "2024-01-11", "end_date": "2024-01-11"},
    ).get_json()
    assert [(r["employeeId"], r["date"]) for r in rows] == [("E1", "2024-01-11"), ("E2", "2024-01-11")]

    rows = client.get("/api/attendance", query_string={"attendance_type": "WFO"}).get_json()
    assert [r["employeeId"] for r in rows] == ["E2"]

    rows = client.get("/api/attendance", query_string={"employee_id": "E1", "attendance_type": "Sick Leave"}).get_json()
    assert len(rows) == 3


def test_filtered_listing_rejects_bad_type(client):
    resp = client.get("/api/attendance", query_string={"attendance_type": "Holiday"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "InvalidField"


def test_range_endpoint(client):
    _post_alice(client)

    rows = client.get("/api/attendance-range/E1/2024-01-10/2024-01-11").get_json()

    assert [r["date"] for r in rows] == ["2024-01-11", "2024-01-10"]


def test_range_endpoint_bad_date(client):
    resp = client.get("/api/attendance-range/E1/yesterday/2024-01-11")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "InvalidField"


def test_delete_record(client):
    _post_alice(client)
    rows = client.get("/api/attendance/E1").get_json()

    resp = client.delete(f"/api/attendance/{rows[0]['id']}")
    assert resp.status_code == 200

    remaining = client.get("/api/attendance/E1").get_json()
    assert [r["date"] for r in remaining] == ["2024-01-11", "2024-01-10"]


def test_delete_missing_record(client):
    resp = client.delete("/api/attendance/4242")
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "NotFound"


def test_stats(client):
    _post_alice(client)

    stats = client.get("/api/stats").get_json()

    assert stats["totalEmployees"] == 1
    assert stats["totalRecords"] == 3
    assert stats["attendanceByType"]["Sick Leave"] == 3


def test_csv_export(client):
    _post_alice(client)

    resp = client.get("/api/attendance/export.csv", query_string={"employee_id": "E1"})

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "attendance_records.csv" in resp.headers["Content-Disposition"]
    lines = resp.data.decode("utf-8-sig").splitlines()
    assert lines[0] == "Employee ID,Employee Name,Attendance Type,Date"
    assert lines[1] == "E1,Alice,Sick Leave,2024-01-12"
    assert len(lines) == 4


def test_unknown_api_path_is_json_404(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "NotFound"

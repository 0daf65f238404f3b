from __future__ import annotations

import pytest

from src.timeclock.timeclock.main import create_app


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app()
    return app.test_client()


def login(client, email, password):
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.get_json()['token']}"}


@pytest.fixture
def admin(client):
    return login(client, "admin@example.com", "admin123")


@pytest.fixture
def john(client):
    return login(client, "john.doe@example.com", "employee123")


def test_requires_bearer_token(client):
    resp = client.get("/api/auth/me")

    assert resp.status_code == 401
    assert resp.get_json()["error"] == "AuthenticationError"


def test_bad_login(client):
    resp = client.post("/api/auth/login", json={"email": "admin@example.com", "password": "nope"})

    assert resp.status_code == 401


def test_me_and_logout(client, john):
    me = client.get("/api/auth/me", headers=john).get_json()
    assert me["employee"]["full_name"] == "John Doe"

    assert client.post("/api/auth/logout", headers=john).status_code == 200
    assert client.get("/api/auth/me", headers=john).status_code == 401


def test_clock_conflicts_map_to_409(client, john):
    assert client.post("/api/time-entries/clock-out", headers=john).status_code == 409
    assert client.post("/api/time-entries/clock-in", headers=john).status_code == 201
    assert client.post("/api/time-entries/clock-in", headers=john).status_code == 409

    status = client.get("/api/time-entries/status", headers=john).get_json()
    assert status["status"] == "clocked_in"


def test_unmatched_lunch_in_is_400(client, john):
    client.post("/api/time-entries/clock-in", headers=john)

    resp = client.post("/api/time-entries/lunch-in", headers=john)

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "InconsistentSequence"


def test_unknown_clock_action_is_404(client, john):
    assert client.post("/api/time-entries/teleport", headers=john).status_code == 404


def test_admin_deletes_entry(client, admin, john):
    event = client.post("/api/time-entries/clock-in", headers=john).get_json()
    url = f"/api/time-entries/{event['employee_id']}/{event['event_id']}"

    assert client.delete(url, headers=john).status_code == 403
    assert client.delete(url, headers=admin).status_code == 200
    assert client.get("/api/time-entries/my-entries", headers=john).get_json() == []


def test_employee_directory(client, admin, john):
    assert client.get("/api/employees", headers=john).status_code == 403
    assert len(client.get("/api/employees", headers=admin).get_json()) == 3

    resp = client.post(
        "/api/employees",
        headers=admin,
        json={"full_name": "New Hire", "email": "new.hire@example.com", "password": "secret1"},
    )
    assert resp.status_code == 201
    assert resp.get_json()["email"] == "new.hire@example.com"


def test_settings_validation(client, admin, john):
    assert client.get("/api/settings", headers=john).status_code == 200
    assert client.put("/api/settings", headers=john, json={"grace_minutes": 5}).status_code == 403
    assert client.put("/api/settings", headers=admin, json={"grace_minutes": -1}).status_code == 422

    resp = client.put("/api/settings", headers=admin, json={"grace_minutes": 5})
    assert resp.get_json()["grace_minutes"] == 5


def test_reports(client, admin, john):
    before_anchor = client.get("/api/reports/pay-period?date=2024-01-01", headers=admin)
    assert before_anchor.status_code == 422

    period = client.get("/api/reports/pay-period?date=2025-01-20", headers=admin).get_json()
    assert period["period"]["number"] == 2

    csv_resp = client.get("/api/reports/timesheet?start=2025-01-01&end=2025-01-31&format=csv", headers=admin)
    assert csv_resp.mimetype == "text/csv"
    assert csv_resp.get_data(as_text=True).startswith("employee_id,full_name")

    assert client.get("/api/reports/timesheet?start=2025-01-01", headers=admin).status_code == 400
    assert client.get("/api/reports/me?date=2025-01-20", headers=john).status_code == 200


def test_attendance_endpoints(client, admin, john):
    summary = client.get("/api/attendance/summary?range=select-month&month=2025-01", headers=john)
    assert summary.status_code == 200
    assert summary.get_json()["range"]["start"] == "2025-01-01"

    closed = client.post("/api/attendance/close-day", headers=admin, json={"employee_id": 2, "date": "2025-01-06"})
    assert closed.get_json()["status"] == "missed"
    again = client.post("/api/attendance/close-day", headers=admin, json={"employee_id": 2, "date": "2025-01-06"})
    assert again.status_code == 400

    goals = client.get("/api/attendance/goals", headers=admin).get_json()
    assert [g["name"] for g in goals] == ["Perfect Attendance", "Reliable", "Needs Improvement"]


def test_schedule_week(client, admin, john):
    week = client.get("/api/schedules/week?start=2025-01-08", headers=john).get_json()

    assert week["week_start"] == "2025-01-05"
    assert len(week["days"]) == 7
    assert client.put("/api/schedules/day", headers=john, json={}).status_code == 403


def test_vacation(client, admin, john):
    mine = client.get("/api/vacation/me", headers=john).get_json()
    assert mine["allotted_hours"] == 80

    resp = client.put("/api/vacation/2", headers=admin, json={"used_hours": 4})
    assert resp.get_json()["used_hours"] == 4


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nope")

    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Not Found"

from app.core.exceptions import CollaboratorError
from app.models.schedule_block import ScheduleBlock
from app.models.working_hours import WorkingHours

from conftest import MONDAY


def test_availability_endpoint(client, repo) -> None:
    repo.window(1, "09:00", "12:00")
    repo.appointment(MONDAY, "09:30", "Consulta General")
    resp = client.get("/api/v1/schedule/availability/2025-03-03", params={"serviceType": "Vacunación"})
    assert resp.status_code == 200
    assert resp.json() == ["09:00", "10:30", "11:00", "11:30"]


def test_availability_editing_appointment(client, repo) -> None:
    repo.window(1, "09:00", "11:00")
    appt = repo.appointment(MONDAY, "10:00")
    url = "/api/v1/schedule/availability/2025-03-03"
    assert "10:00" not in client.get(url).json()
    assert "10:00" in client.get(url, params={"editingAppointment": appt.id}).json()


def test_no_capacity_is_empty_200(client, repo) -> None:
    resp = client.get("/api/v1/schedule/availability/2025-03-02")
    assert resp.status_code == 200
    assert resp.json() == []


def test_store_failure_is_503_not_empty(client, repo) -> None:
    repo.fail_with = CollaboratorError("Schedule store is unavailable")
    resp = client.get("/api/v1/schedule/availability/2025-03-03")
    assert resp.status_code == 503
    assert resp.json() == {"detail": "Schedule store is unavailable"}


def test_malformed_date_is_400(client) -> None:
    resp = client.get("/api/v1/schedule/availability/03-03-2025")
    assert resp.status_code == 400
    resp = client.get("/api/v1/schedule/is-blocked/not-a-date")
    assert resp.status_code == 400


def test_is_blocked_endpoint(client, repo) -> None:
    repo.window(1, "09:00", "12:00")
    assert client.get("/api/v1/schedule/is-blocked/2025-03-03").json() == {"isBlocked": False}
    assert client.get("/api/v1/schedule/is-blocked/2025-03-02").json() == {"isBlocked": True}
    repo.block(MONDAY)
    assert client.get("/api/v1/schedule/is-blocked/2025-03-03").json() == {"isBlocked": True}


def test_services_listing(client) -> None:
    resp = client.get("/api/v1/schedule/services")
    assert resp.status_code == 200
    body = resp.json()
    assert {"name": "Consulta General", "duration": 60, "color": "#5FA98D"} in body
    assert len(body) == 7


def test_working_hours_crud(client, repo) -> None:
    resp = client.post(
        "/api/v1/schedule/veterinary",
        json={"day_of_week": 1, "start_time": "09:00", "end_time": "13:00"},
    )
    assert resp.status_code == 201
    created = resp.json()
    assert created["is_active"] is True

    resp = client.put(f"/api/v1/schedule/veterinary/{created['id']}", json={"end_time": "12:00"})
    assert resp.status_code == 200
    assert resp.json()["end_time"] == "12:00"

    listed = client.get("/api/v1/schedule/veterinary").json()
    assert [w["id"] for w in listed] == [created["id"]]

    client.put(f"/api/v1/schedule/veterinary/{created['id']}", json={"is_active": False})
    assert client.get("/api/v1/schedule/veterinary").json() == []


def test_working_hours_validation(client) -> None:
    url = "/api/v1/schedule/veterinary"
    assert client.post(url, json={"day_of_week": 7, "start_time": "09:00", "end_time": "12:00"}).status_code == 422
    assert client.post(url, json={"day_of_week": 1, "start_time": "9:00", "end_time": "12:00"}).status_code == 422
    assert client.post(url, json={"day_of_week": 1, "start_time": "12:00", "end_time": "09:00"}).status_code == 422


def test_working_hours_update_unknown_or_inverted(client, repo) -> None:
    assert client.put("/api/v1/schedule/veterinary/missing", json={"end_time": "12:00"}).status_code == 404
    row = repo.window(1, "09:00", "12:00")
    resp = client.put(f"/api/v1/schedule/veterinary/{row.id}", json={"start_time": "13:00"})
    assert resp.status_code == 400
    assert row.start_time == "09:00"


def test_block_crud(client, repo) -> None:
    resp = client.post(
        "/api/v1/schedule/blocks",
        json={"block_date": "2025-03-03", "start_time": "13:00", "end_time": "14:00", "reason": "Almuerzo"},
    )
    assert resp.status_code == 201
    block = resp.json()

    resp = client.put(f"/api/v1/schedule/blocks/{block['id']}", json={"start_time": None, "end_time": None})
    assert resp.status_code == 200
    assert resp.json()["start_time"] is None

    repo.window(1, "09:00", "12:00")
    assert client.get("/api/v1/schedule/is-blocked/2025-03-03").json() == {"isBlocked": True}
    assert len(client.get("/api/v1/schedule/blocks").json()) == 1
    assert client.put("/api/v1/schedule/blocks/missing", json={"reason": "x"}).status_code == 404


def test_block_requires_both_bounds(client) -> None:
    resp = client.post(
        "/api/v1/schedule/blocks",
        json={"block_date": "2025-03-03", "start_time": "13:00", "reason": "Almuerzo"},
    )
    assert resp.status_code == 422


def test_bulk_enable_creates_then_updates_hours_and_lunch(client, repo) -> None:
    repo.window(1, "08:00", "10:00")  # existing Monday row gets updated
    resp = client.post(
        "/api/v1/schedule/bulk",
        json={
            "fromDate": "2025-03-03",
            "toDate": "2025-03-04",
            "action": "enable",
            "startTime": "09:00",
            "endTime": "18:00",
            "enableLunch": True,
            "lunchStart": "13:00",
            "lunchEnd": "14:00",
        },
    )
    assert resp.status_code == 201
    types = [r["type"] for r in resp.json()["results"]]
    assert types == ["schedule_updated", "lunch_block", "schedule_created", "lunch_block"]

    hours = sorted(repo.rows[WorkingHours].values(), key=lambda r: r.day_of_week)
    assert [(h.day_of_week, h.start_time, h.end_time) for h in hours] == [(1, "09:00", "18:00"), (2, "09:00", "18:00")]

    slots = client.get("/api/v1/schedule/availability/2025-03-03").json()
    assert "12:30" in slots and "13:00" not in slots and "13:30" not in slots and "14:00" in slots


def test_bulk_disable_blocks_each_day(client, repo) -> None:
    resp = client.post(
        "/api/v1/schedule/bulk",
        json={"fromDate": "2025-03-03", "toDate": "2025-03-05", "action": "disable"},
    )
    assert resp.status_code == 201
    results = resp.json()["results"]
    assert [r["type"] for r in results] == ["day_block"] * 3
    blocks = list(repo.rows[ScheduleBlock].values())
    assert all(b.start_time is None and b.end_time is None for b in blocks)
    assert {b.reason for b in blocks} == {"Día Bloqueado"}


def test_bulk_rejects_reversed_or_huge_ranges(client) -> None:
    url = "/api/v1/schedule/bulk"
    assert client.post(url, json={"fromDate": "2025-03-05", "toDate": "2025-03-03", "action": "disable"}).status_code == 422
    resp = client.post(url, json={"fromDate": "2025-01-01", "toDate": "2027-01-01", "action": "disable"})
    assert resp.status_code == 400


def test_working_hours_update_rejects_null(client, repo) -> None:
    row = repo.window(1, "09:00", "12:00")
    for field in ("start_time", "end_time", "day_of_week", "is_active"):
        resp = client.put(f"/api/v1/schedule/veterinary/{row.id}", json={field: None})
        assert resp.status_code == 422
    assert (row.start_time, row.end_time) == ("09:00", "12:00")
    resp = client.get("/api/v1/schedule/availability/2025-03-03")
    assert resp.status_code == 200
    assert resp.json()[0] == "09:00"


def test_block_update_rejects_null_reason(client, repo) -> None:
    row = repo.block(MONDAY, "13:00", "14:00")
    resp = client.put(f"/api/v1/schedule/blocks/{row.id}", json={"reason": None})
    assert resp.status_code == 422
    resp = client.put(f"/api/v1/schedule/blocks/{row.id}", json={"block_date": None})
    assert resp.status_code == 422
    assert row.reason == "test"
    # Nulling only one bound is still a one-bound block
    resp = client.put(f"/api/v1/schedule/blocks/{row.id}", json={"start_time": None})
    assert resp.status_code == 400
    assert (row.start_time, row.end_time) == ("13:00", "14:00")

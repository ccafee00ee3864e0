from playpulse.models.schedule import ProgramSchedule
from tests.conftest import auth_headers


def _payload(program_id, activity="Drills", duration=2):
    return {
        "program_id": program_id,
        "duration": duration,
        "schedule": [
            {"date": "2099-06-01T10:00:00Z", "activity": activity, "time": "10am"},
            {"date": "2099-06-08T10:00:00Z", "activity": "Match"},
        ],
    }


def test_schedule_upsert_keeps_one_row_per_program_and_coach(client, db, seed_users, seed_program):
    coach = auth_headers(client, "coach@test.com")
    program_id = seed_program["program"].program_id

    first = client.post("/api/schedules", json=_payload(program_id), headers=coach)
    assert first.status_code == 200, first.text
    second = client.post("/api/schedules", json=_payload(program_id, activity="Sprints", duration=1.5), headers=coach)
    assert second.status_code == 200

    assert first.json()["schedule_id"] == second.json()["schedule_id"]
    assert db.query(ProgramSchedule).count() == 1
    body = second.json()
    assert body["duration"] == 1.5
    assert body["schedule"][0] == {"date": "2099-06-01T10:00:00Z", "activity": "Sprints", "time": "10am"}
    assert body["schedule"][1]["time"] == "TBD"


def test_schedule_for_unassigned_program_is_forbidden(client, db, seed_users, seed_program):
    coach = auth_headers(client, "coach@test.com")
    resp = client.post("/api/schedules", json=_payload(seed_program["other_program"].program_id), headers=coach)
    assert resp.status_code == 403
    assert resp.json()["message"] == "Program not assigned to this coach"
    assert db.query(ProgramSchedule).count() == 0


def test_schedule_rejects_negative_duration_and_bad_dates(client, seed_users, seed_program):
    coach = auth_headers(client, "coach@test.com")
    program_id = seed_program["program"].program_id
    assert client.post("/api/schedules", json=_payload(program_id, duration=-1), headers=coach).status_code == 400
    assert client.post("/api/schedules", json=_payload(program_id, duration=25), headers=coach).status_code == 400
    assert client.post("/api/schedules", json=_payload(program_id, duration=1e12), headers=coach).status_code == 400

    bad = _payload(program_id)
    bad["schedule"][0]["date"] = "someday"
    assert client.post("/api/schedules", json=bad, headers=coach).status_code == 400


def test_list_own_schedules(client, seed_users, seed_program):
    coach = auth_headers(client, "coach@test.com")
    client.post("/api/schedules", json=_payload(seed_program["program"].program_id), headers=coach)

    mine = client.get("/api/schedules", headers=coach).json()
    assert len(mine) == 1
    assert client.get("/api/schedules", headers=auth_headers(client, "coach2@test.com")).json() == []
    assert client.get("/api/schedules", headers=auth_headers(client, "parent@test.com")).status_code == 403

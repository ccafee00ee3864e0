from playpulse.models.schedule import ProgramSchedule
from tests.conftest import auth_headers, enroll


def _seed_schedule(db, program, coach, entries, duration=2):
    row = ProgramSchedule(program_id=program.program_id, coach_id=coach.coach_id, duration=duration, schedule=entries)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def test_parent_sees_upcoming_events_of_enrolled_programs(client, db, seed_users, seed_program):
    schedule = _seed_schedule(db, seed_program["program"], seed_program["coach"], [
        {"date": "2000-01-01T10:00:00Z", "activity": "Past"},
        {"date": "2099-06-01T10:00:00Z", "activity": "Drills", "time": "10am"},
        {"date": "garbage", "activity": "Broken"},
    ])
    _seed_schedule(db, seed_program["other_program"], seed_program["coach2"], [
        {"date": "2099-06-01T10:00:00Z", "activity": "Laps"},
    ])
    parent = auth_headers(client, "parent@test.com")
    assert client.get("/api/calendar/events", headers=parent).json() == []

    enroll(client, parent, seed_program["program"].program_id)
    events = client.get("/api/calendar/events", headers=parent).json()
    assert len(events) == 1
    event = events[0]
    assert event["id"] == f"{schedule.schedule_id}-1"
    assert event["title"] == "Junior Football - Drills"
    assert event["coach_name"] == "Coach"
    assert event["start"].startswith("2099-06-01T10:00:00")
    assert event["end"].startswith("2099-06-01T12:00:00")
    assert event["color"] == "#38a169"


def test_coach_sees_own_schedules(client, db, seed_users, seed_program):
    _seed_schedule(db, seed_program["program"], seed_program["coach"], [{"date": "2099-01-01T09:00:00Z", "activity": "A"}])
    _seed_schedule(db, seed_program["other_program"], seed_program["coach2"], [{"date": "2099-01-01T09:00:00Z", "activity": "B"}])

    events = client.get("/api/calendar/events", headers=auth_headers(client, "coach@test.com")).json()
    assert [e["activity"] for e in events] == ["A"]


def test_owner_sees_institute_schedules(client, db, seed_users, seed_program):
    _seed_schedule(db, seed_program["program"], seed_program["coach"], [{"date": "2099-01-01T09:00:00Z", "activity": "A"}])
    _seed_schedule(db, seed_program["other_program"], seed_program["coach2"], [{"date": "2099-01-02T09:00:00Z", "activity": "B"}])

    owner_events = client.get("/api/calendar/events", headers=auth_headers(client, "owner@test.com")).json()
    assert sorted(e["activity"] for e in owner_events) == ["A", "B"]

    assert client.get("/api/calendar/events", headers=auth_headers(client, "owner2@test.com")).json() == []


def test_calendar_requires_token(client):
    resp = client.get("/api/calendar/events")
    assert resp.status_code == 401
    assert resp.json() == {"message": "No token, authorization denied"}


def test_out_of_range_schedule_entry_does_not_break_calendar(client, seed_users, seed_program):
    coach = auth_headers(client, "coach@test.com")
    program_id = seed_program["program"].program_id
    resp = client.post(
        "/api/schedules",
        json={
            "program_id": program_id,
            "duration": 2,
            "schedule": [
                {"date": "9999-12-31T23:00:00Z", "activity": "Far"},
                {"date": "2099-03-01T09:00:00Z", "activity": "Near"},
            ],
        },
        headers=coach,
    )
    assert resp.status_code == 200, resp.text

    parent = auth_headers(client, "parent@test.com")
    enroll(client, parent, program_id)
    events = client.get("/api/calendar/events", headers=parent)
    assert events.status_code == 200
    assert [e["activity"] for e in events.json()] == ["Near"]
    owner_events = client.get("/api/calendar/events", headers=auth_headers(client, "owner@test.com"))
    assert [e["activity"] for e in owner_events.json()] == ["Near"]

from playpulse.models.attendance import Attendance
from playpulse.models.gamification import Gamification
from tests.conftest import auth_headers, enroll


def _ledger_points(db, user_id):
    db.expire_all()
    ledger = db.query(Gamification).filter(Gamification.user_id == user_id).first()
    return ledger.points if ledger else None


def _record(client, headers, enrollment_id, when="2024-06-01", status="present"):
    return client.post(
        "/api/attendance",
        json={"enrollment_id": enrollment_id, "date": when, "status": status},
        headers=headers,
    )


def test_present_attendance_awards_five_points(client, db, seed_users, seed_program):
    enrollment = enroll(client, auth_headers(client, "parent@test.com"), seed_program["program"].program_id)
    coach = auth_headers(client, "coach@test.com")

    resp = _record(client, coach, enrollment["enrollment_id"])
    assert resp.status_code == 201, resp.text
    assert resp.json()["status"] == "present"
    assert resp.json()["date"].startswith("2024-06-01T00:00:00")
    assert _ledger_points(db, seed_users["parent"].user_id) == 5

    assert _record(client, coach, enrollment["enrollment_id"], when="2024-06-02").status_code == 201
    assert _ledger_points(db, seed_users["parent"].user_id) == 10


def test_duplicate_attendance_same_utc_day_is_rejected(client, db, seed_users, seed_program):
    enrollment = enroll(client, auth_headers(client, "parent@test.com"), seed_program["program"].program_id)
    coach = auth_headers(client, "coach@test.com")

    assert _record(client, coach, enrollment["enrollment_id"], when="2024-06-01T08:00:00Z").status_code == 201
    resp = _record(client, coach, enrollment["enrollment_id"], when="2024-06-01T23:59:59.999Z")
    assert resp.status_code == 409
    assert resp.json()["message"] == "Attendance already recorded for this date"

    assert _ledger_points(db, seed_users["parent"].user_id) == 5
    assert db.query(Attendance).count() == 1


def test_day_boundary_is_utc(client, db, seed_users, seed_program):
    enrollment = enroll(client, auth_headers(client, "parent@test.com"), seed_program["program"].program_id)
    coach = auth_headers(client, "coach@test.com")

    # 2024-06-02 03:00 in Kathmandu is still 2024-06-01 in UTC
    assert _record(client, coach, enrollment["enrollment_id"], when="2024-06-01T10:00:00Z").status_code == 201
    assert _record(client, coach, enrollment["enrollment_id"], when="2024-06-02T03:00:00+05:45").status_code == 409
    assert _record(client, coach, enrollment["enrollment_id"], when="2024-06-02T00:00:00Z").status_code == 201


def test_absent_attendance_does_not_award_points(client, db, seed_users, seed_program):
    enrollment = enroll(client, auth_headers(client, "parent@test.com"), seed_program["program"].program_id)
    resp = _record(client, auth_headers(client, "coach@test.com"), enrollment["enrollment_id"], status="absent")
    assert resp.status_code == 201
    assert _ledger_points(db, seed_users["parent"].user_id) is None


def test_attendance_requires_assigned_coach(client, seed_users, seed_program):
    enrollment = enroll(client, auth_headers(client, "parent@test.com"), seed_program["program"].program_id)
    resp = _record(client, auth_headers(client, "coach2@test.com"), enrollment["enrollment_id"])
    assert resp.status_code == 403

    resp = _record(client, auth_headers(client, "parent@test.com"), enrollment["enrollment_id"])
    assert resp.status_code == 403


def test_attendance_unknown_enrollment(client, seed_users, seed_program):
    resp = _record(client, auth_headers(client, "coach@test.com"), 9999)
    assert resp.status_code == 404


def test_invalid_status_is_validation_error(client, seed_users, seed_program):
    enrollment = enroll(client, auth_headers(client, "parent@test.com"), seed_program["program"].program_id)
    resp = _record(client, auth_headers(client, "coach@test.com"), enrollment["enrollment_id"], status="late")
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid request"


def test_parent_lists_attendance_and_progress(client, seed_users, seed_program):
    parent = auth_headers(client, "parent@test.com")
    coach = auth_headers(client, "coach@test.com")
    enrollment = enroll(client, parent, seed_program["program"].program_id)
    eid = enrollment["enrollment_id"]

    _record(client, coach, eid, when="2024-06-02")
    _record(client, coach, eid, when="2024-06-01")
    resp = client.post(
        "/api/progress",
        json={"enrollment_id": eid, "date": "2024-06-01", "metrics": 72.5, "notes": "Good passing"},
        headers=coach,
    )
    assert resp.status_code == 201, resp.text
    assert resp.json()["coach_name"] == "Coach"

    attendance = client.get(f"/api/attendance/{eid}", headers=parent).json()
    assert [a["date"][:10] for a in attendance] == ["2024-06-01", "2024-06-02"]
    progress = client.get(f"/api/progress/{eid}", headers=parent).json()
    assert progress[0]["metrics"] == 72.5

    other = client.get(f"/api/attendance/{eid}", headers=auth_headers(client, "parent2@test.com"))
    assert other.status_code == 403


def test_parent_ledger_and_coach_adjustments(client, seed_users, seed_program):
    parent = auth_headers(client, "parent@test.com")
    coach = auth_headers(client, "coach@test.com")
    parent_id = seed_users["parent"].user_id

    empty = client.get("/api/gamification/me", headers=parent).json()
    assert empty["points"] == 0 and empty["badges"] == []

    resp = client.post("/api/gamification/adjust", json={"user_id": parent_id, "points": 20, "badge": "Early Bird"}, headers=coach)
    assert resp.status_code == 200, resp.text
    resp = client.post("/api/gamification/adjust", json={"user_id": parent_id, "badge": "Early Bird"}, headers=coach)
    assert resp.json()["badges"] == ["Early Bird"]

    ledger = client.get("/api/gamification/me", headers=parent).json()
    assert ledger["points"] == 20

    missing = client.post("/api/gamification/adjust", json={"user_id": 9999, "points": 1}, headers=coach)
    assert missing.status_code == 404


def test_reward_is_upserted_per_program_and_coach(client, db, seed_users, seed_program):
    coach = auth_headers(client, "coach@test.com")
    program_id = seed_program["program"].program_id

    first = client.put("/api/gamification/rewards", json={"program_id": program_id, "reward": "Medal", "points_required": 50}, headers=coach)
    second = client.put("/api/gamification/rewards", json={"program_id": program_id, "reward": "Trophy", "points_required": 80}, headers=coach)
    assert first.status_code == 200 and second.status_code == 200
    assert first.json()["gamification_id"] == second.json()["gamification_id"]
    assert second.json()["reward"] == "Trophy"
    assert db.query(Gamification).filter(Gamification.program_id == program_id).count() == 1

    other = client.put(
        "/api/gamification/rewards",
        json={"program_id": seed_program["other_program"].program_id, "reward": "Medal", "points_required": 10},
        headers=coach,
    )
    assert other.status_code == 403

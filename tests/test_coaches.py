import pytest

from playpulse.errors import ConflictError
from playpulse.models.notification import Notification
from playpulse.models.user import Coach, User
from playpulse.schemas.coach import CoachCreate
from playpulse.services import coach_service
from tests.conftest import auth_headers, enroll

COACH_PAYLOAD = {
    "username": "ramcoach",
    "password": "coachpw",
    "name": "Ram Thapa",
    "email": "ram@test.com",
    "qualification": "AFC B",
    "experience": "7 years",
    "salary": 60000,
    "contact_number": "9822222222",
}


def test_owner_creates_coach_with_login(client, db, seed_users, seed_institute):
    owner = auth_headers(client, "owner@test.com")
    resp = client.post("/api/coaches", json=COACH_PAYLOAD, headers=owner)
    assert resp.status_code == 201, resp.text
    coach = resp.json()
    assert coach["status"] == "active"
    assert coach["institute_id"] == seed_institute["main"].institute_id

    user = db.query(User).filter(User.email == "ram@test.com").first()
    assert user.role == "coach"
    assert user.user_id == coach["user_id"]

    login = client.post("/api/auth/login", json={"email": "ram@test.com", "password": "coachpw"})
    assert login.status_code == 200

    listed = client.get("/api/coaches", headers=owner).json()
    assert [c["email"] for c in listed] == ["ram@test.com"]


def test_duplicate_user_email_is_conflict(client, db, seed_users, seed_institute):
    owner = auth_headers(client, "owner@test.com")
    payload = dict(COACH_PAYLOAD, email="parent@test.com")
    resp = client.post("/api/coaches", json=payload, headers=owner)
    assert resp.status_code == 409
    assert db.query(Coach).count() == 0


def test_profile_failure_rolls_back_login(db, seed_users, seed_program):
    """A coach-profile collision must not leave the login row behind."""
    owner = seed_users["owner"]
    # coach.email is unique; users.email is free for this address
    db.query(Coach).filter(Coach.coach_id == seed_program["coach"].coach_id).update({"email": "clash@test.com"})
    db.commit()
    users_before = db.query(User).count()

    data = CoachCreate(**dict(COACH_PAYLOAD, email="clash@test.com"))
    with pytest.raises(ConflictError):
        coach_service.create_coach(db, owner, data)

    assert db.query(User).count() == users_before
    assert db.query(User).filter(User.email == "clash@test.com").first() is None


def test_non_owner_cannot_manage_coaches(client, seed_users, seed_institute):
    resp = client.post("/api/coaches", json=COACH_PAYLOAD, headers=auth_headers(client, "parent@test.com"))
    assert resp.status_code == 403
    assert resp.json()["message"].startswith("Access denied")


def test_update_and_toggle_coach(client, seed_users, seed_program):
    owner = auth_headers(client, "owner@test.com")
    coach_id = seed_program["coach"].coach_id

    resp = client.put(f"/api/coaches/{coach_id}", json={"experience": "6 years", "password": "changed"}, headers=owner)
    assert resp.status_code == 200
    assert resp.json()["experience"] == "6 years"
    assert client.post("/api/auth/login", json={"email": "coach@test.com", "password": "changed"}).status_code == 200

    toggled = client.put(f"/api/coaches/{coach_id}/toggle-status", headers=owner)
    assert toggled.json()["status"] == "inactive"
    toggled = client.put(f"/api/coaches/{coach_id}/toggle-status", headers=owner)
    assert toggled.json()["status"] == "active"

    other = client.put(f"/api/coaches/{coach_id}/toggle-status", headers=auth_headers(client, "owner2@test.com"))
    assert other.status_code == 404


def test_coach_image_upload(client, seed_users, seed_program, tmp_path, monkeypatch):
    from playpulse.config import settings

    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))
    owner = auth_headers(client, "owner@test.com")
    coach_id = seed_program["coach"].coach_id

    resp = client.post(
        f"/api/coaches/{coach_id}/image",
        files={"file": ("face.png", b"\x89PNG fake", "image/png")},
        headers=owner,
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["image"].startswith("/uploads/coaches/")

    bad = client.post(
        f"/api/coaches/{coach_id}/image",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=owner,
    )
    assert bad.status_code == 400


def test_coach_dashboard_is_scoped_to_assigned_programs(client, db, seed_users, seed_program):
    parent = auth_headers(client, "parent@test.com")
    parent2 = auth_headers(client, "parent2@test.com")
    coach = auth_headers(client, "coach@test.com")
    coach2 = auth_headers(client, "coach2@test.com")
    mine = enroll(client, parent, seed_program["program"].program_id)
    theirs = enroll(client, parent2, seed_program["other_program"].program_id)

    assert client.post(
        "/api/attendance",
        json={"enrollment_id": mine["enrollment_id"], "date": "2024-06-01T09:00:00Z", "status": "present"},
        headers=coach,
    ).status_code == 201
    assert client.post(
        "/api/attendance",
        json={"enrollment_id": theirs["enrollment_id"], "date": "2024-06-01T09:00:00Z", "status": "present"},
        headers=coach2,
    ).status_code == 201
    assert client.post(
        "/api/progress",
        json={"enrollment_id": mine["enrollment_id"], "date": "2024-06-01T09:00:00Z", "metrics": 72, "notes": "Good first touch"},
        headers=coach,
    ).status_code == 201
    assert client.post(
        "/api/schedules",
        json={"program_id": seed_program["program"].program_id, "schedule": [{"date": "2099-06-01T10:00:00Z", "activity": "Drills"}]},
        headers=coach,
    ).status_code == 200
    assert client.put(
        "/api/gamification/rewards",
        json={"program_id": seed_program["program"].program_id, "reward": "Medal", "points_required": 50},
        headers=coach,
    ).status_code == 200
    client.post(
        "/api/chat/messages",
        json={"receiver_id": seed_users["coach"].user_id, "content": "When is practice?", "enrollment_id": mine["enrollment_id"]},
        headers=parent,
    )
    client.post("/api/chat/messages", json={"receiver_id": seed_users["coach2"].user_id, "content": "Hi"}, headers=parent2)

    coach_user_id = seed_users["coach"].user_id
    db.add_all([
        Notification(user_id=coach_user_id, noti_type="coach", message="Unread", is_read=False),
        Notification(user_id=coach_user_id, noti_type="coach", message="Read", is_read=True),
    ])
    db.commit()

    resp = client.get("/api/coaches/me/dashboard", headers=coach)
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["coach"]["coach_id"] == seed_program["coach"].coach_id
    assert [e["enrollment_id"] for e in body["enrollments"]] == [mine["enrollment_id"]]
    assert [a["enrollment_id"] for a in body["attendance"]] == [mine["enrollment_id"]]
    assert [p["metrics"] for p in body["progress"]] == [72]
    assert [s["program_id"] for s in body["schedules"]] == [seed_program["program"].program_id]
    assert [m["content"] for m in body["chat_messages"]] == ["When is practice?"]
    assert [n["message"] for n in body["notifications"]] == ["Unread"]
    assert body["materials"] == []
    rewards = {(r["user_id"], r["reward"]) for r in body["rewards"]}
    assert rewards == {(None, "Medal"), (seed_users["parent"].user_id, None)}


def test_coach_dashboard_requires_coach_role(client, seed_users, seed_program):
    resp = client.get("/api/coaches/me/dashboard", headers=auth_headers(client, "owner@test.com"))
    assert resp.status_code == 403

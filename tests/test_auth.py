from datetime import timedelta

from jose import jwt

from playpulse.config import settings
from playpulse.models.user import User
from playpulse.utils.time_utils import to_naive_utc, utc_now
from tests.conftest import auth_headers


def test_signup_returns_token_and_user(client):
    resp = client.post(
        "/api/auth/signup",
        json={"name": "New Parent", "email": "New@Test.com", "password": "pw12345", "role": "parent"},
    )
    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert data["user"]["email"] == "new@test.com"
    assert data["user"]["role"] == "parent"

    claims = jwt.decode(data["access_token"], settings.SECRET_KEY, algorithms=["HS256"])
    assert claims["sub"] == str(data["user"]["user_id"])
    assert claims["role"] == "parent"


def test_signup_rejects_coach_role_and_duplicates(client, seed_users):
    resp = client.post("/api/auth/signup", json={"name": "X", "email": "x@test.com", "password": "pw", "role": "coach"})
    assert resp.status_code == 400

    dup = client.post("/api/auth/signup", json={"name": "X", "email": "parent@test.com", "password": "pw", "role": "parent"})
    assert dup.status_code == 409
    assert dup.json()["message"] == "Email already exists"


def test_signup_missing_fields_is_400(client):
    resp = client.post("/api/auth/signup", json={"email": "x@test.com"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Invalid request"
    assert any(err["loc"][-1] == "password" for err in body["error"])


def test_login_success_and_failure(client, seed_users):
    resp = client.post("/api/auth/login", json={"email": "owner@test.com", "password": "secret123"})
    assert resp.status_code == 200
    assert resp.json()["user"]["role"] == "owner"

    bad = client.post("/api/auth/login", json={"email": "owner@test.com", "password": "nope"})
    assert bad.status_code == 401
    assert bad.json()["message"] == "Invalid email or password"


def test_me_and_profile_update(client, seed_users):
    headers = auth_headers(client, "parent@test.com")
    assert client.get("/api/auth/me", headers=headers).json()["name"] == "Parent"

    resp = client.put("/api/auth/profile", json={"name": "Renamed", "username": "rn"}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["name"] == "Renamed"
    assert resp.json()["username"] == "rn"

    taken = client.put("/api/auth/profile", json={"email": "owner@test.com"}, headers=headers)
    assert taken.status_code == 409


def test_invalid_and_expired_tokens(client, seed_users):
    resp = client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "Token is not valid"

    expired = jwt.encode(
        {"sub": str(seed_users["parent"].user_id), "exp": utc_now() - timedelta(minutes=1)},
        settings.SECRET_KEY,
        algorithm="HS256",
    )
    resp = client.get("/api/auth/me", headers={"Authorization": f"Bearer {expired}"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "Token has expired"


def test_password_reset_flow(client, db, seed_users, fake_mailer):
    resp = client.post("/api/auth/forgot-password", json={"email": "parent@test.com"})
    assert resp.status_code == 200
    assert fake_mailer.sent[-1][0] == "parent@test.com"

    db.expire_all()
    code = db.query(User).filter(User.email == "parent@test.com").first().reset_code
    assert len(code) == 6 and code.isdigit()

    wrong = "000000" if code != "000000" else "111111"
    assert client.post("/api/auth/verify-reset-code", json={"email": "parent@test.com", "code": wrong}).status_code == 400
    assert client.post("/api/auth/verify-reset-code", json={"email": "parent@test.com", "code": code}).status_code == 200

    resp = client.post(
        "/api/auth/reset-password",
        json={"email": "parent@test.com", "code": code, "new_password": "brand-new"},
    )
    assert resp.status_code == 200
    assert client.post("/api/auth/login", json={"email": "parent@test.com", "password": "brand-new"}).status_code == 200
    # code is single use
    again = client.post("/api/auth/reset-password", json={"email": "parent@test.com", "code": code, "new_password": "x"})
    assert again.status_code == 400


def test_expired_reset_code_is_rejected(client, db, seed_users):
    user = db.query(User).filter(User.email == "parent@test.com").first()
    user.reset_code = "123456"
    user.reset_code_expires = to_naive_utc(utc_now() - timedelta(minutes=1))
    db.commit()

    resp = client.post("/api/auth/verify-reset-code", json={"email": "parent@test.com", "code": "123456"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid or expired reset code"


def test_forgot_password_unknown_email(client):
    assert client.post("/api/auth/forgot-password", json={"email": "ghost@test.com"}).status_code == 404


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"

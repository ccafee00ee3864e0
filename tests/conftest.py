import pytest
from datetime import date
from fastapi.testclient import TestClient

from playpulse.config import Settings
from playpulse.database import Database
from playpulse.main import create_app
from playpulse.models.user import User, Coach
from playpulse.models.institute import Institute
from playpulse.models.program import Program, ProgramCoach
from playpulse.services.auth_service import hash_password

TEST_DB_URL = "sqlite:///./test_playpulse.db"
PASSWORD = "secret123"


class FakeMailer:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent = []

    def send(self, to_email, subject, body):
        if self.fail:
            raise RuntimeError("SMTP down")
        self.sent.append((to_email, subject, body))
        return True

    def close(self):
        pass


class FakeGateway:
    def __init__(self, payment_url: str = "https://pay.example/checkout/abc", error=None):
        self.payment_url = payment_url
        self.error = error
        self.calls = []

    def initiate(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.payment_url

    def close(self):
        pass


database = Database(TEST_DB_URL)
mailer = FakeMailer()
gateway = FakeGateway()
app = create_app(
    Settings(DATABASE_URL=TEST_DB_URL),
    database=database,
    mailer=mailer,
    payment_gateway=gateway,
)


@pytest.fixture(autouse=True)
def setup_db():
    database.create_all()
    mailer.fail = False
    mailer.sent.clear()
    gateway.error = None
    gateway.calls.clear()
    yield
    database.drop_all()


@pytest.fixture
def db():
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def fake_mailer():
    return mailer


@pytest.fixture
def fake_gateway():
    return gateway


@pytest.fixture
def seed_users(db):
    users = {
        "owner": User(name="Owner", email="owner@test.com", password_hash=hash_password(PASSWORD), role="owner"),
        "owner2": User(name="Owner Two", email="owner2@test.com", password_hash=hash_password(PASSWORD), role="owner"),
        "parent": User(name="Parent", email="parent@test.com", password_hash=hash_password(PASSWORD), role="parent"),
        "parent2": User(name="Parent Two", email="parent2@test.com", password_hash=hash_password(PASSWORD), role="parent"),
        "coach": User(name="Coach", email="coach@test.com", password_hash=hash_password(PASSWORD), role="coach"),
        "coach2": User(name="Coach Two", email="coach2@test.com", password_hash=hash_password(PASSWORD), role="coach"),
    }
    for u in users.values():
        db.add(u)
    db.commit()
    for u in users.values():
        db.refresh(u)
    return users


@pytest.fixture
def seed_institute(db, seed_users):
    institute = Institute(
        owner_id=seed_users["owner"].user_id,
        name="Himalaya Sports Academy",
        address="Lalitpur, Nepal",
        sports_offered="Football, Swimming",
        facilities="Pool, Turf",
        contact_number="9800000000",
        images=[],
    )
    other = Institute(
        owner_id=seed_users["owner2"].user_id,
        name="Valley Tennis Club",
        address="Pokhara, Nepal",
        sports_offered="Tennis",
        facilities="Courts",
        contact_number="9811111111",
        images=[],
    )
    db.add_all([institute, other])
    db.commit()
    db.refresh(institute)
    db.refresh(other)
    return {"main": institute, "other": other}


@pytest.fixture
def seed_program(db, seed_users, seed_institute):
    institute = seed_institute["main"]
    coach = Coach(
        institute_id=institute.institute_id,
        user_id=seed_users["coach"].user_id,
        name="Coach",
        email="coach@test.com",
        qualification="UEFA C",
        experience="5 years",
        salary=50000,
    )
    coach2 = Coach(
        institute_id=institute.institute_id,
        user_id=seed_users["coach2"].user_id,
        name="Coach Two",
        email="coach2@test.com",
        qualification="Swim Level 2",
        experience="3 years",
        salary=40000,
    )
    program = Program(
        institute_id=institute.institute_id,
        name="Junior Football",
        sport="Football",
        pricing=5000,
        start_date=date(2024, 6, 1),
        duration="8 weeks",
        age_group="8-12",
    )
    other_program = Program(
        institute_id=institute.institute_id,
        name="Junior Swimming",
        sport="Swimming",
        pricing=3000,
        start_date=date(2024, 6, 1),
        duration="6 weeks",
        age_group="6-10",
    )
    db.add_all([coach, coach2, program, other_program])
    db.flush()
    db.add(ProgramCoach(program_id=program.program_id, coach_id=coach.coach_id))
    db.add(ProgramCoach(program_id=other_program.program_id, coach_id=coach2.coach_id))
    db.commit()
    for obj in (coach, coach2, program, other_program):
        db.refresh(obj)
    return {"program": program, "other_program": other_program, "coach": coach, "coach2": coach2}


def get_token(client, email: str, password: str = PASSWORD) -> str:
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["access_token"]


def auth_headers(client, email: str, password: str = PASSWORD) -> dict:
    return {"Authorization": f"Bearer {get_token(client, email, password)}"}


def enroll(client, headers, program_id: int, child_name: str = "Aarav") -> dict:
    resp = client.post("/api/enrollments", json={"child_name": child_name, "program_id": program_id}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()

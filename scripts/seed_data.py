"""Seed the database with demo data."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import date, timedelta

from playpulse.config import settings
from playpulse.database import Database
from playpulse.models.user import User, Coach
from playpulse.models.institute import Institute
from playpulse.models.program import Program, ProgramCoach
from playpulse.models.enrollment import Enrollment
from playpulse.models.schedule import ProgramSchedule
from playpulse.models.event import Event
from playpulse.services.auth_service import hash_password
from playpulse.utils.time_utils import to_naive_utc, utc_now

DEMO_PASSWORD = "password123"


def seed():
    database = Database(settings.DATABASE_URL)
    database.create_all()
    db = database.SessionLocal()
    try:
        if db.query(User).count() > 0:
            print("Database already seeded. Skipping.")
            return

        password_hash = hash_password(DEMO_PASSWORD)
        owner = User(name="Sujan Shrestha", email="owner@playpulse.local", password_hash=password_hash, role="owner")
        parent = User(name="Anita Gurung", email="parent@playpulse.local", password_hash=password_hash, role="parent")
        coach_users = [
            User(name="Bikash Rai", email="bikash@playpulse.local", password_hash=password_hash, role="coach"),
            User(name="Mina Tamang", email="mina@playpulse.local", password_hash=password_hash, role="coach"),
        ]
        db.add_all([owner, parent, *coach_users])
        db.flush()

        institute = Institute(
            owner_id=owner.user_id,
            name="Himalaya Sports Academy",
            address="Jawalakhel, Lalitpur",
            sports_offered="Football, Swimming",
            facilities="Full-size turf, 25m pool, changing rooms",
            contact_number="9800000000",
            estd_date=date(2015, 4, 14),
            total_staff=12,
            images=[],
        )
        db.add(institute)
        db.flush()

        coaches = [
            Coach(institute_id=institute.institute_id, user_id=coach_users[0].user_id, name=coach_users[0].name,
                  email=coach_users[0].email, qualification="AFC C Licence", experience="6 years", salary=55000),
            Coach(institute_id=institute.institute_id, user_id=coach_users[1].user_id, name=coach_users[1].name,
                  email=coach_users[1].email, qualification="Swim Coach Level 2", experience="4 years", salary=45000),
        ]
        db.add_all(coaches)
        db.flush()

        programs = [
            Program(institute_id=institute.institute_id, name="Junior Football", sport="Football", pricing=5000,
                    start_date=date.today(), duration="8 weeks", age_group="8-12",
                    description="Ball control, passing and small-sided games"),
            Program(institute_id=institute.institute_id, name="Learn to Swim", sport="Swimming", pricing=3500,
                    start_date=date.today(), duration="6 weeks", age_group="5-9"),
        ]
        db.add_all(programs)
        db.flush()
        for program, coach in zip(programs, coaches):
            db.add(ProgramCoach(program_id=program.program_id, coach_id=coach.coach_id))

        today = utc_now().replace(hour=10, minute=0, second=0, microsecond=0)
        for program, coach in zip(programs, coaches):
            entries = [
                {
                    "date": (today + timedelta(days=7 * week)).isoformat().replace("+00:00", "Z"),
                    "activity": f"Week {week + 1} session",
                    "time": "10am",
                }
                for week in range(4)
            ]
            db.add(ProgramSchedule(program_id=program.program_id, coach_id=coach.coach_id, duration=2, schedule=entries))

        db.add(Enrollment(parent_id=parent.user_id, child_name="Aarav Gurung", program_id=programs[0].program_id,
                          institute_id=institute.institute_id))
        db.add(Event(institute_id=institute.institute_id, name="Inter-school Cup", place="Dasharath Stadium",
                     event_type="tournament", date=to_naive_utc(today + timedelta(days=30)), images=[]))

        db.commit()
        print("Seed data inserted successfully.")
        print(f"  Demo accounts use password '{DEMO_PASSWORD}':")
        for user in (owner, parent, *coach_users):
            print(f"    {user.role:<6} {user.email}")
    finally:
        db.close()
        database.dispose()


if __name__ == "__main__":
    seed()

"""Role constants and ownership lookups shared by the service layer."""

from sqlalchemy.orm import Session

from playpulse.errors import ForbiddenError, NotFoundError
from playpulse.models.user import User, Coach
from playpulse.models.institute import Institute
from playpulse.models.program import ProgramCoach
from playpulse.models.enrollment import Enrollment


OWNER = "owner"
PARENT = "parent"
COACH = "coach"

ALL_ROLES = (OWNER, PARENT, COACH)
SIGNUP_ROLES = (OWNER, PARENT)


def is_owner(user: User) -> bool:
    return user.role == OWNER


def is_parent(user: User) -> bool:
    return user.role == PARENT


def is_coach(user: User) -> bool:
    return user.role == COACH


def get_owned_institute(db: Session, user: User) -> Institute:
    institute = db.query(Institute).filter(Institute.owner_id == user.user_id).first()
    if not institute:
        raise NotFoundError("Institute not found")
    return institute


def get_coach_profile(db: Session, user: User) -> Coach:
    coach = db.query(Coach).filter(Coach.user_id == user.user_id).first()
    if not coach:
        raise NotFoundError("Coach not found")
    return coach


def is_program_assigned(db: Session, coach: Coach, program_id: int) -> bool:
    return db.query(ProgramCoach).filter(
        ProgramCoach.coach_id == coach.coach_id,
        ProgramCoach.program_id == program_id,
    ).first() is not None


def ensure_program_assigned(db: Session, coach: Coach, program_id: int) -> None:
    if not is_program_assigned(db, coach, program_id):
        raise ForbiddenError("Program not assigned to this coach")


def get_owned_enrollment(db: Session, enrollment_id: int, user: User) -> Enrollment:
    enrollment = db.query(Enrollment).filter(Enrollment.enrollment_id == enrollment_id).first()
    if not enrollment:
        raise NotFoundError("Enrollment not found")
    if enrollment.parent_id != user.user_id:
        raise ForbiddenError("Unauthorized")
    return enrollment


def get_coached_enrollment(db: Session, enrollment_id: int, coach: Coach) -> Enrollment:
    enrollment = db.query(Enrollment).filter(Enrollment.enrollment_id == enrollment_id).first()
    if not enrollment:
        raise NotFoundError("Enrollment not found")
    if not is_program_assigned(db, coach, enrollment.program_id):
        raise ForbiddenError("Enrollment is not in a program assigned to this coach")
    return enrollment

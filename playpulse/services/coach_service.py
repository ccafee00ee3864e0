"""Coach service layer. Owner-managed coach accounts and the coach dashboard."""

import logging
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from playpulse.errors import ConflictError, NotFoundError, ServerError
from playpulse.models.attendance import Attendance, Progress
from playpulse.models.chat import ChatMessage
from playpulse.models.enrollment import Enrollment
from playpulse.models.gamification import Gamification
from playpulse.models.material import TrainingMaterial
from playpulse.models.program import Program
from playpulse.models.user import Coach, User
from playpulse.services.auth_service import get_user_by_email, hash_password, normalize_email
from playpulse.services.notification_service import get_notifications
from playpulse.services.schedule_service import list_coach_schedules
from playpulse.utils.permissions import COACH, get_coach_profile, get_owned_institute

logger = logging.getLogger(__name__)


def list_coaches(db: Session, owner: User) -> List[Coach]:
    institute = get_owned_institute(db, owner)
    return (
        db.query(Coach)
        .filter(Coach.institute_id == institute.institute_id)
        .order_by(Coach.coach_id.asc())
        .all()
    )


def get_institute_coach(db: Session, owner: User, coach_id: int) -> Coach:
    institute = get_owned_institute(db, owner)
    coach = db.query(Coach).filter(
        Coach.coach_id == coach_id,
        Coach.institute_id == institute.institute_id,
    ).first()
    if not coach:
        raise NotFoundError("Coach not found")
    return coach


def create_coach(db: Session, owner: User, data, image_url: Optional[str] = None) -> Coach:
    """Create the coach login and the coach profile in one transaction.

    Either both rows are committed or neither is. A unique-field collision is a
    ``ConflictError``; any other store failure is a ``ServerError``.
    """
    institute = get_owned_institute(db, owner)
    email = normalize_email(data.email)
    if get_user_by_email(db, email):
        raise ConflictError("Email already exists")

    try:
        user = User(
            name=data.name,
            email=email,
            username=data.username,
            password_hash=hash_password(data.password),
            role=COACH,
            image=image_url,
        )
        db.add(user)
        db.flush()

        coach = Coach(
            institute_id=institute.institute_id,
            user_id=user.user_id,
            name=data.name,
            email=email,
            qualification=data.qualification,
            achievements=data.achievements,
            experience=data.experience,
            salary=data.salary,
            contact_number=data.contact_number,
            status="active",
            image=image_url,
        )
        db.add(coach)
        db.flush()
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("[coach] create rolled back for %s: %s", email, exc.orig)
        raise ConflictError("Email already exists")
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("[coach] create rolled back for %s: %s", email, exc)
        raise ServerError("Server error", str(exc))

    db.refresh(coach)
    logger.info("[coach] created coach %s for institute %s", coach.coach_id, institute.institute_id)
    return coach


def update_coach(db: Session, owner: User, coach_id: int, data: dict, image_url: Optional[str] = None) -> Coach:
    coach = get_institute_coach(db, owner, coach_id)
    password = data.pop("password", None)
    for key, value in data.items():
        if value is not None:
            setattr(coach, key, value)
    if image_url:
        coach.image = image_url
    if coach.user:
        if data.get("name"):
            coach.user.name = data["name"]
        if password:
            coach.user.password_hash = hash_password(password)
        if image_url:
            coach.user.image = image_url
    db.commit()
    db.refresh(coach)
    return coach


def toggle_status(db: Session, owner: User, coach_id: int) -> Coach:
    coach = get_institute_coach(db, owner, coach_id)
    coach.status = "inactive" if coach.status == "active" else "active"
    db.commit()
    db.refresh(coach)
    logger.info("[coach] coach %s is now %s", coach.coach_id, coach.status)
    return coach


def list_assigned_programs(db: Session, coach_user: User) -> List[Program]:
    coach = get_coach_profile(db, coach_user)
    program_ids = [a.program_id for a in coach.program_assignments]
    if not program_ids:
        return []
    return (
        db.query(Program)
        .filter(Program.program_id.in_(program_ids))
        .order_by(Program.program_id.asc())
        .all()
    )


def get_dashboard(db: Session, coach_user: User) -> dict:
    """Everything the coach home screen shows, scoped to the coach's assigned programs.

    Chat includes messages the coach sent or received and any message tied to
    one of the coach's enrollments. Rewards include the coach's program rewards
    and the point ledgers of the enrolled families.
    """
    coach = get_coach_profile(db, coach_user)
    program_ids = [a.program_id for a in coach.program_assignments]
    enrollments = []
    if program_ids:
        enrollments = (
            db.query(Enrollment)
            .filter(Enrollment.program_id.in_(program_ids))
            .order_by(Enrollment.created_at.desc(), Enrollment.enrollment_id.desc())
            .all()
        )
    enrollment_ids = [e.enrollment_id for e in enrollments]
    parent_ids = sorted({e.parent_id for e in enrollments})

    attendance = []
    if enrollment_ids:
        attendance = (
            db.query(Attendance)
            .filter(Attendance.enrollment_id.in_(enrollment_ids))
            .order_by(Attendance.date.asc(), Attendance.attendance_id.asc())
            .all()
        )

    chat_filter = [ChatMessage.sender_id == coach_user.user_id, ChatMessage.receiver_id == coach_user.user_id]
    if enrollment_ids:
        chat_filter.append(ChatMessage.enrollment_id.in_(enrollment_ids))
    reward_filter = [Gamification.coach_id == coach.coach_id]
    if parent_ids:
        reward_filter.append(Gamification.user_id.in_(parent_ids))

    return {
        "coach": coach,
        "enrollments": enrollments,
        "notifications": get_notifications(db, coach_user.user_id, unread_only=True),
        "progress": (
            db.query(Progress)
            .filter(Progress.coach_id == coach.coach_id)
            .order_by(Progress.date.asc(), Progress.progress_id.asc())
            .all()
        ),
        "attendance": attendance,
        "materials": (
            db.query(TrainingMaterial)
            .filter(TrainingMaterial.coach_id == coach.coach_id)
            .order_by(TrainingMaterial.created_at.desc(), TrainingMaterial.material_id.desc())
            .all()
        ),
        "schedules": list_coach_schedules(db, coach_user),
        "chat_messages": (
            db.query(ChatMessage)
            .filter(or_(*chat_filter))
            .order_by(ChatMessage.created_at.asc(), ChatMessage.message_id.asc())
            .all()
        ),
        "rewards": (
            db.query(Gamification)
            .filter(or_(*reward_filter))
            .order_by(Gamification.gamification_id.asc())
            .all()
        ),
    }

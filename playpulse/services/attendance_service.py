"""Attendance and progress service layer."""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from playpulse.config import settings
from playpulse.errors import DuplicateAttendance, ServerError
from playpulse.models.attendance import Attendance, Progress
from playpulse.models.user import User
from playpulse.services.gamification_service import award_points
from playpulse.utils.permissions import get_coach_profile, get_coached_enrollment, get_owned_enrollment
from playpulse.utils.time_utils import to_naive_utc, utc_day_bounds

logger = logging.getLogger(__name__)


def record_attendance(db: Session, coach_user: User, enrollment_id: int, when: datetime, status: str) -> Attendance:
    """Record one attendance per enrollment per UTC day.

    A ``present`` record awards ``ATTENDANCE_POINTS`` to the parent's ledger in
    the same commit. The (enrollment, day) unique constraint rejects a
    concurrent duplicate, so points are never awarded twice for one day.
    """
    coach = get_coach_profile(db, coach_user)
    enrollment = get_coached_enrollment(db, enrollment_id, coach)

    day_start, _ = utc_day_bounds(when)
    day = day_start.date()
    exists = db.query(Attendance).filter(
        Attendance.enrollment_id == enrollment.enrollment_id,
        Attendance.attendance_day == day,
    ).first()
    if exists:
        raise DuplicateAttendance()

    record = Attendance(
        enrollment_id=enrollment.enrollment_id,
        date=to_naive_utc(day_start),
        attendance_day=day,
        status=status,
    )
    db.add(record)
    try:
        db.flush()
        if status == "present":
            award_points(db, enrollment.parent_id, settings.ATTENDANCE_POINTS)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateAttendance()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("[attendance] failed to record for enrollment %s: %s", enrollment_id, exc)
        raise ServerError("Server error", str(exc))

    db.refresh(record)
    logger.info("[attendance] %s recorded for enrollment %s on %s", status, enrollment_id, day)
    return record


def list_attendance(db: Session, parent: User, enrollment_id: int) -> List[Attendance]:
    enrollment = get_owned_enrollment(db, enrollment_id, parent)
    return (
        db.query(Attendance)
        .filter(Attendance.enrollment_id == enrollment.enrollment_id)
        .order_by(Attendance.date.asc())
        .all()
    )


def record_progress(
    db: Session,
    coach_user: User,
    enrollment_id: int,
    when: datetime,
    metrics: float,
    notes: Optional[str],
) -> Progress:
    coach = get_coach_profile(db, coach_user)
    enrollment = get_coached_enrollment(db, enrollment_id, coach)
    progress = Progress(
        enrollment_id=enrollment.enrollment_id,
        coach_id=coach.coach_id,
        date=to_naive_utc(when),
        metrics=metrics,
        notes=notes,
    )
    db.add(progress)
    db.commit()
    db.refresh(progress)
    return progress


def list_progress(db: Session, parent: User, enrollment_id: int) -> List[Progress]:
    enrollment = get_owned_enrollment(db, enrollment_id, parent)
    return (
        db.query(Progress)
        .filter(Progress.enrollment_id == enrollment.enrollment_id)
        .order_by(Progress.date.asc())
        .all()
    )

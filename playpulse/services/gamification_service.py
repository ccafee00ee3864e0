"""Gamification service layer. Per-user point ledgers and per-program rewards."""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from playpulse.errors import NotFoundError, ValidationError
from playpulse.models.gamification import Gamification
from playpulse.models.user import User
from playpulse.utils.permissions import ensure_program_assigned, get_coach_profile

logger = logging.getLogger(__name__)


def find_ledger(db: Session, user_id: int) -> Optional[Gamification]:
    return db.query(Gamification).filter(Gamification.user_id == user_id).first()


def get_ledger(db: Session, user_id: int) -> dict:
    ledger = find_ledger(db, user_id)
    if not ledger:
        return {"user_id": user_id, "points": 0, "badges": []}
    return ledger


def award_points(db: Session, user_id: int, points: int) -> None:
    """Add points to a user's ledger inside the caller's transaction.

    The increment is a single UPDATE so concurrent awards do not lose writes.
    When no ledger exists yet one is inserted; the unique ``user_id`` makes a
    concurrent first insert fail at commit instead of creating a second row.
    """
    updated = (
        db.query(Gamification)
        .filter(Gamification.user_id == user_id)
        .update({Gamification.points: Gamification.points + points}, synchronize_session=False)
    )
    if not updated:
        db.add(Gamification(user_id=user_id, points=points, badges=[]))
    db.flush()


def adjust_ledger(db: Session, coach_user: User, user_id: int, points: int, badge: Optional[str]) -> Gamification:
    get_coach_profile(db, coach_user)
    if not points and not badge:
        raise ValidationError("Provide points or a badge")
    if not db.query(User).filter(User.user_id == user_id).first():
        raise NotFoundError("User not found")

    ledger = find_ledger(db, user_id)
    if not ledger:
        ledger = Gamification(user_id=user_id, points=0, badges=[])
        db.add(ledger)
    ledger.points = (ledger.points or 0) + points
    if badge and badge not in (ledger.badges or []):
        # reassign so the JSON column is flagged dirty
        ledger.badges = list(ledger.badges or []) + [badge]
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        ledger = find_ledger(db, user_id)
        ledger.points = (ledger.points or 0) + points
        if badge and badge not in (ledger.badges or []):
            ledger.badges = list(ledger.badges or []) + [badge]
        db.commit()
    db.refresh(ledger)
    logger.info("[gamification] ledger of user %s adjusted by %s", user_id, points)
    return ledger


def set_reward(db: Session, coach_user: User, program_id: int, reward: str, points_required: int) -> Gamification:
    coach = get_coach_profile(db, coach_user)
    ensure_program_assigned(db, coach, program_id)

    def _find():
        return db.query(Gamification).filter(
            Gamification.program_id == program_id,
            Gamification.coach_id == coach.coach_id,
            Gamification.user_id.is_(None),
        ).first()

    row = _find()
    if not row:
        row = Gamification(program_id=program_id, coach_id=coach.coach_id, points=0, badges=[])
        db.add(row)
    row.reward = reward
    row.points_required = points_required
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        row = _find()
        row.reward = reward
        row.points_required = points_required
        db.commit()
    db.refresh(row)
    return row

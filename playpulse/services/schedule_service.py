"""Schedule service layer. One schedule per (program, coach), find-or-create on write."""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from playpulse.models.schedule import ProgramSchedule
from playpulse.models.user import User
from playpulse.utils.permissions import ensure_program_assigned, get_coach_profile
from playpulse.utils.time_utils import as_utc, to_naive_utc

logger = logging.getLogger(__name__)


def _serialize_entries(entries) -> list:
    return [
        {
            "date": as_utc(entry.date).isoformat().replace("+00:00", "Z"),
            "activity": entry.activity,
            "time": entry.time or "TBD",
        }
        for entry in entries
    ]


def _find(db: Session, program_id: int, coach_id: int) -> ProgramSchedule | None:
    return db.query(ProgramSchedule).filter(
        ProgramSchedule.program_id == program_id,
        ProgramSchedule.coach_id == coach_id,
    ).first()


def _apply(row: ProgramSchedule, data, entries: list) -> None:
    row.duration = data.duration
    row.schedule = entries
    if data.start_date is not None:
        row.start_date = to_naive_utc(data.start_date)


def upsert_schedule(db: Session, coach_user: User, data) -> ProgramSchedule:
    coach = get_coach_profile(db, coach_user)
    ensure_program_assigned(db, coach, data.program_id)
    entries = _serialize_entries(data.schedule)

    row = _find(db, data.program_id, coach.coach_id)
    created = row is None
    if created:
        row = ProgramSchedule(program_id=data.program_id, coach_id=coach.coach_id)
        db.add(row)
    _apply(row, data, entries)
    try:
        db.commit()
    except IntegrityError:
        # another request created the row first; update that one instead
        db.rollback()
        row = _find(db, data.program_id, coach.coach_id)
        _apply(row, data, entries)
        db.commit()
        created = False
    db.refresh(row)
    logger.info(
        "[schedule] %s schedule %s (program %s, %s entries)",
        "created" if created else "updated", row.schedule_id, data.program_id, len(entries),
    )
    return row


def list_coach_schedules(db: Session, coach_user: User) -> List[ProgramSchedule]:
    coach = get_coach_profile(db, coach_user)
    return (
        db.query(ProgramSchedule)
        .filter(ProgramSchedule.coach_id == coach.coach_id)
        .order_by(ProgramSchedule.schedule_id.asc())
        .all()
    )

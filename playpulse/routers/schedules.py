"""Schedules API router. Coach-owned program schedules."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from playpulse.database import get_db
from playpulse.middleware.auth_middleware import require_roles
from playpulse.models.user import User
from playpulse.schemas.schedule import ProgramScheduleOut, ProgramScheduleUpsert
from playpulse.services import schedule_service
from playpulse.utils.permissions import COACH

router = APIRouter(prefix="/api/schedules", tags=["schedules"])


@router.post("", response_model=ProgramScheduleOut)
def upsert_schedule(
    data: ProgramScheduleUpsert,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(COACH)),
):
    return schedule_service.upsert_schedule(db, current_user, data)


@router.get("", response_model=List[ProgramScheduleOut])
def list_schedules(db: Session = Depends(get_db), current_user: User = Depends(require_roles(COACH))):
    return schedule_service.list_coach_schedules(db, current_user)

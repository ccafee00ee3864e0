"""Calendar API router."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from playpulse.database import get_db
from playpulse.middleware.auth_middleware import require_roles
from playpulse.models.user import User
from playpulse.schemas.schedule import CalendarEventOut
from playpulse.services import calendar_service
from playpulse.utils.permissions import ALL_ROLES

router = APIRouter(prefix="/api/calendar", tags=["calendar"])


@router.get("/events", response_model=List[CalendarEventOut])
def list_calendar_events(db: Session = Depends(get_db), current_user: User = Depends(require_roles(*ALL_ROLES))):
    return calendar_service.get_calendar_events(db, current_user)

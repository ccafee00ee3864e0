"""Progress API router."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from playpulse.database import get_db
from playpulse.middleware.auth_middleware import require_roles
from playpulse.models.user import User
from playpulse.schemas.attendance import ProgressCreate, ProgressOut
from playpulse.services import attendance_service
from playpulse.utils.permissions import COACH, PARENT

router = APIRouter(prefix="/api/progress", tags=["progress"])


@router.post("", response_model=ProgressOut, status_code=status.HTTP_201_CREATED)
def record_progress(
    data: ProgressCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(COACH)),
):
    return attendance_service.record_progress(
        db, current_user, data.enrollment_id, data.date, data.metrics, data.notes,
    )


@router.get("/{enrollment_id}", response_model=List[ProgressOut])
def list_progress(
    enrollment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(PARENT)),
):
    return attendance_service.list_progress(db, current_user, enrollment_id)

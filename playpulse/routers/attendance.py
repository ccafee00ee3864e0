"""Attendance API router."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from playpulse.database import get_db
from playpulse.middleware.auth_middleware import require_roles
from playpulse.models.user import User
from playpulse.schemas.attendance import AttendanceCreate, AttendanceOut
from playpulse.services import attendance_service
from playpulse.utils.permissions import COACH, PARENT

router = APIRouter(prefix="/api/attendance", tags=["attendance"])


@router.post("", response_model=AttendanceOut, status_code=status.HTTP_201_CREATED)
def record_attendance(
    data: AttendanceCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(COACH)),
):
    return attendance_service.record_attendance(db, current_user, data.enrollment_id, data.date, data.status)


@router.get("/{enrollment_id}", response_model=List[AttendanceOut])
def list_attendance(
    enrollment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(PARENT)),
):
    return attendance_service.list_attendance(db, current_user, enrollment_id)

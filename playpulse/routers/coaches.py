"""Coaches API router. Owner-side coach management and the coach dashboard."""

from typing import List

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session

from playpulse.config import settings
from playpulse.database import get_db
from playpulse.middleware.auth_middleware import require_roles
from playpulse.models.user import User
from playpulse.schemas.coach import CoachCreate, CoachDashboardOut, CoachOut, CoachUpdate
from playpulse.services import coach_service
from playpulse.utils.helpers import save_upload
from playpulse.utils.permissions import COACH, OWNER

router = APIRouter(prefix="/api/coaches", tags=["coaches"])


@router.get("", response_model=List[CoachOut])
def list_coaches(db: Session = Depends(get_db), current_user: User = Depends(require_roles(OWNER))):
    return coach_service.list_coaches(db, current_user)


@router.get("/me/dashboard", response_model=CoachDashboardOut)
def get_my_dashboard(db: Session = Depends(get_db), current_user: User = Depends(require_roles(COACH))):
    return coach_service.get_dashboard(db, current_user)


@router.post("", response_model=CoachOut, status_code=status.HTTP_201_CREATED)
def create_coach(
    data: CoachCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(OWNER)),
):
    return coach_service.create_coach(db, current_user, data)


@router.put("/{coach_id}", response_model=CoachOut)
def update_coach(
    coach_id: int,
    data: CoachUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(OWNER)),
):
    return coach_service.update_coach(db, current_user, coach_id, data.model_dump(exclude_unset=True))


@router.put("/{coach_id}/toggle-status", response_model=CoachOut)
def toggle_coach_status(
    coach_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(OWNER)),
):
    return coach_service.toggle_status(db, current_user, coach_id)


@router.post("/{coach_id}/image", response_model=CoachOut)
async def upload_coach_image(
    coach_id: int,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(OWNER)),
):
    coach_service.get_institute_coach(db, current_user, coach_id)
    stored = await save_upload(
        file,
        subfolder="coaches",
        allowed_extensions=settings.ALLOWED_IMAGE_EXTENSIONS,
        max_size=settings.MAX_IMAGE_UPLOAD_SIZE,
    )
    return coach_service.update_coach(db, current_user, coach_id, {}, image_url=stored["url"])

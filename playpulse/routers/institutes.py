"""Institutes API router. Owner profile and institute discovery."""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from playpulse.config import settings
from playpulse.database import get_db
from playpulse.errors import ValidationError
from playpulse.middleware.auth_middleware import get_current_user, require_roles
from playpulse.models.user import User
from playpulse.schemas.institute import InstituteOut, InstituteUpsert
from playpulse.schemas.program import ProgramOut
from playpulse.services import institute_service
from playpulse.utils.helpers import save_upload
from playpulse.utils.permissions import OWNER

router = APIRouter(prefix="/api/institutes", tags=["institutes"])


@router.get("", response_model=List[InstituteOut])
def search_institutes(
    location: Optional[str] = None,
    sport: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return institute_service.search(db, location=location, sport=sport)


@router.get("/mine", response_model=InstituteOut)
def get_my_institute(db: Session = Depends(get_db), current_user: User = Depends(require_roles(OWNER))):
    return institute_service.get_profile(db, current_user)


@router.put("/mine", response_model=InstituteOut)
def upsert_my_institute(
    data: InstituteUpsert,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(OWNER)),
):
    return institute_service.upsert_profile(db, current_user, data.model_dump())


@router.post("/mine/images", response_model=InstituteOut)
async def upload_institute_images(
    files: List[UploadFile] = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(OWNER)),
):
    if len(files) > settings.MAX_INSTITUTE_IMAGES:
        raise ValidationError(f"At most {settings.MAX_INSTITUTE_IMAGES} images per upload")
    institute = institute_service.get_profile(db, current_user)
    if len(institute.images or []) + len(files) > settings.MAX_INSTITUTE_IMAGES:
        raise ValidationError(f"An institute can have at most {settings.MAX_INSTITUTE_IMAGES} images")
    urls = []
    for file in files:
        stored = await save_upload(
            file,
            subfolder="institutes",
            allowed_extensions=settings.ALLOWED_IMAGE_EXTENSIONS,
            max_size=settings.MAX_IMAGE_UPLOAD_SIZE,
        )
        urls.append(stored["url"])
    return institute_service.add_images(db, current_user, urls)


@router.get("/{institute_id}/programs", response_model=List[ProgramOut])
def list_institute_programs(
    institute_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return institute_service.list_programs(db, institute_id)

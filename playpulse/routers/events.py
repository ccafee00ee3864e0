"""Events API router."""

from datetime import datetime
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from playpulse.config import settings
from playpulse.database import get_db
from playpulse.errors import ValidationError
from playpulse.middleware.auth_middleware import require_roles
from playpulse.models.user import User
from playpulse.schemas.event import EventEnrollmentCreate, EventEnrollmentOut, EventOut
from playpulse.services import event_service
from playpulse.utils.dependencies import get_mailer
from playpulse.utils.helpers import save_upload
from playpulse.utils.permissions import OWNER, PARENT

router = APIRouter(prefix="/api/events", tags=["events"])


async def _store_images(images: Optional[List[UploadFile]]) -> List[str]:
    files = [f for f in (images or []) if f.filename]
    if len(files) > settings.MAX_EVENT_IMAGES:
        raise ValidationError(f"At most {settings.MAX_EVENT_IMAGES} images per event")
    urls = []
    for file in files:
        stored = await save_upload(
            file,
            subfolder="events",
            allowed_extensions=settings.ALLOWED_IMAGE_EXTENSIONS,
            max_size=settings.MAX_IMAGE_UPLOAD_SIZE,
        )
        urls.append(stored["url"])
    return urls


@router.get("", response_model=List[EventOut])
def list_upcoming_events(db: Session = Depends(get_db), current_user: User = Depends(require_roles(PARENT))):
    return event_service.list_upcoming_events(db)


@router.post("", response_model=EventOut, status_code=status.HTTP_201_CREATED)
async def create_event(
    name: str = Form(..., min_length=1),
    place: str = Form(..., min_length=1),
    event_type: str = Form(..., min_length=1),
    date: datetime = Form(...),
    description: Optional[str] = Form(None),
    event_status: Literal["upcoming", "completed"] = Form("upcoming", alias="status"),
    images: Optional[List[UploadFile]] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(OWNER)),
):
    data = {
        "name": name,
        "place": place,
        "event_type": event_type,
        "date": date,
        "description": description,
        "status": event_status,
    }
    urls = await _store_images(images)
    return event_service.create_event(db, current_user, data, urls)


@router.get("/mine", response_model=List[EventOut])
def list_my_events(db: Session = Depends(get_db), current_user: User = Depends(require_roles(OWNER))):
    return event_service.list_institute_events(db, current_user)


@router.put("/{event_id}", response_model=EventOut)
async def update_event(
    event_id: int,
    name: Optional[str] = Form(None, min_length=1),
    place: Optional[str] = Form(None, min_length=1),
    event_type: Optional[str] = Form(None, min_length=1),
    date: Optional[datetime] = Form(None),
    description: Optional[str] = Form(None),
    event_status: Optional[Literal["upcoming", "completed"]] = Form(None, alias="status"),
    images: Optional[List[UploadFile]] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(OWNER)),
):
    event_service.get_institute_event(db, current_user, event_id)
    data = {
        "name": name,
        "place": place,
        "event_type": event_type,
        "date": date,
        "description": description,
        "status": event_status,
    }
    urls = await _store_images(images)
    return event_service.update_event(db, current_user, event_id, data, urls)


@router.delete("/{event_id}")
def delete_event(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(OWNER)),
):
    event_service.delete_event(db, current_user, event_id)
    return {"message": "Event deleted"}


@router.get("/{event_id}/enrollments", response_model=List[EventEnrollmentOut])
def list_event_enrollments(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(OWNER)),
):
    return event_service.list_event_enrollments(db, current_user, event_id)


@router.post("/enroll", response_model=EventEnrollmentOut, status_code=status.HTTP_201_CREATED)
def enroll_in_event(
    data: EventEnrollmentCreate,
    db: Session = Depends(get_db),
    mailer=Depends(get_mailer),
    current_user: User = Depends(require_roles(PARENT)),
):
    return event_service.enroll(db, mailer, current_user, data)

"""Notifications API router."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from playpulse.database import get_db
from playpulse.middleware.auth_middleware import get_current_user, require_roles
from playpulse.models.user import User
from playpulse.schemas.notification import NotificationCreate, NotificationOut
from playpulse.services import notification_service
from playpulse.utils.dependencies import get_mailer
from playpulse.utils.permissions import COACH

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=List[NotificationOut])
def list_notifications(
    unread_only: bool = False,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return notification_service.get_notifications(db, current_user.user_id, unread_only)


@router.post("", response_model=NotificationOut, status_code=status.HTTP_201_CREATED)
def send_notification(
    data: NotificationCreate,
    db: Session = Depends(get_db),
    mailer=Depends(get_mailer),
    current_user: User = Depends(require_roles(COACH)),
):
    return notification_service.create_notification(db, mailer, data)


@router.patch("/{noti_id}/read", response_model=NotificationOut)
def mark_read(noti_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return notification_service.mark_read(db, noti_id, current_user.user_id)


@router.post("/read-all")
def mark_all_read(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    count = notification_service.mark_all_read(db, current_user.user_id)
    return {"message": "All notifications marked as read", "updated": count}

"""Notification service layer. In-app notifications plus best-effort email copies."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from playpulse.errors import NotFoundError
from playpulse.models.notification import Notification
from playpulse.models.user import User

logger = logging.getLogger(__name__)


def add_notification(
    db: Session,
    user_id: int,
    noti_type: str,
    message: str,
    details: Optional[str] = None,
) -> Notification:
    """Stage a notification in the caller's transaction. The caller commits."""
    noti = Notification(
        user_id=user_id,
        noti_type=noti_type,
        message=message,
        details=details,
        is_read=False,
    )
    db.add(noti)
    return noti


def deliver_email(db: Session, mailer, noti: Notification) -> bool:
    """Send the email copy of a committed notification. Never raises."""
    if mailer is None:
        return False
    user = db.query(User).filter(User.user_id == noti.user_id).first()
    if not user or not user.email:
        logger.warning("[notification] no email address for user %s", noti.user_id)
        return False
    subject = f"New Notification: {noti.noti_type.upper()}"
    body = f"{noti.message}\n\nDetails: {noti.details or 'None'}"
    try:
        return mailer.send(user.email, subject, body)
    except Exception:
        logger.exception("[notification] email delivery failed for notification %s", noti.noti_id)
        return False


def create_notification(db: Session, mailer, data) -> Notification:
    recipient = db.query(User).filter(User.user_id == data.user_id).first()
    if not recipient:
        raise NotFoundError("User not found")
    noti = add_notification(db, data.user_id, data.noti_type, data.message, data.details)
    db.commit()
    db.refresh(noti)
    deliver_email(db, mailer, noti)
    return noti


def get_notifications(db: Session, user_id: int, unread_only: bool = False) -> List[Notification]:
    q = db.query(Notification).filter(Notification.user_id == user_id)
    if unread_only:
        q = q.filter(Notification.is_read == False)  # noqa: E712
    return q.order_by(Notification.created_at.desc(), Notification.noti_id.desc()).limit(50).all()


def mark_read(db: Session, noti_id: int, user_id: int) -> Notification:
    noti = db.query(Notification).filter(
        Notification.noti_id == noti_id,
        Notification.user_id == user_id,
    ).first()
    if not noti:
        raise NotFoundError("Notification not found")
    noti.is_read = True
    db.commit()
    db.refresh(noti)
    return noti


def mark_all_read(db: Session, user_id: int) -> int:
    updated = db.query(Notification).filter(
        Notification.user_id == user_id,
        Notification.is_read == False,  # noqa: E712
    ).update({"is_read": True})
    db.commit()
    return updated

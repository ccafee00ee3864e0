"""Chat service layer. Direct messages between parents and coaches."""

import logging
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from playpulse.errors import NotFoundError
from playpulse.models.chat import ChatMessage
from playpulse.models.enrollment import Enrollment
from playpulse.models.user import User
from playpulse.utils.permissions import COACH, PARENT

logger = logging.getLogger(__name__)

# sender role -> role the receiver must have
COUNTERPART_ROLE = {PARENT: COACH, COACH: PARENT}


def send_message(
    db: Session,
    sender: User,
    receiver_id: int,
    content: str,
    enrollment_id: Optional[int] = None,
) -> ChatMessage:
    expected_role = COUNTERPART_ROLE.get(sender.role)
    receiver = db.query(User).filter(User.user_id == receiver_id).first()
    if not receiver or receiver.role != expected_role:
        raise NotFoundError(f"Receiver not found or not a {expected_role}")

    if enrollment_id is not None:
        if not db.query(Enrollment).filter(Enrollment.enrollment_id == enrollment_id).first():
            raise NotFoundError("Enrollment not found")

    message = ChatMessage(
        sender_id=sender.user_id,
        receiver_id=receiver.user_id,
        content=content,
        enrollment_id=enrollment_id,
    )
    db.add(message)
    db.commit()
    db.refresh(message)
    logger.info("[chat] message %s from %s to %s", message.message_id, sender.user_id, receiver.user_id)
    return message


def list_messages(db: Session, user: User) -> List[ChatMessage]:
    return (
        db.query(ChatMessage)
        .filter(or_(ChatMessage.sender_id == user.user_id, ChatMessage.receiver_id == user.user_id))
        .order_by(ChatMessage.created_at.asc(), ChatMessage.message_id.asc())
        .all()
    )

"""Chat API router."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from playpulse.database import get_db
from playpulse.middleware.auth_middleware import require_roles
from playpulse.models.user import User
from playpulse.schemas.chat import ChatMessageCreate, ChatMessageOut
from playpulse.services import chat_service
from playpulse.utils.permissions import COACH, PARENT

router = APIRouter(prefix="/api/chat", tags=["chat"])


@router.post("/messages", response_model=ChatMessageOut, status_code=status.HTTP_201_CREATED)
def send_message(
    data: ChatMessageCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(PARENT, COACH)),
):
    return chat_service.send_message(db, current_user, data.receiver_id, data.content, data.enrollment_id)


@router.get("/messages", response_model=List[ChatMessageOut])
def list_messages(db: Session = Depends(get_db), current_user: User = Depends(require_roles(PARENT, COACH))):
    return chat_service.list_messages(db, current_user)

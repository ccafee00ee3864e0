"""Pydantic contracts for parent/coach chat."""

from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime


class ChatMessageCreate(BaseModel):
    receiver_id: int
    content: str
    enrollment_id: Optional[int] = None

    @field_validator("content")
    @classmethod
    def _strip_content(cls, value: str) -> str:
        text = (value or "").strip()
        if not text:
            raise ValueError("content must not be empty")
        return text


class ChatMessageOut(BaseModel):
    message_id: int
    sender_id: int
    sender_name: Optional[str] = None
    receiver_id: int
    receiver_name: Optional[str] = None
    content: str
    enrollment_id: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

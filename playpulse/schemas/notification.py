"""Pydantic contracts for in-app notifications."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class NotificationCreate(BaseModel):
    user_id: int
    noti_type: str = Field("coach", min_length=1)
    message: str = Field(..., min_length=1)
    details: Optional[str] = None


class NotificationOut(BaseModel):
    noti_id: int
    user_id: int
    noti_type: str
    message: str
    details: Optional[str]
    is_read: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

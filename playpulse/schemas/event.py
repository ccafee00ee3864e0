"""Pydantic contracts for institute events."""

from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from datetime import datetime


class EventCreate(BaseModel):
    name: str
    place: str
    event_type: str
    date: datetime
    description: Optional[str] = None
    status: Literal["upcoming", "completed"] = "upcoming"


class EventOut(EventCreate):
    event_id: int
    institute_id: int
    images: Optional[List[str]] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class EventEnrollmentCreate(BaseModel):
    event_id: int
    name: str = Field(..., min_length=1)
    contact_number: str = Field(..., min_length=1)
    age: int = Field(..., ge=0)


class EventEnrollmentOut(BaseModel):
    event_enrollment_id: int
    parent_id: int
    event_id: int
    name: str
    contact_number: str
    age: int
    status: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

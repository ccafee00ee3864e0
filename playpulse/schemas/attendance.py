"""Pydantic contracts for attendance and progress records."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


class AttendanceCreate(BaseModel):
    enrollment_id: int
    date: datetime
    status: Literal["present", "absent"] = "present"


class AttendanceOut(BaseModel):
    attendance_id: int
    enrollment_id: int
    date: datetime
    status: str

    model_config = {"from_attributes": True}


class ProgressCreate(BaseModel):
    enrollment_id: int
    date: datetime
    metrics: float = Field(..., ge=0, le=100)
    notes: Optional[str] = None


class ProgressOut(BaseModel):
    progress_id: int
    enrollment_id: int
    coach_id: int
    coach_name: Optional[str] = None
    date: datetime
    metrics: float
    notes: Optional[str] = None

    model_config = {"from_attributes": True}

"""Pydantic contracts for coach schedules and derived calendar events."""

from pydantic import BaseModel, Field, field_validator
from typing import Any, List, Optional
from datetime import datetime

from playpulse.utils.time_utils import as_utc


class ScheduleEntryIn(BaseModel):
    date: datetime
    activity: str = Field(..., min_length=1)
    time: str = "TBD"

    @field_validator("date")
    @classmethod
    def _date_in_utc_range(cls, value: datetime) -> datetime:
        try:
            return as_utc(value)
        except OverflowError:
            raise ValueError("date is out of range in UTC")


class ProgramScheduleUpsert(BaseModel):
    program_id: int
    duration: float = Field(2, ge=0, le=24)
    schedule: List[ScheduleEntryIn] = []
    start_date: Optional[datetime] = None


class ProgramScheduleOut(BaseModel):
    schedule_id: int
    program_id: int
    coach_id: int
    duration: float
    start_date: Optional[datetime] = None
    schedule: List[Any]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class CalendarEventOut(BaseModel):
    id: str
    title: str
    start: datetime
    end: datetime
    event_type: str
    program_id: int
    program_name: str
    coach_name: str
    time: str
    activity: str
    color: str

"""Pydantic contracts for programs and their coach assignments."""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date, datetime


class CoachAssignmentIn(BaseModel):
    coach_id: int
    role: str = "Primary Coach"


class CoachAssignmentOut(CoachAssignmentIn):
    coach_name: Optional[str] = None

    model_config = {"from_attributes": True}


class ProgramBase(BaseModel):
    name: str
    sport: str
    pricing: float = Field(..., ge=0)
    start_date: date
    duration: str
    age_group: str
    description: Optional[str] = None
    seats_available: int = Field(20, ge=0)


class ProgramCreate(ProgramBase):
    assigned_coaches: List[CoachAssignmentIn] = []


class ProgramUpdate(BaseModel):
    name: Optional[str] = None
    sport: Optional[str] = None
    pricing: Optional[float] = Field(None, ge=0)
    start_date: Optional[date] = None
    duration: Optional[str] = None
    age_group: Optional[str] = None
    description: Optional[str] = None
    seats_available: Optional[int] = Field(None, ge=0)
    assigned_coaches: Optional[List[CoachAssignmentIn]] = None


class ProgramOut(ProgramBase):
    program_id: int
    institute_id: int
    coach_assignments: List[CoachAssignmentOut] = []
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

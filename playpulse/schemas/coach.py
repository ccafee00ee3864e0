"""Pydantic contracts for coach profiles managed by institute owners."""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from playpulse.schemas.attendance import AttendanceOut, ProgressOut
from playpulse.schemas.chat import ChatMessageOut
from playpulse.schemas.enrollment import EnrollmentOut
from playpulse.schemas.gamification import GamificationOut
from playpulse.schemas.material import TrainingMaterialOut
from playpulse.schemas.notification import NotificationOut
from playpulse.schemas.schedule import ProgramScheduleOut


class CoachBase(BaseModel):
    name: str
    email: str
    qualification: str
    experience: str
    salary: float = Field(..., ge=0)
    achievements: Optional[str] = None
    contact_number: Optional[str] = None


class CoachCreate(CoachBase):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class CoachUpdate(BaseModel):
    name: Optional[str] = None
    qualification: Optional[str] = None
    experience: Optional[str] = None
    salary: Optional[float] = Field(None, ge=0)
    achievements: Optional[str] = None
    contact_number: Optional[str] = None
    password: Optional[str] = None


class CoachOut(CoachBase):
    coach_id: int
    institute_id: int
    user_id: int
    status: str
    image: Optional[str] = None
    assigned_program_ids: List[int] = []
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class CoachDashboardOut(BaseModel):
    coach: CoachOut
    enrollments: List[EnrollmentOut]
    notifications: List[NotificationOut]
    progress: List[ProgressOut]
    attendance: List[AttendanceOut]
    materials: List[TrainingMaterialOut]
    schedules: List[ProgramScheduleOut]
    chat_messages: List[ChatMessageOut]
    rewards: List[GamificationOut]

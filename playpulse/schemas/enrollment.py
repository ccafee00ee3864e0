"""Pydantic contracts for enrollments and payments."""

from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from datetime import datetime

from playpulse.schemas.attendance import AttendanceOut, ProgressOut
from playpulse.schemas.gamification import GamificationOut


class EnrollmentCreate(BaseModel):
    child_name: str = Field(..., min_length=1)
    program_id: int


class EnrollmentOut(BaseModel):
    enrollment_id: int
    parent_id: int
    child_name: str
    program_id: int
    program_name: Optional[str] = None
    institute_id: int
    status: str
    payment_status: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ProcessPaymentRequest(BaseModel):
    enrollment_id: int
    amount: float
    payment_token: Optional[str] = None


class PaymentResult(BaseModel):
    message: str
    enrollment: EnrollmentOut


class InitiatePaymentRequest(BaseModel):
    enrollment_id: int


class InitiatePaymentOut(BaseModel):
    payment_url: str
    payment_status: str


class EnrollmentDecision(BaseModel):
    status: Literal["approved", "rejected"]


class StudentDetailOut(BaseModel):
    enrollment: EnrollmentOut
    attendance: List[AttendanceOut]
    progress: List[ProgressOut]
    gamification: Optional[GamificationOut] = None

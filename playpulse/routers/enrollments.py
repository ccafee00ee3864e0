"""Enrollments API router. Parent enrollment and payment, owner decisions, coach student view."""

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from playpulse.config import settings
from playpulse.database import get_db
from playpulse.middleware.auth_middleware import require_roles
from playpulse.models.user import User
from playpulse.schemas.enrollment import (
    EnrollmentCreate,
    EnrollmentDecision,
    EnrollmentOut,
    InitiatePaymentOut,
    InitiatePaymentRequest,
    PaymentResult,
    ProcessPaymentRequest,
    StudentDetailOut,
)
from playpulse.services import enrollment_service
from playpulse.utils.dependencies import get_mailer, get_payment_gateway
from playpulse.utils.permissions import COACH, OWNER, PARENT

router = APIRouter(prefix="/api/enrollments", tags=["enrollments"])


@router.post("", response_model=EnrollmentOut, status_code=status.HTTP_201_CREATED)
def create_enrollment(
    data: EnrollmentCreate,
    db: Session = Depends(get_db),
    mailer=Depends(get_mailer),
    current_user: User = Depends(require_roles(PARENT)),
):
    return enrollment_service.create_enrollment(db, mailer, current_user, data.child_name, data.program_id)


@router.get("", response_model=List[EnrollmentOut])
def list_my_enrollments(db: Session = Depends(get_db), current_user: User = Depends(require_roles(PARENT))):
    return enrollment_service.list_parent_enrollments(db, current_user)


@router.post("/payment", response_model=PaymentResult)
def process_payment(
    data: ProcessPaymentRequest,
    db: Session = Depends(get_db),
    mailer=Depends(get_mailer),
    current_user: User = Depends(require_roles(PARENT)),
):
    enrollment = enrollment_service.process_payment(
        db, mailer, current_user, data.enrollment_id, data.amount, data.payment_token,
    )
    return PaymentResult(message="Payment successful", enrollment=EnrollmentOut.model_validate(enrollment))


@router.post("/initiate-payment", response_model=InitiatePaymentOut)
def initiate_payment(
    data: InitiatePaymentRequest,
    db: Session = Depends(get_db),
    mailer=Depends(get_mailer),
    gateway=Depends(get_payment_gateway),
    current_user: User = Depends(require_roles(PARENT)),
):
    return enrollment_service.initiate_payment(db, mailer, gateway, current_user, data.enrollment_id)


@router.get("/payment-callback")
def payment_callback(purchase_order_id: Optional[str] = None, db: Session = Depends(get_db)):
    target = enrollment_service.payment_callback_target(db, purchase_order_id, settings.FRONTEND_URL)
    return RedirectResponse(url=target, status_code=status.HTTP_302_FOUND)


@router.get("/institute", response_model=List[EnrollmentOut])
def list_institute_enrollments(db: Session = Depends(get_db), current_user: User = Depends(require_roles(OWNER))):
    return enrollment_service.list_institute_enrollments(db, current_user)


@router.get("/institute/{enrollment_id}", response_model=EnrollmentOut)
def get_institute_enrollment(
    enrollment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(OWNER)),
):
    return enrollment_service.get_institute_enrollment(db, current_user, enrollment_id)


@router.put("/{enrollment_id}/status", response_model=EnrollmentOut)
def decide_enrollment(
    enrollment_id: int,
    data: EnrollmentDecision,
    db: Session = Depends(get_db),
    mailer=Depends(get_mailer),
    current_user: User = Depends(require_roles(OWNER)),
):
    return enrollment_service.decide_enrollment(db, mailer, current_user, enrollment_id, data.status)


@router.get("/{enrollment_id}/student", response_model=StudentDetailOut)
def get_student(
    enrollment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(COACH)),
):
    return enrollment_service.get_student_detail(db, current_user, enrollment_id)

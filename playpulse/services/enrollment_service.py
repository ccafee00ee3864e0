"""Enrollment service layer. Owns the enrollment lifecycle state machine.

An enrollment carries two coupled fields, ``status`` and ``payment_status``.
Creation yields ``pending/pending``. A validated payment moves it to
``approved/completed`` in a single commit together with its notification.
An owner may settle a pending enrollment as ``approved`` or ``rejected``.
Every failed transition leaves the stored row untouched.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from playpulse.config import settings
from playpulse.errors import (
    AmountMismatch,
    ConflictError,
    ForbiddenError,
    InvalidPaymentToken,
    NotFoundError,
    ServerError,
)
from playpulse.models.attendance import Attendance, Progress
from playpulse.models.enrollment import (
    ENROLLMENT_APPROVED,
    ENROLLMENT_PENDING,
    ENROLLMENT_REJECTED,
    PAYMENT_COMPLETED,
    PAYMENT_PENDING,
    Enrollment,
)
from playpulse.models.program import Program
from playpulse.models.user import User
from playpulse.services import gamification_service
from playpulse.services.notification_service import add_notification, deliver_email
from playpulse.utils.permissions import get_coach_profile, get_coached_enrollment, get_owned_institute
from playpulse.utils.time_utils import utc_now

logger = logging.getLogger(__name__)

# (status, payment_status) -> states reachable from it
ALLOWED_TRANSITIONS = {
    (ENROLLMENT_PENDING, PAYMENT_PENDING): {
        (ENROLLMENT_APPROVED, PAYMENT_COMPLETED),
        (ENROLLMENT_REJECTED, PAYMENT_PENDING),
    },
    (ENROLLMENT_PENDING, PAYMENT_COMPLETED): {
        (ENROLLMENT_APPROVED, PAYMENT_COMPLETED),
        (ENROLLMENT_REJECTED, PAYMENT_COMPLETED),
    },
}

PURCHASE_ORDER_PREFIX = "Enrollment_"


def format_amount(value: float) -> str:
    value = float(value)
    return str(int(value)) if value.is_integer() else f"{value:.2f}"


def can_transition(enrollment: Enrollment, status: str, payment_status: str) -> bool:
    current = (enrollment.status, enrollment.payment_status)
    return (status, payment_status) in ALLOWED_TRANSITIONS.get(current, set())


def _commit_transition(db: Session, enrollment: Enrollment, action: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("[enrollment] %s failed for enrollment %s: %s", action, enrollment.enrollment_id, exc)
        raise ServerError("Server error", str(exc))


def _get_parent_enrollment(db: Session, parent: User, enrollment_id: int) -> Enrollment:
    enrollment = db.query(Enrollment).filter(Enrollment.enrollment_id == enrollment_id).first()
    if not enrollment:
        raise NotFoundError("Enrollment not found")
    if enrollment.parent_id != parent.user_id:
        raise ForbiddenError("Unauthorized")
    if not enrollment.program:
        raise NotFoundError("Program not found")
    return enrollment


def _ensure_payable(enrollment: Enrollment) -> None:
    if (enrollment.status, enrollment.payment_status) != (ENROLLMENT_PENDING, PAYMENT_PENDING):
        raise ConflictError("Payment already completed or invalid")


def create_enrollment(db: Session, mailer, parent: User, child_name: str, program_id: int) -> Enrollment:
    program = db.query(Program).filter(Program.program_id == program_id).first()
    if not program:
        raise NotFoundError("Program not found")

    enrollment = Enrollment(
        parent_id=parent.user_id,
        child_name=child_name.strip(),
        program_id=program.program_id,
        institute_id=program.institute_id,
        status=ENROLLMENT_PENDING,
        payment_status=PAYMENT_PENDING,
    )
    db.add(enrollment)
    noti = add_notification(
        db,
        parent.user_id,
        "enrollment",
        f"Enrollment request for {enrollment.child_name} in {program.name} submitted",
        "Pending payment",
    )
    _commit_transition(db, enrollment, "create")
    db.refresh(enrollment)
    logger.info("[enrollment] created %s for program %s", enrollment.enrollment_id, program.program_id)

    deliver_email(db, mailer, noti)
    return enrollment


def list_parent_enrollments(db: Session, parent: User) -> List[Enrollment]:
    return (
        db.query(Enrollment)
        .join(Program, Program.program_id == Enrollment.program_id)
        .filter(Enrollment.parent_id == parent.user_id)
        .order_by(Enrollment.created_at.desc(), Enrollment.enrollment_id.desc())
        .all()
    )


def process_payment(
    db: Session,
    mailer,
    parent: User,
    enrollment_id: int,
    amount: float,
    payment_token: Optional[str],
) -> Enrollment:
    """Validated payment completion: the production payment contract."""
    enrollment = _get_parent_enrollment(db, parent, enrollment_id)
    _ensure_payable(enrollment)

    if not payment_token or payment_token != settings.PAYMENT_TOKEN_SENTINEL:
        logger.info("[enrollment] invalid payment token for enrollment %s", enrollment_id)
        raise InvalidPaymentToken()
    program = enrollment.program
    if amount != program.pricing:
        logger.info(
            "[enrollment] amount mismatch for enrollment %s: %s vs %s",
            enrollment_id, amount, program.pricing,
        )
        raise AmountMismatch()

    enrollment.payment_status = PAYMENT_COMPLETED
    enrollment.status = ENROLLMENT_APPROVED
    enrollment.payment_token = payment_token
    noti = add_notification(
        db,
        parent.user_id,
        "payment",
        f"Payment of NPR {format_amount(amount)} for {enrollment.child_name} in {program.name} completed",
        "Enrollment approved",
    )
    _commit_transition(db, enrollment, "payment")
    db.refresh(enrollment)
    logger.info("[enrollment] payment completed for enrollment %s", enrollment_id)

    deliver_email(db, mailer, noti)
    return enrollment


def initiate_payment(db: Session, mailer, gateway, parent: User, enrollment_id: int) -> dict:
    """Ask the gateway for a redirect URL.

    The enrollment is only marked paid here when ``DEMO_PAYMENT_AUTOCOMPLETE``
    is on. That shortcut skips token and amount validation and exists for
    demos; production completion goes through ``process_payment``.
    """
    enrollment = _get_parent_enrollment(db, parent, enrollment_id)
    _ensure_payable(enrollment)
    program = enrollment.program

    payment_url = gateway.initiate(
        purchase_order_id=f"{PURCHASE_ORDER_PREFIX}{enrollment.enrollment_id}",
        purchase_order_name=program.name,
        amount=program.pricing,
        customer_name=enrollment.child_name,
        customer_email=parent.email,
    )

    if not settings.DEMO_PAYMENT_AUTOCOMPLETE:
        return {"payment_url": payment_url, "payment_status": enrollment.payment_status}

    enrollment.payment_status = PAYMENT_COMPLETED
    enrollment.status = ENROLLMENT_APPROVED
    enrollment.payment_token = f"khalti-dummy-{int(utc_now().timestamp() * 1000)}"
    noti = add_notification(
        db,
        parent.user_id,
        "payment",
        f"Payment of NPR {format_amount(program.pricing)} for {enrollment.child_name} in {program.name} completed",
        "Enrollment approved",
    )
    _commit_transition(db, enrollment, "demo payment")
    logger.warning("[enrollment] demo auto-completion applied to enrollment %s", enrollment_id)

    deliver_email(db, mailer, noti)
    return {"payment_url": payment_url, "payment_status": enrollment.payment_status}


def payment_callback_target(db: Session, purchase_order_id: Optional[str], frontend_url: str) -> str:
    base = f"{frontend_url.rstrip('/')}/parent"
    if not purchase_order_id or not purchase_order_id.startswith(PURCHASE_ORDER_PREFIX):
        return f"{base}?payment=error&tab=enrollments"

    raw_id = purchase_order_id[len(PURCHASE_ORDER_PREFIX):]
    enrollment = None
    if raw_id.isdigit():
        enrollment = db.query(Enrollment).filter(Enrollment.enrollment_id == int(raw_id)).first()
    outcome = "success" if enrollment else "error"
    return f"{base}?enrollmentId={raw_id}&payment={outcome}&tab=enrollments"


def list_institute_enrollments(db: Session, owner: User) -> List[Enrollment]:
    institute = get_owned_institute(db, owner)
    return (
        db.query(Enrollment)
        .filter(Enrollment.institute_id == institute.institute_id)
        .order_by(Enrollment.created_at.desc(), Enrollment.enrollment_id.desc())
        .all()
    )


def get_institute_enrollment(db: Session, owner: User, enrollment_id: int) -> Enrollment:
    institute = get_owned_institute(db, owner)
    enrollment = db.query(Enrollment).filter(Enrollment.enrollment_id == enrollment_id).first()
    if not enrollment:
        raise NotFoundError("Enrollment not found")
    if enrollment.institute_id != institute.institute_id:
        raise ForbiddenError("Enrollment does not belong to your institute")
    return enrollment


def decide_enrollment(db: Session, mailer, owner: User, enrollment_id: int, status: str) -> Enrollment:
    enrollment = get_institute_enrollment(db, owner, enrollment_id)
    if (enrollment.status, enrollment.payment_status, status) == (ENROLLMENT_PENDING, PAYMENT_PENDING, ENROLLMENT_APPROVED):
        raise ConflictError("Cannot approve an enrollment before payment")
    if enrollment.status != ENROLLMENT_PENDING or not can_transition(enrollment, status, enrollment.payment_status):
        raise ConflictError(f"Cannot change enrollment from {enrollment.status} to {status}")

    enrollment.status = status
    noti = add_notification(
        db,
        enrollment.parent_id,
        "enrollment_status",
        f"Enrollment for {enrollment.child_name} in {enrollment.program_name or 'the program'} {status}",
    )
    _commit_transition(db, enrollment, "decision")
    db.refresh(enrollment)
    logger.info("[enrollment] enrollment %s %s by owner %s", enrollment_id, status, owner.user_id)

    deliver_email(db, mailer, noti)
    return enrollment


def get_student_detail(db: Session, coach_user: User, enrollment_id: int) -> dict:
    coach = get_coach_profile(db, coach_user)
    enrollment = get_coached_enrollment(db, enrollment_id, coach)
    attendance = (
        db.query(Attendance)
        .filter(Attendance.enrollment_id == enrollment.enrollment_id)
        .order_by(Attendance.date.asc())
        .all()
    )
    progress = (
        db.query(Progress)
        .filter(Progress.enrollment_id == enrollment.enrollment_id)
        .order_by(Progress.date.asc())
        .all()
    )
    return {
        "enrollment": enrollment,
        "attendance": attendance,
        "progress": progress,
        "gamification": gamification_service.find_ledger(db, enrollment.parent_id),
    }

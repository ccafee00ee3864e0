"""Training material service layer."""

import logging

from sqlalchemy.orm import Session

from playpulse.errors import ForbiddenError
from playpulse.models.enrollment import Enrollment
from playpulse.models.material import TrainingMaterial
from playpulse.models.user import Coach, User
from playpulse.utils.permissions import ensure_program_assigned, get_coach_profile

logger = logging.getLogger(__name__)


def authorize_upload(db: Session, coach_user: User, program_id: int) -> Coach:
    coach = get_coach_profile(db, coach_user)
    ensure_program_assigned(db, coach, program_id)
    return coach


def create_material(db: Session, coach: Coach, program_id: int, title: str, file_url: str) -> TrainingMaterial:
    material = TrainingMaterial(
        program_id=program_id,
        coach_id=coach.coach_id,
        title=title.strip(),
        file_url=file_url,
    )
    db.add(material)
    db.commit()
    db.refresh(material)
    logger.info("[material] %s uploaded for program %s", material.material_id, program_id)
    return material


def list_for_parent(db: Session, parent: User, program_id: int) -> dict:
    enrollment = (
        db.query(Enrollment)
        .filter(Enrollment.parent_id == parent.user_id, Enrollment.program_id == program_id)
        .order_by(Enrollment.enrollment_id.desc())
        .first()
    )
    if not enrollment:
        raise ForbiddenError("Not enrolled in this program")
    materials = (
        db.query(TrainingMaterial)
        .filter(TrainingMaterial.program_id == program_id)
        .order_by(TrainingMaterial.created_at.desc(), TrainingMaterial.material_id.desc())
        .all()
    )
    return {"materials": materials, "payment_status": enrollment.payment_status}

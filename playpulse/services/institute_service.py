"""Institute service layer. Owner profile management and parent-facing discovery."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from playpulse.config import settings
from playpulse.errors import NotFoundError, ValidationError
from playpulse.models.institute import Institute
from playpulse.models.program import Program
from playpulse.models.user import User

logger = logging.getLogger(__name__)


def get_profile(db: Session, owner: User) -> Institute:
    institute = db.query(Institute).filter(Institute.owner_id == owner.user_id).first()
    if not institute:
        raise NotFoundError("Institute not found")
    return institute


def upsert_profile(db: Session, owner: User, data: dict) -> Institute:
    institute = db.query(Institute).filter(Institute.owner_id == owner.user_id).first()
    if not institute:
        institute = Institute(owner_id=owner.user_id, images=[])
        db.add(institute)
    for key, value in data.items():
        setattr(institute, key, value)
    db.commit()
    db.refresh(institute)
    logger.info("[institute] profile saved for owner %s", owner.user_id)
    return institute


def add_images(db: Session, owner: User, urls: List[str]) -> Institute:
    institute = get_profile(db, owner)
    images = list(institute.images or [])
    if len(images) + len(urls) > settings.MAX_INSTITUTE_IMAGES:
        raise ValidationError(f"An institute can have at most {settings.MAX_INSTITUTE_IMAGES} images")
    institute.images = images + list(urls)
    db.commit()
    db.refresh(institute)
    return institute


def search(db: Session, location: Optional[str] = None, sport: Optional[str] = None) -> List[Institute]:
    q = db.query(Institute)
    if location:
        q = q.filter(Institute.address.ilike(f"%{location.strip()}%"))
    if sport:
        q = q.filter(Institute.sports_offered.ilike(f"%{sport.strip()}%"))
    return q.order_by(Institute.name.asc()).all()


def list_programs(db: Session, institute_id: int) -> List[Program]:
    if not db.query(Institute).filter(Institute.institute_id == institute_id).first():
        raise NotFoundError("Institute not found")
    return (
        db.query(Program)
        .filter(Program.institute_id == institute_id)
        .order_by(Program.program_id.asc())
        .all()
    )

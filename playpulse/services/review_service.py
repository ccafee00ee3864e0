"""Review service layer."""

from typing import List

from sqlalchemy.orm import Session

from playpulse.errors import NotFoundError, ValidationError
from playpulse.models.program import Program
from playpulse.models.review import Review
from playpulse.models.user import Coach, User


def _get_program(db: Session, program_id: int) -> Program:
    program = db.query(Program).filter(Program.program_id == program_id).first()
    if not program:
        raise NotFoundError("Program not found")
    return program


def create_review(db: Session, parent: User, data) -> Review:
    program = _get_program(db, data.program_id)
    if program.institute_id != data.institute_id:
        raise ValidationError("Program does not belong to this institute")
    if not db.query(Coach).filter(Coach.coach_id == data.coach_id).first():
        raise NotFoundError("Coach not found")

    review = Review(
        parent_id=parent.user_id,
        institute_id=data.institute_id,
        program_id=data.program_id,
        coach_id=data.coach_id,
        rating=data.rating,
        comment=data.comment.strip(),
    )
    db.add(review)
    db.commit()
    db.refresh(review)
    return review


def list_reviews(db: Session, parent: User, program_id: int) -> List[Review]:
    _get_program(db, program_id)
    return (
        db.query(Review)
        .filter(Review.program_id == program_id, Review.parent_id == parent.user_id)
        .order_by(Review.created_at.desc(), Review.review_id.desc())
        .all()
    )

"""Review SQLAlchemy model definition."""

from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.sql import func
from playpulse.database import Base


class Review(Base):
    __tablename__ = "review"

    review_id = Column(Integer, primary_key=True, autoincrement=True)
    parent_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    institute_id = Column(Integer, ForeignKey("institute.institute_id"), nullable=False)
    program_id = Column(Integer, ForeignKey("program.program_id"), nullable=False)
    coach_id = Column(Integer, ForeignKey("coach.coach_id"), nullable=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text)
    created_at = Column(DateTime, server_default=func.now())

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_review_rating_range"),
    )

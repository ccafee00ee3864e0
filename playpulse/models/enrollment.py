"""Enrollment SQLAlchemy model definition."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from playpulse.database import Base

ENROLLMENT_PENDING = "pending"
ENROLLMENT_APPROVED = "approved"
ENROLLMENT_REJECTED = "rejected"

PAYMENT_PENDING = "pending"
PAYMENT_COMPLETED = "completed"


class Enrollment(Base):
    __tablename__ = "enrollment"

    enrollment_id = Column(Integer, primary_key=True, autoincrement=True)
    parent_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    child_name = Column(String(100), nullable=False)
    program_id = Column(Integer, ForeignKey("program.program_id"), nullable=False)
    institute_id = Column(Integer, ForeignKey("institute.institute_id"), nullable=False)
    status = Column(String(20), nullable=False, default=ENROLLMENT_PENDING)  # pending/approved/rejected
    payment_status = Column(String(20), nullable=False, default=PAYMENT_PENDING)  # pending/completed
    payment_token = Column(String(200))
    created_at = Column(DateTime, server_default=func.now())

    parent = relationship("User")
    program = relationship("Program")
    institute = relationship("Institute")

    __table_args__ = (
        Index("idx_enrollment_parent", "parent_id", "program_id"),
    )

    @property
    def program_name(self) -> str | None:
        return self.program.name if self.program else None

"""ProgramSchedule SQLAlchemy model definition."""

from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from playpulse.database import Base


class ProgramSchedule(Base):
    __tablename__ = "program_schedule"

    schedule_id = Column(Integer, primary_key=True, autoincrement=True)
    program_id = Column(Integer, ForeignKey("program.program_id"), nullable=False)
    coach_id = Column(Integer, ForeignKey("coach.coach_id"), nullable=False)
    duration = Column(Float, nullable=False, default=2)  # hours per session
    start_date = Column(DateTime, server_default=func.now())
    # [{"date": ISO-8601, "activity": str, "time": str}]
    schedule = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    program = relationship("Program")
    coach = relationship("Coach")

    __table_args__ = (
        UniqueConstraint("program_id", "coach_id", name="uq_program_schedule_program_coach"),
    )

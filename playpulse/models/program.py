"""Program and coach-assignment SQLAlchemy model definitions."""

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Float, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from playpulse.database import Base


class Program(Base):
    __tablename__ = "program"

    program_id = Column(Integer, primary_key=True, autoincrement=True)
    institute_id = Column(Integer, ForeignKey("institute.institute_id"), nullable=False)
    name = Column(String(200), nullable=False)
    sport = Column(String(100), nullable=False)
    pricing = Column(Float, nullable=False)
    start_date = Column(Date, nullable=False)
    duration = Column(String(50), nullable=False)  # e.g. "6 weeks"
    age_group = Column(String(50), nullable=False)
    description = Column(Text)
    seats_available = Column(Integer, nullable=False, default=20)
    created_at = Column(DateTime, server_default=func.now())

    institute = relationship("Institute", back_populates="programs")
    coach_assignments = relationship("ProgramCoach", back_populates="program", cascade="all, delete-orphan")


class ProgramCoach(Base):
    __tablename__ = "program_coach"

    assignment_id = Column(Integer, primary_key=True, autoincrement=True)
    program_id = Column(Integer, ForeignKey("program.program_id"), nullable=False)
    coach_id = Column(Integer, ForeignKey("coach.coach_id"), nullable=False)
    role = Column(String(50), nullable=False, default="Primary Coach")

    program = relationship("Program", back_populates="coach_assignments")
    coach = relationship("Coach", back_populates="program_assignments")

    __table_args__ = (
        UniqueConstraint("program_id", "coach_id", name="uq_program_coach"),
    )

    @property
    def coach_name(self) -> str | None:
        return self.coach.name if self.coach else None

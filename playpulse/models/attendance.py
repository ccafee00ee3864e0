"""Attendance and progress SQLAlchemy model definitions."""

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Float, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from playpulse.database import Base


class Attendance(Base):
    __tablename__ = "attendance"

    attendance_id = Column(Integer, primary_key=True, autoincrement=True)
    enrollment_id = Column(Integer, ForeignKey("enrollment.enrollment_id"), nullable=False)
    date = Column(DateTime, nullable=False)  # UTC midnight of attendance_day
    attendance_day = Column(Date, nullable=False)
    status = Column(String(20), nullable=False, default="present")  # present/absent
    created_at = Column(DateTime, server_default=func.now())

    enrollment = relationship("Enrollment")

    __table_args__ = (
        UniqueConstraint("enrollment_id", "attendance_day", name="uq_attendance_enrollment_day"),
    )


class Progress(Base):
    __tablename__ = "progress"

    progress_id = Column(Integer, primary_key=True, autoincrement=True)
    enrollment_id = Column(Integer, ForeignKey("enrollment.enrollment_id"), nullable=False)
    coach_id = Column(Integer, ForeignKey("coach.coach_id"), nullable=False)
    date = Column(DateTime, nullable=False)
    metrics = Column(Float, nullable=False)  # 0-100
    notes = Column(Text)
    created_at = Column(DateTime, server_default=func.now())

    enrollment = relationship("Enrollment")
    coach = relationship("Coach")

    @property
    def coach_name(self) -> str | None:
        return self.coach.name if self.coach else None

"""User and Coach SQLAlchemy model definitions."""

from sqlalchemy import Column, Integer, String, DateTime, Float, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from playpulse.database import Base


class User(Base):
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(200), unique=True, nullable=False)
    password_hash = Column(String(200), nullable=False)
    username = Column(String(100))
    role = Column(String(20), nullable=False, default="parent")  # owner/parent/coach
    image = Column(String(500))
    reset_code = Column(String(10))
    reset_code_expires = Column(DateTime)
    created_at = Column(DateTime, server_default=func.now())

    coach_profile = relationship("Coach", back_populates="user", uselist=False)
    notifications = relationship("Notification", back_populates="user")


class Coach(Base):
    __tablename__ = "coach"

    coach_id = Column(Integer, primary_key=True, autoincrement=True)
    institute_id = Column(Integer, ForeignKey("institute.institute_id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, unique=True)
    name = Column(String(100), nullable=False)
    email = Column(String(200), nullable=False, unique=True)
    qualification = Column(String(200), nullable=False)
    achievements = Column(String(500))
    experience = Column(String(200), nullable=False)
    salary = Column(Float, nullable=False)
    contact_number = Column(String(30))
    status = Column(String(20), nullable=False, default="active")  # active/inactive
    image = Column(String(500))
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="coach_profile")
    institute = relationship("Institute", back_populates="coaches")
    program_assignments = relationship("ProgramCoach", back_populates="coach", cascade="all, delete-orphan")

    @property
    def assigned_program_ids(self) -> list[int]:
        return [a.program_id for a in self.program_assignments]

"""Institute event and event-enrollment SQLAlchemy model definitions."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from playpulse.database import Base


class Event(Base):
    __tablename__ = "event"

    event_id = Column(Integer, primary_key=True, autoincrement=True)
    institute_id = Column(Integer, ForeignKey("institute.institute_id"), nullable=False)
    name = Column(String(200), nullable=False)
    place = Column(String(200), nullable=False)
    event_type = Column(String(50), nullable=False)
    date = Column(DateTime, nullable=False)
    description = Column(Text)
    status = Column(String(20), nullable=False, default="upcoming")  # upcoming/completed
    images = Column(JSON, default=list)
    created_at = Column(DateTime, server_default=func.now())

    institute = relationship("Institute")


class EventEnrollment(Base):
    __tablename__ = "event_enrollment"

    event_enrollment_id = Column(Integer, primary_key=True, autoincrement=True)
    parent_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    event_id = Column(Integer, ForeignKey("event.event_id"), nullable=False)
    name = Column(String(100), nullable=False)  # participant name
    contact_number = Column(String(30), nullable=False)
    age = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime, server_default=func.now())

    event = relationship("Event")

"""Institute SQLAlchemy model definition."""

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from playpulse.database import Base


class Institute(Base):
    __tablename__ = "institute"

    institute_id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, unique=True)
    name = Column(String(200), nullable=False)
    address = Column(String(300), nullable=False)
    sports_offered = Column(String(300), nullable=False)
    facilities = Column(Text, nullable=False)
    staff = Column(Text)
    contact_number = Column(String(30), nullable=False)
    estd_date = Column(Date)
    rewards = Column(Text)
    branches = Column(Text)
    total_staff = Column(Integer)
    images = Column(JSON, default=list)
    created_at = Column(DateTime, server_default=func.now())

    owner = relationship("User")
    coaches = relationship("Coach", back_populates="institute")
    programs = relationship("Program", back_populates="institute")

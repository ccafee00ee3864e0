"""Gamification ledger and reward SQLAlchemy model definition.

One table holds two kinds of rows: a per-user point ledger (``user_id`` set)
and per-program rewards configured by a coach (``program_id``/``coach_id`` set).
"""

from sqlalchemy import Column, Integer, String, ForeignKey, JSON, UniqueConstraint
from playpulse.database import Base


class Gamification(Base):
    __tablename__ = "gamification"

    gamification_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=True, unique=True)
    program_id = Column(Integer, ForeignKey("program.program_id"), nullable=True)
    coach_id = Column(Integer, ForeignKey("coach.coach_id"), nullable=True)
    points = Column(Integer, nullable=False, default=0)
    badges = Column(JSON, nullable=False, default=list)
    reward = Column(String(200))
    points_required = Column(Integer)

    __table_args__ = (
        UniqueConstraint("program_id", "coach_id", name="uq_gamification_program_coach"),
    )

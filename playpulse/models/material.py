"""Training material SQLAlchemy model definition."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from playpulse.database import Base


class TrainingMaterial(Base):
    __tablename__ = "training_material"

    material_id = Column(Integer, primary_key=True, autoincrement=True)
    program_id = Column(Integer, ForeignKey("program.program_id"), nullable=False)
    coach_id = Column(Integer, ForeignKey("coach.coach_id"), nullable=False)
    title = Column(String(200), nullable=False)
    file_url = Column(String(500), nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    coach = relationship("Coach")

    @property
    def coach_name(self) -> str | None:
        return self.coach.name if self.coach else None

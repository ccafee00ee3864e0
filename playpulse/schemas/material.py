"""Pydantic contracts for training materials."""

from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class TrainingMaterialOut(BaseModel):
    material_id: int
    program_id: int
    coach_id: int
    coach_name: Optional[str] = None
    title: str
    file_url: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class MaterialListOut(BaseModel):
    materials: List[TrainingMaterialOut]
    payment_status: str

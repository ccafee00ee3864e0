"""Pydantic contracts for program reviews."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ReviewCreate(BaseModel):
    institute_id: int
    program_id: int
    coach_id: int
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=1)


class ReviewOut(BaseModel):
    review_id: int
    parent_id: int
    institute_id: int
    program_id: int
    coach_id: Optional[int] = None
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

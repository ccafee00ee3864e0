"""Pydantic contracts for point ledgers and program rewards."""

from pydantic import BaseModel, Field
from typing import List, Optional


class LedgerAdjust(BaseModel):
    user_id: int
    points: int = 0
    badge: Optional[str] = None


class RewardUpsert(BaseModel):
    program_id: int
    reward: str = Field(..., min_length=1)
    points_required: int = Field(..., ge=0)


class GamificationOut(BaseModel):
    gamification_id: Optional[int] = None
    user_id: Optional[int] = None
    program_id: Optional[int] = None
    coach_id: Optional[int] = None
    points: int = 0
    badges: List[str] = []
    reward: Optional[str] = None
    points_required: Optional[int] = None

    model_config = {"from_attributes": True}

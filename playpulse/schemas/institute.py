"""Pydantic contracts for institute profiles."""

from pydantic import BaseModel
from typing import List, Optional
from datetime import date, datetime


class InstituteBase(BaseModel):
    name: str
    address: str
    sports_offered: str
    facilities: str
    contact_number: str
    staff: Optional[str] = None
    estd_date: Optional[date] = None
    rewards: Optional[str] = None
    branches: Optional[str] = None
    total_staff: Optional[int] = None


class InstituteUpsert(InstituteBase):
    pass


class InstituteOut(InstituteBase):
    institute_id: int
    owner_id: int
    images: Optional[List[str]] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

"""Reviews API router."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from playpulse.database import get_db
from playpulse.middleware.auth_middleware import require_roles
from playpulse.models.user import User
from playpulse.schemas.review import ReviewCreate, ReviewOut
from playpulse.services import review_service
from playpulse.utils.permissions import PARENT

router = APIRouter(prefix="/api/reviews", tags=["reviews"])


@router.post("", response_model=ReviewOut, status_code=status.HTTP_201_CREATED)
def create_review(
    data: ReviewCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(PARENT)),
):
    return review_service.create_review(db, current_user, data)


@router.get("/program/{program_id}", response_model=List[ReviewOut])
def list_reviews(
    program_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(PARENT)),
):
    return review_service.list_reviews(db, current_user, program_id)

"""Gamification API router."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from playpulse.database import get_db
from playpulse.middleware.auth_middleware import require_roles
from playpulse.models.user import User
from playpulse.schemas.gamification import GamificationOut, LedgerAdjust, RewardUpsert
from playpulse.services import gamification_service
from playpulse.utils.permissions import COACH, PARENT

router = APIRouter(prefix="/api/gamification", tags=["gamification"])


@router.get("/me", response_model=GamificationOut)
def get_my_ledger(db: Session = Depends(get_db), current_user: User = Depends(require_roles(PARENT))):
    return gamification_service.get_ledger(db, current_user.user_id)


@router.post("/adjust", response_model=GamificationOut)
def adjust_ledger(
    data: LedgerAdjust,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(COACH)),
):
    return gamification_service.adjust_ledger(db, current_user, data.user_id, data.points, data.badge)


@router.put("/rewards", response_model=GamificationOut)
def set_reward(
    data: RewardUpsert,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(COACH)),
):
    return gamification_service.set_reward(db, current_user, data.program_id, data.reward, data.points_required)

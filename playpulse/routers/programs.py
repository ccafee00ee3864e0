"""Programs API router."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from playpulse.database import get_db
from playpulse.middleware.auth_middleware import require_roles
from playpulse.models.user import User
from playpulse.schemas.program import ProgramCreate, ProgramOut, ProgramUpdate
from playpulse.services import coach_service, program_service
from playpulse.utils.permissions import COACH, OWNER

router = APIRouter(prefix="/api/programs", tags=["programs"])


@router.get("", response_model=List[ProgramOut])
def list_programs(db: Session = Depends(get_db), current_user: User = Depends(require_roles(OWNER))):
    return program_service.list_programs(db, current_user)


@router.get("/assigned", response_model=List[ProgramOut])
def list_assigned_programs(db: Session = Depends(get_db), current_user: User = Depends(require_roles(COACH))):
    return coach_service.list_assigned_programs(db, current_user)


@router.post("", response_model=ProgramOut, status_code=status.HTTP_201_CREATED)
def create_program(
    data: ProgramCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(OWNER)),
):
    return program_service.create_program(db, current_user, data)


@router.put("/{program_id}", response_model=ProgramOut)
def update_program(
    program_id: int,
    data: ProgramUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(OWNER)),
):
    return program_service.update_program(db, current_user, program_id, data)


@router.delete("/{program_id}")
def delete_program(
    program_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(OWNER)),
):
    program_service.delete_program(db, current_user, program_id)
    return {"message": "Program deleted"}

"""Program service layer. Owner CRUD for programs and their coach assignments."""

import logging
from typing import List

from sqlalchemy.orm import Session

from playpulse.errors import NotFoundError, ValidationError
from playpulse.models.institute import Institute
from playpulse.models.program import Program, ProgramCoach
from playpulse.models.user import Coach, User
from playpulse.utils.permissions import get_owned_institute

logger = logging.getLogger(__name__)


def _build_assignments(db: Session, institute: Institute, assignments) -> List[ProgramCoach]:
    seen = set()
    result = []
    for item in assignments:
        if item.coach_id in seen:
            raise ValidationError(f"Coach {item.coach_id} is assigned more than once")
        seen.add(item.coach_id)
        coach = db.query(Coach).filter(
            Coach.coach_id == item.coach_id,
            Coach.institute_id == institute.institute_id,
        ).first()
        if not coach:
            raise ValidationError(f"Coach {item.coach_id} does not belong to this institute")
        result.append(ProgramCoach(coach_id=coach.coach_id, role=item.role or "Primary Coach"))
    return result


def list_programs(db: Session, owner: User) -> List[Program]:
    institute = get_owned_institute(db, owner)
    return (
        db.query(Program)
        .filter(Program.institute_id == institute.institute_id)
        .order_by(Program.program_id.asc())
        .all()
    )


def get_program(db: Session, owner: User, program_id: int) -> Program:
    institute = get_owned_institute(db, owner)
    program = db.query(Program).filter(
        Program.program_id == program_id,
        Program.institute_id == institute.institute_id,
    ).first()
    if not program:
        raise NotFoundError("Program not found")
    return program


def create_program(db: Session, owner: User, data) -> Program:
    institute = get_owned_institute(db, owner)
    payload = data.model_dump(exclude={"assigned_coaches"})
    program = Program(institute_id=institute.institute_id, **payload)
    program.coach_assignments = _build_assignments(db, institute, data.assigned_coaches)
    db.add(program)
    db.commit()
    db.refresh(program)
    logger.info("[program] created %s for institute %s", program.program_id, institute.institute_id)
    return program


def update_program(db: Session, owner: User, program_id: int, data) -> Program:
    program = get_program(db, owner, program_id)
    payload = data.model_dump(exclude_unset=True, exclude={"assigned_coaches"})
    for key, value in payload.items():
        if value is not None:
            setattr(program, key, value)
    if data.assigned_coaches is not None:
        assignments = _build_assignments(db, program.institute, data.assigned_coaches)
        # flush removals before re-inserting the same (program, coach) pairs
        program.coach_assignments = []
        db.flush()
        program.coach_assignments = assignments
    db.commit()
    db.refresh(program)
    return program


def delete_program(db: Session, owner: User, program_id: int) -> None:
    program = get_program(db, owner, program_id)
    db.delete(program)
    db.commit()
    logger.info("[program] deleted %s", program_id)

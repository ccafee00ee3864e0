"""Training materials API router."""

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from playpulse.config import settings
from playpulse.database import get_db
from playpulse.middleware.auth_middleware import require_roles
from playpulse.models.user import User
from playpulse.schemas.material import MaterialListOut, TrainingMaterialOut
from playpulse.services import material_service
from playpulse.utils.helpers import save_upload
from playpulse.utils.permissions import COACH, PARENT

router = APIRouter(prefix="/api/materials", tags=["materials"])


@router.post("", response_model=TrainingMaterialOut, status_code=status.HTTP_201_CREATED)
async def upload_material(
    program_id: int = Form(...),
    title: str = Form(..., min_length=1),
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(COACH)),
):
    coach = material_service.authorize_upload(db, current_user, program_id)
    stored = await save_upload(
        file,
        subfolder="materials",
        allowed_extensions=settings.ALLOWED_MATERIAL_EXTENSIONS,
        max_size=settings.MAX_UPLOAD_SIZE,
    )
    return material_service.create_material(db, coach, program_id, title, stored["url"])


@router.get("/program/{program_id}", response_model=MaterialListOut)
def list_materials(
    program_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(PARENT)),
):
    return material_service.list_for_parent(db, current_user, program_id)

"""Auth API router. Signup, login, profile and password reset."""

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session

from playpulse.config import settings
from playpulse.database import get_db
from playpulse.middleware.auth_middleware import get_current_user
from playpulse.models.user import User
from playpulse.schemas.user import (
    ForgotPasswordRequest,
    LoginRequest,
    MessageOut,
    ProfileUpdate,
    ResetPasswordRequest,
    SignupRequest,
    TokenResponse,
    UserOut,
    VerifyResetCodeRequest,
)
from playpulse.services import auth_service
from playpulse.utils.dependencies import get_mailer
from playpulse.utils.helpers import save_upload

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _token_response(user: User) -> TokenResponse:
    return TokenResponse(access_token=auth_service.create_access_token(user), user=UserOut.model_validate(user))


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def signup(request: SignupRequest, db: Session = Depends(get_db)):
    user = auth_service.signup(db, request.name, request.email, request.password, request.role)
    return _token_response(user)


@router.post("/login", response_model=TokenResponse)
def login(request: LoginRequest, db: Session = Depends(get_db)):
    user = auth_service.login(db, request.email, request.password)
    return _token_response(user)


@router.get("/me", response_model=UserOut)
def me(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/profile", response_model=UserOut)
def update_profile(
    data: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return auth_service.update_profile(db, current_user, data.model_dump(exclude_unset=True))


@router.post("/profile/image", response_model=UserOut)
async def upload_profile_image(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    stored = await save_upload(
        file,
        subfolder="profiles",
        allowed_extensions=settings.ALLOWED_IMAGE_EXTENSIONS,
        max_size=settings.MAX_IMAGE_UPLOAD_SIZE,
    )
    return auth_service.update_profile(db, current_user, {"image": stored["url"]})


@router.post("/forgot-password", response_model=MessageOut)
def forgot_password(request: ForgotPasswordRequest, db: Session = Depends(get_db), mailer=Depends(get_mailer)):
    auth_service.forgot_password(db, mailer, request.email)
    return {"message": "Reset code sent to email"}


@router.post("/verify-reset-code", response_model=MessageOut)
def verify_reset_code(request: VerifyResetCodeRequest, db: Session = Depends(get_db)):
    auth_service.verify_reset_code(db, request.email, request.code)
    return {"message": "Code verified"}


@router.post("/reset-password", response_model=MessageOut)
def reset_password(request: ResetPasswordRequest, db: Session = Depends(get_db)):
    auth_service.reset_password(db, request.email, request.code, request.new_password)
    return {"message": "Password reset successful"}

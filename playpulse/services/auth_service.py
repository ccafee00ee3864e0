"""Auth service layer. Password hashing, token issuance and the reset-code flow."""

import logging
import secrets
from datetime import timedelta

import bcrypt
from jose import jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from playpulse.config import settings
from playpulse.errors import AuthError, ConflictError, NotFoundError, ValidationError
from playpulse.middleware.auth_middleware import ALGORITHM
from playpulse.models.user import User
from playpulse.utils.permissions import SIGNUP_ROLES
from playpulse.utils.time_utils import as_utc, to_naive_utc, utc_now

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(user: User) -> str:
    expire = utc_now() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {"sub": str(user.user_id), "role": user.role, "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def signup(db: Session, name: str, email: str, password: str, role: str) -> User:
    if role not in SIGNUP_ROLES:
        raise ValidationError('Invalid role - must be "owner" or "parent"')
    if get_user_by_email(db, email):
        raise ConflictError("Email already exists")

    user = User(
        name=name.strip(),
        email=normalize_email(email),
        password_hash=hash_password(password),
        role=role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Email already exists")
    db.refresh(user)
    logger.info("[auth] signed up user %s as %s", user.user_id, role)
    return user


def login(db: Session, email: str, password: str) -> User:
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        raise AuthError("Invalid email or password")
    return user


def update_profile(db: Session, user: User, data: dict) -> User:
    new_email = data.get("email")
    if new_email is not None:
        new_email = normalize_email(new_email)
        if new_email != user.email and get_user_by_email(db, new_email):
            raise ConflictError("Email already exists")
        user.email = new_email
    for field in ("name", "username", "image"):
        if data.get(field) is not None:
            setattr(user, field, data[field])
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Email already exists")
    db.refresh(user)
    return user


def _generate_reset_code() -> str:
    return f"{secrets.randbelow(1_000_000):06d}"


def forgot_password(db: Session, mailer, email: str) -> None:
    user = get_user_by_email(db, email)
    if not user:
        raise NotFoundError("User not found")

    code = _generate_reset_code()
    user.reset_code = code
    user.reset_code_expires = to_naive_utc(utc_now() + timedelta(minutes=settings.RESET_CODE_EXPIRE_MINUTES))
    db.commit()

    if mailer is not None:
        mailer.send(
            user.email,
            "Password Reset Code",
            f"Your password reset code is {code}. "
            f"It expires in {settings.RESET_CODE_EXPIRE_MINUTES} minutes.",
        )
    logger.info("[auth] reset code issued for user %s", user.user_id)


def _check_reset_code(db: Session, email: str, code: str) -> User:
    user = get_user_by_email(db, email)
    if (
        not user
        or not user.reset_code
        or not secrets.compare_digest(user.reset_code, (code or "").strip())
        or user.reset_code_expires is None
        or as_utc(user.reset_code_expires) <= utc_now()
    ):
        raise ValidationError("Invalid or expired reset code")
    return user


def verify_reset_code(db: Session, email: str, code: str) -> None:
    _check_reset_code(db, email, code)


def reset_password(db: Session, email: str, code: str, new_password: str) -> None:
    user = _check_reset_code(db, email, code)
    user.password_hash = hash_password(new_password)
    user.reset_code = None
    user.reset_code_expires = None
    db.commit()
    logger.info("[auth] password reset for user %s", user.user_id)

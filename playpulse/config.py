"""Central application settings loaded from environment variables."""

from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./playpulse.db"
    SECRET_KEY: str = "change-me-to-a-random-secret-key"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000"]
    FRONTEND_URL: str = "http://localhost:3000"

    # JWT
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    RESET_CODE_EXPIRE_MINUTES: int = 60

    # File upload
    MAX_UPLOAD_SIZE: int = 20 * 1024 * 1024  # 20 MB
    MAX_IMAGE_UPLOAD_SIZE: int = 5 * 1024 * 1024  # 5 MB
    ALLOWED_IMAGE_EXTENSIONS: List[str] = ["jpg", "jpeg", "png"]
    ALLOWED_MATERIAL_EXTENSIONS: List[str] = ["pdf"]
    MAX_INSTITUTE_IMAGES: int = 5
    MAX_EVENT_IMAGES: int = 5
    UPLOAD_DIR: str = "uploads"

    # Email (SMTP). Empty credentials disable delivery.
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SMTP_USERNAME: str = ""
    SMTP_PASSWORD: str = ""
    DEFAULT_FROM_EMAIL: str = "no-reply@playpulse.local"
    EMAIL_TIMEOUT_SECONDS: float = 10.0

    # Payment gateway (Khalti ePayment)
    KHALTI_BASE_URL: str = "https://dev.khalti.com/api/v2"
    KHALTI_SECRET_KEY: str = ""
    PAYMENT_RETURN_URL: str = "http://localhost:8000/api/enrollments/payment-callback"
    PAYMENT_WEBSITE_URL: str = "http://localhost:3000"
    PAYMENT_TIMEOUT_SECONDS: float = 10.0
    PAYMENT_TOKEN_SENTINEL: str = "fake-khalti-token"
    # Demo only: initiate-payment marks the enrollment paid without verification.
    DEMO_PAYMENT_AUTOCOMPLETE: bool = False

    # Gamification
    ATTENDANCE_POINTS: int = 5

    class Config:
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()

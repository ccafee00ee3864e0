"""FastAPI application entry point. Builds collaborators, middleware and API routers.

Run with ``uvicorn playpulse.main:create_app --factory``.
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from playpulse import __version__
from playpulse.config import Settings, settings as default_settings
from playpulse.database import Database
from playpulse.errors import register_exception_handlers
from playpulse.logging_config import configure_logging
from playpulse.routers import (
    attendance, auth, calendar, chat, coaches, enrollments, events, gamification,
    institutes, materials, notifications, progress, programs, reviews, schedules,
)
from playpulse.services.email_service import EmailDispatcher
from playpulse.services.payment_gateway import KhaltiGateway

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    db: Database = app.state.db
    try:
        db.ping()
        db.create_all()
    except Exception:
        logger.critical("[startup] database unavailable at %s", db.engine.url.render_as_string(hide_password=True))
        raise
    logger.info("[startup] PlayPulse API %s ready", __version__)

    yield

    app.state.payment_gateway.close()
    app.state.mailer.close()
    db.dispose()
    logger.info("[shutdown] PlayPulse API stopped")


def create_app(
    app_settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    mailer=None,
    payment_gateway=None,
) -> FastAPI:
    app_settings = app_settings or default_settings
    configure_logging(app_settings.LOG_LEVEL)

    app = FastAPI(
        title="PlayPulse Sports Institute API",
        description="Institutes, programs, enrollments, schedules and progress tracking",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.db = database or Database(app_settings.DATABASE_URL)
    app.state.mailer = mailer or EmailDispatcher.from_settings(app_settings)
    app.state.payment_gateway = payment_gateway or KhaltiGateway.from_settings(app_settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(institutes.router)
    app.include_router(coaches.router)
    app.include_router(programs.router)
    app.include_router(enrollments.router)
    app.include_router(attendance.router)
    app.include_router(progress.router)
    app.include_router(schedules.router)
    app.include_router(calendar.router)
    app.include_router(chat.router)
    app.include_router(materials.router)
    app.include_router(reviews.router)
    app.include_router(gamification.router)
    app.include_router(notifications.router)
    app.include_router(events.router)

    @app.get("/api/health")
    def health():
        return {"status": "ok", "version": __version__}

    os.makedirs(app_settings.UPLOAD_DIR, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=app_settings.UPLOAD_DIR), name="uploads")

    return app

# File: src/lessonbook/main.py
"""FastAPI application factory."""

import os
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from lessonbook.core.logging import configure_logging, get_logger

configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager for startup and shutdown events."""
    start_time = datetime.now()
    logger.info("app.startup", message="LessonBook starting up", timestamp=start_time.isoformat())

    from lessonbook.api.health import set_app_start_time

    set_app_start_time(start_time)

    yield

    logger.info("app.shutdown", message="LessonBook shutting down gracefully")


def _setup_middleware(app: FastAPI, environment: str, session_secret_key: str) -> None:
    """Configure all middleware in correct order."""
    from lessonbook.middleware.logging import RequestIDMiddleware
    from lessonbook.middleware.sentry import SentryContextMiddleware

    # Last added = first executed: RequestID -> Session -> SentryContext -> app
    app.add_middleware(SentryContextMiddleware)
    app.add_middleware(
        SessionMiddleware,
        secret_key=session_secret_key,
        max_age=14 * 24 * 60 * 60,
        https_only=environment == "production",
        same_site="lax",
    )
    app.add_middleware(RequestIDMiddleware)


def _register_routers(app: FastAPI) -> None:
    """Register all API routers."""
    from lessonbook.api.bookings import router as bookings_router
    from lessonbook.api.class_sessions import router as sessions_router
    from lessonbook.api.health import router as health_router

    app.include_router(health_router)
    app.include_router(sessions_router)
    app.include_router(bookings_router)


def create_app() -> FastAPI:
    """Application factory for LessonBook."""
    from lessonbook.core.sentry import init_sentry

    init_sentry()

    app = FastAPI(
        title="LessonBook API",
        description="Live lesson session booking",
        version="0.1.0",
        lifespan=lifespan,
    )

    from lessonbook.core.exception_handlers import register_exception_handlers

    register_exception_handlers(app)

    session_secret_key = os.getenv("SESSION_SECRET_KEY", "dev-secret-key-change-in-production")
    environment = os.getenv("ENVIRONMENT", "development")

    _setup_middleware(app, environment, session_secret_key)
    _register_routers(app)

    logger.info("app.configured", message="FastAPI application created successfully")

    return app


def run() -> None:
    """Development server entrypoint."""
    uvicorn.run(
        "lessonbook.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=True,
    )

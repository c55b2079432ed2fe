# afterschool/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp

from .core.config import settings
from .core.constants import API_DESCRIPTION, API_TITLE, API_VERSION, BRAND_NAME
from .database import SessionLocal, engine, init_db
from .errors import register_error_handlers
from .middleware.timing_asgi import TimingMiddlewareASGI
from .routes import health, lessons, orders, search
from .services.lesson_service import LessonService

# Configure logging
logging.basicConfig(
    level=settings.log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


def _seed_sample_data() -> None:
    db = SessionLocal()
    try:
        inserted = LessonService(db).seed_sample_lessons()
        if inserted:
            logger.info("Seeded %s sample lessons", inserted)
    finally:
        db.close()


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown."""
    logger.info(f"{BRAND_NAME} API starting up...")
    logger.info(f"Environment: {settings.environment}")

    init_db()
    if settings.seed_sample_data:
        _seed_sample_data()

    yield

    logger.info(f"{BRAND_NAME} API shutting down...")
    engine.dispose()
    logger.info("Database connections closed")


app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=app_lifespan,
)

# Register unified error envelope handlers
register_error_handlers(app)

_cors_origins = settings.cors_origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    # Browsers reject credentials with a wildcard origin
    allow_credentials="*" not in _cors_origins,
    allow_methods=["GET", "HEAD", "OPTIONS", "POST", "PUT"],
    allow_headers=["*"],
)
logger.info("CORS allow_origins=%s", _cors_origins)

app.include_router(health.router)
app.include_router(lessons.router, prefix="/lessons")
app.include_router(search.router, prefix="/search")
app.include_router(orders.router, prefix="/orders")

# Keep the original FastAPI app for tools/tests that need access to routes
fastapi_app = app

# Wrap with ASGI middleware for production
wrapped_app: ASGIApp = TimingMiddlewareASGI(app, slow_request_ms=settings.slow_request_ms)
app = wrapped_app  # type: ignore[assignment]

# Export what's needed
__all__ = ["app", "fastapi_app"]

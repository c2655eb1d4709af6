"""
FastAPI application entrypoint.

Lifespan:
  • On startup: build the token service once, verify DB connectivity.
  • On shutdown: dispose the engine cleanly.

Routers:
  • /            — public listing, comments, creator pages, ratings, contact form
  • /creator     — creator session + dashboard
  • /admin       — admin session + moderation
  • /health      — shallow liveness probe

Errors:
  • AppError subclasses          → their status + {"detail": ...}
  • RequestValidationError       → 400 with the pydantic error list
  • SQLAlchemyError (uncaught)   → generic 500, logged server-side
"""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from showcase.auth.tokens import get_token_service
from showcase.core.config import settings
from showcase.core.database import engine
from showcase.core.errors import AppError, InternalError
from showcase.routers.admin import router as admin_router
from showcase.routers.creator import router as creator_router
from showcase.routers.public import router as public_router
from showcase.routers.sessions import admin_router as admin_session_router
from showcase.routers.sessions import creator_router as creator_session_router

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ── Lifespan ────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""

    # Signing key is read here, once, for the life of the process
    get_token_service()

    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Database connection verified ✓")
    except Exception:
        logger.warning(
            "Could not reach the database on startup. "
            "The app will start, but requests will fail until the DB is available."
        )

    yield

    await engine.dispose()
    logger.info("Database engine disposed ✓")


# ── App ─────────────────────────────────────────────────────
app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    description=(
        "Creator project showcase — public listing and ratings, "
        "creator dashboard, admin moderation."
    ),
    lifespan=lifespan,
)


# ── Error handlers ──────────────────────────────────────────
@app.exception_handler(AppError)
async def handle_app_error(_request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def handle_validation_error(
    _request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(SQLAlchemyError)
async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        "Unhandled database error on %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    error = InternalError()
    return JSONResponse(status_code=error.status_code, content={"detail": error.detail})


# Mount routers
app.include_router(public_router)
app.include_router(creator_session_router, prefix="/creator")
app.include_router(creator_router, prefix="/creator")
app.include_router(admin_session_router, prefix="/admin")
app.include_router(admin_router, prefix="/admin")


# ── Health check ────────────────────────────────────────────
@app.get(
    "/health",
    tags=["System"],
    summary="Liveness probe",
)
async def health_check() -> dict[str, str]:
    """Shallow health check: confirms the process is alive."""
    return {"status": "healthy"}

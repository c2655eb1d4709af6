"""
Async engine, session factory, ORM base, and the persistence helpers
shared by routers and services.

  • All persistence goes through AsyncSession.
  • One session per request via Depends(get_db_session).
  • commit_or_fail() is the single place where a failed write is rolled
    back, logged, and turned into a generic InternalError.
"""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from showcase.core.config import settings
from showcase.core.errors import InternalError

logger = logging.getLogger(__name__)

# pool_pre_ping: drop stale connections before reuse
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
)

async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Declarative base for every showcase table."""


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield the request's session; callers commit, this only closes."""
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


async def create_all(bind: AsyncEngine | None = None) -> None:
    """Create every mapped table. Dev bootstrap and tests only; prod uses Alembic."""
    # Import every model so Base.metadata is fully populated
    import showcase.models.admin  # noqa: F401
    import showcase.models.collaboration  # noqa: F401
    import showcase.models.comment  # noqa: F401
    import showcase.models.contact  # noqa: F401
    import showcase.models.creator  # noqa: F401
    import showcase.models.project  # noqa: F401
    import showcase.models.rating  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def commit_or_fail(session: AsyncSession, action: str) -> None:
    """
    Commit the unit of work or roll it back.

    Raises InternalError with a generic message; the database error is
    logged but never returned to the caller.
    """
    try:
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Failed to %s", action)
        raise InternalError(f"Failed to {action}. Please try again.") from exc

"""Async database session management."""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from journal.config import settings


def _engine_options() -> dict[str, Any]:
    """Pool options for the configured backend.

    SQLite (used for local runs and tests) does not accept pool sizing.
    """
    if settings.async_database_url.startswith("sqlite"):
        return {"echo": settings.database_echo}
    return {
        "pool_size": settings.database_pool_size,
        "max_overflow": settings.database_max_overflow,
        "echo": settings.database_echo,
        "pool_pre_ping": True,  # Verify connections before use
    }


# Create async engine
async_engine = create_async_engine(settings.async_database_url, **_engine_options())

# Create async session factory
async_session_factory = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that provides a database session.

    The session commits when the request handler returns normally and
    rolls back on any exception.

    Usage:
        @router.get("/items")
        async def list_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

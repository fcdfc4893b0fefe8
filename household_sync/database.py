"""
Database configuration and session management.

Provides:
- Async engine creation with proper configuration
- AsyncSessionLocal factory for creating database sessions
- get_async_session() dependency for FastAPI request-scoped sessions
- Database initialization utilities
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from household_sync.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

if settings.is_production:
    settings.validate_production_config()


def _get_async_database_url(sync_url: str) -> str:
    """Convert sync database URL to async URL."""
    if "sqlite" in sync_url.lower() and "aiosqlite" not in sync_url:
        return sync_url.replace("sqlite:///", "sqlite+aiosqlite:///")
    elif sync_url.startswith("postgresql://"):
        return sync_url.replace("postgresql://", "postgresql+asyncpg://")
    return sync_url


async_database_url = _get_async_database_url(settings.database_url)

if "sqlite" in settings.database_url.lower():
    async_engine = create_async_engine(
        async_database_url,
        echo=settings.log_level == "DEBUG",
    )
else:
    async_engine = create_async_engine(
        async_database_url,
        pool_size=5,  # Maximum number of connections in pool
        pool_recycle=3600,  # Recycle connections after 1 hour
        pool_pre_ping=True,  # Test connections before using them
        echo=settings.log_level == "DEBUG",
    )

AsyncSessionLocal = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for async database sessions.

    Yields an async database session that is automatically closed after the request.
    Automatically rolls back on exception.

    Yields:
        AsyncSession: SQLAlchemy async database session
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def get_async_db_context() -> AsyncGenerator[AsyncSession, None]:
    """
    Async context manager for database sessions outside FastAPI.

    Usage for scripts, tests, or background tasks:
        async with get_async_db_context() as session:
            store = CredentialStore(session)
            ...

    Yields:
        AsyncSession: SQLAlchemy async database session
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """
    Initialize database by creating all tables.

    This is useful for development and testing. In production, use Alembic migrations.
    """
    from household_sync.models.base import Base

    logger.info("Creating database tables...")
    async with async_engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    logger.info("Database tables created successfully")

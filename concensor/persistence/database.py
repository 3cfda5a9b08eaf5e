"""Async engine and session factory for the PostgreSQL store."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from concensor.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the asyncpg engine from ``settings.database``.

    SQL is echoed when ``settings.debug`` is set.
    """
    db = settings.database
    return create_async_engine(
        db.url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=db.pool_size,
        max_overflow=db.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory used for one transaction per request.

    Sessions never autoflush; repositories flush after each write so
    ``RETURNING`` rows and constraint errors surface at the call site.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

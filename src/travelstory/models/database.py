"""Async database connection management.

Provides the SQLAlchemy declarative base and a ``Database`` object that owns
the async engine and session factory for the lifetime of the application.
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class Database:
    """Engine and session factory opened at startup and closed at shutdown."""

    def __init__(self, database_url: str, **engine_kwargs: Any) -> None:
        """Create the engine and session factory.

        Args:
            database_url: Async connection URL (postgresql+asyncpg://... or sqlite+aiosqlite://...)
            **engine_kwargs: Additional arguments passed to create_async_engine
        """
        engine_kwargs.setdefault("echo", False)
        engine_kwargs.setdefault("pool_pre_ping", True)

        self.url = database_url
        self._engine: AsyncEngine | None = create_async_engine(database_url, **engine_kwargs)
        self._session_factory: async_sessionmaker[AsyncSession] | None = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @property
    def engine(self) -> AsyncEngine:
        """Get the database engine.

        Raises:
            RuntimeError: If the database has been closed.
        """
        if self._engine is None:
            raise RuntimeError("Database is closed")
        return self._engine

    async def create_all(self) -> None:
        """Create all tables registered on ``Base.metadata``."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session, committing on success and rolling back on error.

        Raises:
            RuntimeError: If the database has been closed.
        """
        if self._session_factory is None:
            raise RuntimeError("Database is closed")
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def close(self) -> None:
        """Dispose of pooled connections.

        Should be called during application shutdown.
        """
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None

"""
Database adapters for switching between SQLite and PostgreSQL.

An adapter owns the process-wide async engine and session factory. It is
created once at startup (see :class:`DatabaseAdapterFactory`), handed to
every repository, and closed once at shutdown.
"""

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker


class DatabaseAdapter(ABC):
    """Abstract base class for database adapters."""

    def __init__(self, database_url: str):
        """Initialize the adapter.

        Args:
            database_url: SQLAlchemy async database URL
        """
        self.database_url = database_url
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker] = None

    @abstractmethod
    async def init(self) -> None:
        """Create the engine and session factory."""
        pass

    async def close(self) -> None:
        """Dispose of the engine and its connection pool."""
        if self.engine:
            await self.engine.dispose()
            self.engine = None
            self.session_factory = None

    @property
    def is_initialized(self) -> bool:
        return self.session_factory is not None

    def _make_session_factory(self) -> async_sessionmaker:
        return async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Open a session for one unit of work.

        Yields:
            AsyncSession: a new session, closed on exit

        Raises:
            RuntimeError: if :meth:`init` has not been called
        """
        if not self.session_factory:
            raise RuntimeError("Database not initialized. Call init() first.")
        async with self.session_factory() as session:
            yield session

    async def create_tables(self) -> None:
        """Create every mapped table that does not exist yet."""
        from tenantdb.models import Base

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_tables(self) -> None:
        """Drop every mapped table."""
        from tenantdb.models import Base

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

"""
PostgreSQL database adapter.
"""

import logging

from sqlalchemy.ext.asyncio import create_async_engine

from tenantdb.adapters.database import DatabaseAdapter
from tenantdb.utils.config import Settings, get_settings

logger = logging.getLogger(__name__)


def to_async_url(database_url: str) -> str:
    """Rewrite a plain ``postgresql://`` URL to use the asyncpg driver."""
    for prefix in ("postgresql://", "postgres://"):
        if database_url.startswith(prefix):
            return "postgresql+asyncpg://" + database_url[len(prefix):]
    return database_url


class PostgresAdapter(DatabaseAdapter):
    """PostgreSQL database adapter backed by a pooled asyncpg engine."""

    def __init__(self, database_url: str = None, settings: Settings = None):
        """Initialize the adapter.

        Args:
            database_url (str, optional): Database connection URL
            settings (Settings, optional): Pool sizing source, defaults to :func:`get_settings`
        """
        super().__init__(to_async_url(database_url) if database_url else None)
        self.settings = settings or get_settings()

    async def init(self) -> None:
        """Initialize the database connection pool."""
        if not self.database_url:
            raise ValueError("Database URL is required")

        # Async engines default to an async-adapted QueuePool
        self.engine = create_async_engine(
            self.database_url,
            echo=self.settings.DEBUG,
            pool_size=self.settings.POOL_SIZE,
            max_overflow=self.settings.MAX_OVERFLOW,
            pool_timeout=self.settings.POOL_TIMEOUT,
            pool_recycle=self.settings.POOL_RECYCLE,
            pool_pre_ping=True
        )
        self.session_factory = self._make_session_factory()

        logger.info(
            f"Initialized PostgreSQL pool (size={self.settings.POOL_SIZE}, "
            f"max_overflow={self.settings.MAX_OVERFLOW})"
        )

    async def close(self) -> None:
        """Close the database connection pool."""
        await super().close()
        logger.info("Closed PostgreSQL connection pool")

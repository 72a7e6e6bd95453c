"""
SQLite database adapter implementation.

Used for development and tests. In-memory databases share one connection
through ``StaticPool`` so every session sees the same data; file databases
use ``NullPool``.
"""

import logging

from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from tenantdb.adapters.database import DatabaseAdapter

logger = logging.getLogger(__name__)

IN_MEMORY_URL = "sqlite+aiosqlite://"


def is_in_memory(database_url: str) -> bool:
    return database_url in (IN_MEMORY_URL, "sqlite+aiosqlite:///:memory:")


class SQLiteAdapter(DatabaseAdapter):
    """SQLite adapter implementation."""

    def __init__(self, database_url: str = None, echo: bool = False, create_tables: bool = True):
        """Initialize the SQLite adapter.

        Args:
            database_url: Optional database URL. If not provided, uses in-memory SQLite.
            echo: Log every SQL statement
            create_tables: Create missing tables during :meth:`init`
        """
        super().__init__(database_url or IN_MEMORY_URL)
        self.echo = echo
        self.auto_create_tables = create_tables

    async def init(self) -> None:
        """Initialize the SQLite database connection and create tables."""
        try:
            pool_args = {"poolclass": StaticPool} if is_in_memory(self.database_url) else {"poolclass": NullPool}
            self.engine = create_async_engine(
                self.database_url,
                connect_args={"check_same_thread": False},
                echo=self.echo,
                **pool_args
            )

            # SQLite ignores foreign keys unless asked per connection
            @event.listens_for(self.engine.sync_engine, "connect", insert=True)
            def _enable_foreign_keys(dbapi_connection, connection_record):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

            self.session_factory = self._make_session_factory()

            if self.auto_create_tables:
                await self.create_tables()

            logger.info(f"Initialized SQLite database at {self.database_url}")
        except Exception as e:
            logger.error(f"Error initializing SQLite database: {str(e)}")
            raise

    async def close(self) -> None:
        """Close the SQLite database connection."""
        await super().close()
        logger.info("Closed SQLite database connection")

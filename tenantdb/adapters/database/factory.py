"""
Database adapter factory.

This module provides a factory for creating the appropriate database adapter
based on the configured database URL.
"""

import logging
from typing import Optional

from tenantdb.adapters.database import DatabaseAdapter
from tenantdb.adapters.database.postgres import PostgresAdapter
from tenantdb.adapters.database.sqlite import SQLiteAdapter
from tenantdb.utils.config import get_settings

logger = logging.getLogger(__name__)


def create_adapter(database_url: str) -> DatabaseAdapter:
    """Build an uninitialized adapter for ``database_url``.

    Raises:
        ValueError: if the URL is neither SQLite nor PostgreSQL
    """
    if database_url.startswith("sqlite"):
        return SQLiteAdapter(database_url, echo=get_settings().DEBUG)
    if database_url.startswith(("postgresql", "postgres")):
        return PostgresAdapter(database_url)
    raise ValueError(f"Unsupported database URL scheme: {database_url.split(':', 1)[0]}")


class DatabaseAdapterFactory:
    """Factory for the process-wide database adapter."""

    _instance: Optional[DatabaseAdapter] = None

    @classmethod
    async def get_adapter(cls, database_url: Optional[str] = None) -> DatabaseAdapter:
        """Get the database adapter, creating and initializing it on first use.

        Args:
            database_url: Overrides ``DATABASE_URL`` from settings on first call

        Returns:
            DatabaseAdapter: The configured database adapter

        Only one adapter instance exists per process; later calls return it
        unchanged until :meth:`close_adapter` is called.
        """
        if cls._instance is None:
            url = database_url or get_settings().DATABASE_URL
            adapter = create_adapter(url)
            await adapter.init()
            cls._instance = adapter
            logger.info(f"Using {type(adapter).__name__}")

        return cls._instance

    @classmethod
    async def close_adapter(cls) -> None:
        """Close the current database adapter if it exists."""
        if cls._instance:
            await cls._instance.close()
            cls._instance = None
            logger.info("Closed database adapter")

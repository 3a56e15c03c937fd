# =============================================================================
# DOG ADOPTION PLATFORM API - SQLITE ADAPTER
# =============================================================================
# File: db/adapters/sqlite_adapter.py
# Description: SQLite database adapter for development and testing
#              Uses aiosqlite for async operations with SQLAlchemy
# =============================================================================

from typing import Any, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine

from dog_adoption.db.base import BaseDBAdapter
from dog_adoption.core.config import Settings


class SQLiteAdapter(BaseDBAdapter):
    """
    ┌─────────────────────────────────────────────────────────────────────────┐
    │                    SQLITE DATABASE ADAPTER                               │
    │  Async SQLite implementation for development and testing environments   │
    │  Uses aiosqlite driver with SQLAlchemy async ORM                        │
    └─────────────────────────────────────────────────────────────────────────┘

    Every transaction is opened with ``BEGIN IMMEDIATE``. A second writer
    then blocks on the busy timeout until the first commits, and its
    conditional UPDATE sees the committed row. With the driver's default
    deferred BEGIN the second writer would fail with a stale snapshot.

    Usage:
        adapter = SQLiteAdapter(settings)
        await adapter.connect()
        async with adapter.get_session() as session:
            # perform database operations
        await adapter.disconnect()
    """

    BUSY_TIMEOUT_MS = 30000

    def __init__(
        self,
        settings: Settings,
        database_url: Optional[str] = None,
        **kwargs: Any
    ):
        """
        Initialize SQLite adapter.

        Args:
            settings: Application settings
            database_url: Optional custom database URL
                         Defaults to settings.database_url
            **kwargs: Additional engine options
        """
        self._settings = settings
        self._uses_settings_path = database_url is None
        if database_url is None:
            database_url = settings.database_url

        default_options = {
            "echo": settings.debug,
            "connect_args": {
                "check_same_thread": False,
                "timeout": self.BUSY_TIMEOUT_MS / 1000,
            },
        }
        default_options.update(kwargs)

        super().__init__(database_url, **default_options)

    async def connect(self) -> None:
        """Create the database directory, then the engine."""
        if self._uses_settings_path:
            self._settings.ensure_sqlite_directory()
        await super().connect()

    def _configure_engine(self, engine: AsyncEngine) -> None:
        """
        Apply per-connection PRAGMAs and take over transaction control.
        """
        in_memory = ":memory:" in self._database_url

        @event.listens_for(engine.sync_engine, "connect")
        def _on_connect(dbapi_connection, connection_record):
            # Hand BEGIN to SQLAlchemy so the "begin" hook below is used
            dbapi_connection.isolation_level = None
            cursor = dbapi_connection.cursor()
            if not in_memory:
                cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.execute("PRAGMA synchronous=NORMAL")
            cursor.execute(f"PRAGMA busy_timeout={self.BUSY_TIMEOUT_MS}")
            cursor.close()

        @event.listens_for(engine.sync_engine, "begin")
        def _on_begin(conn):
            conn.exec_driver_sql("BEGIN IMMEDIATE")

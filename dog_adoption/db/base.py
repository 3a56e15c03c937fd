# =============================================================================
# DOG ADOPTION PLATFORM API - DATABASE BASE MODULE
# =============================================================================
# File: db/base.py
# Description: Declarative base and the shared async database adapter
#              SQLite and PostgreSQL adapters extend BaseDBAdapter
# =============================================================================

from typing import Any, Optional, AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from sqlalchemy import DateTime, MetaData, text
from sqlalchemy.types import TypeDecorator
from sqlalchemy.ext.asyncio import (
    create_async_engine,
    AsyncSession,
    AsyncEngine,
    async_sessionmaker,
)
from sqlalchemy.orm import DeclarativeBase


# =============================================================================
# SQLALCHEMY BASE CONFIGURATION
# =============================================================================

# Naming convention for constraints (important for migrations)
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base with custom metadata.
    All ORM models inherit from this base class.
    """
    metadata = metadata


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware DateTime that is always stored and returned in UTC.

    SQLite keeps no offset, so values read back are naive. They are
    re-tagged as UTC here so every backend yields aware datetimes.
    """
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(
        self,
        value: Optional[datetime],
        dialect: Any,
    ) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(
        self,
        value: Optional[datetime],
        dialect: Any,
    ) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


# =============================================================================
# BASE ADAPTER IMPLEMENTATION
# =============================================================================

class BaseDBAdapter:
    """
    ┌─────────────────────────────────────────────────────────────────────────┐
    │                    DATABASE ADAPTER                                      │
    │  Owns the async engine (connection pool) and the session factory       │
    │  Concrete adapters supply driver-specific engine options               │
    └─────────────────────────────────────────────────────────────────────────┘

    Methods:
        connect()       - Create engine and session factory
        disconnect()    - Dispose of the connection pool
        get_session()   - Transactional session context manager
        create_tables() - Initialize database schema
        ping()          - Round-trip check used by readiness probes
    """

    def __init__(self, database_url: str, **engine_options: Any):
        """
        Initialize base adapter with database URL.

        Args:
            database_url: Async-compatible database URL
            **engine_options: Additional SQLAlchemy engine options
        """
        self._database_url = database_url
        self._engine_options = engine_options
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self._is_connected = False

    async def connect(self) -> None:
        """
        Create async engine and session factory.

        Initializes connection pool with configured options.
        """
        if self._is_connected:
            return

        self._engine = create_async_engine(
            self._database_url,
            **self._engine_options
        )
        self._configure_engine(self._engine)

        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

        self._is_connected = True

    def _configure_engine(self, engine: AsyncEngine) -> None:
        """Hook for driver-specific engine event listeners."""

    async def disconnect(self) -> None:
        """
        Dispose of engine and cleanup connections.
        """
        if self._engine:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            self._is_connected = False

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provide session with automatic commit/rollback handling.

        Commits on successful exit, rolls back on exception.

        Usage:
            async with adapter.get_session() as session:
                result = await session.execute(query)
        """
        if not self._session_factory:
            await self.connect()

        session = self._session_factory()  # type: ignore
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create_tables(self) -> None:
        """
        Create all tables defined in SQLAlchemy metadata.
        """
        if not self._engine:
            await self.connect()

        async with self._engine.begin() as conn:  # type: ignore
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        """Run ``SELECT 1``. False if never connected; driver errors propagate."""
        if not self._engine:
            return False
        async with self._engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    @property
    def engine(self) -> AsyncEngine:
        """Get the SQLAlchemy engine."""
        if not self._engine:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._engine

    @property
    def is_connected(self) -> bool:
        """Check if database is connected."""
        return self._is_connected

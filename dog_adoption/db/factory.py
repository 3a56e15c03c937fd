# =============================================================================
# DOG ADOPTION PLATFORM API - DATABASE FACTORY
# =============================================================================
# File: db/factory.py
# Description: Factory functions for database adapter instantiation
#              Selects the SQL backend from settings; no cached instances
# =============================================================================

from typing import Any, Optional
from enum import Enum

from dog_adoption.db.base import BaseDBAdapter
from dog_adoption.db.adapters.sqlite_adapter import SQLiteAdapter
from dog_adoption.db.adapters.postgres_adapter import PostgresAdapter
from dog_adoption.db.adapters.redis_adapter import RedisAdapter
from dog_adoption.core.config import Settings


class DatabaseType(str, Enum):
    """Supported database types."""
    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"


def create_db_adapter(
    settings: Settings,
    db_type: Optional[str] = None,
    **kwargs: Any
) -> BaseDBAdapter:
    """
    Build the database adapter for the configured backend.

    Every call returns a new adapter; the caller (normally the
    ``AppContext``) owns its lifetime.

    Args:
        settings: Application settings
        db_type: Override database type (sqlite/postgresql)
                Defaults to settings.db_type
        **kwargs: Additional options passed to adapter

    Returns:
        BaseDBAdapter: Configured, not yet connected, database adapter

    Raises:
        ValueError: If unsupported database type specified
    """
    selected_type = db_type or settings.db_type

    if selected_type == DatabaseType.SQLITE:
        return SQLiteAdapter(settings, **kwargs)
    if selected_type == DatabaseType.POSTGRESQL:
        return PostgresAdapter(settings, **kwargs)

    raise ValueError(
        f"Unsupported database type: {selected_type}. "
        f"Supported types: {[t.value for t in DatabaseType]}"
    )


def create_redis_adapter(settings: Settings, **kwargs: Any) -> Optional[RedisAdapter]:
    """
    Build the Redis adapter backing the rate limiter.

    Returns:
        Optional[RedisAdapter]: None when Redis is disabled in settings
    """
    if not settings.redis_enabled:
        return None
    return RedisAdapter(settings, **kwargs)

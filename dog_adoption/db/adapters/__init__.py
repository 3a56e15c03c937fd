# =============================================================================
# DATABASE ADAPTERS INITIALIZATION
# =============================================================================
# File: db/adapters/__init__.py
# Description: Database adapter exports
# =============================================================================

from dog_adoption.db.adapters.sqlite_adapter import SQLiteAdapter
from dog_adoption.db.adapters.postgres_adapter import PostgresAdapter
from dog_adoption.db.adapters.redis_adapter import RedisAdapter

__all__ = [
    "SQLiteAdapter",
    "PostgresAdapter",
    "RedisAdapter",
]

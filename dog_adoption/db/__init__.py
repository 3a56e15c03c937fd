# =============================================================================
# DATABASE MODULE INITIALIZATION
# =============================================================================
# File: db/__init__.py
# Description: Database module exports
# =============================================================================

from dog_adoption.db.base import Base, BaseDBAdapter, UTCDateTime
from dog_adoption.db.models import User, Dog, DogStatus
from dog_adoption.db.factory import (
    DatabaseType,
    create_db_adapter,
    create_redis_adapter,
)
from dog_adoption.db.adapters import (
    SQLiteAdapter,
    PostgresAdapter,
    RedisAdapter,
)

__all__ = [
    # Base
    "Base",
    "BaseDBAdapter",
    "UTCDateTime",

    # Models
    "User",
    "Dog",
    "DogStatus",

    # Factory
    "DatabaseType",
    "create_db_adapter",
    "create_redis_adapter",

    # Adapters
    "SQLiteAdapter",
    "PostgresAdapter",
    "RedisAdapter",
]

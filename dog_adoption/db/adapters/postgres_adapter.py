# =============================================================================
# DOG ADOPTION PLATFORM API - POSTGRESQL ADAPTER
# =============================================================================
# File: db/adapters/postgres_adapter.py
# Description: PostgreSQL database adapter for production environments
#              Uses asyncpg for high-performance async operations
# =============================================================================

from typing import Any, Optional

from dog_adoption.db.base import BaseDBAdapter
from dog_adoption.core.config import Settings


class PostgresAdapter(BaseDBAdapter):
    """
    ┌─────────────────────────────────────────────────────────────────────────┐
    │                    POSTGRESQL DATABASE ADAPTER                           │
    │  High-performance async PostgreSQL implementation for production        │
    │  Uses asyncpg driver with SQLAlchemy async ORM                          │
    └─────────────────────────────────────────────────────────────────────────┘

    Runs at READ COMMITTED. A conditional UPDATE that loses a race waits on
    the row lock and re-evaluates its WHERE clause against the committed
    row, so no explicit locking is needed for the adoption transition.

    Connection Pool Configuration:
        - pool_size:     Initial connections (default: 5)
        - max_overflow:  Extra connections allowed (default: 10)
        - pool_timeout:  Wait time for connection (default: 30s)
        - pool_recycle:  Recycle connections after (default: 1800s)
    """

    def __init__(
        self,
        settings: Settings,
        database_url: Optional[str] = None,
        **kwargs: Any
    ):
        """
        Initialize PostgreSQL adapter with connection pool.

        Args:
            settings: Application settings
            database_url: Optional custom database URL
                         Defaults to settings.database_url
            **kwargs: Additional engine options overriding defaults
        """
        if database_url is None:
            database_url = settings.database_url

        default_options = {
            "pool_size": settings.db_pool_size,
            "max_overflow": settings.db_max_overflow,
            "pool_timeout": settings.db_pool_timeout,
            "pool_recycle": 1800,
            "pool_pre_ping": True,
            "isolation_level": "READ COMMITTED",
            "echo": settings.debug and settings.is_development,
            "connect_args": {
                "server_settings": {
                    "application_name": settings.app_name,
                },
                "command_timeout": 60,
            },
        }
        default_options.update(kwargs)

        super().__init__(database_url, **default_options)

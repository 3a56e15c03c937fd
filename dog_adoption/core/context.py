# =============================================================================
# DOG ADOPTION PLATFORM API - APPLICATION CONTEXT
# =============================================================================
# File: core/context.py
# Description: Explicit container for process-wide resources
#              Built once at startup and stored on app.state.context
# =============================================================================

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from dog_adoption.core.config import Settings
from dog_adoption.core.exceptions import DatabaseError, RedisConnectionError
from dog_adoption.core.security import PasswordManager, JWTManager
from dog_adoption.db.base import BaseDBAdapter
from dog_adoption.db.adapters.redis_adapter import RedisAdapter
from dog_adoption.db.factory import create_db_adapter, create_redis_adapter


logger = logging.getLogger(__name__)


class AppContext:
    """
    ┌─────────────────────────────────────────────────────────────────────────┐
    │                    APPLICATION CONTEXT                                   │
    │  Owns settings, the SQL adapter, the Redis adapter and the crypto      │
    │  helpers. Request handlers reach it through FastAPI dependencies.      │
    └─────────────────────────────────────────────────────────────────────────┘

    Usage:
        context = AppContext.from_settings(get_settings())
        await context.startup()
        ...
        await context.shutdown()
    """

    def __init__(
        self,
        settings: Settings,
        db: BaseDBAdapter,
        redis: Optional[RedisAdapter] = None,
        password_manager: Optional[PasswordManager] = None,
        jwt_manager: Optional[JWTManager] = None,
    ):
        self.settings = settings
        self.db = db
        self.redis = redis
        self.password_manager = password_manager or PasswordManager(settings)
        self.jwt_manager = jwt_manager or JWTManager(settings)

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        """Build a context with the adapters selected by ``settings``."""
        return cls(
            settings=settings,
            db=create_db_adapter(settings),
            redis=create_redis_adapter(settings),
        )

    async def startup(self) -> None:
        """
        Connect the database and Redis.

        Raises:
            DatabaseError: If the database cannot be reached
            RedisConnectionError: If Redis is down in production
        """
        try:
            await self.db.connect()
            if self.settings.is_development:
                await self.db.create_tables()
                logger.info("Database tables created/verified")
            await self.db.ping()
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Database connection failed: {e}")
            raise DatabaseError(error_code="DATABASE_CONNECTION_ERROR") from e
        logger.info("Database connection established")

        if self.redis is None:
            logger.info("Redis disabled, rate limiting runs without counters")
            return

        try:
            await self.redis.connect()
            logger.info("Redis connection established")
        except RedisConnectionError:
            if self.settings.is_production:
                raise
            logger.warning(
                "Redis unavailable, rate limiting disabled for this process"
            )
            await self.redis.disconnect()
            self.redis = None

    async def shutdown(self) -> None:
        """Close all connections."""
        if self.redis is not None:
            await self.redis.disconnect()
            logger.info("Redis connection closed")

        await self.db.disconnect()
        logger.info("Database connection closed")

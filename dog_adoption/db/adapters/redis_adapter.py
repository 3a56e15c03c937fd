# =============================================================================
# DOG ADOPTION PLATFORM API - REDIS ADAPTER
# =============================================================================
# File: db/adapters/redis_adapter.py
# Description: Redis adapter holding the shared rate limit counters
#              Uses the redis-py async client
# =============================================================================

from typing import Any, Optional

from redis.asyncio import Redis, ConnectionPool
from redis.exceptions import RedisError

from dog_adoption.core.config import Settings
from dog_adoption.core.exceptions import RedisConnectionError


class RedisAdapter:
    """
    ┌─────────────────────────────────────────────────────────────────────────┐
    │                    REDIS ADAPTER                                         │
    │  Shared counters for the global rate limiter                            │
    │  Keeps request counting out of process memory                           │
    └─────────────────────────────────────────────────────────────────────────┘

    Key Patterns:
        - rate:{ip}  → Request counter for the current window
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        redis_url: Optional[str] = None,
        client: Optional[Redis] = None,
        **kwargs: Any
    ):
        """
        Initialize Redis adapter with connection pool.

        Args:
            settings: Application settings (source of the default URL)
            redis_url: Optional Redis URL, defaults to settings.redis_url
            client: Pre-built client (e.g. fakeredis in tests); no pool is
                created when given
            **kwargs: Additional redis-py options
        """
        if redis_url is None and settings is not None:
            redis_url = settings.redis_url
        self._redis_url = redis_url or "redis://localhost:6379/0"
        self._options = kwargs

        self._default_options = {
            "max_connections": 10,
            "socket_timeout": 5.0,
            "socket_connect_timeout": 5.0,
            "retry_on_timeout": True,
            "decode_responses": True,
        }

        self._pool: Optional[ConnectionPool] = None
        self._client: Optional[Redis] = client
        self._is_connected = False

    async def connect(self) -> None:
        """
        Establish connection to Redis server.

        Raises:
            RedisConnectionError: If connection fails
        """
        if self._is_connected:
            return

        try:
            if self._client is None:
                options = {**self._default_options, **self._options}
                self._pool = ConnectionPool.from_url(self._redis_url, **options)
                self._client = Redis(connection_pool=self._pool)

            await self._client.ping()
            self._is_connected = True

        except RedisError as e:
            raise RedisConnectionError(url=self._redis_url) from e

    async def disconnect(self) -> None:
        """
        Close Redis connection and cleanup resources.
        """
        if self._client:
            await self._client.aclose()
            self._client = None

        if self._pool:
            await self._pool.disconnect()
            self._pool = None

        self._is_connected = False

    def _ensure_connected(self) -> Redis:
        """Ensure client is connected and return it."""
        if not self._client or not self._is_connected:
            raise RuntimeError("Redis not connected. Call connect() first.")
        return self._client

    # =========================================================================
    # COUNTER OPERATIONS
    # =========================================================================

    async def incr_window(self, key: str, window_seconds: int) -> tuple[int, int]:
        """
        Increment a fixed-window counter.

        The window starts with the first request: a counter without a TTL
        gets one, so a lost EXPIRE is repaired by the next request.

        Args:
            key: Counter key
            window_seconds: Window length

        Returns:
            tuple[int, int]: (count in the current window, seconds until reset)
        """
        client = self._ensure_connected()
        async with client.pipeline(transaction=True) as pipe:
            pipe.incr(key)
            pipe.ttl(key)
            count, ttl = await pipe.execute()

        if ttl is None or ttl < 0:
            await client.expire(key, window_seconds)
            ttl = window_seconds
        return int(count), int(ttl)

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================

    async def check_health(self) -> bool:
        """
        Check Redis connection health.

        Returns:
            True if Redis is healthy
        """
        try:
            client = self._ensure_connected()
            return bool(await client.ping())
        except (RedisError, RuntimeError):
            return False

    @property
    def is_connected(self) -> bool:
        """Check if connected to Redis."""
        return self._is_connected

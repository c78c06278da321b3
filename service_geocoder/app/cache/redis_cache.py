"""
Redis caching layer for the Geocoder Service.
"""

from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from shared.logging import get_logger
from shared.errors import CacheUnavailableError, CacheWriteError


class RedisCache:
    """Byte-value Redis store with per-key TTL.

    A missing key reads as ``None``; every other Redis failure is raised as
    ``CacheUnavailableError`` (reads) or ``CacheWriteError`` (writes).
    """

    KEY_PREFIX = "geocode:"

    def __init__(
        self,
        redis_url: str,
        password: Optional[str] = None,
        client: Optional[redis.Redis] = None
    ):
        self.redis_url = redis_url
        self.logger = get_logger("geocoder.cache.redis")

        if client is None:
            options = {
                "socket_connect_timeout": 5,
                "socket_timeout": 5,
                "health_check_interval": 30,
            }
            if password:
                options["password"] = password
            client = redis.from_url(redis_url, **options)
        self.redis: redis.Redis = client

    async def start(self):
        """Verify the Redis connection."""
        try:
            await self.redis.ping()
            self.logger.info("Redis cache started")
        except RedisError as e:
            self.logger.error("Failed to start Redis cache", error=str(e))
            raise CacheUnavailableError(f"Failed to connect to Redis: {e}")

    async def stop(self):
        """Stop the Redis cache."""
        await self.redis.aclose()
        self.logger.info("Redis cache stopped")

    async def get(self, key: str) -> Optional[bytes]:
        """Get a cached value, or None if the key does not exist."""
        cache_key = self._make_key(key)
        try:
            value = await self.redis.get(cache_key)
        except RedisError as e:
            self.logger.error("Error reading cache", cache_key=cache_key, error=str(e))
            raise CacheUnavailableError(str(e), details={"cache_key": cache_key})

        if value is None:
            self.logger.debug("Cache miss", cache_key=cache_key)
        else:
            self.logger.debug("Cache hit", cache_key=cache_key)
        return value

    async def set(self, key: str, value: bytes, ttl_seconds: int) -> None:
        """Store a value that expires after ttl_seconds."""
        cache_key = self._make_key(key)
        try:
            await self.redis.set(cache_key, value, ex=ttl_seconds)
        except RedisError as e:
            self.logger.error("Error writing cache", cache_key=cache_key, error=str(e))
            raise CacheWriteError(str(e), details={"cache_key": cache_key})

        self.logger.debug("Cached value", cache_key=cache_key, ttl=ttl_seconds)

    def _make_key(self, key: str) -> str:
        return f"{self.KEY_PREFIX}{key}"

    async def health_check(self) -> bool:
        """Check Redis health."""
        try:
            await self.redis.ping()
            return True
        except RedisError:
            return False

"""
Unit tests for the Geocoder Redis cache.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from redis.exceptions import ConnectionError as RedisConnectionError, ResponseError

from shared.errors import CacheUnavailableError, CacheWriteError
from service_geocoder.app.cache.redis_cache import RedisCache


class TestRedisCache:
    """Test cases for RedisCache."""

    @pytest.fixture
    def redis_client(self):
        """Mock redis.asyncio client."""
        client = MagicMock()
        client.get = AsyncMock(return_value=None)
        client.set = AsyncMock(return_value=True)
        client.ping = AsyncMock(return_value=True)
        client.aclose = AsyncMock()
        return client

    @pytest.fixture
    def cache(self, redis_client):
        return RedisCache("redis://localhost:6379/0", client=redis_client)

    @pytest.mark.asyncio
    async def test_get_missing_key_returns_none(self, cache, redis_client):
        """A missing key is reported as None, not an error."""
        assert await cache.get("paris") is None
        redis_client.get.assert_awaited_once_with("geocode:paris")

    @pytest.mark.asyncio
    async def test_get_returns_stored_bytes(self, cache, redis_client):
        redis_client.get.return_value = b"[]"

        assert await cache.get("paris") == b"[]"

    @pytest.mark.asyncio
    async def test_get_connection_error_is_unavailable(self, cache, redis_client):
        """Connectivity failures are distinct from a missing key."""
        redis_client.get.side_effect = RedisConnectionError("Connection refused")

        with pytest.raises(CacheUnavailableError) as exc_info:
            await cache.get("paris")

        assert exc_info.value.code == "CACHE_UNAVAILABLE"
        assert exc_info.value.details == {"cache_key": "geocode:paris"}

    @pytest.mark.asyncio
    async def test_set_uses_ttl(self, cache, redis_client):
        await cache.set("paris", b"[]", 15)

        redis_client.set.assert_awaited_once_with("geocode:paris", b"[]", ex=15)

    @pytest.mark.asyncio
    async def test_set_failure_raises_write_error(self, cache, redis_client):
        redis_client.set.side_effect = ResponseError("READONLY")

        with pytest.raises(CacheWriteError) as exc_info:
            await cache.set("paris", b"[]", 15)

        assert exc_info.value.code == "CACHE_WRITE_FAILED"

    @pytest.mark.asyncio
    async def test_start_pings(self, cache, redis_client):
        await cache.start()

        redis_client.ping.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_start_fails_when_unreachable(self, cache, redis_client):
        """Startup fails fast when Redis cannot be reached."""
        redis_client.ping.side_effect = RedisConnectionError("Connection refused")

        with pytest.raises(CacheUnavailableError):
            await cache.start()

    @pytest.mark.asyncio
    async def test_stop_closes_client(self, cache, redis_client):
        await cache.stop()

        redis_client.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_health_check(self, cache, redis_client):
        assert await cache.health_check() is True

        redis_client.ping.side_effect = RedisConnectionError("down")
        assert await cache.health_check() is False

    def test_client_built_from_url(self):
        """Without an injected client one is built from the URL with timeouts."""
        with patch("service_geocoder.app.cache.redis_cache.redis.from_url") as mock_from_url:
            cache = RedisCache("rediss://cache.example.com:6380/0", password="secret")

        mock_from_url.assert_called_once_with(
            "rediss://cache.example.com:6380/0",
            socket_connect_timeout=5,
            socket_timeout=5,
            health_check_interval=30,
            password="secret"
        )
        assert cache.redis is mock_from_url.return_value

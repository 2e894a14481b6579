"""
Tests for the rate limiter.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from certverify.core import rate_limit
from certverify.core.rate_limit import (
    RateLimitExceeded,
    check_rate_limit,
    client_ip_key,
    enforce_rate_limit,
)


def _redis_with_count(count: int) -> MagicMock:
    pipe = MagicMock()
    pipe.execute = AsyncMock(return_value=[0, count, 1, True])
    client = MagicMock()
    client.pipeline.return_value = pipe
    return client


class TestCheckRateLimit:
    """Tests for check_rate_limit."""

    @pytest.mark.asyncio
    async def test_memory_fallback_allows_up_to_limit(self):
        with patch("certverify.core.rate_limit.get_redis_client", return_value=None):
            results = [await check_rate_limit("test:memory", 2, 60) for _ in range(3)]

        assert results == [True, True, False]

    @pytest.mark.asyncio
    async def test_keys_are_counted_separately(self):
        with patch("certverify.core.rate_limit.get_redis_client", return_value=None):
            assert await check_rate_limit("test:a", 1, 60) is True
            assert await check_rate_limit("test:b", 1, 60) is True
            assert await check_rate_limit("test:a", 1, 60) is False

    @pytest.mark.asyncio
    async def test_redis_under_limit(self):
        client = _redis_with_count(4)

        with patch("certverify.core.rate_limit.get_redis_client", return_value=client):
            assert await check_rate_limit("test:redis", 5, 60) is True

        client.pipeline.return_value.zadd.assert_called_once()
        client.pipeline.return_value.expire.assert_called_once_with("test:redis", 60)

    @pytest.mark.asyncio
    async def test_redis_at_limit(self):
        client = _redis_with_count(5)

        with patch("certverify.core.rate_limit.get_redis_client", return_value=client):
            assert await check_rate_limit("test:redis", 5, 60) is False

    @pytest.mark.asyncio
    async def test_redis_failure_falls_back_to_memory(self):
        client = MagicMock()
        client.pipeline.return_value.execute = AsyncMock(side_effect=ConnectionError("down"))

        with patch("certverify.core.rate_limit.get_redis_client", return_value=client):
            assert await check_rate_limit("test:fallback", 1, 60) is True
            assert await check_rate_limit("test:fallback", 1, 60) is False


class TestMemoryFallbackCleanup:
    """Expired buckets do not pile up in the per-process store."""

    @pytest.mark.asyncio
    async def test_expired_client_buckets_are_dropped(self):
        clock = MagicMock()
        clock.time.return_value = 1_000_000.0

        with (
            patch("certverify.core.rate_limit.get_redis_client", return_value=None),
            patch("certverify.core.rate_limit.time", clock),
        ):
            for i in range(1000):
                await check_rate_limit(f"verify_search:10.0.{i // 256}.{i % 256}", 30, 60)
            assert len(rate_limit._memory_store) == 1000

            clock.time.return_value += 3600
            await check_rate_limit("verify_search:203.0.113.7", 30, 60)

        assert list(rate_limit._memory_store) == ["verify_search:203.0.113.7"]

    @pytest.mark.asyncio
    async def test_buckets_inside_the_window_survive_a_sweep(self):
        clock = MagicMock()
        clock.time.return_value = 1_000_000.0

        with (
            patch("certverify.core.rate_limit.get_redis_client", return_value=None),
            patch("certverify.core.rate_limit.time", clock),
        ):
            await check_rate_limit("verify_search:old", 30, 60)
            clock.time.return_value += 45
            await check_rate_limit("verify_search:recent", 30, 60)
            clock.time.return_value += 30
            await check_rate_limit("verify_search:new", 30, 60)

        assert set(rate_limit._memory_store) == {"verify_search:recent", "verify_search:new"}


class TestEnforceRateLimit:
    """Tests for enforce_rate_limit."""

    @pytest.mark.asyncio
    async def test_raises_429_when_exceeded(self):
        with patch("certverify.core.rate_limit.get_redis_client", return_value=None):
            await enforce_rate_limit("admin:test:1", 1, 30)

            with pytest.raises(RateLimitExceeded) as exc_info:
                await enforce_rate_limit("admin:test:1", 1, 30)

        assert exc_info.value.status_code == 429
        assert exc_info.value.headers["Retry-After"] == "30"
        assert exc_info.value.detail["retry_after_seconds"] == 30


class TestClientIpKey:
    """Tests for client_ip_key."""

    def test_uses_client_host(self):
        request = MagicMock()
        request.client.host = "203.0.113.7"

        assert client_ip_key("verify_search")(request) == "verify_search:203.0.113.7"

    def test_unknown_client(self):
        request = MagicMock()
        request.client = None

        assert client_ip_key("contact_message")(request) == "contact_message:unknown"

"""
Redis Configuration

Async Redis client backing the rate limiter.
"""

from redis.asyncio import Redis, from_url

from certverify.core.config import settings

# Redis client instance
redis_client: Redis | None = None


async def init_redis() -> Redis:
    """
    Initialize Redis connection.

    Call this on application startup.
    """
    global redis_client
    client = from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
    )
    try:
        await client.ping()
    except Exception:
        await client.aclose()
        raise
    redis_client = client
    return redis_client


def get_redis_client() -> Redis | None:
    """Return the shared client, or None if Redis was never connected."""
    return redis_client


async def close_redis() -> None:
    """Close Redis connection."""
    global redis_client
    if redis_client:
        await redis_client.aclose()
        redis_client = None

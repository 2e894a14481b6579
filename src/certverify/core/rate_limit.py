"""
Rate Limiting

Sliding-window request limits keyed by a caller identity: the client IP
for public endpoints, the admin id for back office mutations.

Windows live in Redis sorted sets (one member per request, scored by its
timestamp) so every API process shares them. When Redis is not connected
or errors, a per-process dict takes over.

Limited surfaces:
- GET /verify/search (slows down enumeration of admission/certificate numbers)
- POST /contact-messages (spam)
- admin create/update/delete endpoints
"""

import logging
import time
from collections.abc import Callable
from functools import wraps
from typing import Any

from fastapi import HTTPException, Request, status

from certverify.core.redis import get_redis_client

logger = logging.getLogger(__name__)

# Fallback windows: key -> request timestamps inside the current window
_memory_store: dict[str, list[float]] = {}
_memory_max_window = 0
_memory_last_sweep = 0.0

# Expired buckets are swept once per window, or sooner past this many keys
MEMORY_MAX_KEYS = 10_000


class RateLimitExceeded(HTTPException):
    """HTTP 429 carrying a Retry-After header equal to the window length."""

    def __init__(self, limit: int, window_seconds: int):
        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail={
                "error": "RATE_LIMIT_EXCEEDED",
                "message": (
                    f"Too many requests. At most {limit} are allowed every "
                    f"{window_seconds} seconds; please wait and try again."
                ),
                "retry_after_seconds": window_seconds,
            },
            headers={"Retry-After": str(window_seconds)},
        )


async def _redis_window_allows(client, key: str, limit: int, window_seconds: int) -> bool:
    now = time.time()

    pipe = client.pipeline()
    pipe.zremrangebyscore(key, 0, now - window_seconds)
    pipe.zcard(key)
    pipe.zadd(key, {str(now): now})
    pipe.expire(key, window_seconds)
    _, in_window, _, _ = await pipe.execute()

    return in_window < limit


def _sweep_memory_store(now: float) -> None:
    # Drop buckets whose newest request is older than the longest window seen
    horizon = now - _memory_max_window
    for key in [k for k, stamps in _memory_store.items() if not stamps or stamps[-1] <= horizon]:
        del _memory_store[key]


def _memory_window_allows(key: str, limit: int, window_seconds: int) -> bool:
    # Per-process only; several workers each keep their own window
    global _memory_max_window, _memory_last_sweep

    now = time.time()
    _memory_max_window = max(_memory_max_window, window_seconds)
    if now - _memory_last_sweep >= _memory_max_window or len(_memory_store) > MEMORY_MAX_KEYS:
        _sweep_memory_store(now)
        _memory_last_sweep = now

    recent = [ts for ts in _memory_store.get(key, ()) if ts > now - window_seconds]

    allowed = len(recent) < limit
    if allowed:
        recent.append(now)

    if recent:
        _memory_store[key] = recent
    else:
        _memory_store.pop(key, None)

    return allowed


async def check_rate_limit(key: str, limit: int, window_seconds: int) -> bool:
    """
    Record a request under key and report whether it fits in the window.

    Args:
        key: Bucket name, e.g. "verify_search:203.0.113.7"
        limit: Requests allowed per window
        window_seconds: Window length in seconds

    Returns:
        True if the request is allowed
    """
    client = get_redis_client()

    if client is not None:
        try:
            return await _redis_window_allows(client, key, limit, window_seconds)
        except Exception as e:
            logger.warning(f"Redis unavailable for rate limit '{key}', using memory: {e}")

    return _memory_window_allows(key, limit, window_seconds)


async def enforce_rate_limit(key: str, limit: int, window_seconds: int) -> None:
    """
    Raise RateLimitExceeded if key has used up its window.

    Admin endpoints call this with keys like "admin:students_create:<admin id>".
    """
    if not await check_rate_limit(key, limit, window_seconds):
        logger.warning(f"Rate limit hit for '{key}' ({limit} per {window_seconds}s)")
        raise RateLimitExceeded(limit, window_seconds)


def client_ip_key(prefix: str) -> Callable[[Request], str]:
    """Key builder for public endpoints: one bucket per client IP under prefix."""

    def build_key(request: Request) -> str:
        host = request.client.host if request.client else "unknown"
        return f"{prefix}:{host}"

    return build_key


def rate_limit(
    limit: int,
    window_seconds: int,
    key_func: Callable[[Request], str],
):
    """
    Decorator limiting a public endpoint per caller.

    The endpoint must take a ``request: Request`` parameter, which is passed
    to key_func to pick the bucket.

    Usage:
        @router.get("/search")
        @rate_limit(limit=30, window_seconds=60, key_func=client_ip_key("verify_search"))
        async def search(request: Request, ...):
            ...
    """

    def decorator(endpoint: Callable) -> Callable:
        @wraps(endpoint)
        async def limited(*args: Any, **kwargs: Any) -> Any:
            request = kwargs.get("request")
            if not isinstance(request, Request):
                request = next((a for a in args if isinstance(a, Request)), None)
            if request is None:
                raise TypeError(f"{endpoint.__name__} needs a 'request: Request' parameter")

            await enforce_rate_limit(key_func(request), limit, window_seconds)
            return await endpoint(*args, **kwargs)

        return limited

    return decorator


__all__ = [
    "rate_limit",
    "check_rate_limit",
    "enforce_rate_limit",
    "client_ip_key",
    "RateLimitExceeded",
]

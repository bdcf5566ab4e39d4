"""Redis client backing the query cache.

The cockpit keeps only derived, re-loadable reads in Redis (see
``cockpit.services.query_cache``), so the client fails fast on a slow server
instead of stalling a request behind a cache lookup.
"""

import redis.asyncio as redis
import structlog

from cockpit.core.config import get_settings

logger = structlog.get_logger(__name__)

_redis: redis.Redis | None = None


async def init_redis(url: str | None = None) -> None:
    """Connect the query cache client and verify it answers PING. Idempotent."""
    global _redis

    if _redis is not None:
        return

    settings = get_settings()
    client = redis.from_url(
        url or settings.redis_url,
        decode_responses=True,
        socket_timeout=settings.query_cache_socket_timeout_seconds,
        socket_connect_timeout=settings.query_cache_socket_timeout_seconds,
        client_name="scenario-cockpit",
    )
    await client.ping()
    _redis = client
    logger.info("query_cache_connected", ttl_seconds=settings.query_cache_ttl_seconds)


async def close_redis() -> None:
    global _redis

    if _redis is not None:
        await _redis.aclose()
        _redis = None


def get_redis() -> redis.Redis:
    """Return the query cache client.

    Raises RuntimeError if init_redis() has not been called.
    """
    if _redis is None:
        raise RuntimeError("Query cache not connected. Call init_redis() first.")
    return _redis

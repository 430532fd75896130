"""
Redis Integration

Provides the async Redis client and connection management.
"""

import logging

import redis.asyncio as aioredis

from agenda.config.settings import get_settings

logger = logging.getLogger(__name__)

_async_redis_client: aioredis.Redis | None = None


def get_async_redis_client() -> aioredis.Redis:
    """
    Get async Redis client instance (singleton).

    The client connects lazily on its first command.

    Returns:
        Async Redis client instance
    """
    global _async_redis_client

    if _async_redis_client is not None:
        return _async_redis_client

    settings = get_settings()
    _async_redis_client = aioredis.Redis(
        host=settings.REDIS_HOST,
        port=settings.REDIS_PORT,
        db=settings.REDIS_DB,
        password=settings.REDIS_PASSWORD,
        decode_responses=True,
        socket_timeout=5.0,
        socket_connect_timeout=5.0,
    )
    logger.info(f"Async Redis client configured: {settings.REDIS_HOST}:{settings.REDIS_PORT}")
    return _async_redis_client


async def ping_async_redis() -> bool:
    """Check Redis connectivity without raising."""
    try:
        return bool(await get_async_redis_client().ping())
    except (aioredis.ConnectionError, aioredis.TimeoutError) as e:
        logger.warning(f"Async Redis ping failed: {e}")
        return False


async def close_async_redis_client() -> None:
    """Close async Redis client connection."""
    global _async_redis_client

    if _async_redis_client is not None:
        await _async_redis_client.aclose()
        _async_redis_client = None
        logger.info("Async Redis connection closed")

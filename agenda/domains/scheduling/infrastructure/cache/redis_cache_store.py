"""
Redis Cache Store

Redis implementation of ICacheStore using SCAN so invalidation never blocks
the server the way KEYS would.
"""

import logging
import re

import redis.asyncio as aioredis

from agenda.domains.scheduling.application.ports.cache_store import ICacheStore

logger = logging.getLogger(__name__)

_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


def prefix_pattern(prefix: str) -> str:
    """Build a SCAN MATCH pattern matching keys that start with ``prefix``."""
    escaped = _GLOB_SPECIAL.sub(r"\\\1", prefix)
    return f"{escaped}*"


class RedisCacheStore(ICacheStore):
    """
    Prefix invalidation over redis.asyncio.

    Usage:
        store = RedisCacheStore(get_async_redis_client())
        deleted = await store.invalidate_prefix("user:42:appointments")
    """

    def __init__(self, redis_client: aioredis.Redis, scan_count: int = 500):
        """
        Initialize cache store.

        Args:
            redis_client: Async Redis client
            scan_count: Keys per SCAN round trip and per DEL batch
        """
        self.redis = redis_client
        self.scan_count = scan_count

    async def invalidate_prefix(self, prefix: str) -> int:
        """Delete every key starting with ``prefix``; errors propagate."""
        pattern = prefix_pattern(prefix)
        deleted = 0
        batch: list[str] = []

        async for key in self.redis.scan_iter(match=pattern, count=self.scan_count):
            batch.append(key)
            if len(batch) >= self.scan_count:
                deleted += await self.redis.delete(*batch)
                batch = []

        if batch:
            deleted += await self.redis.delete(*batch)

        logger.debug(f"Redis invalidate_prefix({prefix}) deleted {deleted} keys")
        return deleted

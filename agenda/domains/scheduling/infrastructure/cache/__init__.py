"""
Scheduling cache adapters.
"""

from agenda.domains.scheduling.infrastructure.cache.redis_cache_store import RedisCacheStore

__all__ = ["RedisCacheStore"]

"""
Database client integrations.
"""

from agenda.integrations.databases.redis import (
    close_async_redis_client,
    get_async_redis_client,
    ping_async_redis,
)

__all__ = [
    "get_async_redis_client",
    "close_async_redis_client",
    "ping_async_redis",
]

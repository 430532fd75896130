"""
Cache Store Port

Key-value cache the booking flow only ever invalidates.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ICacheStore(Protocol):
    """Interface for caches supporting prefix invalidation."""

    async def invalidate_prefix(self, prefix: str) -> int:
        """
        Delete every entry whose key starts with ``prefix``.

        Args:
            prefix: Key prefix (e.g. "user:42:appointments")

        Returns:
            Number of keys deleted
        """
        ...

"""
Cache key namespaces owned by the scheduling domain.
"""


def appointments_cache_prefix(user_id: int) -> str:
    """Prefix of every cached entry derived from a user's appointment list."""
    return f"user:{user_id}:appointments"

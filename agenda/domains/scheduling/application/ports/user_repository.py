"""
User Repository Port

Interface for user lookups needed by the booking flow.
"""

from typing import Protocol, runtime_checkable

from agenda.domains.scheduling.domain.entities.user import User


@runtime_checkable
class IUserRepository(Protocol):
    """
    User repository interface.

    Read-only: users are created and edited by another subsystem.
    """

    async def find_by_id(self, user_id: int) -> User | None:
        """
        Find user by ID.

        Args:
            user_id: Unique user identifier

        Returns:
            User if found, None otherwise
        """
        ...

    async def find_provider(self, user_id: int) -> User | None:
        """
        Find a user that is a provider.

        Args:
            user_id: Unique user identifier

        Returns:
            User if it exists and ``is_provider`` is set, None otherwise
        """
        ...

"""
Notification Sink Port

Write-only destination for user notifications.
"""

from typing import Protocol, runtime_checkable

from agenda.domains.scheduling.domain.entities.notification import Notification


@runtime_checkable
class INotificationSink(Protocol):
    """Interface for notification writers."""

    async def create(self, content: str, recipient_user_id: int) -> Notification:
        """
        Store a notification for a user.

        Args:
            content: Message text
            recipient_user_id: User that will see the notification

        Returns:
            The stored notification
        """
        ...

"""
Notification Repository Implementation

SQLAlchemy implementation of INotificationSink.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from agenda.domains.scheduling.application.ports.notification_sink import INotificationSink
from agenda.domains.scheduling.domain.entities.notification import Notification
from agenda.domains.scheduling.infrastructure.persistence.sqlalchemy.models import NotificationModel

logger = logging.getLogger(__name__)


class SQLAlchemyNotificationRepository(INotificationSink):
    """
    Stores notifications in their own transaction.

    Uses a fresh session per write so a failed notification can never
    touch the booking's session.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        """
        Initialize repository.

        Args:
            session_factory: Factory for independent async sessions
        """
        self.session_factory = session_factory

    async def create(self, content: str, recipient_user_id: int) -> Notification:
        """Insert a notification and commit it."""
        async with self.session_factory() as session:
            model = NotificationModel(content=content, user=recipient_user_id, read=False)
            session.add(model)
            await session.flush()
            notification = Notification(
                id=model.id,  # type: ignore[arg-type]
                content=model.content,  # type: ignore[arg-type]
                user=model.user,  # type: ignore[arg-type]
                read=bool(model.read),
                created_at=model.created_at,  # type: ignore[arg-type]
                updated_at=model.updated_at,  # type: ignore[arg-type]
            )
            await session.commit()

        logger.debug(f"Notification {notification.id} stored for user {recipient_user_id}")
        return notification

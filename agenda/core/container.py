"""
Dependency Injection Container.

Composition root wiring concrete adapters to the scheduling ports.
Shared clients (Redis, session factory) are process-wide; repositories and
use cases are built per database session.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from agenda.config.settings import Settings, get_settings
from agenda.database.async_db import get_session_factory
from agenda.domains.scheduling.application.use_cases import BookAppointmentUseCase
from agenda.domains.scheduling.infrastructure.cache import RedisCacheStore
from agenda.domains.scheduling.infrastructure.formatting import LocalizedSlotFormatter
from agenda.domains.scheduling.infrastructure.repositories import (
    SQLAlchemyAppointmentRepository,
    SQLAlchemyNotificationRepository,
    SQLAlchemyUserRepository,
)
from agenda.integrations.databases.redis import get_async_redis_client

logger = logging.getLogger(__name__)


class SchedulingContainer:
    """
    Scheduling domain container.

    Single Responsibility: Create scheduling repositories and use cases.
    """

    def __init__(self, settings: Settings | None = None):
        """
        Initialize container.

        Args:
            settings: Application settings (uses default if not provided)
        """
        self.settings = settings or get_settings()
        self._date_formatter: LocalizedSlotFormatter | None = None
        logger.info("SchedulingContainer initialized")

    # ==================== REPOSITORIES ====================

    def create_user_repository(self, db: AsyncSession) -> SQLAlchemyUserRepository:
        """Create User Repository."""
        return SQLAlchemyUserRepository(session=db)

    def create_appointment_repository(self, db: AsyncSession) -> SQLAlchemyAppointmentRepository:
        """Create Appointment Repository."""
        return SQLAlchemyAppointmentRepository(session=db, zone=self.settings.zone)

    def create_notification_sink(self) -> SQLAlchemyNotificationRepository:
        """Create Notification sink with its own sessions."""
        return SQLAlchemyNotificationRepository(session_factory=get_session_factory())

    def create_cache_store(self) -> RedisCacheStore:
        """Create Redis cache store on the shared client."""
        return RedisCacheStore(
            redis_client=get_async_redis_client(),
            scan_count=self.settings.CACHE_SCAN_COUNT,
        )

    def get_date_formatter(self) -> LocalizedSlotFormatter:
        """Get slot formatter (singleton)."""
        if self._date_formatter is None:
            self._date_formatter = LocalizedSlotFormatter(self.settings.NOTIFICATION_LOCALE)
        return self._date_formatter

    # ==================== USE CASES ====================

    def create_book_appointment_use_case(self, db: AsyncSession) -> BookAppointmentUseCase:
        """Create BookAppointmentUseCase with dependencies."""
        formatter = self.get_date_formatter()
        return BookAppointmentUseCase(
            user_repository=self.create_user_repository(db),
            appointment_repository=self.create_appointment_repository(db),
            notification_sink=self.create_notification_sink(),
            cache_store=self.create_cache_store(),
            date_formatter=formatter,
            notification_template=formatter.notification_template,
            zone=self.settings.zone,
        )


_container: SchedulingContainer | None = None


def get_container() -> SchedulingContainer:
    """Get the global container instance."""
    global _container
    if _container is None:
        _container = SchedulingContainer()
    return _container

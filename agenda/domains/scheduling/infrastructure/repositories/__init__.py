"""
Scheduling Infrastructure Repositories

Repository implementations for the scheduling domain.
"""

from agenda.domains.scheduling.infrastructure.repositories.appointment_repository import (
    SQLAlchemyAppointmentRepository,
)
from agenda.domains.scheduling.infrastructure.repositories.notification_repository import (
    SQLAlchemyNotificationRepository,
)
from agenda.domains.scheduling.infrastructure.repositories.user_repository import (
    SQLAlchemyUserRepository,
)

__all__ = [
    "SQLAlchemyAppointmentRepository",
    "SQLAlchemyNotificationRepository",
    "SQLAlchemyUserRepository",
]

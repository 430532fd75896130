"""
Scheduling Domain Ports

Interfaces (ports) for the scheduling domain following Clean Architecture.
"""

from agenda.domains.scheduling.application.ports.appointment_repository import IAppointmentRepository
from agenda.domains.scheduling.application.ports.cache_store import ICacheStore
from agenda.domains.scheduling.application.ports.date_formatter import IDateFormatter
from agenda.domains.scheduling.application.ports.notification_sink import INotificationSink
from agenda.domains.scheduling.application.ports.user_repository import IUserRepository

__all__ = [
    "IAppointmentRepository",
    "ICacheStore",
    "IDateFormatter",
    "INotificationSink",
    "IUserRepository",
]

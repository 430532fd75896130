"""
Scheduling Domain Entities
"""

from agenda.domains.scheduling.domain.entities.appointment import CANCELLATION_NOTICE, Appointment
from agenda.domains.scheduling.domain.entities.notification import Notification
from agenda.domains.scheduling.domain.entities.user import User

__all__ = [
    "Appointment",
    "CANCELLATION_NOTICE",
    "Notification",
    "User",
]

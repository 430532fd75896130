"""
Scheduling SQLAlchemy persistence models.
"""

from agenda.domains.scheduling.infrastructure.persistence.sqlalchemy.models import (
    AppointmentModel,
    NotificationModel,
    UserModel,
)

__all__ = [
    "AppointmentModel",
    "NotificationModel",
    "UserModel",
]

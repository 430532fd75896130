"""
Scheduling Use Cases

Application layer use cases for the scheduling domain.
"""

from agenda.domains.scheduling.application.use_cases.book_appointment import (
    DEFAULT_NOTIFICATION_TEMPLATE,
    BookAppointmentRequest,
    BookAppointmentUseCase,
)

__all__ = [
    "BookAppointmentRequest",
    "BookAppointmentUseCase",
    "DEFAULT_NOTIFICATION_TEMPLATE",
]

"""
Scheduling API Dependencies

FastAPI dependencies for the scheduling domain.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from agenda.core.container import get_container
from agenda.database.async_db import get_async_db
from agenda.domains.scheduling.application.use_cases import BookAppointmentUseCase

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_async_db)]


def get_book_appointment_use_case(db: DbSession) -> BookAppointmentUseCase:
    """Get BookAppointmentUseCase instance with database session."""
    container = get_container()
    return container.create_book_appointment_use_case(db)


__all__ = [
    "DbSession",
    "get_book_appointment_use_case",
]

"""
Appointment Repository Port

Interface for appointment data access following Clean Architecture.
"""

from datetime import datetime
from typing import Protocol, runtime_checkable

from agenda.domains.scheduling.domain.entities.appointment import Appointment


@runtime_checkable
class IAppointmentRepository(Protocol):
    """
    Appointment repository interface.

    Implementations must guarantee that a provider never ends up with two
    active (``canceled_at`` is None) appointments in the same hour slot, even
    when inserts race. A unique index over ``(provider_id, slot)`` restricted
    to active rows is the reference implementation.

    Example:
        ```python
        class SQLAlchemyAppointmentRepository(IAppointmentRepository):
            async def insert(self, user_id, provider_id, date) -> Appointment:
                # INSERT ... ; IntegrityError -> AppointmentConflictException
                pass
        ```
    """

    async def find_active_by_provider_and_date(
        self,
        provider_id: int,
        slot: datetime,
    ) -> Appointment | None:
        """
        Find the active appointment a provider has in a slot.

        Args:
            provider_id: Provider user ID
            slot: Any instant in the hour slot; it is cut in the repository zone

        Returns:
            The active appointment occupying the slot, None if it is free
        """
        ...

    async def insert(
        self,
        user_id: int,
        provider_id: int,
        date: datetime,
    ) -> Appointment:
        """
        Persist a new appointment.

        The repository derives the slot from ``date`` in its canonical zone,
        so the same instant always maps to the same slot whatever its offset.

        Args:
            user_id: Client user ID
            provider_id: Provider user ID
            date: Requested date and time

        Returns:
            Saved appointment with ID

        Raises:
            AppointmentConflictException: Another active appointment took the
                slot first.
        """
        ...

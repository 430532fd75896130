"""
Appointment Repository Implementation

SQLAlchemy implementation of IAppointmentRepository.
"""

import logging
from datetime import UTC, datetime, tzinfo

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from agenda.core.domain import AppointmentConflictException
from agenda.domains.scheduling.application.ports.appointment_repository import IAppointmentRepository
from agenda.domains.scheduling.domain.entities.appointment import Appointment
from agenda.domains.scheduling.domain.value_objects.slot import Slot, to_zone
from agenda.domains.scheduling.infrastructure.persistence.sqlalchemy.models import AppointmentModel

logger = logging.getLogger(__name__)

SLOT_UNIQUE_INDEX = "uq_appointments_provider_slot_active"
# SQLite reports the columns instead of the index name
_SQLITE_SLOT_VIOLATION = "appointments.provider_id, appointments.slot"


def is_slot_violation(error: IntegrityError) -> bool:
    """Tell whether an IntegrityError comes from the active-slot unique index."""
    message = str(error.orig) if error.orig is not None else str(error)
    return SLOT_UNIQUE_INDEX in message or _SQLITE_SLOT_VIOLATION in message


class SQLAlchemyAppointmentRepository(IAppointmentRepository):
    """
    SQLAlchemy implementation of appointment repository.

    ``insert`` commits immediately: the booking must be durable before any
    side effect runs. The flush is where the unique index rejects a
    concurrent double booking. Slots are cut in ``zone`` so every writer
    stores the same ``slot`` value for the same hour.
    """

    def __init__(self, session: AsyncSession, zone: tzinfo = UTC):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session (``expire_on_commit=False``)
            zone: Zone slots are cut in; naive dates are read in it
        """
        self.session = session
        self.zone = zone

    async def find_active_by_provider_and_date(
        self,
        provider_id: int,
        slot: datetime,
    ) -> Appointment | None:
        """Find the active appointment occupying a provider's slot."""
        slot_start = Slot.from_datetime(slot, self.zone).start
        result = await self.session.execute(
            select(AppointmentModel).where(
                AppointmentModel.provider_id == provider_id,
                AppointmentModel.slot == slot_start,
                AppointmentModel.canceled_at.is_(None),
            )
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def insert(
        self,
        user_id: int,
        provider_id: int,
        date: datetime,
    ) -> Appointment:
        """Insert and commit a new appointment."""
        date = to_zone(date, self.zone)
        slot = Slot.from_datetime(date, self.zone)
        model = AppointmentModel(
            user_id=user_id,
            provider_id=provider_id,
            date=date,
            slot=slot.start,
        )
        self.session.add(model)

        try:
            # Flush assigns the id and column defaults; nothing is read back after commit
            await self.session.flush()
            appointment = self._to_entity(model)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if is_slot_violation(e):
                logger.info(f"Unique slot index rejected provider {provider_id} at {slot}")
                raise AppointmentConflictException(provider_id=provider_id, time_slot=str(slot)) from e
            raise

        return appointment

    def _to_entity(self, model: AppointmentModel) -> Appointment:
        """Convert model to entity."""
        # Column() syntax: instance attribute access returns the stored values.
        return Appointment(
            id=model.id,  # type: ignore[arg-type]
            user_id=model.user_id,  # type: ignore[arg-type]
            provider_id=model.provider_id,  # type: ignore[arg-type]
            date=model.date,  # type: ignore[arg-type]
            canceled_at=model.canceled_at,  # type: ignore[arg-type]
            created_at=model.created_at,  # type: ignore[arg-type]
            updated_at=model.updated_at,  # type: ignore[arg-type]
        )

"""
Appointment Entity for Scheduling Domain

Represents one booked hour slot between a client and a provider.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta, tzinfo
from typing import Any

from agenda.core.domain import Entity

from ..value_objects.slot import Slot, to_zone

# Minimum notice before an appointment can still be canceled.
CANCELLATION_NOTICE = timedelta(hours=2)


@dataclass
class Appointment(Entity[int]):
    """
    Appointment entity.

    ``date`` keeps the timestamp exactly as requested; ``slot`` is the hour it
    falls in and is what conflict checks compare. Naive dates are read as UTC.

    Example:
        ```python
        appointment = Appointment(
            user_id=1,
            provider_id=2,
            date=datetime(2024, 6, 10, 10, 15, tzinfo=UTC),
        )
        appointment.slot.start  # datetime(2024, 6, 10, 10, 0, tzinfo=UTC)
        appointment.is_active   # True
        ```
    """

    user_id: int = 0
    provider_id: int = 0
    date: datetime | None = None
    canceled_at: datetime | None = None

    @property
    def slot(self) -> Slot | None:
        """UTC hour slot the appointment occupies."""
        return self.slot_in(UTC)

    def slot_in(self, zone: tzinfo) -> Slot | None:
        """Hour slot the appointment occupies, cut in ``zone``."""
        if self.date is None:
            return None
        return Slot.from_datetime(self.date, zone)

    @property
    def is_active(self) -> bool:
        """Active appointments are the ones not canceled."""
        return self.canceled_at is None

    def is_past(self, now: datetime | None = None) -> bool:
        """Check if the appointment's slot already started."""
        if self.date is None:
            return False
        now = to_zone(now) if now else datetime.now(UTC)
        return self.slot.is_before(now)

    def is_cancelable(self, now: datetime | None = None) -> bool:
        """Appointments can be canceled up to two hours before their date."""
        if self.date is None or not self.is_active:
            return False
        now = to_zone(now) if now else datetime.now(UTC)
        return now < to_zone(self.date) - CANCELLATION_NOTICE

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "provider_id": self.provider_id,
            "date": self.date.isoformat() if self.date else None,
            "canceled_at": self.canceled_at.isoformat() if self.canceled_at else None,
        }

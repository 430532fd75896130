"""
Slot Value Object

An hour-granularity point in time. Two appointments for the same provider
conflict when their requested dates fall in the same slot.

Slots are always cut in one canonical zone (UTC unless configured
otherwise), whatever offset the requested date carries.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta, tzinfo

from agenda.core.domain import ValueObject

SLOT_DURATION = timedelta(hours=1)


def to_zone(value: datetime, zone: tzinfo = UTC) -> datetime:
    """Express ``value`` in ``zone``; naive values are read as ``zone`` wall time."""
    if value.tzinfo is None:
        return value.replace(tzinfo=zone)
    return value.astimezone(zone)


def start_of_hour(value: datetime) -> datetime:
    """Zero minutes, seconds and microseconds, keeping tzinfo."""
    return value.replace(minute=0, second=0, microsecond=0)


@dataclass(frozen=True)
class Slot(ValueObject):
    """
    Bookable hour slot.

    Example:
        ```python
        slot = Slot.from_datetime(datetime(2024, 6, 10, 15, 50, tzinfo=IST))
        slot.start  # datetime(2024, 6, 10, 10, 0, tzinfo=UTC)
        ```
    """

    start: datetime

    def _validate(self) -> None:
        """Slots always start on the hour."""
        if self.start != start_of_hour(self.start):
            raise ValueError(f"Slot must start on the hour, got {self.start.isoformat()}")

    @classmethod
    def from_datetime(cls, value: datetime, zone: tzinfo = UTC) -> "Slot":
        """Build the ``zone`` hour slot that contains ``value``."""
        return cls(start=start_of_hour(to_zone(value, zone)))

    @property
    def end(self) -> datetime:
        return self.start + SLOT_DURATION

    def is_before(self, moment: datetime) -> bool:
        """Check if the slot starts strictly before ``moment``."""
        return self.start < moment

    def contains(self, value: datetime) -> bool:
        return self.start <= value < self.end

    def __str__(self) -> str:
        return self.start.isoformat()

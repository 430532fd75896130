"""
Scheduling Domain Value Objects

Immutable value objects for the scheduling domain.
"""

from agenda.domains.scheduling.domain.value_objects.cache_keys import appointments_cache_prefix
from agenda.domains.scheduling.domain.value_objects.slot import SLOT_DURATION, Slot, start_of_hour, to_zone

__all__ = [
    "Slot",
    "SLOT_DURATION",
    "start_of_hour",
    "to_zone",
    "appointments_cache_prefix",
]

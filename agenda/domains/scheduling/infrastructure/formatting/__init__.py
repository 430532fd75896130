"""
Scheduling text formatting adapters.
"""

from agenda.domains.scheduling.infrastructure.formatting.slot_formatter import (
    NEW_APPOINTMENT_TEMPLATES,
    LocalizedSlotFormatter,
)

__all__ = [
    "LocalizedSlotFormatter",
    "NEW_APPOINTMENT_TEMPLATES",
]

"""
Notification Entity for Scheduling Domain

Message addressed to a user. Created once by the booking flow and read by
whatever displays notifications.
"""

from dataclasses import dataclass

from agenda.core.domain import Entity


@dataclass
class Notification(Entity[int]):
    """Notification entity."""

    content: str = ""
    user: int = 0
    read: bool = False

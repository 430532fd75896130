"""
Date Formatter Port

Localized rendering of appointment dates for human-readable messages.
"""

from datetime import datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class IDateFormatter(Protocol):
    """Interface for notification date formatting."""

    def format_slot(self, value: datetime) -> str:
        """
        Render a slot start for a notification.

        Args:
            value: Slot start

        Returns:
            Localized text (e.g. "10 de junho, às 10:00h")
        """
        ...

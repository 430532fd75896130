"""
Slot Formatter

Localized rendering of slot dates and of the "new appointment" message the
provider receives.
"""

from datetime import datetime

from agenda.core.domain import ValidationException
from agenda.core.shared.formatters import DateFormatter
from agenda.domains.scheduling.application.ports.date_formatter import IDateFormatter

NEW_APPOINTMENT_TEMPLATES = {
    "pt": "Novo agendamento de {name} para dia {date}",
    "es": "Nuevo turno de {name} para el día {date}",
    "en": "New appointment from {name} on {date}",
}

# Joins "<day month>" and "<hour>" per locale.
_SLOT_PATTERNS = {
    "pt": "{day_month}, às {hour}h",
    "es": "{day_month}, a las {hour}h",
    "en": "{day_month}, at {hour}",
}


class LocalizedSlotFormatter(IDateFormatter):
    """
    IDateFormatter backed by DateFormatter month tables.

    Example:
        ```python
        LocalizedSlotFormatter("pt").format_slot(datetime(2024, 6, 10, 10, 0))
        # "10 de junho, às 10:00h"
        ```
    """

    def __init__(self, locale: str = "pt"):
        if locale not in _SLOT_PATTERNS:
            raise ValidationException(f"Unsupported locale: {locale}", field="locale")
        self.locale = locale

    @property
    def notification_template(self) -> str:
        return NEW_APPOINTMENT_TEMPLATES[self.locale]

    def format_slot(self, value: datetime) -> str:
        return _SLOT_PATTERNS[self.locale].format(
            day_month=DateFormatter.format_day_month(value, self.locale),
            hour=DateFormatter.format_hour(value),
        )

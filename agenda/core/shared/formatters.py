"""
Shared Formatters

Common formatting utilities for the application.
"""

from datetime import date, datetime

from agenda.core.domain import ValidationException


class DateFormatter:
    """Date and time formatting utilities."""

    # Month names by locale, January first. Lowercase as written mid-sentence.
    MONTHS = {
        "pt": [
            "janeiro", "fevereiro", "março", "abril", "maio", "junho",
            "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
        ],
        "es": [
            "enero", "febrero", "marzo", "abril", "mayo", "junio",
            "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
        ],
        "en": [
            "January", "February", "March", "April", "May", "June",
            "July", "August", "September", "October", "November", "December",
        ],
    }

    @classmethod
    def month_name(cls, d: date | datetime, locale: str = "pt") -> str:
        """Month name without relying on the process locale."""
        try:
            return cls.MONTHS[locale][d.month - 1]
        except KeyError as e:
            raise ValidationException(f"Unsupported locale: {locale}", field="locale") from e

    @classmethod
    def format_day_month(cls, d: date | datetime, locale: str = "pt") -> str:
        """Format day and month (e.g. '05 de junho', 'June 05')."""
        if d is None:
            return ""
        month = cls.month_name(d, locale)
        if locale == "en":
            return f"{month} {d.day:02d}"
        return f"{d.day:02d} de {month}"

    @classmethod
    def format_hour(cls, dt: datetime) -> str:
        """Format time with unpadded hour (e.g. '9:00')."""
        if dt is None:
            return ""
        return f"{dt.hour}:{dt.minute:02d}"

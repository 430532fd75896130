"""
Unit tests for LocalizedSlotFormatter and DateFormatter.
"""

from datetime import datetime

import pytest

from agenda.core.domain import ValidationException
from agenda.core.shared import DateFormatter
from agenda.domains.scheduling.infrastructure.formatting import (
    NEW_APPOINTMENT_TEMPLATES,
    LocalizedSlotFormatter,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "locale, value, expected",
    [
        ("pt", datetime(2024, 6, 10, 10, 0), "10 de junho, às 10:00h"),
        ("pt", datetime(2024, 3, 5, 9, 0), "05 de março, às 9:00h"),
        ("es", datetime(2024, 6, 10, 14, 0), "10 de junio, a las 14:00h"),
        ("en", datetime(2024, 12, 1, 8, 0), "December 01, at 8:00"),
    ],
)
def test_format_slot(locale, value, expected):
    assert LocalizedSlotFormatter(locale).format_slot(value) == expected


@pytest.mark.unit
def test_notification_template_per_locale():
    assert LocalizedSlotFormatter("pt").notification_template == "Novo agendamento de {name} para dia {date}"
    assert LocalizedSlotFormatter("en").notification_template == NEW_APPOINTMENT_TEMPLATES["en"]


@pytest.mark.unit
def test_unsupported_locale_rejected():
    with pytest.raises(ValidationException) as exc_info:
        LocalizedSlotFormatter("fr")

    assert exc_info.value.field == "locale"


@pytest.mark.unit
def test_date_formatter_month_name():
    assert DateFormatter.month_name(datetime(2024, 2, 1), "pt") == "fevereiro"
    assert DateFormatter.format_hour(datetime(2024, 2, 1, 23, 5)) == "23:05"

    with pytest.raises(ValidationException):
        DateFormatter.month_name(datetime(2024, 2, 1), "xx")

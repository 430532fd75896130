"""
Unit tests for the shared logging setup.
"""

import json
import logging
import sys

import pytest

from agenda.config.settings import Settings
from agenda.core.shared.logger import JSONFormatter, configure_logging, record_context


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    previous_handlers, previous_level = root.handlers[:], root.level
    sqlalchemy_level = logging.getLogger("sqlalchemy.engine").level
    yield root
    root.handlers[:] = previous_handlers
    root.setLevel(previous_level)
    logging.getLogger("sqlalchemy.engine").setLevel(sqlalchemy_level)


@pytest.mark.unit
def test_json_formatter_includes_context_and_exception():
    logger = logging.getLogger("agenda.tests")
    try:
        raise ValueError("bad slot")
    except ValueError:
        record = logger.makeRecord(
            "agenda.tests",
            logging.ERROR,
            __file__,
            10,
            "Side effect failed",
            None,
            sys.exc_info(),
            extra={"appointment_id": 7, "effect": "notification"},
        )

    data = json.loads(JSONFormatter(service="Agenda Booking API", environment="staging").format(record))

    assert data["level"] == "ERROR"
    assert data["service"] == "Agenda Booking API"
    assert data["environment"] == "staging"
    assert data["message"] == "Side effect failed"
    assert data["context"] == {"appointment_id": 7, "effect": "notification"}
    assert "ValueError: bad slot" in data["exception"]


@pytest.mark.unit
def test_record_context_ignores_standard_attributes():
    record = logging.getLogger("agenda.tests").makeRecord(
        "agenda.tests", logging.INFO, __file__, 1, "Appointment booked", None, None
    )

    assert record_context(record) == {}


@pytest.mark.unit
def test_configure_logging_json_outside_development(restore_root_logger):
    configure_logging(Settings(_env_file=None, ENVIRONMENT="production", LOG_LEVEL="warning"))

    assert restore_root_logger.level == logging.WARNING
    assert len(restore_root_logger.handlers) == 1
    formatter = restore_root_logger.handlers[0].formatter
    assert isinstance(formatter, JSONFormatter)
    assert formatter.environment == "production"
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


@pytest.mark.unit
def test_configure_logging_plain_in_development(restore_root_logger):
    configure_logging(Settings(_env_file=None, ENVIRONMENT="development", DB_ECHO=True))

    formatter = restore_root_logger.handlers[0].formatter
    assert not isinstance(formatter, JSONFormatter)
    assert logging.getLogger("sqlalchemy.engine").level == logging.INFO

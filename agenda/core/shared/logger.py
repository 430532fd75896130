"""
Shared Logger

Logging setup for the booking service. Development gets plain lines; other
environments get one JSON object per record, tagged with the service name
and environment.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from agenda.config.settings import Settings

PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Attributes every LogRecord has; anything else came in through ``extra=``
_RECORD_ATTRIBUTES = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """Fields passed with ``logger.info(..., extra={...})``."""
    return {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRIBUTES}


class JSONFormatter(logging.Formatter):
    """
    JSON log formatter.

    Example output:
        {"timestamp": "...", "level": "INFO", "service": "Agenda Booking API",
         "message": "Appointment booked: 7 ...", "context": {"appointment_id": 7}}
    """

    def __init__(self, service: str = "agenda", environment: str = "production"):
        super().__init__()
        self.service = service
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "service": self.service,
            "environment": self.environment,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = record_context(record)
        if context:
            log_data["context"] = context

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def configure_logging(settings: Settings) -> None:
    """
    Configure the root logger from settings.

    Args:
        settings: LOG_LEVEL sets the level, is_development picks plain output,
            DB_ECHO turns on SQLAlchemy statement logging
    """
    level = getattr(logging, settings.LOG_LEVEL)

    handler = logging.StreamHandler(sys.stdout)
    if settings.is_development:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
    else:
        handler.setFormatter(JSONFormatter(service=settings.PROJECT_NAME, environment=settings.ENVIRONMENT))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.DB_ECHO else logging.WARNING)

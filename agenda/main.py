"""
Application entry point.

All configuration and lifecycle management is delegated to specialized modules.
"""

import logging

import sentry_sdk

from agenda.config.settings import get_settings
from agenda.core.app_factory import create_app
from agenda.core.shared.logger import configure_logging

settings = get_settings()

# Structured logs outside development
configure_logging(settings)

logger = logging.getLogger(__name__)

# Initialize Sentry for error tracking
if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        send_default_pii=False,
        environment=settings.ENVIRONMENT,
    )

# Create application using factory
app = create_app()

if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting application in {settings.ENVIRONMENT} mode")
    uvicorn.run(
        "agenda.main:app",
        host="0.0.0.0",
        port=8001,
        reload=settings.DEBUG,
    )

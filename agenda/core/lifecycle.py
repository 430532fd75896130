"""
Application lifecycle management using the FastAPI lifespan pattern.

Handles startup checks and the release of shared connections on shutdown.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from agenda.config.settings import get_settings
from agenda.database.async_db import dispose_engine
from agenda.integrations.databases.redis import close_async_redis_client, ping_async_redis

logger = logging.getLogger(__name__)


class LifecycleManager:
    """
    Manages application lifecycle events.

    Startup only verifies connectivity; an unreachable Redis degrades cache
    invalidation but does not stop bookings.
    """

    def __init__(self) -> None:
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def startup(self) -> None:
        """Execute startup tasks."""
        if self._initialized:
            logger.warning("Lifecycle already initialized, skipping startup")
            return

        settings = get_settings()
        logger.info(f"Starting application lifecycle ({settings.ENVIRONMENT})...")

        await self._verify_external_services()

        self._initialized = True
        logger.info("Application lifecycle startup completed")

    async def shutdown(self) -> None:
        """Execute shutdown tasks."""
        if not self._initialized:
            logger.warning("Lifecycle not initialized, skipping shutdown")
            return

        logger.info("Stopping application lifecycle...")

        await close_async_redis_client()
        await dispose_engine()

        self._initialized = False
        logger.info("Application lifecycle shutdown completed")

    async def _verify_external_services(self) -> None:
        if await ping_async_redis():
            logger.info("Redis connectivity verified")
        else:
            logger.warning("Redis not reachable - appointment cache invalidation will fail until it recovers")


# Global lifecycle manager instance
_lifecycle_manager: LifecycleManager | None = None


def get_lifecycle_manager() -> LifecycleManager:
    """Get or create the global lifecycle manager instance."""
    global _lifecycle_manager
    if _lifecycle_manager is None:
        _lifecycle_manager = LifecycleManager()
    return _lifecycle_manager


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Usage:
        app = FastAPI(lifespan=lifespan)
    """
    lifecycle = get_lifecycle_manager()

    await lifecycle.startup()

    yield

    await lifecycle.shutdown()

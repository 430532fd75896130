"""
Scheduling API

FastAPI adapter over the scheduling use cases.
"""

from agenda.domains.scheduling.api.routes import router

__all__ = ["router"]

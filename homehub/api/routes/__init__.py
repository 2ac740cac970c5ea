"""API routes."""

from homehub.api.routes.health import router as health_router
from homehub.api.routes.preferences import router as preferences_router
from homehub.api.routes.reminders import router as reminders_router
from homehub.api.routes.sources import router as sources_router

__all__ = [
    "health_router",
    "preferences_router",
    "reminders_router",
    "sources_router",
]

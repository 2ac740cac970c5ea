"""
Service factory functions for dependency injection.

Wires settings into core services. Use cases and routes import from here.
"""

from homehub.config import get_settings
from homehub.core.services.reminder_engine import ReminderEngine

# Singleton service instances
_reminder_engine: ReminderEngine | None = None


def get_reminder_engine() -> ReminderEngine:
    """Get or create the ReminderEngine configured from settings."""
    global _reminder_engine
    if _reminder_engine is None:
        settings = get_settings().reminders
        _reminder_engine = ReminderEngine(
            window_days=settings.summary_window_days,
            lookahead_days=settings.lookahead_days,
        )
    return _reminder_engine


def reset_services() -> None:
    """Reset singleton services (for testing)."""
    global _reminder_engine
    _reminder_engine = None

"""Core reminder services."""

from homehub.core.services.calendar import calendar_window, events_between
from homehub.core.services.domain_styles import DOMAIN_STYLES, DomainStyle, style_for
from homehub.core.services.reminder_engine import (
    GenerationPlan,
    ReminderEngine,
    auto_generate_key,
    priority_for,
)

__all__ = [
    "calendar_window",
    "events_between",
    "DOMAIN_STYLES",
    "DomainStyle",
    "style_for",
    "GenerationPlan",
    "ReminderEngine",
    "auto_generate_key",
    "priority_for",
]

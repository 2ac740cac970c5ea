"""Domain entities."""

from homehub.core.entities.calendar_event import CalendarEvent, CalendarView
from homehub.core.entities.preferences import HUB_MODULES, UserPreferences
from homehub.core.entities.reminder import (
    RecurrenceType,
    Reminder,
    ReminderDomain,
    ReminderPriority,
    ReminderStatus,
)
from homehub.core.entities.source_entity import (
    EXPIRY_FIELDS,
    ExpiryField,
    SourceEntity,
    SourceEntityType,
    expiry_fields_for,
)
from homehub.core.entities.summary import (
    DomainCount,
    PriorityCount,
    ReminderSummary,
    SkippedReminder,
)

__all__ = [
    "CalendarEvent",
    "CalendarView",
    "HUB_MODULES",
    "UserPreferences",
    "RecurrenceType",
    "Reminder",
    "ReminderDomain",
    "ReminderPriority",
    "ReminderStatus",
    "EXPIRY_FIELDS",
    "ExpiryField",
    "SourceEntity",
    "SourceEntityType",
    "expiry_fields_for",
    "DomainCount",
    "PriorityCount",
    "ReminderSummary",
    "SkippedReminder",
]

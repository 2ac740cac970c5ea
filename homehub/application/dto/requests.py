"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
Dates arrive as ISO strings and are parsed in the route so that a bad
value produces a precise 422 message.
"""

from pydantic import BaseModel, Field

from homehub.core.entities.reminder import RecurrenceType, ReminderDomain, ReminderPriority
from homehub.core.entities.source_entity import SourceEntityType

# --- Reminders ---


class CreateReminderRequest(BaseModel):
    """Request to create a reminder."""

    title: str = Field(..., min_length=1, description="Reminder title")
    domain: ReminderDomain = Field(default=ReminderDomain.CUSTOM, description="Hub module")
    description: str = Field(default="", description="Reminder details")
    reminder_date: str = Field(
        ...,
        description="Due date, ISO date or date-time",
        examples=["2024-03-10", "2024-03-10T09:30:00"],
    )
    reminder_time: str | None = Field(default=None, description="Time of day (HH:MM)")
    is_all_day: bool = Field(default=True, description="No specific time of day")
    entity_type: str | None = Field(default=None, description="Source entity type")
    entity_id: int | str | None = Field(default=None, description="Source entity ID")
    entity_name: str | None = Field(default=None, description="Source entity display name")
    is_recurring: bool = Field(default=False)
    recurrence_type: RecurrenceType | None = Field(default=None)
    recurrence_interval: int = Field(default=1, ge=1, description="Repeat every N periods")
    recurrence_end_date: str | None = Field(default=None, description="Last date (YYYY-MM-DD)")
    notify_days_before: int = Field(default=0, ge=0)
    priority: ReminderPriority = Field(default=ReminderPriority.MEDIUM)


class UpdateReminderRequest(BaseModel):
    """Request to update a reminder. Status changes use the action endpoints."""

    title: str | None = Field(default=None, min_length=1, description="Reminder title")
    domain: ReminderDomain | None = Field(default=None)
    description: str | None = Field(default=None)
    reminder_date: str | None = Field(default=None, description="Due date, ISO format")
    reminder_time: str | None = Field(default=None)
    is_all_day: bool | None = Field(default=None)
    entity_type: str | None = Field(default=None)
    entity_id: int | str | None = Field(default=None)
    entity_name: str | None = Field(default=None)
    is_recurring: bool | None = Field(default=None)
    recurrence_type: RecurrenceType | None = Field(default=None)
    recurrence_interval: int | None = Field(default=None, ge=1)
    recurrence_end_date: str | None = Field(default=None)
    notify_days_before: int | None = Field(default=None, ge=0)
    priority: ReminderPriority | None = Field(default=None)


class SnoozeReminderRequest(BaseModel):
    """Request to snooze a reminder."""

    snooze_until: str = Field(..., description="Hide until this date (YYYY-MM-DD)")


class GenerateRemindersRequest(BaseModel):
    """Request to generate reminders from source entities."""

    domains: list[ReminderDomain] = Field(
        default_factory=list,
        description="Only generate for these domains (all when empty)",
    )
    lookahead_days: int | None = Field(
        default=None,
        ge=0,
        le=3650,
        description="Days ahead to scan (server default when omitted)",
    )


# --- Source entities ---


class CreateSourceEntityRequest(BaseModel):
    """Request to create a source entity."""

    entity_type: SourceEntityType = Field(..., description="Kind of record")
    name: str = Field(..., min_length=1, description="Display name")
    category: str | None = Field(default=None)
    dates: dict[str, str | None] = Field(
        default_factory=dict,
        description="Dated fields by name, ISO dates",
        examples=[{"mot_expiry": "2024-06-01", "tax_expiry": None}],
    )
    notes: str = Field(default="")


class UpdateSourceEntityRequest(BaseModel):
    """Request to update a source entity. ``dates`` entries are merged."""

    name: str | None = Field(default=None, min_length=1)
    category: str | None = Field(default=None)
    dates: dict[str, str | None] | None = Field(default=None)
    notes: str | None = Field(default=None)


# --- Preferences ---


class UpdatePreferencesRequest(BaseModel):
    """Request to change module order or visibility."""

    module_order: list[str] | None = Field(default=None, description="Modules in display order")
    enabled_modules: list[str] | None = Field(default=None, description="Visible modules")

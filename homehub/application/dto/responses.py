"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
"""

from datetime import date, datetime, time
from typing import Any

from pydantic import BaseModel, Field

# --- Reminders ---


class ReminderResponse(BaseModel):
    """Reminder with its computed status."""

    id: int | str
    title: str
    domain: str
    description: str = ""
    reminder_date: date
    reminder_time: time | None = None
    is_all_day: bool = True
    entity_type: str | None = None
    entity_id: int | str | None = None
    entity_name: str | None = None
    is_recurring: bool = False
    recurrence_type: str | None = None
    recurrence_interval: int = 1
    recurrence_end_date: date | None = None
    notify_days_before: int = 0
    priority: str
    is_completed: bool = False
    completed_at: datetime | None = None
    is_dismissed: bool = False
    dismissed_at: datetime | None = None
    is_snoozed: bool = False
    snoozed_until: date | None = None
    is_auto_generated: bool = False
    auto_generate_key: str | None = None
    created_at: datetime
    updated_at: datetime

    status: str = Field(..., description="overdue, due_today, upcoming, completed or dismissed")
    days_until: int = Field(..., description="Days from today to the reminder date")
    is_overdue: bool = False
    next_occurrence: date | None = None


class ReminderListResponse(BaseModel):
    """One page of reminders; ``total`` counts every match before paging."""

    reminders: list[ReminderResponse]
    total: int


class CompleteReminderResponse(BaseModel):
    """Completed reminder and the next one in its series."""

    reminder: ReminderResponse
    follow_up: ReminderResponse | None = None


class DomainCountResponse(BaseModel):
    domain: str
    count: int


class PriorityCountResponse(BaseModel):
    priority: str
    count: int


class SkippedReminderResponse(BaseModel):
    reminder_id: int | str | None = None
    value: Any = None
    reason: str


class ReminderSummaryResponse(BaseModel):
    """Counts over active reminders."""

    total: int
    overdue: int
    upcoming_today: int
    upcoming_week: int
    window_days: int
    by_domain: list[DomainCountResponse] = Field(default_factory=list)
    by_priority: list[PriorityCountResponse] = Field(default_factory=list)
    skipped: list[SkippedReminderResponse] = Field(default_factory=list)


class GenerateRemindersResponse(BaseModel):
    """Outcome of a generation run."""

    sources_scanned: int
    created: int
    updated: int
    unchanged: int
    already_resolved: int
    created_reminder_ids: list[int | str] = Field(default_factory=list)
    updated_reminder_ids: list[int | str] = Field(default_factory=list)


class CalendarEventResponse(BaseModel):
    reminder_id: int | str | None
    title: str
    event_date: date
    event_time: time | None = None
    domain: str
    priority: str
    status: str
    is_occurrence: bool = False
    entity_type: str | None = None
    entity_id: int | str | None = None


class CalendarResponse(BaseModel):
    """Reminder occurrences in a date range."""

    view: str | None = None
    start: date
    end: date
    events: list[CalendarEventResponse]


class DomainStyleResponse(BaseModel):
    domain: str
    label: str
    icon: str
    color: str
    bg_color: str


# --- Source entities ---


class SourceEntityResponse(BaseModel):
    """Source entity with its dated fields."""

    id: int | str
    entity_type: str
    name: str
    category: str | None = None
    dates: dict[str, date | None] = Field(default_factory=dict)
    notes: str = ""
    created_at: datetime
    updated_at: datetime


class SourceEntityListResponse(BaseModel):
    entities: list[SourceEntityResponse]
    total: int


# --- Preferences ---


class PreferencesResponse(BaseModel):
    """Hub module layout."""

    module_order: list[str]
    enabled_modules: list[str]
    visible_modules: list[str]
    updated_at: datetime


# --- System ---


class ProviderHealthResponse(BaseModel):
    """Health of one backing component."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None
    details: dict | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    uptime_seconds: float
    database: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. REMINDER_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")

"""Data Transfer Objects for the API layer."""

from homehub.application.dto.requests import (
    CreateReminderRequest,
    CreateSourceEntityRequest,
    GenerateRemindersRequest,
    SnoozeReminderRequest,
    UpdatePreferencesRequest,
    UpdateReminderRequest,
    UpdateSourceEntityRequest,
)
from homehub.application.dto.responses import (
    CalendarEventResponse,
    CalendarResponse,
    CompleteReminderResponse,
    DomainStyleResponse,
    ErrorResponse,
    GenerateRemindersResponse,
    HealthResponse,
    PreferencesResponse,
    ProviderHealthResponse,
    ReminderListResponse,
    ReminderResponse,
    ReminderSummaryResponse,
    SourceEntityListResponse,
    SourceEntityResponse,
)

__all__ = [
    "CreateReminderRequest",
    "CreateSourceEntityRequest",
    "GenerateRemindersRequest",
    "SnoozeReminderRequest",
    "UpdatePreferencesRequest",
    "UpdateReminderRequest",
    "UpdateSourceEntityRequest",
    "CalendarEventResponse",
    "CalendarResponse",
    "CompleteReminderResponse",
    "DomainStyleResponse",
    "ErrorResponse",
    "GenerateRemindersResponse",
    "HealthResponse",
    "PreferencesResponse",
    "ProviderHealthResponse",
    "ReminderListResponse",
    "ReminderResponse",
    "ReminderSummaryResponse",
    "SourceEntityListResponse",
    "SourceEntityResponse",
]

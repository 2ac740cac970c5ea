"""Calendar projection of reminders."""

from datetime import date, time
from enum import Enum

from pydantic import BaseModel

from homehub.core.entities.reminder import ReminderDomain, ReminderPriority, ReminderStatus


class CalendarView(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class CalendarEvent(BaseModel):
    """One reminder occurrence placed on a calendar day."""

    reminder_id: int | str | None
    title: str
    event_date: date
    event_time: time | None = None
    domain: ReminderDomain
    priority: ReminderPriority
    status: ReminderStatus
    is_occurrence: bool = False  # projected from a recurrence, not the stored date
    entity_type: str | None = None
    entity_id: int | str | None = None

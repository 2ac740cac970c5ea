"""Reminder entity shared by every hub module."""

from datetime import date, datetime, time
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from homehub.core.dates import split_date_time, utcnow
from homehub.core.exceptions import InvalidDateError


class ReminderDomain(str, Enum):
    """Hub module a reminder belongs to."""

    PLANTS = "plants"
    FINANCE = "finance"
    COOKING = "cooking"
    READING = "reading"
    CODING = "coding"
    HOUSEHOLD = "household"
    CUSTOM = "custom"


class ReminderPriority(str, Enum):
    """User-facing urgency, independent of the computed status."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    ReminderPriority.LOW: 0,
    ReminderPriority.MEDIUM: 1,
    ReminderPriority.HIGH: 2,
    ReminderPriority.URGENT: 3,
}


class RecurrenceType(str, Enum):
    """How a recurring reminder repeats."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    CUSTOM = "custom"  # every N days


class ReminderStatus(str, Enum):
    """Display status computed from the flags and the reminder date."""

    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    UPCOMING = "upcoming"
    COMPLETED = "completed"
    DISMISSED = "dismissed"

    @property
    def is_resolved(self) -> bool:
        return self in (ReminderStatus.COMPLETED, ReminderStatus.DISMISSED)

    @property
    def rank(self) -> int | None:
        """Order of active statuses: overdue < due_today < upcoming."""
        return _STATUS_RANK.get(self)


_STATUS_RANK = {
    ReminderStatus.OVERDUE: 0,
    ReminderStatus.DUE_TODAY: 1,
    ReminderStatus.UPCOMING: 2,
}


class Reminder(BaseModel):
    """
    A dated reminder, entered by hand or generated from another entity.

    ``entity_type``/``entity_id`` are a weak reference to the record that
    produced the reminder (vehicle, insurance policy, document, ...);
    removing that record leaves the reminder in place.
    """

    id: int | str | None = None
    title: str
    domain: ReminderDomain = ReminderDomain.CUSTOM
    description: str = ""

    # Timing
    reminder_date: date
    reminder_time: time | None = None
    is_all_day: bool = True

    # Source entity
    entity_type: str | None = None
    entity_id: int | str | None = None
    entity_name: str | None = None

    # Recurrence
    is_recurring: bool = False
    recurrence_type: RecurrenceType | None = None
    recurrence_interval: int = Field(default=1, ge=1)
    recurrence_end_date: date | None = None

    notify_days_before: int = Field(default=0, ge=0)
    priority: ReminderPriority = ReminderPriority.MEDIUM

    # Status
    is_completed: bool = False
    completed_at: datetime | None = None
    is_dismissed: bool = False
    dismissed_at: datetime | None = None
    is_snoozed: bool = False
    snoozed_until: date | None = None

    # Auto-generation
    is_auto_generated: bool = False
    auto_generate_key: str | None = None

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="before")
    @classmethod
    def split_reminder_datetime(cls, data: Any) -> Any:
        """Accept a date-time ``reminder_date`` and keep its time separately."""
        if not isinstance(data, dict) or "reminder_date" not in data:
            return data
        try:
            day, moment = split_date_time(data["reminder_date"], reminder_id=data.get("id"))
        except InvalidDateError as e:
            raise ValueError(e.message) from None
        data = dict(data)
        data["reminder_date"] = day
        if moment is not None and data.get("reminder_time") is None:
            data["reminder_time"] = moment
            data.setdefault("is_all_day", False)
        return data

    @field_validator("recurrence_end_date", "snoozed_until", mode="before")
    @classmethod
    def parse_optional_date(cls, v: Any) -> Any:
        if v is None or v == "":
            return None
        if isinstance(v, (str, datetime)):
            try:
                return split_date_time(v, field="date")[0]
            except InvalidDateError as e:
                raise ValueError(e.message) from None
        return v

    @property
    def is_resolved(self) -> bool:
        """Completed or dismissed; no further transition applies."""
        return self.is_completed or self.is_dismissed

    def is_snoozed_on(self, today: date) -> bool:
        """Whether the reminder is hidden by a snooze on ``today``."""
        if not self.is_snoozed:
            return False
        return self.snoozed_until is None or self.snoozed_until > today

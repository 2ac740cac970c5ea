"""Aggregated reminder counts."""

from typing import Any

from pydantic import BaseModel, Field


class DomainCount(BaseModel):
    domain: str
    count: int


class PriorityCount(BaseModel):
    priority: str
    count: int


class SkippedReminder(BaseModel):
    """A record left out of a summary because it could not be read."""

    reminder_id: int | str | None = None
    value: Any = None
    reason: str


class ReminderSummary(BaseModel):
    """
    Counts over active reminders.

    ``upcoming_week`` counts reminders due from today through the window,
    so it includes ``upcoming_today`` and never includes overdue ones.
    """

    total: int = 0
    overdue: int = 0
    upcoming_today: int = 0
    upcoming_week: int = 0
    window_days: int = 7
    by_domain: list[DomainCount] = Field(default_factory=list)
    by_priority: list[PriorityCount] = Field(default_factory=list)
    skipped: list[SkippedReminder] = Field(default_factory=list)

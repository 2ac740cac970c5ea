"""
Reminder state transitions.

Each transition returns a new Reminder and leaves its input untouched.
Repeating a transition is a no-op that keeps the original timestamp.
Completed and dismissed are terminal: moving from one to the other, or
snoozing either, raises InvalidTransitionError.
"""

from datetime import date, datetime, timedelta

from homehub.core.dates import date_only
from homehub.core.entities.reminder import Reminder
from homehub.core.exceptions import InvalidTransitionError, ValidationError
from homehub.core.services.recurrence import occurrence_after, repeats


def _state(reminder: Reminder) -> str:
    if reminder.is_completed:
        return "completed"
    if reminder.is_dismissed:
        return "dismissed"
    return "active"


def complete(reminder: Reminder, at: datetime) -> Reminder:
    if reminder.is_completed:
        return reminder
    if reminder.is_dismissed:
        raise InvalidTransitionError(reminder.id, _state(reminder), "complete")
    return reminder.model_copy(
        update={
            "is_completed": True,
            "completed_at": at,
            "is_snoozed": False,
            "snoozed_until": None,
            "updated_at": at,
        }
    )


def dismiss(reminder: Reminder, at: datetime) -> Reminder:
    if reminder.is_dismissed and not reminder.is_completed:
        return reminder
    if reminder.is_completed:
        raise InvalidTransitionError(reminder.id, _state(reminder), "dismiss")
    return reminder.model_copy(
        update={
            "is_dismissed": True,
            "dismissed_at": at,
            "is_snoozed": False,
            "snoozed_until": None,
            "updated_at": at,
        }
    )


def snooze(reminder: Reminder, until: date, at: datetime) -> Reminder:
    """Hide the reminder until ``until``; it shows again on that day."""
    if reminder.is_resolved:
        raise InvalidTransitionError(reminder.id, _state(reminder), "snooze")
    if until <= date_only(at):
        raise ValidationError("snooze_until", "must be later than today", until)
    if reminder.is_snoozed and reminder.snoozed_until == until:
        return reminder
    return reminder.model_copy(update={"is_snoozed": True, "snoozed_until": until, "updated_at": at})


def unsnooze(reminder: Reminder, at: datetime) -> Reminder:
    if not reminder.is_snoozed:
        return reminder
    return reminder.model_copy(update={"is_snoozed": False, "snoozed_until": None, "updated_at": at})


def follow_up(reminder: Reminder, now: datetime) -> Reminder | None:
    """
    The next reminder in a recurring series, created when one is completed.

    The follow-up falls on the first occurrence after both the completed
    date and yesterday, so completing a late reminder skips missed dates.
    """
    if not repeats(reminder):
        return None

    today = date_only(now)
    after = max(reminder.reminder_date, today - timedelta(days=1))
    next_date = occurrence_after(reminder, after)
    if next_date is None:
        return None

    return reminder.model_copy(
        update={
            "id": None,
            "reminder_date": next_date,
            "is_completed": False,
            "completed_at": None,
            "is_dismissed": False,
            "dismissed_at": None,
            "is_snoozed": False,
            "snoozed_until": None,
            "created_at": now,
            "updated_at": now,
        }
    )

"""
Recurrence arithmetic.

Occurrences are always computed from the reminder's own date, so monthly
reminders set on the 31st land on the last day of shorter months and
return to the 31st afterwards.
"""

import calendar
from datetime import date, timedelta

from homehub.core.entities.reminder import RecurrenceType, Reminder

# Upper bound on occurrences expanded for one reminder in a single window.
MAX_OCCURRENCES = 1000


def add_months(value: date, months: int) -> date:
    """Shift by whole months, clamping the day to the end of the month."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def repeats(reminder: Reminder) -> bool:
    return reminder.is_recurring and reminder.recurrence_type is not None


def occurrence(reminder: Reminder, index: int) -> date:
    """The ``index``-th occurrence, counting the reminder date as zero."""
    base = reminder.reminder_date
    steps = index * reminder.recurrence_interval
    if reminder.recurrence_type == RecurrenceType.WEEKLY:
        return base + timedelta(weeks=steps)
    if reminder.recurrence_type == RecurrenceType.MONTHLY:
        return add_months(base, steps)
    if reminder.recurrence_type == RecurrenceType.YEARLY:
        return add_months(base, 12 * steps)
    return base + timedelta(days=steps)


def _within_end(reminder: Reminder, value: date) -> bool:
    return reminder.recurrence_end_date is None or value <= reminder.recurrence_end_date


def _first_index_on_or_after(reminder: Reminder, target: date) -> int:
    base = reminder.reminder_date
    if base >= target:
        return 0

    interval = reminder.recurrence_interval
    if reminder.recurrence_type in (RecurrenceType.MONTHLY, RecurrenceType.YEARLY):
        months = (target.year - base.year) * 12 + target.month - base.month
        per_step = interval * (12 if reminder.recurrence_type == RecurrenceType.YEARLY else 1)
        index = max(0, months // per_step - 1)
    elif reminder.recurrence_type == RecurrenceType.WEEKLY:
        index = max(0, (target - base).days // (7 * interval))
    else:
        index = max(0, (target - base).days // interval)

    while occurrence(reminder, index) < target:
        index += 1
    return index


def first_on_or_after(reminder: Reminder, target: date) -> date | None:
    """
    Earliest occurrence on or after ``target``.

    Non-recurring reminders have a single occurrence, their own date.
    Returns None once the recurrence end date has passed.
    """
    if not repeats(reminder):
        return reminder.reminder_date if reminder.reminder_date >= target else None

    candidate = occurrence(reminder, _first_index_on_or_after(reminder, target))
    return candidate if _within_end(reminder, candidate) else None


def occurrence_after(reminder: Reminder, after: date) -> date | None:
    """Earliest occurrence strictly later than ``after``."""
    return first_on_or_after(reminder, after + timedelta(days=1))


def occurrences_between(reminder: Reminder, start: date, end: date) -> list[date]:
    """All occurrences in the inclusive range ``start``..``end``."""
    if end < start:
        return []
    if not repeats(reminder):
        return [reminder.reminder_date] if start <= reminder.reminder_date <= end else []

    dates: list[date] = []
    index = _first_index_on_or_after(reminder, start)
    while len(dates) < MAX_OCCURRENCES:
        current = occurrence(reminder, index)
        if current > end or not _within_end(reminder, current):
            break
        dates.append(current)
        index += 1
    return dates

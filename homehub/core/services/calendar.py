"""Calendar windows and reminder occurrences placed on them."""

from collections.abc import Iterable
from datetime import date, datetime, timedelta

from pydantic import ValidationError

from homehub.config import get_logger
from homehub.core.dates import date_only
from homehub.core.entities.calendar_event import CalendarEvent, CalendarView
from homehub.core.exceptions import InvalidDateError
from homehub.core.services.recurrence import add_months, occurrences_between, repeats
from homehub.core.services.reminder_engine import ReminderEngine, ReminderInput

logger = get_logger(__name__)


def calendar_window(view: CalendarView, anchor: date | datetime) -> tuple[date, date]:
    """Inclusive date range shown for a view. Weeks start on Monday."""
    day = date_only(anchor)
    if view == CalendarView.DAY:
        return day, day
    if view == CalendarView.WEEK:
        start = day - timedelta(days=day.weekday())
        return start, start + timedelta(days=6)
    start = day.replace(day=1)
    return start, add_months(start, 1) - timedelta(days=1)


def events_between(
    reminders: Iterable[ReminderInput],
    start: date,
    end: date,
    now: date | datetime,
    engine: ReminderEngine | None = None,
) -> list[CalendarEvent]:
    """
    Calendar events for reminders falling in ``start``..``end``.

    Active recurring reminders are expanded into each occurrence in the
    range. Resolved reminders appear once, on their own date.
    """
    engine = engine or ReminderEngine()
    events: list[CalendarEvent] = []

    for record in reminders:
        try:
            reminder = engine.coerce(record)
        except (InvalidDateError, ValidationError) as e:
            skipped = engine.skipped_record(record, e)
            logger.warning(
                "calendar_reminder_skipped",
                reminder_id=skipped.reminder_id,
                reason=skipped.reason,
            )
            continue

        if repeats(reminder) and not reminder.is_resolved:
            dates = occurrences_between(reminder, start, end)
        elif start <= reminder.reminder_date <= end:
            dates = [reminder.reminder_date]
        else:
            dates = []

        for day in dates:
            projected = reminder if day == reminder.reminder_date else reminder.model_copy(
                update={"reminder_date": day}
            )
            events.append(
                CalendarEvent(
                    reminder_id=reminder.id,
                    title=reminder.title,
                    event_date=day,
                    event_time=None if reminder.is_all_day else reminder.reminder_time,
                    domain=reminder.domain,
                    priority=reminder.priority,
                    status=engine.classify(projected, now),
                    is_occurrence=day != reminder.reminder_date,
                    entity_type=reminder.entity_type,
                    entity_id=reminder.entity_id,
                )
            )

    events.sort(key=lambda e: (e.event_date, -e.priority.rank, e.title))
    return events

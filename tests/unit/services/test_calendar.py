"""Tests for calendar windows and events."""

from datetime import date

import pytest

from homehub.core.entities import CalendarView, RecurrenceType, ReminderPriority, ReminderStatus
from homehub.core.services import calendar_window, events_between


class TestCalendarWindow:
    """Tests for calendar_window."""

    def test_day(self):
        assert calendar_window(CalendarView.DAY, date(2024, 3, 10)) == (date(2024, 3, 10), date(2024, 3, 10))

    @pytest.mark.parametrize("anchor", [date(2024, 3, 4), date(2024, 3, 7), date(2024, 3, 10)])
    def test_week_starts_monday(self, anchor):
        assert calendar_window(CalendarView.WEEK, anchor) == (date(2024, 3, 4), date(2024, 3, 10))

    def test_month(self):
        assert calendar_window(CalendarView.MONTH, date(2024, 2, 14)) == (date(2024, 2, 1), date(2024, 2, 29))

    def test_december(self):
        assert calendar_window(CalendarView.MONTH, date(2024, 12, 5)) == (date(2024, 12, 1), date(2024, 12, 31))


class TestEventsBetween:
    """Tests for events_between."""

    def test_one_off_in_range(self, now, make_reminder):
        reminder = make_reminder(2)
        events = events_between([reminder], date(2024, 3, 4), date(2024, 3, 17), now)

        assert len(events) == 1
        assert events[0].reminder_id == reminder.id
        assert events[0].event_date == date(2024, 3, 12)
        assert events[0].status == ReminderStatus.UPCOMING
        assert events[0].is_occurrence is False

    def test_out_of_range_excluded(self, now, make_reminder):
        assert events_between([make_reminder(30)], date(2024, 3, 1), date(2024, 3, 31), now) == []

    def test_recurring_expanded(self, now, make_reminder):
        reminder = make_reminder(-13, is_recurring=True, recurrence_type=RecurrenceType.WEEKLY)
        events = events_between([reminder], date(2024, 3, 1), date(2024, 3, 31), now)

        assert [e.event_date for e in events] == [
            date(2024, 3, 4),
            date(2024, 3, 11),
            date(2024, 3, 18),
            date(2024, 3, 25),
        ]
        assert all(e.is_occurrence for e in events)
        assert events[0].status == ReminderStatus.OVERDUE
        assert events[1].status == ReminderStatus.UPCOMING

    def test_resolved_recurring_not_expanded(self, now, make_reminder):
        reminder = make_reminder(
            0, is_recurring=True, recurrence_type=RecurrenceType.DAILY, is_completed=True
        )
        events = events_between([reminder], date(2024, 3, 4), date(2024, 3, 17), now)

        assert len(events) == 1
        assert events[0].status == ReminderStatus.COMPLETED

    def test_sorted_by_date_then_priority(self, now, make_reminder):
        low = make_reminder(1, title="A low", priority=ReminderPriority.LOW)
        urgent = make_reminder(1, title="B urgent", priority=ReminderPriority.URGENT)
        earlier = make_reminder(0, title="C earlier", priority=ReminderPriority.LOW)

        events = events_between([low, urgent, earlier], date(2024, 3, 4), date(2024, 3, 17), now)

        assert [e.title for e in events] == ["C earlier", "B urgent", "A low"]

    def test_invalid_dates_skipped(self, now, make_reminder):
        records = [make_reminder(1), {"id": 9, "title": "Broken", "reminder_date": "later"}]
        events = events_between(records, date(2024, 3, 4), date(2024, 3, 17), now)
        assert len(events) == 1

    def test_unreadable_records_skipped(self, now, make_reminder):
        records = [
            make_reminder(1),
            {"id": 8, "title": "MOT", "domain": "vehicles", "reminder_date": "2024-03-12"},
            {"id": 9, "title": "Fees", "reminder_date": "2024-03-13", "priority": "critical"},
        ]
        events = events_between(records, date(2024, 3, 4), date(2024, 3, 17), now)

        assert [(e.reminder_id, e.domain.value) for e in events] == [(1, "household"), (8, "custom")]

    def test_timed_reminder_keeps_time(self, now):
        record = {"id": 1, "title": "Dentist", "reminder_date": "2024-03-12T14:30:00"}
        events = events_between([record], date(2024, 3, 4), date(2024, 3, 17), now)
        assert events[0].event_time.hour == 14

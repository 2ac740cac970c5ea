"""Unit tests for complete, dismiss and snooze use cases."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from homehub.application.use_cases import (
    CompleteReminderUseCase,
    DismissReminderUseCase,
    SnoozeReminderUseCase,
)
from homehub.core.entities import RecurrenceType
from homehub.core.exceptions import (
    InvalidTransitionError,
    ReminderNotFoundError,
    ValidationError,
)


@pytest.fixture
def mock_reminder_store():
    """Reminder store echoing updates and assigning IDs to new reminders."""
    store = AsyncMock()
    store.get = AsyncMock(return_value=None)

    async def _create(reminder):
        reminder.id = 500
        return reminder

    async def _update(reminder):
        return reminder

    store.create = AsyncMock(side_effect=_create)
    store.update = AsyncMock(side_effect=_update)
    return store


class TestCompleteReminderUseCase:
    """Tests for CompleteReminderUseCase."""

    async def test_not_found(self, mock_reminder_store, now):
        use_case = CompleteReminderUseCase(reminder_store=mock_reminder_store)
        with pytest.raises(ReminderNotFoundError):
            await use_case.execute(404, now)

    async def test_completes_one_off(self, mock_reminder_store, make_reminder, now):
        mock_reminder_store.get.return_value = make_reminder(0, id=1)
        use_case = CompleteReminderUseCase(reminder_store=mock_reminder_store)

        result = await use_case.execute(1, now)

        assert result.reminder.is_completed is True
        assert result.follow_up is None
        assert result.already_completed is False
        mock_reminder_store.update.assert_awaited_once()
        mock_reminder_store.create.assert_not_awaited()

    async def test_recurring_creates_follow_up(self, mock_reminder_store, make_reminder, now, today):
        mock_reminder_store.get.return_value = make_reminder(
            0, id=1, is_recurring=True, recurrence_type=RecurrenceType.MONTHLY
        )
        use_case = CompleteReminderUseCase(reminder_store=mock_reminder_store)

        result = await use_case.execute(1, now)

        assert result.follow_up.id == 500
        assert result.follow_up.reminder_date == today.replace(month=4)
        assert result.follow_up.is_completed is False

    async def test_already_completed_is_not_saved(self, mock_reminder_store, make_reminder, now):
        mock_reminder_store.get.return_value = make_reminder(0, id=1, is_completed=True)
        use_case = CompleteReminderUseCase(reminder_store=mock_reminder_store)

        result = await use_case.execute(1, now)

        assert result.already_completed is True
        mock_reminder_store.update.assert_not_awaited()

    async def test_dismissed_cannot_complete(self, mock_reminder_store, make_reminder, now):
        mock_reminder_store.get.return_value = make_reminder(0, id=1, is_dismissed=True)
        use_case = CompleteReminderUseCase(reminder_store=mock_reminder_store)

        with pytest.raises(InvalidTransitionError):
            await use_case.execute(1, now)


class TestDismissReminderUseCase:
    """Tests for DismissReminderUseCase."""

    async def test_dismiss(self, mock_reminder_store, make_reminder, now):
        mock_reminder_store.get.return_value = make_reminder(-2, id=2)
        reminder = await DismissReminderUseCase(reminder_store=mock_reminder_store).execute(2, now)

        assert reminder.is_dismissed is True
        mock_reminder_store.update.assert_awaited_once()

    async def test_not_found(self, mock_reminder_store, now):
        with pytest.raises(ReminderNotFoundError):
            await DismissReminderUseCase(reminder_store=mock_reminder_store).execute(2, now)

    async def test_repeat_dismiss_not_saved(self, mock_reminder_store, make_reminder, now):
        mock_reminder_store.get.return_value = make_reminder(-2, id=2, is_dismissed=True)
        await DismissReminderUseCase(reminder_store=mock_reminder_store).execute(2, now)
        mock_reminder_store.update.assert_not_awaited()


class TestSnoozeReminderUseCase:
    """Tests for SnoozeReminderUseCase."""

    async def test_snooze(self, mock_reminder_store, make_reminder, now, today):
        mock_reminder_store.get.return_value = make_reminder(0, id=3)
        use_case = SnoozeReminderUseCase(reminder_store=mock_reminder_store)

        reminder = await use_case.execute(3, today + timedelta(days=2), now)

        assert reminder.is_snoozed is True
        assert reminder.snoozed_until == today + timedelta(days=2)

    async def test_snooze_into_past(self, mock_reminder_store, make_reminder, now, today):
        mock_reminder_store.get.return_value = make_reminder(0, id=3)
        use_case = SnoozeReminderUseCase(reminder_store=mock_reminder_store)

        with pytest.raises(ValidationError):
            await use_case.execute(3, today, now)
        mock_reminder_store.update.assert_not_awaited()

    async def test_unsnooze(self, mock_reminder_store, make_reminder, now, today):
        mock_reminder_store.get.return_value = make_reminder(
            0, id=3, is_snoozed=True, snoozed_until=today + timedelta(days=2)
        )
        reminder = await SnoozeReminderUseCase(reminder_store=mock_reminder_store).unsnooze(3, now)

        assert reminder.is_snoozed is False
        mock_reminder_store.update.assert_awaited_once()

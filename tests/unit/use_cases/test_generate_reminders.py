"""Unit tests for GenerateRemindersUseCase."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from homehub.application.use_cases import GenerateRemindersUseCase
from homehub.core.entities import ReminderDomain, SourceEntity
from homehub.core.services import ReminderEngine
from homehub.core.services.reminder_lifecycle import complete


@pytest.fixture
def mock_source_store(vehicle):
    """Source store holding one vehicle."""
    store = AsyncMock()
    store.list_entities = AsyncMock(return_value=[vehicle])
    return store


@pytest.fixture
def mock_reminder_store():
    """Reminder store that assigns sequential IDs on create."""
    store = AsyncMock()
    store.list_auto_generated = AsyncMock(return_value=[])
    ids = iter(range(100, 200))

    async def _create(reminder):
        reminder.id = next(ids)
        return reminder

    async def _update(reminder):
        return reminder

    store.create = AsyncMock(side_effect=_create)
    store.update = AsyncMock(side_effect=_update)
    return store


@pytest.fixture
def use_case(mock_source_store, mock_reminder_store):
    return GenerateRemindersUseCase(
        source_store=mock_source_store,
        reminder_store=mock_reminder_store,
        engine=ReminderEngine(),
    )


class TestGenerateRemindersUseCase:
    """Tests for GenerateRemindersUseCase."""

    async def test_creates_reminder_for_due_field(self, use_case, mock_reminder_store, now):
        result = await use_case.execute(now, lookahead_days=30)

        assert result.sources_scanned == 1
        assert result.reminders_created == 1
        assert result.created_reminder_ids == [100]
        assert result.out_of_window == 1
        created = mock_reminder_store.create.call_args.args[0]
        assert created.auto_generate_key == "vehicle:7:mot_expiry"

    async def test_lists_all_sources(self, use_case, mock_source_store, now):
        await use_case.execute(now)
        mock_source_store.list_entities.assert_awaited_once_with(limit=None)

    async def test_second_run_creates_nothing(self, use_case, mock_reminder_store, now):
        await use_case.execute(now)
        stored = mock_reminder_store.create.call_args.args[0]
        mock_reminder_store.list_auto_generated.return_value = [stored]

        result = await use_case.execute(now)

        assert result.reminders_created == 0
        assert result.unchanged == 1
        assert mock_reminder_store.create.await_count == 1
        mock_reminder_store.update.assert_not_awaited()

    async def test_changed_date_is_updated(self, use_case, mock_reminder_store, vehicle, now, today):
        await use_case.execute(now)
        stored = mock_reminder_store.create.call_args.args[0]
        mock_reminder_store.list_auto_generated.return_value = [stored]
        vehicle.dates["mot_expiry"] = today + timedelta(days=3)

        result = await use_case.execute(now)

        assert result.reminders_updated == 1
        assert result.updated_reminder_ids == [stored.id]
        updated = mock_reminder_store.update.call_args.args[0]
        assert updated.reminder_date == today + timedelta(days=3)

    async def test_completed_reminder_not_recreated(self, use_case, mock_reminder_store, now):
        await use_case.execute(now)
        stored = mock_reminder_store.create.call_args.args[0]
        mock_reminder_store.list_auto_generated.return_value = [complete(stored, now)]

        result = await use_case.execute(now)

        assert result.reminders_created == 0
        assert result.already_resolved == 1

    async def test_domain_filter(self, use_case, mock_source_store, now, today, vehicle):
        mock_source_store.list_entities.return_value = [
            vehicle,
            SourceEntity(
                id=3, entity_type="insurance", name="Home cover",
                dates={"renewal_date": today + timedelta(days=20)},
            ),
        ]

        result = await use_case.execute(now, domains=[ReminderDomain.FINANCE])

        assert result.reminders_created == 1
        assert result.sources_scanned == 2

    async def test_no_sources(self, use_case, mock_source_store, mock_reminder_store, now):
        mock_source_store.list_entities.return_value = []
        result = await use_case.execute(now)

        assert result.reminders_created == 0
        mock_reminder_store.create.assert_not_awaited()

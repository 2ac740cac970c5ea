"""Fixtures for API tests: in-memory stores and a fixed clock."""

from collections.abc import AsyncGenerator
from itertools import count
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from homehub.api.dependencies import get_clock, get_prefs_store, get_rem_store, get_source_store
from homehub.api.main import app
from homehub.core.entities import Reminder, SourceEntity, UserPreferences


def _memory_reminder_store() -> AsyncMock:
    """AsyncMock reminder store backed by a dict, exposed as ``store.rows``."""
    store = AsyncMock()
    store.rows = {}
    ids = count(1)

    async def create(reminder: Reminder) -> Reminder:
        reminder.id = next(ids)
        store.rows[reminder.id] = reminder
        return reminder

    async def get(reminder_id):
        return store.rows.get(reminder_id)

    async def update(reminder: Reminder) -> Reminder:
        store.rows[reminder.id] = reminder
        return reminder

    async def delete(reminder_id) -> bool:
        return store.rows.pop(reminder_id, None) is not None

    async def list_reminders(include_resolved=False, domain=None, limit=100, offset=0):
        rows = sorted(store.rows.values(), key=lambda r: (r.reminder_date, r.id))
        if not include_resolved:
            rows = [r for r in rows if not r.is_resolved]
        if domain is not None:
            rows = [r for r in rows if r.domain == domain]
        return rows[offset:] if limit is None else rows[offset : offset + limit]

    async def list_auto_generated():
        return [r for r in store.rows.values() if r.auto_generate_key]

    async def find_by_linked_entity(entity_type, entity_id):
        return [
            r for r in store.rows.values()
            if r.entity_type == entity_type and r.entity_id == entity_id
        ]

    store.create.side_effect = create
    store.get.side_effect = get
    store.update.side_effect = update
    store.delete.side_effect = delete
    store.list_reminders.side_effect = list_reminders
    store.list_auto_generated.side_effect = list_auto_generated
    store.find_by_linked_entity.side_effect = find_by_linked_entity
    return store


def _memory_source_store() -> AsyncMock:
    store = AsyncMock()
    store.rows = {}
    ids = count(1)

    async def create(entity: SourceEntity) -> SourceEntity:
        entity.id = next(ids)
        store.rows[entity.id] = entity
        return entity

    async def get(entity_id):
        return store.rows.get(entity_id)

    async def update(entity: SourceEntity) -> SourceEntity:
        store.rows[entity.id] = entity
        return entity

    async def delete(entity_id) -> bool:
        return store.rows.pop(entity_id, None) is not None

    async def list_entities(entity_type=None, limit=100, offset=0):
        rows = [e for e in store.rows.values() if entity_type is None or e.entity_type == entity_type]
        return rows[offset:] if limit is None else rows[offset : offset + limit]

    store.create.side_effect = create
    store.get.side_effect = get
    store.update.side_effect = update
    store.delete.side_effect = delete
    store.list_entities.side_effect = list_entities
    return store


@pytest.fixture
def reminder_store() -> AsyncMock:
    return _memory_reminder_store()


@pytest.fixture
def source_store() -> AsyncMock:
    return _memory_source_store()


@pytest.fixture
def prefs_store() -> AsyncMock:
    """Preferences store remembering the last saved value."""
    store = AsyncMock()
    store.saved = UserPreferences()

    async def get(user_key="default"):
        return store.saved

    async def save(preferences):
        store.saved = preferences
        return preferences

    store.get.side_effect = get
    store.save.side_effect = save
    return store


@pytest.fixture
async def client(reminder_store, source_store, prefs_store, now) -> AsyncGenerator[AsyncClient, None]:
    """Async client with in-memory stores and the clock fixed at ``now``."""
    app.dependency_overrides[get_rem_store] = lambda: reminder_store
    app.dependency_overrides[get_source_store] = lambda: source_store
    app.dependency_overrides[get_prefs_store] = lambda: prefs_store
    app.dependency_overrides[get_clock] = lambda: (lambda: now)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()

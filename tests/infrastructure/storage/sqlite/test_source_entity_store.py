"""Tests for SQLiteSourceEntityStore."""

from datetime import date

import pytest

from homehub.core.entities import SourceEntity, SourceEntityType
from homehub.infrastructure.storage.sqlite.source_entity_store import SQLiteSourceEntityStore


@pytest.fixture
def store(migrated_db) -> SQLiteSourceEntityStore:
    return SQLiteSourceEntityStore()


class TestSQLiteSourceEntityStore:
    """Tests for SQLiteSourceEntityStore."""

    async def test_create_and_get_round_trips_dates(self, store):
        created = await store.create(
            SourceEntity(
                entity_type=SourceEntityType.VEHICLE,
                name="Golf",
                category="car",
                dates={"mot_expiry": date(2024, 3, 20), "tax_expiry": None},
            )
        )

        fetched = await store.get(created.id)
        assert fetched.name == "Golf"
        assert fetched.category == "car"
        assert fetched.dates == {"mot_expiry": date(2024, 3, 20), "tax_expiry": None}

    async def test_update(self, store):
        created = await store.create(SourceEntity(entity_type="document", name="Passport"))
        created.dates["expiry_date"] = date(2030, 1, 1)
        created.notes = "Drawer"
        await store.update(created)

        fetched = await store.get(created.id)
        assert fetched.date_for("expiry_date") == date(2030, 1, 1)
        assert fetched.notes == "Drawer"

    async def test_delete(self, store):
        created = await store.create(SourceEntity(entity_type="property", name="Flat"))
        assert await store.delete(created.id) is True
        assert await store.get(created.id) is None

    async def test_list_by_type(self, store):
        await store.create(SourceEntity(entity_type="vehicle", name="Van"))
        await store.create(SourceEntity(entity_type="subscription", name="Music"))
        await store.create(SourceEntity(entity_type="vehicle", name="Bike"))

        vehicles = await store.list_entities(entity_type=SourceEntityType.VEHICLE)
        assert [e.name for e in vehicles] == ["Bike", "Van"]
        assert len(await store.list_entities(limit=None)) == 3

    async def test_unreadable_stored_date_dropped(self, store, raw_conn):
        cursor = await raw_conn.execute(
            "INSERT INTO source_entities (entity_type, name, dates_json) VALUES (?, ?, ?)",
            ("document", "Licence", '{"expiry_date": "soon"}'),
        )
        await raw_conn.commit()

        fetched = await store.get(cursor.lastrowid)
        assert fetched.dates == {}

"""API tests for the source entity endpoints."""

from datetime import date

from httpx import AsyncClient

from homehub.core.entities import Reminder, SourceEntity


class TestSourcesAPI:
    """Tests for /api/sources."""

    async def test_create(self, client: AsyncClient):
        response = await client.post(
            "/api/sources",
            json={
                "entity_type": "vehicle",
                "name": "Golf",
                "dates": {"mot_expiry": "2024-06-01", "tax_expiry": None},
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["entity_type"] == "vehicle"
        assert data["dates"] == {"mot_expiry": "2024-06-01", "tax_expiry": None}

    async def test_unknown_date_field(self, client: AsyncClient):
        response = await client.post(
            "/api/sources",
            json={"entity_type": "document", "name": "Passport", "dates": {"mot_expiry": "2024-06-01"}},
        )

        assert response.status_code == 422
        assert "mot_expiry" in response.json()["message"]

    async def test_bad_date_value(self, client: AsyncClient):
        response = await client.post(
            "/api/sources",
            json={"entity_type": "document", "name": "Passport", "dates": {"expiry_date": "June"}},
        )

        assert response.status_code == 422
        assert response.json()["error_code"] == "INVALID_DATE"

    async def test_unknown_entity_type(self, client: AsyncClient):
        response = await client.post("/api/sources", json={"entity_type": "boat", "name": "Dinghy"})
        assert response.status_code == 422

    async def test_list_and_filter(self, client: AsyncClient, source_store):
        await source_store.create(SourceEntity(entity_type="vehicle", name="Van"))
        await source_store.create(SourceEntity(entity_type="subscription", name="Music"))

        assert (await client.get("/api/sources")).json()["total"] == 2
        data = (await client.get("/api/sources", params={"entity_type": "subscription"})).json()
        assert [e["name"] for e in data["entities"]] == ["Music"]

    async def test_update_merges_dates(self, client: AsyncClient, source_store):
        entity = await source_store.create(
            SourceEntity(entity_type="vehicle", name="Van", dates={"mot_expiry": date(2024, 6, 1)})
        )

        response = await client.put(
            f"/api/sources/{entity.id}",
            json={"name": "Transit", "dates": {"tax_expiry": "2024-09-30"}},
        )

        data = response.json()
        assert data["name"] == "Transit"
        assert data["dates"] == {"mot_expiry": "2024-06-01", "tax_expiry": "2024-09-30"}

    async def test_get_missing(self, client: AsyncClient):
        response = await client.get("/api/sources/12")

        assert response.status_code == 404
        assert response.json()["error_code"] == "SOURCE_ENTITY_NOT_FOUND"

    async def test_delete_keeps_reminders(self, client: AsyncClient, source_store, reminder_store):
        entity = await source_store.create(SourceEntity(entity_type="document", name="Passport"))
        await reminder_store.create(
            Reminder(
                title="Passport expires",
                reminder_date=date(2024, 4, 1),
                entity_type="document",
                entity_id=entity.id,
            )
        )

        assert (await client.delete(f"/api/sources/{entity.id}")).status_code == 204
        assert entity.id not in source_store.rows
        assert len(reminder_store.rows) == 1
        assert (await client.delete(f"/api/sources/{entity.id}")).status_code == 404

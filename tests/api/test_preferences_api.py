"""API tests for hub layout preferences."""

from httpx import AsyncClient

from homehub.core.entities import HUB_MODULES


class TestPreferencesAPI:
    """Tests for /api/preferences."""

    async def test_defaults(self, client: AsyncClient):
        data = (await client.get("/api/preferences")).json()

        assert data["module_order"] == list(HUB_MODULES)
        assert data["visible_modules"] == list(HUB_MODULES)

    async def test_update_order_and_visibility(self, client: AsyncClient, prefs_store):
        response = await client.put(
            "/api/preferences",
            json={"module_order": ["plants", "coding"], "enabled_modules": ["coding", "plants"]},
        )

        data = response.json()
        assert data["module_order"][:2] == ["plants", "coding"]
        assert data["visible_modules"] == ["plants", "coding"]
        prefs_store.save.assert_awaited_once()

    async def test_partial_update_keeps_order(self, client: AsyncClient):
        await client.put("/api/preferences", json={"module_order": ["reading"]})
        data = (await client.put("/api/preferences", json={"enabled_modules": ["finance"]})).json()

        assert data["module_order"][0] == "reading"
        assert data["visible_modules"] == ["finance"]

    async def test_unknown_modules_ignored(self, client: AsyncClient):
        data = (
            await client.put("/api/preferences", json={"enabled_modules": ["weather", "finance"]})
        ).json()
        assert data["enabled_modules"] == ["finance"]

"""SQLite implementation of user preference storage."""

import json
from datetime import datetime

from homehub.config import get_logger
from homehub.core.dates import utcnow
from homehub.core.entities.preferences import UserPreferences
from homehub.core.interfaces.storage import IPreferencesStore
from homehub.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


def _load_list(raw: str | None) -> list[str] | None:
    if not raw:
        return None
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        return None
    return [str(v) for v in value] if isinstance(value, list) else None


class SQLitePreferencesStore(IPreferencesStore):
    """SQLite implementation of user preference storage."""

    async def get(self, user_key: str = "default") -> UserPreferences:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM user_preferences WHERE user_key = ?", (user_key,)
            )
            row = await cursor.fetchone()

        if row is None:
            return UserPreferences(user_key=user_key)

        data: dict = {"user_key": user_key}
        module_order = _load_list(row["module_order_json"])
        if module_order is not None:
            data["module_order"] = module_order
        enabled = _load_list(row["enabled_modules_json"])
        if enabled is not None:
            data["enabled_modules"] = enabled
        if row["updated_at"]:
            try:
                data["updated_at"] = datetime.fromisoformat(row["updated_at"])
            except (ValueError, TypeError):
                pass
        return UserPreferences(**data)

    async def save(self, preferences: UserPreferences) -> UserPreferences:
        preferences.updated_at = utcnow()
        async with get_transaction() as conn:
            await conn.execute(
                """
                INSERT INTO user_preferences (
                    user_key, module_order_json, enabled_modules_json, updated_at
                ) VALUES (?, ?, ?, ?)
                ON CONFLICT(user_key) DO UPDATE SET
                    module_order_json = excluded.module_order_json,
                    enabled_modules_json = excluded.enabled_modules_json,
                    updated_at = excluded.updated_at
                """,
                (
                    preferences.user_key,
                    json.dumps(preferences.module_order),
                    json.dumps(preferences.enabled_modules),
                    preferences.updated_at.isoformat(),
                ),
            )
        logger.info(
            "preferences_saved",
            user_key=preferences.user_key,
            enabled=len(preferences.enabled_modules),
        )
        return preferences

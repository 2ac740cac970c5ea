"""
SQLite implementation of source entity storage.

Dated fields are stored as a JSON object keyed by field name.
"""

import json
from datetime import date, datetime
from typing import Any

import aiosqlite

from homehub.config import get_logger
from homehub.core.dates import utcnow
from homehub.core.entities.source_entity import SourceEntity, SourceEntityType
from homehub.core.interfaces.storage import ISourceEntityStore
from homehub.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


def _dates_to_json(dates: dict[str, date | None]) -> str:
    return json.dumps(
        {name: value.isoformat() if value is not None else None for name, value in dates.items()},
        sort_keys=True,
    )


def _dates_from_json(raw: str | None, entity_id: Any) -> dict[str, date | None]:
    if not raw:
        return {}
    try:
        stored = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("source_entity_dates_unreadable", entity_id=entity_id)
        return {}

    dates: dict[str, date | None] = {}
    for name, value in stored.items():
        if value is None:
            dates[name] = None
            continue
        try:
            dates[name] = date.fromisoformat(value)
        except (ValueError, TypeError):
            logger.warning("source_entity_date_skipped", entity_id=entity_id, field=name, value=value)
    return dates


class SQLiteSourceEntityStore(ISourceEntityStore):
    """SQLite implementation of source entity storage."""

    async def create(self, entity: SourceEntity) -> SourceEntity:
        """Create a new source entity."""
        entity.updated_at = utcnow()
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO source_entities (
                    entity_type, name, category, dates_json, notes,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    entity.entity_type.value,
                    entity.name,
                    entity.category,
                    _dates_to_json(entity.dates),
                    entity.notes,
                    entity.created_at.isoformat(),
                    entity.updated_at.isoformat(),
                ),
            )
            entity.id = cursor.lastrowid
            logger.info(
                "source_entity_created",
                entity_id=entity.id,
                entity_type=entity.entity_type.value,
                name=entity.name,
            )
            return entity

    async def get(self, entity_id: int) -> SourceEntity | None:
        """Get source entity by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM source_entities WHERE id = ?", (entity_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_entity(row)

    async def update(self, entity: SourceEntity) -> SourceEntity:
        """Update an existing source entity."""
        entity.updated_at = utcnow()
        async with get_transaction() as conn:
            await conn.execute(
                """
                UPDATE source_entities SET
                    entity_type = ?, name = ?, category = ?,
                    dates_json = ?, notes = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    entity.entity_type.value,
                    entity.name,
                    entity.category,
                    _dates_to_json(entity.dates),
                    entity.notes,
                    entity.updated_at.isoformat(),
                    entity.id,
                ),
            )
            logger.info("source_entity_updated", entity_id=entity.id)
            return entity

    async def delete(self, entity_id: int) -> bool:
        """Delete a source entity. Reminders referring to it are kept."""
        async with get_transaction() as conn:
            cursor = await conn.execute("DELETE FROM source_entities WHERE id = ?", (entity_id,))
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("source_entity_deleted", entity_id=entity_id)
            return deleted

    async def list_entities(
        self,
        entity_type: SourceEntityType | None = None,
        limit: int | None = 100,
        offset: int = 0,
    ) -> list[SourceEntity]:
        """List source entities, optionally of one type."""
        sql_limit = -1 if limit is None else limit
        async with get_connection() as conn:
            if entity_type is not None:
                cursor = await conn.execute(
                    """
                    SELECT * FROM source_entities
                    WHERE entity_type = ?
                    ORDER BY name ASC, id ASC
                    LIMIT ? OFFSET ?
                    """,
                    (SourceEntityType(entity_type).value, sql_limit, offset),
                )
            else:
                cursor = await conn.execute(
                    """
                    SELECT * FROM source_entities
                    ORDER BY entity_type ASC, name ASC, id ASC
                    LIMIT ? OFFSET ?
                    """,
                    (sql_limit, offset),
                )
            rows = await cursor.fetchall()
            return [self._row_to_entity(row) for row in rows]

    @staticmethod
    def _row_to_entity(row: aiosqlite.Row) -> SourceEntity:
        """Convert a database row to a SourceEntity."""
        created_at = utcnow()
        if row["created_at"]:
            try:
                created_at = datetime.fromisoformat(row["created_at"])
            except (ValueError, TypeError):
                pass

        updated_at = utcnow()
        if row["updated_at"]:
            try:
                updated_at = datetime.fromisoformat(row["updated_at"])
            except (ValueError, TypeError):
                pass

        return SourceEntity(
            id=row["id"],
            entity_type=SourceEntityType(row["entity_type"]),
            name=row["name"],
            category=row["category"],
            dates=_dates_from_json(row["dates_json"], row["id"]),
            notes=row["notes"] or "",
            created_at=created_at,
            updated_at=updated_at,
        )

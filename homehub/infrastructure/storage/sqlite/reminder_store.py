"""
SQLite implementation of reminder storage.

Handles CRUD, listing and generation lookups for reminders.
"""

from datetime import date, datetime, time
from typing import Any

import aiosqlite

from homehub.config import get_logger
from homehub.core.dates import parse_date, utcnow
from homehub.core.entities.reminder import (
    RecurrenceType,
    Reminder,
    ReminderDomain,
    ReminderPriority,
)
from homehub.core.exceptions import InvalidDateError
from homehub.core.interfaces.storage import IReminderStore
from homehub.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)

_COLUMNS = (
    "title",
    "domain",
    "description",
    "reminder_date",
    "reminder_time",
    "is_all_day",
    "entity_type",
    "entity_id",
    "entity_name",
    "is_recurring",
    "recurrence_type",
    "recurrence_interval",
    "recurrence_end_date",
    "notify_days_before",
    "priority",
    "is_completed",
    "completed_at",
    "is_dismissed",
    "dismissed_at",
    "is_snoozed",
    "snoozed_until",
    "is_auto_generated",
    "auto_generate_key",
    "created_at",
    "updated_at",
)


def _iso(value: date | datetime | time | None) -> str | None:
    return value.isoformat() if value is not None else None


class SQLiteReminderStore(IReminderStore):
    """SQLite implementation of reminder storage."""

    async def create(self, reminder: Reminder) -> Reminder:
        """Create a new reminder."""
        reminder.updated_at = utcnow()
        placeholders = ", ".join("?" for _ in _COLUMNS)
        async with get_transaction() as conn:
            cursor = await conn.execute(
                f"INSERT INTO reminders ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
                self._entity_to_params(reminder),
            )
            reminder.id = cursor.lastrowid
            logger.info(
                "reminder_created",
                reminder_id=reminder.id,
                title=reminder.title,
                domain=reminder.domain.value,
                auto_generated=reminder.is_auto_generated,
            )
            return reminder

    async def get(self, reminder_id: int) -> Reminder | None:
        """Get reminder by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM reminders WHERE id = ?", (reminder_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_entity(row)

    async def update(self, reminder: Reminder) -> Reminder:
        """Update an existing reminder."""
        reminder.updated_at = utcnow()
        assignments = ", ".join(f"{column} = ?" for column in _COLUMNS)
        async with get_transaction() as conn:
            await conn.execute(
                f"UPDATE reminders SET {assignments} WHERE id = ?",
                (*self._entity_to_params(reminder), reminder.id),
            )
            logger.info("reminder_updated", reminder_id=reminder.id)
            return reminder

    async def delete(self, reminder_id: int) -> bool:
        """Delete a reminder by ID."""
        async with get_transaction() as conn:
            cursor = await conn.execute("DELETE FROM reminders WHERE id = ?", (reminder_id,))
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("reminder_deleted", reminder_id=reminder_id)
            return deleted

    async def list_reminders(
        self,
        include_resolved: bool = False,
        domain: ReminderDomain | None = None,
        limit: int | None = 100,
        offset: int = 0,
    ) -> list[Reminder]:
        """List reminders ordered by date, unresolved only by default."""
        conditions: list[str] = []
        params: list[Any] = []
        if not include_resolved:
            conditions.append("is_completed = 0 AND is_dismissed = 0")
        if domain is not None:
            conditions.append("domain = ?")
            params.append(ReminderDomain(domain).value)

        where = f"WHERE {' AND '.join(conditions)}" if conditions else ""
        params.extend([-1 if limit is None else limit, offset])

        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM reminders
                {where}
                ORDER BY reminder_date ASC, id ASC
                LIMIT ? OFFSET ?
                """,
                params,
            )
            rows = await cursor.fetchall()
            return self._rows_to_entities(rows)

    async def list_auto_generated(self) -> list[Reminder]:
        """All generated reminders, resolved ones included."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM reminders
                WHERE is_auto_generated = 1 AND auto_generate_key IS NOT NULL
                ORDER BY id ASC
                """
            )
            rows = await cursor.fetchall()
            return self._rows_to_entities(rows)

    async def find_by_linked_entity(
        self, entity_type: str, entity_id: int | str
    ) -> list[Reminder]:
        """Find reminders linked to a specific entity."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM reminders
                WHERE entity_type = ? AND entity_id = ?
                ORDER BY reminder_date ASC
                """,
                (entity_type, str(entity_id)),
            )
            rows = await cursor.fetchall()
            return self._rows_to_entities(rows)

    @classmethod
    def _rows_to_entities(cls, rows: list[aiosqlite.Row]) -> list[Reminder]:
        reminders: list[Reminder] = []
        for row in rows:
            try:
                reminders.append(cls._row_to_entity(row))
            except InvalidDateError as e:
                logger.warning(
                    "reminder_row_skipped",
                    reminder_id=row["id"],
                    value=e.details.get("value"),
                )
            except ValueError as e:
                logger.warning("reminder_row_skipped", reminder_id=row["id"], error=str(e))
        return reminders

    @staticmethod
    def _entity_to_params(reminder: Reminder) -> tuple:
        return (
            reminder.title,
            reminder.domain.value,
            reminder.description,
            reminder.reminder_date.isoformat(),
            _iso(reminder.reminder_time),
            1 if reminder.is_all_day else 0,
            reminder.entity_type,
            str(reminder.entity_id) if reminder.entity_id is not None else None,
            reminder.entity_name,
            1 if reminder.is_recurring else 0,
            reminder.recurrence_type.value if reminder.recurrence_type else None,
            reminder.recurrence_interval,
            _iso(reminder.recurrence_end_date),
            reminder.notify_days_before,
            reminder.priority.value,
            1 if reminder.is_completed else 0,
            _iso(reminder.completed_at),
            1 if reminder.is_dismissed else 0,
            _iso(reminder.dismissed_at),
            1 if reminder.is_snoozed else 0,
            _iso(reminder.snoozed_until),
            1 if reminder.is_auto_generated else 0,
            reminder.auto_generate_key,
            reminder.created_at.isoformat(),
            reminder.updated_at.isoformat(),
        )

    @staticmethod
    def _row_to_entity(row: aiosqlite.Row) -> Reminder:
        """
        Convert a database row to a Reminder entity.

        Raises:
            InvalidDateError: If the stored reminder_date is unreadable.
        """
        reminder_date = parse_date(row["reminder_date"], reminder_id=row["id"])

        domain = ReminderDomain.CUSTOM
        try:
            domain = ReminderDomain(row["domain"])
        except ValueError:
            logger.warning("reminder_unknown_domain", reminder_id=row["id"], domain=row["domain"])

        priority = ReminderPriority.MEDIUM
        if row["priority"]:
            try:
                priority = ReminderPriority(row["priority"])
            except ValueError:
                logger.warning(
                    "reminder_unknown_priority", reminder_id=row["id"], priority=row["priority"]
                )

        recurrence_type = None
        if row["recurrence_type"]:
            try:
                recurrence_type = RecurrenceType(row["recurrence_type"])
            except ValueError:
                logger.warning(
                    "reminder_unknown_recurrence",
                    reminder_id=row["id"],
                    recurrence_type=row["recurrence_type"],
                )

        entity_id: int | str | None = row["entity_id"]
        if isinstance(entity_id, str) and entity_id.isdigit():
            entity_id = int(entity_id)

        def optional_datetime(column: str) -> datetime | None:
            if not row[column]:
                return None
            try:
                return datetime.fromisoformat(row[column])
            except (ValueError, TypeError):
                return None

        def optional_date(column: str) -> date | None:
            if not row[column]:
                return None
            try:
                return date.fromisoformat(row[column][:10])
            except (ValueError, TypeError):
                return None

        reminder_time = None
        if row["reminder_time"]:
            try:
                reminder_time = time.fromisoformat(row["reminder_time"])
            except (ValueError, TypeError):
                pass

        return Reminder(
            id=row["id"],
            title=row["title"],
            domain=domain,
            description=row["description"] or "",
            reminder_date=reminder_date,
            reminder_time=reminder_time,
            is_all_day=bool(row["is_all_day"]),
            entity_type=row["entity_type"],
            entity_id=entity_id,
            entity_name=row["entity_name"],
            is_recurring=bool(row["is_recurring"]),
            recurrence_type=recurrence_type,
            recurrence_interval=row["recurrence_interval"] or 1,
            recurrence_end_date=optional_date("recurrence_end_date"),
            notify_days_before=row["notify_days_before"] or 0,
            priority=priority,
            is_completed=bool(row["is_completed"]),
            completed_at=optional_datetime("completed_at"),
            is_dismissed=bool(row["is_dismissed"]),
            dismissed_at=optional_datetime("dismissed_at"),
            is_snoozed=bool(row["is_snoozed"]),
            snoozed_until=optional_date("snoozed_until"),
            is_auto_generated=bool(row["is_auto_generated"]),
            auto_generate_key=row["auto_generate_key"],
            created_at=optional_datetime("created_at") or utcnow(),
            updated_at=optional_datetime("updated_at") or utcnow(),
        )

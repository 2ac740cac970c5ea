"""SQLite storage implementations."""

from homehub.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    check_database,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from homehub.infrastructure.storage.sqlite.preferences_store import SQLitePreferencesStore
from homehub.infrastructure.storage.sqlite.reminder_store import SQLiteReminderStore
from homehub.infrastructure.storage.sqlite.source_entity_store import SQLiteSourceEntityStore

# Singleton instances
_reminder_store: SQLiteReminderStore | None = None
_source_entity_store: SQLiteSourceEntityStore | None = None
_preferences_store: SQLitePreferencesStore | None = None


async def get_reminder_store() -> SQLiteReminderStore:
    """Get singleton reminder store instance."""
    global _reminder_store
    if _reminder_store is None:
        _reminder_store = SQLiteReminderStore()
    return _reminder_store


async def get_source_entity_store() -> SQLiteSourceEntityStore:
    """Get singleton source entity store instance."""
    global _source_entity_store
    if _source_entity_store is None:
        _source_entity_store = SQLiteSourceEntityStore()
    return _source_entity_store


async def get_preferences_store() -> SQLitePreferencesStore:
    """Get singleton preferences store instance."""
    global _preferences_store
    if _preferences_store is None:
        _preferences_store = SQLitePreferencesStore()
    return _preferences_store


__all__ = [
    # Connection
    "ConnectionPool",
    "check_database",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLitePreferencesStore",
    "SQLiteReminderStore",
    "SQLiteSourceEntityStore",
    # Factory functions
    "get_preferences_store",
    "get_reminder_store",
    "get_source_entity_store",
]

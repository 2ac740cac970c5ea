"""
Dependency injection container for FastAPI.

Provides stores, services, use cases and the clock to route handlers.
Tests override the store and clock dependencies; use cases are built
from the injected stores so the overrides flow through.
"""

from collections.abc import Callable
from datetime import datetime

from fastapi import Depends

from homehub.application.services import get_reminder_engine
from homehub.application.use_cases import (
    CompleteReminderUseCase,
    DismissReminderUseCase,
    GenerateRemindersUseCase,
    SnoozeReminderUseCase,
)
from homehub.core.interfaces import IPreferencesStore, IReminderStore, ISourceEntityStore
from homehub.core.services import ReminderEngine
from homehub.infrastructure.storage.sqlite import (
    get_preferences_store,
    get_reminder_store,
    get_source_entity_store,
)

Clock = Callable[[], datetime]


def _system_now() -> datetime:
    return datetime.now()


def get_clock() -> Clock:
    """Local wall clock; "today" is the local calendar date."""
    return _system_now


def get_engine() -> ReminderEngine:
    """Get the configured reminder engine."""
    return get_reminder_engine()


# Store dependencies
async def get_rem_store() -> IReminderStore:
    """Get reminder store."""
    return await get_reminder_store()


async def get_source_store() -> ISourceEntityStore:
    """Get source entity store."""
    return await get_source_entity_store()


async def get_prefs_store() -> IPreferencesStore:
    """Get preferences store."""
    return await get_preferences_store()


# Use case dependencies
def get_generate_reminders_use_case(
    source_store: ISourceEntityStore = Depends(get_source_store),
    reminder_store: IReminderStore = Depends(get_rem_store),
    engine: ReminderEngine = Depends(get_engine),
) -> GenerateRemindersUseCase:
    """Get generate reminders use case."""
    return GenerateRemindersUseCase(
        source_store=source_store,
        reminder_store=reminder_store,
        engine=engine,
    )


def get_complete_reminder_use_case(
    reminder_store: IReminderStore = Depends(get_rem_store),
) -> CompleteReminderUseCase:
    """Get complete reminder use case."""
    return CompleteReminderUseCase(reminder_store=reminder_store)


def get_dismiss_reminder_use_case(
    reminder_store: IReminderStore = Depends(get_rem_store),
) -> DismissReminderUseCase:
    """Get dismiss reminder use case."""
    return DismissReminderUseCase(reminder_store=reminder_store)


def get_snooze_reminder_use_case(
    reminder_store: IReminderStore = Depends(get_rem_store),
) -> SnoozeReminderUseCase:
    """Get snooze reminder use case."""
    return SnoozeReminderUseCase(reminder_store=reminder_store)

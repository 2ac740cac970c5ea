"""
Dismiss, snooze and unsnooze use cases.

Each loads the reminder, applies one transition and stores the result.
Repeated transitions are not written again.
"""

from datetime import date, datetime

from homehub.config import get_logger
from homehub.core.entities.reminder import Reminder
from homehub.core.exceptions import ReminderNotFoundError
from homehub.core.interfaces.storage import IReminderStore
from homehub.core.services import reminder_lifecycle

logger = get_logger(__name__)


class _ReminderTransitionUseCase:
    def __init__(self, reminder_store: IReminderStore | None = None):
        self._rem_store = reminder_store

    async def _get_rem_store(self) -> IReminderStore:
        if self._rem_store is None:
            from homehub.infrastructure.storage.sqlite import get_reminder_store
            self._rem_store = await get_reminder_store()
        return self._rem_store

    async def _load(self, reminder_id: int) -> tuple[IReminderStore, Reminder]:
        store = await self._get_rem_store()
        reminder = await store.get(reminder_id)
        if reminder is None:
            raise ReminderNotFoundError(reminder_id)
        return store, reminder


class DismissReminderUseCase(_ReminderTransitionUseCase):
    """Use case for dismissing a reminder."""

    async def execute(self, reminder_id: int, now: datetime) -> Reminder:
        store, reminder = await self._load(reminder_id)
        dismissed = reminder_lifecycle.dismiss(reminder, now)
        if dismissed is reminder:
            return reminder
        logger.info("reminder_dismissed", reminder_id=reminder_id)
        return await store.update(dismissed)


class SnoozeReminderUseCase(_ReminderTransitionUseCase):
    """Use case for snoozing and unsnoozing a reminder."""

    async def execute(self, reminder_id: int, until: date, now: datetime) -> Reminder:
        store, reminder = await self._load(reminder_id)
        snoozed = reminder_lifecycle.snooze(reminder, until, now)
        if snoozed is reminder:
            return reminder
        logger.info("reminder_snoozed", reminder_id=reminder_id, until=until.isoformat())
        return await store.update(snoozed)

    async def unsnooze(self, reminder_id: int, now: datetime) -> Reminder:
        store, reminder = await self._load(reminder_id)
        active = reminder_lifecycle.unsnooze(reminder, now)
        if active is reminder:
            return reminder
        logger.info("reminder_unsnoozed", reminder_id=reminder_id)
        return await store.update(active)

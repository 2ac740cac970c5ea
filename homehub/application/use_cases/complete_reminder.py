"""
Complete Reminder Use Case.

Marks a reminder completed and, for recurring reminders, schedules the
next one in the series.
"""

from dataclasses import dataclass
from datetime import datetime

from homehub.config import get_logger
from homehub.core.entities.reminder import Reminder
from homehub.core.exceptions import ReminderNotFoundError
from homehub.core.interfaces.storage import IReminderStore
from homehub.core.services import reminder_lifecycle

logger = get_logger(__name__)


@dataclass
class CompletionResult:
    """Completed reminder and the follow-up created for it, if any."""

    reminder: Reminder
    follow_up: Reminder | None = None
    already_completed: bool = False


class CompleteReminderUseCase:
    """Use case for completing a reminder."""

    def __init__(self, reminder_store: IReminderStore | None = None):
        self._rem_store = reminder_store

    async def _get_rem_store(self) -> IReminderStore:
        if self._rem_store is None:
            from homehub.infrastructure.storage.sqlite import get_reminder_store
            self._rem_store = await get_reminder_store()
        return self._rem_store

    async def execute(self, reminder_id: int, now: datetime) -> CompletionResult:
        """
        Complete a reminder.

        Raises:
            ReminderNotFoundError: If the reminder does not exist.
            InvalidTransitionError: If the reminder was dismissed.
        """
        store = await self._get_rem_store()
        reminder = await store.get(reminder_id)
        if reminder is None:
            raise ReminderNotFoundError(reminder_id)

        completed = reminder_lifecycle.complete(reminder, now)
        if completed is reminder:
            return CompletionResult(reminder=reminder, already_completed=True)

        completed = await store.update(completed)

        follow_up = reminder_lifecycle.follow_up(reminder, now)
        if follow_up is not None:
            follow_up = await store.create(follow_up)

        logger.info(
            "reminder_completed",
            reminder_id=reminder_id,
            follow_up_id=follow_up.id if follow_up else None,
        )
        return CompletionResult(reminder=completed, follow_up=follow_up)

"""Application use cases."""

from homehub.application.use_cases.complete_reminder import (
    CompleteReminderUseCase,
    CompletionResult,
)
from homehub.application.use_cases.generate_reminders import (
    GenerateRemindersUseCase,
    GenerationResult,
)
from homehub.application.use_cases.update_reminder_status import (
    DismissReminderUseCase,
    SnoozeReminderUseCase,
)

__all__ = [
    "CompleteReminderUseCase",
    "CompletionResult",
    "DismissReminderUseCase",
    "GenerateRemindersUseCase",
    "GenerationResult",
    "SnoozeReminderUseCase",
]

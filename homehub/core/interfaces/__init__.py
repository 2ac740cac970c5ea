"""Core interfaces."""

from homehub.core.interfaces.storage import (
    IPreferencesStore,
    IReminderStore,
    ISourceEntityStore,
)

__all__ = [
    "IPreferencesStore",
    "IReminderStore",
    "ISourceEntityStore",
]

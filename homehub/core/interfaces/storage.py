"""
Abstract interfaces for storage providers.

Defines contracts for reminder, source entity and preference stores.
"""

from abc import ABC, abstractmethod

from homehub.core.entities.preferences import UserPreferences
from homehub.core.entities.reminder import Reminder, ReminderDomain
from homehub.core.entities.source_entity import SourceEntity, SourceEntityType


class IReminderStore(ABC):
    """Abstract interface for reminder storage."""

    @abstractmethod
    async def create(self, reminder: Reminder) -> Reminder:
        """Create a reminder and return it with its assigned ID."""
        pass

    @abstractmethod
    async def get(self, reminder_id: int) -> Reminder | None:
        """Get reminder by ID."""
        pass

    @abstractmethod
    async def update(self, reminder: Reminder) -> Reminder:
        """Update an existing reminder."""
        pass

    @abstractmethod
    async def delete(self, reminder_id: int) -> bool:
        """Delete a reminder. Returns False if it did not exist."""
        pass

    @abstractmethod
    async def list_reminders(
        self,
        include_resolved: bool = False,
        domain: ReminderDomain | None = None,
        limit: int | None = 100,
        offset: int = 0,
    ) -> list[Reminder]:
        """List reminders ordered by date. ``limit=None`` returns all."""
        pass

    @abstractmethod
    async def list_auto_generated(self) -> list[Reminder]:
        """All generated reminders, resolved ones included."""
        pass

    @abstractmethod
    async def find_by_linked_entity(
        self,
        entity_type: str,
        entity_id: int | str,
    ) -> list[Reminder]:
        """Reminders referring to a source entity."""
        pass


class ISourceEntityStore(ABC):
    """Abstract interface for source entity storage."""

    @abstractmethod
    async def create(self, entity: SourceEntity) -> SourceEntity:
        pass

    @abstractmethod
    async def get(self, entity_id: int) -> SourceEntity | None:
        pass

    @abstractmethod
    async def update(self, entity: SourceEntity) -> SourceEntity:
        pass

    @abstractmethod
    async def delete(self, entity_id: int) -> bool:
        pass

    @abstractmethod
    async def list_entities(
        self,
        entity_type: SourceEntityType | None = None,
        limit: int | None = 100,
        offset: int = 0,
    ) -> list[SourceEntity]:
        """List entities by name. ``limit=None`` returns all."""
        pass


class IPreferencesStore(ABC):
    """Abstract interface for user preference storage."""

    @abstractmethod
    async def get(self, user_key: str = "default") -> UserPreferences:
        """Stored preferences, or defaults when none are saved."""
        pass

    @abstractmethod
    async def save(self, preferences: UserPreferences) -> UserPreferences:
        """Insert or replace preferences for their user key."""
        pass

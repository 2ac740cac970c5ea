"""
Domain exceptions for the HomeHub application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class HomeHubError(Exception):
    """Base exception for all HomeHub errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(HomeHubError):
    """Base exception for storage operations."""

    pass


class ReminderNotFoundError(StorageError):
    """Reminder not found in storage."""

    def __init__(self, reminder_id: int | str):
        super().__init__(
            f"Reminder not found: {reminder_id}",
            code="REMINDER_NOT_FOUND",
            details={"reminder_id": reminder_id},
        )


class SourceEntityNotFoundError(StorageError):
    """Source entity not found in storage."""

    def __init__(self, entity_id: int | str):
        super().__init__(
            f"Source entity not found: {entity_id}",
            code="SOURCE_ENTITY_NOT_FOUND",
            details={"entity_id": entity_id},
        )


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


# Reminder Exceptions
class ReminderError(HomeHubError):
    """Base exception for reminder engine operations."""

    pass


class InvalidDateError(ReminderError):
    """A reminder date could not be parsed."""

    def __init__(
        self,
        value: Any,
        reminder_id: int | str | None = None,
        field: str = "reminder_date",
    ):
        super().__init__(
            f"Invalid {field}: {value!r}",
            code="INVALID_DATE",
            details={
                "field": field,
                "value": str(value)[:100] if value is not None else None,
                "reminder_id": reminder_id,
            },
        )
        self.value = value
        self.reminder_id = reminder_id


class DuplicateGenerationError(ReminderError):
    """Two generated candidates share one auto-generate key."""

    def __init__(self, key: str):
        super().__init__(
            f"Reminder already generated for key: {key}",
            code="DUPLICATE_GENERATION",
            details={"auto_generate_key": key},
        )
        self.key = key


class InvalidTransitionError(ReminderError):
    """Requested state change is not allowed from the current state."""

    def __init__(self, reminder_id: int | str | None, current: str, action: str):
        super().__init__(
            f"Cannot {action} reminder {reminder_id}: already {current}",
            code="INVALID_TRANSITION",
            details={"reminder_id": reminder_id, "current": current, "action": action},
        )


# Validation Exceptions
class ValidationError(HomeHubError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value else None,
            },
        )


class ConfigurationError(HomeHubError):
    """Configuration error."""

    pass

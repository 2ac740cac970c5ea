"""Date parsing and date-only arithmetic shared by the reminder core."""

from datetime import UTC, date, datetime, time
from typing import Any

from homehub.core.exceptions import InvalidDateError


def utcnow() -> datetime:
    """Naive UTC timestamp used for created/updated bookkeeping."""
    return datetime.now(UTC).replace(tzinfo=None)


def date_only(value: date | datetime) -> date:
    """
    Strip the time of day.

    Aware datetimes keep their own calendar date; no timezone conversion
    is applied.
    """
    if isinstance(value, datetime):
        return value.date()
    return value


def split_date_time(
    value: Any,
    reminder_id: int | str | None = None,
    field: str = "reminder_date",
) -> tuple[date, time | None]:
    """
    Parse an ISO-8601 date or date-time into (date, time-of-day).

    Accepts date/datetime objects and strings such as ``2024-03-10``,
    ``2024-03-10T09:30:00`` and ``2024-03-10T09:30:00Z``.

    Raises:
        InvalidDateError: If the value cannot be parsed.
    """
    if isinstance(value, datetime):
        return value.date(), value.time().replace(tzinfo=None)
    if isinstance(value, date):
        return value, None
    if not isinstance(value, str) or not value.strip():
        raise InvalidDateError(value, reminder_id=reminder_id, field=field)

    text = value.strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text), None
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        raise InvalidDateError(value, reminder_id=reminder_id, field=field) from None

    return parsed.date(), parsed.time().replace(tzinfo=None)


def parse_date(
    value: Any,
    reminder_id: int | str | None = None,
    field: str = "reminder_date",
) -> date:
    """Parse a date or date-time value down to its calendar date."""
    parsed, _ = split_date_time(value, reminder_id=reminder_id, field=field)
    return parsed


def days_between(start: date | datetime, end: date | datetime) -> int:
    """Whole calendar days from ``start`` to ``end`` (negative if end is earlier)."""
    return (date_only(end) - date_only(start)).days

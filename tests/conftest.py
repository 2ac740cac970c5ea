"""Pytest configuration and shared fixtures."""

from datetime import date, datetime, timedelta

import pytest

from homehub.core.entities import Reminder, ReminderDomain, SourceEntity, SourceEntityType
from homehub.core.services import ReminderEngine

# Sunday 10 March 2024, mid-morning
NOW = datetime(2024, 3, 10, 9, 30)
TODAY = NOW.date()


@pytest.fixture
def now() -> datetime:
    """Fixed clock for deterministic status computations."""
    return NOW


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def engine() -> ReminderEngine:
    """Engine with the default 7-day window and 30-day lookahead."""
    return ReminderEngine()


@pytest.fixture
def make_reminder():
    """Factory for reminders due a number of days from TODAY."""
    counter = iter(range(1, 10_000))

    def _make(days: int = 0, **overrides) -> Reminder:
        data = {
            "id": next(counter),
            "title": f"Reminder in {days} days",
            "domain": ReminderDomain.HOUSEHOLD,
            "reminder_date": TODAY + timedelta(days=days),
        }
        data.update(overrides)
        return Reminder(**data)

    return _make


@pytest.fixture
def vehicle() -> SourceEntity:
    """Vehicle with MOT due in 10 days and tax due in 45."""
    return SourceEntity(
        id=7,
        entity_type=SourceEntityType.VEHICLE,
        name="Golf",
        dates={
            "mot_expiry": TODAY + timedelta(days=10),
            "tax_expiry": TODAY + timedelta(days=45),
            "insurance_expiry": None,
        },
    )

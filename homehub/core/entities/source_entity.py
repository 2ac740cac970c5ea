"""Source entities whose dates feed reminder generation."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field

from homehub.core.dates import utcnow
from homehub.core.entities.reminder import ReminderDomain


class SourceEntityType(str, Enum):
    """Kinds of household record that carry expiry or renewal dates."""

    VEHICLE = "vehicle"
    INSURANCE = "insurance"
    SUBSCRIPTION = "subscription"
    DOCUMENT = "document"
    PROPERTY = "property"


@dataclass(frozen=True)
class ExpiryField:
    """A dated field on a source entity that produces a reminder."""

    name: str
    label: str
    title: str
    domain: ReminderDomain

    def title_for(self, entity_name: str) -> str:
        return self.title.format(name=entity_name)

    def description_for(self, due: date) -> str:
        return f"{self.label} on {due.day} {due:%b %Y}"


EXPIRY_FIELDS: dict[SourceEntityType, tuple[ExpiryField, ...]] = {
    SourceEntityType.VEHICLE: (
        ExpiryField("mot_expiry", "MOT expires", "{name} MOT expires", ReminderDomain.HOUSEHOLD),
        ExpiryField("tax_expiry", "Road tax expires", "{name} road tax expires", ReminderDomain.HOUSEHOLD),
        ExpiryField(
            "insurance_expiry",
            "Insurance expires",
            "{name} insurance expires",
            ReminderDomain.HOUSEHOLD,
        ),
        ExpiryField("next_service_date", "Service due", "{name} service due", ReminderDomain.HOUSEHOLD),
    ),
    SourceEntityType.INSURANCE: (
        ExpiryField("renewal_date", "Renewal due", "{name} renewal due", ReminderDomain.FINANCE),
    ),
    SourceEntityType.SUBSCRIPTION: (
        ExpiryField("next_billing_date", "Renews", "{name} renews", ReminderDomain.FINANCE),
        ExpiryField("trial_end_date", "Trial ends", "{name} trial ends", ReminderDomain.FINANCE),
    ),
    SourceEntityType.DOCUMENT: (
        ExpiryField("expiry_date", "Expires", "{name} expires", ReminderDomain.HOUSEHOLD),
    ),
    SourceEntityType.PROPERTY: (
        ExpiryField("mortgage_end_date", "Mortgage ends", "{name} mortgage ends", ReminderDomain.HOUSEHOLD),
    ),
}


def expiry_fields_for(entity_type: SourceEntityType) -> tuple[ExpiryField, ...]:
    return EXPIRY_FIELDS.get(entity_type, ())


class SourceEntity(BaseModel):
    """A vehicle, policy, subscription, document or property record."""

    id: int | str | None = None
    entity_type: SourceEntityType
    name: str
    category: str | None = None
    dates: dict[str, date | None] = Field(default_factory=dict)
    notes: str = ""
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def date_for(self, field: str) -> date | None:
        return self.dates.get(field)

    def unknown_date_fields(self) -> list[str]:
        """Date keys that no expiry field of this entity type recognises."""
        known = {f.name for f in expiry_fields_for(self.entity_type)}
        return sorted(k for k in self.dates if k not in known)

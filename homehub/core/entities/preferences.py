"""Per-user hub layout preferences."""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from homehub.core.dates import utcnow

HUB_MODULES: tuple[str, ...] = ("finance", "household", "cooking", "reading", "coding", "plants")


def _dedupe_known(values: list[str]) -> list[str]:
    seen: list[str] = []
    for value in values:
        if value in HUB_MODULES and value not in seen:
            seen.append(value)
    return seen


class UserPreferences(BaseModel):
    """
    Which hub modules a user sees, and in what order.

    Unknown module names are dropped and duplicates collapsed. Every known
    module always appears in ``module_order``; modules missing from the
    stored order are appended in their default position.
    """

    user_key: str = "default"
    module_order: list[str] = Field(default_factory=lambda: list(HUB_MODULES))
    enabled_modules: list[str] = Field(default_factory=lambda: list(HUB_MODULES))
    updated_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def normalize_modules(self) -> "UserPreferences":
        order = _dedupe_known(self.module_order)
        order.extend(m for m in HUB_MODULES if m not in order)
        self.module_order = order
        self.enabled_modules = _dedupe_known(self.enabled_modules)
        return self

    @property
    def visible_modules(self) -> list[str]:
        enabled = set(self.enabled_modules)
        return [m for m in self.module_order if m in enabled]

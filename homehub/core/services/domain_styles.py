"""Display metadata for each reminder domain."""

from dataclasses import dataclass

from homehub.core.entities.reminder import ReminderDomain
from homehub.core.exceptions import ConfigurationError


@dataclass(frozen=True)
class DomainStyle:
    label: str
    icon: str
    color: str
    bg_color: str


DOMAIN_STYLES: dict[ReminderDomain, DomainStyle] = {
    ReminderDomain.PLANTS: DomainStyle("Plants", "Leaf", "text-emerald-600", "bg-emerald-50"),
    ReminderDomain.FINANCE: DomainStyle("Finance", "TrendingUp", "text-amber-600", "bg-amber-50"),
    ReminderDomain.COOKING: DomainStyle("Cooking", "ChefHat", "text-orange-600", "bg-orange-50"),
    ReminderDomain.READING: DomainStyle("Reading", "BookOpen", "text-blue-600", "bg-blue-50"),
    ReminderDomain.CODING: DomainStyle("Coding", "Code", "text-purple-600", "bg-purple-50"),
    ReminderDomain.HOUSEHOLD: DomainStyle("Household", "Home", "text-slate-600", "bg-slate-50"),
    ReminderDomain.CUSTOM: DomainStyle("Custom", "Bell", "text-gray-600", "bg-gray-50"),
}

FALLBACK_STYLE = DOMAIN_STYLES[ReminderDomain.CUSTOM]

_missing = set(ReminderDomain) - DOMAIN_STYLES.keys()
if _missing:
    raise ConfigurationError(f"No display style for domains: {sorted(d.value for d in _missing)}")


def style_for(domain: ReminderDomain | str | None) -> DomainStyle:
    """Style for a domain; unknown or legacy values get the fallback style."""
    if domain is None:
        return FALLBACK_STYLE
    try:
        return DOMAIN_STYLES[ReminderDomain(domain)]
    except ValueError:
        return FALLBACK_STYLE

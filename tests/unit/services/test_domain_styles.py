"""Tests for per-domain display styles."""

from homehub.core.entities import ReminderDomain
from homehub.core.services import DOMAIN_STYLES, style_for
from homehub.core.services.domain_styles import FALLBACK_STYLE


class TestDomainStyles:
    """Tests for the domain style table."""

    def test_every_domain_has_a_style(self):
        assert set(DOMAIN_STYLES) == set(ReminderDomain)

    def test_lookup_by_enum_and_string(self):
        assert style_for(ReminderDomain.PLANTS).icon == "Leaf"
        assert style_for("finance").label == "Finance"

    def test_unknown_values_fall_back(self):
        assert style_for("gardening") is FALLBACK_STYLE
        assert style_for(None) is FALLBACK_STYLE
        assert FALLBACK_STYLE.icon == "Bell"

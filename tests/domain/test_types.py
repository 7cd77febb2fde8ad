"""Tests for domain type enums and models."""

import pytest
from pydantic import ValidationError

from xcsh.domain.types import Category, DescriptionTiers, DomainInfo, OutputFormat, ResourceType, Tier

ENUM_CASES = [
    (
        Category,
        {"Infrastructure", "Security", "Networking", "Operations", "Platform", "AI", "Other"},
    ),
    (
        OutputFormat,
        {"json", "yaml", "table", "text", "tsv", "none"},
    ),
]


@pytest.mark.parametrize(
    "enum_cls,expected_values",
    ENUM_CASES,
    ids=[cls.__name__ for cls, _ in ENUM_CASES],
)
def test_enum_members_and_values(enum_cls: type, expected_values: set[str]) -> None:
    """Each StrEnum has the expected members with matching string values."""
    actual_values = {e.value for e in enum_cls}
    assert actual_values == expected_values
    for member in enum_cls:
        assert member == member.value
        assert isinstance(member, str)


class TestTier:
    def test_ordering(self) -> None:
        assert Tier.STANDARD < Tier.PROFESSIONAL < Tier.ENTERPRISE

    def test_display_name(self) -> None:
        assert Tier.PROFESSIONAL.display_name == "Professional"


class TestDescriptionTiers:
    def test_best_falls_back(self) -> None:
        d = DescriptionTiers(short="s")
        assert d.best("long") == "s"
        assert d.best("medium") == "s"

    def test_best_prefers_requested(self) -> None:
        d = DescriptionTiers(short="s", medium="m", long="l")
        assert d.best("long") == "l"
        assert d.best("medium") == "m"
        assert d.best("short") == "s"


class TestDomainInfo:
    def _info(self) -> DomainInfo:
        return DomainInfo(
            name="dns",
            display_name="DNS",
            descriptions=DescriptionTiers(short="DNS zones"),
            resource_types=(ResourceType(name="dns_zone", plural="dns_zones"),),
        )

    def test_defaults(self) -> None:
        info = self._info()
        assert info.required_tier == Tier.STANDARD
        assert info.category == Category.OTHER
        assert not info.is_preview

    def test_resource_type_names(self) -> None:
        assert self._info().resource_type_names == frozenset({"dns_zone"})

    def test_frozen(self) -> None:
        info = self._info()
        with pytest.raises(ValidationError):
            info.name = "other"  # type: ignore[misc]

    def test_resource_type_lookup_ignores_case(self) -> None:
        info = self._info()
        rt = info.resource_type("DNS_Zone")
        assert rt is not None
        assert rt.api_group == "config"
        assert info.resource_type("nope") is None

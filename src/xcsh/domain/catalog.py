"""Domain catalog: the read-only set of DomainInfo records.

:func:`build_catalog` converts the generated table into frozen
:class:`DomainInfo` models and validates cross references once, so
lookups never have to check domain existence again.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from xcsh.domain.tiers import parse_tier
from xcsh.domain.types import (
    Category,
    DescriptionTiers,
    DomainInfo,
    RelatedDomain,
    ResourceType,
    Tier,
)


class DomainCatalog:
    """Immutable name -> DomainInfo mapping."""

    def __init__(self, domains: Mapping[str, DomainInfo]) -> None:
        self._domains: Mapping[str, DomainInfo] = MappingProxyType(dict(domains))

    def get(self, name: str) -> DomainInfo | None:
        return self._domains.get(name.lower())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._domains

    def __iter__(self) -> Iterator[DomainInfo]:
        return iter(self._domains.values())

    def __len__(self) -> int:
        return len(self._domains)

    def names(self) -> list[str]:
        """All domain names, sorted."""
        return sorted(self._domains)

    def resource_types(self, name: str) -> frozenset[str]:
        """Known resource type names for *name* (empty for unknown domains)."""
        info = self.get(name)
        return info.resource_type_names if info else frozenset()


def pluralize(resource: str) -> str:
    """Collection path segment for a resource type.

    The API appends a plain ``s`` (``service_policy`` -> ``service_policys``).
    """
    return f"{resource}s"


def _resource_type(entry: str | tuple[str, str]) -> ResourceType:
    if isinstance(entry, tuple):
        name, group = entry
    else:
        name, group = entry, "config"
    return ResourceType(name=name, plural=pluralize(name), api_group=group)


def _related(entry: str | tuple[str, float]) -> RelatedDomain:
    if isinstance(entry, tuple):
        return RelatedDomain(name=entry[0], weight=entry[1])
    return RelatedDomain(name=entry)


def domain_from_entry(name: str, entry: Mapping[str, Any]) -> DomainInfo:
    """Convert one generated table entry into a DomainInfo."""
    tier = parse_tier(entry.get("requires_tier")) or Tier.STANDARD
    category_raw = entry.get("category", Category.OTHER.value)
    try:
        category = Category(category_raw)
    except ValueError:
        category = Category.OTHER
    return DomainInfo(
        name=name,
        display_name=entry.get("display_name") or name.replace("_", " ").title(),
        descriptions=DescriptionTiers(
            short=entry.get("short", ""),
            medium=entry.get("medium", ""),
            long=entry.get("long", ""),
        ),
        required_tier=tier,
        is_preview=bool(entry.get("is_preview", False)),
        category=category,
        use_cases=tuple(entry.get("use_cases", ())),
        workflows=tuple(entry.get("workflows", ())),
        related=tuple(_related(r) for r in entry.get("related_domains", ())),
        resource_types=tuple(_resource_type(r) for r in entry.get("resource_types", ())),
        cli_only=bool(entry.get("cli_only", False)),
    )


def build_catalog(table: Mapping[str, Mapping[str, Any]] | None = None) -> DomainCatalog:
    """Build and validate the catalog from *table* (default: generated table).

    Raises:
        ValueError: If a domain declares a relation to an unknown domain
            or lists a resource type twice.
    """
    if table is None:
        from xcsh.generated.domains import DOMAIN_TABLE

        table = DOMAIN_TABLE

    domains = {name.lower(): domain_from_entry(name.lower(), entry) for name, entry in table.items()}

    for info in domains.values():
        for rel in info.related:
            if rel.name not in domains:
                msg = f"Domain '{info.name}' declares unknown related domain '{rel.name}'"
                raise ValueError(msg)
        names = [rt.name for rt in info.resource_types]
        if len(names) != len(set(names)):
            msg = f"Domain '{info.name}' lists a resource type more than once"
            raise ValueError(msg)

    return DomainCatalog(domains)

"""Core enums and immutable domain models.

``Tier`` and ``Category`` classify domains; ``OutputFormat`` enumerates
the renderers the CLI understands. ``DomainInfo`` is built once from the
generated tables and never mutated afterwards.
"""

from __future__ import annotations

from enum import IntEnum, StrEnum

from pydantic import BaseModel, Field


class Tier(IntEnum):
    """Subscription tiers, totally ordered. Higher tiers include lower ones."""

    STANDARD = 1
    PROFESSIONAL = 2
    ENTERPRISE = 3

    @property
    def display_name(self) -> str:
        return self.name.title()


class Category(StrEnum):
    """Fixed set of domain categories."""

    INFRASTRUCTURE = "Infrastructure"
    SECURITY = "Security"
    NETWORKING = "Networking"
    OPERATIONS = "Operations"
    PLATFORM = "Platform"
    AI = "AI"
    OTHER = "Other"


class OutputFormat(StrEnum):
    """Output renderers accepted by ``--output``."""

    JSON = "json"
    YAML = "yaml"
    TABLE = "table"
    TEXT = "text"
    TSV = "tsv"
    NONE = "none"


class DescriptionTiers(BaseModel):
    """Short / medium / long descriptions of a domain or command."""

    model_config = {"frozen": True}

    short: str
    medium: str = ""
    long: str = ""

    def best(self, length: str = "medium") -> str:
        """Return the requested tier, falling back to the next shorter one."""
        if length == "long" and self.long:
            return self.long
        if length in ("long", "medium") and self.medium:
            return self.medium
        return self.short


class RelatedDomain(BaseModel):
    """A declared relation to another domain."""

    model_config = {"frozen": True}

    name: str
    weight: float = Field(default=1.0, ge=0.0, le=1.0)


class ResourceType(BaseModel):
    """A REST resource exposed by a domain."""

    model_config = {"frozen": True}

    name: str
    plural: str
    api_group: str = "config"
    namespaced: bool = True


class DomainInfo(BaseModel):
    """Static, read-only description of one domain."""

    model_config = {"frozen": True}

    name: str
    display_name: str
    descriptions: DescriptionTiers
    required_tier: Tier = Tier.STANDARD
    is_preview: bool = False
    category: Category = Category.OTHER
    use_cases: tuple[str, ...] = ()
    workflows: tuple[str, ...] = ()
    related: tuple[RelatedDomain, ...] = ()
    resource_types: tuple[ResourceType, ...] = ()
    cli_only: bool = False

    @property
    def resource_type_names(self) -> frozenset[str]:
        return frozenset(rt.name for rt in self.resource_types)

    def resource_type(self, name: str) -> ResourceType | None:
        """Look up a resource type by case-insensitive name."""
        wanted = name.lower()
        for rt in self.resource_types:
            if rt.name == wanted:
                return rt
        return None

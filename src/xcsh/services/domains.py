"""Catalog queries behind ``xcsh domains``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from xcsh.domain.errors import ErrorCode, ExitCode
from xcsh.domain.tiers import (
    get_domains_by_tier,
    get_preview_domains_in_tier,
    get_related_domains,
    is_preview_domain,
    parse_tier,
    score_related_domains,
)
from xcsh.domain.types import Category
from xcsh.services.executor import suggest
from xcsh.services.result import DomainCommandResult

if TYPE_CHECKING:
    from xcsh.domain.catalog import DomainCatalog
    from xcsh.domain.types import DomainInfo

LIST_COLUMNS = ("name", "category", "tier", "preview", "description")
RELATED_COLUMNS = ("name", "score", "category", "description")


def _row(info: DomainInfo) -> dict[str, Any]:
    return {
        "name": info.name,
        "category": info.category.value,
        "tier": info.required_tier.display_name,
        "preview": info.is_preview,
        "description": info.descriptions.short,
    }


def _unknown(catalog: DomainCatalog, name: str) -> DomainCommandResult:
    candidates = suggest(name, catalog.names())
    return DomainCommandResult.fail(
        ErrorCode.UNKNOWN_DOMAIN,
        f"Unknown domain: {name}",
        exit_code=ExitCode.VALIDATION_ERROR,
        hint=f"Did you mean: {', '.join(candidates)}?",
    )


def list_domains(
    catalog: DomainCatalog,
    *,
    category: str | None = None,
    tier: str | None = None,
    preview_only: bool = False,
) -> DomainCommandResult:
    """Domains filtered by category, maximum tier and preview flag."""
    domains = sorted(catalog, key=lambda d: d.name)
    if category:
        wanted = category.lower()
        if wanted not in {c.value.lower() for c in Category}:
            return DomainCommandResult.fail(
                ErrorCode.INVALID_INPUT,
                f"Unknown category: {category}",
                exit_code=ExitCode.VALIDATION_ERROR,
                hint=f"Use one of: {', '.join(c.value for c in Category)}",
            )
        domains = [d for d in domains if d.category.value.lower() == wanted]
    if tier:
        max_tier = parse_tier(tier)
        if max_tier is None:
            return DomainCommandResult.fail(
                ErrorCode.INVALID_INPUT,
                f"Unknown tier: {tier}",
                exit_code=ExitCode.VALIDATION_ERROR,
                hint="Use Standard, Professional or Enterprise.",
            )
        finder = get_preview_domains_in_tier if preview_only else get_domains_by_tier
        allowed = set(finder(catalog, max_tier))
        domains = [d for d in domains if d.name in allowed]
    elif preview_only:
        domains = [d for d in domains if is_preview_domain(catalog, d.name)]
    return DomainCommandResult.success(data=[_row(d) for d in domains])


def show_domain(catalog: DomainCatalog, name: str) -> DomainCommandResult:
    info = catalog.get(name)
    if info is None:
        return _unknown(catalog, name)
    data = {
        **_row(info),
        "display_name": info.display_name,
        "details": info.descriptions.best("long"),
        "use_cases": list(info.use_cases),
        "workflows": list(info.workflows),
        "resource_types": [rt.name for rt in info.resource_types],
        "related": [r.name for r in info.related],
    }
    return DomainCommandResult.success(data=data)


def related_domains(catalog: DomainCatalog, name: str, *, limit: int = 5) -> DomainCommandResult:
    info = catalog.get(name)
    if info is None:
        return _unknown(catalog, name)
    scores = dict(score_related_domains(catalog, info.name))
    rows = []
    for related in get_related_domains(catalog, info.name, limit):
        other = catalog.get(related)
        assert other is not None
        rows.append(
            {
                "name": related,
                "score": round(scores[related], 2),
                "category": other.category.value,
                "description": other.descriptions.short,
            }
        )
    if not rows:
        return DomainCommandResult.success([f"No domains related to '{info.name}'."], data=[])
    return DomainCommandResult.success(data=rows)

"""Tier & access validation: pure functions, no I/O.

Unknown caller tiers are treated permissively: a subscription string the
CLI does not recognise allows access rather than blocking it.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from xcsh.domain.types import Tier

if TYPE_CHECKING:
    from xcsh.domain.catalog import DomainCatalog
    from xcsh.domain.types import DomainInfo

_TIER_ALIASES: dict[str, Tier] = {
    "STANDARD": Tier.STANDARD,
    "BASIC": Tier.STANDARD,
    "NO_TIER": Tier.STANDARD,
    "PROFESSIONAL": Tier.PROFESSIONAL,
    "ADVANCED": Tier.PROFESSIONAL,
    "PREMIUM": Tier.ENTERPRISE,
    "ENTERPRISE": Tier.ENTERPRISE,
}

CATEGORY_WEIGHT = 4.0
KEYWORD_WEIGHT = 3.0
TIER_WEIGHT = 2.0
DEFAULT_RELATED_LIMIT = 5

_STOPWORDS = frozenset(
    {"and", "the", "for", "with", "from", "into", "across", "configure", "manage", "enable"}
)


def parse_tier(value: str | Tier | None) -> Tier | None:
    """Normalize an upstream tier string; returns None when unrecognized."""
    if value is None:
        return None
    if isinstance(value, Tier):
        return value
    key = value.strip().upper().replace("-", "_").replace(" ", "_")
    return _TIER_ALIASES.get(key)


def validate_tier_access(caller: str | Tier | None, required: Tier) -> bool:
    """Whether *caller* may use a domain requiring *required*.

    An unrecognized or missing caller tier is treated as Enterprise.
    """
    tier = parse_tier(caller)
    if tier is None:
        return True
    return tier >= required


def upgrade_hint(caller: str | Tier | None, required: Tier) -> str:
    """Text explaining which tier a denied caller needs."""
    tier = parse_tier(caller)
    current = tier.display_name if tier else "unknown"
    return (
        f"This domain requires the {required.display_name} tier "
        f"(current: {current}). Upgrade your subscription or contact F5 sales."
    )


def get_domains_by_tier(catalog: DomainCatalog, tier: Tier) -> list[str]:
    """Names of every domain accessible at *tier* (cumulative), sorted."""
    return sorted(d.name for d in catalog if d.required_tier <= tier)


def is_preview_domain(catalog: DomainCatalog, name: str) -> bool:
    info = catalog.get(name)
    return bool(info and info.is_preview)


def get_preview_domains_in_tier(catalog: DomainCatalog, tier: Tier) -> list[str]:
    """Preview domains accessible at *tier*, sorted."""
    return sorted(d.name for d in catalog if d.is_preview and d.required_tier <= tier)


def use_case_keywords(info: DomainInfo) -> frozenset[str]:
    """Significant lower-case words from a domain's use cases."""
    words: set[str] = set()
    for use_case in info.use_cases:
        for word in re.findall(r"[a-z0-9]+", use_case.lower()):
            if len(word) >= 3 and word not in _STOPWORDS:
                words.add(word)
    return frozenset(words)


def _jaccard(a: frozenset[str], b: frozenset[str]) -> float:
    if not a or not b:
        return 0.0
    return len(a & b) / len(a | b)


def score_related_domains(catalog: DomainCatalog, name: str) -> list[tuple[str, float]]:
    """Score every candidate related to *name*, best first.

    Score = category match (4) + keyword Jaccard overlap (3) + tier
    proximity (2) + the declared relation weight. Candidates without a
    category match, keyword overlap, or declared relation are excluded.
    Ties break on name.
    """
    source = catalog.get(name)
    if source is None:
        return []

    declared = {rel.name: rel.weight for rel in source.related}
    source_keywords = use_case_keywords(source)
    scored: list[tuple[str, float]] = []
    for candidate in catalog:
        if candidate.name == source.name:
            continue
        same_category = candidate.category == source.category
        overlap = _jaccard(source_keywords, use_case_keywords(candidate))
        if not same_category and overlap == 0.0 and candidate.name not in declared:
            continue
        proximity = 1.0 - abs(int(candidate.required_tier) - int(source.required_tier)) / 2.0
        score = (
            CATEGORY_WEIGHT * (1.0 if same_category else 0.0)
            + KEYWORD_WEIGHT * overlap
            + TIER_WEIGHT * proximity
            + declared.get(candidate.name, 0.0)
        )
        scored.append((candidate.name, round(score, 4)))

    scored.sort(key=lambda item: (-item[1], item[0]))
    return scored


def get_related_domains(
    catalog: DomainCatalog,
    name: str,
    limit: int = DEFAULT_RELATED_LIMIT,
) -> list[str]:
    """Names of the *limit* domains most related to *name*."""
    if limit <= 0:
        return []
    return [n for n, _ in score_related_domains(catalog, name)[:limit]]

"""Client for the public F5 Cloud status page.

The status page is a Statuspage v2 API: no credentials, JSON only.
Responses are cached for a short TTL so a burst of commands (status,
then components, then regions) costs one request per endpoint. The
module-level helpers filter and group the raw component, incident and
maintenance payloads.
"""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

import httpx

from xcsh.infrastructure.api_client import DEFAULT_TIMEOUT, APIClient

logger = logging.getLogger(__name__)

BASE_URL = "https://www.f5cloudstatus.com/api/v2"
CACHE_TTL = 60.0

INDICATORS = ("none", "minor", "major", "critical")
INCIDENT_STATUSES = ("investigating", "identified", "monitoring", "resolved", "postmortem")
INCIDENT_IMPACTS = ("none", "minor", "major", "critical")
MAINTENANCE_STATUSES = ("scheduled", "in_progress", "verifying", "completed")
ACTIVE_MAINTENANCE_STATUSES = frozenset({"in_progress", "verifying"})

# (id, display name, group-name marker), in display order.
REGIONS: tuple[tuple[str, str, str], ...] = (
    ("north-america", "North America", "north america"),
    ("south-america", "South America", "south america"),
    ("europe", "Europe", "europe"),
    ("asia", "Asia", "asia"),
    ("oceania", "Oceania", "oceania"),
    ("middle-east", "Middle East", "middle east"),
)

_POP_PATTERN = re.compile(r"\bpop\b|edge\s*pop|point\s*of\s*presence", re.IGNORECASE)
_SITE_CODE_PATTERN = re.compile(r"\(([a-z0-9-]+)\)")

Component = dict[str, Any]


class StatusCache:
    """Path-keyed response cache with a fixed time-to-live."""

    def __init__(self, ttl: float = CACHE_TTL) -> None:
        self.ttl = ttl
        self._entries: dict[str, tuple[float, Any]] = {}

    def get(self, key: str) -> Any:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, data = entry
        if time.monotonic() >= expires_at:
            del self._entries[key]
            return None
        return data

    def put(self, key: str, data: Any) -> None:
        self._entries[key] = (time.monotonic() + self.ttl, data)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


_SHARED_CACHE = StatusCache()


class CloudStatusClient:
    """Read-only status page client.

    Args:
        api: Unauthenticated :class:`APIClient` bound to the status API.
        cache: Response cache; the process-wide cache when omitted.
    """

    def __init__(self, api: APIClient, cache: StatusCache | None = None) -> None:
        self._api = api
        self.cache = cache if cache is not None else _SHARED_CACHE

    @classmethod
    def create(
        cls,
        base_url: str = BASE_URL,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
        cache: StatusCache | None = None,
    ) -> CloudStatusClient:
        return cls(APIClient(base_url, timeout=timeout, transport=transport), cache)

    async def _get(self, path: str) -> Any:
        cached = self.cache.get(path)
        if cached is not None:
            logger.debug("Status cache hit: %s", path)
            return cached
        data = (await self._api.get(path)).data
        self.cache.put(path, data)
        return data

    async def get_status(self) -> dict[str, Any]:
        return await self._get("/status.json")

    async def get_summary(self) -> dict[str, Any]:
        return await self._get("/summary.json")

    async def get_components(self) -> list[Component]:
        return list((await self._get("/components.json")).get("components", []))

    async def get_component(self, component_id: str) -> Component:
        return (await self._get(f"/components/{component_id}.json")).get("component", {})

    async def get_incidents(self, *, unresolved: bool = False) -> list[dict[str, Any]]:
        path = "/incidents/unresolved.json" if unresolved else "/incidents.json"
        return list((await self._get(path)).get("incidents", []))

    async def get_maintenances(self, *, upcoming: bool = False) -> list[dict[str, Any]]:
        path = "/scheduled-maintenances/upcoming.json" if upcoming else "/scheduled-maintenances.json"
        return list((await self._get(path)).get("scheduled_maintenances", []))

    async def aclose(self) -> None:
        await self._api.aclose()

    async def __aenter__(self) -> CloudStatusClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def is_operational(component: Component) -> bool:
    return component.get("status") == "operational"


def extract_component_groups(components: Iterable[Component]) -> list[dict[str, Any]]:
    """Groups (``group: true``) with their member components attached."""
    components = list(components)
    groups = {
        c["id"]: {
            "id": c["id"],
            "name": c.get("name", ""),
            "description": c.get("description") or "",
            "components": [],
        }
        for c in components
        if c.get("group")
    }
    for c in components:
        group = groups.get(c.get("group_id") or "")
        if group is not None and not c.get("group"):
            group["components"].append(c)
    return list(groups.values())


def filter_pops(components: Iterable[Component]) -> list[Component]:
    """Points of presence, recognized by their description."""
    return [
        c
        for c in components
        if not c.get("group") and _POP_PATTERN.search(c.get("description") or "")
    ]


def filter_by_status(components: Iterable[Component], status: str) -> list[Component]:
    return [c for c in components if c.get("status") == status]


def filter_degraded(components: Iterable[Component]) -> list[Component]:
    return [c for c in components if not c.get("group") and not is_operational(c)]


def filter_by_group(components: Iterable[Component], group_id: str) -> list[Component]:
    return [c for c in components if c.get("group_id") == group_id]


def extract_site_code(name: str) -> str:
    """``"Ashburn (dc12-ash)"`` -> ``"dc12-ash"``; empty when absent."""
    match = _SITE_CODE_PATTERN.search(name.lower())
    return match.group(1) if match else ""


def detect_region(component: Component, groups: Iterable[dict[str, Any]]) -> str:
    group_id = component.get("group_id")
    if not group_id:
        return ""
    group = next((g for g in groups if g["id"] == group_id), None)
    if group is None:
        return ""
    name = group["name"].lower()
    for region_id, _, marker in REGIONS:
        if marker in name:
            return region_id
    return ""


def regional_indicator(degraded: int, total: int) -> str:
    """Status indicator from the share of degraded points of presence."""
    if degraded == 0 or total == 0:
        return "none"
    ratio = degraded / total
    if ratio < 0.25:
        return "minor"
    if ratio < 0.5:
        return "major"
    return "critical"


def calculate_regional_status(components: Iterable[Component]) -> list[dict[str, Any]]:
    """Per-region PoP health, one row for every known region."""
    components = list(components)
    groups = extract_component_groups(components)
    regions = {
        region_id: {
            "region": region_id,
            "name": display,
            "status": "none",
            "operational": 0,
            "degraded": 0,
            "total": 0,
            "components": [],
        }
        for region_id, display, _ in REGIONS
    }
    for pop in filter_pops(components):
        regional = regions.get(detect_region(pop, groups))
        if regional is None:
            continue
        regional["components"].append(pop)
        regional["total"] += 1
        if is_operational(pop):
            regional["operational"] += 1
        else:
            regional["degraded"] += 1
    for regional in regions.values():
        regional["status"] = regional_indicator(regional["degraded"], regional["total"])
    return list(regions.values())


def filter_incidents_by_status(incidents: Iterable[dict[str, Any]], status: str) -> list[dict[str, Any]]:
    return [i for i in incidents if i.get("status") == status]


def filter_incidents_by_impact(incidents: Iterable[dict[str, Any]], impact: str) -> list[dict[str, Any]]:
    return [i for i in incidents if i.get("impact") == impact]


def filter_incidents_since(incidents: Iterable[dict[str, Any]], since: str) -> list[dict[str, Any]]:
    """Incidents created strictly after the ISO-8601 timestamp *since*."""
    cutoff = _parse_time(since)
    kept = []
    for incident in incidents:
        created = incident.get("created_at")
        if created and _parse_time(created) > cutoff:
            kept.append(incident)
    return kept


def filter_maintenances_by_status(
    maintenances: Iterable[dict[str, Any]], status: str
) -> list[dict[str, Any]]:
    return [m for m in maintenances if m.get("status") == status]


def get_active_maintenances(maintenances: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    return [m for m in maintenances if m.get("status") in ACTIVE_MAINTENANCE_STATUSES]


def _parse_time(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)

"""``cloudstatus`` domain: public platform status, incidents and maintenance.

Nothing here needs credentials; the commands run before login too.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from xcsh.domain.args import flag_value, has_flag
from xcsh.domain.errors import ErrorCode, ExitCode
from xcsh.infrastructure import cloudstatus as status_api
from xcsh.infrastructure.cloudstatus import CloudStatusClient
from xcsh.services.handlers._render import desc, lines_or_render, render
from xcsh.services.registry import CommandDefinition, SuggestionSource
from xcsh.services.result import DomainCommandResult

if TYPE_CHECKING:
    from xcsh.domain.args import ParsedArgs
    from xcsh.services.session import Session

COMPONENT_COLUMNS = ("name", "status", "group")
REGION_COLUMNS = ("name", "status", "operational", "degraded", "total")
INCIDENT_COLUMNS = ("name", "status", "impact", "created_at")
MAINTENANCE_COLUMNS = ("name", "status", "scheduled_for", "scheduled_until")

_INDICATOR_LABELS = {
    "none": "operational",
    "minor": "minor issues",
    "major": "major outage",
    "critical": "critical outage",
}


def open_client() -> CloudStatusClient:
    return CloudStatusClient.create()


def _invalid(flag: str, value: str, allowed: tuple[str, ...]) -> DomainCommandResult:
    return DomainCommandResult.fail(
        ErrorCode.INVALID_INPUT,
        f"Invalid {flag}: {value}",
        exit_code=ExitCode.VALIDATION_ERROR,
        hint=f"Use one of: {', '.join(allowed)}",
    )


def _choice(args: ParsedArgs, flag: str, allowed: tuple[str, ...]) -> tuple[str | None, DomainCommandResult | None]:
    value = flag_value(args.residual, flag)
    if value is not None and value not in allowed:
        return value, _invalid(flag, value, allowed)
    return value, None


async def status(args: ParsedArgs, session: Session) -> DomainCommandResult:
    async with open_client() as client:
        payload = await client.get_status()
    indicator = payload.get("status", {}).get("indicator", "none")
    description = payload.get("status", {}).get("description", "")
    data = {"indicator": indicator, "description": description}
    lines = [f"Status: {description or _INDICATOR_LABELS.get(indicator, indicator)}"]
    if indicator != "none":
        lines.append(f"Indicator: {indicator}")
        lines.append("Run 'cloudstatus incidents' for details.")
    return lines_or_render(lines, data, args, session)


async def summary(args: ParsedArgs, session: Session) -> DomainCommandResult:
    async with open_client() as client:
        payload = await client.get_summary()
    components = payload.get("components", [])
    degraded = status_api.filter_degraded(components)
    incidents = payload.get("incidents", [])
    maintenances = payload.get("scheduled_maintenances", [])
    overall = payload.get("status", {})
    data = {
        "indicator": overall.get("indicator", "none"),
        "description": overall.get("description", ""),
        "degraded_components": [c.get("name", "") for c in degraded],
        "incidents": len(incidents),
        "scheduled_maintenances": len(maintenances),
    }
    lines = [
        f"Status:                 {data['description'] or data['indicator']}",
        f"Degraded components:    {len(degraded)}",
        f"Active incidents:       {len(incidents)}",
        f"Scheduled maintenances: {len(maintenances)}",
    ]
    lines += [f"  - {c.get('name', '')} ({c.get('status', '')})" for c in degraded]
    return lines_or_render(lines, data, args, session)


async def components(args: ParsedArgs, session: Session) -> DomainCommandResult:
    wanted_status = flag_value(args.residual, "--status")
    group_id = flag_value(args.residual, "--group")
    async with open_client() as client:
        if args.name:
            component = await client.get_component(args.name)
            return render(component, args, session)
        items = await client.get_components()
    groups = {g["id"]: g["name"] for g in status_api.extract_component_groups(items)}
    if has_flag(args.residual, "--pops"):
        items = status_api.filter_pops(items)
    if has_flag(args.residual, "--degraded"):
        items = status_api.filter_degraded(items)
    if wanted_status:
        items = status_api.filter_by_status(items, wanted_status)
    if group_id:
        items = status_api.filter_by_group(items, group_id)
    rows = [
        {
            "id": c.get("id", ""),
            "name": c.get("name", ""),
            "status": c.get("status", ""),
            "group": groups.get(c.get("group_id") or "", ""),
            "site_code": status_api.extract_site_code(c.get("name", "")),
        }
        for c in items
        if not c.get("group")
    ]
    if not rows:
        return DomainCommandResult.success(["No components match."], data=[])
    return render(rows, args, session, columns=COMPONENT_COLUMNS)


async def regions(args: ParsedArgs, session: Session) -> DomainCommandResult:
    async with open_client() as client:
        items = await client.get_components()
    rows = [
        {k: v for k, v in regional.items() if k != "components"}
        for regional in status_api.calculate_regional_status(items)
    ]
    return render(rows, args, session, columns=REGION_COLUMNS)


async def incidents(args: ParsedArgs, session: Session) -> DomainCommandResult:
    wanted_status, error = _choice(args, "--status", status_api.INCIDENT_STATUSES)
    if error:
        return error
    impact, error = _choice(args, "--impact", status_api.INCIDENT_IMPACTS)
    if error:
        return error
    since = flag_value(args.residual, "--since")
    include_resolved = has_flag(args.residual, "--all") or wanted_status in ("resolved", "postmortem")
    async with open_client() as client:
        items = await client.get_incidents(unresolved=not include_resolved)
    if wanted_status:
        items = status_api.filter_incidents_by_status(items, wanted_status)
    if impact:
        items = status_api.filter_incidents_by_impact(items, impact)
    if since:
        try:
            items = status_api.filter_incidents_since(items, since)
        except ValueError:
            return DomainCommandResult.fail(
                ErrorCode.INVALID_INPUT,
                f"Invalid --since: {since}",
                exit_code=ExitCode.VALIDATION_ERROR,
                hint="Use an ISO-8601 timestamp such as 2026-01-01T00:00:00Z.",
            )
    rows = [_row(i, INCIDENT_COLUMNS) for i in items]
    if not rows:
        return DomainCommandResult.success(["No incidents."], data=[])
    return render(rows, args, session, columns=INCIDENT_COLUMNS)


async def maintenance(args: ParsedArgs, session: Session) -> DomainCommandResult:
    wanted_status, error = _choice(args, "--status", status_api.MAINTENANCE_STATUSES)
    if error:
        return error
    active = has_flag(args.residual, "--active")
    everything = active or wanted_status is not None or has_flag(args.residual, "--all")
    async with open_client() as client:
        items = await client.get_maintenances(upcoming=not everything)
    if active:
        items = status_api.get_active_maintenances(items)
    if wanted_status:
        items = status_api.filter_maintenances_by_status(items, wanted_status)
    rows = [_row(m, MAINTENANCE_COLUMNS) for m in items]
    if not rows:
        return DomainCommandResult.success(["No scheduled maintenance."], data=[])
    return render(rows, args, session, columns=MAINTENANCE_COLUMNS)


def _row(item: dict[str, Any], columns: tuple[str, ...]) -> dict[str, Any]:
    row = {column: item.get(column) or "" for column in columns}
    row["id"] = item.get("id", "")
    row["shortlink"] = item.get("shortlink", "")
    return row


COMMANDS: tuple[CommandDefinition, ...] = (
    CommandDefinition(
        name="status",
        descriptions=desc(
            "Show overall platform status",
            "Show the overall status indicator published on the public status page.",
        ),
        execute=status,
        aliases=("overall",),
        examples=("cloudstatus status", "cloudstatus status --output json"),
    ),
    CommandDefinition(
        name="summary",
        descriptions=desc(
            "Summarize status, degraded components and incidents",
            "Show the overall indicator with counts of degraded components, active incidents "
            "and scheduled maintenance windows.",
        ),
        execute=summary,
        examples=("cloudstatus summary",),
    ),
    CommandDefinition(
        name="components",
        descriptions=desc(
            "List platform components",
            "List status page components with their status and group. Pass a component id "
            "to show one component.",
        ),
        execute=components,
        usage="[<component-id>] [--status <status>] [--group <group-id>] [--pops] [--degraded]",
        aliases=("component",),
        flags=("--status", "--group", "--pops", "--degraded"),
        examples=("cloudstatus components --degraded", "cloudstatus components --pops --output tsv"),
    ),
    CommandDefinition(
        name="regions",
        descriptions=desc(
            "Show point-of-presence health by region",
            "Aggregate point-of-presence status per geographic region. A region is minor below "
            "25% degraded, major below 50% and critical above.",
        ),
        execute=regions,
        aliases=("region",),
        examples=("cloudstatus regions",),
    ),
    CommandDefinition(
        name="incidents",
        descriptions=desc(
            "List incidents",
            "List unresolved incidents, or all recent incidents with --all.",
        ),
        execute=incidents,
        usage="[--status <status>] [--impact <impact>] [--since <timestamp>] [--all]",
        aliases=("incident",),
        flags=("--status", "--impact", "--since", "--all"),
        completion=SuggestionSource(static=status_api.INCIDENT_STATUSES),
        examples=("cloudstatus incidents", "cloudstatus incidents --impact major --all"),
    ),
    CommandDefinition(
        name="maintenance",
        descriptions=desc(
            "List scheduled maintenance",
            "List upcoming maintenance windows; --active shows windows in progress and --all "
            "includes completed ones.",
        ),
        execute=maintenance,
        usage="[--status <status>] [--active] [--all]",
        aliases=("maintenances",),
        flags=("--status", "--active", "--all"),
        completion=SuggestionSource(static=status_api.MAINTENANCE_STATUSES),
        examples=("cloudstatus maintenance", "cloudstatus maintenance --active"),
    ),
)

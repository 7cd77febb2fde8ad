"""``subscription`` domain: tier, quotas, addons and deployment validation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from xcsh.domain.args import flag_value
from xcsh.domain.errors import ErrorCode, ExitCode, make_error
from xcsh.domain.tiers import parse_tier
from xcsh.domain.validation import ValidationRequest, ValidationStatus, state_description
from xcsh.infrastructure.subscription import SubscriptionClient
from xcsh.services.handlers._render import desc, lines_or_render, render
from xcsh.services.registry import CommandDefinition, SuggestionSource
from xcsh.services.result import DomainCommandResult

if TYPE_CHECKING:
    from xcsh.domain.args import ParsedArgs
    from xcsh.services.session import Session

ADDON_FILTERS = ("active", "available", "denied")
QUOTA_COLUMNS = ("name", "usage", "limit", "percentage", "status")
ADDON_COLUMNS = ("name", "tier", "state", "access")

_STATUS_MARKERS = {
    ValidationStatus.PASS: "[PASS]",
    ValidationStatus.WARNING: "[WARN]",
    ValidationStatus.FAIL: "[FAIL]",
}


def _client(session: Session) -> SubscriptionClient:
    assert session.api_client is not None
    return SubscriptionClient(session.api_client)


async def show(args: ParsedArgs, session: Session) -> DomainCommandResult:
    client = _client(session)
    plan = await client.get_current_plan()
    raw_tier = session.tier or await client.get_tier()
    tier = parse_tier(raw_tier)
    data = {
        "tier": tier.display_name if tier else raw_tier,
        "plan": (plan or {}).get("display_name") or (plan or {}).get("name") or "unknown",
        "tenant_type": (plan or {}).get("tenant_type", ""),
    }
    lines = [
        f"Tier:        {data['tier']}",
        f"Plan:        {data['plan']}",
    ]
    if data["tenant_type"]:
        lines.append(f"Tenant type: {data['tenant_type']}")
    return lines_or_render(lines, data, args, session)


async def quota(args: ParsedArgs, session: Session) -> DomainCommandResult:
    items = await _client(session).get_quota_items()
    rows = [
        {
            "name": q.name,
            "display_name": q.display_name,
            "usage": int(q.usage),
            "limit": int(q.limit),
            "percentage": f"{q.percentage:.0f}%",
            "status": q.status.value,
        }
        for q in sorted(items, key=lambda q: (-q.percentage, q.name))
    ]
    if not rows:
        return DomainCommandResult.success(["No quota limits reported."], data=[])
    warnings = [f"Quota '{q.name}' is exceeded" for q in items if q.is_exceeded]
    return render(rows, args, session, columns=QUOTA_COLUMNS, warnings=warnings)


async def addons(args: ParsedArgs, session: Session) -> DomainCommandResult:
    wanted = flag_value(args.residual, "--filter")
    if wanted is not None and wanted not in ADDON_FILTERS:
        return DomainCommandResult.fail(
            ErrorCode.INVALID_INPUT,
            f"Invalid addon filter: {wanted}",
            exit_code=ExitCode.VALIDATION_ERROR,
            hint=f"Use one of: {', '.join(ADDON_FILTERS)}",
        )
    services = await _client(session).get_addon_services()
    if wanted == "active":
        services = [s for s in services if s.is_active]
    elif wanted == "available":
        services = [s for s in services if s.is_available]
    elif wanted == "denied":
        services = [s for s in services if s.is_denied]
    rows = [
        {
            "name": s.name,
            "display_name": s.display_name,
            "tier": s.tier,
            "state": state_description(s.state),
            "access": s.access_status,
        }
        for s in services
    ]
    if not rows:
        return DomainCommandResult.success(["No addon services match."], data=[])
    return render(rows, args, session, columns=ADDON_COLUMNS)


async def validate(args: ParsedArgs, session: Session) -> DomainCommandResult:
    resource_type = flag_value(args.residual, "--resource-type", "-r") or args.name
    count_raw = flag_value(args.residual, "--count")
    feature = flag_value(args.residual, "--feature")

    count = 1 if resource_type and count_raw is None else 0
    if count_raw is not None:
        try:
            count = int(count_raw)
        except ValueError:
            count = -1
        if count < 1:
            return DomainCommandResult.fail(
                ErrorCode.INVALID_INPUT,
                f"Invalid --count: {count_raw}",
                exit_code=ExitCode.VALIDATION_ERROR,
                hint="--count must be a positive integer.",
            )
    if not resource_type and not feature:
        return DomainCommandResult.fail(
            ErrorCode.MISSING_FLAG,
            "Nothing to validate",
            exit_code=ExitCode.VALIDATION_ERROR,
            hint="Pass --resource-type <type> [--count N] and/or --feature <addon>.",
        )

    request = ValidationRequest(resource_type=resource_type, count=count, feature=feature)
    result = await _client(session).validate(request)
    lines = [f"{_STATUS_MARKERS[c.result]} {c.message}" for c in result.checks]
    lines.append("Validation passed." if result.valid else "Validation failed.")
    data = result.model_dump(mode="json")
    if result.valid:
        return lines_or_render(lines, data, args, session)

    quota_failed = any(
        c.type == "quota" and c.result == ValidationStatus.FAIL for c in result.checks
    )
    error = make_error(
        ErrorCode.QUOTA_EXCEEDED if quota_failed else ErrorCode.FEATURE_NOT_AVAILABLE,
        "; ".join(result.errors),
        exit_code=ExitCode.QUOTA_EXCEEDED if quota_failed else ExitCode.FEATURE_NOT_AVAILABLE,
        hint=(
            "Review usage with 'subscription quota' or request a quota increase."
            if quota_failed
            else "Check available addons with 'subscription addons'."
        ),
    )
    return DomainCommandResult.failure(error, output=lines, data=data)


COMMANDS: tuple[CommandDefinition, ...] = (
    CommandDefinition(
        name="show",
        descriptions=desc("Show subscription tier and plan"),
        execute=show,
        aliases=("info",),
        requires_auth=True,
        examples=("subscription show",),
    ),
    CommandDefinition(
        name="quota",
        descriptions=desc(
            "Show quota usage",
            "List tenant quota limits with current usage, highest utilization first.",
        ),
        execute=quota,
        aliases=("quotas", "usage"),
        requires_auth=True,
        examples=("subscription quota", "subscription quota --output tsv"),
    ),
    CommandDefinition(
        name="addons",
        descriptions=desc(
            "List addon services",
            "List addon services with their subscription state and access status.",
        ),
        execute=addons,
        usage="[--filter active|available|denied]",
        aliases=("addon",),
        flags=("--filter",),
        completion=SuggestionSource(static=ADDON_FILTERS),
        requires_auth=True,
        examples=("subscription addons --filter active",),
    ),
    CommandDefinition(
        name="validate",
        descriptions=desc(
            "Validate a planned deployment against quotas and addons",
            "Check that creating resources fits the remaining quota and that required addons are active.",
            "Checks quota headroom for --resource-type/--count (fails when the request exceeds the "
            "remaining capacity, warns at 80% utilization) and addon access for --feature.",
        ),
        execute=validate,
        usage="[--resource-type <type> [--count N]] [--feature <addon>]",
        flags=("--resource-type", "-r", "--count", "--feature"),
        requires_auth=True,
        examples=(
            "subscription validate --resource-type http_loadbalancer --count 5",
            "subscription validate --feature bot-defense",
        ),
    ),
)

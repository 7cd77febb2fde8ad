"""``context`` domain: show, set and list the active namespace."""

from __future__ import annotations

import os
import re
from typing import TYPE_CHECKING

from xcsh.domain.errors import ErrorCode, ExitCode
from xcsh.services.handlers._render import desc, lines_or_render
from xcsh.services.registry import UNAVAILABLE, CommandDefinition, SuggestionSource, Unavailable
from xcsh.services.result import DomainCommandResult

if TYPE_CHECKING:
    from xcsh.domain.args import ParsedArgs
    from xcsh.services.session import Session

NAMESPACES_PATH = "/api/web/namespaces"
NAMESPACE_ENV_VAR = "F5XC_NAMESPACE"
NAMESPACE_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")
FALLBACK_NAMESPACES = ("default", "system", "shared")


async def fetch_namespaces(session: Session) -> list[str]:
    """Sorted namespace names from the API.

    Raises:
        APIError: When the request fails.
    """
    assert session.api_client is not None
    response = await session.api_client.get(NAMESPACES_PATH)
    items = response.data.get("items", []) if isinstance(response.data, dict) else []
    return sorted(item["name"] for item in items if isinstance(item, dict) and item.get("name"))


async def live_namespaces(partial: str, args: ParsedArgs, session: Session) -> list[str] | Unavailable:
    if session.api_client is None or not session.api_client.is_authenticated:
        return UNAVAILABLE
    return await fetch_namespaces(session)


NAMESPACE_SUGGESTIONS = SuggestionSource(static=FALLBACK_NAMESPACES, live=live_namespaces)


def namespace_source(namespace: str) -> str:
    """Where the active namespace came from."""
    env_namespace = os.environ.get(NAMESPACE_ENV_VAR)
    if env_namespace and env_namespace == namespace:
        return f"environment variable ({NAMESPACE_ENV_VAR})"
    if namespace == "default":
        return "default value"
    return "session configuration"


async def show(args: ParsedArgs, session: Session) -> DomainCommandResult:
    namespace = session.namespace
    source = namespace_source(namespace)
    return lines_or_render(
        [f"Current namespace: {namespace}", f"Source: {source}"],
        {"namespace": namespace, "source": source},
        args,
        session,
    )


async def set_namespace(args: ParsedArgs, session: Session) -> DomainCommandResult:
    namespace = args.name
    if not namespace:
        return DomainCommandResult.fail(
            ErrorCode.MISSING_FLAG,
            "Usage: context set <namespace>",
            exit_code=ExitCode.VALIDATION_ERROR,
            hint="Run 'context list' to see available namespaces.",
        )
    if not NAMESPACE_PATTERN.match(namespace):
        return DomainCommandResult.fail(
            ErrorCode.INVALID_INPUT,
            f"Invalid namespace: {namespace}",
            exit_code=ExitCode.VALIDATION_ERROR,
            hint="Use alphanumeric characters, dashes, and underscores only.",
        )

    previous = session.namespace
    session.set_namespace(namespace)
    lines = ["Namespace context changed."]
    if previous != namespace:
        lines += [f"  Previous: {previous}", f"  Current:  {namespace}"]
    else:
        lines.append(f"  Namespace remains: {namespace}")
    return DomainCommandResult.success(
        lines,
        data={"previous": previous, "namespace": namespace},
        context_changed=True,
    )


async def list_namespaces(args: ParsedArgs, session: Session) -> DomainCommandResult:
    namespaces = await fetch_namespaces(session)
    session.cancellation.raise_if_cancelled()
    current = session.namespace
    lines = ["Available namespaces:", ""]
    lines += [f"  {ns} (current)" if ns == current else f"  {ns}" for ns in namespaces]
    lines += ["", "Use 'context set <namespace>' to switch."]
    data = [{"name": ns, "current": ns == current} for ns in namespaces]
    return lines_or_render(lines, data, args, session)


COMMANDS: tuple[CommandDefinition, ...] = (
    CommandDefinition(
        name="show",
        descriptions=desc(
            "Show current default namespace context",
            "Display the active namespace and where its value came from.",
        ),
        execute=show,
        aliases=("current", "get"),
        examples=("context show",),
    ),
    CommandDefinition(
        name="set",
        descriptions=desc(
            "Set default namespace context for API operations",
            "Switch the namespace that commands target when no --namespace flag is given.",
        ),
        execute=set_namespace,
        usage="<namespace>",
        aliases=("use", "switch"),
        completion=NAMESPACE_SUGGESTIONS,
        examples=("context set production", "context use shared"),
    ),
    CommandDefinition(
        name="list",
        descriptions=desc(
            "List available namespaces",
            "Fetch the tenant's namespaces and mark the active one.",
        ),
        execute=list_namespaces,
        aliases=("ls",),
        requires_auth=True,
        examples=("context list", "context ls --output json"),
    ),
)

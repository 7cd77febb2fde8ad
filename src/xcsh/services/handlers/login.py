"""``login`` domain: connection and authentication state."""

from __future__ import annotations

from typing import TYPE_CHECKING

from xcsh.domain.tiers import parse_tier
from xcsh.services.handlers._render import desc, lines_or_render
from xcsh.services.registry import CommandDefinition

if TYPE_CHECKING:
    from xcsh.domain.args import ParsedArgs
    from xcsh.services.result import DomainCommandResult
    from xcsh.services.session import Session


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"


async def status(args: ParsedArgs, session: Session) -> DomainCommandResult:
    tier = parse_tier(session.tier)
    data = {
        "server_url": session.server_url,
        "authenticated": session.is_authenticated,
        "token_validated": session.token_validated,
        "namespace": session.namespace,
        "tier": tier.display_name if tier else session.tier,
    }
    lines = [
        f"Server:          {session.server_url or '(not configured)'}",
        f"Authenticated:   {_yes_no(session.is_authenticated)}",
        f"Token validated: {_yes_no(session.token_validated)}",
        f"Namespace:       {session.namespace}",
        f"Tier:            {data['tier'] or 'unknown'}",
    ]
    if not session.is_authenticated:
        lines += ["", "Set F5XC_API_URL and F5XC_API_TOKEN to connect."]
    return lines_or_render(lines, data, args, session)


COMMANDS: tuple[CommandDefinition, ...] = (
    CommandDefinition(
        name="status",
        descriptions=desc(
            "Show connection and authentication status",
            "Display the API endpoint, authentication and token validation state, namespace and tier.",
        ),
        execute=status,
        aliases=("whoami",),
        examples=("login status", "login status --output json"),
    ),
)

"""Executor: resolves and runs exactly one domain command.

Order of evaluation: domain resolution, tier check (deny before any
warning or network call), preview and deprecation warnings, command
lookup, argument parsing, ``--spec`` short-circuit, then the handler.
Nothing a handler raises escapes :meth:`Executor.execute`; every
failure becomes an error :class:`DomainCommandResult`.
"""

from __future__ import annotations

import difflib
import json
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from xcsh.domain.args import KNOWN_FLAGS, parse_command_args
from xcsh.domain.errors import ErrorCode, ExitCode, create_structured_error
from xcsh.domain.tiers import parse_tier, upgrade_hint, validate_tier_access
from xcsh.infrastructure.api_client import APIError
from xcsh.services.result import DomainCommandResult
from xcsh.services.session import CommandCancelled

if TYPE_CHECKING:
    from xcsh.domain.types import DomainInfo
    from xcsh.services.registry import CommandDefinition, CommandRegistry
    from xcsh.services.session import Session

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 5


def suggest(word: str, candidates: Sequence[str], limit: int = MAX_SUGGESTIONS) -> list[str]:
    """Close matches for *word*, or the first *limit* candidates when none are close."""
    matches = difflib.get_close_matches(word.lower(), list(candidates), n=limit, cutoff=0.6)
    return matches or list(candidates[:limit])


def command_spec(info: DomainInfo, command: CommandDefinition) -> dict[str, Any]:
    """Machine-readable description of a command, returned for ``--spec``."""
    return {
        "command": f"{info.name} {command.name}",
        "domain": info.name,
        "name": command.name,
        "description": command.descriptions.short,
        "description_medium": command.descriptions.medium,
        "description_long": command.descriptions.long,
        "usage": command.usage,
        "aliases": list(command.aliases),
        "flags": [*KNOWN_FLAGS, *command.flags],
        "resource_types": sorted(info.resource_type_names),
        "required_tier": info.required_tier.display_name,
        "is_preview": info.is_preview,
        "requires_auth": command.requires_auth,
        "examples": list(command.examples),
    }


class Executor:
    """Central dispatch over an explicitly supplied :class:`CommandRegistry`."""

    def __init__(self, registry: CommandRegistry) -> None:
        self.registry = registry

    async def execute(
        self,
        domain: str,
        subcommand: str,
        args: Sequence[str],
        session: Session,
    ) -> DomainCommandResult:
        """Resolve and run ``<domain> <subcommand> [args...]``."""
        resolution = self.registry.resolve_domain(domain)
        info = self.registry.catalog.get(resolution.canonical) if resolution else None
        if resolution is None or info is None:
            candidates = suggest(domain, self.registry.domains())
            return DomainCommandResult.fail(
                ErrorCode.UNKNOWN_DOMAIN,
                f"Unknown domain: {domain}",
                exit_code=ExitCode.VALIDATION_ERROR,
                hint=f"Did you mean: {', '.join(candidates)}? Run 'domains' to list all domains.",
                suggestions=candidates,
            )

        if not validate_tier_access(session.tier, info.required_tier):
            current = parse_tier(session.tier)
            return DomainCommandResult.fail(
                ErrorCode.TIER_DENIED,
                f"Domain '{info.name}' is not available in your subscription tier",
                exit_code=ExitCode.FEATURE_NOT_AVAILABLE,
                hint=upgrade_hint(session.tier, info.required_tier),
                required_tier=info.required_tier.display_name,
                current_tier=current.display_name if current else session.tier,
            )

        warnings: list[str] = []
        if resolution.is_deprecated:
            warnings.append(
                f"Domain '{resolution.deprecated_name}' is deprecated; use '{info.name}' instead."
            )
        if info.is_preview:
            warnings.append(f"'{info.name}' is a preview domain; its behavior may change.")

        command = self.registry.lookup(info.name, subcommand) if subcommand else None
        if command is None:
            names = [c.name for c in self.registry.commands(info.name)]
            aliases = [a for c in self.registry.commands(info.name) for a in c.all_names]
            if subcommand:
                close = difflib.get_close_matches(subcommand.lower(), aliases, n=MAX_SUGGESTIONS)
                candidates = close or names[:MAX_SUGGESTIONS]
                message = f"Unknown command '{subcommand}' for domain '{info.name}'"
            else:
                candidates = names[:MAX_SUGGESTIONS]
                message = f"Missing command for domain '{info.name}'"
            hint = f"Available: {', '.join(candidates)}" if candidates else None
            return DomainCommandResult.fail(
                ErrorCode.UNKNOWN_COMMAND,
                message,
                exit_code=ExitCode.VALIDATION_ERROR,
                hint=hint,
                suggestions=candidates,
            ).with_warnings(warnings)

        parsed = parse_command_args(args, info.resource_type_names)
        if parsed.namespace is None:
            parsed = parsed.model_copy(update={"namespace": session.namespace})

        if parsed.spec:
            spec = command_spec(info, command)
            return DomainCommandResult.success(
                [json.dumps(spec, indent=2)], data=spec
            ).with_warnings(warnings)

        if command.requires_auth and not session.is_authenticated:
            return DomainCommandResult.fail(
                ErrorCode.NOT_AUTHENTICATED,
                f"'{info.name} {command.name}' requires an authenticated session",
                exit_code=ExitCode.AUTH_ERROR,
                hint="Set F5XC_API_URL and F5XC_API_TOKEN, then restart xcsh.",
            ).with_warnings(warnings)

        logger.debug("Dispatching %s %s", info.name, command.name)
        session.cancellation.reset()
        try:
            result = await command.execute(parsed, session)
            if not isinstance(result, DomainCommandResult):
                logger.debug("Handler %s %s returned %r", info.name, command.name, result)
                result = DomainCommandResult.fail(
                    ErrorCode.INTERNAL,
                    f"{info.name} {command.name} returned no result",
                    exit_code=ExitCode.GENERIC_ERROR,
                    hint="Rerun with --verbose for details.",
                    returned=type(result).__name__,
                )
        except APIError as exc:
            details: dict[str, Any] = {"status_code": exc.status_code, "operation": exc.operation}
            result = DomainCommandResult.failure(
                create_structured_error(exc.status_code, exc.message, details)
            )
        except CommandCancelled:
            result = DomainCommandResult.fail(
                ErrorCode.CANCELLED,
                "Command cancelled",
                exit_code=ExitCode.GENERIC_ERROR,
            )
        except Exception as exc:
            logger.debug("Handler %s %s failed", info.name, command.name, exc_info=True)
            result = DomainCommandResult.fail(
                ErrorCode.INTERNAL,
                f"{info.name} {command.name} failed: {exc}",
                exit_code=ExitCode.GENERIC_ERROR,
                hint="Rerun with --verbose for details.",
                exception=type(exc).__name__,
            )
        finally:
            session.cancellation.reset()

        return result.with_warnings(warnings)

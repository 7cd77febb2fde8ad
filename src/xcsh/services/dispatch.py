"""Line dispatcher shared by the REPL and headless mode.

Turns one input line into a :class:`DomainCommandResult`: tokenizes it,
handles builtins and domain context, and hands everything else to the
:class:`Executor`.
"""

from __future__ import annotations

import logging
import shlex
from typing import TYPE_CHECKING

from xcsh.domain.tiers import validate_tier_access
from xcsh.output.formatters import format_domain_overview
from xcsh.services.executor import Executor
from xcsh.services.result import DomainCommandResult

if TYPE_CHECKING:
    from xcsh.domain.types import DomainInfo
    from xcsh.services.registry import CommandRegistry
    from xcsh.services.session import Session

logger = logging.getLogger(__name__)

EXIT_WORDS = frozenset({"exit", "quit"})
HELP_WORDS = frozenset({"help", "?"})
LEAVE_WORDS = frozenset({"..", "/"})
BUILTINS: tuple[str, ...] = ("help", "exit", "quit", "clear", "domains", "..", "/")
OVERVIEW_EXAMPLES = 4


def tokenize(line: str) -> list[str]:
    """Shell-style split; unbalanced quotes fall back to whitespace split."""
    try:
        return shlex.split(line)
    except ValueError:
        return line.split()


def domain_overview(info: DomainInfo, registry: CommandRegistry) -> list[str]:
    """Lines printed when entering *info*'s domain context."""
    commands = registry.commands(info.name)
    entries = [
        (f"{c.name} {c.usage}".strip(), c.descriptions.short) for c in commands
    ]
    examples: list[str] = []
    for command in commands:
        examples.extend(e.removeprefix(f"{info.name} ") for e in command.examples[:1])
    notes: list[str] = []
    if info.is_preview:
        notes.append("Note: this is a preview domain; its behavior may change.")
    if info.required_tier.value > 1:
        notes.append(f"Requires the {info.required_tier.display_name} tier.")
    notes.append("Type '..' to leave this domain, 'help' for help.")
    return format_domain_overview(
        info.display_name,
        info.descriptions.best("medium"),
        entries,
        examples=examples[:OVERVIEW_EXAMPLES],
        supports_output_formats=bool(commands),
        notes=notes,
    )


class CommandDispatcher:
    """The single parse-then-execute entry point for interactive input."""

    def __init__(self, registry: CommandRegistry, executor: Executor | None = None) -> None:
        self.registry = registry
        self.executor = executor or Executor(registry)

    async def dispatch_line(self, line: str, session: Session) -> DomainCommandResult:
        tokens = tokenize(line.strip())
        if not tokens:
            return DomainCommandResult.success([])
        head, rest = tokens[0], tokens[1:]
        word = head.lower()

        if word in EXIT_WORDS:
            return DomainCommandResult.success([], should_exit=True)
        if word == "clear":
            return DomainCommandResult.success([], should_clear=True)
        if word in HELP_WORDS:
            return DomainCommandResult.success(self.help_lines(session))
        if word == "domains":
            return DomainCommandResult.success(self.domain_lines(), data=self.registry.domains())
        if word in LEAVE_WORDS:
            return self._leave(session)

        if head.startswith("/"):
            target = head[1:]
            if rest:
                return await self.executor.execute(target, rest[0], rest[1:], session)
            return await self._enter(target, session)

        context = session.domain_context
        if context and (
            self.registry.lookup(context, head) is not None
            or self.registry.resolve_domain(head) is None
        ):
            return await self.executor.execute(context, head, rest, session)

        if not rest and self.registry.resolve_domain(head) is not None:
            return await self._enter(head, session)
        return await self.executor.execute(head, rest[0] if rest else "", rest[1:], session)

    async def _enter(self, name: str, session: Session) -> DomainCommandResult:
        resolution = self.registry.resolve_domain(name)
        info = self.registry.catalog.get(resolution.canonical) if resolution else None
        if resolution is None or info is None:
            return await self.executor.execute(name, "", [], session)
        if not validate_tier_access(session.tier, info.required_tier):
            return await self.executor.execute(info.name, "", [], session)
        logger.debug("Entering domain %s", info.name)
        session.set_domain_context(info.name)
        warnings: list[str] = []
        if resolution.is_deprecated:
            warnings.append(
                f"Domain '{resolution.deprecated_name}' is deprecated; use '{info.name}' instead."
            )
        return DomainCommandResult.success(
            domain_overview(info, self.registry),
            context_changed=True,
            warnings=warnings,
        )

    def _leave(self, session: Session) -> DomainCommandResult:
        if session.domain_context is None:
            return DomainCommandResult.success([])
        session.set_domain_context(None)
        return DomainCommandResult.success([], context_changed=True)

    def domain_lines(self) -> list[str]:
        lines = []
        for name in self.registry.domains():
            info = self.registry.catalog.get(name)
            if info is None:
                continue
            marker = " (preview)" if info.is_preview else ""
            lines.append(f"  {name.ljust(28)} {info.descriptions.short}{marker}")
        return ["Available domains:", "", *lines]

    def help_lines(self, session: Session) -> list[str]:
        context = session.domain_context
        info = self.registry.catalog.get(context) if context else None
        if info is not None:
            return domain_overview(info, self.registry)
        return [
            "Usage: <domain> <command> [args...]",
            "",
            "Builtins:",
            "  help           Show this help",
            "  domains        List available domains",
            "  <domain>       Enter a domain context (also /<domain>)",
            "  .. or /        Leave the current domain context",
            "  clear          Clear the screen",
            "  exit, quit     Leave xcsh",
            "",
            "Global flags: --namespace <ns>, --output json|yaml|table|tsv|none, --spec",
        ]

"""Context-dependent tab completion for the REPL and headless mode."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel

from xcsh.domain.args import KNOWN_FLAGS, NAMESPACE_FLAGS, OUTPUT_FLAGS, parse_command_args
from xcsh.domain.types import OutputFormat
from xcsh.services.dispatch import BUILTINS, LEAVE_WORDS, tokenize
from xcsh.services.handlers.context import NAMESPACE_SUGGESTIONS
from xcsh.services.registry import Unavailable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from xcsh.domain.args import ParsedArgs
    from xcsh.services.registry import CommandDefinition, CommandRegistry, SuggestionSource
    from xcsh.services.session import Session

logger = logging.getLogger(__name__)

SuggestionKind = Literal["builtin", "domain", "command", "flag", "value"]


class CompletionSuggestion(BaseModel):
    """One completion candidate."""

    model_config = {"frozen": True}

    text: str
    description: str = ""
    kind: SuggestionKind = "value"


def rank(partial: str, candidates: Iterable[str]) -> list[str]:
    """Prefix matches: case-sensitive first, then case-insensitive, each sorted."""
    unique = set(candidates)
    exact = sorted(c for c in unique if c.startswith(partial))
    lowered = partial.lower()
    loose = sorted(c for c in unique if c not in exact and c.lower().startswith(lowered))
    return exact + loose


class CompletionEngine:
    """Completes a partial input line against an explicit registry."""

    def __init__(self, registry: CommandRegistry) -> None:
        self.registry = registry

    async def complete(self, line: str, session: Session) -> list[CompletionSuggestion]:
        tokens = tokenize(line)
        if not line or line[-1].isspace():
            tokens.append("")
        current = tokens[-1]
        before = tokens[:-1]

        context = session.domain_context
        relative = context is not None and not current.startswith("/")
        if context is not None and relative and before:
            relative = not self._is_absolute(context, before[0])
        if relative:
            before = [context, *before]

        if not before:
            return self._first_word(current)

        domain = before[0].removeprefix("/")
        if len(before) == 1:
            suggestions = self._subcommands(domain, current)
            if relative:
                suggestions += self._builtins(current)
            return suggestions

        command = self.registry.lookup(domain, before[1])
        if command is None:
            return []
        return await self._arguments(domain, command, before[2:], current, session)

    def _is_absolute(self, context: str, word: str) -> bool:
        """Whether *word* leaves the current domain context."""
        if word.startswith("/"):
            return True
        return self.registry.lookup(context, word) is None and self.registry.resolve_domain(word) is not None

    def _builtins(self, current: str) -> list[CompletionSuggestion]:
        return [CompletionSuggestion(text=b, kind="builtin") for b in rank(current, BUILTINS)]

    def _first_word(self, current: str) -> list[CompletionSuggestion]:
        if current.startswith("/") and current not in LEAVE_WORDS:
            names = rank(current[1:], self.registry.domains())
            return [self._domain(f"/{n}", n) for n in names]
        domains = [self._domain(n, n) for n in rank(current, self.registry.domains())]
        return self._builtins(current) + domains

    def _domain(self, text: str, name: str) -> CompletionSuggestion:
        info = self.registry.catalog.get(name)
        return CompletionSuggestion(
            text=text,
            description=info.descriptions.short if info else "",
            kind="domain",
        )

    def _subcommands(self, domain: str, current: str) -> list[CompletionSuggestion]:
        commands = {c.name: c for c in self.registry.commands(domain)}
        names = rank(current, commands)
        if not names:
            aliases = {a: c for c in commands.values() for a in c.aliases}
            return [
                CompletionSuggestion(text=a, description=aliases[a].descriptions.short, kind="command")
                for a in rank(current, aliases)
            ]
        return [
            CompletionSuggestion(text=n, description=commands[n].descriptions.short, kind="command")
            for n in names
        ]

    async def _arguments(
        self,
        domain: str,
        command: CommandDefinition,
        args: list[str],
        current: str,
        session: Session,
    ) -> list[CompletionSuggestion]:
        previous = args[-1] if args else ""
        if previous in OUTPUT_FLAGS:
            return self._values(rank(current, [f.value for f in OutputFormat if f != OutputFormat.TEXT]))
        parsed = parse_command_args(args, self.registry.catalog.resource_types(domain))
        if previous in NAMESPACE_FLAGS:
            values = await self._from_source(
                NAMESPACE_SUGGESTIONS, (domain, "--namespace"), current, parsed, session
            )
            return self._values(values)
        if current.startswith("-"):
            flags = rank(current, [*KNOWN_FLAGS, *command.flags])
            return [CompletionSuggestion(text=f, kind="flag") for f in flags]

        candidates: list[str] = []
        if not parsed.resource_type and not parsed.name:
            candidates += rank(current, self.registry.catalog.resource_types(domain))
        if command.completion is not None:
            candidates += await self._from_source(
                command.completion, (domain, command.name), current, parsed, session
            )
        unique = list(dict.fromkeys(candidates))
        return self._values(unique)

    async def _from_source(
        self,
        source: SuggestionSource,
        scope: tuple[str, str],
        current: str,
        parsed: ParsedArgs,
        session: Session,
    ) -> list[str]:
        """Live values (cached per session) with the static list as fallback."""
        key = (session.auth_fingerprint, scope[0], scope[1], current)
        cached = session.completion_cache.get(key)
        if cached is not None:
            return rank(current, cached)
        try:
            live = await source.try_live(current, parsed, session)
        except Exception:
            logger.debug("Live completion for %s %s failed", *scope, exc_info=True)
            live = None
        if live is None or isinstance(live, Unavailable):
            return rank(current, source.static)
        session.completion_cache.put(key, live)
        return rank(current, live)

    @staticmethod
    def _values(values: list[str]) -> list[CompletionSuggestion]:
        return [CompletionSuggestion(text=v) for v in values]

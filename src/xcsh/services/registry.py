"""Domain command registry.

Built once at startup through :class:`RegistryBuilder` and frozen by
:meth:`RegistryBuilder.build`. The resulting :class:`CommandRegistry`
is passed explicitly to the executor and completion engine; lookups
never consult module state.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from xcsh.domain.types import DescriptionTiers

if TYPE_CHECKING:
    from xcsh.domain.args import ParsedArgs
    from xcsh.domain.catalog import DomainCatalog
    from xcsh.services.result import DomainCommandResult
    from xcsh.services.session import Session


class Unavailable:
    """Sentinel: the live suggestion source cannot answer right now."""

    _instance: Unavailable | None = None

    def __new__(cls) -> Unavailable:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNAVAILABLE"


UNAVAILABLE: Final = Unavailable()

Handler = Callable[["ParsedArgs", "Session"], Awaitable["DomainCommandResult"]]
LiveSuggestions = Callable[[str, "ParsedArgs", "Session"], Awaitable["list[str] | Unavailable"]]


@dataclass(frozen=True)
class SuggestionSource:
    """Two-tier completion: an optional live fetch over a mandatory static list."""

    static: tuple[str, ...] = ()
    live: LiveSuggestions | None = None

    async def try_live(self, partial: str, args: ParsedArgs, session: Session) -> list[str] | Unavailable:
        """Live suggestions, or UNAVAILABLE when there is no live source."""
        if self.live is None:
            return UNAVAILABLE
        return await self.live(partial, args, session)


@dataclass(frozen=True)
class CommandDefinition:
    """One subcommand of a domain."""

    name: str
    descriptions: DescriptionTiers
    execute: Handler
    usage: str = ""
    aliases: tuple[str, ...] = ()
    completion: SuggestionSource | None = None
    flags: tuple[str, ...] = ()
    examples: tuple[str, ...] = ()
    requires_auth: bool = False

    @property
    def all_names(self) -> tuple[str, ...]:
        return (self.name, *self.aliases)


@dataclass(frozen=True)
class DomainResolution:
    """A requested domain name resolved to its canonical domain."""

    canonical: str
    deprecated_name: str | None = None

    @property
    def is_deprecated(self) -> bool:
        return self.deprecated_name is not None


class CommandRegistry:
    """Immutable (domain, subcommand) -> CommandDefinition mapping."""

    def __init__(
        self,
        catalog: DomainCatalog,
        commands: Mapping[str, tuple[CommandDefinition, ...]],
        deprecations: Mapping[str, str],
    ) -> None:
        self.catalog = catalog
        self._commands = MappingProxyType(dict(commands))
        self._index: Mapping[str, Mapping[str, CommandDefinition]] = MappingProxyType(
            {
                domain: MappingProxyType(
                    {alias.lower(): cmd for cmd in cmds for alias in cmd.all_names}
                )
                for domain, cmds in commands.items()
            }
        )
        self.deprecations: Mapping[str, str] = MappingProxyType(dict(deprecations))

    def resolve_domain(self, name: str) -> DomainResolution | None:
        """Resolve *name* (case-insensitive) through deprecation mappings."""
        key = name.lower()
        if key in self.catalog:
            return DomainResolution(key)
        target = self.deprecations.get(key)
        if target is not None:
            return DomainResolution(target, deprecated_name=key)
        return None

    def lookup(self, domain: str, subcommand: str) -> CommandDefinition | None:
        """Find a command by canonical name or alias; None when absent."""
        resolution = self.resolve_domain(domain)
        if resolution is None:
            return None
        return self._index.get(resolution.canonical, {}).get(subcommand.lower())

    def commands(self, domain: str) -> tuple[CommandDefinition, ...]:
        """Commands of *domain* in registration order (empty when unknown)."""
        resolution = self.resolve_domain(domain)
        if resolution is None:
            return ()
        return self._commands.get(resolution.canonical, ())

    def domains(self) -> list[str]:
        """Domains with at least one command, sorted."""
        return sorted(self._commands)


class RegistryBuilder:
    """Collects registrations; :meth:`build` validates and freezes them."""

    def __init__(self) -> None:
        self._commands: dict[str, list[CommandDefinition]] = {}
        self._deprecations: dict[str, str] = {}

    def register(self, domain: str, command: CommandDefinition) -> RegistryBuilder:
        self._commands.setdefault(domain.lower(), []).append(command)
        return self

    def register_many(self, domain: str, commands: Iterable[CommandDefinition]) -> RegistryBuilder:
        for command in commands:
            self.register(domain, command)
        return self

    def deprecate(self, old: str, new: str) -> RegistryBuilder:
        self._deprecations[old.lower()] = new.lower()
        return self

    def build(self, catalog: DomainCatalog) -> CommandRegistry:
        """Freeze the registrations against *catalog*.

        Raises:
            ValueError: Unknown domain, duplicate command name or alias,
                or a deprecation that shadows or points to nothing.
        """
        for domain, cmds in self._commands.items():
            if domain not in catalog:
                msg = f"Commands registered for unknown domain '{domain}'"
                raise ValueError(msg)
            seen: set[str] = set()
            for cmd in cmds:
                for alias in cmd.all_names:
                    key = alias.lower()
                    if key in seen:
                        msg = f"Duplicate command name or alias '{alias}' in domain '{domain}'"
                        raise ValueError(msg)
                    seen.add(key)

        for old, new in self._deprecations.items():
            if new not in catalog:
                msg = f"Deprecated domain '{old}' points to unknown domain '{new}'"
                raise ValueError(msg)
            if old in catalog:
                msg = f"Deprecated name '{old}' shadows an existing domain"
                raise ValueError(msg)

        return CommandRegistry(
            catalog,
            {domain: tuple(cmds) for domain, cmds in self._commands.items()},
            self._deprecations,
        )

"""Tests for the command registry and its builder."""

from __future__ import annotations

import pytest

from tests.conftest import run
from xcsh.domain.args import ParsedArgs
from xcsh.domain.catalog import DomainCatalog, build_catalog
from xcsh.services.handlers import BUILTIN_DOMAINS, build_default_registry
from xcsh.services.handlers._render import desc
from xcsh.services.registry import (
    UNAVAILABLE,
    CommandDefinition,
    CommandRegistry,
    RegistryBuilder,
    SuggestionSource,
    Unavailable,
)
from xcsh.services.result import DomainCommandResult
from xcsh.services.session import Session


async def _noop(args: ParsedArgs, session: Session) -> DomainCommandResult:
    return DomainCommandResult.success()


def _command(name: str, *aliases: str) -> CommandDefinition:
    return CommandDefinition(name=name, descriptions=desc(name), execute=_noop, aliases=aliases)


@pytest.fixture
def tiny_catalog() -> DomainCatalog:
    return build_catalog({"alpha": {"short": "A"}, "beta": {"short": "B"}})


class TestRegistryBuilder:
    def test_lookup_by_name_and_alias(self, tiny_catalog: DomainCatalog) -> None:
        registry = RegistryBuilder().register("alpha", _command("list", "ls")).build(tiny_catalog)
        assert registry.lookup("alpha", "list") is registry.lookup("ALPHA", "LS")
        assert registry.lookup("alpha", "missing") is None
        assert registry.lookup("gamma", "list") is None

    def test_domains_only_lists_registered(self, tiny_catalog: DomainCatalog) -> None:
        registry = RegistryBuilder().register("beta", _command("x")).build(tiny_catalog)
        assert registry.domains() == ["beta"]
        assert registry.commands("alpha") == ()

    def test_unknown_domain_rejected(self, tiny_catalog: DomainCatalog) -> None:
        builder = RegistryBuilder().register("gamma", _command("x"))
        with pytest.raises(ValueError, match="unknown domain 'gamma'"):
            builder.build(tiny_catalog)

    def test_duplicate_alias_rejected(self, tiny_catalog: DomainCatalog) -> None:
        builder = RegistryBuilder().register_many("alpha", [_command("list", "ls"), _command("ls")])
        with pytest.raises(ValueError, match="Duplicate"):
            builder.build(tiny_catalog)

    def test_deprecation_to_unknown_rejected(self, tiny_catalog: DomainCatalog) -> None:
        with pytest.raises(ValueError, match="points to unknown domain"):
            RegistryBuilder().deprecate("old", "gamma").build(tiny_catalog)

    def test_deprecation_shadowing_rejected(self, tiny_catalog: DomainCatalog) -> None:
        with pytest.raises(ValueError, match="shadows"):
            RegistryBuilder().deprecate("alpha", "beta").build(tiny_catalog)


class TestResolveDomain:
    def test_canonical_and_deprecated(self, tiny_catalog: DomainCatalog) -> None:
        registry = (
            RegistryBuilder().register("beta", _command("x")).deprecate("Old", "beta").build(tiny_catalog)
        )
        resolution = registry.resolve_domain("beta")
        assert resolution is not None
        assert not resolution.is_deprecated

        deprecated = registry.resolve_domain("OLD")
        assert deprecated is not None
        assert deprecated.canonical == "beta"
        assert deprecated.deprecated_name == "old"
        assert registry.lookup("old", "x") is registry.lookup("beta", "x")
        assert registry.lookup("beta", "x") is not None
        assert registry.resolve_domain("nope") is None


class TestSuggestionSource:
    def test_unavailable_is_singleton(self) -> None:
        assert Unavailable() is UNAVAILABLE
        assert repr(UNAVAILABLE) == "UNAVAILABLE"

    def test_try_live_without_live(self, session: Session) -> None:
        source = SuggestionSource(static=("a",))
        assert run(source.try_live("", ParsedArgs(), session)) is UNAVAILABLE


class TestDefaultRegistry:
    def test_builtins_and_crud(self, registry: CommandRegistry) -> None:
        for domain in BUILTIN_DOMAINS:
            assert registry.commands(domain)
        assert [c.name for c in registry.commands("virtual")] == [
            "list",
            "get",
            "create",
            "replace",
            "delete",
        ]
        assert registry.lookup("virtual", "apply") is registry.lookup("virtual", "replace")

    def test_cli_only_domains_have_no_crud(self, registry: CommandRegistry) -> None:
        assert registry.lookup("context", "create") is None

    def test_generated_deprecations(self, registry: CommandRegistry) -> None:
        resolution = registry.resolve_domain("load_balancer")
        assert resolution is not None
        assert resolution.canonical == "virtual"

    def test_extra_deprecations(self, catalog: DomainCatalog) -> None:
        registry = build_default_registry(catalog, {"lb": "virtual"})
        resolution = registry.resolve_domain("lb")
        assert resolution is not None
        assert resolution.canonical == "virtual"

"""Tests for the completion engine."""

from __future__ import annotations

import httpx
import pytest

from tests.conftest import Recorder, mock_client, run
from xcsh.services.completion import CompletionEngine, rank
from xcsh.services.registry import CommandRegistry
from xcsh.services.session import Session

NAMESPACES = {"GET /api/web/namespaces": {"items": [{"name": "prod"}, {"name": "shared"}, {"name": "pre"}]}}


@pytest.fixture
def engine(registry: CommandRegistry) -> CompletionEngine:
    return CompletionEngine(registry)


def _texts(engine: CompletionEngine, line: str, session: Session) -> list[str]:
    return [s.text for s in run(engine.complete(line, session))]


class TestRank:
    def test_case_sensitive_first(self) -> None:
        assert rank("D", ["dns", "Data", "DDoS", "waf"]) == ["DDoS", "Data", "dns"]

    def test_empty_partial_sorts_all(self) -> None:
        assert rank("", ["b", "a", "a"]) == ["a", "b"]


class TestFirstWord:
    def test_domains_and_builtins(self, engine: CompletionEngine, session: Session) -> None:
        suggestions = run(engine.complete("d", session))
        texts = [s.text for s in suggestions]
        assert texts[0] == "domains"
        assert "dns" in texts
        assert "ddos" in texts
        dns = next(s for s in suggestions if s.text == "dns")
        assert dns.kind == "domain"
        assert dns.description

    def test_slash_prefix(self, engine: CompletionEngine, session: Session) -> None:
        assert _texts(engine, "/vir", session) == ["/virtual"]

    def test_empty_line_lists_everything(
        self, engine: CompletionEngine, session: Session, registry: CommandRegistry
    ) -> None:
        texts = _texts(engine, "", session)
        assert set(registry.domains()) <= set(texts)
        assert "exit" in texts


class TestSubcommands:
    def test_commands(self, engine: CompletionEngine, session: Session) -> None:
        assert _texts(engine, "context ", session) == ["list", "set", "show"]
        assert _texts(engine, "context s", session) == ["set", "show"]

    def test_alias_fallback(self, engine: CompletionEngine, session: Session) -> None:
        assert _texts(engine, "context us", session) == ["use"]

    def test_unknown_domain(self, engine: CompletionEngine, session: Session) -> None:
        assert _texts(engine, "nosuch ", session) == []


class TestArguments:
    def test_resource_types(self, engine: CompletionEngine, session: Session) -> None:
        texts = _texts(engine, "virtual list http", session)
        assert texts == ["http_loadbalancer"]

    def test_output_formats(self, engine: CompletionEngine, session: Session) -> None:
        assert _texts(engine, "virtual list -o ", session) == ["json", "none", "table", "tsv", "yaml"]

    def test_flags(self, engine: CompletionEngine, session: Session) -> None:
        texts = _texts(engine, "virtual create --f", session)
        assert texts == ["--file"]

    def test_unknown_command(self, engine: CompletionEngine, session: Session) -> None:
        assert _texts(engine, "virtual frob ", session) == []


class TestNamespaceCompletion:
    def test_static_fallback_when_unauthenticated(self, engine: CompletionEngine, session: Session) -> None:
        assert _texts(engine, "context set ", session) == ["default", "shared", "system"]

    def test_live_values_are_cached(self, engine: CompletionEngine) -> None:
        recorder = Recorder(NAMESPACES)
        session = Session(api_client=mock_client(recorder))
        assert _texts(engine, "virtual list -n pr", session) == ["pre", "prod"]
        assert _texts(engine, "virtual list -n pr", session) == ["pre", "prod"]
        assert len(recorder.requests) == 1

    def test_live_failure_falls_back(self, engine: CompletionEngine) -> None:
        session = Session(api_client=mock_client(lambda _req: httpx.Response(500)))
        assert _texts(engine, "context set s", session) == ["shared", "system"]
        assert len(session.completion_cache) == 0


class TestDomainContext:
    def test_relative_subcommands_include_builtins(self, engine: CompletionEngine, session: Session) -> None:
        session.set_domain_context("context")
        texts = _texts(engine, "", session)
        assert texts[:3] == ["list", "set", "show"]
        assert ".." in texts

    def test_relative_arguments(self, engine: CompletionEngine, session: Session) -> None:
        session.set_domain_context("virtual")
        assert _texts(engine, "list origin", session) == ["origin_pool"]

    def test_absolute_domain_from_context(self, engine: CompletionEngine, session: Session) -> None:
        session.set_domain_context("virtual")
        assert _texts(engine, "context s", session) == ["set", "show"]

    def test_slash_escapes_context(self, engine: CompletionEngine, session: Session) -> None:
        session.set_domain_context("virtual")
        assert _texts(engine, "/dn", session) == ["/dns"]

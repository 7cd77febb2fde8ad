"""Tests for Session state, cancellation and the completion cache."""

from __future__ import annotations

import pytest

from tests.conftest import TEST_URL, Recorder, mock_client
from xcsh.services.session import (
    MAX_FOLLOW_UPS,
    MAX_QUERY_CHARS,
    CancellationToken,
    CommandCancelled,
    CompletionCache,
    Session,
)


class TestSession:
    def test_defaults(self, session: Session) -> None:
        assert session.namespace == "default"
        assert session.domain_context is None
        assert not session.is_authenticated
        assert session.auth_fingerprint == "anonymous"
        assert session.server_url is None

    def test_empty_namespace_falls_back_to_default(self, session: Session) -> None:
        session.set_namespace("  ")
        assert session.namespace == "default"
        session.set_namespace(" prod ")
        assert session.namespace == "prod"

    def test_prompt(self, session: Session) -> None:
        assert session.prompt() == "xcsh:default> "
        session.set_domain_context("virtual")
        assert session.prompt() == "xcsh:default/virtual> "

    def test_client_swap_resets_validation_and_cache(self) -> None:
        session = Session(api_client=mock_client(Recorder()), token_validated=True)
        assert session.is_authenticated
        assert session.server_url == TEST_URL
        session.completion_cache.put(("a", "b", "c", "d"), ["x"])
        session.set_api_client(None)
        assert not session.token_validated
        assert not session.is_authenticated
        assert len(session.completion_cache) == 0

    def test_last_ai_query_is_bounded(self, session: Session) -> None:
        follow_ups = [f"q{i}" for i in range(MAX_FOLLOW_UPS + 3)]
        session.set_last_ai_query("id", "x" * (MAX_QUERY_CHARS + 10), follow_ups)
        last = session.last_ai_query
        assert last is not None
        assert len(last.query) == MAX_QUERY_CHARS
        assert last.follow_ups == tuple(follow_ups[:MAX_FOLLOW_UPS])
        session.clear_last_ai_query()
        assert session.last_ai_query is None


class TestCancellationToken:
    def test_cancel_and_reset(self) -> None:
        token = CancellationToken()
        token.raise_if_cancelled()
        token.cancel()
        assert token.is_cancelled
        with pytest.raises(CommandCancelled):
            token.raise_if_cancelled()
        token.reset()
        assert not token.is_cancelled


class TestCompletionCache:
    def test_lru_eviction(self) -> None:
        cache = CompletionCache(max_size=2)
        cache.put(("f", "d", "s", "a"), ["1"])
        cache.put(("f", "d", "s", "b"), ["2"])
        assert cache.get(("f", "d", "s", "a")) == ("1",)
        cache.put(("f", "d", "s", "c"), ["3"])
        assert cache.get(("f", "d", "s", "b")) is None
        assert cache.get(("f", "d", "s", "a")) == ("1",)
        assert len(cache) == 2

    def test_clear(self) -> None:
        cache = CompletionCache()
        cache.put(("f", "d", "s", "a"), [])
        cache.clear()
        assert cache.get(("f", "d", "s", "a")) is None

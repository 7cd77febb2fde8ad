"""Shared pytest fixtures and test helpers for xcsh tests."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable, Coroutine, Generator
from pathlib import Path
from typing import Any, TypeVar

import httpx
import pytest
from click.testing import CliRunner

from xcsh.domain.catalog import DomainCatalog, build_catalog
from xcsh.infrastructure.api_client import APIClient
from xcsh.services.handlers import build_default_registry
from xcsh.services.registry import CommandRegistry
from xcsh.services.session import Session

T = TypeVar("T")

TEST_URL = "https://acme.console.ves.volterra.io"
TEST_TOKEN = "test-token"

Handler = Callable[[httpx.Request], httpx.Response]


def run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine to completion on a fresh event loop."""
    return asyncio.run(coro)


def json_response(data: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(data).encode())


def mock_client(handler: Handler, token: str = TEST_TOKEN) -> APIClient:
    """APIClient whose requests are answered by *handler*."""
    return APIClient(TEST_URL, token, transport=httpx.MockTransport(handler))


class Recorder:
    """MockTransport handler that records requests and serves canned routes.

    Routes map ``"METHOD /path"`` to a payload or an ``httpx.Response``.
    Unrouted requests get a 404.
    """

    def __init__(self, routes: dict[str, Any] | None = None) -> None:
        self.routes = dict(routes or {})
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = f"{request.method} {request.url.path}"
        if key not in self.routes:
            return json_response({"message": f"no route for {key}"}, 404)
        payload = self.routes[key]
        if isinstance(payload, httpx.Response):
            return payload
        return json_response(payload)

    def bodies(self) -> list[Any]:
        return [json.loads(r.content) if r.content else None for r in self.requests]


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep real credentials and config files out of every test."""
    for var in (
        "F5XC_API_URL",
        "F5XC_API_TOKEN",
        "F5XC_NAMESPACE",
        "F5XC_TIER",
        "F5XC_OUTPUT_FORMAT",
        "F5XC_NO_COLOR",
        "XCSH_CONFIG",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def cli_runner() -> Generator[CliRunner]:
    """Provide a Click CLI test runner; restores logging the CLI configures."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    xcsh_level = logging.getLogger("xcsh").level
    yield CliRunner()
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("xcsh").setLevel(xcsh_level)


@pytest.fixture(scope="session")
def catalog() -> DomainCatalog:
    """The generated domain catalog."""
    return build_catalog()


@pytest.fixture
def registry(catalog: DomainCatalog) -> CommandRegistry:
    """Default registry over the generated catalog."""
    return build_default_registry(catalog)


@pytest.fixture
def session() -> Session:
    """Unauthenticated session in the default namespace."""
    return Session()


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def authed_session(recorder: Recorder) -> Session:
    """Validated Enterprise session whose API calls go to ``recorder``."""
    return Session(api_client=mock_client(recorder), token_validated=True, tier="ENTERPRISE")

"""Per-run session state.

One Session per REPL process or headless connection. Handlers read it
freely but mutate it only through the setter methods; nothing is shared
across sessions.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from xcsh.domain.types import OutputFormat

if TYPE_CHECKING:
    from xcsh.infrastructure.api_client import APIClient

DEFAULT_NAMESPACE = "default"
MAX_FOLLOW_UPS = 5
MAX_QUERY_CHARS = 2000
COMPLETION_CACHE_SIZE = 256


class CommandCancelled(Exception):
    """Raised by a handler that observed a cancellation request."""


class CancellationToken:
    """Cooperative cancellation flag.

    Set from a signal handler or the headless reader; handlers poll it
    between awaits via :meth:`raise_if_cancelled`.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    def reset(self) -> None:
        self._event.clear()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise CommandCancelled("Command cancelled")


@dataclass(frozen=True)
class AIQueryRecord:
    """The last AI query, kept for follow-up suggestions in chat."""

    query_id: str
    query: str
    follow_ups: tuple[str, ...] = field(default_factory=tuple)


CacheKey = tuple[str, str, str, str]


class CompletionCache:
    """LRU cache of live completion results for one session.

    Keys include the auth fingerprint so results fetched under other
    credentials are never served.
    """

    def __init__(self, max_size: int = COMPLETION_CACHE_SIZE) -> None:
        self._max_size = max_size
        self._entries: OrderedDict[CacheKey, tuple[str, ...]] = OrderedDict()

    def get(self, key: CacheKey) -> tuple[str, ...] | None:
        value = self._entries.get(key)
        if value is not None:
            self._entries.move_to_end(key)
        return value

    def put(self, key: CacheKey, values: list[str] | tuple[str, ...]) -> None:
        self._entries[key] = tuple(values)
        self._entries.move_to_end(key)
        while len(self._entries) > self._max_size:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class Session:
    """Mutable state for one interactive or headless session."""

    def __init__(
        self,
        *,
        namespace: str = DEFAULT_NAMESPACE,
        output_format: OutputFormat = OutputFormat.TABLE,
        api_client: APIClient | None = None,
        token_validated: bool = False,
        tier: str | None = None,
        server_url: str | None = None,
        no_color: bool = False,
    ) -> None:
        self._namespace = namespace or DEFAULT_NAMESPACE
        self._output_format = output_format
        self._api_client = api_client
        self._token_validated = token_validated
        self._tier = tier
        self._server_url = server_url or (api_client.server_url if api_client else None)
        self._no_color = no_color
        self._last_ai_query: AIQueryRecord | None = None
        self._domain_context: str | None = None
        self.cancellation = CancellationToken()
        self.completion_cache = CompletionCache()

    # --- read access ---

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def output_format(self) -> OutputFormat:
        return self._output_format

    @property
    def api_client(self) -> APIClient | None:
        return self._api_client

    @property
    def token_validated(self) -> bool:
        return self._token_validated

    @property
    def tier(self) -> str | None:
        return self._tier

    @property
    def server_url(self) -> str | None:
        return self._server_url

    @property
    def no_color(self) -> bool:
        return self._no_color

    @property
    def last_ai_query(self) -> AIQueryRecord | None:
        return self._last_ai_query

    @property
    def domain_context(self) -> str | None:
        return self._domain_context

    @property
    def is_authenticated(self) -> bool:
        return self._api_client is not None and self._api_client.is_authenticated

    @property
    def auth_fingerprint(self) -> str:
        return self._api_client.auth_fingerprint if self._api_client else "anonymous"

    # --- setters ---

    def set_namespace(self, namespace: str | None) -> None:
        """Set the active namespace; empty values fall back to ``default``."""
        self._namespace = (namespace or "").strip() or DEFAULT_NAMESPACE

    def set_output_format(self, output_format: OutputFormat) -> None:
        self._output_format = output_format

    def set_api_client(self, client: APIClient | None) -> None:
        """Swap the API client; drops validation state and cached completions."""
        self._api_client = client
        self._server_url = client.server_url if client else None
        self._token_validated = False
        self.completion_cache.clear()

    def set_token_validated(self, validated: bool) -> None:
        self._token_validated = validated

    def set_tier(self, tier: str | None) -> None:
        self._tier = tier

    def set_no_color(self, no_color: bool) -> None:
        self._no_color = no_color

    def set_last_ai_query(self, query_id: str, query: str, follow_ups: list[str]) -> None:
        self._last_ai_query = AIQueryRecord(
            query_id=query_id,
            query=query[:MAX_QUERY_CHARS],
            follow_ups=tuple(follow_ups[:MAX_FOLLOW_UPS]),
        )

    def clear_last_ai_query(self) -> None:
        self._last_ai_query = None

    def set_domain_context(self, domain: str | None) -> None:
        self._domain_context = domain

    def prompt(self) -> str:
        """Prompt text reflecting the namespace and entered domain."""
        if self._domain_context:
            return f"xcsh:{self._namespace}/{self._domain_context}> "
        return f"xcsh:{self._namespace}> "

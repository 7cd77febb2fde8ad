"""Async HTTP transport for the F5 Distributed Cloud REST API.

Thin wrapper over :class:`httpx.AsyncClient`: injects the ``APIToken``
authorization header, normalizes URLs, decodes JSON bodies, and turns
every non-2xx response, timeout, or network failure into an
:class:`APIError`. No retries happen here.
"""

from __future__ import annotations

import hashlib
import json
import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class APIError(Exception):
    """A failed API call. ``status_code`` is 0 when no response arrived."""

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        body: Any = None,
        operation: str = "",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body
        self.operation = operation


class APIResponse:
    """Decoded response of a successful call."""

    __slots__ = ("data", "headers", "status_code")

    def __init__(self, status_code: int, data: Any, headers: dict[str, str]) -> None:
        self.status_code = status_code
        self.data = data
        self.headers = headers

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def build_resource_path(
    api_group: str,
    plural: str,
    namespace: str | None = None,
    name: str | None = None,
) -> str:
    """``/api/<group>/namespaces/<ns>/<plural>[/<name>]``.

    Without a namespace the ``namespaces/<ns>`` segment is omitted.
    """
    parts = ["/api", api_group]
    if namespace:
        parts += ["namespaces", namespace]
    parts.append(plural)
    if name:
        parts.append(name)
    return "/".join(parts)


class APIClient:
    """Authenticated client bound to one tenant URL.

    Args:
        server_url: Tenant base URL, e.g. ``https://acme.console.ves.volterra.io``.
            A trailing ``/api`` is tolerated.
        api_token: API token; empty means unauthenticated.
        timeout: Per-request timeout in seconds.
        verify_tls: Verify server certificates.
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        server_url: str,
        api_token: str = "",
        *,
        timeout: float = DEFAULT_TIMEOUT,
        verify_tls: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.server_url = server_url.rstrip("/")
        self._token = api_token
        self.timeout = timeout
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if api_token:
            headers["Authorization"] = f"APIToken {api_token}"
        self._http = httpx.AsyncClient(
            headers=headers,
            timeout=timeout,
            verify=verify_tls,
            follow_redirects=True,
            transport=transport,
        )

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token)

    @property
    def auth_fingerprint(self) -> str:
        """Stable digest of URL + token; changes whenever credentials do."""
        digest = hashlib.sha256(f"{self.server_url}\0{self._token}".encode())
        return digest.hexdigest()[:16]

    def build_url(self, path: str) -> str:
        base = self.server_url
        if base.endswith("/api") and path.startswith("/api"):
            base = base[: -len("/api")]
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{base}{path}"

    async def request(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        params: dict[str, str] | None = None,
    ) -> APIResponse:
        """Send one request and decode the response.

        Raises:
            APIError: Non-2xx status, timeout, or network failure.
        """
        url = self.build_url(path)
        operation = f"{method} {path}"
        logger.debug("API request: %s %s", method, url)
        try:
            response = await self._http.request(
                method,
                url,
                params=params,
                content=json.dumps(body) if body is not None else None,
            )
        except httpx.TimeoutException as exc:
            msg = f"Request timed out after {self.timeout:g}s"
            raise APIError(msg, 0, None, operation) from exc
        except httpx.RequestError as exc:
            raise APIError(f"Network error: {exc}", 0, None, operation) from exc

        data = _decode(response)
        logger.debug("API response: %s %s", response.status_code, url)
        if not response.is_success:
            message = data.get("message") if isinstance(data, dict) else None
            raise APIError(
                message or f"HTTP {response.status_code}",
                response.status_code,
                data,
                operation,
            )
        return APIResponse(response.status_code, data, dict(response.headers))

    async def get(self, path: str, params: dict[str, str] | None = None) -> APIResponse:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, body: Any = None) -> APIResponse:
        return await self.request("POST", path, body=body)

    async def put(self, path: str, body: Any = None) -> APIResponse:
        return await self.request("PUT", path, body=body)

    async def patch(self, path: str, body: Any = None) -> APIResponse:
        return await self.request("PATCH", path, body=body)

    async def delete(self, path: str) -> APIResponse:
        return await self.request("DELETE", path)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> APIClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def _decode(response: httpx.Response) -> Any:
    """JSON body, ``{}`` when empty, raw text when not JSON."""
    text = response.text
    if not text:
        return {}
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text

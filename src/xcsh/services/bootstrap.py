"""Session bootstrap: API client, token validation and tier detection."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from xcsh.domain.catalog import build_catalog
from xcsh.infrastructure.api_client import APIClient, APIError
from xcsh.infrastructure.subscription import SubscriptionClient
from xcsh.services.handlers import build_default_registry
from xcsh.services.handlers.context import NAMESPACES_PATH
from xcsh.services.session import Session

if TYPE_CHECKING:
    import httpx

    from xcsh.config.settings import XcshSettings
    from xcsh.services.registry import CommandRegistry

logger = logging.getLogger(__name__)


def client_from_settings(
    settings: XcshSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> APIClient | None:
    """API client for the configured tenant, or None without an API URL."""
    if not settings.api_url:
        return None
    return APIClient(
        settings.api_url,
        settings.api_token or "",
        timeout=settings.http.timeout,
        verify_tls=settings.http.verify_tls,
        transport=transport,
    )


def registry_from_settings(settings: XcshSettings) -> CommandRegistry:
    return build_default_registry(build_catalog(), settings.deprecations)


async def validate_token(client: APIClient) -> bool:
    """Whether the API accepts the client's token."""
    if not client.is_authenticated:
        return False
    try:
        await client.get(NAMESPACES_PATH)
    except APIError as exc:
        logger.warning("Token validation failed: %s", exc.message)
        return False
    return True


async def detect_tier(client: APIClient) -> str | None:
    """Tier from the usage plan; None when it cannot be determined."""
    try:
        return await SubscriptionClient(client).get_tier()
    except APIError as exc:
        logger.debug("Tier detection failed: %s", exc.message)
        return None


async def create_session(
    settings: XcshSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Session:
    client = client_from_settings(settings, transport)
    token_validated = False
    tier = settings.tier
    if client is not None and client.is_authenticated:
        token_validated = await validate_token(client)
        if tier is None and token_validated and settings.subscription.auto_detect_tier:
            tier = await detect_tier(client)
    logger.debug("Session ready (authenticated=%s, tier=%s)", token_validated, tier)
    return Session(
        namespace=settings.namespace,
        output_format=settings.effective_output_format,
        api_client=client,
        token_validated=token_validated,
        tier=tier,
        no_color=settings.effective_no_color,
    )


@asynccontextmanager
async def open_session(
    settings: XcshSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[Session]:
    """Session whose API client is closed on exit."""
    session = await create_session(settings, transport)
    try:
        yield session
    finally:
        if session.api_client is not None:
            await session.api_client.aclose()

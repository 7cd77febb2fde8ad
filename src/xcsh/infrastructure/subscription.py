"""Subscription, addon-service and quota fetchers.

Reads the tenant's usage plan, addon services and quota usage from the
``/api/web`` endpoints and converts them into the domain value types
that :mod:`xcsh.domain.validation` evaluates.
"""

from __future__ import annotations

import logging
from typing import Any

from xcsh.domain.validation import (
    AccessStatus,
    AddonService,
    AddonState,
    QuotaItem,
    ValidationRequest,
    ValidationResult,
    validate_request,
)
from xcsh.infrastructure.api_client import APIClient, APIError

logger = logging.getLogger(__name__)

SYSTEM_NAMESPACE = "system"

_STATE_ALIASES: dict[str, str] = {
    "": AddonState.NONE,
    "NONE": AddonState.NONE,
    "AS_NONE": AddonState.NONE,
    "PENDING": AddonState.PENDING,
    "AS_PENDING": AddonState.PENDING,
    "SUBSCRIBED": AddonState.SUBSCRIBED,
    "AS_SUBSCRIBED": AddonState.SUBSCRIBED,
    "ERROR": AddonState.ERROR,
    "AS_ERROR": AddonState.ERROR,
}

_ACCESS_ALIASES: dict[str, str] = {
    "": AccessStatus.ALLOWED,
    "ALLOWED": AccessStatus.ALLOWED,
    "AS_AC_ALLOWED": AccessStatus.ALLOWED,
    "DENY": AccessStatus.DENIED,
    "DENIED": AccessStatus.DENIED,
    "AS_AC_PBAC_DENY": AccessStatus.DENIED,
    "UPGRADE_PLAN": AccessStatus.UPGRADE_REQUIRED,
    "UPGRADE_REQUIRED": AccessStatus.UPGRADE_REQUIRED,
    "AS_AC_PBAC_DENY_UPGRADE_PLAN": AccessStatus.UPGRADE_REQUIRED,
    "CONTACT_SALES": AccessStatus.CONTACT_SALES,
    "AS_AC_PBAC_DENY_CONTACT_SALES": AccessStatus.CONTACT_SALES,
    "INTERNAL_SERVICE": AccessStatus.INTERNAL_SERVICE,
    "AS_AC_PBAC_DENY_INTERNAL_SVC": AccessStatus.INTERNAL_SERVICE,
    "EOL": AccessStatus.EOL,
    "AS_AC_EOL": AccessStatus.EOL,
}


def normalize_state(state: str) -> str:
    return _STATE_ALIASES.get(state.strip().upper(), state)


def normalize_access_status(status: str) -> str:
    return _ACCESS_ALIASES.get(status.strip().upper(), status)


def display_name(name: str) -> str:
    """``bot-defense`` -> ``Bot Defense``."""
    return " ".join(word.capitalize() for word in name.split("-") if word)


def tier_from_plan(plan: dict[str, Any] | None) -> str:
    """Raw tier string for a usage plan.

    ``tenant_type`` wins; otherwise the plan name is searched for
    ``advanced``/``enterprise``. Defaults to ``STANDARD``.
    """
    if not plan:
        return "STANDARD"
    tenant_type = str(plan.get("tenant_type", "")).upper()
    if tenant_type == "ENTERPRISE":
        return "ENTERPRISE"
    if tenant_type == "FREEMIUM":
        return "STANDARD"
    label = f"{plan.get('name', '')} {plan.get('display_name', '')}".lower()
    if "enterprise" in label:
        return "ENTERPRISE"
    if "advanced" in label:
        return "ADVANCED"
    return "STANDARD"


class SubscriptionClient:
    """Fetch subscription data through an authenticated :class:`APIClient`."""

    def __init__(self, api: APIClient) -> None:
        self.api = api

    async def get_current_plan(self) -> dict[str, Any] | None:
        """The plan flagged ``current``, else the first plan, else None."""
        response = await self.api.get(f"/api/web/namespaces/{SYSTEM_NAMESPACE}/usage_plans/current")
        plans = response.data.get("plans", []) if isinstance(response.data, dict) else []
        for plan in plans:
            if plan.get("current"):
                return plan
        return plans[0] if plans else None

    async def get_tier(self) -> str:
        return tier_from_plan(await self.get_current_plan())

    async def get_quota_items(self) -> list[QuotaItem]:
        """Tenant-level object quotas; unlimited (negative) entries are skipped."""
        response = await self.api.get(f"/api/web/namespaces/{SYSTEM_NAMESPACE}/quota/usage")
        data = response.data if isinstance(response.data, dict) else {}
        quota_map = data.get("objects") or data.get("quota_usage") or {}
        items: list[QuotaItem] = []
        for name, entry in quota_map.items():
            limit = (entry.get("limit") or {}).get("maximum", 0)
            usage = (entry.get("usage") or {}).get("current", 0)
            if limit < 0 or usage < 0:
                continue
            items.append(
                QuotaItem(
                    name=name,
                    display_name=entry.get("display_name") or name,
                    object_type=name,
                    limit=limit,
                    usage=usage,
                )
            )
        return items

    async def _activation_status(self, name: str) -> dict[str, Any] | None:
        path = f"/api/web/namespaces/{SYSTEM_NAMESPACE}/addon_services/{name}/activation-status"
        try:
            response = await self.api.get(path)
        except APIError as exc:
            logger.debug("Activation status unavailable for %s: %s", name, exc.message)
            return None
        return response.data if isinstance(response.data, dict) else None

    async def get_addon_services(self, namespace: str = SYSTEM_NAMESPACE) -> list[AddonService]:
        """Addon services with their activation state and access status."""
        response = await self.api.get(f"/api/web/namespaces/{namespace}/addon_services")
        items = response.data.get("items", []) if isinstance(response.data, dict) else []
        addons: list[AddonService] = []
        for item in items:
            name = item.get("name", "")
            if not name:
                continue
            tier = ""
            state: str = AddonState.NONE
            access: str = AccessStatus.DENIED if item.get("disabled") else AccessStatus.ALLOWED
            status = await self._activation_status(name)
            if status is not None:
                tier = str(status.get("tier", "")).upper()
                state = normalize_state(str(status.get("state", "")))
                access = normalize_access_status(str(status.get("access_status", "")))
            addons.append(
                AddonService(
                    name=name,
                    display_name=display_name(name),
                    tier=tier,
                    state=state,
                    access_status=access,
                )
            )
        return addons

    async def validate(self, request: ValidationRequest) -> ValidationResult:
        """Fetch only the data *request* needs, then run the checks."""
        quotas: list[QuotaItem] = []
        addons: list[AddonService] = []
        if request.resource_type and request.count > 0:
            quotas = await self.get_quota_items()
        if request.feature:
            addons = await self.get_addon_services()
        return validate_request(request, quotas, addons)

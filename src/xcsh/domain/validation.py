"""Quota and feature validation over already-fetched subscription data.

Pure functions: the subscription client fetches quota items and addon
services, and :func:`validate_request` decides PASS / WARNING / FAIL for
a planned deployment before anything is created.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import StrEnum

from pydantic import BaseModel, Field

QUOTA_WARNING_PERCENT = 80.0
QUOTA_EXCEEDED_PERCENT = 100.0


class AddonState(StrEnum):
    NONE = "AS_NONE"
    PENDING = "AS_PENDING"
    SUBSCRIBED = "AS_SUBSCRIBED"
    ERROR = "AS_ERROR"


class AccessStatus(StrEnum):
    ALLOWED = "AS_AC_ALLOWED"
    DENIED = "AS_AC_PBAC_DENY"
    UPGRADE_REQUIRED = "AS_AC_PBAC_DENY_UPGRADE_PLAN"
    CONTACT_SALES = "AS_AC_PBAC_DENY_CONTACT_SALES"
    INTERNAL_SERVICE = "AS_AC_PBAC_DENY_INTERNAL_SVC"
    UNKNOWN = "AS_AC_UNKNOWN"
    EOL = "AS_AC_EOL"


class QuotaStatus(StrEnum):
    OK = "OK"
    WARNING = "WARNING"
    EXCEEDED = "EXCEEDED"


class ValidationStatus(StrEnum):
    PASS = "PASS"
    WARNING = "WARNING"
    FAIL = "FAIL"


_STATE_DESCRIPTIONS: dict[str, str] = {
    AddonState.NONE: "Not Subscribed",
    AddonState.PENDING: "Pending",
    AddonState.SUBSCRIBED: "Subscribed",
    AddonState.ERROR: "Error",
}

_ACCESS_DESCRIPTIONS: dict[str, str] = {
    AccessStatus.ALLOWED: "Allowed",
    AccessStatus.DENIED: "Denied",
    AccessStatus.UPGRADE_REQUIRED: "Upgrade Required",
    AccessStatus.CONTACT_SALES: "Contact Sales",
    AccessStatus.INTERNAL_SERVICE: "Internal Service",
    AccessStatus.UNKNOWN: "Unknown",
    AccessStatus.EOL: "End of Life",
}


def state_description(state: str) -> str:
    return _STATE_DESCRIPTIONS.get(state, "Unknown")


def access_status_description(status: str) -> str:
    return _ACCESS_DESCRIPTIONS.get(status, "Unknown")


def quota_status_from_percentage(percentage: float) -> QuotaStatus:
    if percentage >= QUOTA_EXCEEDED_PERCENT:
        return QuotaStatus.EXCEEDED
    if percentage >= QUOTA_WARNING_PERCENT:
        return QuotaStatus.WARNING
    return QuotaStatus.OK


class QuotaItem(BaseModel):
    """One quota limit and its current usage."""

    model_config = {"frozen": True}

    name: str
    display_name: str = ""
    object_type: str | None = None
    limit: float
    usage: float = 0.0

    @property
    def percentage(self) -> float:
        if self.limit <= 0:
            return 0.0
        return self.usage / self.limit * 100.0

    @property
    def remaining(self) -> float:
        return max(self.limit - self.usage, 0.0)

    @property
    def status(self) -> QuotaStatus:
        return quota_status_from_percentage(self.percentage)

    @property
    def is_exceeded(self) -> bool:
        return self.usage >= self.limit

    @property
    def is_at_risk(self) -> bool:
        return QUOTA_WARNING_PERCENT <= self.percentage < QUOTA_EXCEEDED_PERCENT

    def matches(self, resource_type: str) -> bool:
        wanted = resource_type.lower()
        return self.name.lower() == wanted or (self.object_type or "").lower() == wanted


class AddonService(BaseModel):
    """An addon service and the caller's access to it."""

    model_config = {"frozen": True}

    name: str
    display_name: str = ""
    tier: str = ""
    state: str = AddonState.NONE
    access_status: str = AccessStatus.UNKNOWN

    @property
    def is_active(self) -> bool:
        return self.state == AddonState.SUBSCRIBED

    @property
    def is_available(self) -> bool:
        return self.access_status == AccessStatus.ALLOWED and not self.is_active

    @property
    def is_denied(self) -> bool:
        return self.access_status in (
            AccessStatus.DENIED,
            AccessStatus.UPGRADE_REQUIRED,
            AccessStatus.CONTACT_SALES,
            AccessStatus.INTERNAL_SERVICE,
        )

    @property
    def needs_upgrade(self) -> bool:
        return self.access_status == AccessStatus.UPGRADE_REQUIRED

    @property
    def needs_contact_sales(self) -> bool:
        return self.access_status == AccessStatus.CONTACT_SALES


class ValidationRequest(BaseModel):
    model_config = {"frozen": True}

    resource_type: str | None = None
    count: int = 0
    feature: str | None = None


class ValidationCheck(BaseModel):
    model_config = {"frozen": True}

    type: str
    result: ValidationStatus
    message: str
    resource: str | None = None
    feature: str | None = None
    current: float | None = None
    requested: int | None = None
    limit: float | None = None


class ValidationResult(BaseModel):
    model_config = {"frozen": True}

    valid: bool
    checks: list[ValidationCheck] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


def check_quota(resource_type: str, count: int, quotas: Sequence[QuotaItem]) -> ValidationCheck:
    """Check whether *count* more *resource_type* objects fit in the quota."""
    for quota in quotas:
        if not quota.matches(resource_type):
            continue
        after = quota.usage + count
        if count > quota.remaining:
            result = ValidationStatus.FAIL
            message = (
                f"Quota exceeded: {resource_type} would have {int(after)}/{int(quota.limit)} "
                f"(requesting {count}, only {int(quota.remaining)} available)"
            )
        elif quota.limit > 0 and after / quota.limit * 100.0 >= QUOTA_WARNING_PERCENT:
            result = ValidationStatus.WARNING
            message = (
                f"Quota warning: {resource_type} will be at "
                f"{round(after / quota.limit * 100.0)}% after deployment"
            )
        else:
            result = ValidationStatus.PASS
            message = (
                f"Quota OK: {resource_type} has sufficient capacity "
                f"({int(quota.remaining)} available)"
            )
        return ValidationCheck(
            type="quota",
            result=result,
            message=message,
            resource=resource_type,
            current=quota.usage,
            requested=count,
            limit=quota.limit,
        )
    return ValidationCheck(
        type="quota",
        result=ValidationStatus.WARNING,
        message=f"No quota limit found for resource type: {resource_type}",
        resource=resource_type,
        requested=count,
    )


def check_feature(feature: str, addons: Sequence[AddonService]) -> ValidationCheck:
    """Check whether the addon service *feature* can be used."""
    wanted = feature.lower()
    for addon in addons:
        if addon.name.lower() != wanted:
            continue
        if addon.is_active:
            result = ValidationStatus.PASS
            message = f"Feature '{feature}' is active (tier: {addon.tier})"
        elif addon.needs_upgrade:
            result = ValidationStatus.FAIL
            message = f"Feature '{feature}' requires a plan upgrade"
        elif addon.needs_contact_sales:
            result = ValidationStatus.FAIL
            message = f"Feature '{feature}' requires contacting F5 sales"
        elif addon.is_available:
            result = ValidationStatus.WARNING
            message = f"Feature '{feature}' is available but not subscribed"
        else:
            result = ValidationStatus.FAIL
            message = (
                f"Feature '{feature}' is not available "
                f"(access: {access_status_description(addon.access_status)})"
            )
        return ValidationCheck(type="feature", result=result, message=message, feature=feature)
    return ValidationCheck(
        type="feature",
        result=ValidationStatus.WARNING,
        message=f"Feature '{feature}' not found in addon services",
        feature=feature,
    )


def validate_request(
    request: ValidationRequest,
    quotas: Sequence[QuotaItem] = (),
    addons: Sequence[AddonService] = (),
) -> ValidationResult:
    """Run the quota and feature checks a request asks for."""
    checks: list[ValidationCheck] = []
    if request.resource_type and request.count > 0:
        checks.append(check_quota(request.resource_type, request.count, quotas))
    if request.feature:
        checks.append(check_feature(request.feature, addons))

    warnings = [c.message for c in checks if c.result == ValidationStatus.WARNING]
    errors = [c.message for c in checks if c.result == ValidationStatus.FAIL]
    return ValidationResult(valid=not errors, checks=checks, warnings=warnings, errors=errors)

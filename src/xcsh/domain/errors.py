"""Error taxonomy: string error codes, process exit codes, and hints.

Every failure the CLI reports is a :class:`StructuredError`. HTTP
statuses map onto both an ``ErrorCode`` and an ``ExitCode`` so a
one-shot invocation exits with a status a script can branch on.
"""

from __future__ import annotations

from enum import IntEnum, StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ExitCode(IntEnum):
    """Process exit statuses."""

    SUCCESS = 0
    GENERIC_ERROR = 1
    VALIDATION_ERROR = 2
    AUTH_ERROR = 3
    CONNECTION_ERROR = 4
    NOT_FOUND_ERROR = 5
    CONFLICT_ERROR = 6
    RATE_LIMIT_ERROR = 7
    QUOTA_EXCEEDED = 8
    FEATURE_NOT_AVAILABLE = 9


class ErrorCode(StrEnum):
    """Machine-readable error identifiers."""

    MISSING_FLAG = "ERR_MISSING_FLAG"
    INVALID_INPUT = "ERR_INVALID_INPUT"
    AUTH_FAILED = "ERR_AUTH_FAILED"
    FORBIDDEN = "ERR_FORBIDDEN"
    NOT_FOUND = "ERR_NOT_FOUND"
    CONFLICT = "ERR_CONFLICT"
    RATE_LIMIT = "ERR_RATE_LIMIT"
    SERVER_ERROR = "ERR_SERVER_ERROR"
    CONNECTION = "ERR_CONNECTION"
    QUOTA_EXCEEDED = "ERR_QUOTA_EXCEEDED"
    FEATURE_NOT_AVAILABLE = "ERR_FEATURE_NOT_AVAILABLE"
    TIER_DENIED = "ERR_TIER_DENIED"
    UNKNOWN_DOMAIN = "ERR_UNKNOWN_DOMAIN"
    UNKNOWN_COMMAND = "ERR_UNKNOWN_COMMAND"
    NOT_AUTHENTICATED = "ERR_NOT_AUTHENTICATED"
    CANCELLED = "ERR_CANCELLED"
    PROTOCOL = "ERR_PROTOCOL"
    INTERNAL = "ERR_INTERNAL"
    OPERATION_FAILED = "ERR_OPERATION_FAILED"


_DESCRIPTIONS: dict[ExitCode, str] = {
    ExitCode.SUCCESS: "Success",
    ExitCode.GENERIC_ERROR: "General error",
    ExitCode.VALIDATION_ERROR: "Invalid input or validation failure",
    ExitCode.AUTH_ERROR: "Authentication or authorization failure",
    ExitCode.CONNECTION_ERROR: "Connection or server error",
    ExitCode.NOT_FOUND_ERROR: "Resource not found",
    ExitCode.CONFLICT_ERROR: "Resource conflict",
    ExitCode.RATE_LIMIT_ERROR: "Rate limit exceeded",
    ExitCode.QUOTA_EXCEEDED: "Subscription quota exceeded",
    ExitCode.FEATURE_NOT_AVAILABLE: "Feature not available in current subscription",
}

_HINTS: dict[ExitCode, str] = {
    ExitCode.SUCCESS: "",
    ExitCode.GENERIC_ERROR: "Rerun with --verbose for more detail.",
    ExitCode.VALIDATION_ERROR: "Check the command arguments and input file.",
    ExitCode.AUTH_ERROR: "Check your API credentials (F5XC_API_TOKEN) and permissions.",
    ExitCode.CONNECTION_ERROR: "Check the API URL and your network connection, then retry.",
    ExitCode.NOT_FOUND_ERROR: "Verify the resource name and namespace spelling.",
    ExitCode.CONFLICT_ERROR: "The resource already exists or was modified; fetch it and retry.",
    ExitCode.RATE_LIMIT_ERROR: "Too many requests; wait a moment and retry.",
    ExitCode.QUOTA_EXCEEDED: "Review usage with 'subscription quota' or request a quota increase.",
    ExitCode.FEATURE_NOT_AVAILABLE: "Check available addons with 'subscription addons'.",
}


def http_status_to_exit_code(status: int) -> ExitCode:
    """Map an HTTP status (0 = no response) onto an exit code."""
    if 200 <= status < 300:
        return ExitCode.SUCCESS
    if status == 0:
        return ExitCode.CONNECTION_ERROR
    if status == 400:
        return ExitCode.VALIDATION_ERROR
    if status in (401, 403):
        return ExitCode.AUTH_ERROR
    if status == 404:
        return ExitCode.NOT_FOUND_ERROR
    if status == 409:
        return ExitCode.CONFLICT_ERROR
    if status == 429:
        return ExitCode.RATE_LIMIT_ERROR
    if 500 <= status < 600:
        return ExitCode.CONNECTION_ERROR
    return ExitCode.GENERIC_ERROR


def http_status_to_error_code(status: int) -> ErrorCode:
    """Map an HTTP status (0 = no response) onto an error code."""
    mapping = {
        0: ErrorCode.CONNECTION,
        400: ErrorCode.INVALID_INPUT,
        401: ErrorCode.AUTH_FAILED,
        403: ErrorCode.FORBIDDEN,
        404: ErrorCode.NOT_FOUND,
        409: ErrorCode.CONFLICT,
        429: ErrorCode.RATE_LIMIT,
    }
    if status in mapping:
        return mapping[status]
    if 500 <= status < 600:
        return ErrorCode.SERVER_ERROR
    return ErrorCode.OPERATION_FAILED


def exit_code_description(code: ExitCode) -> str:
    return _DESCRIPTIONS.get(code, "Unknown error")


def exit_code_hint(code: ExitCode) -> str:
    return _HINTS.get(code, "")


class StructuredError(BaseModel):
    """Error payload carried by results and headless ``error`` messages."""

    model_config = {"frozen": True}

    code: str
    message: str
    exit_code: int = ExitCode.GENERIC_ERROR
    hint: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)


def make_error(
    code: ErrorCode,
    message: str,
    *,
    exit_code: ExitCode = ExitCode.GENERIC_ERROR,
    hint: str | None = None,
    **details: Any,
) -> StructuredError:
    """Build a StructuredError for a non-HTTP failure."""
    return StructuredError(
        code=code,
        message=message,
        exit_code=exit_code,
        hint=hint,
        details=details,
    )


def create_structured_error(
    status: int,
    message: str,
    details: dict[str, Any] | None = None,
) -> StructuredError:
    """Build a StructuredError from an HTTP status code."""
    exit_code = http_status_to_exit_code(status)
    return StructuredError(
        code=http_status_to_error_code(status),
        message=message,
        exit_code=exit_code,
        hint=exit_code_hint(exit_code) or None,
        details=details or {},
    )


def format_error(error: StructuredError) -> list[str]:
    """Render an error as display lines: the message, then an optional hint."""
    lines = [f"ERROR [{error.code}]: {error.message}"]
    if error.hint:
        lines.append(f"Hint: {error.hint}")
    return lines

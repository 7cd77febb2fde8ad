"""DomainCommandResult: the universal command contract.

INVARIANT: Every command handler returns a DomainCommandResult, and the
executor converts every failure into one. The one-shot CLI, the REPL
and the headless protocol all consume this type.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from xcsh.domain.errors import ErrorCode, ExitCode, StructuredError, make_error


class DomainCommandResult(BaseModel):
    """Tagged result of one command.

    Attributes:
        status: ``"ok"`` or ``"error"``; ``error`` is set iff ``"error"``.
        output: Display lines, already formatted.
        data: Structured payload for machine output formats.
        error: Structured error on failure.
        warnings: Non-fatal notices (deprecations, preview domains).
        context_changed: Session state changed; refresh the prompt.
        should_exit: End the REPL or headless session.
        should_clear: Clear the screen.
        enter_chat_mode: Switch the REPL into AI chat.
    """

    model_config = {"frozen": True}

    status: Literal["ok", "error"] = "ok"
    output: list[str] = Field(default_factory=list)
    data: Any = None
    error: StructuredError | None = None
    warnings: list[str] = Field(default_factory=list)
    context_changed: bool = False
    should_exit: bool = False
    should_clear: bool = False
    enter_chat_mode: bool = False

    @model_validator(mode="after")
    def _error_matches_status(self) -> DomainCommandResult:
        if (self.status == "error") != (self.error is not None):
            msg = "error must be set exactly when status is 'error'"
            raise ValueError(msg)
        return self

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def exit_code(self) -> int:
        return self.error.exit_code if self.error else ExitCode.SUCCESS

    @classmethod
    def success(cls, output: list[str] | None = None, **kwargs: Any) -> DomainCommandResult:
        return cls(status="ok", output=output or [], **kwargs)

    @classmethod
    def failure(cls, error: StructuredError, **kwargs: Any) -> DomainCommandResult:
        return cls(status="error", error=error, **kwargs)

    @classmethod
    def fail(
        cls,
        code: ErrorCode,
        message: str,
        *,
        exit_code: ExitCode = ExitCode.GENERIC_ERROR,
        hint: str | None = None,
        **details: Any,
    ) -> DomainCommandResult:
        """Shorthand for ``failure(make_error(...))``."""
        return cls.failure(make_error(code, message, exit_code=exit_code, hint=hint, **details))

    def with_warnings(self, warnings: list[str]) -> DomainCommandResult:
        """Copy with *warnings* prepended to the existing ones."""
        if not warnings:
            return self
        return self.model_copy(update={"warnings": [*warnings, *self.warnings]})

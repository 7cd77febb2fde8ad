"""Tests for DomainCommandResult."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from xcsh.domain.errors import ErrorCode, ExitCode, StructuredError
from xcsh.services.result import DomainCommandResult


class TestDomainCommandResult:
    def test_success(self) -> None:
        result = DomainCommandResult.success(["line"], data={"k": "v"})
        assert result.ok
        assert result.output == ["line"]
        assert result.data == {"k": "v"}
        assert result.error is None
        assert result.exit_code == ExitCode.SUCCESS

    def test_success_defaults(self) -> None:
        result = DomainCommandResult.success()
        assert result.output == []
        assert not result.should_exit
        assert not result.context_changed

    def test_fail(self) -> None:
        result = DomainCommandResult.fail(
            ErrorCode.NOT_FOUND,
            "gone",
            exit_code=ExitCode.NOT_FOUND_ERROR,
            hint="look elsewhere",
            name="x",
        )
        assert not result.ok
        assert result.status == "error"
        assert result.exit_code == 5
        assert result.error is not None
        assert result.error.code == "ERR_NOT_FOUND"
        assert result.error.details == {"name": "x"}

    def test_error_requires_error_status(self) -> None:
        with pytest.raises(ValidationError):
            DomainCommandResult(status="error")
        with pytest.raises(ValidationError):
            DomainCommandResult(status="ok", error=StructuredError(code="ERR_X", message="x"))

    def test_frozen(self) -> None:
        result = DomainCommandResult.success()
        with pytest.raises(ValidationError):
            result.should_exit = True  # type: ignore[misc]

    def test_with_warnings_prepends(self) -> None:
        result = DomainCommandResult.success(warnings=["later"])
        updated = result.with_warnings(["first"])
        assert updated.warnings == ["first", "later"]
        assert result.warnings == ["later"]

    def test_with_no_warnings_returns_same(self) -> None:
        result = DomainCommandResult.success()
        assert result.with_warnings([]) is result

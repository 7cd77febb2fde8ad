"""Tests for the headless controller over in-memory streams."""

from __future__ import annotations

import asyncio
import io
import json
from typing import Any

import pytest

from tests.conftest import run
from xcsh.headless.controller import HeadlessController
from xcsh.services.completion import CompletionEngine
from xcsh.services.dispatch import CommandDispatcher
from xcsh.services.registry import CommandRegistry
from xcsh.services.result import DomainCommandResult
from xcsh.services.session import Session


def _serve(
    registry: CommandRegistry,
    session: Session,
    *lines: Any,
    dispatcher: Any = None,
    emit_session_event: bool = False,
    stdin: Any = None,
) -> tuple[int, list[dict[str, Any]]]:
    """Run a controller over *lines* (dicts are JSON-encoded) and decode its output."""
    raw = "".join((json.dumps(line) if isinstance(line, dict) else line) + "\n" for line in lines)
    stdout = io.StringIO()
    controller = HeadlessController(
        dispatcher or CommandDispatcher(registry),
        CompletionEngine(registry),
        session,
        stdin=stdin if stdin is not None else io.StringIO(raw),
        stdout=stdout,
        emit_session_event=emit_session_event,
    )
    code = run(controller.run())
    messages = [json.loads(line) for line in stdout.getvalue().splitlines()]
    return code, messages


def _types(messages: list[dict[str, Any]]) -> list[str]:
    return [m["type"] if m["type"] != "event" else f"event:{m['event']}" for m in messages]


class TestLifecycle:
    def test_session_event_then_prompt(self, registry: CommandRegistry, session: Session) -> None:
        code, messages = _serve(registry, session, emit_session_event=True)
        assert code == 0
        assert _types(messages) == ["event:session_initialized", "prompt", "exit"]
        data = messages[0]["data"]
        assert data["authenticated"] is False
        assert data["namespace"] == "default"
        assert "version" in data
        assert messages[1]["prompt"] == "xcsh:default> "

    def test_eof_exits_zero(self, registry: CommandRegistry, session: Session) -> None:
        code, messages = _serve(registry, session)
        assert code == 0
        assert messages[-1]["code"] == 0

    def test_exit_message_code(self, registry: CommandRegistry, session: Session) -> None:
        code, messages = _serve(registry, session, {"type": "exit", "code": 4}, {"type": "command", "value": "help"})
        assert code == 4
        assert _types(messages) == ["prompt", "exit"]
        assert messages[-1]["code"] == 4

    def test_exit_command(self, registry: CommandRegistry, session: Session) -> None:
        code, messages = _serve(registry, session, {"type": "command", "value": "quit"})
        assert code == 0
        assert _types(messages) == ["prompt", "exit"]

    def test_blank_lines_skipped(self, registry: CommandRegistry, session: Session) -> None:
        _, messages = _serve(registry, session, "", "   ")
        assert _types(messages) == ["prompt", "exit"]


class TestCommands:
    def test_output_then_prompt(self, registry: CommandRegistry, session: Session) -> None:
        _, messages = _serve(registry, session, {"type": "command", "value": "context show"})
        assert _types(messages) == ["prompt", "output", "prompt", "exit"]
        assert messages[1]["content"] == "Current namespace: default\nSource: default value"

    def test_context_change_updates_prompt(self, registry: CommandRegistry, session: Session) -> None:
        _, messages = _serve(registry, session, {"type": "command", "value": "context set prod"})
        assert _types(messages) == ["prompt", "output", "event:context_changed", "prompt", "exit"]
        assert messages[2]["data"] == {"namespace": "prod", "domain": None}
        assert messages[3]["prompt"] == "xcsh:prod> "

    def test_enter_domain(self, registry: CommandRegistry, session: Session) -> None:
        _, messages = _serve(registry, session, {"type": "command", "value": "dns"})
        changed = next(m for m in messages if m.get("event") == "context_changed")
        assert changed["data"] == {"namespace": "default", "domain": "dns"}
        prompts = [m["prompt"] for m in messages if m["type"] == "prompt"]
        assert prompts[-1] == "xcsh:default/dns> "

    def test_error_result(self, registry: CommandRegistry, session: Session) -> None:
        _, messages = _serve(registry, session, {"type": "command", "value": "nosuch list"})
        error = next(m for m in messages if m["type"] == "error")
        assert error["error_code"] == "ERR_UNKNOWN_DOMAIN"
        assert error["code"] == 2
        assert error["hint"].startswith("Did you mean")
        assert _types(messages)[-2:] == ["prompt", "exit"]

    def test_warnings_become_events(self, registry: CommandRegistry, session: Session) -> None:
        _, messages = _serve(registry, session, {"type": "command", "value": "ai_services query"})
        assert _types(messages)[1] == "event:warning"
        assert "preview" in messages[1]["data"]["message"]

    def test_clear_event(self, registry: CommandRegistry, session: Session) -> None:
        _, messages = _serve(registry, session, {"type": "command", "value": "clear"})
        assert "event:clear" in _types(messages)

    def test_invalid_input(self, registry: CommandRegistry, session: Session) -> None:
        _, messages = _serve(registry, session, "garbage", {"type": "nope"})
        errors = [m for m in messages if m["type"] == "error"]
        assert len(errors) == 2
        assert errors[0]["error_code"] == "ERR_PROTOCOL"
        assert errors[0]["code"] == 2
        assert _types(messages) == ["prompt", "error", "prompt", "error", "prompt", "exit"]


class TestCompletion:
    def test_completion_response(self, registry: CommandRegistry, session: Session) -> None:
        _, messages = _serve(registry, session, {"type": "completion_request", "partial": "context s"})
        response = messages[1]
        assert response["type"] == "completion_response"
        assert [s["text"] for s in response["suggestions"]] == ["set", "show"]
        assert response["suggestions"][0]["category"] == "command"

    def test_completion_does_not_prompt(self, registry: CommandRegistry, session: Session) -> None:
        _, messages = _serve(registry, session, {"type": "completion_request", "partial": ""})
        assert _types(messages) == ["prompt", "completion_response", "exit"]


class _SlowDispatcher:
    """Runs until the session's cancellation token is set."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    async def dispatch_line(self, line: str, session: Session) -> DomainCommandResult:
        self.calls.append(line)
        if line == "slow":
            for _ in range(500):
                if session.cancellation.is_cancelled:
                    return DomainCommandResult.success(["stopped"])
                await asyncio.sleep(0.01)
            pytest.fail("interrupt never arrived")
        return DomainCommandResult.success([line])


class TestInterrupts:
    def test_idle_interrupt(self, registry: CommandRegistry, session: Session) -> None:
        _, messages = _serve(registry, session, {"type": "interrupt"})
        event = messages[1]
        assert event["event"] == "interrupt"
        assert event["data"] == {"in_flight": False}
        assert _types(messages) == ["prompt", "event:interrupt", "exit"]

    def test_interrupt_cancels_running_command(self, registry: CommandRegistry, session: Session) -> None:
        dispatcher = _SlowDispatcher()
        _, messages = _serve(
            registry,
            session,
            {"type": "command", "value": "slow"},
            {"type": "interrupt"},
            {"type": "command", "value": "after"},
            dispatcher=dispatcher,
        )
        assert _types(messages) == [
            "prompt",
            "event:interrupt",
            "output",
            "prompt",
            "output",
            "prompt",
            "exit",
        ]
        assert messages[1]["data"] == {"in_flight": True}
        assert messages[2]["content"] == "stopped"
        assert messages[4]["content"] == "after"
        assert dispatcher.calls == ["slow", "after"]


class _BrokenDispatcher:
    async def dispatch_line(self, line: str, session: Session) -> DomainCommandResult:
        raise AttributeError("'NoneType' object has no attribute 'output'")


class _FailingInput:
    def __iter__(self) -> Any:
        raise OSError("stdin closed")


class TestResilience:
    def test_dispatch_failure_keeps_channel_open(self, registry: CommandRegistry, session: Session) -> None:
        code, messages = _serve(
            registry,
            session,
            {"type": "command", "value": "alpha bad"},
            {"type": "exit", "code": 3},
            dispatcher=_BrokenDispatcher(),
        )
        assert code == 3
        assert _types(messages) == ["prompt", "error", "prompt", "exit"]
        assert messages[1]["error_code"] == "ERR_INTERNAL"
        assert messages[1]["code"] == 1
        assert messages[-1]["code"] == 3

    def test_undecodable_bytes_are_a_protocol_error(self, registry: CommandRegistry, session: Session) -> None:
        stdin = io.TextIOWrapper(io.BytesIO(b'\xff\xfe{"type"\n{"type": "exit", "code": 4}\n'), encoding="utf-8")
        code, messages = _serve(registry, session, stdin=stdin)
        assert code == 4
        assert _types(messages) == ["prompt", "error", "prompt", "exit"]
        assert messages[1]["error_code"] == "ERR_PROTOCOL"

    def test_reader_failure_ends_session(self, registry: CommandRegistry, session: Session) -> None:
        code, messages = _serve(registry, session, stdin=_FailingInput())
        assert code == 0
        assert _types(messages) == ["prompt", "exit"]

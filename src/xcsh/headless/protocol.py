"""Headless wire protocol: newline-delimited JSON messages over stdio.

Inbound: ``command``, ``completion_request``, ``interrupt``, ``exit``.
Outbound: ``output``, ``prompt``, ``completion_response``, ``error``,
``event``, ``exit``. Every outbound message carries an ISO-8601 UTC
``timestamp``. Constructors are pure; :func:`format_message` renders one
compact JSON line.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter, ValidationError


def _now() -> str:
    return datetime.now(UTC).isoformat()


# --- inbound ---


class CommandInput(BaseModel):
    type: Literal["command"]
    value: str


class CompletionRequestInput(BaseModel):
    type: Literal["completion_request"]
    partial: str = ""


class InterruptInput(BaseModel):
    type: Literal["interrupt"]


class ExitInput(BaseModel):
    type: Literal["exit"]
    code: int = 0


InboundMessage = Annotated[
    CommandInput | CompletionRequestInput | InterruptInput | ExitInput,
    Field(discriminator="type"),
]
_inbound_adapter: TypeAdapter[Any] = TypeAdapter(InboundMessage)


def parse_input(line: str) -> CommandInput | CompletionRequestInput | InterruptInput | ExitInput | None:
    """Validate one inbound line; None for anything malformed or unknown."""
    try:
        raw = json.loads(line)
    except ValueError:
        return None
    if not isinstance(raw, dict) or not isinstance(raw.get("type"), str):
        return None
    try:
        return _inbound_adapter.validate_python(raw)
    except ValidationError:
        return None


# --- outbound ---


class _Outbound(BaseModel):
    model_config = {"frozen": True}

    timestamp: str = Field(default_factory=_now)


class OutputMessage(_Outbound):
    type: Literal["output"] = "output"
    content: str
    format: str = "text"


class PromptMessage(_Outbound):
    type: Literal["prompt"] = "prompt"
    prompt: str


class SuggestionPayload(BaseModel):
    model_config = {"frozen": True}

    text: str
    description: str | None = None
    category: str | None = None


class CompletionResponseMessage(_Outbound):
    type: Literal["completion_response"] = "completion_response"
    suggestions: list[SuggestionPayload] = Field(default_factory=list)


class ErrorMessage(_Outbound):
    type: Literal["error"] = "error"
    message: str
    code: int = 1
    error_code: str | None = None
    hint: str | None = None


class EventMessage(_Outbound):
    type: Literal["event"] = "event"
    event: str
    data: dict[str, Any] = Field(default_factory=dict)


class ExitMessage(_Outbound):
    type: Literal["exit"] = "exit"
    code: int = 0


OutboundMessage = (
    OutputMessage
    | PromptMessage
    | CompletionResponseMessage
    | ErrorMessage
    | EventMessage
    | ExitMessage
)


def create_output_message(content: str, format: str = "text") -> OutputMessage:
    return OutputMessage(content=content, format=format)


def create_prompt_message(prompt: str) -> PromptMessage:
    return PromptMessage(prompt=prompt)


def create_completion_response(suggestions: list[dict[str, Any]] | list[SuggestionPayload]) -> CompletionResponseMessage:
    return CompletionResponseMessage(
        suggestions=[
            s if isinstance(s, SuggestionPayload) else SuggestionPayload.model_validate(s)
            for s in suggestions
        ]
    )


def create_error_message(
    message: str,
    code: int = 1,
    hint: str | None = None,
    error_code: str | None = None,
) -> ErrorMessage:
    return ErrorMessage(message=message, code=code, hint=hint, error_code=error_code)


def create_event_message(event: str, data: dict[str, Any] | None = None) -> EventMessage:
    return EventMessage(event=event, data=data or {})


def create_exit_message(code: int = 0) -> ExitMessage:
    return ExitMessage(code=code)


def format_message(message: OutboundMessage) -> str:
    """One compact JSON line; ``None`` fields are omitted."""
    return message.model_dump_json(exclude_none=True)

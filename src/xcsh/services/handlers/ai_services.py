"""``ai_services`` domain: single queries, feedback and interactive chat."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from xcsh.domain.args import flag_value
from xcsh.domain.errors import ErrorCode, ExitCode
from xcsh.domain.types import OutputFormat
from xcsh.infrastructure.genai import NEGATIVE_FEEDBACK_TYPES, AIQueryResponse, GenAIClient
from xcsh.services.handlers._render import desc, lines_or_render
from xcsh.services.registry import CommandDefinition, SuggestionSource
from xcsh.services.result import DomainCommandResult

if TYPE_CHECKING:
    from xcsh.domain.args import ParsedArgs
    from xcsh.services.session import Session

FEEDBACK_KINDS = ("positive", "negative")


def _client(session: Session) -> GenAIClient:
    assert session.api_client is not None
    return GenAIClient(session.api_client)


def answer_lines(response: AIQueryResponse) -> list[str]:
    """Human rendering of an answer with numbered follow-ups."""
    lines = response.text.splitlines() or ["(no answer)"]
    if response.links:
        lines += ["", "References:"]
        lines += [f"  {link}" for link in response.links]
    if response.follow_up_queries:
        lines += ["", "Follow-up questions:"]
        lines += [f"  {i}. {q}" for i, q in enumerate(response.follow_up_queries, start=1)]
    return lines


async def ask(session: Session, namespace: str, question: str) -> AIQueryResponse:
    """Run one query and remember it for feedback and follow-ups."""
    response = await _client(session).query(namespace, question)
    session.cancellation.raise_if_cancelled()
    session.set_last_ai_query(response.query_id, question, response.follow_up_queries)
    return response


async def send_feedback(
    session: Session,
    namespace: str,
    kind: str,
    *,
    remark: str | None = None,
    comment: str | None = None,
) -> DomainCommandResult:
    """Rate the last answer; shared by the command and chat mode."""
    last = session.last_ai_query
    if last is None or not last.query_id:
        return DomainCommandResult.fail(
            ErrorCode.INVALID_INPUT,
            "No previous query to provide feedback for.",
            exit_code=ExitCode.VALIDATION_ERROR,
            hint="Run 'ai_services query \"<question>\"' first.",
        )
    kind = kind.lower()
    if kind in ("+", "positive"):
        positive = True
    elif kind in ("-", "negative"):
        positive = False
    else:
        return DomainCommandResult.fail(
            ErrorCode.INVALID_INPUT,
            f"Unknown feedback type: {kind}",
            exit_code=ExitCode.VALIDATION_ERROR,
            hint="Use 'positive' or 'negative'.",
        )
    await _client(session).feedback(
        namespace,
        last.query_id,
        last.query,
        positive=positive,
        remark=remark,
        comment=comment,
    )
    if positive:
        return DomainCommandResult.success(["Positive feedback submitted. Thank you!"])
    return DomainCommandResult.success(
        ["Negative feedback submitted. Thank you for helping improve the AI."]
    )


async def query(args: ParsedArgs, session: Session) -> DomainCommandResult:
    question = (args.name or "").strip()
    if not question:
        return DomainCommandResult.fail(
            ErrorCode.MISSING_FLAG,
            "Usage: ai_services query \"<question>\"",
            exit_code=ExitCode.VALIDATION_ERROR,
            hint="Quote the question so it is passed as one argument.",
        )
    namespace = args.namespace or session.namespace
    response = await ask(session, namespace, question)
    return lines_or_render(answer_lines(response), response.model_dump(), args, session)


async def feedback(args: ParsedArgs, session: Session) -> DomainCommandResult:
    kind = args.name
    if not kind:
        return DomainCommandResult.fail(
            ErrorCode.MISSING_FLAG,
            "Usage: ai_services feedback <positive|negative>",
            exit_code=ExitCode.VALIDATION_ERROR,
            hint=f"Negative feedback accepts --type {'|'.join(NEGATIVE_FEEDBACK_TYPES)}.",
        )
    return await send_feedback(
        session,
        args.namespace or session.namespace,
        kind,
        remark=flag_value(args.residual, "--type"),
        comment=flag_value(args.residual, "--comment"),
    )


async def chat(args: ParsedArgs, session: Session) -> DomainCommandResult:
    if args.output_format == OutputFormat.NONE:
        return DomainCommandResult.success([])
    if not sys.stdin.isatty():
        return DomainCommandResult.fail(
            ErrorCode.INVALID_INPUT,
            "Chat mode requires an interactive terminal. "
            "Use 'ai_services query' for non-interactive queries.",
            exit_code=ExitCode.VALIDATION_ERROR,
        )
    if session.api_client is None:
        return DomainCommandResult.fail(
            ErrorCode.NOT_AUTHENTICATED,
            "Not connected to API. Please configure connection first.",
            exit_code=ExitCode.AUTH_ERROR,
        )
    if not session.token_validated:
        return DomainCommandResult.fail(
            ErrorCode.AUTH_FAILED,
            "Not authenticated. Please check your API token.",
            exit_code=ExitCode.AUTH_ERROR,
        )
    return DomainCommandResult.success([], enter_chat_mode=True)


COMMANDS: tuple[CommandDefinition, ...] = (
    CommandDefinition(
        name="query",
        descriptions=desc(
            "Ask the AI assistant a question",
            "Send one question to the AI assistant and print the answer with follow-up suggestions.",
        ),
        execute=query,
        usage='"<question>"',
        aliases=("ask",),
        requires_auth=True,
        examples=('ai_services query "How do I create an HTTP load balancer?"',),
    ),
    CommandDefinition(
        name="feedback",
        descriptions=desc(
            "Rate the last AI answer",
            "Submit positive or negative feedback for the most recent query.",
        ),
        execute=feedback,
        usage="<positive|negative> [--type <kind>] [--comment <text>]",
        flags=("--type", "--comment"),
        completion=SuggestionSource(static=FEEDBACK_KINDS),
        requires_auth=True,
        examples=("ai_services feedback positive", "ai_services feedback negative --type inaccurate"),
    ),
    CommandDefinition(
        name="chat",
        descriptions=desc(
            "Interactive AI chat mode",
            "Start an interactive multi-turn conversation with the AI assistant. "
            "Supports follow-up suggestions and in-chat commands.",
        ),
        execute=chat,
        usage="[--namespace <ns>]",
        examples=("ai_services chat",),
    ),
)

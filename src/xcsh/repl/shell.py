"""Interactive REPL.

Reads lines with :func:`input` (readline provides editing, history and
tab completion) and runs each one to completion on a long-lived
:class:`asyncio.Runner`, so the session's HTTP client stays bound to one
event loop. Ctrl-C while a command runs sets the session cancellation
token instead of killing the process.
"""

from __future__ import annotations

import asyncio
import logging
import readline  # enables line editing - side effect import
import signal
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import click

from xcsh import __version__
from xcsh.domain.errors import format_error
from xcsh.infrastructure.api_client import APIError
from xcsh.services.handlers.ai_services import answer_lines, ask, send_feedback
from xcsh.services.session import CommandCancelled

if TYPE_CHECKING:
    from xcsh.services.completion import CompletionEngine
    from xcsh.services.dispatch import CommandDispatcher
    from xcsh.services.result import DomainCommandResult
    from xcsh.services.session import Session

logger = logging.getLogger(__name__)

CHAT_PROMPT = "ai> "
CHAT_HELP = [
    "Chat commands:",
    "  /exit               - Return to the main CLI",
    "  /help               - Show this help",
    "  /feedback <type>    - Submit feedback (positive/negative)",
    "  1, 2, 3...          - Select a follow-up question",
    "",
    "Just type your question to query the AI assistant.",
]


def _reason(exc: Exception) -> str:
    return exc.message if isinstance(exc, APIError) else str(exc)


class Repl:
    """Line-oriented front-end over the shared dispatcher."""

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        completion: CompletionEngine,
        session: Session,
        runner: asyncio.Runner,
        *,
        banner: bool = True,
        read_line: Callable[[str], str] = input,
    ) -> None:
        self.dispatcher = dispatcher
        self.completion = completion
        self.session = session
        self.runner = runner
        self.banner = banner
        self._read_line = read_line
        self.running = True

    # --- output ---

    def _style(self, text: str, **styles: Any) -> str:
        return text if self.session.no_color else click.style(text, **styles)

    def show(self, result: DomainCommandResult) -> None:
        for warning in result.warnings:
            click.echo(self._style(f"WARNING: {warning}", fg="yellow"), err=True)
        for line in result.output:
            click.echo(line)
        if result.error is not None:
            lines = format_error(result.error)
            click.echo(self._style(lines[0], fg="red", bold=True), err=True)
            for line in lines[1:]:
                click.echo(self._style(line, fg="cyan"), err=True)
        if result.should_clear:
            click.clear()

    # --- completion ---

    def _setup_completer(self) -> None:
        matches: list[str] = []

        def completer(text: str, state: int) -> str | None:
            # Called from inside input(), while the runner's loop is idle.
            if state == 0:
                line = readline.get_line_buffer()[: readline.get_endidx()]
                try:
                    suggestions = self.runner.run(self.completion.complete(line, self.session))
                except Exception:
                    logger.debug("Completion failed for %r", line, exc_info=True)
                    suggestions = []
                matches[:] = [s.text for s in suggestions]
            return matches[state] if state < len(matches) else None

        readline.set_completer(completer)
        readline.set_completer_delims(" \t\n")
        readline.parse_and_bind("tab: complete")

    # --- execution ---

    @contextmanager
    def _cancel_on_sigint(self) -> Iterator[None]:
        """Route Ctrl-C to the session's cancellation token."""

        def handler(_signum: int, _frame: object) -> None:
            self.session.cancellation.cancel()

        previous = signal.signal(signal.SIGINT, handler)
        try:
            yield
        finally:
            signal.signal(signal.SIGINT, previous)

    def execute(self, line: str) -> DomainCommandResult:
        with self._cancel_on_sigint():
            return self.runner.run(self.dispatcher.dispatch_line(line, self.session))

    def handle(self, line: str) -> None:
        result = self.execute(line)
        self.show(result)
        if result.enter_chat_mode:
            self.chat()
        if result.should_exit:
            self.running = False

    # --- chat mode ---

    def chat(self) -> None:
        """Multi-turn AI chat until ``/exit`` or end of input."""
        namespace = self.session.namespace
        click.echo("")
        click.echo(self._style("AI Assistant Chat", bold=True))
        for line in CHAT_HELP:
            click.echo(line)
        click.echo("")
        while True:
            try:
                text = self._read_line(CHAT_PROMPT).strip()
            except EOFError:
                click.echo("")
                return
            except KeyboardInterrupt:
                click.echo("")
                continue
            if not text:
                continue
            if text.lower() in ("/exit", "/quit", "/back"):
                click.echo("Leaving chat mode.")
                return
            if text.lower() == "/help":
                for line in CHAT_HELP:
                    click.echo(line)
                continue
            if text.lower().startswith("/feedback"):
                self._chat_feedback(namespace, text.split()[1:])
                continue
            if text.isdigit():
                last = self.session.last_ai_query
                follow_ups = last.follow_ups if last else ()
                number = int(text)
                if not 1 <= number <= len(follow_ups):
                    click.echo(
                        f"Invalid selection. Choose 1-{len(follow_ups)} from suggested follow-ups."
                        if follow_ups
                        else "No follow-up questions to choose from."
                    )
                    continue
                text = follow_ups[number - 1]
                click.echo(f"> {text}")
            self._chat_query(namespace, text)

    def _chat_query(self, namespace: str, question: str) -> None:
        try:
            with self._cancel_on_sigint():
                response = self.runner.run(ask(self.session, namespace, question))
        except (APIError, CommandCancelled) as exc:
            logger.debug("AI query failed", exc_info=True)
            click.echo(self._style(f"Query failed: {_reason(exc)}", fg="red"), err=True)
            return
        for line in answer_lines(response):
            click.echo(line)
        click.echo("")

    def _chat_feedback(self, namespace: str, parts: list[str]) -> None:
        if not parts:
            click.echo("Usage: /feedback <positive|negative> [type] [comment]")
            return
        kind = parts[0]
        remark = parts[1].lower() if len(parts) > 1 else None
        comment = " ".join(parts[2:]) or None
        try:
            result = self.runner.run(
                send_feedback(self.session, namespace, kind, remark=remark, comment=comment)
            )
        except APIError as exc:
            logger.debug("Feedback failed", exc_info=True)
            click.echo(self._style(f"Feedback failed: {_reason(exc)}", fg="red"), err=True)
            return
        self.show(result)

    # --- main loop ---

    def run(self) -> int:
        self._setup_completer()
        if self.banner:
            click.echo(self._style(f"xcsh {__version__}", bold=True))
            auth = "authenticated" if self.session.token_validated else "not authenticated"
            click.echo(f"Namespace: {self.session.namespace} ({auth})")
            click.echo("Type 'help' for help, 'domains' to list domains, 'exit' to quit.")
            click.echo("")

        while self.running:
            try:
                line = self._read_line(self.session.prompt()).strip()
            except EOFError:
                click.echo("")
                break
            except KeyboardInterrupt:
                click.echo("")
                continue
            if line:
                self.handle(line)
        return 0

"""Headless controller: drives one session over a JSON-lines duplex stream.

A daemon thread reads stdin into an :class:`asyncio.Queue`; the event loop
processes messages strictly in arrival order. While a command runs the
queue is still watched so ``interrupt`` can set the session's cancellation
token; anything else read meanwhile is held back and handled afterwards.
"""

from __future__ import annotations

import asyncio
import logging
import sys
import threading
from collections import deque
from collections.abc import Iterator
from typing import TYPE_CHECKING, TextIO

from xcsh import __version__
from xcsh.domain.errors import ErrorCode, ExitCode
from xcsh.domain.tiers import parse_tier
from xcsh.headless.protocol import (
    CommandInput,
    CompletionRequestInput,
    ExitInput,
    InterruptInput,
    OutboundMessage,
    SuggestionPayload,
    create_completion_response,
    create_error_message,
    create_event_message,
    create_exit_message,
    create_output_message,
    create_prompt_message,
    format_message,
    parse_input,
)

if TYPE_CHECKING:
    from xcsh.services.completion import CompletionEngine
    from xcsh.services.dispatch import CommandDispatcher
    from xcsh.services.result import DomainCommandResult
    from xcsh.services.session import Session

logger = logging.getLogger(__name__)

INVALID_INPUT_MESSAGE = "Invalid input: expected a JSON object with a known 'type'"


class HeadlessController:
    """Owns one session and speaks the headless protocol on two streams."""

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        completion: CompletionEngine,
        session: Session,
        *,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        emit_session_event: bool = True,
    ) -> None:
        self.dispatcher = dispatcher
        self.completion = completion
        self.session = session
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._emit_session_event = emit_session_event
        self._backlog: deque[str | None] = deque()

    # --- output ---

    def emit(self, message: OutboundMessage) -> None:
        self._stdout.write(format_message(message) + "\n")
        self._stdout.flush()

    def emit_prompt(self) -> None:
        self.emit(create_prompt_message(self.session.prompt()))

    def emit_result(self, result: DomainCommandResult) -> None:
        """Warnings, output, then the error; the caller emits the prompt."""
        for warning in result.warnings:
            self.emit(create_event_message("warning", {"message": warning}))
        if result.output:
            self.emit(create_output_message("\n".join(result.output)))
        if result.error is not None:
            self.emit(
                create_error_message(
                    result.error.message,
                    code=int(result.error.exit_code),
                    hint=result.error.hint,
                    error_code=str(result.error.code),
                )
            )
        if result.should_clear:
            self.emit(create_event_message("clear"))
        if result.context_changed:
            self.emit(
                create_event_message(
                    "context_changed",
                    {"namespace": self.session.namespace, "domain": self.session.domain_context},
                )
            )

    def _session_event(self) -> None:
        tier = parse_tier(self.session.tier)
        self.emit(
            create_event_message(
                "session_initialized",
                {
                    "authenticated": self.session.is_authenticated,
                    "token_validated": self.session.token_validated,
                    "namespace": self.session.namespace,
                    "tier": tier.display_name if tier else self.session.tier,
                    "version": __version__,
                },
            )
        )

    # --- input ---

    def _start_reader(self, queue: asyncio.Queue[str | None]) -> None:
        loop = asyncio.get_running_loop()

        def deliver(item: str | None) -> bool:
            try:
                loop.call_soon_threadsafe(queue.put_nowait, item)
            except RuntimeError:
                # The loop closed after the session ended.
                return False
            return True

        def pump() -> None:
            try:
                for line in self._lines():
                    if not deliver(line):
                        return
            except (OSError, ValueError):
                logger.warning("Headless input failed", exc_info=True)
            finally:
                deliver(None)

        threading.Thread(target=pump, name="xcsh-headless-stdin", daemon=True).start()

    def _lines(self) -> Iterator[str]:
        """Input lines; undecodable bytes are replaced rather than fatal."""
        buffer = getattr(self._stdin, "buffer", None)
        if buffer is None:
            yield from self._stdin
            return
        for raw in buffer:
            yield raw.decode("utf-8", errors="replace")

    async def _next_line(self, queue: asyncio.Queue[str | None]) -> str | None:
        if self._backlog:
            return self._backlog.popleft()
        return await queue.get()

    # --- main loop ---

    async def run(self) -> int:
        """Serve until ``exit``, an exiting command, or end of input.

        Returns the exit code sent in the final ``exit`` message.
        """
        queue: asyncio.Queue[str | None] = asyncio.Queue()
        self._start_reader(queue)
        if self._emit_session_event:
            self._session_event()
        self.emit_prompt()

        while True:
            line = await self._next_line(queue)
            if line is None:
                logger.debug("Headless input closed")
                self.emit(create_exit_message(0))
                return 0
            if not line.strip():
                continue

            message = parse_input(line)
            if message is None:
                logger.debug("Rejected headless input: %.200s", line.rstrip())
                self.emit(
                    create_error_message(
                        INVALID_INPUT_MESSAGE,
                        code=int(ExitCode.VALIDATION_ERROR),
                        error_code=str(ErrorCode.PROTOCOL),
                    )
                )
                self.emit_prompt()
            elif isinstance(message, ExitInput):
                self.emit(create_exit_message(message.code))
                return message.code
            elif isinstance(message, InterruptInput):
                self.emit(create_event_message("interrupt", {"in_flight": False}))
            elif isinstance(message, CompletionRequestInput):
                await self._complete(message.partial)
            elif isinstance(message, CommandInput):
                try:
                    result = await self._run_command(message.value, queue)
                except Exception as exc:
                    logger.debug("Headless command failed: %s", message.value, exc_info=True)
                    self.emit(
                        create_error_message(
                            f"Command failed: {exc}",
                            code=int(ExitCode.GENERIC_ERROR),
                            error_code=str(ErrorCode.INTERNAL),
                        )
                    )
                    self.emit_prompt()
                    continue
                self.emit_result(result)
                if result.should_exit:
                    self.emit(create_exit_message(0))
                    return 0
                self.emit_prompt()

    async def _complete(self, partial: str) -> None:
        suggestions = await self.completion.complete(partial, self.session)
        self.emit(
            create_completion_response(
                [
                    SuggestionPayload(text=s.text, description=s.description or None, category=s.kind)
                    for s in suggestions
                ]
            )
        )

    async def _run_command(self, value: str, queue: asyncio.Queue[str | None]) -> DomainCommandResult:
        """Dispatch *value*, honoring interrupts that arrive meanwhile."""
        task = asyncio.create_task(self.dispatcher.dispatch_line(value, self.session))
        while not task.done():
            getter = asyncio.ensure_future(queue.get())
            done, _ = await asyncio.wait({task, getter}, return_when=asyncio.FIRST_COMPLETED)
            if getter not in done:
                getter.cancel()
                continue
            line = getter.result()
            message = parse_input(line) if line is not None else None
            if isinstance(message, InterruptInput):
                logger.debug("Interrupt received while a command is running")
                self.session.cancellation.cancel()
                self.emit(create_event_message("interrupt", {"in_flight": True}))
            else:
                self._backlog.append(line)
        return task.result()

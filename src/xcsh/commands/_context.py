"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Owns the command registry, starts sessions for the
three front-ends (one-shot, REPL, headless) and centralizes result
emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import asyncio
import shlex
import sys
from collections.abc import Sequence
from typing import TYPE_CHECKING

import click

from xcsh.config.logging import configure_logging
from xcsh.domain.errors import format_error
from xcsh.output.formatters import format_output
from xcsh.services.bootstrap import create_session, open_session, registry_from_settings
from xcsh.services.completion import CompletionEngine
from xcsh.services.dispatch import CommandDispatcher

if TYPE_CHECKING:
    from xcsh.config.settings import XcshSettings
    from xcsh.services.registry import CommandRegistry
    from xcsh.services.result import DomainCommandResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The registry is built lazily so ``--help`` and ``--version`` never
    validate the generated catalog.
    """

    def __init__(self, settings: XcshSettings) -> None:
        self.settings = settings
        self._registry: CommandRegistry | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def registry(self) -> CommandRegistry:
        if self._registry is None:
            self._registry = registry_from_settings(self.settings)
        return self._registry

    def emit(self, result: DomainCommandResult, columns: Sequence[str] | None = None) -> None:
        """Output a result with correct exit semantics.

        * Output lines go to stdout; a result with data but no lines is
          rendered in the configured output format.
        * Warnings and errors go to stderr so they don't pollute piped output.
        * Failure exits with the error's exit code.
        """
        lines = list(result.output)
        if not lines and result.data is not None:
            text = format_output(
                result.data,
                self.settings.effective_output_format,
                columns=columns,
                no_color=self.settings.effective_no_color,
            )
            lines = text.splitlines() if text else []
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
        for line in lines:
            click.echo(line)
        if result.error is not None:
            for line in format_error(result.error):
                click.echo(line, err=True)
            raise SystemExit(result.exit_code)

    # --- front-ends ---

    def run_line(self, tokens: Sequence[str]) -> DomainCommandResult:
        """Run one command line in a fresh session."""
        return asyncio.run(self._run_line(shlex.join(tokens)))

    async def _run_line(self, line: str) -> DomainCommandResult:
        async with open_session(self.settings) as session:
            return await CommandDispatcher(self.registry).dispatch_line(line, session)

    def run_headless(self) -> int:
        from xcsh.headless.controller import HeadlessController

        async def serve() -> int:
            async with open_session(self.settings) as session:
                controller = HeadlessController(
                    CommandDispatcher(self.registry),
                    CompletionEngine(self.registry),
                    session,
                    emit_session_event=self.settings.headless.emit_session_event,
                )
                return await controller.run()

        return asyncio.run(serve())

    def run_repl(self) -> int:
        from xcsh.repl.shell import Repl

        with asyncio.Runner() as runner:
            session = runner.run(create_session(self.settings))
            try:
                repl = Repl(
                    CommandDispatcher(self.registry),
                    CompletionEngine(self.registry),
                    session,
                    runner,
                    banner=self.settings.repl.banner and sys.stdout.isatty(),
                )
                return repl.run()
            finally:
                if session.api_client is not None:
                    runner.run(session.api_client.aclose())

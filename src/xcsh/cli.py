"""Root CLI group for xcsh with global flags and command registration."""

from __future__ import annotations

import functools
import sys
from typing import Any

import click

from xcsh import __version__
from xcsh.commands import register_commands
from xcsh.commands._base import XcshGroup
from xcsh.commands._context import AppContext
from xcsh.commands.domains import domain_command
from xcsh.config.settings import XcshSettings
from xcsh.domain.args import parse_output_format
from xcsh.domain.catalog import build_catalog
from xcsh.domain.types import OutputFormat
from xcsh.generated.domains import CLI_SUMMARY
from xcsh.services.handlers import build_default_registry
from xcsh.services.registry import CommandRegistry

OUTPUT_CHOICES = [f.value for f in OutputFormat]


@functools.cache
def _default_registry() -> CommandRegistry:
    return build_default_registry(build_catalog())


class XcshCLI(XcshGroup):
    """Root group: static commands plus one dynamic command per domain."""

    def _registry(self, ctx: click.Context) -> CommandRegistry:
        if isinstance(ctx.obj, AppContext):
            return ctx.obj.registry
        return _default_registry()

    def list_commands(self, ctx: click.Context) -> list[str]:
        static = super().list_commands(ctx)
        return static + [d for d in self._registry(ctx).domains() if d not in static]

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        command = super().get_command(ctx, cmd_name)
        if command is not None:
            return command
        return domain_command(self._registry(ctx), cmd_name)


@click.group(
    cls=XcshCLI,
    invoke_without_command=True,
    help=CLI_SUMMARY,
    examples="""\
  xcsh                                  # interactive shell
  xcsh context show
  xcsh -n production virtual list http_loadbalancer
  xcsh -o json subscription quota
  xcsh --headless < commands.jsonl""",
)
@click.version_option(version=__version__, prog_name="xcsh")
@click.option(
    "-o",
    "--output",
    "output",
    type=click.Choice(OUTPUT_CHOICES, case_sensitive=False),
    default=None,
    help="Output format.",
)
@click.option("--no-color", is_flag=True, help="Disable colored output.")
@click.option("-n", "--namespace", default=None, help="Default namespace for this invocation.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--headless", is_flag=True, help="JSON-lines protocol on stdin/stdout.")
@click.pass_context
def cli(
    ctx: click.Context,
    output: str | None,
    no_color: bool,
    namespace: str | None,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    headless: bool,
) -> None:
    flags: dict[str, Any] = {
        "output_format": parse_output_format(output) if output else None,
        "namespace": namespace,
        "no_color": no_color or None,
        "verbose": verbose or None,
        "log_json": log_json or None,
    }
    settings = XcshSettings.from_cli(config_path=config_path, **flags)
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is not None:
        return
    if headless:
        raise SystemExit(ctx.obj.run_headless())
    if sys.stdin.isatty():
        raise SystemExit(ctx.obj.run_repl())
    click.echo(ctx.get_help())


register_commands(cli)

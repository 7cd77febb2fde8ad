"""Dynamic commands for API and built-in domains.

Every domain known to the registry is exposed as ``xcsh <domain>
[<command> [args...]]``. Arguments are passed through untouched to the
same dispatcher the REPL uses; a bare domain prints its overview.
"""

from __future__ import annotations

from typing import Any

import click

from xcsh.commands._base import XcshCommand
from xcsh.services.registry import CommandRegistry

HELP_FLAGS = frozenset({"-h", "--help"})


def domain_command(registry: CommandRegistry, name: str) -> click.Command | None:
    """Click command for *name* (or a deprecated alias), or None."""
    resolution = registry.resolve_domain(name)
    if resolution is None:
        return None
    info = registry.catalog.get(resolution.canonical)
    if info is None:
        return None

    @click.pass_obj
    def callback(app: Any, args: tuple[str, ...]) -> None:
        if args and args[0] in HELP_FLAGS:
            args = ()
        app.emit(app.run_line([name, *args]))

    examples = "\n".join(
        f"  xcsh {example}" for c in registry.commands(info.name) for example in c.examples[:1]
    )
    return XcshCommand(
        name=name,
        callback=callback,
        params=[click.Argument(["args"], nargs=-1, type=click.UNPROCESSED)],
        help=info.descriptions.best("medium"),
        short_help=info.descriptions.short,
        context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False},
        add_help_option=False,
        examples=examples or None,
        hidden=resolution.is_deprecated,
    )

"""Click commands for xcsh.

Provides register_commands() for the static command groups; domain
commands are resolved dynamically by the root group.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the static command groups on the root CLI group."""
    from xcsh.commands.catalog import domains

    cli.add_command(domains)

"""Click classes for xcsh commands that carry usage examples.

Domain commands are built at runtime from the registry, so their
examples come from the command definitions rather than from help text.
Passing ``examples=`` adds an eager ``--examples`` flag that prints them
and exits before any argument validation or API call.
"""

from __future__ import annotations

from typing import Any

import click


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class _ExamplesMixin:
    examples: str | None

    def _init_examples(self, examples: str | None) -> None:
        self.examples = examples
        if examples:
            assert isinstance(self, click.Command)
            _add_examples_option(self, examples)


class XcshCommand(_ExamplesMixin, click.Command):
    """A command whose ``examples`` text is reachable through ``--examples``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class XcshGroup(_ExamplesMixin, click.Group):
    """Group counterpart of :class:`XcshCommand`.

    Subcommands declared with ``@group.command`` are XcshCommands, so
    they take ``examples=`` too.
    """

    command_class = XcshCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)

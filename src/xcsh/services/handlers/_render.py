"""Shared helpers for command handlers."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from xcsh.domain.types import DescriptionTiers, OutputFormat
from xcsh.output.formatters import format_output
from xcsh.services.result import DomainCommandResult

if TYPE_CHECKING:
    from xcsh.domain.args import ParsedArgs
    from xcsh.services.session import Session

MACHINE_FORMATS = frozenset({OutputFormat.JSON, OutputFormat.YAML, OutputFormat.TSV})


def desc(short: str, medium: str = "", long: str = "") -> DescriptionTiers:
    return DescriptionTiers(short=short, medium=medium, long=long)


def effective_format(args: ParsedArgs, session: Session) -> OutputFormat:
    return args.output_format or session.output_format


def render(
    data: Any,
    args: ParsedArgs,
    session: Session,
    *,
    columns: Sequence[str] | None = None,
    **kwargs: Any,
) -> DomainCommandResult:
    """Success result with *data* rendered in the effective output format."""
    text = format_output(
        data,
        effective_format(args, session),
        columns=columns,
        no_color=args.no_color or session.no_color,
    )
    return DomainCommandResult.success(text.splitlines() if text else [], data=data, **kwargs)


def lines_or_render(
    lines: list[str],
    data: Any,
    args: ParsedArgs,
    session: Session,
    **kwargs: Any,
) -> DomainCommandResult:
    """Human *lines*, unless ``--output`` explicitly asks for a machine format."""
    if args.output_format in MACHINE_FORMATS or args.output_format == OutputFormat.NONE:
        return render(data, args, session, **kwargs)
    return DomainCommandResult.success(lines, data=data, **kwargs)

"""Command argument parser.

Turns a flat token list into a :class:`ParsedArgs` in one left-to-right
scan with one token of lookahead for flag values. Parsing never fails:
malformed input degrades to a partially populated result and the
executor decides whether required fields are missing.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from pydantic import BaseModel

from xcsh.domain.types import OutputFormat

NAMESPACE_FLAGS = frozenset({"--namespace", "--ns", "-n", "-ns"})
NAME_FLAGS = frozenset({"--name"})
OUTPUT_FLAGS = frozenset({"--output", "-o"})
SPEC_FLAG = "--spec"
NO_COLOR_FLAG = "--no-color"

KNOWN_FLAGS: tuple[str, ...] = (
    "--namespace",
    "--ns",
    "-n",
    "-ns",
    "--name",
    "--output",
    "-o",
    SPEC_FLAG,
    NO_COLOR_FLAG,
)

DEFAULT_OUTPUT_FORMAT = OutputFormat.YAML


class ParsedArgs(BaseModel):
    """Structured intent extracted from one command's tokens."""

    model_config = {"frozen": True}

    resource_type: str | None = None
    name: str | None = None
    namespace: str | None = None
    output_format: OutputFormat | None = None
    spec: bool = False
    no_color: bool = False
    residual: tuple[str, ...] = ()


def parse_output_format(value: str) -> OutputFormat:
    """Normalize an ``--output`` value; unknown strings fall back to YAML."""
    normalized = value.strip().lower()
    if normalized in ("", "table", "text"):
        return OutputFormat.TABLE
    if normalized in ("json", "yaml", "tsv", "none"):
        return OutputFormat(normalized)
    return DEFAULT_OUTPUT_FORMAT


def parse_command_args(
    tokens: Sequence[str],
    known_resource_types: Iterable[str] | None = None,
) -> ParsedArgs:
    """Parse *tokens* into :class:`ParsedArgs`.

    The first positional is matched case-insensitively against
    *known_resource_types*; on a miss it becomes the name. Later
    positionals only fill an unset name, and ``--name`` always wins.
    Unknown flags are kept in ``residual`` together with the value they
    consumed.
    """
    known = {t.lower() for t in known_resource_types} if known_resource_types else set()

    resource_type: str | None = None
    positional_name: str | None = None
    flag_name: str | None = None
    namespace: str | None = None
    output_format: OutputFormat | None = None
    spec = False
    no_color = False
    residual: list[str] = []
    seen_positional = False

    i = 0
    count = len(tokens)
    while i < count:
        token = tokens[i]
        has_value = i + 1 < count
        if token in NAMESPACE_FLAGS:
            if has_value:
                namespace = tokens[i + 1]
            i += 2
        elif token in NAME_FLAGS:
            if has_value:
                flag_name = tokens[i + 1]
            i += 2
        elif token in OUTPUT_FLAGS:
            if has_value:
                output_format = parse_output_format(tokens[i + 1])
            i += 2
        elif token == SPEC_FLAG:
            spec = True
            i += 1
        elif token == NO_COLOR_FLAG:
            no_color = True
            i += 1
        elif token.startswith("-"):
            residual.append(token)
            if has_value and not tokens[i + 1].startswith("-"):
                residual.append(tokens[i + 1])
                i += 2
            else:
                i += 1
        else:
            if not seen_positional:
                seen_positional = True
                if token.lower() in known:
                    resource_type = token.lower()
                elif positional_name is None:
                    positional_name = token
            elif positional_name is None:
                positional_name = token
            i += 1

    return ParsedArgs(
        resource_type=resource_type,
        name=flag_name if flag_name is not None else positional_name,
        namespace=namespace,
        output_format=output_format,
        spec=spec,
        no_color=no_color,
        residual=tuple(residual),
    )


def flag_value(residual: Sequence[str], *names: str) -> str | None:
    """Return the value following the last occurrence of any of *names*.

    Returns None when the flag is absent or carries no value.
    """
    value: str | None = None
    for i, token in enumerate(residual):
        if token in names:
            nxt = residual[i + 1] if i + 1 < len(residual) else None
            value = nxt if nxt is not None and not nxt.startswith("-") else None
    return value


def has_flag(residual: Sequence[str], *names: str) -> bool:
    """Whether any of *names* appears in *residual*."""
    return any(token in names for token in residual)

"""Output formatting for command data.

Handlers produce plain data (dicts/lists from the API); the formatter
renders it in the requested :class:`OutputFormat`: JSON, YAML
(ruamel.yaml), a Rich table, tab-separated values, or nothing.
"""

from __future__ import annotations

import json as _json
from collections.abc import Sequence
from io import StringIO
from typing import Any

from rich.table import Table
from rich.text import Text
from ruamel.yaml import YAML

from xcsh.domain.types import OutputFormat
from xcsh.output.console import create_console, get_output, style_for_status

RESOURCE_COLUMNS: tuple[str, ...] = ("namespace", "name", "labels")
TSV_PRIORITY: tuple[str, ...] = ("name", "namespace", "status", "created", "modified")
OUTPUT_FORMATS_NOTE = "Output formats: --output json|yaml|table|tsv|none"


def _new_yaml() -> YAML:
    """Fresh safe dumper per call; ruamel's YAML object is stateful."""
    y = YAML(typ="safe", pure=True)
    y.default_flow_style = False
    return y


def extract_items(data: Any) -> list[dict[str, Any]]:
    """Rows of a list response: ``{"items": [...]}``, a list, or one object."""
    if isinstance(data, dict) and isinstance(data.get("items"), list):
        return [item for item in data["items"] if isinstance(item, dict)]
    if isinstance(data, list):
        return [item for item in data if isinstance(item, dict)]
    if isinstance(data, dict):
        return [data]
    return []


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


def format_labels(item: dict[str, Any]) -> str:
    """``map[k1:v1 k2:v2]`` for an item's labels, or empty string."""
    labels = item.get("labels")
    if not isinstance(labels, dict) or not labels:
        return ""
    return "map[" + " ".join(f"{k}:{labels[k]}" for k in sorted(labels)) + "]"


def format_json(data: Any) -> str:
    return _json.dumps(data, indent=2, default=str)


def format_yaml(data: Any) -> str:
    buf = StringIO()
    _new_yaml().dump(_plain(data), buf)
    return buf.getvalue().rstrip("\n")


def _plain(data: Any) -> Any:
    """Round-trip through JSON so the YAML dumper sees only plain types."""
    return _json.loads(_json.dumps(data, default=str))


def format_table(
    data: Any,
    *,
    columns: Sequence[str] | None = None,
    no_color: bool = False,
    title: str | None = None,
) -> str:
    """Render rows as a Rich table.

    Without *columns*, API list responses get NAMESPACE/NAME/LABELS and a
    single non-resource object gets a KEY/VALUE table.
    """
    items = extract_items(data)
    if not items:
        return ""
    console = create_console(no_color=no_color)
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False, title=title)

    if columns is None and len(items) == 1 and not ({"name", "metadata"} & items[0].keys()):
        table.add_column("KEY", style="xcsh.key", no_wrap=True)
        table.add_column("VALUE")
        for key, value in items[0].items():
            table.add_row(Text(str(key)), Text(_cell(value)))
    else:
        cols = list(columns or RESOURCE_COLUMNS)
        for col in cols:
            style = "xcsh.name" if col == "name" else None
            table.add_column(col.upper().replace("_", " "), style=style, overflow="fold")
        for item in items:
            row: list[Text] = []
            for col in cols:
                if col == "labels" and columns is None:
                    row.append(Text(format_labels(item) or "<None>"))
                    continue
                value = item.get(col)
                if value is None and isinstance(item.get("metadata"), dict):
                    value = item["metadata"].get(col)
                text = _cell(value) or ("<None>" if columns is None else "")
                style = style_for_status(text) if col == "status" else ""
                row.append(Text(text, style=style))
            table.add_row(*row)

    console.print(table)
    return get_output(console).rstrip("\n")


def format_tsv(data: Any, *, columns: Sequence[str] | None = None) -> str:
    """Tab-separated rows; priority keys first, then the rest sorted."""
    items = extract_items(data)
    if not items:
        return ""
    if columns is None:
        keys: set[str] = set()
        for item in items:
            keys.update(item)
        headers = [k for k in TSV_PRIORITY if k in keys]
        headers += sorted(k for k in keys if k not in TSV_PRIORITY)
    else:
        headers = list(columns)
    return "\n".join("\t".join(_cell(item.get(h)) for h in headers) for item in items)


def format_output(
    data: Any,
    output_format: OutputFormat,
    *,
    columns: Sequence[str] | None = None,
    no_color: bool = False,
) -> str:
    """Render *data* in *output_format*; ``none`` renders nothing."""
    if output_format == OutputFormat.JSON:
        return format_json(data)
    if output_format == OutputFormat.YAML:
        return format_yaml(data)
    if output_format in (OutputFormat.TABLE, OutputFormat.TEXT):
        return format_table(data, columns=columns, no_color=no_color)
    if output_format == OutputFormat.TSV:
        return format_tsv(data, columns=columns)
    return ""


def format_domain_overview(
    name: str,
    description: str,
    commands: Sequence[tuple[str, str]],
    *,
    examples: Sequence[str] = (),
    supports_output_formats: bool = False,
    notes: Sequence[str] = (),
) -> list[str]:
    """Lines shown when entering a domain: commands, examples, notes."""
    lines = ["", f"{name} - {description}", ""]
    if commands:
        lines.append("Commands:")
        padding = min(max(len(cmd) for cmd, _ in commands) + 2, 20)
        lines.extend(f"  {cmd.ljust(padding)} {desc}" for cmd, desc in commands)
        lines.append("")
    if examples:
        lines.append("Examples:")
        lines.extend(f"  {example}" for example in examples)
        lines.append("")
    if supports_output_formats:
        lines.append(OUTPUT_FORMATS_NOTE)
        lines.append("")
    if notes:
        lines.extend(notes)
        lines.append("")
    return lines

"""Rich Console factory and theme for xcsh output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_output() -> str`` contract.  In non-TTY environments
(tests, pipes, headless mode) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

XCSH_THEME = Theme(
    {
        "xcsh.ok": "bold green",
        "xcsh.error": "bold red",
        "xcsh.warning": "bold yellow",
        "xcsh.header": "bold cyan",
        "xcsh.key": "dim",
        "xcsh.name": "bold blue",
        "xcsh.title": "bold",
        "xcsh.preview": "magenta",
    }
)

_STATUS_STYLES: dict[str, str] = {
    "OK": "xcsh.ok",
    "PASS": "xcsh.ok",
    "ACTIVE": "xcsh.ok",
    "WARNING": "xcsh.warning",
    "EXCEEDED": "xcsh.error",
    "FAIL": "xcsh.error",
    "DENIED": "xcsh.error",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=XCSH_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Return the Rich style name for a quota/validation/addon status."""
    return _STATUS_STYLES.get(status.upper(), "")

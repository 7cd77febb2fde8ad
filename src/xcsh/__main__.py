"""Allow ``python -m xcsh``."""

from xcsh.cli import cli

cli()

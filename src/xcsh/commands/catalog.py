"""Command group: browse the domain catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from xcsh.commands._base import XcshGroup
from xcsh.services.domains import LIST_COLUMNS, RELATED_COLUMNS, list_domains, related_domains, show_domain

if TYPE_CHECKING:
    from xcsh.commands._context import AppContext

_DOMAINS_EXAMPLES = """\
  xcsh domains list
  xcsh domains list --category Security --tier professional
  xcsh domains show waf
  xcsh -o json domains related virtual --limit 3"""


@click.group(cls=XcshGroup, examples=_DOMAINS_EXAMPLES)
def domains() -> None:
    """Browse API domains, their tiers and relationships."""


@domains.command(
    "list",
    examples="""\
  xcsh domains list
  xcsh domains list --preview
  xcsh -o tsv domains list --category Networking""",
)
@click.option("--category", default=None, help="Only domains in this category.")
@click.option("--tier", default=None, help="Only domains available up to this tier.")
@click.option("--preview", "preview_only", is_flag=True, help="Only preview domains.")
@click.pass_obj
def list_cmd(app: AppContext, category: str | None, tier: str | None, preview_only: bool) -> None:
    """List domains."""
    result = list_domains(
        app.registry.catalog, category=category, tier=tier, preview_only=preview_only
    )
    app.emit(result, columns=LIST_COLUMNS)


@domains.command(
    examples="""\
  xcsh domains show dns
  xcsh -o yaml domains show api"""
)
@click.argument("name")
@click.pass_obj
def show(app: AppContext, name: str) -> None:
    """Show one domain's details."""
    app.emit(show_domain(app.registry.catalog, name))


@domains.command(
    examples="""\
  xcsh domains related waf
  xcsh domains related virtual --limit 3"""
)
@click.argument("name")
@click.option("--limit", default=5, type=click.IntRange(min=1), help="Max results.")
@click.pass_obj
def related(app: AppContext, name: str, limit: int) -> None:
    """Rank domains related to NAME."""
    app.emit(related_domains(app.registry.catalog, name, limit=limit), columns=RELATED_COLUMNS)

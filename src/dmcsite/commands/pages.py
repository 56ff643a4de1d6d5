"""Command: list configured pages."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dmcsite.commands._base import SiteCommand

if TYPE_CHECKING:
    from dmcsite.commands._context import AppContext


@click.command(
    cls=SiteCommand,
    examples="""\
  dmcsite pages
  dmcsite -q pages
  dmcsite --json pages""",
)
@click.pass_obj
def pages(app: AppContext) -> None:
    """List pages and whether their body fragments exist."""
    from dmcsite.services.assemble import AssembleService

    app.emit(AssembleService(app.site).list_pages())

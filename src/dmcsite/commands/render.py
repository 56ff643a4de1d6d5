"""Command: render a single page."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from dmcsite.commands._base import SiteCommand

if TYPE_CHECKING:
    from dmcsite.commands._context import AppContext


@click.command(
    cls=SiteCommand,
    examples="""\
  dmcsite render index
  dmcsite render userguide -o userguide.html
  dmcsite --json render download""",
)
@click.argument("page_id", metavar="PAGE")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the document to a file instead of stdout.",
)
@click.pass_obj
def render(app: AppContext, page_id: str, output: Path | None) -> None:
    """Assemble header, PAGE body, and footer into one document."""
    from dmcsite.services.assemble import AssembleService

    svc = AssembleService(app.site)
    if output is not None:
        app.emit(svc.render_to_file(page_id, output))
        return

    result = svc.render_page(page_id)
    if not result.ok or app.settings.json_output:
        app.emit(result)
        return
    # The document itself is the output; no status line, no trailing newline.
    click.echo(result.data["document"], nl=False)

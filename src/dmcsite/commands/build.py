"""Command: build every page into an output directory."""

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
  dmcsite build
  dmcsite build -o /tmp/site
  dmcsite build --page index --page download
  dmcsite build --copy-assets""",
)
@click.option(
    "-o",
    "--output",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Output directory (default: [build] output_dir).",
)
@click.option("--page", "pages", multiple=True, help="Build only this page (repeatable).")
@click.option("--copy-assets", is_flag=True, help="Copy images and downloads alongside pages.")
@click.pass_obj
def build(
    app: AppContext,
    output_dir: Path | None,
    pages: tuple[str, ...],
    copy_assets: bool,
) -> None:
    """Build the site. Writes nothing if any page fails to assemble."""
    from dmcsite.services.assemble import AssembleService

    app.emit(
        AssembleService(app.site).build_site(
            output_dir,
            pages=list(pages) or None,
            copy_assets=copy_assets,
        )
    )

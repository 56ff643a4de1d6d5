"""Command: site initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from dmcsite.commands._base import SiteCommand

if TYPE_CHECKING:
    from dmcsite.commands._context import AppContext

_INIT_EXAMPLES = """\
  dmcsite init
  dmcsite init /path/to/site --title dmcView --author "Ian Terrell"
  dmcsite init . --force"""


@click.command("init", cls=SiteCommand, examples=_INIT_EXAMPLES)
@click.argument("path", required=False, default=".")
@click.option("--title", default="dmcView", show_default=True, help="Site title.")
@click.option("--author", default="Ian Terrell", show_default=True, help="Copyright holder.")
@click.option("--force", is_flag=True, help="Overwrite existing files.")
@click.pass_obj
def init_cmd(app: AppContext, path: str, title: str, author: str, force: bool) -> None:
    """Create dmcsite.toml and starter fragments in PATH."""
    from dmcsite.services.init import InitService

    site_path = Path(path).resolve()
    site_path.mkdir(parents=True, exist_ok=True)
    app.emit(InitService.init_site(site_path, title=title, author=author, force=force))

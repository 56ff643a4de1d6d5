"""Command: site integrity checking."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dmcsite.commands._base import SiteCommand

if TYPE_CHECKING:
    from dmcsite.commands._context import AppContext


@click.command(
    cls=SiteCommand,
    examples="""\
  dmcsite check
  dmcsite check --errors-only
  dmcsite --json check""",
)
@click.option(
    "--min-severity",
    type=click.Choice(["warning", "error"]),
    default="warning",
    help="Hide issues below this severity.",
)
@click.option("--errors-only", is_flag=True, help="Shortcut for --min-severity error.")
@click.pass_obj
def check(app: AppContext, min_severity: str, errors_only: bool) -> None:
    """Check for missing fragments, broken links, and dangling anchors."""
    from dmcsite.services.check import CheckService

    threshold = "error" if errors_only else min_severity
    app.emit(CheckService(app.site).check(min_severity=threshold))

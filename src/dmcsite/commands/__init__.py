"""Subcommand modules for dmcsite.

Provides register_commands(), which uses deferred imports so that
``dmcsite --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from dmcsite.commands.build import build
    from dmcsite.commands.check import check
    from dmcsite.commands.init_cmd import init_cmd
    from dmcsite.commands.pages import pages
    from dmcsite.commands.render import render

    cli.add_command(render)
    cli.add_command(build)
    cli.add_command(pages)
    cli.add_command(check)
    cli.add_command(init_cmd)

"""Root CLI group for dmcsite.

Global flags select the output mode (Rich, ``--json``, ``-q``) and the
config file. Subcommands render single pages, build the site, list
pages, check links, and scaffold a new site. The fragment site itself
is loaded lazily by :class:`AppContext`, so ``init`` and ``--help``
work outside a site.
"""

from __future__ import annotations

import click

from dmcsite import __version__
from dmcsite.commands import register_commands
from dmcsite.commands._context import AppContext
from dmcsite.config.settings import SiteSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="dmcsite")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """dmcsite — assemble the dmcView website from shared fragments."""
    ctx.ensure_object(dict)
    settings = SiteSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)

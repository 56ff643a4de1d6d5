"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy Site construction and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dmcsite.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from dmcsite.config.settings import SiteSettings
    from dmcsite.infrastructure.site import Site
    from dmcsite.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The site is created on first use so ``--help`` and ``--version``
    never touch the filesystem.
    """

    def __init__(self, settings: SiteSettings) -> None:
        self.settings = settings
        self._site: Site | None = None

        from dmcsite.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from dmcsite.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def site(self) -> Site:
        """The site instance (created lazily on first access)."""
        if self._site is None:
            from dmcsite.infrastructure.site import Site

            self._site = Site(self.settings)
        return self._site

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout. Warnings go to stderr so they don't
          pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = self.output_settings
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                self.emit_warnings(result)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

    def emit_warnings(self, result: ServiceResult) -> None:
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)

"""Click base classes with --examples support.

SiteCommand and SiteGroup accept an ``examples`` parameter. When
``--examples`` is passed, the command prints usage examples and exits,
which keeps ``--help`` short. ``dmcsite build --examples`` shows the
output-directory and asset-copy invocations, for instance.
"""

from __future__ import annotations

from typing import Any

import click


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class SiteCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class SiteGroup(click.Group):
    """Click Group subclass that supports an ``--examples`` flag.

    Sets ``command_class = SiteCommand`` so subcommands accept
    ``examples`` without an explicit ``cls=``.
    """

    command_class = SiteCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)

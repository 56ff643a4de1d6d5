"""Jinja2 template loading for site scaffolding with per-site override support."""

from __future__ import annotations

from pathlib import Path

from jinja2 import (
    BaseLoader,
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
    select_autoescape,
)


def build_template_environment(group: str, *, site_root: Path | None = None) -> Environment:
    """Build a Jinja2 environment with user overrides before packaged defaults.

    User overrides are loaded from ``.dmcsite/templates/`` inside the site.
    Both a namespaced directory (for example ``.dmcsite/templates/scaffold/``)
    and the shared root are supported.

    Templates are only used to generate starter fragments. Assembly never
    passes fragment text through Jinja2.
    """

    loaders: list[BaseLoader] = []
    if site_root is not None:
        template_root = site_root / ".dmcsite" / "templates"
        loaders.append(FileSystemLoader([str(template_root / group), str(template_root)]))

    loaders.append(PackageLoader("dmcsite", f"templates/{group}"))
    return Environment(
        loader=ChoiceLoader(loaders),
        keep_trailing_newline=True,
        undefined=StrictUndefined,
        autoescape=select_autoescape(enabled_extensions=("html.j2",), default=False),
    )

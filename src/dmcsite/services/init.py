"""InitService — scaffold a new site root.

Writes ``dmcsite.toml``, the shared header and footer (rendered from
Jinja2 templates), a stylesheet, and the three dmcView body fragments
(copied verbatim). Static class: there is no site to inject yet.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from jinja2 import Environment, TemplateNotFound

from dmcsite.config.discovery import CONFIG_FILENAME
from dmcsite.config.models import DEFAULT_PAGES, FragmentsConfig
from dmcsite.infrastructure.filesystem import write_document
from dmcsite.infrastructure.templates import build_template_environment
from dmcsite.services.result import ServiceResult
from dmcsite.services.telemetry import traced

logger = logging.getLogger(__name__)

_MENU_LABELS = {"index": "home", "download": "download", "userguide": "user guide"}

# Files copied as-is from the scaffold templates.
_STATIC_FILES = ("style.css",)


class InitService:
    """Create the files a fresh site needs to build."""

    @staticmethod
    @traced
    def init_site(
        path: Path,
        *,
        title: str = "dmcView",
        author: str = "Ian Terrell",
        force: bool = False,
    ) -> ServiceResult:
        op = "init_site"
        fragments = FragmentsConfig()
        env = build_template_environment("scaffold", site_root=path)
        pages = [
            {
                "id": page_id,
                "body": body,
                "href": f"{page_id}.html",
                "label": _MENU_LABELS.get(page_id, page_id),
            }
            for page_id, body in DEFAULT_PAGES.items()
        ]
        context = {
            "title": title,
            "author": author,
            "pages": pages,
            "year": datetime.now(UTC).year,
        }

        planned: dict[str, str] = {}
        try:
            planned[CONFIG_FILENAME] = env.get_template(f"{CONFIG_FILENAME}.j2").render(context)
            planned[fragments.header] = env.get_template("header.html.j2").render(context)
            planned[fragments.footer] = env.get_template("footer.html.j2").render(context)
            for name in (*_STATIC_FILES, *DEFAULT_PAGES.values()):
                planned[name] = _raw_source(env, name)
        except TemplateNotFound as exc:
            return ServiceResult.failure(op, "TEMPLATE_NOT_FOUND", f"Template not found: {exc}")

        existing = sorted(name for name in planned if (path / name).exists())
        if existing and not force:
            return ServiceResult.failure(
                op,
                "SITE_EXISTS",
                f"Refusing to overwrite existing files in {path} (use --force)",
                files=existing,
            )

        written: list[str] = []
        for name, content in planned.items():
            write_document(path / name, content)
            written.append(name)
            logger.debug("Scaffolded %s", path / name)

        warnings = [f"Overwrote {name}" for name in existing]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "site_root": str(path),
                "files": written,
                "pages": list(DEFAULT_PAGES),
            },
            warnings=warnings,
        )


def _raw_source(env: Environment, name: str) -> str:
    """Return template *name* exactly as stored, bypassing Jinja2 rendering."""
    assert env.loader is not None
    source, _filename, _uptodate = env.loader.get_source(env, name)
    return source

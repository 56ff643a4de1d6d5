"""AssembleService — render single pages, build the whole site, list pages.

Rendering is pure: read header, body, footer (in that order) and
concatenate. Building renders every requested page before writing
anything, so a missing fragment never leaves a half-built output tree.
A write failure removes the pages this build created. Output paths
that coincide with a source fragment are refused.
"""

from __future__ import annotations

import logging
from pathlib import Path

from dmcsite.domain.errors import MissingResourceError, UnknownPageError
from dmcsite.domain.fragments import assemble
from dmcsite.infrastructure.filesystem import copy_asset, resolve_within, write_document
from dmcsite.services.base import BaseService
from dmcsite.services.result import ServiceResult
from dmcsite.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


class AssembleService(BaseService):
    """Assemble documents from the site's fragments."""

    def assemble_page(self, page_id: str) -> str:
        """Return the assembled document for *page_id*.

        Raises:
            UnknownPageError: *page_id* is not configured.
            MissingResourceError: A fragment cannot be read.
        """
        header, body, footer = self._site.load_fragments(page_id)
        return assemble(header, body, footer)

    @traced
    def render_page(self, page_id: str) -> ServiceResult:
        """Render one page and return the document in ``data["document"]``."""
        op = "render_page"
        try:
            document = self.assemble_page(page_id)
        except (UnknownPageError, MissingResourceError) as exc:
            logger.debug("Render failed for %s: %s", page_id, exc)
            return self._resource_failure(op, exc)
        except ValueError as exc:
            return ServiceResult.failure(op, "INVALID_PATH", str(exc), page=page_id)

        encoding = self._site.settings.fragments.encoding
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "page": page_id,
                "document": document,
                "bytes": len(document.encode(encoding)),
            },
        )

    @traced
    def render_to_file(self, page_id: str, path: Path) -> ServiceResult:
        """Render one page and write it to *path*; nothing is written on failure."""
        rendered = self.render_page(page_id)
        op = "render_to_file"
        if not rendered.ok:
            return rendered.model_copy(update={"op": op})
        if path.resolve() in self._site.source_paths():
            msg = f"Refusing to overwrite fragment: {path}"
            return ServiceResult.failure(op, "INVALID_PATH", msg, page=page_id)
        encoding = self._site.settings.fragments.encoding
        try:
            size = write_document(path, rendered.data["document"], encoding=encoding)
        except OSError as exc:
            return ServiceResult.failure(op, "WRITE_FAILED", str(exc), page=page_id, path=str(path))
        return ServiceResult(
            ok=True,
            op=op,
            data={"page": page_id, "path": str(path.resolve()), "bytes": size},
        )

    @traced
    def build_site(
        self,
        output_dir: Path | None = None,
        *,
        pages: list[str] | None = None,
        copy_assets: bool = False,
    ) -> ServiceResult:
        """Render *pages* (default: all configured) and write them to *output_dir*."""
        op = "build_site"
        settings = self._site.settings
        target = (output_dir or self._site.output_dir).resolve()
        page_ids = pages or self._site.page_ids

        rendered: list[tuple[str, str]] = []
        with trace_span("render") as span:
            for page_id in page_ids:
                try:
                    rendered.append((page_id, self.assemble_page(page_id)))
                except (UnknownPageError, MissingResourceError) as exc:
                    logger.warning("Build aborted, nothing written: %s", exc)
                    return self._resource_failure(op, exc)
                except ValueError as exc:
                    return ServiceResult.failure(op, "INVALID_PATH", str(exc), page=page_id)
            if span:
                span.annotate("pages", len(rendered))

        planned = [
            (page_id, target / f"{page_id}{settings.build.extension}", document)
            for page_id, document in rendered
        ]
        sources = self._site.source_paths()
        for page_id, dest, _document in planned:
            if dest.resolve() in sources:
                msg = f"Refusing to overwrite fragment: {dest}"
                return ServiceResult.failure(op, "INVALID_PATH", msg, page=page_id)
            if dest.exists() and not dest.is_file():
                msg = f"Output path is not a file: {dest}"
                return ServiceResult.failure(op, "WRITE_FAILED", msg, page=page_id)

        target_existed = target.exists()
        created: list[Path] = []
        written: list[dict[str, object]] = []
        with trace_span("write"):
            for page_id, dest, document in planned:
                existed = dest.exists()
                try:
                    size = write_document(dest, document, encoding=settings.fragments.encoding)
                except OSError as exc:
                    logger.warning("Build failed writing %s, rolling back: %s", dest, exc)
                    _remove_created(created, target if not target_existed else None)
                    return ServiceResult.failure(
                        op, "WRITE_FAILED", str(exc), page=page_id, path=str(dest)
                    )
                if not existed:
                    created.append(dest)
                written.append({"page": page_id, "path": str(dest), "bytes": size})
                logger.debug("Wrote %s (%d bytes)", dest, size)

        warnings: list[str] = []
        asset_count = 0
        if copy_assets:
            with trace_span("assets"):
                asset_count = self._copy_assets(target, warnings)

        data: dict[str, object] = {
            "output_dir": str(target),
            "pages": written,
            "count": len(written),
        }
        if copy_assets:
            data["assets_copied"] = asset_count
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    def _copy_assets(self, target: Path, warnings: list[str]) -> int:
        copied = 0
        for asset in self._site.settings.build.assets:
            try:
                src = resolve_within(self._site.root, asset)
            except ValueError as exc:
                warnings.append(str(exc))
                continue
            if not src.exists():
                warnings.append(f"Asset not found: {asset}")
                continue
            dest = target / asset
            if dest.resolve().is_relative_to(src.resolve()):
                logger.debug("Asset already in place: %s", asset)
                continue
            try:
                copied += copy_asset(src, dest)
            except OSError as exc:
                warnings.append(f"Asset not copied: {asset}: {exc}")
        return copied

    @traced
    def list_pages(self) -> ServiceResult:
        """List configured pages and whether each body fragment exists."""
        items = []
        for page_id in self._site.page_ids:
            page = self._site.resolve_page(page_id)
            try:
                exists = self._site.body_path(page).is_file()
            except ValueError:
                exists = False
            items.append({"id": page_id, "body": page.body, "exists": exists})
        return ServiceResult(
            ok=True,
            op="list_pages",
            data={"items": items, "count": len(items)},
        )


def _remove_created(paths: list[Path], directory: Path | None) -> None:
    """Delete files created by a failed build, and *directory* if left empty."""
    for path in paths:
        path.unlink(missing_ok=True)
    if directory is not None and directory.is_dir() and not any(directory.iterdir()):
        directory.rmdir()

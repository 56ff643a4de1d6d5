"""Site — the single dependency injected into every service.

Owns the site root and the frozen settings, and maps page ids to
fragment paths. Fragment reads always happen in the fixed order
header, body, footer.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from dmcsite.domain.errors import UnknownPageError
from dmcsite.domain.fragments import FOOTER, HEADER, Fragment, Page
from dmcsite.infrastructure.filesystem import read_fragment, resolve_within

if TYPE_CHECKING:
    from dmcsite.config.settings import SiteSettings

logger = logging.getLogger(__name__)


class Site:
    """Filesystem-backed view of a site root."""

    def __init__(self, settings: SiteSettings) -> None:
        self._settings = settings
        self._root = settings.site_root

    @property
    def root(self) -> Path:
        return self._root

    @property
    def settings(self) -> SiteSettings:
        return self._settings

    @property
    def fragments_dir(self) -> Path:
        return resolve_within(self._root, self._settings.fragments.directory)

    @property
    def output_dir(self) -> Path:
        return self._root / self._settings.build.output_dir

    @property
    def page_ids(self) -> list[str]:
        """Configured page ids, in config order."""
        return list(self._settings.pages)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve_page(self, page_id: str) -> Page:
        """Map *page_id* to its :class:`Page`, or raise UnknownPageError."""
        body = self._settings.pages.get(page_id)
        if body is None:
            raise UnknownPageError(page_id, self.page_ids)
        return Page(page_id=page_id, body=body)

    def fragment_path(self, filename: str) -> Path:
        return resolve_within(self.fragments_dir, filename)

    def header_path(self) -> Path:
        return self.fragment_path(self._settings.fragments.header)

    def footer_path(self) -> Path:
        return self.fragment_path(self._settings.fragments.footer)

    def body_path(self, page: Page) -> Path:
        return self.fragment_path(page.body)

    def source_paths(self) -> set[Path]:
        """Resolved paths of every configured fragment that lies inside the root."""
        names = [self._settings.fragments.header, self._settings.fragments.footer]
        names.extend(self._settings.pages.values())
        paths: set[Path] = set()
        for name in names:
            try:
                paths.add(self.fragment_path(name).resolve())
            except ValueError:
                continue
        return paths

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def read(self, path: Path, name: str) -> Fragment:
        return read_fragment(path, name=name, encoding=self._settings.fragments.encoding)

    def load_fragments(self, page_id: str) -> tuple[Fragment, Fragment, Fragment]:
        """Read ``(header, body, footer)`` for *page_id*.

        Raises:
            UnknownPageError: *page_id* is not configured.
            MissingResourceError: Any of the three fragments is unreadable.
        """
        page = self.resolve_page(page_id)
        header = self.read(self.header_path(), HEADER)
        body = self.read(self.body_path(page), page.page_id)
        footer = self.read(self.footer_path(), FOOTER)
        logger.debug("Loaded fragments for page %s", page_id)
        return header, body, footer

"""BaseService — foundation for all dmcsite services.

Every service receives a :class:`Site` at construction time and reads
fragments and settings through it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dmcsite.domain.errors import MissingResourceError, UnknownPageError
from dmcsite.services.result import ServiceResult

if TYPE_CHECKING:
    from dmcsite.infrastructure.site import Site


class BaseService:
    """Base for service-layer classes that operate on an existing site."""

    def __init__(self, site: Site) -> None:
        self._site = site

    @staticmethod
    def _resource_failure(op: str, exc: MissingResourceError | UnknownPageError) -> ServiceResult:
        """Translate a lookup exception into an error result."""
        if isinstance(exc, UnknownPageError):
            return ServiceResult.failure(
                op, "UNKNOWN_PAGE", str(exc), page=exc.page_id, known=exc.known
            )
        return ServiceResult.failure(
            op,
            "MISSING_RESOURCE",
            str(exc),
            fragment=exc.name,
            path=str(exc.path),
        )

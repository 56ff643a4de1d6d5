"""CheckService — site integrity checking.

Single command following the linter pattern. Three categories:
missing fragments, broken local links, dangling in-page anchors.
Nothing is modified.
"""

from __future__ import annotations

from typing import Any

from dmcsite.domain.errors import MissingResourceError
from dmcsite.domain.fragments import FOOTER, HEADER, Fragment
from dmcsite.domain.links import extract_anchor_targets, extract_links
from dmcsite.services.base import BaseService
from dmcsite.services.result import ServiceResult
from dmcsite.services.telemetry import trace_span, traced

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"

CAT_FRAGMENTS = "missing_fragment"
CAT_LINKS = "broken_link"
CAT_ANCHORS = "dangling_anchor"

_SEVERITY_RANK = {SEVERITY_WARNING: 0, SEVERITY_ERROR: 1}


def _issue(category: str, severity: str, message: str, **extra: Any) -> dict[str, Any]:
    return {"category": category, "severity": severity, "message": message, **extra}


class CheckService(BaseService):
    """Reports problems that would break a build or a built page."""

    @traced
    def check(self, *, min_severity: str = SEVERITY_WARNING) -> ServiceResult:
        """Report integrity issues at or above *min_severity*."""
        issues: list[dict[str, Any]] = []

        with trace_span("shared_fragments"):
            shared = self._load_shared(issues)

        for page_id in self._site.page_ids:
            with trace_span(f"page:{page_id}"):
                issues.extend(self._check_page(page_id, shared))

        threshold = _SEVERITY_RANK[min_severity]
        issues = [i for i in issues if _SEVERITY_RANK[i["severity"]] >= threshold]

        error_count = sum(1 for i in issues if i["severity"] == SEVERITY_ERROR)
        warning_count = len(issues) - error_count
        return ServiceResult(
            ok=True,
            op="check",
            data={
                "issues": issues,
                "count": len(issues),
                "error_count": error_count,
                "warning_count": warning_count,
                "healthy": error_count == 0,
            },
        )

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def _load_shared(self, issues: list[dict[str, Any]]) -> dict[str, Fragment | None]:
        """Read header and footer once, recording an error for each missing one."""
        fragments = self._site.settings.fragments
        shared: dict[str, Fragment | None] = {}
        for name, filename in ((HEADER, fragments.header), (FOOTER, fragments.footer)):
            try:
                shared[name] = self._site.read(self._site.fragment_path(filename), name)
            except (MissingResourceError, ValueError) as exc:
                shared[name] = None
                issues.append(
                    _issue(
                        CAT_FRAGMENTS,
                        SEVERITY_ERROR,
                        str(exc),
                        fragment=name,
                        path=self._configured_path(filename),
                    )
                )
        return shared

    def _configured_path(self, filename: str) -> str:
        """Fragment location as configured, without the site-root guard."""
        return str(self._site.root / self._site.settings.fragments.directory / filename)

    def _check_page(self, page_id: str, shared: dict[str, Fragment | None]) -> list[dict[str, Any]]:
        page = self._site.resolve_page(page_id)
        path = self._configured_path(page.body)
        try:
            body = self._site.read(self._site.body_path(page), page_id)
        except (MissingResourceError, ValueError) as exc:
            return [
                _issue(
                    CAT_FRAGMENTS,
                    SEVERITY_ERROR,
                    str(exc),
                    fragment=page_id,
                    page=page_id,
                    path=path,
                )
            ]

        fragments = [f for f in (shared[HEADER], body, shared[FOOTER]) if f is not None]
        document = "".join(f.text for f in fragments)
        targets = extract_anchor_targets(document)
        issues: list[dict[str, Any]] = []
        seen: set[str] = set()

        for fragment in fragments:
            for link in extract_links(fragment.text):
                key = f"{fragment.name}:{link.target}"
                if key in seen:
                    continue
                seen.add(key)
                if link.kind == "anchor":
                    anchor = link.target[1:]
                    if anchor and anchor not in targets:
                        issues.append(
                            _issue(
                                CAT_ANCHORS,
                                SEVERITY_WARNING,
                                f"No anchor named {anchor!r}",
                                page=page_id,
                                fragment=fragment.name,
                                target=link.target,
                            )
                        )
                elif link.kind == "local" and not self._local_target_exists(link.local_path):
                    issues.append(
                        _issue(
                            CAT_LINKS,
                            SEVERITY_WARNING,
                            f"Linked file not found: {link.local_path}",
                            page=page_id,
                            fragment=fragment.name,
                            target=link.target,
                        )
                    )
        return issues

    def _local_target_exists(self, target: str) -> bool:
        """True if *target* is a built page, a site file, or a fragment-dir file."""
        if not target:
            return True
        extension = self._site.settings.build.extension
        built_names = {f"{page_id}{extension}" for page_id in self._site.page_ids}
        if target in built_names:
            return True
        candidates = (self._site.root / target, self._site.fragments_dir / target)
        return any(p.exists() for p in candidates)

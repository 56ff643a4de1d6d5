"""Link extraction — ``href``/``src`` references and anchor targets in markup.

Pure functions over fragment text. Consumed by the check service to
find broken local links, missing artifacts, and dangling in-page anchors.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

LinkKind = Literal["external", "anchor", "local"]

# href="..." / src='...': attribute name and quoted value.
_REF_PATTERN = re.compile(r"""\b(href|src)\s*=\s*(["'])(.*?)\2""", re.IGNORECASE | re.DOTALL)

# <a name="x"> or id="x": targets for #x anchors.
_TARGET_PATTERN = re.compile(r"""\b(?:name|id)\s*=\s*(["'])(.*?)\1""", re.IGNORECASE)

_SCHEME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


@dataclass(frozen=True)
class Link:
    """A reference extracted from fragment markup."""

    attribute: str  # "href" or "src"
    target: str

    @property
    def kind(self) -> LinkKind:
        return classify(self.target)

    @property
    def local_path(self) -> str:
        """Target with any query string or fragment removed."""
        return re.split(r"[?#]", self.target, maxsplit=1)[0]


def classify(target: str) -> LinkKind:
    """Classify a link target.

    Examples:
        >>> classify("http://www.wm.edu")
        'external'
        >>> classify("#top")
        'anchor'
        >>> classify("images/tabs.jpg")
        'local'
    """
    if target.startswith("//") or _SCHEME_PATTERN.match(target):
        return "external"
    if target.startswith("#"):
        return "anchor"
    return "local"


def extract_links(text: str) -> list[Link]:
    """Extract all ``href`` and ``src`` references from *text*.

    Empty targets are skipped.
    """
    results: list[Link] = []
    for match in _REF_PATTERN.finditer(text):
        target = match.group(3).strip()
        if not target:
            continue
        results.append(Link(attribute=match.group(1).lower(), target=target))
    return results


def extract_anchor_targets(text: str) -> set[str]:
    """Collect every ``name=`` and ``id=`` value defined in *text*."""
    return {m.group(2) for m in _TARGET_PATTERN.finditer(text)}

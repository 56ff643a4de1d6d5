"""Fragments and the page assembler.

A page is ``header + body + footer``, concatenated in that order with
no alteration of the fragment text. Pure functions, no file I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

HEADER = "header"
FOOTER = "footer"


@dataclass(frozen=True)
class Fragment:
    """A static block of markup, read verbatim."""

    name: str  # "header", "footer", or the page id for bodies
    path: Path
    text: str


@dataclass(frozen=True)
class Page:
    """A logical page and the body fragment it maps to."""

    page_id: str
    body: str  # fragment filename, relative to the fragments directory


def assemble(header: Fragment, body: Fragment, footer: Fragment) -> str:
    """Concatenate *header*, *body*, *footer* into one document.

    Examples:
        >>> h = Fragment("header", Path("h"), "<H>")
        >>> b = Fragment("index", Path("b"), "<B>")
        >>> f = Fragment("footer", Path("f"), "<F>")
        >>> assemble(h, b, f)
        '<H><B><F>'
    """
    return header.text + body.text + footer.text

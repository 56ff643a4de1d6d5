"""Exceptions raised while locating page resources."""

from __future__ import annotations

from pathlib import Path


class MissingResourceError(FileNotFoundError):
    """A header, footer, or body fragment could not be located or read."""

    def __init__(self, name: str, path: Path, reason: str | None = None) -> None:
        self.name = name
        self.path = path
        self.reason = reason
        msg = f"Missing {name} fragment: {path}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class UnknownPageError(KeyError):
    """A page id that has no configured body fragment."""

    def __init__(self, page_id: str, known: list[str]) -> None:
        self.page_id = page_id
        self.known = known
        super().__init__(page_id)

    def __str__(self) -> str:
        return f"Unknown page {self.page_id!r} (known: {', '.join(self.known)})"

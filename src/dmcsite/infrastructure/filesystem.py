"""Filesystem operations for fragments and built documents.

INVARIANT: Fragments are read verbatim. No newline translation, no
decoding fallbacks, no stripping. Whatever bytes the author wrote are
what the assembler concatenates.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from dmcsite.domain.errors import MissingResourceError
from dmcsite.domain.fragments import Fragment

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Fragment I/O
# ---------------------------------------------------------------------------


def read_fragment(path: Path, *, name: str, encoding: str = "utf-8") -> Fragment:
    """Read a fragment from *path* without altering its text.

    Raises:
        MissingResourceError: The file is absent, is not a regular file,
            or cannot be read or decoded with *encoding*.
    """
    if not path.is_file():
        raise MissingResourceError(name, path)
    try:
        # newline="" disables universal-newline translation so CRLF survives.
        with path.open("r", encoding=encoding, newline="") as fh:
            text = fh.read()
    except (OSError, UnicodeDecodeError, LookupError) as exc:
        raise MissingResourceError(name, path, reason=str(exc)) from exc
    logger.debug("Read %s fragment: %s (%d chars)", name, path, len(text))
    return Fragment(name=name, path=path, text=text)


def write_document(path: Path, document: str, *, encoding: str = "utf-8") -> int:
    """Write an assembled document to *path*, returning the byte count.

    Creates parent directories if they don't exist.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    data = document.encode(encoding)
    path.write_bytes(data)
    return len(data)


# ---------------------------------------------------------------------------
# Path resolution
# ---------------------------------------------------------------------------


def resolve_within(root: Path, relative: str) -> Path:
    """Resolve *relative* under *root*, refusing paths that escape it."""
    result = root / relative
    if not result.resolve().is_relative_to(root.resolve()):
        msg = f"Path escapes site root: {result}"
        raise ValueError(msg)
    return result


# ---------------------------------------------------------------------------
# Assets
# ---------------------------------------------------------------------------


def copy_asset(src: Path, dest: Path) -> int:
    """Copy a file or directory tree from *src* to *dest*.

    Returns the number of files copied. Existing files at *dest* are
    overwritten.
    """
    if src.is_dir():
        shutil.copytree(src, dest, dirs_exist_ok=True)
        return sum(1 for p in dest.rglob("*") if p.is_file())
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(src, dest)
    return 1

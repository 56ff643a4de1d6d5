"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, dmcsite.toml only contains
overrides. A fresh site needs nothing but the fragments on disk.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

DEFAULT_PAGES: dict[str, str] = {
    "index": "index.html",
    "download": "download.html",
    "userguide": "userguide.html",
}

DEFAULT_ASSETS: tuple[str, ...] = (
    "images",
    "thesis.pdf",
    "presentation.ppt",
    "src.tar.gz",
    "dmcview.tar.gz",
)


# --- dmcsite.toml sections ---


class SiteConfig(BaseModel):
    """[site] section."""

    model_config = {"frozen": True}

    title: str = "dmcView"
    author: str = "Ian Terrell"


class FragmentsConfig(BaseModel):
    """[fragments] section."""

    model_config = {"frozen": True}

    directory: str = "."
    header: str = "header.html"
    footer: str = "footer.html"
    encoding: str = "utf-8"


class BuildConfig(BaseModel):
    """[build] section."""

    model_config = {"frozen": True}

    output_dir: str = "public"
    extension: str = ".html"
    assets: list[str] = Field(default_factory=lambda: list(DEFAULT_ASSETS))

    @field_validator("extension")
    @classmethod
    def _dotted(cls, value: str) -> str:
        if value and not value.startswith("."):
            return f".{value}"
        return value

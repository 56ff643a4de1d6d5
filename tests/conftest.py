"""Shared pytest fixtures and test helpers for dmcsite tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from dmcsite.config.settings import SiteSettings
from dmcsite.infrastructure.site import Site
from dmcsite.services.telemetry import _current_span, disable_telemetry

HEADER = '<html><body><a name="top"></a>\n<div class="menu"><a href="index.html">home</a></div>\n'
FOOTER = "\n<div class=\"footer\">&copy; 2004 Ian Terrell</div>\n</body></html>\n"
BODIES = {
    "index": '<h2 class="subheadline">homepage</h2>\n<p>Diffusion Monte Carlo.</p>\n',
    "download": '<h2 class="subheadline">download</h2>\n<a href="thesis.pdf">thesis.pdf</a>\n',
    "userguide": '<h2>user guide</h2>\n<div class="totop"><a href="#top">Back to Top</a></div>\n',
}


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """AppContext enables telemetry under -v; keep it from leaking between tests."""
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def site_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary site directory with header, footer, and all three bodies.

    This is the single source of truth for the test site layout.
    """
    monkeypatch.delenv("DMCSITE_CONFIG", raising=False)
    (tmp_path / "header.html").write_text(HEADER, encoding="utf-8")
    (tmp_path / "footer.html").write_text(FOOTER, encoding="utf-8")
    for page_id, body in BODIES.items():
        (tmp_path / f"{page_id}.html").write_text(body, encoding="utf-8")
    return tmp_path


@pytest.fixture
def site(site_root: Path) -> Site:
    """Site over the temporary layout with default settings."""
    return Site(SiteSettings.from_cli(site_root=site_root))


@pytest.fixture
def _isolated_site(site_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp site root so the CLI picks it up.

    Use via ``@pytest.mark.usefixtures("_isolated_site")`` on command test classes.
    """
    monkeypatch.chdir(site_root)


@pytest.fixture
def fragment_text() -> dict[str, str]:
    """The exact text written by ``site_root``, keyed by fragment name."""
    return {"header": HEADER, "footer": FOOTER, **BODIES}

"""Tests for the render command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from dmcsite.cli import cli


@pytest.mark.usefixtures("_isolated_site")
class TestRenderCommand:
    def test_prints_document_verbatim(
        self, cli_runner: CliRunner, fragment_text: dict[str, str]
    ) -> None:
        result = cli_runner.invoke(cli, ["render", "index"])
        assert result.exit_code == 0
        expected = fragment_text["header"] + fragment_text["index"] + fragment_text["footer"]
        assert result.stdout == expected

    def test_json_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "render", "download"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["data"]["page"] == "download"
        assert "thesis.pdf" in data["data"]["document"]

    def test_output_file(self, cli_runner: CliRunner, site_root: Path) -> None:
        result = cli_runner.invoke(cli, ["render", "userguide", "-o", "out/guide.html"])
        assert result.exit_code == 0
        assert "render_to_file" in result.output
        assert (site_root / "out" / "guide.html").is_file()

    def test_missing_fragment_fails(self, cli_runner: CliRunner, site_root: Path) -> None:
        (site_root / "footer.html").unlink()
        result = cli_runner.invoke(cli, ["render", "index"])
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "footer" in result.stderr

    def test_unknown_page_fails(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "render", "applet"])
        assert result.exit_code == 1
        data = json.loads(result.stderr)
        assert data["error"]["code"] == "UNKNOWN_PAGE"

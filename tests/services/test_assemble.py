"""Tests for AssembleService — render, build, list."""

from __future__ import annotations

from pathlib import Path

import pytest

from dmcsite.config.settings import SiteSettings
from dmcsite.infrastructure.site import Site
from dmcsite.services.assemble import AssembleService

PAGES = ["index", "download", "userguide"]


class TestRenderPage:
    @pytest.mark.parametrize("page_id", PAGES)
    def test_header_body_footer(
        self, site: Site, fragment_text: dict[str, str], page_id: str
    ) -> None:
        result = AssembleService(site).render_page(page_id)
        assert result.ok, result.error
        assert result.op == "render_page"
        doc = result.data["document"]
        assert doc == fragment_text["header"] + fragment_text[page_id] + fragment_text["footer"]
        assert doc.startswith(fragment_text["header"])
        assert doc.endswith(fragment_text["footer"])
        assert result.data["bytes"] == len(doc.encode("utf-8"))

    @pytest.mark.parametrize("page_id", PAGES)
    def test_render_twice_identical(self, site: Site, page_id: str) -> None:
        svc = AssembleService(site)
        assert svc.render_page(page_id).data["document"] == svc.render_page(page_id).data[
            "document"
        ]

    def test_literal_scenario(self, site_root: Path, site: Site) -> None:
        (site_root / "header.html").write_text("<H>", encoding="utf-8")
        (site_root / "index.html").write_text("<B>", encoding="utf-8")
        (site_root / "footer.html").write_text("<F>", encoding="utf-8")
        result = AssembleService(site).render_page("index")
        assert result.data["document"] == "<H><B><F>"

    def test_crlf_and_whitespace_preserved(self, site_root: Path, site: Site) -> None:
        (site_root / "header.html").write_bytes(b"<H>\r\n")
        (site_root / "index.html").write_bytes(b"  <B>\t\r\n\r\n")
        (site_root / "footer.html").write_bytes(b"<F>  ")
        result = AssembleService(site).render_page("index")
        assert result.data["document"] == "<H>\r\n  <B>\t\r\n\r\n<F>  "

    def test_missing_body(self, site_root: Path, site: Site) -> None:
        (site_root / "download.html").unlink()
        result = AssembleService(site).render_page("download")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "MISSING_RESOURCE"
        assert result.error.detail["fragment"] == "download"
        assert result.data == {}

    def test_missing_footer(self, site_root: Path, site: Site) -> None:
        (site_root / "footer.html").unlink()
        result = AssembleService(site).render_page("index")
        assert result.error is not None
        assert result.error.code == "MISSING_RESOURCE"
        assert result.error.detail["fragment"] == "footer"

    def test_unknown_page(self, site: Site) -> None:
        result = AssembleService(site).render_page("applet")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNKNOWN_PAGE"
        assert result.error.detail["known"] == PAGES

    def test_fragment_outside_root(self, site_root: Path) -> None:
        (site_root / "dmcsite.toml").write_text('[pages]\nindex = "../../secret.html"\n')
        site = Site(SiteSettings.from_cli(site_root=site_root))
        result = AssembleService(site).render_page("index")
        assert result.error is not None
        assert result.error.code == "INVALID_PATH"

    def test_unknown_encoding(self, site_root: Path) -> None:
        (site_root / "dmcsite.toml").write_text('[fragments]\nencoding = "no-such-codec"\n')
        site = Site(SiteSettings.from_cli(site_root=site_root))
        result = AssembleService(site).render_page("index")
        assert result.error is not None
        assert result.error.code == "MISSING_RESOURCE"
        assert result.error.detail["fragment"] == "header"


class TestRenderToFile:
    def test_writes_document(self, site: Site, tmp_path: Path) -> None:
        dest = tmp_path / "out" / "index.html"
        result = AssembleService(site).render_to_file("index", dest)
        assert result.ok
        assert result.op == "render_to_file"
        assert dest.read_text(encoding="utf-8") == (
            AssembleService(site).render_page("index").data["document"]
        )
        assert result.data["bytes"] == dest.stat().st_size

    def test_failure_writes_nothing(self, site_root: Path, site: Site, tmp_path: Path) -> None:
        (site_root / "index.html").unlink()
        dest = tmp_path / "out" / "index.html"
        result = AssembleService(site).render_to_file("index", dest)
        assert not result.ok
        assert result.op == "render_to_file"
        assert not dest.exists()

    def test_refuses_to_overwrite_fragment(self, site_root: Path, site: Site) -> None:
        before = (site_root / "index.html").read_text(encoding="utf-8")
        result = AssembleService(site).render_to_file("download", site_root / "index.html")
        assert result.error is not None
        assert result.error.code == "INVALID_PATH"
        assert (site_root / "index.html").read_text(encoding="utf-8") == before


class TestBuildSite:
    def test_builds_all_pages(self, site: Site, site_root: Path) -> None:
        result = AssembleService(site).build_site()
        assert result.ok, result.error
        out = site_root / "public"
        assert result.data["count"] == 3
        assert result.data["output_dir"] == str(out.resolve())
        for page_id in PAGES:
            rendered = AssembleService(site).render_page(page_id).data["document"]
            assert (out / f"{page_id}.html").read_text(encoding="utf-8") == rendered

    def test_custom_output_and_subset(self, site: Site, tmp_path: Path) -> None:
        out = tmp_path / "dist"
        result = AssembleService(site).build_site(out, pages=["download"])
        assert result.data["count"] == 1
        assert [p.name for p in out.iterdir()] == ["download.html"]

    def test_missing_body_writes_nothing(self, site_root: Path, site: Site) -> None:
        (site_root / "userguide.html").unlink()
        result = AssembleService(site).build_site()
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "MISSING_RESOURCE"
        assert not (site_root / "public").exists()

    def test_unknown_page_writes_nothing(self, site_root: Path, site: Site) -> None:
        result = AssembleService(site).build_site(pages=["index", "applet"])
        assert result.error is not None
        assert result.error.code == "UNKNOWN_PAGE"
        assert not (site_root / "public").exists()

    def test_extension_from_config(self, site_root: Path) -> None:
        (site_root / "dmcsite.toml").write_text('[build]\nextension = "htm"\n')
        site = Site(SiteSettings.from_cli(site_root=site_root))
        AssembleService(site).build_site()
        assert (site_root / "public" / "index.htm").is_file()

    def test_copy_assets(self, site_root: Path, site: Site) -> None:
        (site_root / "thesis.pdf").write_bytes(b"%PDF")
        images = site_root / "images"
        images.mkdir()
        (images / "tabs.jpg").write_bytes(b"jpg")
        result = AssembleService(site).build_site(copy_assets=True)
        assert result.ok
        assert result.data["assets_copied"] == 2
        assert (site_root / "public" / "thesis.pdf").read_bytes() == b"%PDF"
        assert (site_root / "public" / "images" / "tabs.jpg").is_file()
        assert "Asset not found: src.tar.gz" in result.warnings

    def test_output_over_directory_writes_nothing(self, site_root: Path, site: Site) -> None:
        out = site_root / "public"
        (out / "userguide.html").mkdir(parents=True)
        result = AssembleService(site).build_site()
        assert result.error is not None
        assert result.error.code == "WRITE_FAILED"
        assert result.error.detail["page"] == "userguide"
        assert [p.name for p in out.iterdir()] == ["userguide.html"]

    def test_write_error_rolls_back(
        self, site_root: Path, site: Site, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        from dmcsite.services import assemble as assemble_module

        real_write = assemble_module.write_document

        def flaky_write(path: Path, document: str, *, encoding: str = "utf-8") -> int:
            if path.name == "userguide.html":
                raise OSError(28, "No space left on device")
            return real_write(path, document, encoding=encoding)

        monkeypatch.setattr(assemble_module, "write_document", flaky_write)
        result = AssembleService(site).build_site()
        assert result.error is not None
        assert result.error.code == "WRITE_FAILED"
        assert "No space left" in result.error.message
        assert not (site_root / "public").exists()

    def test_rollback_keeps_existing_output(
        self, site_root: Path, site: Site, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        from dmcsite.services import assemble as assemble_module

        out = site_root / "public"
        out.mkdir()
        (out / "index.html").write_text("old build", encoding="utf-8")

        def failing_write(path: Path, document: str, *, encoding: str = "utf-8") -> int:
            raise OSError(13, "Permission denied")

        monkeypatch.setattr(assemble_module, "write_document", failing_write)
        result = AssembleService(site).build_site()
        assert not result.ok
        assert (out / "index.html").read_text(encoding="utf-8") == "old build"

    def test_refuses_output_onto_fragments(self, site_root: Path, site: Site) -> None:
        before = {p.name: p.read_bytes() for p in site_root.iterdir()}
        result = AssembleService(site).build_site(site_root)
        assert result.error is not None
        assert result.error.code == "INVALID_PATH"
        assert "index.html" in result.error.message
        assert {p.name: p.read_bytes() for p in site_root.iterdir()} == before

    def test_assets_already_in_place_are_skipped(self, site_root: Path) -> None:
        frag_dir = site_root / "fragments"
        frag_dir.mkdir()
        for name in ("header.html", "footer.html", *(f"{p}.html" for p in PAGES)):
            (site_root / name).rename(frag_dir / name)
        (site_root / "dmcsite.toml").write_text('[fragments]\ndirectory = "fragments"\n')
        (site_root / "thesis.pdf").write_bytes(b"%PDF")
        (site_root / "images").mkdir()
        (site_root / "images" / "tabs.jpg").write_bytes(b"jpg")
        site = Site(SiteSettings.from_cli(site_root=site_root))

        result = AssembleService(site).build_site(site_root, copy_assets=True)
        assert result.ok, result.error
        assert result.data["assets_copied"] == 0
        assert (site_root / "thesis.pdf").read_bytes() == b"%PDF"
        assert (site_root / "index.html").is_file()
        assert not any(w.startswith("Asset not copied") for w in result.warnings)

    def test_asset_copy_error_becomes_warning(self, site_root: Path, site: Site) -> None:
        (site_root / "images").mkdir()
        (site_root / "images" / "tabs.jpg").write_bytes(b"jpg")
        (site_root / "thesis.pdf").write_bytes(b"%PDF")
        out = site_root / "public"
        out.mkdir()
        (out / "images").write_text("not a directory", encoding="utf-8")

        result = AssembleService(site).build_site(copy_assets=True)
        assert result.ok
        assert result.data["assets_copied"] == 1
        assert any(w.startswith("Asset not copied: images") for w in result.warnings)
        assert (out / "thesis.pdf").read_bytes() == b"%PDF"


class TestListPages:
    def test_lists_configured_pages(self, site_root: Path, site: Site) -> None:
        (site_root / "download.html").unlink()
        result = AssembleService(site).list_pages()
        assert result.ok
        assert result.data["count"] == 3
        by_id = {item["id"]: item for item in result.data["items"]}
        assert by_id["index"] == {"id": "index", "body": "index.html", "exists": True}
        assert by_id["download"]["exists"] is False

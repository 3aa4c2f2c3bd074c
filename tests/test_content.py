from pathlib import Path

import pytest

from pagesmith.config import SiteConfig
from pagesmith.content import (
    ContentUnit,
    LayoutResolver,
    MenuEntry,
    PageModelBuilder,
    discover_content,
)
from pagesmith.errors import ContentReadError, MarkdownParseError
from pagesmith.renderers import MarkdownRenderer


def create_pages(tmp_path: Path) -> Path:
    pages = tmp_path / "pages"
    (pages / "about").mkdir(parents=True)
    (pages / "blog" / "2024").mkdir(parents=True)
    (pages / "index.md").write_text(
        "<!--\ntitle = Home\nlayout = default\nmenu = nav\n-->\n# Hi\n", encoding="utf-8"
    )
    (pages / "notes.txt").write_text("ignored", encoding="utf-8")
    (pages / "about" / "index.md").write_text("About body", encoding="utf-8")
    (pages / "blog" / "index.MD").write_text(
        "<!--\ntitle = Blog\nmenu = nav\nlayout = wide\n-->\nPosts", encoding="utf-8"
    )
    (pages / "blog" / "2024" / "first.md").write_text(
        "<!--\nmenu = nav\n-->\nFirst post", encoding="utf-8"
    )
    return pages


def create_layouts(tmp_path: Path) -> Path:
    layouts = tmp_path / "layouts"
    layouts.mkdir()
    (layouts / "default.html").write_text("{{ content }}", encoding="utf-8")
    (layouts / "wide.html").write_text("{{ content }}", encoding="utf-8")
    return layouts


def test_discovery_order_and_site_paths(tmp_path):
    pages = create_pages(tmp_path)
    units = list(discover_content(pages))
    assert [(u.site_path, u.filename) for u in units] == [
        ("", "index.md"),
        ("about", "index.md"),
        ("blog", "index.MD"),
        ("blog/2024", "first.md"),
    ]
    assert units[0].source_path == pages / "index.md"
    assert units[1].raw_text == "About body"


def test_discovery_is_restartable(tmp_path):
    pages = create_pages(tmp_path)
    first = [u.relative_name for u in discover_content(pages)]
    second = [u.relative_name for u in discover_content(pages)]
    assert first == second


def test_discovery_missing_root(tmp_path):
    with pytest.raises(ContentReadError):
        list(discover_content(tmp_path / "nope"))


def test_discovery_unreadable_file(tmp_path):
    pages = tmp_path / "pages"
    pages.mkdir()
    (pages / "bad.md").write_bytes(b"\xff\xfe\xfa not utf-8")
    with pytest.raises(ContentReadError) as excinfo:
        list(discover_content(pages))
    assert "bad.md" in excinfo.value.message


def test_layout_resolution(tmp_path):
    resolver = LayoutResolver(create_layouts(tmp_path))
    assert resolver.resolve(None) == "default.html"
    assert resolver.resolve("") == "default.html"
    assert resolver.resolve("wide") == "wide.html"
    assert resolver.resolve("missing") == "default.html"


def test_build_model(tmp_path):
    pages = create_pages(tmp_path)
    layouts = create_layouts(tmp_path)
    config = SiteConfig({"site": {"base_url": "http://example.com"}})
    model = PageModelBuilder(config, layouts, MarkdownRenderer()).build(
        discover_content(pages)
    )

    assert list(model.pages) == ["", "about", "blog", "blog/2024"]

    home = model.pages[""]
    assert home.title == "Home"
    assert home.layout == "default.html"
    assert "<h1>Hi</h1>" in home.content
    assert home.output_path == "index.html"

    about = model.pages["about"]
    assert about.title == "Index"
    assert about.layout == "default.html"
    assert about.output_path == "about/index.html"

    blog = model.pages["blog"]
    assert blog.layout == "wide.html"
    assert blog.output_name == "index.html"

    first = model.pages["blog/2024"]
    assert first.title == "First"

    assert model.nav == [
        MenuEntry("Home", ""),
        MenuEntry("Blog", "blog"),
        MenuEntry("First", "blog/2024"),
    ]
    assert model.skipped == []


def test_named_menus_and_empty_menu(tmp_path):
    pages = tmp_path / "pages"
    pages.mkdir()
    (pages / "a.md").write_text("<!--\nmenu = footer\n-->\nA", encoding="utf-8")
    (pages / "sub").mkdir()
    (pages / "sub" / "b.md").write_text("<!--\nmenu =\n-->\nB", encoding="utf-8")
    model = PageModelBuilder(SiteConfig(), tmp_path, MarkdownRenderer()).build(
        discover_content(pages)
    )
    assert model.menus == {"nav": [], "footer": [MenuEntry("A", "")]}


def test_same_site_path_last_wins(tmp_path):
    pages = tmp_path / "pages"
    (pages / "docs").mkdir(parents=True)
    (pages / "docs" / "alpha.md").write_text("Alpha", encoding="utf-8")
    (pages / "docs" / "beta.md").write_text("Beta", encoding="utf-8")
    (pages / "zeta.md").write_text("Zeta", encoding="utf-8")
    model = PageModelBuilder(SiteConfig(), tmp_path, MarkdownRenderer()).build(
        discover_content(pages)
    )
    assert list(model.pages) == ["", "docs"]
    assert model.pages["docs"].title == "Beta"
    assert model.pages["docs"].output_name == "beta.html"


class FailingConverter:
    def to_html(self, markdown_text, link_aliases=None):
        if "explode" in markdown_text:
            raise MarkdownParseError("<markdown>", "cannot convert")
        return f"<p>{markdown_text.strip()}</p>"


def test_conversion_failure_skips_only_that_page(tmp_path):
    pages = tmp_path / "pages"
    (pages / "bad").mkdir(parents=True)
    (pages / "index.md").write_text("<!--\nmenu = nav\n-->\nfine", encoding="utf-8")
    (pages / "bad" / "index.md").write_text(
        "<!--\nmenu = nav\n-->\nexplode", encoding="utf-8"
    )
    model = PageModelBuilder(SiteConfig(), tmp_path, FailingConverter()).build(
        discover_content(pages)
    )
    assert list(model.pages) == [""]
    assert model.pages[""].content == "<p>fine</p>"
    assert model.nav == [MenuEntry("Index", "")]
    assert model.skipped == ["Skip bad/index.md: cannot convert"]


def test_malformed_front_matter_is_skipped(tmp_path):
    unit = ContentUnit(
        source_path=tmp_path / "x.md", site_path="", raw_text="<!--\n[oops\n-->\nbody"
    )
    model = PageModelBuilder(SiteConfig(), tmp_path, MarkdownRenderer()).build([unit])
    assert model.pages == {}
    assert model.skipped[0].startswith("Skip x.md: Invalid front matter")


def test_base_url_alias_reaches_converter(tmp_path):
    seen = {}

    class RecordingConverter:
        def to_html(self, markdown_text, link_aliases=None):
            seen.update(link_aliases or {})
            return markdown_text

    unit = ContentUnit(source_path=tmp_path / "index.md", site_path="", raw_text="x")
    config = SiteConfig({"site": {"base_url": "http://localhost:8000"}})
    PageModelBuilder(config, tmp_path, RecordingConverter()).build([unit])
    assert seen == {"base_url": "http://localhost:8000"}

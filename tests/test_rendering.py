"""Tests for Markdown rendering, source listings and example parsing."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from impact_pages.config import DEFAULT_TEMPLATE_DIR, BrandingConfig
from impact_pages.doclets import Doclet, SourceFile, TutorialNode
from impact_pages.errors import TemplateNotFoundError, handle
from impact_pages.generator import HtmlContentRenderer, LinkRegistry, PageWriter
from impact_pages.generator.page_writer import build_environment
from impact_pages.generator.publisher import parse_example, url_fragment_id


@pytest.fixture
def renderer() -> HtmlContentRenderer:
    """Return a default-styled renderer."""
    return HtmlContentRenderer()


@pytest.fixture
def writer(tmp_path: Path, renderer: HtmlContentRenderer) -> PageWriter:
    """Return a page writer with minimal shared context."""
    registry = LinkRegistry()
    registry.register_link("ig.Entity", "ig.Entity.html")
    context = {
        "nav": "",
        "nav_docs": "",
        "breadcrumb": "",
        "branding": BrandingConfig(),
        "pygments_css": "",
        "output_source_files": False,
        "find": lambda **_criteria: [],
        "linkto": registry.linkto,
        "url_for": registry.url_for,
        "tutoriallink": registry.tutorial_link,
        "resolve_author_links": str,
    }
    return PageWriter(
        build_environment(DEFAULT_TEMPLATE_DIR), registry, tmp_path, renderer, context=context
    )


@pytest.mark.parametrize(
    ("example", "caption", "code"),
    [
        ("<caption>Basic use</caption>\nfoo();", "Basic use", "foo();"),
        ("  <CAPTION>Multi\nline</CAPTION>\r\nbar();\nbaz();", "Multi\nline", "bar();\nbaz();"),
        ("foo();", "", "foo();"),
        ("<caption>No newline</caption> foo();", "", "<caption>No newline</caption> foo();"),
    ],
)
def test_parse_example(example: str, caption: str, code: str) -> None:
    parsed = parse_example(example)
    assert (parsed.caption, parsed.code) == (caption, code)


def test_url_fragment_id() -> None:
    assert url_fragment_id("ig.Entity.html#update", "update") == "update"
    assert url_fragment_id("ig.Entity.html", "Entity") == "Entity"


def test_markdown_highlights_fenced_code(renderer: HtmlContentRenderer) -> None:
    html = renderer.markdown("Intro\n\n```js\nvar a = 1;\n```\n")
    soup = BeautifulSoup(html, "html.parser")
    assert soup.select_one(".codehilite") is not None
    assert renderer.markdown("   ") == ""
    assert ".codehilite" in renderer.stylesheet


def test_source_listing_has_line_anchors(renderer: HtmlContentRenderer) -> None:
    html = renderer.source_listing("var a = 1;\nvar b = 2;\n", "entity.js")
    soup = BeautifulSoup(html, "html.parser")
    block = soup.select_one("div.codehilite")
    assert block["data-language"] == "javascript"
    assert soup.find(id="line-2") is not None
    plain = renderer.source_listing("hello\n", "README.unknownext")
    assert 'data-language="text"' in plain


def test_missing_template_folder_raises(tmp_path: Path) -> None:
    with pytest.raises(TemplateNotFoundError):
        build_environment(tmp_path)


def test_generate_resolves_links_unless_disabled(writer: PageWriter) -> None:
    docs = [Doclet(kind="source", code="<pre>{@link ig.Entity}</pre>")]
    linked = writer.generate("Linked", docs, "linked.html")
    raw = writer.generate("Raw", docs, "raw.html", resolve_links=False)
    assert '<a href="ig.Entity.html">ig.Entity</a>' in linked.read_text(encoding="utf-8")
    assert "{@link ig.Entity}" in raw.read_text(encoding="utf-8")
    assert raw.read_text(encoding="utf-8").endswith("\n")


def test_generate_source_files_skips_unreadable(
    writer: PageWriter, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    readable = tmp_path / "ok.js"
    readable.write_text("var ok = true;\n", encoding="utf-8")
    files = {
        "ok": SourceFile(resolved=str(readable), shortened="ok.js"),
        "gone": SourceFile(resolved=str(tmp_path / "gone.js"), shortened="gone.js"),
    }
    with caplog.at_level(logging.WARNING, logger="impact_pages"):
        written = writer.generate_source_files(files)
    assert [path.name for path in written] == ["ok.js.html"]
    assert writer.registry.url_for("gone.js") == "gone.js.html"
    assert "gone.js" in caplog.text


def test_save_tutorials_is_depth_first(writer: PageWriter) -> None:
    child = TutorialNode(name="child", title="Child", content="Child body")
    parent = TutorialNode(name="parent", title="Parent", content="Parent", children=[child])
    sibling = TutorialNode(name="sibling", title="Sibling", content="<p>html</p>", content_type="html")
    written = writer.save_tutorials(TutorialNode(children=[parent, sibling]))
    assert [path.name for path in written] == [
        "tutorial-parent.html",
        "tutorial-child.html",
        "tutorial-sibling.html",
    ]


def test_handle_logs_and_returns(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="impact_pages"):
        handle(OSError("boom"), context="listing for a.js")
    assert "Skipping listing for a.js: boom" in caplog.text


def test_tutorial_pages_highlight_fenced_code(writer: PageWriter) -> None:
    tutorial = TutorialNode(
        name="camera",
        title="Camera",
        content="Follow the player:\n\n```js\nig.game.camera.follow(player);\n```\n",
    )
    page = writer.generate_tutorial("Tutorial: Camera", tutorial, "tutorial-camera.html")
    soup = BeautifulSoup(page.read_text(encoding="utf-8"), "html.parser")
    assert soup.select_one("div.codehilite") is not None, (
        "expected the tutorial's fenced block to be highlighted"
    )

"""Tests for building the tutorial tree from a folder of sources."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from impact_pages.doclets import load_tutorials
from impact_pages.errors import TutorialLoadError
from impact_pages.generator import HtmlContentRenderer


def _write(directory: Path, name: str, text: str) -> None:
    (directory / name).write_text(text, encoding="utf-8")


def test_missing_directory_yields_empty_root(tmp_path: Path) -> None:
    assert load_tutorials(tmp_path / "absent").children == []
    assert load_tutorials(None).children == []


def test_hierarchy_from_mapping_config(tmp_path: Path) -> None:
    _write(tmp_path, "basics.md", "# Basics\n")
    _write(tmp_path, "entities.md", "Entities\n")
    _write(tmp_path, "spawning.html", "<p>Spawning</p>")
    _write(tmp_path, "notes.txt", "ignored")
    _write(
        tmp_path,
        "tutorials.json",
        '{"basics": {"title": "The Basics", "children": '
        '{"entities": {"title": "Entities", "children": ["spawning"]}}}}',
    )
    root = load_tutorials(tmp_path)
    assert [child.name for child in root.children] == ["basics"]
    basics = root.children[0]
    assert basics.title == "The Basics"
    assert [child.name for child in basics.children] == ["entities"]
    assert root.find("spawning") is not None
    assert root.find("spawning").parse(HtmlContentRenderer()) == "<p>Spawning</p>"
    assert root.find("notes") is None


def test_single_tutorial_config_file(tmp_path: Path) -> None:
    _write(tmp_path, "intro.md", "Intro body with `code`.\n")
    _write(tmp_path, "intro.json", '{"title": "Introduction"}')
    root = load_tutorials(tmp_path)
    intro = root.find("intro")
    assert intro is not None and intro.title == "Introduction"
    assert "<code>code</code>" in intro.parse(HtmlContentRenderer())


def test_second_parent_is_ignored_with_warning(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    for name in ("a", "b", "shared"):
        _write(tmp_path, f"{name}.md", name)
    _write(
        tmp_path,
        "tutorials.json",
        '{"a": {"children": ["shared"]}, "b": {"children": ["shared"]}}',
    )
    with caplog.at_level(logging.WARNING, logger="impact_pages"):
        root = load_tutorials(tmp_path)
    parents = [node.name for node in root.children if node.find("shared")]
    assert parents == ["a"]
    assert "already has a parent" in caplog.text


def test_cycles_are_not_created(tmp_path: Path) -> None:
    _write(tmp_path, "a.md", "a")
    _write(tmp_path, "b.md", "b")
    _write(
        tmp_path,
        "tutorials.json",
        '{"a": {"children": ["b"]}, "b": {"children": ["a"]}}',
    )
    root = load_tutorials(tmp_path)
    assert [child.name for child in root.children] == ["a"]
    assert root.children[0].children[0].children == []


def test_invalid_json_raises(tmp_path: Path) -> None:
    _write(tmp_path, "tutorials.json", "{oops")
    with pytest.raises(TutorialLoadError):
        load_tutorials(tmp_path)


def test_markdown_tutorial_code_is_highlighted(tmp_path: Path) -> None:
    _write(
        tmp_path,
        "camera.md",
        "Follow the player:\n\n```js\nig.game.camera.follow(player);\n```\n",
    )
    camera = load_tutorials(tmp_path).find("camera")
    assert camera is not None
    html = camera.parse(HtmlContentRenderer())
    assert "codehilite" in html, "fenced tutorial code goes through Pygments"

"""Tests for loading the publish conf file and applying CLI overrides."""

from __future__ import annotations

from pathlib import Path

import pytest

from impact_pages.config import (
    DEFAULT_TEMPLATE_DIR,
    PublishConfigError,
    PublishOptions,
    load_publish_config,
)


def test_missing_path_returns_defaults() -> None:
    options = load_publish_config(None)
    assert options.destination == Path("out")
    assert options.template == DEFAULT_TEMPLATE_DIR
    assert options.mainpage_title == "Main Page"
    assert options.branding.folder_aliases == {"plusplus": "core"}
    assert options.templates.output_source_files is False


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_publish_config(tmp_path / "conf.yaml")


def test_yaml_conf_sections_are_parsed(tmp_path: Path) -> None:
    config_path = tmp_path / "conf.yaml"
    config_path.write_text(
        """
opts:
  destination: docs
  readme: README.md
  mainpagetitle: Impact++ Docs
  private: true
  tutorials: tutorials
templates:
  default:
    outputSourceFiles: true
    staticFiles:
      paths: [extra]
      excludePattern: "\\\\.tmp$"
branding:
  site_name: My Engine
  folder_aliases:
    plusplus: core
    abilities: skills
""".lstrip(),
        encoding="utf-8",
    )
    options = load_publish_config(config_path)
    assert options.destination == tmp_path / "docs"
    assert options.readme == tmp_path / "README.md"
    assert options.mainpage_title == "Impact++ Docs"
    assert options.include_private is True
    assert options.tutorials == tmp_path / "tutorials"
    assert options.templates.output_source_files is True
    assert options.templates.static_files.paths == [tmp_path / "extra"]
    assert options.templates.static_files.exclude_pattern == "\\.tmp$"
    assert options.branding.site_name == "My Engine"
    assert options.branding.folder_aliases["abilities"] == "skills"
    assert options.branding.excluded_namespace == "ig.CONFIG"


def test_json_conf_loads_unchanged(tmp_path: Path) -> None:
    config_path = tmp_path / "conf.json"
    config_path.write_text(
        '{"opts": {"destination": "./out"}, '
        '"templates": {"default": {"outputSourceFiles": false}}}',
        encoding="utf-8",
    )
    options = load_publish_config(config_path)
    assert options.destination == tmp_path / "out"
    assert options.templates.output_source_files is False


@pytest.mark.parametrize(
    "body",
    [
        "opts: [1, 2]\n",
        "templates:\n  default: 3\n",
        "branding:\n  folder_aliases: [a]\n",
        "templates:\n  default:\n    staticFiles:\n      paths: 4\n",
    ],
)
def test_malformed_sections_raise(tmp_path: Path, body: str) -> None:
    config_path = tmp_path / "conf.yaml"
    config_path.write_text(body, encoding="utf-8")
    with pytest.raises(PublishConfigError):
        load_publish_config(config_path)


def test_top_level_must_be_mapping(tmp_path: Path) -> None:
    config_path = tmp_path / "conf.yaml"
    config_path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(TypeError):
        load_publish_config(config_path)


def test_with_overrides_ignores_none_and_rejects_unknown() -> None:
    options = PublishOptions().with_overrides(
        destination=Path("site"), readme=None, output_source_files=True
    )
    assert options.destination == Path("site")
    assert options.readme is None
    assert options.templates.output_source_files is True
    with pytest.raises(PublishConfigError):
        options.with_overrides(colour="blue")


@pytest.mark.parametrize(
    "body",
    [
        'templates:\n  default:\n    outputSourceFiles: "false"\n',
        "templates:\n  default:\n    outputSourceFiles: 0\n",
        "opts:\n  private: yes\n",
    ],
)
def test_flags_must_be_booleans(tmp_path: Path, body: str) -> None:
    config_path = tmp_path / "conf.yaml"
    config_path.write_text(body, encoding="utf-8")
    with pytest.raises(PublishConfigError, match="must be true or false"):
        load_publish_config(config_path)


def test_absent_or_null_flags_default_to_false(tmp_path: Path) -> None:
    config_path = tmp_path / "conf.yaml"
    config_path.write_text(
        "opts:\n  private: null\ntemplates:\n  default:\n    outputSourceFiles: false\n",
        encoding="utf-8",
    )
    options = load_publish_config(config_path)
    assert options.include_private is False
    assert options.templates.output_source_files is False

"""Tests for the ``pages publish`` command."""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import pytest

from impact_pages import cli

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture

    from .conftest import SampleProject


def test_format_path_prefers_cwd_relative(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    assert cli._format_path(tmp_path / "out" / "index.html") == str(
        Path("out") / "index.html"
    )
    assert cli._format_path(Path("rel.html")) == "rel.html"


def test_publish_merges_config_and_overrides(
    sample_project: SampleProject,
    capsys: pytest.CaptureFixture[str],
    mocker: MockerFixture,
) -> None:
    basic_config = mocker.patch("impact_pages.cli.logging.basicConfig")
    config_path = sample_project.root / "conf.yaml"
    config_path.write_text(
        "opts:\n  destination: site\ntemplates:\n  default:\n    outputSourceFiles: true\n",
        encoding="utf-8",
    )
    cli.publish(
        sample_project.doclets_path,
        config=config_path,
        output_source_files=False,
        verbose=True,
    )
    out = sample_project.root / "site"
    assert (out / "ig.Entity.html").is_file()
    assert not (out / "entity.js.html").exists(), "CLI flag overrides the conf file"
    printed = capsys.readouterr().out.splitlines()
    assert printed, "expected one line per written page"
    assert all(line.startswith("wrote ") for line in printed)
    assert basic_config.call_args.kwargs["level"] == logging.DEBUG


def test_publish_missing_doclets(tmp_path: Path, mocker: MockerFixture) -> None:
    mocker.patch("impact_pages.cli.logging.basicConfig")
    with pytest.raises(FileNotFoundError):
        cli.publish(tmp_path / "missing.json", destination=tmp_path / "out")

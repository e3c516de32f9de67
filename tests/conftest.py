"""Shared fixtures describing a small Impact++ source tree and its doclets.

The ``sample_project`` fixture writes two JavaScript sources under
``tmp_path / "lib"`` (one in the ``plusplus`` folder, one in ``game``) and a
doclet JSON dump that references them by absolute ``meta.path``. The dump
covers every kind the publisher handles: namespaces (including the excluded
``ig.CONFIG`` sentinel), classes, an instance method that fires an event, a
typed member, a static constant, a global function, a module whose only export
is a class, plus private and undocumented records that pruning removes.
"""

from __future__ import annotations

import dataclasses as dc
import json
import typing as typ
from pathlib import Path

import pytest

from impact_pages.config import PublishOptions, TemplateConfig


@dc.dataclass(slots=True)
class SampleProject:
    """Paths of a generated sample project."""

    root: Path
    doclets_path: Path
    plusplus_dir: Path
    game_dir: Path
    records: list[dict[str, typ.Any]]

    def options(self, **overrides: typ.Any) -> PublishOptions:
        """Return publish options writing into ``root / "out"``."""
        base = PublishOptions(
            destination=self.root / "out",
            templates=TemplateConfig(output_source_files=True),
        )
        return base.with_overrides(**overrides)


def _meta(directory: Path, filename: str, lineno: int) -> dict[str, typ.Any]:
    return {"path": str(directory), "filename": filename, "lineno": lineno}


def sample_records(plusplus_dir: Path, game_dir: Path) -> list[dict[str, typ.Any]]:
    """Return doclet records for the sample sources."""
    return [
        {"kind": "namespace", "name": "ig", "longname": "ig", "scope": "global"},
        {
            "kind": "namespace",
            "name": "CONFIG",
            "longname": "ig.CONFIG",
            "memberof": "ig",
            "scope": "static",
            "meta": _meta(plusplus_dir, "entity.js", 1),
        },
        {
            "kind": "class",
            "name": "Entity",
            "longname": "ig.Entity",
            "memberof": "ig",
            "scope": "static",
            "description": "Base entity. Subclassed by {@link ig.Player}.",
            "params": [
                {"name": "settings", "type": {"names": ["Object"]}, "optional": True}
            ],
            "examples": [
                "<caption>Spawning</caption>\nig.game.spawnEntity(ig.Entity, 0, 0);"
            ],
            "author": ["Collin Hover <collin@example.com>"],
            "meta": _meta(plusplus_dir, "entity.js", 3),
        },
        {
            "kind": "function",
            "name": "update",
            "longname": "ig.Entity#update",
            "memberof": "ig.Entity",
            "scope": "instance",
            "returns": [{"type": {"names": ["Boolean"]}}],
            "fires": ["ig.Entity#event:killed"],
            "meta": _meta(plusplus_dir, "entity.js", 10),
        },
        {
            "kind": "event",
            "name": "killed",
            "longname": "ig.Entity#event:killed",
            "memberof": "ig.Entity",
            "scope": "instance",
            "meta": _meta(plusplus_dir, "entity.js", 14),
        },
        {
            "kind": "member",
            "name": "health",
            "longname": "ig.Entity#health",
            "memberof": "ig.Entity",
            "scope": "instance",
            "type": {"names": ["Number"]},
            "readonly": True,
            "meta": _meta(plusplus_dir, "entity.js", 6),
        },
        {
            "kind": "constant",
            "name": "MAX",
            "longname": "ig.Entity.MAX",
            "memberof": "ig.Entity",
            "scope": "static",
            "type": {"names": ["Number"]},
            "meta": _meta(plusplus_dir, "entity.js", 2),
        },
        {
            "kind": "member",
            "name": "_secret",
            "longname": "ig.Entity#_secret",
            "memberof": "ig.Entity",
            "scope": "instance",
            "access": "private",
        },
        {
            "kind": "function",
            "name": "hidden",
            "longname": "ig.Entity#hidden",
            "memberof": "ig.Entity",
            "undocumented": True,
        },
        {
            "kind": "class",
            "name": "Player",
            "longname": "ig.Player",
            "memberof": "ig",
            "scope": "static",
            "augments": ["ig.Entity"],
            "meta": _meta(game_dir, "player.js", 1),
        },
        {
            "kind": "function",
            "name": "spawn",
            "longname": "spawn",
            "scope": "global",
            "params": [{"name": "name", "type": {"names": ["String"]}}],
            "meta": _meta(game_dir, "player.js", 20),
        },
        {"kind": "module", "name": "utils", "longname": "module:utils"},
        {
            "kind": "class",
            "name": "module:utils",
            "longname": "module:utils",
            "description": "Utility bag exported as the module itself.",
        },
    ]


@pytest.fixture
def sample_project(tmp_path: Path) -> SampleProject:
    """Write sample sources plus their doclet dump and return their paths."""
    plusplus_dir = tmp_path / "lib" / "plusplus"
    game_dir = tmp_path / "lib" / "game"
    plusplus_dir.mkdir(parents=True)
    game_dir.mkdir(parents=True)
    (plusplus_dir / "entity.js").write_text(
        "ig.module('plusplus.entity').defines(function () {\n"
        "    // {@link ig.Player} stays literal in listings\n"
        "    ig.Entity = ig.Class.extend({});\n"
        "});\n",
        encoding="utf-8",
    )
    (game_dir / "player.js").write_text(
        "ig.Player = ig.Entity.extend({});\n", encoding="utf-8"
    )
    records = sample_records(plusplus_dir, game_dir)
    doclets_path = tmp_path / "doclets.json"
    doclets_path.write_text(json.dumps(records), encoding="utf-8")
    return SampleProject(
        root=tmp_path,
        doclets_path=doclets_path,
        plusplus_dir=plusplus_dir,
        game_dir=game_dir,
        records=records,
    )

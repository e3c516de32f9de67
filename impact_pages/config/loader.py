"""Load publish configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _build_branding,
    _build_static_files,
    _flag,
    _optional_str,
    _resolve_path,
    _section,
)
from .models import DEFAULT_TEMPLATE_DIR, PublishOptions, TemplateConfig


def load_publish_config(path: Path | None) -> PublishOptions:
    """Load the configuration describing a publish run.

    The file follows the documentation tool's conf layout: run options live
    under ``opts``, template switches under ``templates.default`` and the
    framework identity under ``branding``. YAML 1.2 is a superset of JSON, so
    existing ``conf.json`` files load unchanged.

    Parameters
    ----------
    path : Path or None
        Filesystem path to the configuration file. ``None`` returns defaults.

    Returns
    -------
    PublishOptions
        Parsed options with relative paths resolved against the directory
        containing the configuration file.

    Raises
    ------
    FileNotFoundError
        If ``path`` is given but does not exist.
    TypeError
        If the top-level structure is not a mapping.
    PublishConfigError
        If a section has the wrong shape or a switch such as
        ``outputSourceFiles`` or ``private`` is not a YAML boolean.

    Examples
    --------
    >>> from pathlib import Path
    >>> from impact_pages.config import load_publish_config
    >>> options = load_publish_config(Path("conf.yaml"))  # doctest: +SKIP
    >>> options.templates.output_source_files  # doctest: +SKIP
    True
    """
    if path is None:
        return PublishOptions()
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level configuration structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    base_dir = path.resolve().parent

    opts = _section(raw, "opts", where="config")
    templates = _section(raw, "templates", where="config")
    default_block = _section(templates, "default", where="templates")
    static_block = _section(default_block, "staticFiles", where="templates.default")
    branding = _section(raw, "branding", where="config")

    template_config = TemplateConfig(
        output_source_files=_flag(
            default_block, "outputSourceFiles", where="templates.default"
        ),
        static_files=_build_static_files(static_block, base_dir),
    )
    return PublishOptions(
        destination=_resolve_path(opts.get("destination"), base_dir) or Path("out"),
        template=_resolve_path(opts.get("template"), base_dir) or DEFAULT_TEMPLATE_DIR,
        readme=_resolve_path(opts.get("readme"), base_dir),
        mainpagetitle=_optional_str(opts.get("mainpagetitle")),
        include_private=_flag(opts, "private", where="opts"),
        tutorials=_resolve_path(opts.get("tutorials"), base_dir),
        templates=template_config,
        branding=_build_branding(branding),
    )


__all__ = ["load_publish_config"]

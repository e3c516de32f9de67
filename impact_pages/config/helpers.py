"""Utility helpers shared by the publish configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .models import BrandingConfig, PublishConfigError, StaticFilesConfig


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _flag(payload: typ.Mapping[str, typ.Any], key: str, *, where: str) -> bool:
    """Return the boolean stored under ``key``; absent or null means ``False``."""
    value = payload.get(key)
    match value:
        case None:
            return False
        case bool():
            return value
        case _:
            msg = f"'{where}.{key}' must be true or false, got {value!r}."
            raise PublishConfigError(msg)


def _resolve_path(value: object | None, base_dir: Path) -> Path | None:
    """Return ``value`` as a path anchored at ``base_dir`` when relative."""
    text = _optional_str(value)
    if text is None:
        return None
    path = Path(text).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path


def _section(
    payload: typ.Mapping[str, typ.Any], key: str, *, where: str
) -> typ.Mapping[str, typ.Any]:
    """Return the mapping stored under ``key`` or an empty mapping."""
    value = payload.get(key)
    match value:
        case None:
            return {}
        case dict():
            return value
        case _:
            msg = f"'{where}.{key}' must be a mapping."
            raise PublishConfigError(msg)


def _build_static_files(
    payload: typ.Mapping[str, typ.Any], base_dir: Path
) -> StaticFilesConfig:
    """Build the static file settings from a ``staticFiles`` mapping."""
    raw_paths = payload.get("paths") or []
    if isinstance(raw_paths, str):
        raw_paths = [raw_paths]
    if not isinstance(raw_paths, list):
        msg = "'staticFiles.paths' must be a list of paths."
        raise PublishConfigError(msg)
    paths = [
        resolved
        for resolved in (_resolve_path(item, base_dir) for item in raw_paths)
        if resolved is not None
    ]
    return StaticFilesConfig(
        paths=paths,
        include_pattern=_optional_str(payload.get("includePattern")),
        exclude_pattern=_optional_str(payload.get("excludePattern")),
    )


def _build_branding(payload: typ.Mapping[str, typ.Any]) -> BrandingConfig:
    """Merge a ``branding`` mapping into the default branding."""
    base = BrandingConfig()
    aliases = payload.get("folder_aliases", base.folder_aliases)
    if not isinstance(aliases, dict):
        msg = "'branding.folder_aliases' must be a mapping."
        raise PublishConfigError(msg)
    return BrandingConfig(
        site_name=payload.get("site_name", base.site_name),
        site_url=payload.get("site_url", base.site_url),
        logo=_optional_str(payload.get("logo", base.logo)),
        root_namespace=_optional_str(
            payload.get("root_namespace", base.root_namespace)
        ),
        excluded_namespace=_optional_str(
            payload.get("excluded_namespace", base.excluded_namespace)
        ),
        folder_aliases={str(key): str(value) for key, value in aliases.items()},
    )


__all__ = [
    "_build_branding",
    "_build_static_files",
    "_flag",
    "_optional_str",
    "_resolve_path",
    "_section",
]

"""Source path helpers: doclet locations, common prefixes, and folder names."""

from __future__ import annotations

import os
import re
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from impact_pages.doclets import Doclet, SourceFile

PATH_SEPARATORS = re.compile(r"[/\\]")


def source_path(doclet: Doclet) -> str | None:
    """Return the doclet's declared source path, joining ``meta.path`` when set."""
    meta = doclet.meta
    if meta is None or not meta.filename:
        return None
    if meta.path and meta.path != "null":
        return f"{meta.path}/{meta.filename}"
    return meta.filename


def resolve_source_path(filepath: str) -> str:
    """Return ``filepath`` made absolute against the current directory."""
    return os.path.abspath(os.path.join(os.getcwd(), filepath))


def common_path_prefix(paths: cabc.Sequence[str]) -> str:
    """Return the longest shared directory prefix, ending with a separator.

    >>> common_path_prefix(["/a/b/c.js", "/a/b/d/e.js"])
    '/a/b/'
    >>> common_path_prefix(["/a/b/c.js"])
    '/a/b/'
    """
    if not paths:
        return ""
    directories = [os.path.dirname(path) for path in paths]
    try:
        prefix = os.path.commonpath(directories)
    except ValueError:
        return ""
    if not prefix:
        return ""
    return prefix if prefix.endswith(os.sep) else prefix + os.sep


def shorten_paths(
    files: dict[str, SourceFile], prefix: str
) -> dict[str, SourceFile]:
    """Fill each file's ``shortened`` form relative to ``prefix``.

    The shortened form always uses forward slashes.
    """
    for source in files.values():
        source.shortened = source.resolved.removeprefix(prefix).replace("\\", "/")
    return files


def folder_name(meta_path: str | None, aliases: typ.Mapping[str, str]) -> str:
    """Return the last folder of ``meta_path``, renamed through ``aliases``."""
    if not meta_path:
        return ""
    folder = PATH_SEPARATORS.split(meta_path)[-1]
    return aliases.get(folder, folder)


__all__ = [
    "common_path_prefix",
    "folder_name",
    "resolve_source_path",
    "shorten_paths",
    "source_path",
]

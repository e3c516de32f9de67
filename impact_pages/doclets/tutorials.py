"""Load a tutorial tree from a directory of Markdown/HTML files.

Each supported file becomes a :class:`TutorialNode` named after its stem. JSON
files describe titles and the parent/child hierarchy, either as a mapping of
tutorial names to configuration or, in ``<name>.json``, as the configuration
of that single tutorial. Tutorials without a parent hang off the root node.

Example
-------
>>> from pathlib import Path
>>> from impact_pages.doclets.tutorials import load_tutorials
>>> root = load_tutorials(Path("tutorials"))  # doctest: +SKIP
>>> [child.title for child in root.children]  # doctest: +SKIP
['Getting Started', 'Entities']
"""

from __future__ import annotations

import json
import logging
import typing as typ

from impact_pages.errors import TutorialLoadError

from .models import HTML_CONTENT, MARKDOWN_CONTENT, TutorialNode

if typ.TYPE_CHECKING:
    from pathlib import Path

LOGGER = logging.getLogger(__name__)

CONTENT_TYPES: dict[str, str] = {
    ".md": MARKDOWN_CONTENT,
    ".markdown": MARKDOWN_CONTENT,
    ".html": HTML_CONTENT,
    ".htm": HTML_CONTENT,
    ".xhtml": HTML_CONTENT,
    ".xml": HTML_CONTENT,
}


def load_tutorials(directory: Path | None) -> TutorialNode:
    """Build the tutorial tree rooted at an unnamed node.

    Parameters
    ----------
    directory : Path or None
        Folder holding tutorial sources; ``None`` or a missing folder yields an
        empty root.

    Returns
    -------
    TutorialNode
        Root node whose children are the top-level tutorials in file order.

    Raises
    ------
    TutorialLoadError
        Raised when a JSON configuration file cannot be decoded.
    """
    root = TutorialNode()
    if directory is None or not directory.is_dir():
        return root

    nodes: dict[str, TutorialNode] = {}
    configs: dict[str, typ.Any] = {}
    for path in sorted(directory.iterdir()):
        if not path.is_file():
            continue
        suffix = path.suffix.lower()
        if suffix in CONTENT_TYPES:
            nodes[path.stem] = TutorialNode(
                name=path.stem,
                title=path.stem,
                content=path.read_text(encoding="utf-8"),
                content_type=CONTENT_TYPES[suffix],
            )
        elif suffix == ".json":
            configs.update(_read_config(path))

    parented: set[str] = set()
    for name, config in configs.items():
        _apply_config(name, config, nodes, parented)

    for name, node in nodes.items():
        if name not in parented:
            root.children.append(node)
    return root


def _read_config(path: Path) -> dict[str, typ.Any]:
    """Return tutorial configuration mappings keyed by tutorial name."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        msg = f"Tutorial configuration '{path}' is not valid JSON: {exc}"
        raise TutorialLoadError(msg) from exc
    if not isinstance(payload, dict):
        msg = f"Tutorial configuration '{path}' must be a JSON object."
        raise TutorialLoadError(msg)
    if "title" in payload or "children" in payload:
        return {path.stem: payload}
    return payload


def _apply_config(
    name: str,
    config: object,
    nodes: dict[str, TutorialNode],
    parented: set[str],
) -> None:
    """Apply title and children settings for ``name`` recursively."""
    node = nodes.get(name)
    if node is None or not isinstance(config, dict):
        return
    title = config.get("title")
    if title:
        node.title = str(title)

    children = config.get("children") or []
    match children:
        case dict():
            child_items = list(children.items())
        case list():
            child_items = [(str(child), None) for child in children]
        case _:
            child_items = []

    for child_name, child_config in child_items:
        child = nodes.get(child_name)
        if child is None or child is node or child.find(name) is not None:
            continue
        if child_name in parented:
            LOGGER.warning(
                "Tutorial '%s' already has a parent; ignoring '%s'", child_name, name
            )
            continue
        parented.add(child_name)
        node.children.append(child)
        if child_config is not None:
            _apply_config(child_name, child_config, nodes, parented)


__all__ = ["CONTENT_TYPES", "load_tutorials"]

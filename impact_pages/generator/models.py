"""Shared dataclasses used by the navigation and page generation pipeline."""

from __future__ import annotations

import dataclasses as dc


@dc.dataclass(slots=True)
class NavEntry:
    """One linked symbol in the sidebar.

    Attributes
    ----------
    longname : str
        Longname of the linked doclet.
    name : str
        Display label.
    href : str | None
        Generated URL, or ``None`` when the longname has no page.
    """

    longname: str
    name: str
    href: str | None


@dc.dataclass(slots=True)
class NavFolder:
    """A collapsible sidebar block for one source folder.

    Attributes
    ----------
    name : str
        Normalized folder name (after alias renaming).
    label : str
        Folder name with its first character upper-cased; also the anchor
        suffix (``#nav<label>``).
    entries : list[NavEntry]
        Namespaces then classes, in the order they were grouped.
    """

    name: str
    label: str
    entries: list[NavEntry] = dc.field(default_factory=list)

    @property
    def anchor(self) -> str:
        """Return the element id of the folder header."""
        return f"nav{self.label}"


@dc.dataclass(slots=True)
class Navigation:
    """Structured sidebar content rendered into both nav and TOC fragments."""

    flat_namespaces: list[NavEntry] = dc.field(default_factory=list)
    folders: list[NavFolder] = dc.field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.flat_namespaces or self.folders)


@dc.dataclass(slots=True)
class TocEntry:
    """Table-of-contents link to a sidebar header."""

    label: str
    anchor: str


__all__ = ["NavEntry", "NavFolder", "Navigation", "TocEntry"]

"""Group namespaces and classes by source folder for the sidebar.

:func:`build_navigation` produces a structured :class:`Navigation` value; the
sidebar, the table of contents and the breadcrumb are each rendered from
templates so no fragment has to be re-parsed from another's HTML.

Example
-------
>>> from impact_pages.doclets import Doclet, DocletMeta, Members
>>> from impact_pages.config import BrandingConfig
>>> from impact_pages.generator.links import LinkRegistry
>>> members = Members(classes=[
...     Doclet(longname="ig.Entity", name="Entity", kind="class",
...            meta=DocletMeta(path="lib/plusplus", filename="entity.js")),
... ])
>>> nav = build_navigation(members, LinkRegistry(), BrandingConfig())
>>> [folder.label for folder in nav.folders]
['Core']
"""

from __future__ import annotations

import logging
import typing as typ

from .models import NavEntry, NavFolder, Navigation, TocEntry
from .paths import folder_name

if typ.TYPE_CHECKING:
    from jinja2 import Environment

    from impact_pages.config import BrandingConfig
    from impact_pages.doclets import Doclet, Members

    from .links import LinkRegistry

LOGGER = logging.getLogger(__name__)

NAMESPACES_LABEL = "Namespaces"


def build_navigation(
    members: Members, registry: LinkRegistry, branding: BrandingConfig
) -> Navigation:
    """Group namespaces and classes into folder blocks and a flat list.

    Parameters
    ----------
    members : Members
        Doclets grouped by kind; only ``namespaces`` and ``classes`` are used.
    registry : LinkRegistry
        Registry providing the generated URL of each entry.
    branding : BrandingConfig
        Supplies the excluded namespace sentinel and folder aliases.

    Returns
    -------
    Navigation
        Empty when there are no classes. Otherwise namespaces with no folder
        sit in ``flat_namespaces`` and every other entry is grouped by folder,
        folders sorted ascending by name.
    """
    navigation = Navigation()
    if not members.classes:
        return navigation

    seen: set[str] = set()
    grouped: dict[str, list[NavEntry]] = {}

    for namespace in members.namespaces:
        if namespace.longname in seen:
            continue
        if _is_excluded(namespace, branding.excluded_namespace):
            continue
        entry = _entry(namespace, registry)
        folder = _folder_of(namespace, branding)
        if folder:
            grouped.setdefault(folder, []).append(entry)
        else:
            navigation.flat_namespaces.append(entry)
        seen.add(namespace.longname)

    for cls in members.classes:
        if cls.longname not in seen:
            grouped.setdefault(_folder_of(cls, branding), []).append(
                _entry(cls, registry)
            )
        seen.add(cls.longname)

    for name in sorted(grouped):
        entries = grouped[name]
        if entries:
            navigation.folders.append(
                NavFolder(name=name, label=_capitalize(name), entries=entries)
            )
    LOGGER.debug(
        "Navigation built with %d folder(s) and %d flat namespace(s)",
        len(navigation.folders),
        len(navigation.flat_namespaces),
    )
    return navigation


def build_toc(navigation: Navigation) -> list[TocEntry]:
    """Return one table-of-contents entry per distinct sidebar header."""
    entries: list[TocEntry] = []
    seen: set[str] = set()
    headers: list[str] = []
    if navigation.flat_namespaces:
        headers.append(NAMESPACES_LABEL)
    headers.extend(folder.label for folder in navigation.folders)
    for header in headers:
        label = _capitalize(header)
        if label in seen:
            continue
        seen.add(label)
        entries.append(TocEntry(label=label, anchor=f"#nav{label}"))
    return entries


def render_navigation(navigation: Navigation, env: Environment) -> str:
    """Render the sidebar HTML fragment; empty navigation renders ``""``."""
    if not navigation:
        return ""
    return env.get_template("nav.jinja").render(
        navigation=navigation, namespaces_label=NAMESPACES_LABEL
    )


def render_toc(
    toc: list[TocEntry], branding: BrandingConfig, env: Environment
) -> str:
    """Render the table-of-contents fragment."""
    return env.get_template("toc.jinja").render(toc=toc, branding=branding)


def render_breadcrumb(branding: BrandingConfig, env: Environment) -> str:
    """Render the constant breadcrumb linking to the framework home."""
    return env.get_template("breadcrumb.jinja").render(branding=branding)


def _entry(doclet: Doclet, registry: LinkRegistry) -> NavEntry:
    return NavEntry(
        longname=doclet.longname,
        name=doclet.name,
        href=registry.url_for(doclet.longname),
    )


def _folder_of(doclet: Doclet, branding: BrandingConfig) -> str:
    meta_path = doclet.meta.path if doclet.meta else None
    return folder_name(meta_path, branding.folder_aliases)


def _is_excluded(doclet: Doclet, sentinel: str | None) -> bool:
    """Return whether ``doclet`` is, or lives under, the excluded namespace."""
    if not sentinel:
        return False
    if doclet.longname == sentinel:
        return True
    parent = doclet.memberof or ""
    return parent == sentinel or parent.startswith(f"{sentinel}.")


def _capitalize(value: str) -> str:
    return value[:1].upper() + value[1:]


__all__ = [
    "NAMESPACES_LABEL",
    "build_navigation",
    "build_toc",
    "render_breadcrumb",
    "render_navigation",
    "render_toc",
]

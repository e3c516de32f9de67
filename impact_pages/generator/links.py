"""Map doclet longnames to generated URLs and resolve inline link markup.

:class:`LinkRegistry` owns the filename allocation for a publish run. Every
longname receives at most one filename, so a member's page anchor and its
container's page always agree, and link resolution over rendered HTML is a
purely textual pass that turns ``{@link ...}`` and ``{@tutorial ...}`` markup
into anchors once every URL has been registered.

Example
-------
>>> from impact_pages.doclets import Doclet
>>> from impact_pages.generator.links import LinkRegistry
>>> registry = LinkRegistry()
>>> registry.create_link(Doclet(longname="ig.Entity", name="Entity", kind="class"))
'ig.Entity.html'
>>> registry.create_link(
...     Doclet(longname="ig.Entity#update", name="update", kind="function",
...            memberof="ig.Entity")
... )
'ig.Entity.html#update'
"""

from __future__ import annotations

import re
import typing as typ
from html import escape

from impact_pages._constants import (
    CONTAINER_KINDS,
    FILE_EXTENSION,
    GLOBAL_LONGNAME,
    SCOPE_PUNCTUATION,
    TUTORIAL_PREFIX,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from impact_pages.doclets import Doclet, TutorialNode

NAMESPACE_PREFIX = re.compile(r"^(event|module|external):")
VARIATION_SUFFIX = re.compile(r"\([\s\S]*\)$")
UNSAFE_FILENAME_CHAR = re.compile(r"[^$a-z0-9._\-](?=[$a-z0-9._\-]*$)", re.IGNORECASE)
ABSOLUTE_URL = re.compile(r"^(?:https?|ftp)://", re.IGNORECASE)
INLINE_LINK = re.compile(
    r"(?:\[(?P<prefix>[^\]]*)\])?\{@(?P<tag>link|linkcode|linkplain)\s+"
    r"(?P<body>[^}]+?)\s*\}"
)
INLINE_TUTORIAL = re.compile(r"\{@tutorial\s+(?P<name>[^}]+?)\s*\}")
AUTHOR_EMAIL = re.compile(r"^\s*(?P<name>[^<]*?)\s*<(?P<email>[^>]+)>\s*$")


class LinkRegistry:
    """Allocate unique filenames and track the URL of every longname."""

    def __init__(self) -> None:
        self.longname_to_url: dict[str, str] = {}
        self.tutorial_to_url_map: dict[str, str] = {}
        self._files: dict[str, str] = {}
        self._tutorials: TutorialNode | None = None

    def reset(self) -> None:
        """Forget every allocated filename, registered URL and tutorial tree."""
        self.longname_to_url.clear()
        self.tutorial_to_url_map.clear()
        self._files.clear()
        self._tutorials = None

    def get_unique_filename(self, value: str) -> str:
        """Return a filesystem-safe, run-unique HTML filename for ``value``.

        Namespace prefixes become ``<ns>-``, ``~`` becomes ``-``, a trailing
        ``(...)`` variation is dropped, and everything up to the last character
        that is unsafe in a filename is removed. Names that collide
        case-insensitively with an earlier allocation get ``_`` appended.
        """
        basename = NAMESPACE_PREFIX.sub(r"\1-", value).replace("~", "-")
        basename = VARIATION_SUFFIX.sub("", basename)
        match = UNSAFE_FILENAME_CHAR.search(basename)
        if match and match.start():
            basename = basename[match.end() :]
        basename = basename.removeprefix(".") or "_"
        return self._make_unique(basename, value) + FILE_EXTENSION

    def _make_unique(self, filename: str, value: str) -> str:
        if filename.startswith("_"):
            filename = f"-{filename}"
        while filename.lower() in self._files:
            filename += "_"
        self._files[filename.lower()] = value
        return filename

    def register_link(self, longname: str, url: str) -> None:
        """Record ``url`` as the link target for ``longname``."""
        self.longname_to_url[longname] = url

    def url_for(self, longname: str) -> str | None:
        """Return the registered URL for ``longname``, if any."""
        return self.longname_to_url.get(longname)

    def filename_for(self, longname: str) -> str:
        """Return the page filename for ``longname``, allocating it once."""
        url = self.longname_to_url.get(longname)
        if url is None:
            url = self.get_unique_filename(longname)
            self.register_link(longname, url)
        return url.split("#", 1)[0]

    def create_link(self, doclet: Doclet) -> str:
        """Return the URL of ``doclet``'s page or its anchor on the parent page."""
        if doclet.kind in CONTAINER_KINDS:
            return self.filename_for(doclet.longname)
        filename = self.filename_for(doclet.memberof or GLOBAL_LONGNAME)
        fragment_ns = "event:" if doclet.kind == "event" else ""
        return f"{filename}#{fragment_ns}{doclet.name}"

    def linkto(
        self, longname: str, text: str | None = None, css_class: str | None = None
    ) -> str:
        """Return an anchor for ``longname`` or its escaped text when unknown."""
        label = text if text is not None else longname
        url = self.longname_to_url.get(longname)
        if url is None and ABSOLUTE_URL.match(longname):
            url = longname
        if not url:
            return escape(label, quote=False)
        class_attr = f' class="{escape(css_class)}"' if css_class else ""
        return f'<a href="{escape(url)}"{class_attr}>{escape(label, quote=False)}</a>'

    def hash_to_link(self, doclet: Doclet, value: str) -> str:
        """Turn a ``#fragment`` reference into an anchor on ``doclet``'s page."""
        if not re.match(r"^#.+", value):
            return value
        url = self.create_link(doclet).split("#", 1)[0] + value
        return f'<a href="{escape(url)}">{escape(value, quote=False)}</a>'

    def get_ancestor_links(
        self, by_longname: cabc.Mapping[str, Doclet], doclet: Doclet
    ) -> list[str]:
        """Return breadcrumb anchors for each ``memberof`` ancestor of ``doclet``.

        ``by_longname`` is the index from :meth:`DocletStore.by_longname`, built
        once per stage so each ancestor lookup is a dictionary hit.
        """
        ancestors: list[str] = []
        parent = doclet.memberof
        visited: set[str] = set()
        while parent and parent not in visited:
            visited.add(parent)
            node = by_longname.get(parent)
            if node is None:
                break
            punctuation = SCOPE_PUNCTUATION.get(node.scope or "", "")
            ancestors.insert(0, self.linkto(node.longname, punctuation + node.name))
            parent = node.memberof
        if ancestors:
            ancestors[-1] += SCOPE_PUNCTUATION.get(doclet.scope or "", "")
        return ancestors

    def set_tutorials(self, root: TutorialNode | None) -> None:
        """Remember the tutorial tree used to resolve ``{@tutorial}`` markup."""
        self._tutorials = root

    def tutorial_to_url(self, name: str) -> str:
        """Return the page filename for the tutorial called ``name``."""
        url = self.tutorial_to_url_map.get(name)
        if url is None:
            url = self.get_unique_filename(f"{TUTORIAL_PREFIX}{name}")
            self.tutorial_to_url_map[name] = url
        return url

    def tutorial_link(self, name: str, text: str | None = None) -> str:
        """Return an anchor to tutorial ``name`` or a disabled placeholder."""
        node = self._tutorials.find(name) if self._tutorials else None
        if node is None:
            label = escape(f"Tutorial: {text or name}", quote=False)
            return f'<em class="disabled">{label}</em>'
        label = escape(text or node.title or name, quote=False)
        return f'<a href="{escape(self.tutorial_to_url(name))}">{label}</a>'

    def resolve_links(self, html: str) -> str:
        """Replace inline link and tutorial markup in ``html`` with anchors."""

        def _link(match: re.Match[str]) -> str:
            target, text = _split_link_body(match.group("body"))
            text = match.group("prefix") or text
            css_class = "code-link" if match.group("tag") == "linkcode" else None
            return self.linkto(target, text, css_class)

        def _tutorial(match: re.Match[str]) -> str:
            return self.tutorial_link(match.group("name"))

        resolved = INLINE_LINK.sub(_link, html)
        return INLINE_TUTORIAL.sub(_tutorial, resolved)


def _split_link_body(body: str) -> tuple[str, str | None]:
    """Split ``target|text`` or ``target text`` into its two parts."""
    body = body.strip()
    if "|" in body:
        target, text = body.split("|", 1)
        return target.strip(), text.strip() or None
    parts = body.split(None, 1)
    if len(parts) == 2:
        return parts[0], parts[1]
    return body, None


def resolve_author_links(text: str) -> str:
    """Render ``Name <email>`` as a ``mailto:`` anchor, escaping anything else."""
    match = AUTHOR_EMAIL.match(text)
    if not match:
        return escape(text, quote=False)
    name = match.group("name") or match.group("email")
    email = match.group("email")
    return f'<a href="mailto:{escape(email)}">{escape(name, quote=False)}</a>'


__all__ = ["LinkRegistry", "resolve_author_links"]

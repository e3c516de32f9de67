"""High-level orchestration for a documentation publish run.

:class:`Publisher` takes a :class:`~impact_pages.doclets.DocletStore`, a
tutorial tree and :class:`~impact_pages.config.PublishOptions`, enriches the
doclets through an explicit sequence of pure stages (URLs, then ids and
signatures, then ancestors and member types), builds the navigation once, and
writes every page of the site.

Example
-------
>>> from pathlib import Path
>>> from impact_pages.config import load_publish_config
>>> from impact_pages.doclets import load_doclets, load_tutorials
>>> from impact_pages.generator import Publisher
>>> options = load_publish_config(Path("conf.yaml"))  # doctest: +SKIP
>>> publisher = Publisher(
...     load_doclets(Path("doclets.json")), load_tutorials(options.tutorials), options
... )  # doctest: +SKIP
>>> publisher.run()  # doctest: +SKIP
[PosixPath('out/index.html'), ...]
"""

from __future__ import annotations

import dataclasses as dc
import logging
import os
import re
import shutil
import typing as typ
from pathlib import Path

from impact_pages._constants import (
    CONTAINER_KINDS,
    GLOBAL_LONGNAME,
    INDEX_BASENAME,
    STATIC_SUBDIR,
    STATIC_TEMPLATE_DEPTH,
    STATIC_USER_DEPTH,
)
from impact_pages.doclets import Doclet, DocletStore, Example, SourceFile, TutorialNode

from . import signatures
from .links import LinkRegistry, resolve_author_links
from .modules import attach_module_symbols
from .navigation import (
    build_navigation,
    build_toc,
    render_breadcrumb,
    render_navigation,
    render_toc,
)
from .page_writer import PageWriter, build_environment
from .paths import common_path_prefix, resolve_source_path, shorten_paths, source_path
from .renderer import HtmlContentRenderer

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from impact_pages.config import PublishOptions
    from impact_pages.doclets import Members

    from .models import Navigation

LOGGER = logging.getLogger(__name__)

EXAMPLE_CAPTION = re.compile(
    r"^\s*<caption>([\s\S]+?)</caption>(\s*[\n\r])([\s\S]+)$", re.IGNORECASE
)
PAGE_TITLES: dict[str, str] = {
    "class": "Class",
    "module": "Module",
    "namespace": "Namespace",
    "mixin": "Mixin",
    "external": "External",
}


def parse_example(example: str) -> Example:
    """Split a leading ``<caption>...</caption>`` block from an example body.

    >>> parse_example("<caption>Basic use</caption>\\nfoo();")
    Example(caption='Basic use', code='foo();')
    >>> parse_example("foo();")
    Example(caption='', code='foo();')
    """
    match = EXAMPLE_CAPTION.match(example)
    if match:
        return Example(caption=match.group(1), code=match.group(3))
    return Example(caption="", code=example)


def url_fragment_id(url: str, name: str) -> str:
    """Return the fragment of ``url``, or ``name`` for top-level pages."""
    if "#" in url:
        return url.rsplit("#", 1)[-1]
    return name


class Publisher:
    """Run the publish pipeline and write the generated site."""

    def __init__(
        self,
        store: DocletStore,
        tutorials: TutorialNode | None,
        options: PublishOptions,
        *,
        registry: LinkRegistry | None = None,
        renderer: HtmlContentRenderer | None = None,
    ) -> None:
        """Initialize the publisher.

        Parameters
        ----------
        store : DocletStore
            Doclets produced by the extractor.
        tutorials : TutorialNode or None
            Root of the tutorial tree; ``None`` means no tutorials.
        options : PublishOptions
            Destination, template and template switches for the run.
        registry : LinkRegistry, optional
            Link registry to populate; a fresh one by default.
        renderer : HtmlContentRenderer, optional
            Markdown and source highlighter; a default-styled one by default.
        """
        self.input_store = store
        self.store = store
        self.tutorials = tutorials or TutorialNode()
        self.options = options
        self.registry = registry or LinkRegistry()
        self.renderer = renderer or HtmlContentRenderer()
        self.env = build_environment(options.template)
        self.source_files: dict[str, SourceFile] = {}
        self.output_dir = options.destination

    def run(self) -> list[Path]:
        """Generate the whole site.

        Returns
        -------
        list[Path]
            Every written page in generation order, each path listed once even
            when several kinds share a longname and overwrite the same file.

        Raises
        ------
        OSError
            Raised when the output directory cannot be created, a static asset
            cannot be copied, or a page cannot be written.
        """
        self.registry.reset()
        self.source_files = {}
        self.output_dir = self.options.destination

        index_url = self.registry.get_unique_filename(INDEX_BASENAME)
        global_url = self.registry.get_unique_filename(GLOBAL_LONGNAME)
        self.registry.register_link(GLOBAL_LONGNAME, global_url)
        self.registry.set_tutorials(self.tutorials)

        store = (
            self.input_store.prune(include_private=self.options.include_private)
            .sort()
            .add_event_listeners()
        )
        store = store.map(self._prepare_doclet)
        LOGGER.debug("Prepared %d doclet(s)", len(store))

        self.output_dir = self._resolve_output_dir(store)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self._copy_template_static()
        self._copy_user_static()

        if self.source_files:
            prefix = common_path_prefix(
                [source.resolved for source in self.source_files.values()]
            )
            shorten_paths(self.source_files, prefix)

        store = store.map(self._register_link)
        store = store.map(self._add_id_and_signature)
        by_longname = store.by_longname()
        store = store.map(
            lambda doclet: self._add_ancestors_and_types(by_longname, doclet)
        )

        members = store.get_members(self.tutorials)
        navigation = build_navigation(members, self.registry, self.options.branding)
        symbols, modules = attach_module_symbols(
            store.find(
                kind=["class", "function"],
                longname=lambda value: value.startswith("module:"),
            ),
            members.modules,
        )
        store = store.replace([*symbols, *modules])
        members = store.get_members(self.tutorials)
        self.store = store

        writer = PageWriter(
            self.env,
            self.registry,
            self.output_dir,
            self.renderer,
            context=self._shared_context(store, navigation),
        )

        written: list[Path] = []
        if self.options.templates.output_source_files:
            written.extend(writer.generate_source_files(self.source_files))
        if members.globals:
            written.append(
                writer.generate("Global", [Doclet(kind="globalobj")], global_url)
            )
        written.append(writer.generate("Index", self._index_docs(store), index_url))
        written.extend(self._generate_symbol_pages(writer, members))
        written.extend(writer.save_tutorials(self.tutorials))
        unique = list(dict.fromkeys(written))
        LOGGER.info("Published %d page(s) to %s", len(unique), self.output_dir)
        return unique

    def _prepare_doclet(self, doclet: Doclet) -> Doclet:
        """Clear attribs, parse examples, link ``see`` hashes, record sources."""
        updates: dict[str, typ.Any] = {"attribs": ""}
        if doclet.examples:
            updates["example_records"] = [parse_example(ex) for ex in doclet.examples]
        if doclet.see:
            updates["see"] = [self.registry.hash_to_link(doclet, see) for see in doclet.see]
        path = source_path(doclet)
        if path is not None:
            self.source_files[path] = SourceFile(resolved=resolve_source_path(path))
        return dc.replace(doclet, **updates)

    def _register_link(self, doclet: Doclet) -> Doclet:
        """Register the doclet's URL and point ``meta.filename`` at its short path."""
        self.registry.register_link(doclet.longname, self.registry.create_link(doclet))
        path = source_path(doclet)
        if path is None or doclet.meta is None:
            return doclet
        shortened = self.source_files[path].shortened
        if not shortened:
            return doclet
        return dc.replace(doclet, meta=dc.replace(doclet.meta, filename=shortened))

    def _add_id_and_signature(self, doclet: Doclet) -> Doclet:
        url = self.registry.url_for(doclet.longname) or ""
        doclet = dc.replace(doclet, id=url_fragment_id(url, doclet.name))
        if signatures.needs_signature(doclet):
            doclet = signatures.add_signature_params(doclet)
            doclet = signatures.add_signature_returns(doclet, self.registry)
            doclet = signatures.add_attribs(doclet)
        return doclet

    def _add_ancestors_and_types(
        self, by_longname: cabc.Mapping[str, Doclet], doclet: Doclet
    ) -> Doclet:
        doclet = dc.replace(
            doclet, ancestors=self.registry.get_ancestor_links(by_longname, doclet)
        )
        if doclet.kind in ("member", "constant"):
            doclet = signatures.add_signature_types(doclet, self.registry)
            doclet = signatures.add_attribs(doclet)
        if doclet.kind == "constant":
            doclet = dc.replace(doclet, kind="member")
        return doclet

    def _resolve_output_dir(self, store: DocletStore) -> Path:
        packages = store.find(kind="package")
        package = packages[0] if packages else None
        if package is not None and package.name:
            return self.options.destination / package.name / (package.version or "")
        return self.options.destination

    def _copy_template_static(self) -> None:
        """Copy the template's ``static`` tree into the output directory."""
        from_dir = self.options.template / STATIC_SUBDIR
        for path in _scan(from_dir, STATIC_TEMPLATE_DEPTH):
            _copy_into(path, from_dir, self.output_dir)

    def _copy_user_static(self) -> None:
        """Copy configured extra static paths, honouring include/exclude patterns."""
        static = self.options.templates.static_files
        include = re.compile(static.include_pattern) if static.include_pattern else None
        exclude = re.compile(static.exclude_pattern) if static.exclude_pattern else None
        for root in static.paths:
            base = root if root.is_dir() else root.parent
            candidates = _scan(root, STATIC_USER_DEPTH) if root.is_dir() else [root]
            for path in candidates:
                text = path.as_posix()
                if include and not include.search(text):
                    continue
                if exclude and exclude.search(text):
                    continue
                _copy_into(path, base, self.output_dir)

    def _shared_context(
        self, store: DocletStore, navigation: Navigation
    ) -> dict[str, typ.Any]:
        branding = self.options.branding
        return {
            "nav": render_navigation(navigation, self.env),
            "nav_docs": render_toc(build_toc(navigation), branding, self.env),
            "breadcrumb": render_breadcrumb(branding, self.env),
            "branding": branding,
            "pygments_css": self.renderer.stylesheet,
            "output_source_files": self.options.templates.output_source_files,
            "find": store.find,
            "linkto": self.registry.linkto,
            "url_for": self.registry.url_for,
            "tutoriallink": self.registry.tutorial_link,
            "resolve_author_links": resolve_author_links,
        }

    def _index_docs(self, store: DocletStore) -> list[Doclet]:
        readme = ""
        if self.options.readme is not None:
            readme = self.renderer.markdown(
                self.options.readme.read_text(encoding="utf-8")
            )
        mainpage = Doclet(
            kind="mainpage", readme=readme, longname=self.options.mainpage_title
        )
        return [*store.find(kind="package"), mainpage, *store.find(kind="file")]

    def _generate_symbol_pages(
        self, writer: PageWriter, members: Members
    ) -> list[Path]:
        """Write one page per registered longname that names a container doclet."""
        groups = {
            "class": members.classes,
            "module": members.modules,
            "namespace": members.namespaces,
            "mixin": members.mixins,
            "external": members.externals,
        }
        by_kind: dict[str, dict[str, list[Doclet]]] = {kind: {} for kind in groups}
        for kind, doclets in groups.items():
            for doclet in doclets:
                by_kind[kind].setdefault(doclet.longname, []).append(doclet)

        written: list[Path] = []
        for longname, url in list(self.registry.longname_to_url.items()):
            for kind in CONTAINER_KINDS:
                matches = by_kind[kind].get(longname)
                if matches:
                    title = self._page_title(kind, matches[0])
                    written.append(writer.generate(title, matches, url))
        return written

    def _page_title(self, kind: str, doclet: Doclet) -> str:
        branding = self.options.branding
        if kind == "namespace" and branding.root_namespace and (
            doclet.name == branding.root_namespace
        ):
            return branding.site_name
        return f"{PAGE_TITLES[kind]}: {doclet.name}"


def _scan(root: Path, depth: int) -> cabc.Iterator[Path]:
    """Yield files under ``root`` at most ``depth`` directory levels deep."""
    if not root.is_dir():
        return
    for dirpath, dirnames, filenames in os.walk(root):
        level = len(Path(dirpath).relative_to(root).parts)
        if level >= depth:
            dirnames[:] = []
        dirnames.sort()
        for filename in sorted(filenames):
            yield Path(dirpath) / filename


def _copy_into(path: Path, base: Path, output_dir: Path) -> None:
    target = output_dir / path.relative_to(base)
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(path, target)


__all__ = ["Publisher", "parse_example", "url_fragment_id"]

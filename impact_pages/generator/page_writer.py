"""Render titled doclet lists, source listings and tutorials to HTML files.

:class:`PageWriter` wraps the Jinja environment of the selected template. Every
page is rendered through ``container.jinja`` (which extends ``layout.jinja``)
or ``tutorial.jinja``, optionally passed through the link registry's textual
link resolution, and written as UTF-8 under the output directory.
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from impact_pages._constants import TEMPLATE_SUBDIR
from impact_pages.doclets import Doclet
from impact_pages.errors import TemplateNotFoundError, handle

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from impact_pages.doclets import SourceFile, TutorialNode

    from .links import LinkRegistry
    from .renderer import HtmlContentRenderer

LOGGER = logging.getLogger(__name__)


def build_environment(template_dir: Path) -> Environment:
    """Return a Jinja environment loading templates from ``<template_dir>/tmpl``.

    Raises
    ------
    TemplateNotFoundError
        Raised when ``template_dir`` has no ``tmpl`` folder.
    """
    tmpl_dir = template_dir / TEMPLATE_SUBDIR
    if not tmpl_dir.is_dir():
        msg = f"Template directory '{template_dir}' has no '{TEMPLATE_SUBDIR}' folder."
        raise TemplateNotFoundError(msg)
    return Environment(
        loader=FileSystemLoader(str(tmpl_dir)),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


class PageWriter:
    """Write rendered pages into the publish output directory."""

    def __init__(
        self,
        env: Environment,
        registry: LinkRegistry,
        output_dir: Path,
        renderer: HtmlContentRenderer,
        *,
        context: cabc.Mapping[str, typ.Any] | None = None,
    ) -> None:
        """Initialize the writer.

        Parameters
        ----------
        env : Environment
            Jinja environment for the selected template.
        registry : LinkRegistry
            Registry used for link resolution and source file registration.
        output_dir : Path
            Directory receiving the generated files.
        renderer : HtmlContentRenderer
            Highlights source listings.
        context : Mapping[str, Any], optional
            Values shared by every page (navigation fragments, helpers).
        """
        self.env = env
        self.registry = registry
        self.output_dir = output_dir
        self.renderer = renderer
        self.context: dict[str, typ.Any] = dict(context or {})
        self.container = env.get_template("container.jinja")
        self.tutorial_template = env.get_template("tutorial.jinja")

    def generate(
        self,
        title: str,
        docs: cabc.Sequence[Doclet],
        filename: str,
        *,
        resolve_links: bool = True,
    ) -> Path:
        """Render ``docs`` under ``title`` and write ``output_dir / filename``.

        Parameters
        ----------
        title : str
            Page title.
        docs : Sequence[Doclet]
            Doclets shown on the page, or a single sentinel record
            (``mainpage``, ``globalobj``, ``source``).
        filename : str
            Output filename relative to the output directory.
        resolve_links : bool, optional
            Convert inline link markup into anchors after rendering. Must be
            ``False`` for source listings.

        Returns
        -------
        Path
            The written file.
        """
        html = self.container.render(**self.context, title=title, docs=list(docs))
        if resolve_links:
            html = self.registry.resolve_links(html)
        return self._write(filename, html)

    def generate_source_files(
        self, source_files: cabc.Mapping[str, SourceFile]
    ) -> list[Path]:
        """Write one highlighted listing page per source file.

        Files that cannot be read are reported through
        :func:`impact_pages.errors.handle` and skipped.
        """
        written: list[Path] = []
        for source in source_files.values():
            shortened = source.shortened or source.resolved
            outfile = self.registry.get_unique_filename(shortened)
            self.registry.register_link(shortened, outfile)
            try:
                text = Path(source.resolved).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                handle(exc, context=f"source listing for {shortened}")
                continue
            record = Doclet(
                kind="source",
                longname=shortened,
                name=shortened,
                code=self.renderer.source_listing(text, shortened),
            )
            written.append(
                self.generate(
                    f"Source: {shortened}", [record], outfile, resolve_links=False
                )
            )
        return written

    def generate_tutorial(self, title: str, tutorial: TutorialNode, filename: str) -> Path:
        """Render one tutorial page; inline links are resolved."""
        html = self.tutorial_template.render(
            **self.context,
            title=title,
            header=tutorial.title,
            content=tutorial.parse(self.renderer),
            children=tutorial.children,
        )
        return self._write(filename, self.registry.resolve_links(html))

    def save_tutorials(self, node: TutorialNode) -> list[Path]:
        """Write every descendant of ``node`` depth-first."""
        written: list[Path] = []
        for child in node.children:
            written.append(
                self.generate_tutorial(
                    f"Tutorial: {child.title}",
                    child,
                    self.registry.tutorial_to_url(child.name),
                )
            )
            written.extend(self.save_tutorials(child))
        return written

    def _write(self, filename: str, html: str) -> Path:
        if not html.endswith("\n"):
            html += "\n"
        output_path = self.output_dir / filename
        output_path.write_text(html, encoding="utf-8")
        LOGGER.debug("Wrote %s", output_path)
        return output_path


__all__ = ["PageWriter", "build_environment"]

"""Render Markdown bodies and syntax-highlighted source listings."""

from __future__ import annotations

import re
from html import escape

from markdown import Markdown
from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name, get_lexer_for_filename
from pygments.util import ClassNotFound

FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')
LINE_ANCHOR_PREFIX = "line"


class HtmlContentRenderer:
    """Render Markdown and source code with consistent Pygments styling."""

    def __init__(self, pygments_style: str = "default") -> None:
        """Initialize a renderer.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for highlighting. Defaults to
            ``"default"``.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def markdown(self, text: str) -> str:
        """Render Markdown (README, tutorial bodies) into HTML."""
        normalized = self._normalize_fenced_blocks(text)
        if not normalized.strip():
            return ""
        md = Markdown(
            extensions=["fenced_code", "codehilite", "tables", "sane_lists"],
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        return md.convert(normalized)

    def source_listing(self, code: str, filename: str) -> str:
        """Highlight a whole source file with one anchor per line.

        Parameters
        ----------
        code : str
            Raw file contents; Pygments escapes it, so literal ``{@link}``
            markup stays inert as long as link resolution is skipped.
        filename : str
            Used to pick a lexer; unknown extensions fall back to plain text.

        Returns
        -------
        str
            Highlighted HTML where line ``n`` carries ``id="line-n"``.
        """
        try:
            lexer = get_lexer_for_filename(filename, code)
        except ClassNotFound:
            lexer = get_lexer_by_name("text")
        formatter = HtmlFormatter(
            style=self.pygments_style,
            cssclass="codehilite",
            linenos="inline",
            linespans=LINE_ANCHOR_PREFIX,
        )
        html = highlight(code, lexer, formatter)
        language = lexer.aliases[0] if lexer.aliases else "text"
        return self._attach_language_attribute(html, language)

    @staticmethod
    def _attach_language_attribute(html: str, language: str) -> str:
        """Add a single language attribute to an already highlighted block."""
        safe_lang = escape(language or "text", quote=True)

        def _repl(match: re.Match[str]) -> str:
            return f'<div class="codehilite" data-language="{safe_lang}">'

        return CODEHILITE_OPEN_TAG.sub(_repl, html, 1)

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            return f"{fence}{language or ''}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


__all__ = ["LINE_ANCHOR_PREFIX", "HtmlContentRenderer"]

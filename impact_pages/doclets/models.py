"""Dataclasses describing documentation records and tutorial nodes."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from impact_pages.generator.renderer import HtmlContentRenderer

MARKDOWN_CONTENT = "markdown"
HTML_CONTENT = "html"


@dc.dataclass(slots=True)
class DocletMeta:
    """Source location of a documented symbol."""

    path: str | None = None
    filename: str | None = None
    lineno: int | None = None


@dc.dataclass(slots=True)
class Param:
    """A single documented parameter."""

    name: str
    type_names: list[str] = dc.field(default_factory=list)
    description: str = ""
    optional: bool = False
    nullable: bool | None = None
    variable: bool = False
    defaultvalue: str | None = None


@dc.dataclass(slots=True)
class Returns:
    """A documented return value."""

    type_names: list[str] = dc.field(default_factory=list)
    description: str = ""


@dc.dataclass(slots=True)
class Example:
    """A parsed ``@example`` block with an optional caption."""

    caption: str
    code: str


@dc.dataclass(slots=True)
class Doclet:
    """Structured record describing one documented symbol.

    Attributes
    ----------
    longname : str
        Globally unique identifier of the symbol.
    name : str
        Display name.
    kind : str
        Category such as ``class``, ``function``, ``namespace`` or ``member``.
    memberof : str | None
        Longname of the parent symbol, ``None`` for globals.
    meta : DocletMeta | None
        Originating source location.
    signature : str
        Computed signature HTML (parameters, return and declared types).
    attribs : str
        Computed attribute badge HTML.
    id : str
        In-page anchor derived from the generated URL.
    ancestors : list[str]
        Breadcrumb anchors for each ``memberof`` ancestor.
    module : Doclet | None
        Class or function exported as the whole module, when attached.
    """

    longname: str = ""
    name: str = ""
    kind: str = ""
    memberof: str | None = None
    scope: str | None = None
    description: str = ""
    summary: str = ""
    classdesc: str = ""
    meta: DocletMeta | None = None
    see: list[str] = dc.field(default_factory=list)
    examples: list[str] = dc.field(default_factory=list)
    example_records: list[Example] = dc.field(default_factory=list)
    type_names: list[str] = dc.field(default_factory=list)
    params: list[Param] = dc.field(default_factory=list)
    returns: list[Returns] = dc.field(default_factory=list)
    augments: list[str] = dc.field(default_factory=list)
    fires: list[str] = dc.field(default_factory=list)
    listeners: list[str] = dc.field(default_factory=list)
    access: str | None = None
    virtual: bool = False
    readonly: bool = False
    undocumented: bool = False
    ignore: bool = False
    deprecated: str | bool | None = None
    version: str | None = None
    since: str | None = None
    author: list[str] = dc.field(default_factory=list)
    defaultvalue: str | None = None
    readme: str | None = None
    code: str | None = None
    signature: str = ""
    attribs: str = ""
    id: str = ""
    ancestors: list[str] = dc.field(default_factory=list)
    module: Doclet | None = None

    @classmethod
    def from_mapping(cls, payload: typ.Mapping[str, typ.Any]) -> Doclet:
        """Build a doclet from one record of the extractor's JSON output."""
        meta_raw = payload.get("meta")
        meta = None
        if isinstance(meta_raw, dict):
            meta = DocletMeta(
                path=meta_raw.get("path"),
                filename=meta_raw.get("filename"),
                lineno=meta_raw.get("lineno"),
            )
        params = [
            Param(
                name=str(item.get("name", "")),
                type_names=_type_names(item),
                description=item.get("description", "") or "",
                optional=bool(item.get("optional", False)),
                nullable=item.get("nullable"),
                variable=bool(item.get("variable", False)),
                defaultvalue=_optional_text(item.get("defaultvalue")),
            )
            for item in payload.get("params") or []
            if isinstance(item, dict)
        ]
        returns = [
            Returns(
                type_names=_type_names(item),
                description=item.get("description", "") or "",
            )
            for item in payload.get("returns") or []
            if isinstance(item, dict)
        ]
        deprecated = payload.get("deprecated")
        return cls(
            longname=str(payload.get("longname", "")),
            name=str(payload.get("name", "")),
            kind=str(payload.get("kind", "")),
            memberof=payload.get("memberof"),
            scope=payload.get("scope"),
            description=payload.get("description", "") or "",
            summary=payload.get("summary", "") or "",
            classdesc=payload.get("classdesc", "") or "",
            meta=meta,
            see=_string_list(payload.get("see")),
            examples=_string_list(payload.get("examples")),
            type_names=_type_names(payload),
            params=params,
            returns=returns,
            augments=_string_list(payload.get("augments")),
            fires=_string_list(payload.get("fires")),
            listeners=_string_list(payload.get("listeners")),
            access=payload.get("access"),
            virtual=bool(payload.get("virtual") or payload.get("abstract")),
            readonly=payload.get("readonly") is True,
            undocumented=payload.get("undocumented") is True,
            ignore=payload.get("ignore") is True,
            deprecated=deprecated if isinstance(deprecated, (str, bool)) else None,
            version=_optional_text(payload.get("version")),
            since=_optional_text(payload.get("since")),
            author=_string_list(payload.get("author")),
            defaultvalue=_optional_text(payload.get("defaultvalue")),
        )


@dc.dataclass(slots=True)
class SourceFile:
    """Resolved and shortened forms of one source file path."""

    resolved: str
    shortened: str | None = None


@dc.dataclass(slots=True)
class TutorialNode:
    """A narrative documentation page and its ordered children.

    The root node has an empty ``name``; every other node has exactly one
    parent, so depth-first traversal needs no visited set.
    """

    name: str = ""
    title: str = ""
    content: str = ""
    content_type: str = MARKDOWN_CONTENT
    children: list[TutorialNode] = dc.field(default_factory=list)

    def parse(self, renderer: HtmlContentRenderer) -> str:
        """Return the rendered HTML body of this tutorial.

        HTML sources pass through untouched; Markdown goes through the same
        renderer as the README so fenced code is highlighted alike.
        """
        if self.content_type == HTML_CONTENT:
            return self.content
        return renderer.markdown(self.content)

    def find(self, name: str) -> TutorialNode | None:
        """Return the descendant called ``name`` or ``None``."""
        for child in self.children:
            if child.name == name:
                return child
            match = child.find(name)
            if match is not None:
                return match
        return None


@dc.dataclass(slots=True)
class Members:
    """Doclets partitioned by kind for navigation and page generation."""

    classes: list[Doclet] = dc.field(default_factory=list)
    externals: list[Doclet] = dc.field(default_factory=list)
    events: list[Doclet] = dc.field(default_factory=list)
    globals: list[Doclet] = dc.field(default_factory=list)
    mixins: list[Doclet] = dc.field(default_factory=list)
    modules: list[Doclet] = dc.field(default_factory=list)
    namespaces: list[Doclet] = dc.field(default_factory=list)
    tutorials: list[TutorialNode] = dc.field(default_factory=list)


def _type_names(payload: typ.Mapping[str, typ.Any]) -> list[str]:
    type_info = payload.get("type")
    if not isinstance(type_info, dict):
        return []
    return _string_list(type_info.get("names"))


def _string_list(value: object) -> list[str]:
    """Normalize a scalar or list payload value into a list of strings."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [str(item) for item in value if item is not None]
    return []


def _optional_text(value: object) -> str | None:
    if value is None:
        return None
    return str(value)


__all__ = [
    "HTML_CONTENT",
    "MARKDOWN_CONTENT",
    "Doclet",
    "DocletMeta",
    "Example",
    "Members",
    "Param",
    "Returns",
    "SourceFile",
    "TutorialNode",
]

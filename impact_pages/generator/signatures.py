"""Derive signature and attribute badge HTML for callables and typed members.

Each helper returns a new :class:`~impact_pages.doclets.Doclet`. Signature text
is appended to whatever the doclet already carries, so the publisher calls each
helper exactly once per doclet.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from html import escape

if typ.TYPE_CHECKING:
    from impact_pages.doclets import Doclet

    from .links import LinkRegistry

ATTRIB_KINDS = ("function", "member", "constant")


def needs_signature(doclet: Doclet) -> bool:
    """Return whether ``doclet`` gets a parameter/return signature.

    Functions and classes always do; typedefs do when one of their declared
    types is ``function`` (any case).
    """
    if doclet.kind in ("function", "class"):
        return True
    if doclet.kind == "typedef":
        return any(name.lower() == "function" for name in doclet.type_names)
    return False


def get_signature_params(doclet: Doclet, optional_class: str | None = "optional") -> list[str]:
    """Return top-level parameter names, wrapping optional ones in a span."""
    names: list[str] = []
    for param in doclet.params:
        if not param.name or "." in param.name:
            continue
        if param.optional and optional_class:
            names.append(f'<span class="{optional_class}">{escape(param.name)}</span>')
        else:
            names.append(escape(param.name))
    return names


def get_signature_returns(doclet: Doclet, registry: LinkRegistry) -> list[str]:
    """Return linked return type names."""
    return [
        registry.linkto(name)
        for returns in doclet.returns
        for name in returns.type_names
    ]


def get_signature_types(doclet: Doclet, registry: LinkRegistry) -> list[str]:
    """Return linked declared type names."""
    return [registry.linkto(name) for name in doclet.type_names]


def get_attribs(doclet: Doclet) -> list[str]:
    """Return the attribute labels shown in a doclet's badge."""
    attribs: list[str] = []
    if doclet.virtual:
        attribs.append("abstract")
    if doclet.access and doclet.access != "public":
        attribs.append(doclet.access)
    if (
        doclet.scope
        and doclet.scope not in ("instance", "global")
        and doclet.kind in ATTRIB_KINDS
    ):
        attribs.append(doclet.scope)
    if doclet.readonly and doclet.kind == "member":
        attribs.append("readonly")
    if doclet.kind == "constant":
        attribs.append("constant")
    return attribs


def add_signature_params(doclet: Doclet) -> Doclet:
    """Append the parenthesized parameter list to the signature."""
    params = get_signature_params(doclet)
    return dc.replace(doclet, signature=f"{doclet.signature}({', '.join(params)})")


def add_signature_returns(doclet: Doclet, registry: LinkRegistry) -> Doclet:
    """Wrap the signature and append the ``→ {T}`` return fragment."""
    return_types = get_signature_returns(doclet, registry)
    returns_html = f" &rarr; {{{'|'.join(return_types)}}}" if return_types else ""
    signature = (
        f'<span class="signature">{doclet.signature}</span>'
        f'<span class="type-signature">{returns_html}</span>'
    )
    return dc.replace(doclet, signature=signature)


def add_signature_types(doclet: Doclet, registry: LinkRegistry) -> Doclet:
    """Append the ``:T1|T2`` declared type fragment to the signature."""
    types = get_signature_types(doclet, registry)
    types_html = f" :{'|'.join(types)}" if types else ""
    return dc.replace(
        doclet,
        signature=f'{doclet.signature}<span class="type-signature">{types_html}</span>',
    )


def add_attribs(doclet: Doclet) -> Doclet:
    """Set the escaped ``<a1, a2>`` attribute badge."""
    attribs = get_attribs(doclet)
    badge = f"<{', '.join(attribs)}> " if attribs else ""
    return dc.replace(
        doclet,
        attribs=f'<span class="type-signature">{escape(badge, quote=False)}</span>',
    )


__all__ = [
    "add_attribs",
    "add_signature_params",
    "add_signature_returns",
    "add_signature_types",
    "get_attribs",
    "get_signature_params",
    "get_signature_returns",
    "get_signature_types",
    "needs_signature",
]

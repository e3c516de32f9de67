"""Attach classes or functions exported as a whole module to that module."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from impact_pages.doclets import Doclet


def require_alias(name: str) -> str:
    """Return the call-style display alias for a module-qualified name.

    >>> require_alias("module:foo")
    'require("foo")'
    """
    return name.replace("module:", 'require("', 1) + '")'


def attach_module_symbols(
    symbols: cabc.Sequence[Doclet], modules: cabc.Sequence[Doclet]
) -> tuple[list[Doclet], list[Doclet]]:
    """Link each module to the class or function sharing its longname.

    A class or function whose longname equals a module's longname is the
    module's only export. The module gets it as ``module`` and the symbol is
    renamed to its ``require("...")`` alias for display.

    Parameters
    ----------
    symbols : Sequence[Doclet]
        Class and function doclets to match.
    modules : Sequence[Doclet]
        Module doclets to search.

    Returns
    -------
    tuple[list[Doclet], list[Doclet]]
        The updated symbols (only those that matched) and every module, with
        matched modules carrying their attached symbol. Inputs are untouched.
    """
    lookup: dict[str, Doclet] = {}
    for symbol in symbols:
        lookup[symbol.longname] = symbol

    renamed: dict[str, Doclet] = {}
    updated_modules: list[Doclet] = []
    for module in modules:
        symbol = lookup.get(module.longname)
        if symbol is None:
            updated_modules.append(module)
            continue
        if module.longname not in renamed:
            renamed[module.longname] = dc.replace(symbol, name=require_alias(symbol.name))
        updated_modules.append(dc.replace(module, module=renamed[module.longname]))
    return list(renamed.values()), updated_modules


__all__ = ["attach_module_symbols", "require_alias"]

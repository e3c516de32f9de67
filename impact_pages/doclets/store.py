"""Queryable, ordered collection of doclets.

The store mirrors the small query surface the publish pipeline needs: attribute
matching via :meth:`DocletStore.find`, pruning of undocumented or private
records, a stable sort, and per-doclet stage application that returns a fresh
store instead of mutating records in place.

Example
-------
>>> from impact_pages.doclets import Doclet, DocletStore
>>> store = DocletStore([Doclet(longname="b", kind="class"), Doclet(longname="a")])
>>> [d.longname for d in store.sort().find(kind="class")]
['b']
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import json
import typing as typ
from pathlib import Path

from impact_pages._constants import GLOBAL_KINDS
from impact_pages.errors import DocletLoadError

from .models import Doclet, Members, TutorialNode

Stage = cabc.Callable[[Doclet], Doclet]


class DocletStore:
    """Ordered collection of doclets with attribute-based lookups."""

    def __init__(self, doclets: cabc.Iterable[Doclet] = ()) -> None:
        self._doclets: list[Doclet] = list(doclets)

    @classmethod
    def from_json(cls, text: str) -> DocletStore:
        """Decode the extractor's JSON array of records into a store.

        Raises
        ------
        DocletLoadError
            Raised when ``text`` is not valid JSON or not a JSON array.
        """
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            msg = f"Doclet payload is not valid JSON: {exc}"
            raise DocletLoadError(msg) from exc
        if not isinstance(payload, list):
            msg = "Doclet payload must be a JSON array of records."
            raise DocletLoadError(msg)
        return cls(Doclet.from_mapping(item) for item in payload if isinstance(item, dict))

    def __iter__(self) -> cabc.Iterator[Doclet]:
        return iter(self._doclets)

    def __len__(self) -> int:
        return len(self._doclets)

    def find(self, **criteria: typ.Any) -> list[Doclet]:
        """Return doclets whose attributes satisfy every criterion.

        Parameters
        ----------
        **criteria : Any
            Attribute name to expected value. Lists, tuples and sets match by
            membership, callables act as predicates, and any other value
            (including ``None``) matches by equality.

        Returns
        -------
        list[Doclet]
            Matching doclets in store order.
        """
        return [doclet for doclet in self._doclets if _matches(doclet, criteria)]

    def prune(self, *, include_private: bool = False) -> DocletStore:
        """Drop undocumented, ignored, anonymous and (optionally) private doclets."""
        kept = [
            doclet
            for doclet in self._doclets
            if not doclet.undocumented
            and not doclet.ignore
            and doclet.memberof != "<anonymous>"
            and (include_private or doclet.access != "private")
        ]
        return DocletStore(kept)

    def sort(self) -> DocletStore:
        """Return a store ordered by longname, then version, then since."""
        return DocletStore(
            sorted(
                self._doclets,
                key=lambda d: (d.longname, d.version or "", d.since or ""),
            )
        )

    def map(self, stage: Stage) -> DocletStore:
        """Apply ``stage`` to every doclet and return the resulting store."""
        return DocletStore(stage(doclet) for doclet in self._doclets)

    def replace(self, updated: cabc.Iterable[Doclet]) -> DocletStore:
        """Return a store where doclets are swapped for updated versions.

        Records are matched by identity with the originals they were derived
        from, via ``(longname, kind)``; the first match per key wins.
        """
        lookup: dict[tuple[str, str], Doclet] = {}
        for doclet in updated:
            lookup.setdefault((doclet.longname, doclet.kind), doclet)
        return DocletStore(
            lookup.get((doclet.longname, doclet.kind), doclet)
            for doclet in self._doclets
        )

    def add_event_listeners(self) -> DocletStore:
        """Record each firing doclet's longname on the events it fires."""
        listeners: dict[str, list[str]] = {}
        for doclet in self._doclets:
            for event in doclet.fires:
                listeners.setdefault(event, []).append(doclet.longname)
        if not listeners:
            return DocletStore(self._doclets)

        def _attach(doclet: Doclet) -> Doclet:
            if doclet.kind != "event" or doclet.longname not in listeners:
                return doclet
            merged = list(doclet.listeners)
            for longname in listeners[doclet.longname]:
                if longname not in merged:
                    merged.append(longname)
            return dc.replace(doclet, listeners=merged)

        return self.map(_attach)

    def by_longname(self) -> dict[str, Doclet]:
        """Return the first doclet recorded for each longname."""
        index: dict[str, Doclet] = {}
        for doclet in self._doclets:
            index.setdefault(doclet.longname, doclet)
        return index

    def get_members(self, tutorials: TutorialNode | None = None) -> Members:
        """Group doclets by kind; globals are unparented members and callables."""
        return Members(
            classes=self.find(kind="class"),
            externals=self.find(kind="external"),
            events=self.find(kind="event"),
            globals=self.find(kind=GLOBAL_KINDS, memberof=None),
            mixins=self.find(kind="mixin"),
            modules=self.find(kind="module"),
            namespaces=self.find(kind="namespace"),
            tutorials=list(tutorials.children) if tutorials else [],
        )


def load_doclets(path: Path) -> DocletStore:
    """Read a JSON doclet dump from ``path`` into a :class:`DocletStore`."""
    if not path.exists():
        msg = f"Doclet file '{path}' not found."
        raise FileNotFoundError(msg)
    return DocletStore.from_json(path.read_text(encoding="utf-8"))


def _matches(doclet: Doclet, criteria: typ.Mapping[str, typ.Any]) -> bool:
    for name, expected in criteria.items():
        actual = getattr(doclet, name, None)
        match expected:
            case list() | tuple() | set() | frozenset():
                if actual not in expected:
                    return False
            case _ if callable(expected):
                if actual is None or not expected(actual):
                    return False
            case _:
                if actual != expected:
                    return False
    return True


__all__ = ["DocletStore", "Stage", "load_doclets"]

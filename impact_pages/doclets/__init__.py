"""Documentation records, the queryable doclet store, and tutorial trees."""

from .models import (
    Doclet,
    DocletMeta,
    Example,
    Members,
    Param,
    Returns,
    SourceFile,
    TutorialNode,
)
from .store import DocletStore, load_doclets
from .tutorials import load_tutorials

__all__ = [
    "Doclet",
    "DocletMeta",
    "DocletStore",
    "Example",
    "Members",
    "Param",
    "Returns",
    "SourceFile",
    "TutorialNode",
    "load_doclets",
    "load_tutorials",
]

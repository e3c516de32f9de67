"""Link registry, signatures, navigation, and page generation for a publish run."""

from .links import LinkRegistry
from .models import NavEntry, NavFolder, Navigation, TocEntry
from .page_writer import PageWriter, build_environment
from .publisher import Publisher
from .renderer import HtmlContentRenderer

__all__ = [
    "HtmlContentRenderer",
    "LinkRegistry",
    "NavEntry",
    "NavFolder",
    "Navigation",
    "PageWriter",
    "Publisher",
    "TocEntry",
    "build_environment",
]

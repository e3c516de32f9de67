"""Publish static HTML API documentation for the Impact++ framework.

This package turns the doclet records emitted by a JSDoc-style extractor, plus
an optional tutorial folder, into a browsable site: one page per class,
namespace, module, mixin and external, a globals page, an index, highlighted
source listings and tutorial pages, with a sidebar grouped by source folder.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``Publisher``: Programmatic entry point running one publish pass.

Examples
--------
>>> from impact_pages import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

import logging

from .cli import app, main
from .generator import Publisher

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["Publisher", "app", "main"]

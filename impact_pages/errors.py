"""Exception hierarchy and the shared recoverable-error handler.

Fatal failures (output directory creation, static asset copies, page writes)
propagate as the underlying ``OSError``. Content problems that should not abort
a publish run are routed through :func:`handle`, which logs and returns.
"""

from __future__ import annotations

import logging

LOGGER = logging.getLogger(__name__)

__all__ = [
    "DocletLoadError",
    "PublishError",
    "TemplateNotFoundError",
    "TutorialLoadError",
    "handle",
]


class PublishError(RuntimeError):
    """Base exception for documentation publish failures."""


class TemplateNotFoundError(PublishError):
    """Raised when a template directory lacks its ``tmpl`` subfolder."""


class DocletLoadError(PublishError):
    """Raised when the doclet JSON payload cannot be decoded."""


class TutorialLoadError(PublishError):
    """Raised when tutorial hierarchy configuration is malformed."""


def handle(exc: BaseException, *, context: str | None = None) -> None:
    """Log a recoverable error without interrupting the publish run.

    Parameters
    ----------
    exc : BaseException
        The exception raised while producing a single page.
    context : str, optional
        Short description of what was being processed, included in the log.
    """
    label = context or type(exc).__name__
    LOGGER.warning("Skipping %s: %s", label, exc)
    LOGGER.debug("Recoverable error details", exc_info=exc)

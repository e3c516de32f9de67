"""Load and validate publish configuration for impact_pages runs.

This subpackage parses the documentation tool's configuration file (YAML or
JSON), resolves relative paths, and produces typed dataclasses
(:class:`PublishOptions`, :class:`TemplateConfig`, :class:`BrandingConfig`)
consumed by the publisher. The primary entry point is
:func:`load_publish_config`.

Examples
--------
>>> from pathlib import Path
>>> from impact_pages.config import load_publish_config
>>> options = load_publish_config(Path("conf.yaml"))  # doctest: +SKIP
>>> options.destination  # doctest: +SKIP
PosixPath('/project/out')
"""

from .loader import load_publish_config
from .models import (
    DEFAULT_TEMPLATE_DIR,
    BrandingConfig,
    PublishConfigError,
    PublishOptions,
    StaticFilesConfig,
    TemplateConfig,
)

__all__ = [
    "DEFAULT_TEMPLATE_DIR",
    "BrandingConfig",
    "PublishConfigError",
    "PublishOptions",
    "StaticFilesConfig",
    "TemplateConfig",
    "load_publish_config",
]

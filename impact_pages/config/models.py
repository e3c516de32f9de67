"""Typed dataclasses describing publish configuration structures."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from impact_pages._constants import (
    DEFAULT_EXCLUDED_NAMESPACE,
    DEFAULT_FOLDER_ALIASES,
    DEFAULT_LOGO,
    DEFAULT_MAINPAGE_TITLE,
    DEFAULT_ROOT_NAMESPACE,
    DEFAULT_SITE_NAME,
    DEFAULT_SITE_URL,
)

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parents[1] / "template"


class PublishConfigError(ValueError):
    """Raised when the publish configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class StaticFilesConfig:
    """Extra static asset locations copied verbatim into the output tree."""

    paths: list[Path] = dc.field(default_factory=list)
    include_pattern: str | None = None
    exclude_pattern: str | None = None


@dc.dataclass(slots=True)
class TemplateConfig:
    """Template-level switches from the ``templates.default`` block."""

    output_source_files: bool = False
    static_files: StaticFilesConfig = dc.field(default_factory=StaticFilesConfig)


@dc.dataclass(slots=True)
class BrandingConfig:
    """Framework identity used by navigation, breadcrumb and page titles."""

    site_name: str = DEFAULT_SITE_NAME
    site_url: str = DEFAULT_SITE_URL
    logo: str | None = DEFAULT_LOGO
    root_namespace: str | None = DEFAULT_ROOT_NAMESPACE
    excluded_namespace: str | None = DEFAULT_EXCLUDED_NAMESPACE
    folder_aliases: dict[str, str] = dc.field(
        default_factory=lambda: dict(DEFAULT_FOLDER_ALIASES)
    )


@dc.dataclass(slots=True)
class PublishOptions:
    """A fully resolved publish run configuration."""

    destination: Path = Path("out")
    template: Path = DEFAULT_TEMPLATE_DIR
    readme: Path | None = None
    mainpagetitle: str | None = None
    include_private: bool = False
    tutorials: Path | None = None
    templates: TemplateConfig = dc.field(default_factory=TemplateConfig)
    branding: BrandingConfig = dc.field(default_factory=BrandingConfig)

    @property
    def mainpage_title(self) -> str:
        """Return the configured main page title or the default label."""
        return self.mainpagetitle or DEFAULT_MAINPAGE_TITLE

    def with_overrides(self, **values: typ.Any) -> PublishOptions:
        """Return a copy with every non-``None`` override applied.

        Keys naming fields of :class:`PublishOptions` replace them directly;
        ``output_source_files`` toggles the template switch of the same name.
        """
        updates = {key: value for key, value in values.items() if value is not None}
        output_source_files = updates.pop("output_source_files", None)
        unknown = set(updates) - {field.name for field in dc.fields(self)}
        if unknown:
            msg = f"Unknown publish option(s): {', '.join(sorted(unknown))}"
            raise PublishConfigError(msg)
        result = dc.replace(self, **updates)
        if output_source_files is not None:
            result.templates = dc.replace(
                result.templates, output_source_files=bool(output_source_files)
            )
        return result


__all__ = [
    "DEFAULT_TEMPLATE_DIR",
    "BrandingConfig",
    "PublishConfigError",
    "PublishOptions",
    "StaticFilesConfig",
    "TemplateConfig",
]

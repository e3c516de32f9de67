"""Cyclopts CLI entrypoint for publishing Impact++ API documentation.

The ``pages`` console script reads the doclet JSON emitted by the documentation
extractor, merges the optional conf file with command-line overrides, and
writes the static HTML site. Every option can also be supplied through an
``INPUT_*`` environment variable, which keeps CI invocations short.

Examples
--------
Publish using a conf file next to the doclet dump:

>>> from impact_pages.cli import app
>>> app.run(
...     ["publish", "doclets.json", "--config", "conf.yaml"]
... )  # doctest: +SKIP

Override the destination and include private symbols:

>>> app.run(
...     ["publish", "doclets.json", "--destination", "site", "--private"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_publish_config
from .doclets import load_doclets, load_tutorials
from .generator import Publisher

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

app = App(name="pages", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT
    )


@app.command(help="Publish HTML API documentation from a doclet JSON dump.")
def publish(
    doclets: typ.Annotated[
        Path, Parameter(help="Doclet JSON produced by the extractor")
    ],
    *,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to the conf file", env_var="INPUT_CONFIG")
    ] = None,
    destination: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_DESTINATION"),
    ] = None,
    template: typ.Annotated[
        Path | None,
        Parameter(help="Template directory holding tmpl/ and static/"),
    ] = None,
    readme: typ.Annotated[
        Path | None, Parameter(help="Markdown README shown on the index page")
    ] = None,
    mainpagetitle: typ.Annotated[
        str | None, Parameter(help="Title of the README section on the index")
    ] = None,
    tutorials: typ.Annotated[
        Path | None, Parameter(help="Folder holding tutorial sources")
    ] = None,
    private: typ.Annotated[
        bool | None, Parameter(help="Include symbols marked private")
    ] = None,
    output_source_files: typ.Annotated[
        bool | None, Parameter(help="Write highlighted source listing pages")
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Enable debug logging")] = False,
) -> None:
    """Generate the documentation site for one doclet dump.

    Parameters
    ----------
    doclets : Path
        JSON array of doclet records.
    config : Path or None, optional
        Conf file (YAML or JSON) with ``opts``, ``templates`` and ``branding``
        sections. When omitted, built-in defaults apply.
    destination, template, readme, mainpagetitle, tutorials : optional
        Override the matching ``opts`` entries of the conf file.
    private : bool or None, optional
        Include private symbols when ``True``.
    output_source_files : bool or None, optional
        Override ``templates.default.outputSourceFiles``.
    verbose : bool, optional
        Log every pipeline stage at DEBUG level.

    Raises
    ------
    FileNotFoundError
        If the doclet file or an explicit conf file does not exist.
    impact_pages.errors.PublishError
        If the doclets, tutorials or template cannot be loaded.
    """
    _configure_logging(verbose=verbose)
    options = load_publish_config(config).with_overrides(
        destination=destination,
        template=template,
        readme=readme,
        mainpagetitle=mainpagetitle,
        tutorials=tutorials,
        include_private=private,
        output_source_files=output_source_files,
    )
    store = load_doclets(doclets)
    publisher = Publisher(store, load_tutorials(options.tutorials), options)
    for path in publisher.run():
        print(f"wrote {_format_path(path)}")


def main() -> None:
    """Invoke the Cyclopts application behind the ``pages`` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()

"""Cyclopts CLI entrypoint for building a docweld site.

The ``docweld`` console script reads an optional ``docweld.yaml``, renders the
content tree below the source directory, and writes one ``index.html`` per
page below the output directory. Every written path is printed; failed pages
are reported and make the command exit with status 1.

Examples
--------
Build with the configuration in the current directory:

>>> from docweld.cli import main
>>> main()  # doctest: +SKIP

Build a tree into a custom directory:

>>> from docweld.cli import app
>>> app(["build", "--source", "pages", "--output-dir", "dist"])  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import SiteConfig, load_site_config
from .generator import SiteBuilder

DEFAULT_CONFIG = Path("docweld.yaml")
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

app = App(name="docweld", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _resolve_config(config: Path | None) -> SiteConfig:
    """Load ``config``, the default file when present, or the built-in defaults."""
    if config is not None:
        return load_site_config(config)
    if DEFAULT_CONFIG.exists():
        return load_site_config(DEFAULT_CONFIG)
    return SiteConfig()


@app.command(help="Render the content tree into static HTML pages.")
def build(
    *,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = None,
    source: typ.Annotated[
        Path | None,
        Parameter(help="Override the content directory", env_var="INPUT_SOURCE"),
    ] = None,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    verbose: typ.Annotated[
        bool, Parameter(help="Log debug output", env_var="INPUT_VERBOSE")
    ] = False,
) -> None:
    """Build every page of the site.

    Parameters
    ----------
    config : Path or None, optional
        Path to the YAML site configuration; ``docweld.yaml`` is used when it
        exists and built-in defaults otherwise.
    source : Path or None, optional
        Content directory overriding ``source_dir`` from the config.
    output_dir : Path or None, optional
        Output directory overriding ``output_dir`` from the config.
    verbose : bool, optional
        Enable debug logging.

    Raises
    ------
    SystemExit
        With status 1 when any page failed to render or write.
    LoadError
        If the content tree or theme cannot be read.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT
    )
    site_config = _resolve_config(config)
    overrides: dict[str, Path] = {}
    if source is not None:
        overrides["source_dir"] = source
    if output_dir is not None:
        overrides["output_dir"] = output_dir
    if overrides:
        site_config = dc.replace(site_config, **overrides)

    summary = SiteBuilder(site_config).run()
    for path in summary.written:
        print(f"wrote {_format_path(path)}")
    for page_id, reason in sorted(summary.failed.items()):
        print(f"failed {page_id}: {reason}")
    if not summary.ok:
        raise SystemExit(1)


def main() -> None:
    """Invoke the Cyclopts application that powers the ``docweld`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()

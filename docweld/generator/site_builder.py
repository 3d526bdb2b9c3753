"""High-level orchestration for a full site build.

:class:`SiteBuilder` loads the content tree once, builds the shared table of
contents, renders every page with :class:`PageRenderer`, and writes each
result with :class:`OutputWriter`. Page-level failures are logged and
collected into the returned :class:`RunSummary` instead of aborting the run;
only an unreadable source tree or theme stops it.

Example
-------
>>> from pathlib import Path
>>> from docweld.config import load_site_config
>>> from docweld.generator import SiteBuilder
>>> config = load_site_config(Path("docweld.yaml"))  # doctest: +SKIP
>>> summary = SiteBuilder(config).run()  # doctest: +SKIP
>>> summary.ok  # doctest: +SKIP
True
"""

from __future__ import annotations

import logging
import typing as typ

from docweld._constants import STYLESHEET_FILENAME
from docweld.errors import BindingError, ConversionError, WriteError

from .highlighter import CodeHighlighter
from .loader import PageLoader
from .models import RunSummary
from .page_renderer import PageRenderer
from .theme import Theme
from .toc import TocBuilder
from .writer import OutputWriter

if typ.TYPE_CHECKING:
    from docweld.config import SiteConfig

logger = logging.getLogger(__name__)


class SiteBuilder:
    """Render a content tree into a static HTML tree."""

    def __init__(self, config: SiteConfig, *, theme: Theme | None = None) -> None:
        """Initialize the builder.

        Parameters
        ----------
        config : SiteConfig
            Immutable run configuration.
        theme : Theme, optional
            Pre-loaded theme; read from ``config.theme_dir`` (or the bundled
            theme) when omitted.
        """
        self.config = config
        self.theme = theme or Theme.from_directory(config.theme_dir)
        self.highlighter = CodeHighlighter(config.pygments_style)
        self.writer = OutputWriter(config.source_dir, config.output_dir)

    def run(self) -> RunSummary:
        """Render and write every page.

        Returns
        -------
        RunSummary
            Written paths and the reason each failed page was skipped.

        Raises
        ------
        LoadError
            If the source tree cannot be read.
        """
        pages = PageLoader(self.config.source_dir).load()
        toc = TocBuilder(self.config.source_dir).build(pages)
        renderer = PageRenderer(
            self.config, self.theme, toc=toc, highlighter=self.highlighter
        )
        summary = RunSummary()
        for page_id in sorted(pages):
            page = pages[page_id]
            try:
                renderer.render(page)
                summary.written.append(self.writer.write(page))
            except (ConversionError, BindingError, WriteError) as exc:
                logger.warning("skipping %s: %s", page_id, exc)
                summary.failed[page_id] = str(exc)
        logger.info(
            "rendered %d of %d pages", len(pages) - len(summary.failed), len(pages)
        )

        try:
            summary.written.append(
                self.writer.write_asset(
                    STYLESHEET_FILENAME, self.highlighter.stylesheet
                )
            )
        except WriteError as exc:
            logger.warning("skipping %s: %s", STYLESHEET_FILENAME, exc)
            summary.failed[STYLESHEET_FILENAME] = str(exc)
        return summary


__all__ = ["SiteBuilder"]

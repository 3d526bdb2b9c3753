"""Utilities for loading, rendering, and writing docweld pages."""

from .highlighter import CodeHighlighter
from .loader import PageLoader
from .models import Page, PageMetadata, RunSummary
from .page_renderer import PageRenderer, repair_highlight_defects
from .renderer import MarkdownConverter
from .site_builder import SiteBuilder
from .theme import Theme
from .toc import TocBuilder
from .writer import OutputWriter

__all__ = [
    "CodeHighlighter",
    "MarkdownConverter",
    "OutputWriter",
    "Page",
    "PageLoader",
    "PageMetadata",
    "PageRenderer",
    "RunSummary",
    "SiteBuilder",
    "Theme",
    "TocBuilder",
    "repair_highlight_defects",
]

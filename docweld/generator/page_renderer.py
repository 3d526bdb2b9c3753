"""Render one page through its theme template.

Each call to :meth:`PageRenderer.render` walks a page through the same
stages: the author is resolved and the markdown body converted, a context is
built for the article or directory template, the engine binds it onto a fresh
copy of that template, placeholders left without data are pruned, the head
metadata is filled in, and the serialized document is highlighted and
repaired. The final HTML replaces ``page.content``.

Example
-------
>>> from docweld.config import SiteConfig
>>> from docweld.generator.models import Page
>>> from docweld.generator.page_renderer import PageRenderer
>>> from docweld.generator.theme import Theme
>>> renderer = PageRenderer(SiteConfig(), Theme.from_directory())
>>> html = renderer.render(Page(path="/srv/pages", listing=[]))  # doctest: +SKIP
"""

from __future__ import annotations

import collections.abc as cabc
import os
import typing as typ
from pathlib import Path

import msgspec
from bs4 import BeautifulSoup

from docweld._constants import (
    ARTICLE_TEMPLATE,
    DIRECTORY_TEMPLATE,
    HIGHLIGHT_DEFECT,
    HIGHLIGHT_REPAIR,
    KEYWORD_SEPARATOR,
    TITLE_SEPARATOR,
)
from docweld.binding import BindingEngine
from docweld.errors import BindingError

from .highlighter import CodeHighlighter
from .renderer import MarkdownConverter

if typ.TYPE_CHECKING:
    from bs4 import Tag

    from docweld.config import SiteConfig

    from .models import Page, PageMetadata
    from .theme import Theme

# Ancestor distance from the date element to its block in themes that do not
# mark the block with ``data-removable="date"``.
DATE_BLOCK_DEPTH = 3
DEFAULT_DIRECTORY_METADATA: dict[str, typ.Any] = {"breadcrumb": ["."]}


class Highlighter(typ.Protocol):
    """Callable surface PageRenderer needs from a syntax highlighter."""

    def highlight(
        self, html: str, *, auto_detect: bool = True, preserve_entities: bool = True
    ) -> str: ...


def repair_highlight_defects(html: str) -> str:
    """Restore ``&gt;`` entities the highlighter split into identifier spans."""
    return html.replace(HIGHLIGHT_DEFECT, HIGHLIGHT_REPAIR)


class PageRenderer:
    """Bind pages onto the article or directory template."""

    def __init__(
        self,
        config: SiteConfig,
        theme: Theme,
        *,
        toc: str = "",
        converter: MarkdownConverter | None = None,
        highlighter: Highlighter | None = None,
        engine: BindingEngine | None = None,
    ) -> None:
        """Initialize the renderer with shared, read-only run state.

        Parameters
        ----------
        config : SiteConfig
            Site label, global tags, source root, and author registry.
        theme : Theme
            Parsed article and directory templates.
        toc : str, optional
            Pre-rendered table of contents bound into every page.
        converter : MarkdownConverter, optional
            Markdown collaborator; defaults to :class:`MarkdownConverter`.
        highlighter : Highlighter, optional
            Syntax highlighter; defaults to a :class:`CodeHighlighter` using
            the configured Pygments style.
        engine : BindingEngine, optional
            Binding engine; defaults to one with the standard rule set.
        """
        self.config = config
        self.theme = theme
        self.toc = toc
        self.source_root = config.source_dir.resolve()
        self.converter = converter or MarkdownConverter()
        self.highlighter = highlighter or CodeHighlighter(config.pygments_style)
        self.engine = engine or BindingEngine()

    def render(self, page: Page) -> str:
        """Render ``page`` to HTML, store it in ``page.content``, and return it.

        Raises
        ------
        ConversionError
            If markdown conversion or highlighting fails.
        BindingError
            If the template lacks a required placeholder, a value is
            malformed, or the page metadata was rejected on load.
        """
        if page.metadata_error is not None:
            raise BindingError(page.metadata_error)
        metadata = self._resolve_author(page.metadata)
        page.metadata = metadata
        body = self.converter.render(page.content) if page.content else None

        if page.is_article:
            tree = self.theme.clone(ARTICLE_TEMPLATE)
            context: dict[str, typ.Any] = {
                "metadata": _metadata_context(metadata),
                "toc": self.toc,
                "content": body,
            }
            required: tuple[str, ...] = ("metadata", "content")
        else:
            tree = self.theme.clone(DIRECTORY_TEMPLATE)
            context = {
                "pwd": self._relative_path(page.path),
                "listing": list(page.listing or []),
                "toc": self.toc,
                "metadata": _metadata_context(metadata)
                if metadata is not None
                else DEFAULT_DIRECTORY_METADATA,
            }
            required = ("listing",)

        self.engine.bind(tree, context, required=required)
        if metadata is not None:
            self._prune(tree, metadata)
        self._fill_head(tree, metadata)

        html = self.highlighter.highlight(
            str(tree), auto_detect=True, preserve_entities=True
        )
        html = repair_highlight_defects(html)
        page.content = html
        return html

    def _resolve_author(self, metadata: PageMetadata | None) -> PageMetadata | None:
        """Replace an author id with the registry record it names."""
        if metadata is None or not isinstance(metadata.author, str):
            return metadata
        return msgspec.structs.replace(
            metadata, author=self.config.resolve_author(metadata.author)
        )

    def _relative_path(self, page_id: str) -> str:
        return Path(os.path.relpath(page_id, self.source_root)).as_posix()

    @staticmethod
    def _prune(tree: BeautifulSoup, metadata: PageMetadata) -> None:
        """Remove title and date markup the metadata left undefined."""
        if metadata.title is msgspec.UNSET:
            for element in tree.select("#metadata .title"):
                element.decompose()
        if metadata.date is msgspec.UNSET:
            blocks: list[Tag] = []
            for element in tree.select("#metadata .date"):
                block = _date_block(element)
                if not any(block is seen for seen in blocks):
                    blocks.append(block)
            for block in blocks:
                block.decompose()

    def _fill_head(self, tree: BeautifulSoup, metadata: PageMetadata | None) -> None:
        if metadata is not None and isinstance(metadata.title, str) and metadata.title:
            title = tree.find("title")
            if title is not None:
                title.string = f"{self.config.site_label}{TITLE_SEPARATOR}{metadata.title}"

        keywords = tree.find("meta", attrs={"name": "keywords"})
        if keywords is not None:
            tags = metadata.page_tags() if metadata is not None else []
            keywords["content"] = KEYWORD_SEPARATOR.join(
                dict.fromkeys([*tags, *self.config.tags])
            )


def _metadata_context(metadata: PageMetadata) -> dict[str, typ.Any]:
    """Return the defined metadata fields as plain data for binding."""
    context = msgspec.to_builtins(metadata)
    if not isinstance(context, cabc.Mapping):  # pragma: no cover - msgspec contract
        msg = "Page metadata did not convert to a mapping."
        raise TypeError(msg)
    return dict(context)


def _date_block(element: Tag) -> Tag:
    """Return the removable block hosting a date element."""
    for ancestor in element.parents:
        if isinstance(ancestor, BeautifulSoup):
            break
        if "date" in str(ancestor.get("data-removable") or "").split():
            return ancestor
    block = element
    for _ in range(DATE_BLOCK_DEPTH):
        parent = block.parent
        if parent is None or isinstance(parent, BeautifulSoup):
            break
        block = parent
    return block


__all__ = [
    "DATE_BLOCK_DEPTH",
    "Highlighter",
    "PageRenderer",
    "repair_highlight_defects",
]

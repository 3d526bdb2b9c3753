"""Tests for rendering individual pages through the bundled theme.

These tests drive :class:`docweld.generator.PageRenderer` with the packaged
``article.html`` and ``directory.html`` templates and assert on the parsed
output: template selection, author resolution, metadata-driven pruning, head
title and keywords, directory fallbacks, highlighting, and the repair of the
highlighter's mangled ``&gt;`` entities.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import pytest
from bs4 import BeautifulSoup

from docweld._constants import HIGHLIGHT_DEFECT
from docweld.config import AuthorRecord, SiteConfig
from docweld.errors import BindingError
from docweld.generator import Page, PageMetadata, PageRenderer, Theme

if typ.TYPE_CHECKING:
    from pathlib import Path

TOC = '<ul class="toc-tree"><li><a href="/guides/">guides</a></li></ul>'


class RecordingHighlighter:
    """Highlighter stub that appends the known defect to every document."""

    def __init__(self) -> None:
        self.calls: list[tuple[bool, bool]] = []

    def highlight(
        self, html: str, *, auto_detect: bool = True, preserve_entities: bool = True
    ) -> str:
        self.calls.append((auto_detect, preserve_entities))
        return html.replace(
            "</body>", f"<pre id='mangled'>a {HIGHLIGHT_DEFECT} b</pre></body>"
        )


@pytest.fixture
def config(tmp_path: Path) -> SiteConfig:
    return SiteConfig(
        site_label="node docs",
        tags=("nodejs", "docs"),
        source_dir=tmp_path / "pages",
        output_dir=tmp_path / "public",
        authors={"indexzero": AuthorRecord(name="Charlie Robbins", github="indexzero")},
    )


@pytest.fixture
def renderer(config: SiteConfig) -> PageRenderer:
    return PageRenderer(config, Theme.from_directory(), toc=TOC)


def _page_id(config: SiteConfig, *parts: str) -> str:
    return str(config.source_dir.resolve().joinpath(*parts))


def _article(
    config: SiteConfig, body: str = "# Guide\n\nBody text.\n", **fields: typ.Any
) -> Page:
    return Page(
        path=_page_id(config, "guide"), content=body, metadata=PageMetadata(**fields)
    )


def _render(renderer: PageRenderer, page: Page) -> BeautifulSoup:
    return BeautifulSoup(renderer.render(page), "html.parser")


def test_article_binds_content_title_and_toc(
    renderer: PageRenderer, config: SiteConfig
) -> None:
    page = _article(config, title="Guide", date="2011-03-04")

    soup = _render(renderer, page)

    heading = soup.select_one("section.content h1")
    assert heading is not None and heading.get_text() == "Guide"
    assert soup.select_one("#metadata .title").get_text() == "Guide"
    assert soup.title is not None and soup.title.get_text() == "node docs :: Guide"
    assert soup.select_one("#toc a")["href"] == "/guides/"
    assert page.content is not None
    assert '<section class="content">' in page.content


def test_article_date_carries_iso_timestamp(
    renderer: PageRenderer, config: SiteConfig
) -> None:
    soup = _render(renderer, _article(config, title="Guide", date="2011-03-04"))

    time = soup.select_one("#metadata time.date")
    assert time is not None
    assert time["datetime"] == "2011-03-04T00:00:00.000Z"
    assert time.get_text() == "2011-03-04"


def test_missing_date_removes_date_block(
    renderer: PageRenderer, config: SiteConfig
) -> None:
    soup = _render(renderer, _article(config, title="Guide", author="indexzero"))

    assert soup.select(".published") == []
    assert soup.select("time.date") == []
    assert soup.select_one(".author .name").get_text() == "Charlie Robbins"


def test_null_date_keeps_block_without_timestamp(
    renderer: PageRenderer, config: SiteConfig
) -> None:
    soup = _render(renderer, _article(config, title="Guide", date=None))

    time = soup.select_one(".published time.date")
    assert time is not None
    assert not time.has_attr("datetime")


def test_missing_title_removes_title_element(
    renderer: PageRenderer, config: SiteConfig
) -> None:
    soup = _render(renderer, _article(config, date="2011-03-04"))

    assert soup.select("#metadata .title") == []
    assert soup.title is not None and soup.title.get_text() == "node docs"


def test_registered_author_is_resolved(
    renderer: PageRenderer, config: SiteConfig
) -> None:
    page = _article(config, title="Guide", author="indexzero")

    soup = _render(renderer, page)

    assert page.metadata is not None
    assert page.metadata.author == AuthorRecord(
        name="Charlie Robbins", github="indexzero"
    )
    link = soup.select_one(".author .github a")
    assert link is not None and link["href"] == "https://github.com/indexzero"


def test_unknown_author_renders_name_only(
    renderer: PageRenderer, config: SiteConfig
) -> None:
    soup = _render(renderer, _article(config, title="Guide", author="someone"))

    assert soup.select_one(".author .name").get_text() == "someone"
    assert soup.select(".author .github a") == []


def test_keywords_merge_page_and_site_tags(
    renderer: PageRenderer, config: SiteConfig
) -> None:
    soup = _render(renderer, _article(config, title="Guide", tags=["api", "nodejs"]))

    keywords = soup.find("meta", attrs={"name": "keywords"})
    assert keywords is not None
    assert keywords["content"] == "api,nodejs,docs"


def test_keywords_are_empty_without_any_tags(config: SiteConfig) -> None:
    renderer = PageRenderer(dc.replace(config, tags=()), Theme.from_directory())

    soup = _render(renderer, Page(path=_page_id(config), listing=[]))

    keywords = soup.find("meta", attrs={"name": "keywords"})
    assert keywords is not None
    assert keywords["content"] == ""


def test_directory_without_metadata_uses_root_breadcrumb(
    renderer: PageRenderer, config: SiteConfig
) -> None:
    soup = _render(renderer, Page(path=_page_id(config), listing=[]))

    crumbs = soup.select("#metadata a.breadcrumb")
    assert [(a["href"], a.get_text()) for a in crumbs] == [("/.", ".")]
    assert soup.select_one(".pwd").get_text() == "."
    assert soup.select("tr.ls") == []
    keywords = soup.find("meta", attrs={"name": "keywords"})
    assert keywords is not None and keywords["content"] == "nodejs,docs"


def test_directory_lists_children(renderer: PageRenderer, config: SiteConfig) -> None:
    page = Page(
        path=_page_id(config, "guides"),
        listing=["pages/guides/install", "pages/guides/setup"],
        metadata=PageMetadata(breadcrumb=["guides"]),
    )

    soup = _render(renderer, page)

    links = soup.select("tr.ls td a")
    assert [(a["href"], a.get_text()) for a in links] == [
        ("guides/install", "install"),
        ("guides/setup", "setup"),
    ]
    assert soup.select_one(".pwd").get_text() == "guides"
    assert [a["href"] for a in soup.select("a.breadcrumb")] == ["/guides"]


def test_content_without_metadata_uses_directory_template(
    renderer: PageRenderer, config: SiteConfig
) -> None:
    soup = _render(renderer, Page(path=_page_id(config, "notes"), content="Just text."))

    assert soup.select("section.content") == []
    assert soup.select_one("table.files") is not None


def test_highlight_defect_is_repaired(config: SiteConfig) -> None:
    highlighter = RecordingHighlighter()
    renderer = PageRenderer(config, Theme.from_directory(), highlighter=highlighter)

    html = renderer.render(_article(config, title="Guide"))

    assert HIGHLIGHT_DEFECT not in html
    assert "a &gt; b" in html
    assert highlighter.calls == [(True, True)]


def test_code_blocks_are_highlighted_with_entities_intact(
    renderer: PageRenderer, config: SiteConfig
) -> None:
    body = "```python\nif a > b:\n    run()\n```\n"

    soup = _render(renderer, _article(config, body, title="Guide"))

    pre = soup.select_one("section.content pre")
    assert pre is not None
    assert "codehilite" in pre["class"]
    assert pre["data-language"] == "python"
    assert pre.find("span") is not None
    assert "if a > b:" in pre.get_text()


def test_rendering_is_idempotent(renderer: PageRenderer, config: SiteConfig) -> None:
    body = "# Guide\n\n```python\nif a > b:\n    run()\n```\n"
    fields = {"title": "Guide", "date": "2011-03-04", "author": "indexzero"}

    first = renderer.render(_article(config, body, **fields))
    second = renderer.render(_article(config, body, **fields))

    assert first == second


def test_each_page_binds_a_fresh_template(
    renderer: PageRenderer, config: SiteConfig
) -> None:
    renderer.render(_article(config, "First body.\n", title="First"))

    soup = _render(renderer, _article(config, "Second body.\n", title="Second"))

    assert "First" not in soup.get_text()


def test_page_with_rejected_metadata_raises(
    renderer: PageRenderer, config: SiteConfig
) -> None:
    page = Page(
        path=_page_id(config, "guide"),
        content="Body.\n",
        metadata_error="Metadata file 'guide/metadata.json' is invalid",
    )

    with pytest.raises(BindingError, match="metadata.json"):
        renderer.render(page)


def test_authored_toc_element_survives_binding(
    renderer: PageRenderer, config: SiteConfig
) -> None:
    body = 'Intro.\n\n<div class="toc">Authored contents</div>\n'

    soup = _render(renderer, _article(config, body, title="Guide"))

    authored = soup.select_one("section.content div.toc")
    assert authored is not None
    assert authored.get_text() == "Authored contents"
    assert soup.select_one("nav#toc a")["href"] == "/guides/"


def test_template_without_content_placeholder_raises(config: SiteConfig) -> None:
    theme = Theme(
        {
            "article.html": '<html><body><div id="metadata"></div></body></html>',
            "directory.html": "<html><body></body></html>",
        }
    )
    renderer = PageRenderer(config, theme)

    with pytest.raises(BindingError, match="content"):
        renderer.render(_article(config, title="Guide"))


def test_unmarked_date_block_is_removed_three_levels_up(config: SiteConfig) -> None:
    theme = Theme(
        {
            "article.html": (
                '<div id="metadata"><h1 class="title"></h1>'
                '<section id="block"><div><p><time class="date"></time></p></div>'
                "</section></div>"
                '<div class="content"></div>'
            ),
            "directory.html": '<table><tr class="ls" data-bind="listing"></tr></table>',
        }
    )
    renderer = PageRenderer(config, theme)

    soup = _render(renderer, _article(config, title="Guide"))

    assert soup.select("#block") == []
    assert soup.select_one("#metadata .title").get_text() == "Guide"

"""Shared fixtures for docweld tests.

``content_tree`` writes a small source tree covering each page shape the
loader understands: a directory with metadata, article directories with and
without a date, and a loose article file with its sibling metadata.
"""

from __future__ import annotations

import json
import typing as typ

import pytest

from docweld.config import AuthorRecord, SiteConfig

if typ.TYPE_CHECKING:
    from pathlib import Path

HELLO_MARKDOWN = (
    "# Hello\n\n"
    "Compare values with `a > b`:\n\n"
    "```python\n"
    "if a > b:\n"
    "    run()\n"
    "```\n"
)


def write_article(
    directory: Path, body: str, metadata: dict[str, typ.Any] | None = None
) -> Path:
    """Write ``content.md`` (and ``metadata.json``) into ``directory``."""
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "content.md").write_text(body, encoding="utf-8")
    if metadata is not None:
        (directory / "metadata.json").write_text(json.dumps(metadata), encoding="utf-8")
    return directory


@pytest.fixture
def content_tree(tmp_path: Path) -> Path:
    """Return the root of a representative content tree."""
    root = tmp_path / "pages"
    articles = root / "articles"
    articles.mkdir(parents=True)
    (articles / "metadata.json").write_text(
        json.dumps({"breadcrumb": ["articles"]}), encoding="utf-8"
    )
    write_article(
        articles / "hello-world",
        HELLO_MARKDOWN,
        {
            "title": "Hello World",
            "date": "2011-03-04",
            "author": "indexzero",
            "tags": ["intro"],
            "breadcrumb": ["articles", "hello-world"],
        },
    )
    write_article(
        articles / "no-date",
        "Nothing dated here.\n",
        {"title": "Undated", "breadcrumb": ["articles", "no-date"]},
    )
    (root / "install.md").write_text("Run `npm install`.\n", encoding="utf-8")
    (root / "install.json").write_text(
        json.dumps({"title": "Install"}), encoding="utf-8"
    )
    return root


@pytest.fixture
def site_config(content_tree: Path) -> SiteConfig:
    """Return a configuration rooted at ``content_tree``."""
    return SiteConfig(
        site_label="node docs",
        tags=("nodejs", "docs"),
        source_dir=content_tree,
        output_dir=content_tree.parent / "public",
        authors={
            "indexzero": AuthorRecord(name="Charlie Robbins", github="indexzero"),
        },
    )

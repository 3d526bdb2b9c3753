"""Shared records used by the page generation pipeline."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path  # noqa: TC003 - used for runtime type metadata

import msgspec

from docweld.config.models import AuthorRecord


class PageMetadata(msgspec.Struct, frozen=True):
    """Article metadata decoded from the JSON file beside a content body.

    Keys missing from the JSON stay ``UNSET`` and are treated as undefined
    (they are not bound and may cause template pruning). An explicit ``null``
    is defined but empty.

    Attributes
    ----------
    title : str or None
        Article headline, also used in ``<title>``.
    date : str, int, float or None
        Publication timestamp as written by the author; numbers are
        milliseconds since the Unix epoch.
    author : str or AuthorRecord or None
        Author id before resolution, the registry record afterwards.
    tags : list[str]
        Page keywords merged into the keywords meta tag.
    breadcrumb : list[str]
        Crumbs rendered, in order, as accumulated links.
    """

    title: str | None | msgspec.UnsetType = msgspec.UNSET
    date: str | int | float | None | msgspec.UnsetType = msgspec.UNSET
    author: str | AuthorRecord | None | msgspec.UnsetType = msgspec.UNSET
    tags: list[str] | msgspec.UnsetType = msgspec.UNSET
    breadcrumb: list[str] | msgspec.UnsetType = msgspec.UNSET

    def page_tags(self) -> list[str]:
        """Return the page's tags in first-seen order without duplicates."""
        if self.tags is msgspec.UNSET:
            return []
        return list(dict.fromkeys(self.tags))


@dc.dataclass(slots=True)
class Page:
    """One logical output unit keyed by its resolved source path.

    Attributes
    ----------
    path : str
        Resolved source path; also the page id.
    content : str or None
        Markdown body on load, replaced with the final HTML once rendered.
    metadata : PageMetadata or None
        Decoded metadata, when the source provides any.
    listing : list[str] or None
        Child page paths for directory pages.
    metadata_error : str or None
        Why the metadata file was rejected; such a page fails to render.
    """

    path: str
    content: str | None = None
    metadata: PageMetadata | None = None
    listing: list[str] | None = None
    metadata_error: str | None = None

    @property
    def is_article(self) -> bool:
        """Return True when the page renders with the article template."""
        return bool(self.content) and self.metadata is not None


@dc.dataclass(slots=True)
class RunSummary:
    """Outcome of a build run.

    Attributes
    ----------
    written : list[Path]
        Files persisted during the run, in page order.
    failed : dict[str, str]
        Page id mapped to the reason it was skipped.
    """

    written: list[Path] = dc.field(default_factory=list)
    failed: dict[str, str] = dc.field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Return True when every page was rendered and written."""
        return not self.failed


__all__ = ["AuthorRecord", "Page", "PageMetadata", "RunSummary"]

"""Read a content tree into a mapping of page id to :class:`Page`.

Layout conventions
------------------
* A directory holding ``content.md`` is an article; its metadata comes from
  the sibling ``metadata.json``.
* A loose ``<name>.md`` with an optional ``<name>.json`` beside it is an
  article at ``<directory>/<name>``.
* Any other directory is a directory page. It may carry a ``metadata.json``
  and lists its child pages as ``pages/<path relative to the source root>``.

Hidden entries (names starting with ``.``) are skipped.

Example
-------
>>> from pathlib import Path
>>> from docweld.generator.loader import PageLoader
>>> pages = PageLoader(Path("pages")).load()  # doctest: +SKIP
>>> sorted(pages)[0]  # doctest: +SKIP
'/srv/docs/pages'
"""

from __future__ import annotations

import logging
from pathlib import Path

import msgspec

from docweld._constants import (
    CONTENT_FILENAME,
    CONTENT_SUFFIX,
    LISTING_PREFIX,
    METADATA_FILENAME,
    METADATA_SUFFIX,
)
from docweld.errors import LoadError

from .models import Page, PageMetadata

logger = logging.getLogger(__name__)


class PageLoader:
    """Walk a source tree and pair content bodies with their metadata."""

    def __init__(self, source_root: Path) -> None:
        self.source_root = source_root

    def load(self) -> dict[str, Page]:
        """Return every page under the source root keyed by resolved path.

        Raises
        ------
        LoadError
            If the root is missing, a file cannot be read or decoded, or two
            sources map to the same page.
        """
        root = self.source_root.resolve()
        if not root.is_dir():
            msg = f"Source directory '{self.source_root}' does not exist."
            raise LoadError(msg)
        pages: dict[str, Page] = {}
        try:
            self._load_directory(root, root, pages)
        except OSError as exc:
            msg = f"Unable to read source tree '{root}': {exc}"
            raise LoadError(msg) from exc
        logger.debug("loaded %d pages from %s", len(pages), root)
        return pages

    def _load_directory(
        self, directory: Path, root: Path, pages: dict[str, Page]
    ) -> None:
        entries = sorted(
            entry for entry in directory.iterdir() if not entry.name.startswith(".")
        )
        content_path = directory / CONTENT_FILENAME
        if content_path.is_file():
            page = self._build_page(
                directory,
                directory / METADATA_FILENAME,
                content=self._read_text(content_path),
            )
        else:
            page = self._build_page(
                directory, directory / METADATA_FILENAME, listing=[]
            )
        self._register(pages, page)

        children: list[Path] = []
        for entry in entries:
            if entry.is_dir():
                self._load_directory(entry, root, pages)
                children.append(entry)
            elif entry.suffix == CONTENT_SUFFIX and entry.name != CONTENT_FILENAME:
                article = entry.with_suffix("")
                self._register(
                    pages,
                    self._build_page(
                        article,
                        entry.with_suffix(METADATA_SUFFIX),
                        content=self._read_text(entry),
                    ),
                )
                children.append(article)
            elif (
                entry.suffix == METADATA_SUFFIX
                and entry.name != METADATA_FILENAME
                and not entry.with_suffix(CONTENT_SUFFIX).is_file()
            ):
                logger.debug("ignoring metadata without content: %s", entry)

        if page.listing is not None:
            page.listing = [
                f"{LISTING_PREFIX}{child.relative_to(root).as_posix()}"
                for child in sorted(children)
            ]

    def _build_page(
        self,
        source: Path,
        metadata_path: Path,
        *,
        content: str | None = None,
        listing: list[str] | None = None,
    ) -> Page:
        """Return the page for ``source``, flagging metadata of the wrong shape.

        Metadata that is valid JSON but carries mistyped fields only fails its
        own page; the renderer refuses a page with ``metadata_error`` set.
        """
        try:
            metadata = self._read_metadata(metadata_path)
        except msgspec.ValidationError as exc:
            reason = f"Metadata file '{metadata_path}' is invalid: {exc}"
            logger.debug("deferring metadata failure: %s", reason)
            return Page(
                path=str(source),
                content=content,
                listing=listing,
                metadata_error=reason,
            )
        return Page(
            path=str(source), content=content, metadata=metadata, listing=listing
        )

    @staticmethod
    def _register(pages: dict[str, Page], page: Page) -> None:
        if page.path in pages:
            msg = f"Two sources map to the page '{page.path}'."
            raise LoadError(msg)
        pages[page.path] = page

    @staticmethod
    def _read_text(path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            msg = f"'{path}' is not valid UTF-8."
            raise LoadError(msg) from exc

    @staticmethod
    def _read_metadata(path: Path) -> PageMetadata | None:
        """Decode the metadata JSON at ``path``, or None when it is absent.

        Raises
        ------
        msgspec.ValidationError
            If the JSON is well formed but a field has the wrong type.
        LoadError
            If the file is not JSON at all.
        """
        if not path.is_file():
            return None
        try:
            return msgspec.json.decode(path.read_bytes(), type=PageMetadata)
        except msgspec.ValidationError:
            raise
        except msgspec.DecodeError as exc:
            msg = f"Metadata file '{path}' is invalid: {exc}"
            raise LoadError(msg) from exc


__all__ = ["PageLoader"]

"""Persist rendered pages under the output root."""

from __future__ import annotations

import os
import typing as typ
from pathlib import Path

from docweld._constants import INDEX_FILENAME
from docweld.errors import WriteError

if typ.TYPE_CHECKING:
    from .models import Page


class OutputWriter:
    """Map page ids onto ``<output>/<relative path>/index.html`` and write them."""

    def __init__(self, source_root: Path, output_root: Path) -> None:
        self.source_root = source_root.resolve()
        self.output_root = output_root.resolve()

    def destination_for(self, page_id: str) -> Path:
        """Return the file a page id is written to.

        Raises
        ------
        WriteError
            If ``page_id`` lies outside the source root.
        """
        source = Path(os.path.normpath(page_id))
        try:
            relative = source.relative_to(self.source_root)
        except ValueError as exc:
            msg = f"Page '{page_id}' is outside '{self.source_root}'."
            raise WriteError(msg) from exc
        return Path(os.path.normpath(self.output_root / relative / INDEX_FILENAME))

    def write(self, page: Page) -> Path:
        """Write a rendered page and return its destination.

        Raises
        ------
        WriteError
            If the page has no rendered content or the file cannot be written.
        """
        if page.content is None:
            msg = f"Page '{page.path}' has not been rendered."
            raise WriteError(msg)
        return self.write_file(self.destination_for(page.path), page.content)

    def write_asset(self, name: str, text: str) -> Path:
        """Write a shared asset such as a stylesheet at the output root."""
        return self.write_file(self.output_root / name, text)

    @staticmethod
    def write_file(path: Path, text: str) -> Path:
        """Create parent directories and write ``text`` as UTF-8."""
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        except OSError as exc:
            msg = f"Unable to write '{path}': {exc}"
            raise WriteError(msg) from exc
        return path


__all__ = ["OutputWriter"]

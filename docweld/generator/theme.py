"""Load theme templates and hand out per-page copies."""

from __future__ import annotations

import copy
from pathlib import Path

from bs4 import BeautifulSoup

from docweld._constants import ARTICLE_TEMPLATE, DIRECTORY_TEMPLATE
from docweld.errors import LoadError

DEFAULT_THEME_DIR = Path(__file__).resolve().parents[1] / "theme"


class Theme:
    """Parsed article and directory templates.

    The parsed trees are never bound directly; :meth:`clone` returns a copy
    each page owns, so one page's binding cannot leak into the next.
    """

    def __init__(self, templates: dict[str, str]) -> None:
        self._trees = {
            name: BeautifulSoup(markup, "html.parser")
            for name, markup in templates.items()
        }

    @classmethod
    def from_directory(cls, theme_dir: Path | None = None) -> Theme:
        """Read ``article.html`` and ``directory.html`` from ``theme_dir``.

        Raises
        ------
        LoadError
            If either template is missing or unreadable.
        """
        directory = theme_dir or DEFAULT_THEME_DIR
        templates: dict[str, str] = {}
        for name in (ARTICLE_TEMPLATE, DIRECTORY_TEMPLATE):
            path = directory / name
            try:
                templates[name] = path.read_text(encoding="utf-8")
            except OSError as exc:
                msg = f"Theme template '{path}' could not be read: {exc}"
                raise LoadError(msg) from exc
        return cls(templates)

    def clone(self, name: str) -> BeautifulSoup:
        """Return a private copy of the template ``name``."""
        try:
            tree = self._trees[name]
        except KeyError as exc:
            msg = f"Theme has no template named '{name}'."
            raise LoadError(msg) from exc
        return copy.copy(tree)


__all__ = ["DEFAULT_THEME_DIR", "Theme"]

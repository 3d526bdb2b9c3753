"""Typed structures describing docweld site configuration."""

from __future__ import annotations

import dataclasses as dc
import types
import typing as typ
from pathlib import Path

import msgspec


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


class AuthorRecord(msgspec.Struct, frozen=True):
    """Author details resolved from the registry for article bylines."""

    name: str
    github: str | None = None


def _empty_authors() -> typ.Mapping[str, AuthorRecord]:
    return types.MappingProxyType({})


@dc.dataclass(frozen=True, slots=True)
class SiteConfig:
    """Read-only settings shared by every page rendered in a run.

    Attributes
    ----------
    site_label : str
        Fixed label prefixed to every article title in ``<title>``.
    tags : tuple[str, ...]
        Global keywords appended to each page's own tags.
    source_dir : Path
        Root of the content tree.
    output_dir : Path
        Root of the generated HTML tree.
    theme_dir : Path or None
        Directory holding ``article.html`` and ``directory.html``; ``None``
        selects the bundled theme.
    pygments_style : str
        Pygments style used for highlighted code and its stylesheet.
    authors : Mapping[str, AuthorRecord]
        Author registry keyed by the ids used in page metadata.
    """

    site_label: str = "node docs"
    tags: tuple[str, ...] = ()
    source_dir: Path = Path("pages")
    output_dir: Path = Path("public")
    theme_dir: Path | None = None
    pygments_style: str = "monokai"
    authors: typ.Mapping[str, AuthorRecord] = dc.field(default_factory=_empty_authors)

    def resolve_author(self, author_id: str) -> AuthorRecord:
        """Return the registered author or a name-only record for ``author_id``."""
        return self.authors.get(author_id) or AuthorRecord(name=author_id)


__all__ = ["AuthorRecord", "SiteConfig", "SiteConfigError"]

"""Utility helpers shared by the docweld configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import msgspec

from .models import AuthorRecord, SiteConfigError


def _normalize_tags(value: str | list[object] | None) -> tuple[str, ...]:
    """Normalize tag definitions into a tuple of non-empty strings."""
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(segment.strip() for segment in value.split(",") if segment.strip())
    if isinstance(value, list):
        normalized: list[str] = []
        for segment in value:
            text = str(segment).strip()
            if text and text not in normalized:
                normalized.append(text)
        return tuple(normalized)
    msg = "'tags' must be a string or a list of strings."
    raise SiteConfigError(msg)


def _optional_path(value: object | None, *, base: Path) -> Path | None:
    """Return ``value`` as a path relative to ``base``, or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    path = Path(text).expanduser()
    return path if path.is_absolute() else base / path


def _build_author(author_id: str, payload: object) -> AuthorRecord:
    """Build an AuthorRecord from an inline config entry."""
    match payload:
        case str() as name:
            return AuthorRecord(name=name)
        case dict():
            try:
                return msgspec.convert(payload, AuthorRecord)
            except msgspec.ValidationError as exc:
                msg = f"Author '{author_id}' is invalid: {exc}"
                raise SiteConfigError(msg) from exc
        case _:
            msg = f"Author '{author_id}' must be a mapping or a display name."
            raise SiteConfigError(msg)


def _load_authors_dir(directory: Path) -> dict[str, AuthorRecord]:
    """Read ``<id>.json`` author files from ``directory``."""
    if not directory.is_dir():
        msg = f"Authors directory '{directory}' does not exist."
        raise SiteConfigError(msg)
    authors: dict[str, AuthorRecord] = {}
    for path in sorted(directory.glob("*.json")):
        try:
            authors[path.stem] = msgspec.json.decode(
                path.read_bytes(), type=AuthorRecord
            )
        except msgspec.DecodeError as exc:
            msg = f"Author file '{path}' is invalid: {exc}"
            raise SiteConfigError(msg) from exc
    return authors


def _build_authors(
    inline: typ.Mapping[str, typ.Any] | None, directory: Path | None
) -> dict[str, AuthorRecord]:
    """Merge directory-sourced authors with inline overrides."""
    authors = _load_authors_dir(directory) if directory else {}
    for author_id, payload in (inline or {}).items():
        authors[str(author_id)] = _build_author(str(author_id), payload)
    return authors


__all__ = [
    "_build_author",
    "_build_authors",
    "_load_authors_dir",
    "_normalize_tags",
    "_optional_path",
]

"""Exception hierarchy shared by the docweld build pipeline.

``LoadError`` is fatal for a run. ``ConversionError``, ``BindingError``, and
``WriteError`` are scoped to a single page: the site builder records them in
its run summary and carries on with the remaining pages.
"""

from __future__ import annotations


class DocweldError(Exception):
    """Base class for docweld pipeline failures."""


class LoadError(DocweldError):
    """Raised when the source tree cannot be read."""


class ConversionError(DocweldError):
    """Raised when markdown conversion or highlighting fails for a page."""


class BindingError(DocweldError):
    """Raised when a template lacks a placeholder or a value is malformed."""


class WriteError(DocweldError):
    """Raised when a rendered page cannot be persisted."""


__all__ = [
    "BindingError",
    "ConversionError",
    "DocweldError",
    "LoadError",
    "WriteError",
]

"""Load site configuration YAML into a frozen SiteConfig."""

from __future__ import annotations

import types
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import _build_authors, _normalize_tags, _optional_path
from .models import SiteConfig, SiteConfigError


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing a docweld site.

    Relative paths inside the file are resolved against the directory that
    contains it.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``docweld.yaml``).

    Returns
    -------
    SiteConfig
        Immutable configuration shared by every page rendered in the run.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If a field carries an invalid value (for example, a non-list ``tags``
        entry or an unreadable authors directory).
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from docweld.config import load_site_config
    >>> config = load_site_config(Path("docweld.yaml"))  # doctest: +SKIP
    >>> config.site_label  # doctest: +SKIP
    'node docs'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):  # pragma: no cover - config error guard
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    base = path.resolve().parent
    defaults = SiteConfig()

    site_label = raw.get("site_label", defaults.site_label)
    if not isinstance(site_label, str):
        msg = "'site_label' must be a string."
        raise SiteConfigError(msg)

    authors_raw = raw.get("authors")
    if authors_raw is not None and not isinstance(authors_raw, dict):
        msg = "'authors' must be a mapping of author ids."
        raise SiteConfigError(msg)
    authors = _build_authors(
        authors_raw, _optional_path(raw.get("authors_dir"), base=base)
    )

    return SiteConfig(
        site_label=site_label,
        tags=_normalize_tags(raw.get("tags")),
        source_dir=_optional_path(raw.get("source_dir"), base=base)
        or defaults.source_dir,
        output_dir=_optional_path(raw.get("output_dir"), base=base)
        or defaults.output_dir,
        theme_dir=_optional_path(raw.get("theme_dir"), base=base),
        pygments_style=str(raw.get("pygments_style", defaults.pygments_style)),
        authors=types.MappingProxyType(authors),
    )


__all__ = ["load_site_config"]

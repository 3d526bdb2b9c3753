"""Load and validate site configuration YAML for docweld builds.

This subpackage parses the project's ``docweld.yaml`` file and produces the
frozen :class:`SiteConfig` that the page renderer receives at construction
time: the site label used in page titles, the global keyword list, the source
and output roots, the theme directory, and the author registry. The primary
entry point is :func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from docweld.config import load_site_config
>>> site = load_site_config(Path("docweld.yaml"))  # doctest: +SKIP
>>> site.tags  # doctest: +SKIP
('node.js', 'docs')
"""

from .loader import load_site_config
from .models import AuthorRecord, SiteConfig, SiteConfigError

__all__ = [
    "AuthorRecord",
    "SiteConfig",
    "SiteConfigError",
    "load_site_config",
]

"""Render a tree of markdown articles and directories into static HTML.

Pages are produced by binding per-page data onto a small theme of HTML
templates. The binding engine fills placeholders according to class-keyed
rules, so themes stay plain HTML with no template language of their own.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from docweld import main
>>> main()  # doctest: +SKIP
>>> from docweld import app
>>> app.name  # doctest: +SKIP
('docweld',)
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]

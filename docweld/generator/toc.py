"""Build the site-wide table of contents shared by every page."""

from __future__ import annotations

import typing as typ
from pathlib import Path, PurePosixPath

import msgspec
from jinja2 import Environment, FileSystemLoader, select_autoescape

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import Page


class TocBuilder:
    """Render a nested list of links to every page below the source root."""

    def __init__(self, source_root: Path, *, templates_dir: Path | None = None) -> None:
        """Initialize the builder and its Jinja environment.

        Parameters
        ----------
        source_root : Path
            Root of the content tree; page ids are made relative to it.
        templates_dir : Path, optional
            Directory containing ``toc.jinja``. Defaults to the package
            templates.
        """
        self.source_root = source_root
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("toc.jinja")

    def build(self, pages: cabc.Mapping[str, Page]) -> str:
        """Return the table of contents as an HTML fragment."""
        return self.template.render(entries=self.entries(pages))

    def entries(self, pages: cabc.Mapping[str, Page]) -> list[dict[str, typ.Any]]:
        """Return nested ``label``/``href``/``children`` entries in path order."""
        root = self.source_root.resolve()
        nodes: dict[PurePosixPath, dict[str, typ.Any]] = {}
        top: list[dict[str, typ.Any]] = []
        relatives = {
            PurePosixPath(Path(page_id).relative_to(root).as_posix()): page
            for page_id, page in pages.items()
            if Path(page_id) != root
        }
        for relative in sorted(relatives):
            node = {
                "label": _page_label(relatives[relative], relative),
                "href": f"/{relative}/",
                "children": [],
            }
            nodes[relative] = node
            parent = nodes.get(relative.parent)
            if parent is None:
                top.append(node)
            else:
                parent["children"].append(node)
        return top


def _page_label(page: Page, relative: PurePosixPath) -> str:
    """Return the page title when it has one, else its final path segment."""
    metadata = page.metadata
    if metadata is not None and metadata.title not in (msgspec.UNSET, None, ""):
        return typ.cast("str", metadata.title)
    return relative.name


__all__ = ["TocBuilder"]

"""Convert markdown article bodies into HTML fragments."""

from __future__ import annotations

import re
import typing as typ

from markdown import Markdown

from docweld.errors import ConversionError

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)


class MarkdownConverter:
    """Render markdown with GitHub-style fences and tables.

    Code blocks are emitted as ``<pre><code class="language-*">`` and left
    unhighlighted; :class:`~docweld.generator.highlighter.CodeHighlighter`
    colours them once the whole page has been bound.
    """

    def __init__(self, extensions: list[Extension | str] | None = None) -> None:
        self.extensions: list[Extension | str] = extensions or [
            "fenced_code",
            "tables",
            "sane_lists",
        ]

    def render(self, text: str) -> str:
        """Render markdown ``text`` into HTML.

        Raises
        ------
        ConversionError
            If the markdown library rejects the input.
        """
        normalized = self._normalize_fenced_blocks(text)
        if not normalized.strip():
            return ""
        md = Markdown(extensions=self.extensions, output_format="html")
        try:
            return md.convert(normalized)
        except (TypeError, ValueError) as exc:
            msg = f"Markdown conversion failed: {exc}"
            raise ConversionError(msg) from exc

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            label = language or ""
            return f"{fence}{label}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


__all__ = ["MarkdownConverter"]

"""Syntax highlighting for code blocks inside rendered pages."""

from __future__ import annotations

import typing as typ

from bs4 import BeautifulSoup
from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name, guess_lexer
from pygments.util import ClassNotFound

from docweld.binding.rules import has_class
from docweld.errors import ConversionError

if typ.TYPE_CHECKING:
    from bs4 import Tag
    from pygments.lexer import Lexer

HIGHLIGHT_CLASS = "codehilite"
LANGUAGE_CLASS_PREFIX = "language-"


class CodeHighlighter:
    """Highlight ``<pre><code>`` blocks of an HTML document with Pygments."""

    def __init__(self, pygments_style: str = "monokai") -> None:
        """Initialize a highlighter with the given Pygments style.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used by :attr:`stylesheet`. Defaults to
            ``"monokai"``.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, nowrap=True)

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return HtmlFormatter(style=self.pygments_style).get_style_defs(
            f".{HIGHLIGHT_CLASS}"
        )

    def highlight(
        self, html: str, *, auto_detect: bool = True, preserve_entities: bool = True
    ) -> str:
        """Return ``html`` with every code block highlighted.

        Parameters
        ----------
        html : str
            Serialized document or fragment.
        auto_detect : bool, optional
            Guess the language of blocks that do not declare one; when
            ``False`` such blocks are left untouched.
        preserve_entities : bool, optional
            Highlight the decoded text of each block so entities such as
            ``&gt;`` survive as single characters. When ``False`` the raw
            markup is highlighted instead.

        Raises
        ------
        ConversionError
            If Pygments fails on a block.
        """
        soup = BeautifulSoup(html, "html.parser")
        for code in soup.select("pre > code"):
            pre = code.parent
            if has_class(pre, HIGHLIGHT_CLASS):
                continue
            source = code.get_text() if preserve_entities else code.decode_contents()
            lexer = self._lexer_for(code, source, auto_detect=auto_detect)
            if lexer is None:
                continue
            try:
                markup = highlight(source, lexer, self._formatter)
            except (TypeError, ValueError) as exc:
                msg = f"Highlighting with {lexer.name} failed: {exc}"
                raise ConversionError(msg) from exc
            code.clear()
            for node in list(BeautifulSoup(markup, "html.parser").contents):
                code.append(node)
            pre["class"] = [*(pre.get("class") or []), HIGHLIGHT_CLASS]
            pre["data-language"] = lexer.aliases[0] if lexer.aliases else "text"
        return str(soup)

    @staticmethod
    def _lexer_for(code: Tag, source: str, *, auto_detect: bool) -> Lexer | None:
        """Return the declared lexer, a guessed one, or None."""
        for css_class in code.get("class") or []:
            if css_class.startswith(LANGUAGE_CLASS_PREFIX):
                try:
                    return get_lexer_by_name(css_class[len(LANGUAGE_CLASS_PREFIX) :])
                except ClassNotFound:
                    break
        if not auto_detect:
            return None
        try:
            return guess_lexer(source)
        except ClassNotFound:
            return get_lexer_by_name("text")


__all__ = ["HIGHLIGHT_CLASS", "CodeHighlighter"]

"""Class-keyed rules that populate one template element from one value.

Each rule claims elements carrying a given CSS class and reports, from
:meth:`BindingRule.apply`, whether the engine should still perform its plain
text substitution afterwards. Every rule shipped here fully handles the
element and returns ``False``.

Examples
--------
>>> from bs4 import BeautifulSoup
>>> soup = BeautifulSoup('<p class="github"></p>', "html.parser")
>>> AuthorLinkRule().apply(soup.p, "github", "indexzero", soup)
False
>>> str(soup)
'<p class="github"><a href="https://github.com/indexzero">[github]</a></p>'
"""

from __future__ import annotations

import abc
import datetime as dt
import posixpath
import typing as typ
from email.utils import parsedate_to_datetime

from bs4 import BeautifulSoup

from docweld._constants import GITHUB_LABEL, GITHUB_URL_TEMPLATE, LISTING_PREFIX
from docweld.errors import BindingError

if typ.TYPE_CHECKING:
    from bs4 import Tag


def _new_tag(name: str, text: str | None = None, **attrs: str) -> Tag:
    """Return a detached tag with optional text content."""
    tag = BeautifulSoup("", "html.parser").new_tag(name, attrs=attrs)
    if text is not None:
        tag.string = text
    return tag


def _inject_markup(element: Tag, value: typ.Any) -> None:
    """Replace the children of ``element`` with ``value`` parsed as markup."""
    element.clear()
    if value is None:
        return
    fragment = BeautifulSoup(str(value), "html.parser")
    for node in list(fragment.contents):
        element.append(node)


def has_class(element: Tag, css_class: str) -> bool:
    classes = element.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    return css_class in classes


class BindingRule(abc.ABC):
    """Populate a template element from a bound value."""

    css_class: typ.ClassVar[str | None] = None

    def matches(self, element: Tag) -> bool:
        """Return True when ``element`` carries this rule's class."""
        return self.css_class is not None and has_class(element, self.css_class)

    @abc.abstractmethod
    def apply(self, element: Tag, key: str, value: typ.Any, scope: Tag) -> bool:
        """Populate ``element`` and report whether default substitution applies.

        Parameters
        ----------
        element : Tag
            Template element being bound; mutated in place.
        key : str
            Context key the element was located by.
        value : Any
            Scalar value bound to ``key``.
        scope : Tag
            Element the key was looked up in.

        Returns
        -------
        bool
            ``True`` when the engine should still replace the element text
            with the escaped value; ``False`` when the rule handled it.
        """


class BreadcrumbRule(BindingRule):
    """Render one crumb whose link accumulates every preceding crumb."""

    css_class = "breadcrumb"

    def apply(self, element: Tag, key: str, value: typ.Any, scope: Tag) -> bool:
        container = element.parent or scope
        crumb = ""
        for sibling in container.find_all(class_=self.css_class):
            if sibling is element:
                break
            crumb += "/" + sibling.get_text()
        text = "" if value is None else str(value)
        element["href"] = f"{crumb}/{text}"
        _inject_markup(element, value)
        return False


class ListingRule(BindingRule):
    """Render a directory listing entry as a linked table row."""

    css_class = "ls"

    def apply(self, element: Tag, key: str, value: typ.Any, scope: Tag) -> bool:
        if not isinstance(value, str) or not value.strip("/"):
            msg = f"Listing entry {value!r} is not a path."
            raise BindingError(msg)
        title = posixpath.basename(value.rstrip("/"))
        cell = _new_tag("td")
        cell.append(_new_tag("a", title, href=value.removeprefix(LISTING_PREFIX)))

        if element.name == "tr":
            row = element
        else:
            row = element.find("tr")
            if row is None:
                row = _new_tag("tr", **{"class": self.css_class})
                element.append(row)
        row.clear()
        row.append(cell)
        return False


class DateRule(BindingRule):
    """Attach a machine-readable timestamp while keeping the authored text."""

    css_class = "date"

    def apply(self, element: Tag, key: str, value: typ.Any, scope: Tag) -> bool:
        if value is None or value == "":
            if element.has_attr("datetime"):
                del element["datetime"]
            element.clear()
            return False
        element["datetime"] = format_timestamp(parse_timestamp(value))
        element.clear()
        element.string = str(value)
        return False


class AuthorLinkRule(BindingRule):
    """Link the author's GitHub profile when a handle is known."""

    css_class = "github"

    def apply(self, element: Tag, key: str, value: typ.Any, scope: Tag) -> bool:
        element.clear()
        if value:
            handle = str(value)
            element.append(
                _new_tag(
                    "a", GITHUB_LABEL, href=GITHUB_URL_TEMPLATE.format(handle=handle)
                )
            )
        return False


class RawInjectRule(BindingRule):
    """Inject the value as markup without escaping entities.

    Article bodies arrive as rendered HTML, so escaping them here would show
    the tags as text.
    """

    def matches(self, element: Tag) -> bool:
        return True

    def apply(self, element: Tag, key: str, value: typ.Any, scope: Tag) -> bool:
        _inject_markup(element, value)
        return False


def parse_timestamp(value: typ.Any) -> dt.datetime:
    """Parse an authored date into a timezone-aware UTC datetime.

    Accepts ``datetime``/``date`` objects, numbers as milliseconds since the
    Unix epoch, ISO-8601 strings (a trailing ``Z`` included), and RFC 2822
    strings. Naive values are taken as UTC.

    Raises
    ------
    BindingError
        If ``value`` is not a recognizable timestamp or falls outside the
        representable UTC range.
    """
    parsed: dt.datetime | None = None
    match value:
        case dt.datetime():
            parsed = value
        case dt.date():
            parsed = dt.datetime.combine(value, dt.time())
        case bool():
            parsed = None
        case int() | float():
            try:
                parsed = dt.datetime.fromtimestamp(value / 1000, tz=dt.UTC)
            except (OverflowError, OSError, ValueError) as exc:
                msg = f"Date {value!r} is out of range."
                raise BindingError(msg) from exc
        case str() as text:
            sanitized = text.strip()
            if sanitized.endswith("Z"):
                sanitized = sanitized[:-1] + "+00:00"
            try:
                parsed = dt.datetime.fromisoformat(sanitized)
            except ValueError:
                try:
                    parsed = parsedate_to_datetime(text)
                except (TypeError, ValueError):
                    parsed = None
        case _:
            parsed = None
    if parsed is None:
        msg = f"Cannot parse {value!r} as a date."
        raise BindingError(msg)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=dt.UTC)
    try:
        return parsed.astimezone(dt.UTC)
    except (OverflowError, ValueError) as exc:
        msg = f"Date {value!r} is out of range."
        raise BindingError(msg) from exc


def format_timestamp(value: dt.datetime) -> str:
    """Return ``value`` as ISO-8601 UTC with milliseconds, e.g. ``...T00:00:00.000Z``."""
    return value.astimezone(dt.UTC).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


DEFAULT_RULES: tuple[BindingRule, ...] = (
    BreadcrumbRule(),
    ListingRule(),
    DateRule(),
    AuthorLinkRule(),
    RawInjectRule(),
)


__all__ = [
    "DEFAULT_RULES",
    "AuthorLinkRule",
    "BindingRule",
    "BreadcrumbRule",
    "DateRule",
    "ListingRule",
    "RawInjectRule",
    "format_timestamp",
    "has_class",
    "parse_timestamp",
]

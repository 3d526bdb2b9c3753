"""Bind nested context data onto an HTML template tree.

The engine walks a context mapping key by key. For each key it locates the
placeholder elements in the current scope and then:

* recurses into the placeholder for mapping values;
* stamps the placeholder once per item for sequence values, binding each
  clone in place so later items can see earlier ones;
* hands scalar values to the first rule whose class the element carries.

Rules never recurse into an element's existing children. Anything nested,
such as a listing row, is built by the rule itself.

Examples
--------
>>> from bs4 import BeautifulSoup
>>> soup = BeautifulSoup(
...     '<nav><a class="breadcrumb" data-bind="breadcrumb"></a></nav>',
...     "html.parser",
... )
>>> _ = BindingEngine().bind(soup, {"breadcrumb": ["a", "b"]})
>>> [a["href"] for a in soup.select("a.breadcrumb")]
['/a', '/a/b']
"""

from __future__ import annotations

import collections.abc as cabc
import copy
import typing as typ

from docweld.errors import BindingError

from .rules import DEFAULT_RULES, BindingRule, has_class

if typ.TYPE_CHECKING:
    from bs4 import Tag


def is_placeholder(element: Tag, key: str) -> bool:
    """Return True when ``element`` is tagged for the context ``key``."""
    return (
        element.get("data-bind") == key
        or has_class(element, key)
        or element.get("id") == key
    )


def find_placeholders(scope: Tag, key: str) -> list[Tag]:
    """Return the elements below ``scope`` tagged for ``key``, in document order."""
    return [element for element in scope.find_all(True) if is_placeholder(element, key)]


class BindingEngine:
    """Populate template placeholders from a binding context."""

    def __init__(self, rules: cabc.Sequence[BindingRule] = DEFAULT_RULES) -> None:
        """Initialize the engine with an ordered rule set.

        Parameters
        ----------
        rules : Sequence[BindingRule], optional
            Rules consulted in priority order; the last one should match every
            element. Defaults to :data:`DEFAULT_RULES`.
        """
        self.rules = tuple(rules)

    def bind(
        self,
        root: Tag,
        context: cabc.Mapping[str, typ.Any],
        *,
        required: cabc.Iterable[str] = (),
    ) -> Tag:
        """Bind ``context`` onto ``root`` in place and return ``root``.

        Parameters
        ----------
        root : Tag
            Template tree owned by the caller; it is mutated.
        context : Mapping[str, Any]
            Nested data to bind. Keys without a placeholder are ignored.
        required : Iterable[str], optional
            Top-level keys whose placeholders must exist in ``root``.

        Returns
        -------
        Tag
            The bound ``root``.

        Raises
        ------
        BindingError
            If a required placeholder is missing, or a rule rejects its value.
        """
        for key in required:
            if not find_placeholders(root, key):
                msg = f"Template has no placeholder for '{key}'."
                raise BindingError(msg)
        self._bind_scope(root, context)
        return root

    def _bind_scope(self, scope: Tag, context: cabc.Mapping[str, typ.Any]) -> None:
        for key, value in context.items():
            for element in find_placeholders(scope, key):
                self._bind_value(scope, element, key, value)

    def _bind_value(self, scope: Tag, element: Tag, key: str, value: typ.Any) -> None:
        match value:
            case str() | bytes():
                self._apply_rule(scope, element, key, value)
            case cabc.Mapping():
                self._bind_scope(element, value)
            case cabc.Set():
                self._stamp(scope, element, key, sorted(value))
            case list() | tuple():
                self._stamp(scope, element, key, value)
            case _:
                self._apply_rule(scope, element, key, value)

    def _stamp(
        self, scope: Tag, element: Tag, key: str, items: cabc.Sequence[typ.Any]
    ) -> None:
        """Replace ``element`` with one bound clone per item."""
        for item in items:
            clone = copy.copy(element)
            element.insert_before(clone)
            self._bind_value(scope, clone, key, item)
        element.decompose()

    def _apply_rule(self, scope: Tag, element: Tag, key: str, value: typ.Any) -> None:
        for rule in self.rules:
            if rule.matches(element):
                if rule.apply(element, key, value, scope):
                    element.string = "" if value is None else str(value)
                return
        msg = f"No binding rule accepts the '{key}' placeholder."
        raise BindingError(msg)


__all__ = ["BindingEngine", "find_placeholders", "is_placeholder"]

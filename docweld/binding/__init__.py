"""Class-keyed binding of page data onto theme templates."""

from .engine import BindingEngine, find_placeholders, is_placeholder
from .rules import (
    DEFAULT_RULES,
    AuthorLinkRule,
    BindingRule,
    BreadcrumbRule,
    DateRule,
    ListingRule,
    RawInjectRule,
)

__all__ = [
    "DEFAULT_RULES",
    "AuthorLinkRule",
    "BindingEngine",
    "BindingRule",
    "BreadcrumbRule",
    "DateRule",
    "ListingRule",
    "RawInjectRule",
    "find_placeholders",
    "is_placeholder",
]

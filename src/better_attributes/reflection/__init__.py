"""Member introspection and attribute query engine."""

from .filters import MATCH_RULES
from .introspector import ClassIntrospector, StaticIntrospector
from .query import AttributeQuery, resolve_condition, resolve_kind

__all__ = [
    "AttributeQuery",
    "ClassIntrospector",
    "StaticIntrospector",
    "MATCH_RULES",
    "resolve_condition",
    "resolve_kind",
]

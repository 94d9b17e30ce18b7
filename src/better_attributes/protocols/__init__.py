"""Protocol definitions for better-attributes.

Protocols provide type-safe interfaces without requiring inheritance,
following Python's structural subtyping.
"""

from .introspection import MemberIntrospector

__all__ = [
    "MemberIntrospector",
]

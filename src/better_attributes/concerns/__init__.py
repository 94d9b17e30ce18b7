"""Mixin classes for better-attributes.

This module provides reusable mixin classes that add attribute queries to
other classes through multiple inheritance.
"""

from .has_better_attributes import HasBetterAttributes

__all__ = [
    "HasBetterAttributes",
]

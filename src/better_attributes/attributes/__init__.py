"""Marker declaration and attachment."""

from .decorators import (
    attached_attributes,
    attribute,
    check_attributes,
    get_attribute_metadata,
    is_valid_attribute,
    with_attributes,
)

__all__ = [
    "attribute",
    "with_attributes",
    "is_valid_attribute",
    "get_attribute_metadata",
    "attached_attributes",
    "check_attributes",
]

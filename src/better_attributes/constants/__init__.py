"""Constants module for better-attributes.

This module contains all constant values and enumerations used throughout
the package. It has no dependencies on other better-attributes modules.
"""

from better_attributes.constants.reflection import (
    ATTRIBUTE_METADATA_ATTR,
    ATTRIBUTES_ATTR,
    AttributeTarget,
    FilterCondition,
    MemberKind,
)

__all__ = [
    "MemberKind",
    "FilterCondition",
    "AttributeTarget",
    "ATTRIBUTES_ATTR",
    "ATTRIBUTE_METADATA_ATTR",
]

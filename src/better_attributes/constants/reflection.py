"""Reflection constants and enumerations.

This module contains the enum types that describe what a query reads
(which member list) and how each member is tested against the requested
markers.
"""

from enum import Enum
from typing import Tuple


class MemberKind(str, Enum):
    """Member category targeted by a query.

    PROPERTIES covers annotated class fields and ``property`` objects.
    METHODS covers plain functions, ``staticmethod`` and ``classmethod``
    objects declared on the class.
    """

    PROPERTIES = "properties"
    METHODS = "methods"


class FilterCondition(str, Enum):
    """Matching rule applied to the markers attached to a member.

    ATTRIBUTE: carries the single requested marker
    ALL_ATTRIBUTES: carries every requested marker
    ANY_ATTRIBUTE: carries at least one requested marker
    WITH_ATTRIBUTES: carries at least one marker of any type
    WITHOUT_ATTRIBUTES: carries no marker at all
    EXCEPT_ATTRIBUTES: does not carry the whole requested combination
    EXCEPT_ANY_ATTRIBUTE: carries none of the requested markers
    """

    ATTRIBUTE = "attribute"
    ALL_ATTRIBUTES = "all_attributes"
    ANY_ATTRIBUTE = "any_attribute"
    WITH_ATTRIBUTES = "with_attributes"
    WITHOUT_ATTRIBUTES = "without_attributes"
    EXCEPT_ATTRIBUTES = "except_attributes"
    EXCEPT_ANY_ATTRIBUTE = "except_any_attribute"

    @property
    def requires_markers(self) -> bool:
        """Whether the condition is evaluated against a caller-supplied marker set."""
        return self not in (FilterCondition.WITH_ATTRIBUTES, FilterCondition.WITHOUT_ATTRIBUTES)


class AttributeTarget(str, Enum):
    """Member kinds a marker may be attached to."""

    PROPERTY = "property"
    METHOD = "method"
    ALL = "all"

    @property
    def kinds(self) -> Tuple[MemberKind, ...]:
        if self is AttributeTarget.PROPERTY:
            return (MemberKind.PROPERTIES,)
        if self is AttributeTarget.METHOD:
            return (MemberKind.METHODS,)
        return (MemberKind.PROPERTIES, MemberKind.METHODS)


# Attribute name under which attached marker instances are stored on functions.
ATTRIBUTES_ATTR = "_better_attributes"

# Attribute name under which AttributeMetadata is stored on marker classes.
ATTRIBUTE_METADATA_ATTR = "_attribute_metadata"

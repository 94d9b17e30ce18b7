from better_attributes.__version__ import __version__
from better_attributes.attributes import (
    attribute,
    get_attribute_metadata,
    is_valid_attribute,
    with_attributes,
)
from better_attributes.concerns import HasBetterAttributes
from better_attributes.constants import AttributeTarget, FilterCondition, MemberKind
from better_attributes.reflection import AttributeQuery, ClassIntrospector, StaticIntrospector
from better_attributes.types import AttributeMetadata, Member

from better_attributes.common.exceptions import BetterAttributesError, ErrorCode


__all__ = [
    "__version__",

    "HasBetterAttributes",

    "attribute",
    "with_attributes",
    "is_valid_attribute",
    "get_attribute_metadata",

    "AttributeTarget",
    "FilterCondition",
    "MemberKind",
    "AttributeMetadata",
    "Member",

    "AttributeQuery",
    "ClassIntrospector",
    "StaticIntrospector",

    # Exceptions (public API)
    "BetterAttributesError",
    "ErrorCode",
]

"""Metadata types for attribute markers and introspected class members.

This module contains the declaration metadata stored on marker classes and
the Member record produced by introspection and returned by every query.
"""

from typing import Any, Dict, List, NamedTuple, Optional, Tuple, Type

from better_attributes.constants import AttributeTarget, MemberKind
from better_attributes.types.base import AttributesBaseModel


class AttributeMetadata(AttributesBaseModel):
    """Declaration metadata for an attribute marker class.

    Attached by the ``@attribute`` class decorator. Its presence on a class
    is what makes that class a legal marker.

    Attributes:
        name: Display name of the marker, defaults to the class name.
        target: Member kinds the marker may be attached to.
        repeatable: Whether the marker may appear more than once on a
            single member.
    """
    name: str
    target: AttributeTarget = AttributeTarget.ALL
    repeatable: bool = False
    description: Optional[str] = None

    @property
    def kinds(self) -> Tuple[MemberKind, ...]:
        """Member kinds this marker accepts."""
        return AttributeTarget(self.target).kinds

    def allows(self, kind: MemberKind) -> bool:
        return MemberKind(kind) in self.kinds


def _marker_matches(instance: Any, marker: Type, match_subclasses: bool) -> bool:
    if match_subclasses:
        return isinstance(instance, marker)
    return type(instance) is marker


class Member(NamedTuple):
    """A property or method of a target class together with its markers.

    Attributes:
        name: Member name as declared on the class
        kind: Member category (properties or methods)
        owner: Class that declares the member
        value: The underlying object: a function, ``property``,
            ``staticmethod``/``classmethod`` or the field annotation
        attributes: Attached marker instances in declaration order
    """
    name: str
    kind: MemberKind
    owner: Optional[type]
    value: Any
    attributes: Tuple[Any, ...] = ()

    def get_attributes(self, marker: Optional[Type] = None, match_subclasses: bool = False) -> List[Any]:
        """Return the attached marker instances, optionally of one marker type."""
        if marker is None:
            return list(self.attributes)
        return [a for a in self.attributes if _marker_matches(a, marker, match_subclasses)]

    def grouped_attributes(
        self,
        markers: Tuple[Type, ...],
        match_subclasses: bool = False,
    ) -> Dict[Type, List[Any]]:
        """Map each requested marker type to its instances on this member.

        Marker types with no instance are left out of the mapping.
        """
        grouped: Dict[Type, List[Any]] = {}
        for marker in markers:
            found = self.get_attributes(marker, match_subclasses)
            if found:
                grouped[marker] = found
        return grouped

    @property
    def qualified_name(self) -> str:
        owner = self.owner.__qualname__ if self.owner is not None else "<synthetic>"
        return f"{owner}.{self.name}"

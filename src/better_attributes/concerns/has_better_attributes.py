"""Attribute query mixin.

This module provides the mixin that lets a class list its own properties
and methods filtered by the markers attached to them.
"""

from typing import Iterable, List, Optional, Type, Union

from better_attributes.attributes import is_valid_attribute
from better_attributes.common.exceptions import configuration_error
from better_attributes.constants import FilterCondition, MemberKind
from better_attributes.protocols import MemberIntrospector
from better_attributes.reflection.introspector import ClassIntrospector
from better_attributes.reflection.query import AttributeQuery, MemberCallback
from better_attributes.types.metadata import Member

Kind = Union[str, MemberKind]


class HasBetterAttributes:
    """Mixin adding attribute queries over the class's own members.

    All queries are classmethods, so they can be called on the class or on
    an instance. Results are lists in declaration order; every callback is
    called once per returned member with ``(member, matched)`` where
    ``matched`` maps each matched marker type to its instances on the member
    (empty for the "without" and "except" queries).

    Attributes:
        attribute_introspector: Optional MemberIntrospector used instead of
            a ClassIntrospector over the class's MRO. The mixin's own
            methods are never reported by the default introspector.

    Example:
        >>> class Sample(HasBetterAttributes):
        ...     a: Annotated[int, Tag1()] = 0
        ...     b: Annotated[int, Tag1(), Tag2()] = 0
        ...     c: int = 0
        >>>
        >>> [m.name for m in Sample.get_properties_by_any_attribute([Tag1, Tag2])]
        ['a', 'b']
        >>> [m.name for m in Sample.get_properties_without_attributes()]
        ['c']
    """

    attribute_introspector: Optional[MemberIntrospector] = None

    @classmethod
    def _attribute_query(cls) -> AttributeQuery:
        introspector = cls.attribute_introspector
        if introspector is None:
            introspector = ClassIntrospector(stop_at=(HasBetterAttributes,))
        elif not isinstance(introspector, MemberIntrospector):
            raise configuration_error(
                f"{cls.__qualname__}.attribute_introspector does not implement get_members()",
                config_key="attribute_introspector",
            )
        return AttributeQuery(introspector)

    @classmethod
    def _filter_members(
        cls,
        kind: Kind,
        condition: FilterCondition,
        markers: Iterable[Type] = (),
        callback: Optional[MemberCallback] = None,
    ) -> List[Member]:
        return cls._attribute_query().run(cls, kind, condition, markers, callback)

    @staticmethod
    def is_valid_attribute(marker: object) -> bool:
        """Check whether ``marker`` is a class declared with ``@attribute``."""
        return is_valid_attribute(marker)

    # ------------------------------------------------------------------
    # Generic queries
    # ------------------------------------------------------------------

    @classmethod
    def members_by_all_attributes(
        cls,
        kind: Kind,
        markers: Iterable[Type],
        callback: Optional[MemberCallback] = None,
    ) -> List[Member]:
        """Members of ``kind`` carrying every marker in ``markers``.

        Raises:
            BetterAttributesError: EMPTY_MARKER_SET when ``markers`` is empty;
                "all of nothing" is rejected rather than matching everything.
        """
        return cls._filter_members(kind, FilterCondition.ALL_ATTRIBUTES, markers, callback)

    @classmethod
    def members_by_any_attribute(
        cls,
        kind: Kind,
        markers: Iterable[Type],
        callback: Optional[MemberCallback] = None,
    ) -> List[Member]:
        """Members of ``kind`` carrying at least one marker in ``markers``."""
        return cls._filter_members(kind, FilterCondition.ANY_ATTRIBUTE, markers, callback)

    @classmethod
    def members_by_attribute(
        cls,
        kind: Kind,
        marker: Type,
        callback: Optional[MemberCallback] = None,
    ) -> List[Member]:
        """Members of ``kind`` carrying ``marker``.

        Same result as ``members_by_any_attribute(kind, [marker])``.
        """
        return cls._filter_members(kind, FilterCondition.ATTRIBUTE, (marker,), callback)

    @classmethod
    def members_with_attributes(
        cls,
        kind: Kind,
        callback: Optional[MemberCallback] = None,
    ) -> List[Member]:
        """Members of ``kind`` carrying at least one marker of any type."""
        return cls._filter_members(kind, FilterCondition.WITH_ATTRIBUTES, (), callback)

    @classmethod
    def members_without_attributes(
        cls,
        kind: Kind,
        callback: Optional[MemberCallback] = None,
    ) -> List[Member]:
        """Members of ``kind`` carrying no marker at all."""
        return cls._filter_members(kind, FilterCondition.WITHOUT_ATTRIBUTES, (), callback)

    @classmethod
    def members_except_attribute(
        cls,
        kind: Kind,
        marker: Type,
        callback: Optional[MemberCallback] = None,
    ) -> List[Member]:
        """Members of ``kind`` not carrying ``marker``."""
        return cls._filter_members(kind, FilterCondition.EXCEPT_ANY_ATTRIBUTE, (marker,), callback)

    @classmethod
    def members_except_attributes(
        cls,
        kind: Kind,
        markers: Iterable[Type],
        callback: Optional[MemberCallback] = None,
    ) -> List[Member]:
        """Members of ``kind`` that do not carry the whole combination ``markers``.

        The complement of ``members_by_all_attributes``.
        """
        return cls._filter_members(kind, FilterCondition.EXCEPT_ATTRIBUTES, markers, callback)

    @classmethod
    def members_except_any_attribute(
        cls,
        kind: Kind,
        markers: Iterable[Type],
        callback: Optional[MemberCallback] = None,
    ) -> List[Member]:
        """Members of ``kind`` carrying none of ``markers``.

        The complement of ``members_by_any_attribute``.
        """
        return cls._filter_members(kind, FilterCondition.EXCEPT_ANY_ATTRIBUTE, markers, callback)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @classmethod
    def get_properties_by_attribute(cls, marker: Type, callback: Optional[MemberCallback] = None) -> List[Member]:
        return cls.members_by_attribute(MemberKind.PROPERTIES, marker, callback)

    @classmethod
    def get_properties_by_attributes(
        cls, markers: Iterable[Type], callback: Optional[MemberCallback] = None
    ) -> List[Member]:
        """Properties carrying every marker in ``markers``."""
        return cls.members_by_all_attributes(MemberKind.PROPERTIES, markers, callback)

    @classmethod
    def get_properties_by_any_attribute(
        cls, markers: Iterable[Type], callback: Optional[MemberCallback] = None
    ) -> List[Member]:
        return cls.members_by_any_attribute(MemberKind.PROPERTIES, markers, callback)

    @classmethod
    def get_properties_with_attributes(cls, callback: Optional[MemberCallback] = None) -> List[Member]:
        return cls.members_with_attributes(MemberKind.PROPERTIES, callback)

    @classmethod
    def get_properties_without_attributes(cls, callback: Optional[MemberCallback] = None) -> List[Member]:
        return cls.members_without_attributes(MemberKind.PROPERTIES, callback)

    @classmethod
    def get_properties_except_attribute(cls, marker: Type, callback: Optional[MemberCallback] = None) -> List[Member]:
        return cls.members_except_attribute(MemberKind.PROPERTIES, marker, callback)

    @classmethod
    def get_properties_except_attributes(
        cls, markers: Iterable[Type], callback: Optional[MemberCallback] = None
    ) -> List[Member]:
        """Properties that do not carry the whole combination ``markers``."""
        return cls.members_except_attributes(MemberKind.PROPERTIES, markers, callback)

    @classmethod
    def get_properties_except_any_attribute(
        cls, markers: Iterable[Type], callback: Optional[MemberCallback] = None
    ) -> List[Member]:
        return cls.members_except_any_attribute(MemberKind.PROPERTIES, markers, callback)

    # ------------------------------------------------------------------
    # Methods
    # ------------------------------------------------------------------

    @classmethod
    def get_methods_by_attribute(cls, marker: Type, callback: Optional[MemberCallback] = None) -> List[Member]:
        return cls.members_by_attribute(MemberKind.METHODS, marker, callback)

    @classmethod
    def get_methods_by_attributes(
        cls, markers: Iterable[Type], callback: Optional[MemberCallback] = None
    ) -> List[Member]:
        """Methods carrying every marker in ``markers``."""
        return cls.members_by_all_attributes(MemberKind.METHODS, markers, callback)

    @classmethod
    def get_methods_by_any_attribute(
        cls, markers: Iterable[Type], callback: Optional[MemberCallback] = None
    ) -> List[Member]:
        return cls.members_by_any_attribute(MemberKind.METHODS, markers, callback)

    @classmethod
    def get_methods_with_attributes(cls, callback: Optional[MemberCallback] = None) -> List[Member]:
        return cls.members_with_attributes(MemberKind.METHODS, callback)

    @classmethod
    def get_methods_without_attributes(cls, callback: Optional[MemberCallback] = None) -> List[Member]:
        return cls.members_without_attributes(MemberKind.METHODS, callback)

    @classmethod
    def get_methods_except_attribute(cls, marker: Type, callback: Optional[MemberCallback] = None) -> List[Member]:
        return cls.members_except_attribute(MemberKind.METHODS, marker, callback)

    @classmethod
    def get_methods_except_attributes(
        cls, markers: Iterable[Type], callback: Optional[MemberCallback] = None
    ) -> List[Member]:
        """Methods that do not carry the whole combination ``markers``."""
        return cls.members_except_attributes(MemberKind.METHODS, markers, callback)

    @classmethod
    def get_methods_except_any_attribute(
        cls, markers: Iterable[Type], callback: Optional[MemberCallback] = None
    ) -> List[Member]:
        return cls.members_except_any_attribute(MemberKind.METHODS, markers, callback)

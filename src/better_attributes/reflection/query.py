"""Attribute query engine.

Validates a query, enumerates the target's members of the requested kind
through a MemberIntrospector and keeps the members that satisfy the
requested FilterCondition.
"""

from typing import Any, Callable, Iterable, List, Optional, Tuple, Type, Union

from better_attributes.attributes import is_valid_attribute
from better_attributes.common.exceptions import (
    empty_marker_set_error,
    invalid_callback_error,
    invalid_condition_error,
    invalid_query_kind_error,
    marker_count_error,
    unknown_marker_error,
)
from better_attributes.constants import FilterCondition, MemberKind
from better_attributes.logging import get_logger
from better_attributes.observability import QueryContext, query_scope
from better_attributes.protocols import MemberIntrospector
from better_attributes.reflection.filters import MATCH_RULES, Matched
from better_attributes.settings import BetterAttributesSettings, get_settings
from better_attributes.types.metadata import Member

MemberCallback = Callable[[Member, Matched], Any]


def resolve_kind(kind: Union[str, MemberKind]) -> MemberKind:
    """Normalize a kind value, rejecting anything outside MemberKind."""
    if isinstance(kind, MemberKind):
        return kind
    try:
        return MemberKind(kind)
    except ValueError:
        raise invalid_query_kind_error(kind) from None


def resolve_condition(condition: Union[str, FilterCondition]) -> FilterCondition:
    """Normalize a condition value, rejecting anything outside FilterCondition."""
    if isinstance(condition, FilterCondition):
        return condition
    try:
        return FilterCondition(condition)
    except ValueError:
        raise invalid_condition_error(condition) from None


def _dedupe(markers: Iterable[Type]) -> Tuple[Type, ...]:
    unique: List[Type] = []
    for marker in markers:
        if marker not in unique:
            unique.append(marker)
    return tuple(unique)


class AttributeQuery:
    """Runs attribute queries against a target class.

    Attributes:
        introspector: Source of the target's members
        settings: Settings controlling marker validation and matching
    """

    def __init__(
        self,
        introspector: MemberIntrospector,
        settings: Optional[BetterAttributesSettings] = None,
    ):
        self.introspector = introspector
        self.settings = settings or get_settings()
        self.logger = get_logger(__name__)

    def validate(
        self,
        kind: Union[str, MemberKind],
        condition: Union[str, FilterCondition],
        markers: Iterable[Type],
        callback: Optional[MemberCallback],
    ) -> Tuple[MemberKind, FilterCondition, Tuple[Type, ...]]:
        """Check every query input before any member is read.

        Returns:
            The resolved kind and condition, and the de-duplicated marker tuple

        Raises:
            BetterAttributesError: INVALID_QUERY_KIND, INVALID_CONDITION,
                UNKNOWN_MARKER_TYPE, EMPTY_MARKER_SET, INVALID_MARKER_COUNT or
                INVALID_CALLBACK
        """
        resolved_kind = resolve_kind(kind)
        condition = resolve_condition(condition)

        if isinstance(markers, type) or isinstance(markers, (str, bytes)):
            markers = (markers,)
        unique = _dedupe(markers)

        if self.settings.validate_markers:
            for marker in unique:
                if not is_valid_attribute(marker):
                    raise unknown_marker_error(marker)

        if condition.requires_markers and not unique:
            raise empty_marker_set_error(condition)
        if condition is FilterCondition.ATTRIBUTE and len(unique) != 1:
            raise marker_count_error(condition, expected=1, received=len(unique))

        if callback is not None and not callable(callback):
            raise invalid_callback_error(callback)

        return resolved_kind, condition, unique

    def run(
        self,
        target: Any,
        kind: Union[str, MemberKind],
        condition: Union[str, FilterCondition],
        markers: Iterable[Type] = (),
        callback: Optional[MemberCallback] = None,
    ) -> List[Member]:
        """Return the members of ``target`` that satisfy ``condition``.

        Args:
            target: Class whose members are queried, or an instance of it
            kind: Member category, properties or methods
            condition: Matching rule
            markers: Marker classes the rule is evaluated against; ignored by
                WITH_ATTRIBUTES and WITHOUT_ATTRIBUTES
            callback: Called once per match with the member and a mapping of
                matched marker type to its instances on that member

        Returns:
            Matching members in declaration order
        """
        resolved_kind, condition, unique = self.validate(kind, condition, markers, callback)
        if not isinstance(target, type):
            target = type(target)
        rule = MATCH_RULES[condition]
        match_subclasses = self.settings.match_subclasses

        ctx = QueryContext.generate(
            target_class=target.__qualname__,
            kind=resolved_kind.value,
            condition=condition.value,
            attributes={"markers": ",".join(getattr(m, "__qualname__", str(m)) for m in unique)},
        )

        with query_scope(ctx):
            matches: List[Member] = []
            for member in self.introspector.get_members(target, resolved_kind):
                matched = rule(member, unique, match_subclasses)
                if matched is None:
                    continue
                if callback is not None:
                    callback(member, matched)
                matches.append(member)

            self.logger.debug(
                "query.completed",
                extra={**ctx.to_telemetry_dict(), "match_count": len(matches)},
            )
            return matches

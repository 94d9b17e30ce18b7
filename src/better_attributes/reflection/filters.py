"""Per-member match rules, one per FilterCondition.

Every rule takes a member, the requested marker types and the subclass
matching flag, and returns None when the member does not match or the
matched-markers mapping handed to callbacks when it does.
"""

from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from better_attributes.constants import FilterCondition
from better_attributes.types.metadata import Member

Matched = Dict[Type, List[Any]]
MatchRule = Callable[[Member, Tuple[Type, ...], bool], Optional[Matched]]


def has_attribute(member: Member, markers: Tuple[Type, ...], match_subclasses: bool) -> Optional[Matched]:
    return has_any_attribute(member, markers[:1], match_subclasses)


def has_all_attributes(member: Member, markers: Tuple[Type, ...], match_subclasses: bool) -> Optional[Matched]:
    matched = member.grouped_attributes(markers, match_subclasses)
    if len(matched) != len(markers):
        return None
    return matched


def has_any_attribute(member: Member, markers: Tuple[Type, ...], match_subclasses: bool) -> Optional[Matched]:
    matched = member.grouped_attributes(markers, match_subclasses)
    if not matched:
        return None
    return matched


def has_attributes(member: Member, markers: Tuple[Type, ...], match_subclasses: bool) -> Optional[Matched]:
    if not member.attributes:
        return None
    grouped: Matched = {}
    for instance in member.attributes:
        grouped.setdefault(type(instance), []).append(instance)
    return grouped


def has_no_attributes(member: Member, markers: Tuple[Type, ...], match_subclasses: bool) -> Optional[Matched]:
    if member.attributes:
        return None
    return {}


def lacks_attributes(member: Member, markers: Tuple[Type, ...], match_subclasses: bool) -> Optional[Matched]:
    if has_all_attributes(member, markers, match_subclasses) is not None:
        return None
    return {}


def lacks_any_attribute(member: Member, markers: Tuple[Type, ...], match_subclasses: bool) -> Optional[Matched]:
    if has_any_attribute(member, markers, match_subclasses) is not None:
        return None
    return {}


MATCH_RULES: Dict[FilterCondition, MatchRule] = {
    FilterCondition.ATTRIBUTE: has_attribute,
    FilterCondition.ALL_ATTRIBUTES: has_all_attributes,
    FilterCondition.ANY_ATTRIBUTE: has_any_attribute,
    FilterCondition.WITH_ATTRIBUTES: has_attributes,
    FilterCondition.WITHOUT_ATTRIBUTES: has_no_attributes,
    FilterCondition.EXCEPT_ATTRIBUTES: lacks_attributes,
    FilterCondition.EXCEPT_ANY_ATTRIBUTE: lacks_any_attribute,
}

"""Member introspectors.

ClassIntrospector reads a class's real members through ``inspect`` and
``typing``; StaticIntrospector serves a fixed member list, which keeps the
filter logic testable without declaring classes.
"""

import inspect
import typing
import weakref
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from better_attributes.attributes import attached_attributes, check_attributes, is_valid_attribute
from better_attributes.common.exceptions import unresolved_annotation_error
from better_attributes.constants import MemberKind
from better_attributes.logging import get_logger
from better_attributes.types.metadata import Member
from better_attributes.utils import traced

logger = get_logger(__name__)


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _annotation_markers(annotation: Any) -> Tuple[Any, ...]:
    """Marker instances carried by a ``typing.Annotated`` annotation.

    Annotated metadata that is not a marker (pydantic ``Field``, constraint
    objects and so on) is ignored.
    """
    if typing.get_origin(annotation) is not typing.Annotated:
        return ()
    return tuple(item for item in annotation.__metadata__ if is_valid_attribute(type(item)))


_resolved_annotations: "weakref.WeakKeyDictionary[type, Dict[str, Any]]" = weakref.WeakKeyDictionary()


def _own_annotations(klass: type) -> Dict[str, Any]:
    """Evaluated annotations declared on ``klass`` itself, resolved once per class.

    String annotations (``from __future__ import annotations``) construct
    their marker instances when evaluated, so the result is kept for the
    lifetime of the class.

    Raises:
        BetterAttributesError: UNRESOLVED_ANNOTATION if any annotation
            cannot be evaluated.
    """
    cached = _resolved_annotations.get(klass)
    if cached is not None:
        return cached

    try:
        annotations = dict(inspect.get_annotations(klass, eval_str=True))
    except Exception as e:
        raise unresolved_annotation_error(klass, e) from e

    _resolved_annotations[klass] = annotations
    logger.debug(
        "introspector.annotations_resolved",
        extra={"target": klass.__qualname__, "count": len(annotations)},
    )
    return annotations


class ClassIntrospector:
    """Reads properties and methods from a class's MRO.

    The most-derived class is read first and a name seen once hides the
    same name further up the MRO. ``object`` and any class listed in
    ``stop_at`` are not read.

    Properties are annotated class fields (in annotation order) followed by
    ``property`` objects (in declaration order). Methods are plain
    functions, ``staticmethod`` and ``classmethod`` objects.

    Attributes:
        include_private: Include single-underscore names.
        stop_at: Classes whose own members are never reported, typically
            the query mixin.
    """

    def __init__(self, include_private: Optional[bool] = None, stop_at: Iterable[type] = ()):
        if include_private is None:
            from better_attributes.settings import get_settings
            include_private = get_settings().include_private
        self.include_private = include_private
        self.stop_at: Tuple[type, ...] = tuple(stop_at)

    def _skip(self, name: str) -> bool:
        if _is_dunder(name):
            return True
        return name.startswith("_") and not self.include_private

    def _classes(self, target: type) -> List[type]:
        return [
            klass for klass in target.__mro__
            if klass is not object and klass not in self.stop_at
        ]

    @traced(
        "better_attributes.introspect",
        call_attributes=lambda self, target, kind: {
            "target_class": target.__qualname__,
            "kind": getattr(kind, "value", kind),
        },
        result_attributes=lambda members: {"member_count": len(members)},
    )
    def get_members(self, target: type, kind: MemberKind) -> List[Member]:
        kind = MemberKind(kind)
        members: List[Member] = []
        seen: Set[str] = set()

        for klass in self._classes(target):
            if kind is MemberKind.PROPERTIES:
                found = self._properties(klass)
            else:
                found = self._methods(klass)

            for member in found:
                if member.name in seen or self._skip(member.name):
                    continue
                seen.add(member.name)
                check_attributes(member.attributes, kind, member.qualified_name)
                members.append(member)

        return members

    def _properties(self, klass: type) -> List[Member]:
        members = []
        annotations = _own_annotations(klass)
        for name, annotation in annotations.items():
            if typing.get_origin(annotation) is typing.ClassVar:
                args = typing.get_args(annotation)
                annotation = args[0] if args else annotation
            members.append(Member(
                name=name,
                kind=MemberKind.PROPERTIES,
                owner=klass,
                value=annotation,
                attributes=_annotation_markers(annotation),
            ))

        for name, value in vars(klass).items():
            if name in annotations or not isinstance(value, property):
                continue
            members.append(Member(
                name=name,
                kind=MemberKind.PROPERTIES,
                owner=klass,
                value=value,
                attributes=attached_attributes(value),
            ))
        return members

    def _methods(self, klass: type) -> List[Member]:
        members = []
        for name, value in vars(klass).items():
            if not (inspect.isfunction(value) or isinstance(value, (staticmethod, classmethod))):
                continue
            members.append(Member(
                name=name,
                kind=MemberKind.METHODS,
                owner=klass,
                value=value,
                attributes=attached_attributes(value),
            ))
        return members


class StaticIntrospector:
    """Serves a fixed, already-built member list.

    The target class passed to ``get_members`` is ignored.
    """

    def __init__(self, members: Sequence[Member]):
        self._members = list(members)

    def get_members(self, target: type, kind: MemberKind) -> List[Member]:
        kind = MemberKind(kind)
        return [m for m in self._members if MemberKind(m.kind) is kind]

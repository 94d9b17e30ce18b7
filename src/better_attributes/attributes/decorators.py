"""Decorators for declaring attribute markers and attaching them to members.

A marker is any class decorated with ``@attribute``. Instances of a marker
are attached to class members at declaration time:

    >>> @attribute(target=AttributeTarget.METHOD)
    ... class Route:
    ...     def __init__(self, path: str):
    ...         self.path = path
    ...
    >>> @attribute(repeatable=True)
    ... class Tag:
    ...     def __init__(self, name: str):
    ...         self.name = name
    ...
    >>> class Api(HasBetterAttributes):
    ...     title: Annotated[str, Tag("meta")] = "api"
    ...
    ...     @Route("/users")
    ...     @Tag("public")
    ...     def users(self): ...
    ...
    ...     @with_attributes(Tag("internal"), Tag("slow"))
    ...     def rebuild(self): ...
"""

from typing import Any, Callable, Optional, Tuple, Type, TypeVar, Union

from better_attributes.common.exceptions import (
    not_repeatable_error,
    target_mismatch_error,
    unknown_marker_error,
)
from better_attributes.constants import (
    ATTRIBUTE_METADATA_ATTR,
    ATTRIBUTES_ATTR,
    AttributeTarget,
    MemberKind,
)
from better_attributes.types.metadata import AttributeMetadata

T = TypeVar("T")


def is_valid_attribute(marker: Any) -> bool:
    """Check whether ``marker`` is a class declared with ``@attribute``.

    Instances are not marker types and return False; use
    ``is_valid_attribute(type(obj))`` to check an instance.
    """
    return isinstance(marker, type) and isinstance(
        getattr(marker, ATTRIBUTE_METADATA_ATTR, None), AttributeMetadata
    )


def get_attribute_metadata(marker: Any) -> AttributeMetadata:
    """Return the declaration metadata of a marker class or marker instance.

    Raises:
        BetterAttributesError: UNKNOWN_MARKER_TYPE if the class was never
            declared with ``@attribute``.
    """
    marker_type = marker if isinstance(marker, type) else type(marker)
    if not is_valid_attribute(marker_type):
        raise unknown_marker_error(marker_type)
    return getattr(marker_type, ATTRIBUTE_METADATA_ATTR)


def _unwrap(target: Any) -> Tuple[Callable, Optional[MemberKind], str]:
    """Find the function that stores markers for a decorated member.

    The member kind is only known for ``property``, ``staticmethod`` and
    ``classmethod`` objects. A plain function may still end up wrapped in
    ``property`` further up the decorator stack, so its kind is None and the
    target check happens at introspection time.
    """
    if isinstance(target, property):
        if target.fget is None:
            raise TypeError("Cannot attach attributes to a property without a getter")
        return target.fget, MemberKind.PROPERTIES, target.fget.__name__
    if isinstance(target, (staticmethod, classmethod)):
        return target.__func__, MemberKind.METHODS, target.__func__.__name__
    if callable(target) and hasattr(target, "__dict__"):
        return target, None, getattr(target, "__name__", repr(target))
    raise TypeError(
        f"Attributes can only be attached to functions, properties, staticmethods "
        f"or classmethods, not {type(target).__name__}"
    )


def check_attributes(
    markers: Tuple[Any, ...],
    kind: Optional[MemberKind],
    member_name: str,
) -> None:
    """Validate a member's full marker tuple.

    Every marker must be an instance of a declared marker class, allow the
    member kind (when known) and respect its ``repeatable`` flag.
    """
    seen = set()
    for marker in markers:
        metadata = get_attribute_metadata(marker)
        if kind is not None and not metadata.allows(kind):
            raise target_mismatch_error(marker, member_name, kind, metadata.kinds)
        if type(marker) in seen and not metadata.repeatable:
            raise not_repeatable_error(marker, member_name)
        seen.add(type(marker))


def attached_attributes(obj: Any) -> Tuple[Any, ...]:
    """Markers stored on a function, property or static/class method."""
    try:
        func, _, _ = _unwrap(obj)
    except TypeError:
        return ()
    return tuple(getattr(func, ATTRIBUTES_ATTR, ()))


def _attach(target: T, markers: Tuple[Any, ...]) -> T:
    func, kind, name = _unwrap(target)
    # decorators apply bottom-up, so newer markers go in front to keep source order
    combined = tuple(markers) + tuple(getattr(func, ATTRIBUTES_ATTR, ()))
    check_attributes(combined, kind, name)
    setattr(func, ATTRIBUTES_ATTR, combined)
    return target


def with_attributes(*markers: Any) -> Callable[[T], T]:
    """Attach one or more marker instances to a member.

    Args:
        *markers: Marker instances, attached in the given order.

    Returns:
        Decorator returning the member unchanged apart from the stored markers.

    Raises:
        BetterAttributesError: If a marker is not declared with ``@attribute``,
            does not allow the member kind, or is repeated without being
            repeatable.
    """
    def decorator(target: T) -> T:
        return _attach(target, markers)

    return decorator


def _attach_self(self, target):
    return _attach(target, (self,))


def attribute(
    target: Union[str, AttributeTarget] = AttributeTarget.ALL,
    repeatable: bool = False,
    name: Optional[str] = None,
    description: Optional[str] = None,
) -> Callable[[Type[T]], Type[T]]:
    """Decorator declaring a class as an attribute marker.

    Args:
        target: Member kinds the marker may be attached to - can be string
            or AttributeTarget enum ("property", "method", "all").
        repeatable: Allow more than one instance on the same member.
        name: Display name, defaults to the class name.
        description: Human-readable description of what the marker means.

    Returns:
        The same class with AttributeMetadata attached as
        ``_attribute_metadata``. Unless the class already defines
        ``__call__``, its instances become decorators that attach
        themselves to the decorated member.

    Example:
        >>> @attribute(target="property")
        ... class Column:
        ...     def __init__(self, name: str = ""):
        ...         self.name = name
    """
    def decorator(cls: Type[T]) -> Type[T]:
        if not isinstance(cls, type):
            raise TypeError(f"@attribute can only decorate classes, not {type(cls).__name__}")

        metadata = AttributeMetadata(
            name=name or cls.__name__,
            target=AttributeTarget(target),
            repeatable=repeatable,
            description=description,
        )
        setattr(cls, ATTRIBUTE_METADATA_ATTR, metadata)

        if not any("__call__" in vars(klass) for klass in cls.__mro__[:-1]):
            cls.__call__ = _attach_self
        return cls

    return decorator

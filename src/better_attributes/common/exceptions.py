from enum import Enum
from typing import Any, Dict, Iterable, Optional

from better_attributes.constants import FilterCondition, MemberKind


class ErrorCode(Enum):
    """Standard error codes for better-attributes operations.

    This enum provides categorized error codes that can be used
    to identify error types without creating numerous exception classes.

    Attributes:
        CONFIG_*: Configuration-related errors
        QUERY_*: Query input errors, raised before any member is scanned
        ATTRIBUTE_*: Marker declaration and attachment errors
    """
    # Configuration errors
    CONFIG_INVALID = "CONFIG_001"

    # Query errors
    INVALID_QUERY_KIND = "QUERY_001"
    UNKNOWN_MARKER_TYPE = "QUERY_002"
    EMPTY_MARKER_SET = "QUERY_003"
    INVALID_CALLBACK = "QUERY_004"
    INVALID_MARKER_COUNT = "QUERY_005"
    INVALID_CONDITION = "QUERY_006"

    # Attribute declaration errors
    ATTRIBUTE_TARGET_MISMATCH = "ATTRIBUTE_001"
    ATTRIBUTE_NOT_REPEATABLE = "ATTRIBUTE_002"
    UNRESOLVED_ANNOTATION = "ATTRIBUTE_003"


class BetterAttributesError(Exception):
    """Base exception for all better-attributes errors.

    Uses error codes for categorization instead of a class per failure.
    Every error is a caller error: it is raised eagerly and nothing
    inside the package retries or recovers from it.

    Attributes:
        message: Error message
        error_code: Error code from ErrorCode enum
        details: Additional error details
        cause: Optional underlying exception
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_MARKER_TYPE,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause

        # lazy import to avoid circular dependency
        from better_attributes.logging import get_logger
        logger = get_logger(__name__)
        logger.error(
            message,
            extra={
                "error_code": error_code.value,
                "details": self.details,
            },
            exc_info=cause is not None,
        )

    def __str__(self) -> str:
        msg = f"[{self.error_code.value}] {self.message}"
        if self.cause:
            msg = f"{msg} (caused by: {type(self.cause).__name__}: {str(self.cause)})"
        return msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "error_name": self.error_code.name,
            "details": self.details,
        }

    @classmethod
    def from_error_code(
        cls,
        error_code: ErrorCode,
        message: str,
        **kwargs
    ) -> "BetterAttributesError":
        return cls(message=message, error_code=error_code, **kwargs)


def _describe(value: Any) -> str:
    if isinstance(value, type):
        return f"{value.__module__}.{value.__qualname__}"
    return repr(value)


# Helper functions for common error scenarios
def invalid_query_kind_error(kind: Any, **kwargs) -> BetterAttributesError:
    """Create an error for a query kind outside {properties, methods}.

    Args:
        kind: The rejected kind value
        **kwargs: Additional arguments for BetterAttributesError

    Returns:
        BetterAttributesError with INVALID_QUERY_KIND code
    """
    allowed = [k.value for k in MemberKind]
    return BetterAttributesError(
        message=f"Invalid query kind {kind!r}; expected one of {allowed}",
        error_code=ErrorCode.INVALID_QUERY_KIND,
        details={"kind": str(kind), "allowed": allowed},
        **kwargs
    )


def unknown_marker_error(marker: Any, **kwargs) -> BetterAttributesError:
    """Create an error for an object that is not a declared attribute marker.

    Args:
        marker: The offending marker (class or instance)
        **kwargs: Additional arguments for BetterAttributesError

    Returns:
        BetterAttributesError with UNKNOWN_MARKER_TYPE code
    """
    return BetterAttributesError(
        message=f"Unknown metadata type: {_describe(marker)} is not declared with @attribute",
        error_code=ErrorCode.UNKNOWN_MARKER_TYPE,
        details={"marker": _describe(marker)},
        **kwargs
    )


def invalid_condition_error(condition: Any, **kwargs) -> BetterAttributesError:
    """Create an error for a filter condition outside FilterCondition."""
    allowed = [c.value for c in FilterCondition]
    return BetterAttributesError(
        message=f"Invalid filter condition {condition!r}; expected one of {allowed}",
        error_code=ErrorCode.INVALID_CONDITION,
        details={"condition": str(condition), "allowed": allowed},
        **kwargs
    )


def empty_marker_set_error(condition: Any, **kwargs) -> BetterAttributesError:
    """Create an error for a marker-based condition called with no markers."""
    return BetterAttributesError(
        message=f"Condition '{getattr(condition, 'value', condition)}' requires at least one marker",
        error_code=ErrorCode.EMPTY_MARKER_SET,
        details={"condition": str(getattr(condition, "value", condition))},
        **kwargs
    )


def marker_count_error(condition: Any, expected: int, received: int, **kwargs) -> BetterAttributesError:
    """Create an error for a condition that takes a fixed number of markers."""
    condition_value = str(getattr(condition, "value", condition))
    return BetterAttributesError(
        message=f"Condition '{condition_value}' takes exactly {expected} marker(s), got {received}",
        error_code=ErrorCode.INVALID_MARKER_COUNT,
        details={"condition": condition_value, "expected": expected, "received": received},
        **kwargs
    )


def invalid_callback_error(callback: Any, **kwargs) -> BetterAttributesError:
    """Create an error for a callback that cannot be invoked."""
    return BetterAttributesError(
        message=f"Callback must be callable, got {type(callback).__name__}",
        error_code=ErrorCode.INVALID_CALLBACK,
        details={"callback_type": type(callback).__name__},
        **kwargs
    )


def target_mismatch_error(
    marker: Any,
    member_name: str,
    kind: Any,
    allowed: Iterable[Any],
    **kwargs
) -> BetterAttributesError:
    """Create an error for a marker attached to a member kind it does not allow.

    Args:
        marker: Marker instance being attached
        member_name: Name of the decorated member
        kind: Member kind of the decorated member
        allowed: Member kinds the marker accepts
        **kwargs: Additional arguments for BetterAttributesError

    Returns:
        BetterAttributesError with ATTRIBUTE_TARGET_MISMATCH code
    """
    allowed_values = [str(getattr(k, "value", k)) for k in allowed]
    kind_value = str(getattr(kind, "value", kind))
    return BetterAttributesError(
        message=(
            f"Attribute {type(marker).__name__} cannot be attached to '{member_name}': "
            f"it targets {allowed_values}, not {kind_value}"
        ),
        error_code=ErrorCode.ATTRIBUTE_TARGET_MISMATCH,
        details={
            "attribute": _describe(type(marker)),
            "member": member_name,
            "kind": kind_value,
            "allowed": allowed_values,
        },
        **kwargs
    )


def not_repeatable_error(marker: Any, member_name: str, **kwargs) -> BetterAttributesError:
    """Create an error for a non-repeatable marker attached twice to one member."""
    return BetterAttributesError(
        message=f"Attribute {type(marker).__name__} must not be repeated on '{member_name}'",
        error_code=ErrorCode.ATTRIBUTE_NOT_REPEATABLE,
        details={"attribute": _describe(type(marker)), "member": member_name},
        **kwargs
    )


def unresolved_annotation_error(klass: type, cause: Exception, **kwargs) -> BetterAttributesError:
    """Create an error for class annotations that cannot be evaluated.

    Args:
        klass: Class whose annotations failed to resolve
        cause: Exception raised while evaluating them
        **kwargs: Additional arguments for BetterAttributesError

    Returns:
        BetterAttributesError with UNRESOLVED_ANNOTATION code
    """
    return BetterAttributesError(
        message=(
            f"Cannot resolve annotations of {_describe(klass)}; markers in "
            f"Annotated fields must be importable from the class's module"
        ),
        error_code=ErrorCode.UNRESOLVED_ANNOTATION,
        details={"target": _describe(klass)},
        cause=cause,
        **kwargs
    )


def configuration_error(
    message: str,
    config_key: Optional[str] = None,
    **kwargs
) -> BetterAttributesError:
    """Create a configuration error.

    Args:
        message: Error message
        config_key: Configuration key that caused the error
        **kwargs: Additional error details

    Returns:
        BetterAttributesError with CONFIG_INVALID code
    """
    details = kwargs.get('details', {})
    if config_key:
        details["config_key"] = config_key

    return BetterAttributesError(
        message=message,
        error_code=ErrorCode.CONFIG_INVALID,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )

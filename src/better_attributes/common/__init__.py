"""Common exceptions for better-attributes.

Exception Design:
    The exception system uses error codes for categorization rather than
    numerous specific exception classes. All errors are instances of
    BetterAttributesError and carry structured error information.
"""

from better_attributes.common.exceptions import (
    BetterAttributesError,
    ErrorCode,
    # Helper functions
    configuration_error,
    empty_marker_set_error,
    invalid_callback_error,
    invalid_condition_error,
    invalid_query_kind_error,
    marker_count_error,
    not_repeatable_error,
    target_mismatch_error,
    unknown_marker_error,
    unresolved_annotation_error,
)

__all__ = [
    # Base Exception and Error Codes
    "BetterAttributesError",
    "ErrorCode",
    # Helper functions
    "configuration_error",
    "empty_marker_set_error",
    "invalid_callback_error",
    "invalid_condition_error",
    "invalid_query_kind_error",
    "marker_count_error",
    "not_repeatable_error",
    "target_mismatch_error",
    "unknown_marker_error",
    "unresolved_annotation_error",
]

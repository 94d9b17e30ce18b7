import logging

from better_attributes.common import (
    BetterAttributesError,
    ErrorCode,
    configuration_error,
    empty_marker_set_error,
    invalid_condition_error,
    invalid_query_kind_error,
    marker_count_error,
    unknown_marker_error,
    unresolved_annotation_error,
)
from better_attributes.constants import FilterCondition


class Plain:
    pass


class TestBetterAttributesError:

    def test_str_includes_code(self):
        error = BetterAttributesError("bad thing", error_code=ErrorCode.EMPTY_MARKER_SET)
        assert str(error) == "[QUERY_003] bad thing"

    def test_str_includes_cause(self):
        error = BetterAttributesError(
            "bad thing",
            error_code=ErrorCode.CONFIG_INVALID,
            cause=KeyError("missing"),
        )
        assert "caused by: KeyError" in str(error)

    def test_to_dict(self):
        error = invalid_query_kind_error("fields")
        assert error.to_dict() == {
            "type": "BetterAttributesError",
            "message": "Invalid query kind 'fields'; expected one of ['properties', 'methods']",
            "error_code": "QUERY_001",
            "error_name": "INVALID_QUERY_KIND",
            "details": {"kind": "fields", "allowed": ["properties", "methods"]},
        }

    def test_from_error_code(self):
        error = BetterAttributesError.from_error_code(ErrorCode.INVALID_CALLBACK, "nope")
        assert error.error_code is ErrorCode.INVALID_CALLBACK
        assert error.message == "nope"

    def test_error_is_logged_on_creation(self, caplog):
        with caplog.at_level(logging.ERROR, logger="better_attributes.common.exceptions"):
            unknown_marker_error(Plain)
        (record,) = caplog.records
        assert record.error_code == "QUERY_002"
        assert record.details["marker"].endswith("Plain")


class TestHelpers:

    def test_empty_marker_set(self):
        error = empty_marker_set_error(FilterCondition.ALL_ATTRIBUTES)
        assert error.error_code is ErrorCode.EMPTY_MARKER_SET
        assert error.details == {"condition": "all_attributes"}

    def test_marker_count(self):
        error = marker_count_error(FilterCondition.ATTRIBUTE, expected=1, received=3)
        assert error.error_code is ErrorCode.INVALID_MARKER_COUNT
        assert error.details["received"] == 3

    def test_configuration_error(self):
        error = configuration_error("broken", config_key="attribute_introspector")
        assert error.error_code is ErrorCode.CONFIG_INVALID
        assert error.details == {"config_key": "attribute_introspector"}

    def test_invalid_condition(self):
        error = invalid_condition_error("all")
        assert error.error_code is ErrorCode.INVALID_CONDITION
        assert error.details["condition"] == "all"
        assert "any_attribute" in error.details["allowed"]

    def test_unresolved_annotation_keeps_cause(self):
        cause = NameError("name 'Local' is not defined")
        error = unresolved_annotation_error(Plain, cause)
        assert error.error_code is ErrorCode.UNRESOLVED_ANNOTATION
        assert error.cause is cause
        assert error.details["target"].endswith("Plain")
        assert "caused by: NameError" in str(error)

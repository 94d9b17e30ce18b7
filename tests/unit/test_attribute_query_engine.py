"""AttributeQuery over synthetic member lists."""

from itertools import combinations
from unittest.mock import MagicMock, patch

import pytest

from better_attributes import (
    AttributeQuery,
    BetterAttributesError,
    ErrorCode,
    FilterCondition,
    Member,
    MemberKind,
    StaticIntrospector,
    attribute,
)
from better_attributes.logging.filters import query_id_var, target_class_var
from better_attributes.reflection import MATCH_RULES
from better_attributes.settings import BetterAttributesSettings


@attribute()
class T1:
    pass


@attribute()
class T2:
    pass


@attribute()
class T3:
    pass


@attribute()
class Base:
    pass


class Special(Base):
    pass


MARKERS = (T1, T2, T3)


def _subsets(items):
    return [combo for size in range(len(items) + 1) for combo in combinations(items, size)]


def _member(name, *markers, kind=MemberKind.PROPERTIES):
    return Member(name=name, kind=kind, owner=None, value=None, attributes=tuple(m() for m in markers))


# one property per marker subset, plus one method that must never show up in property queries
SYNTHETIC = [
    _member("p_" + "".join(m.__name__ for m in subset), *subset) for subset in _subsets(MARKERS)
] + [_member("m_T1", T1, kind=MemberKind.METHODS)]


@pytest.fixture
def query():
    return AttributeQuery(StaticIntrospector(SYNTHETIC), settings=BetterAttributesSettings())


def marker_set(member):
    return {type(a) for a in member.attributes}


properties = [m for m in SYNTHETIC if m.kind is MemberKind.PROPERTIES]


class TestConditionsOverAllMarkerSets:

    @pytest.mark.parametrize("requested", _subsets(MARKERS)[1:])
    def test_all_is_superset(self, query, requested):
        result = query.run(object, MemberKind.PROPERTIES, FilterCondition.ALL_ATTRIBUTES, requested)
        assert result == [m for m in properties if marker_set(m) >= set(requested)]

    @pytest.mark.parametrize("requested", _subsets(MARKERS)[1:])
    def test_any_intersects(self, query, requested):
        result = query.run(object, MemberKind.PROPERTIES, FilterCondition.ANY_ATTRIBUTE, requested)
        assert result == [m for m in properties if marker_set(m) & set(requested)]

    @pytest.mark.parametrize("requested", _subsets(MARKERS)[1:])
    def test_except_conditions_are_complements(self, query, requested):
        all_of = query.run(object, "properties", FilterCondition.ALL_ATTRIBUTES, requested)
        not_all = query.run(object, "properties", FilterCondition.EXCEPT_ATTRIBUTES, requested)
        any_of = query.run(object, "properties", FilterCondition.ANY_ATTRIBUTE, requested)
        none_of = query.run(object, "properties", FilterCondition.EXCEPT_ANY_ATTRIBUTE, requested)

        assert sorted(all_of + not_all, key=properties.index) == properties
        assert sorted(any_of + none_of, key=properties.index) == properties

    def test_without_is_empty_marker_set(self, query):
        result = query.run(object, MemberKind.PROPERTIES, FilterCondition.WITHOUT_ATTRIBUTES)
        assert [m.name for m in result] == ["p_"]

    def test_with_is_non_empty_marker_set(self, query):
        result = query.run(object, MemberKind.PROPERTIES, FilterCondition.WITH_ATTRIBUTES)
        assert result == properties[1:]

    def test_kind_selects_member_list(self, query):
        result = query.run(object, MemberKind.METHODS, FilterCondition.ATTRIBUTE, [T1])
        assert [m.name for m in result] == ["m_T1"]

    def test_duplicate_markers_are_collapsed(self, query):
        once = query.run(object, MemberKind.PROPERTIES, FilterCondition.ALL_ATTRIBUTES, [T1, T2])
        twice = query.run(object, MemberKind.PROPERTIES, FilterCondition.ALL_ATTRIBUTES, [T1, T2, T1])
        assert once == twice

    def test_single_marker_may_be_passed_bare(self, query):
        assert query.run(object, MemberKind.PROPERTIES, FilterCondition.ANY_ATTRIBUTE, T3) == \
            query.run(object, MemberKind.PROPERTIES, FilterCondition.ANY_ATTRIBUTE, [T3])

    def test_every_condition_has_a_rule(self):
        assert set(MATCH_RULES) == set(FilterCondition)


class TestValidation:

    def test_single_attribute_condition_takes_one_marker(self, query):
        with pytest.raises(BetterAttributesError) as exc_info:
            query.run(object, MemberKind.PROPERTIES, FilterCondition.ATTRIBUTE, [T1, T2])
        assert exc_info.value.error_code is ErrorCode.INVALID_MARKER_COUNT

    def test_string_marker_is_unknown(self, query):
        with pytest.raises(BetterAttributesError) as exc_info:
            query.run(object, MemberKind.PROPERTIES, FilterCondition.ANY_ATTRIBUTE, "T1")
        assert exc_info.value.error_code is ErrorCode.UNKNOWN_MARKER_TYPE

    def test_marker_validation_can_be_disabled(self):
        class Plain:
            pass

        lenient = AttributeQuery(
            StaticIntrospector(SYNTHETIC),
            settings=BetterAttributesSettings(validate_markers=False),
        )
        assert lenient.run(object, MemberKind.PROPERTIES, FilterCondition.ANY_ATTRIBUTE, [Plain]) == []

    def test_validate_returns_resolved_inputs(self, query):
        kind, condition, markers = query.validate("methods", "any_attribute", [T2, T2, T1], None)
        assert kind is MemberKind.METHODS
        assert condition is FilterCondition.ANY_ATTRIBUTE
        assert markers == (T2, T1)

    @pytest.mark.parametrize("condition", ["all", "nothing", None])
    def test_unknown_condition(self, query, condition):
        with patch.object(query.introspector, "get_members") as get_members:
            with pytest.raises(BetterAttributesError) as exc_info:
                query.run(object, MemberKind.PROPERTIES, condition, [T1])
        assert exc_info.value.error_code is ErrorCode.INVALID_CONDITION
        get_members.assert_not_called()

    def test_condition_accepts_string_value(self, query):
        assert query.run(object, MemberKind.PROPERTIES, "any_attribute", [T3]) == \
            query.run(object, MemberKind.PROPERTIES, FilterCondition.ANY_ATTRIBUTE, [T3])

    def test_instance_target_is_queried_through_its_class(self, query):
        with patch.object(query.introspector, "get_members", wraps=query.introspector.get_members) as get_members:
            query.run(Special(), MemberKind.PROPERTIES, FilterCondition.ANY_ATTRIBUTE, [T1])
        get_members.assert_called_once_with(Special, MemberKind.PROPERTIES)

    def test_callback_exception_propagates(self, query):
        def explode(member, matched):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            query.run(object, MemberKind.PROPERTIES, FilterCondition.ANY_ATTRIBUTE, [T1], explode)


class TestSubclassMatching:

    members = [_member("special", Special), _member("base", Base)]

    def test_exact_type_by_default(self):
        query = AttributeQuery(StaticIntrospector(self.members), settings=BetterAttributesSettings())
        result = query.run(object, MemberKind.PROPERTIES, FilterCondition.ATTRIBUTE, [Base])
        assert [m.name for m in result] == ["base"]

    def test_subclasses_match_when_enabled(self):
        query = AttributeQuery(
            StaticIntrospector(self.members),
            settings=BetterAttributesSettings(match_subclasses=True),
        )
        matched = {}
        result = query.run(
            object, MemberKind.PROPERTIES, FilterCondition.ATTRIBUTE, [Base],
            lambda member, found: matched.setdefault(member.name, [type(f) for f in found[Base]]),
        )
        assert [m.name for m in result] == ["special", "base"]
        assert matched == {"special": [Special], "base": [Base]}


class TestTracing:

    @pytest.fixture
    def span(self):
        span = MagicMock()
        tracer = MagicMock()
        tracer.start_as_current_span.return_value.__enter__.return_value = span
        with patch("better_attributes.observability.context.get_tracer", return_value=tracer):
            yield span

    def test_query_runs_inside_span(self, query, span):
        query.run(object, MemberKind.PROPERTIES, FilterCondition.ANY_ATTRIBUTE, [T1])
        attributes = {c.args[0]: c.args[1] for c in span.set_attribute.call_args_list}
        assert attributes["better_attributes.kind"] == "properties"
        assert attributes["better_attributes.condition"] == "any_attribute"
        assert attributes["better_attributes.ctx.markers"] == "T1"

    def test_failure_is_recorded_on_span(self, query, span):
        def explode(member, matched):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            query.run(object, MemberKind.PROPERTIES, FilterCondition.ANY_ATTRIBUTE, [T1], explode)
        span.record_exception.assert_called_once()
        span.set_status.assert_called_once()


class TestQueryContext:

    def test_nested_query_restores_outer_context(self, query):
        seen = []

        def nested(member, matched):
            seen.append(query_id_var.get())
            query.run(object, MemberKind.METHODS, FilterCondition.ATTRIBUTE, [T1])
            seen.append(query_id_var.get())

        query.run(object, MemberKind.PROPERTIES, FilterCondition.ATTRIBUTE, [T3], nested)

        assert seen and None not in seen
        assert len(set(seen)) == 1
        assert query_id_var.get() is None

    def test_context_is_restored_after_failure(self, query):
        def explode(member, matched):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            query.run(object, MemberKind.PROPERTIES, FilterCondition.ANY_ATTRIBUTE, [T1], explode)
        assert query_id_var.get() is None
        assert target_class_var.get() is None

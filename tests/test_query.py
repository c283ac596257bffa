"""Tests for Query construction, combination and evaluation."""

import pytest

from crossquery import Query, named_query
from crossquery.exceptions import (
    DefinitionConflictError,
    InvalidQueryDefinitionError,
    QueryNotDefinedError,
    TypeMismatchError,
)
from crossquery.expressions import BoolOp, Compare, Constant, Lambda, Parameter, free_parameters

from .entities import Entity


class TestQueryConstruction:
    """Building queries from expressions, callables and other queries."""

    def test_from_callable_is_implicit_conversion(self):
        """A plain lambda over the proxy becomes a query."""
        query = Query(lambda s: s == "a", subject_type=str)
        assert query.is_satisfied_by("a") is True
        assert query.is_satisfied_by("b") is False

    def test_implicit_conversion_matches_direct_evaluation(self, entity):
        query = Query(lambda p: (p.c > 100) & (p.a == "abc"))
        assert query.is_satisfied_by(entity) == (entity.c > 100 and entity.a == "abc")

    def test_from_expression_wraps_lambda(self):
        p = Parameter(type_=int)
        expression = Lambda(Compare("gt", p, Constant(3)), p)
        query = Query.from_expression(expression)
        assert query.as_expression() is expression
        assert query.is_satisfied_by(4) is True

    def test_from_query_copies_expression(self):
        original = Query.is_().equal_to(10)
        copy = Query.from_query(original)
        assert copy is not original
        assert copy.as_expression() is original.as_expression()

    def test_constructor_accepts_query(self):
        original = Query.is_().equal_to(10)
        assert Query(original).as_expression() is original.as_expression()

    @pytest.mark.parametrize("value", [9, 10, 11])
    def test_round_trip_through_expression(self, value):
        query = Query.is_().greater_than(5).and_.is_().less_than_or_equal_to(10)
        rebuilt = Query.from_expression(query.as_expression())
        assert rebuilt.is_satisfied_by(value) == query.is_satisfied_by(value)

    def test_generic_subscript(self, entity):
        query = Query[Entity](lambda p: p.c == 123, subject_type=Entity)
        assert query.is_satisfied_by(entity) is True
        assert query.subject_type is Entity

    def test_rejects_non_boolean_expression(self):
        with pytest.raises(InvalidQueryDefinitionError):
            Query(lambda p: p.a, subject_type=Entity)

    def test_rejects_non_callable(self):
        with pytest.raises(InvalidQueryDefinitionError):
            Query(42)

    def test_rejects_foreign_parameter(self):
        foreign = Parameter()
        with pytest.raises(InvalidQueryDefinitionError) as exc:
            Query(Lambda(Compare("eq", foreign, Constant(1)), Parameter()))
        assert foreign.name in str(exc.value)


class TestQueryAndOr:
    """AND / OR continuation semantics."""

    @pytest.mark.parametrize("value", range(7))
    def test_and_matches_boolean_and(self, value):
        a = Query.is_().greater_than(2)
        b = Query.is_().less_than(5)
        assert a.and_(b).is_satisfied_by(value) == (a.is_satisfied_by(value) and b.is_satisfied_by(value))

    @pytest.mark.parametrize("value", range(7))
    def test_or_matches_boolean_or(self, value):
        a = Query.is_().less_than(2)
        b = Query.is_().greater_than(4)
        assert a.or_(b).is_satisfied_by(value) == (a.is_satisfied_by(value) or b.is_satisfied_by(value))

    def test_and_then_or_false(self):
        query = Query.is_().equal_to("b").and_.is_().equal_to("a").or_.is_().equal_to("c")
        assert query.is_satisfied_by("b") is False

    def test_and_then_or_true(self):
        query = Query.is_().equal_to("a").and_.is_().equal_to("a").or_.is_().equal_to("b")
        assert query.is_satisfied_by("a") is True

    def test_property_chain(self, entity):
        query = Query.has(lambda p: p.a).ending_with("c").and_.has(lambda p: p.b).ending_with("ef")
        assert query.is_satisfied_by(entity) is True

    def test_combined_expression_has_single_parameter(self):
        query = Query.has("a").equal_to("x").or_.has("c").greater_than(1).and_.has("b").null()
        expression = query.as_expression()
        assert free_parameters(expression.body) == {expression.parameter}

    def test_combination_builds_bool_op(self):
        left = Query.is_().equal_to(1)
        combined = left.or_.is_().equal_to(2)
        body = combined.as_expression().body
        assert isinstance(body, BoolOp)
        assert body.op == "or"
        assert body.left is left.as_expression().body
        assert combined.as_expression().parameter is left.as_expression().parameter

    def test_combination_leaves_operands_untouched(self):
        left = Query.is_().equal_to(1)
        right = Query.is_().equal_to(2)
        left.and_(right)
        assert isinstance(left.as_expression().body, Compare)
        assert isinstance(right.as_expression().body, Compare)

    def test_continuation_is_reusable(self):
        continuation = Query.is_().greater_than(0).and_
        small = continuation.is_().less_than(5)
        whole = continuation(lambda p: p.real == p)
        assert small.is_satisfied_by(3) is True
        assert small.is_satisfied_by(7) is False
        assert whole.is_satisfied_by(7) is True

    def test_operators(self):
        positive = Query.is_().greater_than(0)
        small = Query.is_().less_than(10)
        assert (positive & small).is_satisfied_by(5) is True
        assert (positive & small).is_satisfied_by(15) is False
        assert (positive | small).is_satisfied_by(-5) is True
        assert (~positive).is_satisfied_by(-5) is True
        assert (~positive).is_satisfied_by(5) is False

    def test_operator_accepts_callable(self):
        query = Query.is_().greater_than(0) & (lambda p: p < 3)
        assert query.is_satisfied_by(2) is True
        assert query.is_satisfied_by(3) is False

    def test_combining_incompatible_subject_types(self):
        with pytest.raises(TypeMismatchError):
            Query.is_(str).equal_to("a").and_(Query.is_(int).equal_to(1))


class TestQueryEvaluation:
    """Direct evaluation and compiled predicate caching."""

    def test_call_is_satisfied_by(self):
        query = Query.is_().equal_to(10)
        assert query(10) is True
        assert query(11) is False

    def test_compiled_predicate_is_cached(self):
        query = Query.is_().equal_to(10)
        query.is_satisfied_by(10)
        compiled = query._compiled
        assert compiled is not None
        query.is_satisfied_by(11)
        assert query._compiled is compiled

    def test_cache_can_be_disabled(self, no_compile_cache):
        query = Query.is_().equal_to(10)
        assert query.is_satisfied_by(10) is True
        assert query._compiled is None

    def test_evaluation_errors_propagate(self, bare_entity):
        query = Query.has("d").satisfying(lambda d: d.e == "ghi")
        with pytest.raises(AttributeError):
            query.is_satisfied_by(bare_entity)

    def test_missing_mapping_key_propagates(self):
        query = Query.has("missing").equal_to(1)
        with pytest.raises(KeyError):
            query.is_satisfied_by({"present": 1})

    def test_repeated_evaluation_is_stable(self, entity):
        query = Query.has("c").greater_than(100)
        assert [query.is_satisfied_by(entity) for _ in range(3)] == [True, True, True]


class TestQueryDefinition:
    """Define-once subclassing and named query factories."""

    def test_subclass_defines_once(self, entity):
        class Large(Query):
            def __init__(self):
                super().__init__()
                self._define(Query.has("c").greater_than_or_equal_to(100))

        assert Large().is_satisfied_by(entity) is True

    def test_second_definition_conflicts(self):
        class Twice(Query):
            def __init__(self):
                super().__init__()
                self._define(Query.is_().equal_to(1))
                self._define(Query.is_().equal_to(2))

        with pytest.raises(DefinitionConflictError) as exc:
            Twice()
        assert exc.value.details["query"] == "Twice"

    def test_undefined_query(self):
        query = Query()
        with pytest.raises(QueryNotDefinedError):
            query.as_expression()
        with pytest.raises(QueryNotDefinedError):
            query.is_satisfied_by(1)
        assert str(query) == "<undefined>"

    def test_named_query_is_memoized(self, entity):
        @named_query
        def min_c(limit):
            return Query.has("c").greater_than_or_equal_to(limit)

        assert min_c(100) is min_c(100)
        assert min_c(100) is not min_c(200)
        assert min_c(100).name == "min_c"
        assert min_c(100).is_satisfied_by(entity) is True
        assert min_c(200).is_satisfied_by(entity) is False

    def test_named_query_custom_name(self):
        @named_query(name="ten")
        def equal_ten():
            return Query.is_().equal_to(10)

        assert equal_ten().name == "ten"
        assert repr(equal_ten()).startswith("<Query ten: ")


class TestQueryRepresentation:
    def test_str_renders_lambda(self):
        query = Query.is_().equal_to(10)
        parameter = query.as_expression().parameter.name
        assert str(query) == f"lambda {parameter}: ({parameter} == 10)"

    def test_repr(self):
        query = Query.has("a").starting_with("x")
        assert repr(query).startswith("<Query: lambda ")
        assert "startswith(" in repr(query)

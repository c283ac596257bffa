"""Tests for satisfies() and where_satisfies()."""

import types

from crossquery import Query, satisfies, where_satisfies
from crossquery.expressions import Lambda


class RecordingSource:
    """Source that translates expressions itself."""

    def __init__(self):
        self.received = None

    def where(self, expression):
        self.received = expression
        return ["translated"]


class TestSatisfies:
    def test_matches_is_satisfied_by(self, entity):
        query = Query.has("c").greater_than(100)
        assert satisfies(entity, query) is query.is_satisfied_by(entity)

    def test_false(self):
        assert satisfies(11, Query.is_().equal_to(10)) is False


class TestWhereSatisfies:
    def test_filters_iterable(self, numbers):
        result = where_satisfies(numbers, Query.is_().greater_than(2))
        assert isinstance(result, types.GeneratorType)
        assert list(result) == [3, 4, 5]

    def test_filter_is_lazy(self):
        seen = []

        def source():
            for i in range(5):
                seen.append(i)
                yield i

        result = where_satisfies(source(), Query.is_().equal_to(1))
        assert seen == []
        assert next(result) == 1
        assert seen == [0, 1]

    def test_filters_entities(self, entity, bare_entity):
        query = Query.has("d").not_null()
        assert list(where_satisfies([entity, bare_entity], query)) == [entity]

    def test_passes_expression_to_where(self):
        source = RecordingSource()
        query = Query.is_().equal_to(1)
        assert where_satisfies(source, query) == ["translated"]
        assert isinstance(source.received, Lambda)
        assert source.received is query.as_expression()

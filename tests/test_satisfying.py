"""Tests for sub-query composition with satisfying()."""

import pytest

from crossquery import Query
from crossquery.exceptions import TypeMismatchError
from crossquery.expressions import Compare, Member, free_parameters

from .entities import Child, Entity

_a = Query.is_(str).equal_to("a")
_b = Query.is_(str).equal_to("b")
_c = Query.is_(str).equal_to("c")


class TestSatisfyingSameType:
    """Nesting queries over the subject itself."""

    def test_and_then_or_via_satisfying(self):
        query = _b.and_.is_().satisfying(_c.or_.is_().satisfying(_a))
        assert query.is_satisfied_by("b") is False

    def test_or_via_satisfying(self):
        assert _b.or_.is_().satisfying(_a).is_satisfied_by("a") is True

    def test_and_or_chain_true(self):
        query = _a.and_.is_().satisfying(_a).or_.is_().satisfying(_b)
        assert query.is_satisfied_by("a") is True

    def test_and_or_chain_false(self):
        query = _b.and_.is_().satisfying(_a).or_.is_().satisfying(_c)
        assert query.is_satisfied_by("a") is False

    def test_single_parameter_after_nesting(self):
        expression = _b.and_.is_().satisfying(_c.or_.is_().satisfying(_a)).as_expression()
        assert free_parameters(expression.body) == {expression.parameter}


class TestSatisfyingMember:
    """Pushing a query over a property type down onto the member path."""

    child_query = Query.has("e").equal_to("ghi")

    def test_matches_child_evaluation(self, entity):
        query = Query.has("d").satisfying(self.child_query)
        assert query.is_satisfied_by(entity) == self.child_query.is_satisfied_by(entity.d)

    @pytest.mark.parametrize("e", ["ghi", "xyz"])
    def test_matches_child_evaluation_for_all_children(self, e):
        subject = Entity(a="a", d=Child(e=e, f=False, g=0))
        query = Query.has("d").satisfying(self.child_query)
        assert query.is_satisfied_by(subject) == self.child_query.is_satisfied_by(subject.d)

    def test_parameter_is_replaced_with_member_path(self):
        query = Query.has("d").satisfying(self.child_query)
        body = query.as_expression().body
        assert isinstance(body, Compare)
        assert isinstance(body.left, Member)
        assert body.left.name == "e"
        assert body.left.target.name == "d"
        assert body.left.target.target is query.as_expression().parameter

    def test_callable_is_typed_with_property_type(self, entity):
        query = Query.has(lambda p: p.d, Entity).satisfying(lambda d: d.g > 400)
        body = query.as_expression().body
        assert body.left.type_ is int
        assert query.is_satisfied_by(entity) is True

    def test_nested_satisfying(self, entity):
        labels = Query.has("labels").containing("y")
        query = Query.has("d").satisfying(Query.has("f").true().and_.is_().satisfying(labels))
        assert query.is_satisfied_by(entity) is True

    def test_combines_with_outer_leaves(self, entity):
        query = Query.has("a").equal_to("abc").and_.has("d").satisfying(lambda d: d.g == 456)
        assert query.is_satisfied_by(entity) is True

    def test_evaluation_failure_is_not_guarded(self, bare_entity):
        query = Query.has("d").satisfying(self.child_query)
        with pytest.raises(AttributeError):
            query.is_satisfied_by(bare_entity)

    def test_guarded_by_not_null(self, bare_entity):
        query = Query.has("d").not_null().and_.has("d").satisfying(self.child_query)
        assert query.is_satisfied_by(bare_entity) is False

    def test_type_mismatch(self):
        with pytest.raises(TypeMismatchError) as exc:
            Query.has(lambda p: p.d, Entity).satisfying(Query.is_(str).equal_to("x"))
        assert exc.value.details["expected"] is str

    def test_subtype_is_accepted(self, entity):
        query = Query.has(lambda p: p.c, Entity).satisfying(Query.is_(int).greater_than(100))
        assert query.is_satisfied_by(entity) is True

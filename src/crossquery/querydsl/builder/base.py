"""Leaf-predicate factory for a selected property.

Once a property has been selected, `BaseQueryBuilder` offers the tests that
apply to any property: equality, membership in a set of values, ordering,
null checks and sub-query composition. Every test builds a node over the
selector's body, closes it over the selector's parameter and hands the
resulting `Query` to the continuation.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Callable, Generic, Optional, Tuple, TypeVar

from ...exceptions import TypeMismatchError
from ...expressions.inference import types_compatible
from ...expressions.nodes import Call, Compare, Constant, Expression, Lambda, Not
from ...expressions.visitor import with_parameter
from ...logger import get_logger
from ...settings import settings
from ...types import PredicateLike
from ...utils import as_predicate, require_capability
from ..query import Query

__all__ = ("BaseQueryBuilder",)

T = TypeVar("T")
TProp = TypeVar("TProp")

logger = get_logger(__name__)

# default for _operand: check against the property type
_PROPERTY = object()


def _wrap(query: Query) -> Query:
    return query


class BaseQueryBuilder(Generic[T, TProp]):
    """Tests applicable to a property of any type."""

    def __init__(self, selector: Lambda, continue_with: Optional[Callable[[Query], Query]] = None) -> None:
        self._selector = selector
        self._continue_with = continue_with or _wrap

    @property
    def selector(self) -> Lambda:
        return self._selector

    @property
    def property_type(self) -> Any:
        return self._selector.body.type_

    # -------------------
    # Internals shared with the lookup mixins
    # -------------------
    def _build(self, body: Expression) -> Query[T]:
        query = Query(Lambda(body, self._selector.parameter))
        logger.debug("Built leaf %s", query)
        return self._continue_with(query)

    def _require(self, capability: str, lookup: str) -> None:
        require_capability(self._selector, capability, lookup)

    def _operand(self, value: Any, lookup: str, expected: Any = _PROPERTY) -> Constant:
        if expected is _PROPERTY:
            expected = self.property_type
        if value is not None and settings.QUERY_STRICT_TYPES and not types_compatible(expected, type(value)):
            raise TypeMismatchError(
                f"Value for '{lookup}' does not match the property type",
                lookup=lookup,
                expected=expected,
                actual=type(value).__name__,
            )
        return Constant(value, expected if value is None else None)

    def _values(self, values: Tuple[Any, ...], lookup: str) -> Constant:
        # one non-string iterable argument is taken as the collection of values
        if len(values) == 1 and isinstance(values[0], Iterable) and not isinstance(values[0], (str, bytes)):
            values = tuple(values[0])
        for value in values:
            self._operand(value, lookup)
        return Constant(tuple(values))

    def _compare(self, op: str, other: Any, lookup: str) -> Query[T]:
        return self._build(Compare(op, self._selector.body, self._operand(other, lookup)))

    # -------------------
    # Equality
    # -------------------
    def equal_to(self, other: TProp) -> Query[T]:
        """The property is equal to the supplied value."""
        return self._compare("eq", other, "equal_to")

    def not_equal_to(self, other: TProp) -> Query[T]:
        """The property is not equal to the supplied value."""
        return self._compare("ne", other, "not_equal_to")

    def equal_to_any_of(self, *values: Any) -> Query[T]:
        """The property is equal to one of the supplied values.

        Accepts the values as arguments or as a single iterable.
        """
        return self._build(Call("in", (self._selector.body, self._values(values, "equal_to_any_of"))))

    def not_equal_to_any_of(self, *values: Any) -> Query[T]:
        """The property is equal to none of the supplied values."""
        return self._build(Not(Call("in", (self._selector.body, self._values(values, "not_equal_to_any_of")))))

    # -------------------
    # Ordering
    # -------------------
    def greater_than(self, other: TProp) -> Query[T]:
        self._require("ordering", "greater_than")
        return self._compare("gt", other, "greater_than")

    def greater_than_or_equal_to(self, other: TProp) -> Query[T]:
        self._require("ordering", "greater_than_or_equal_to")
        return self._compare("gte", other, "greater_than_or_equal_to")

    def less_than(self, other: TProp) -> Query[T]:
        self._require("ordering", "less_than")
        return self._compare("lt", other, "less_than")

    def less_than_or_equal_to(self, other: TProp) -> Query[T]:
        self._require("ordering", "less_than_or_equal_to")
        return self._compare("lte", other, "less_than_or_equal_to")

    # -------------------
    # Null checks
    # -------------------
    def null(self) -> Query[T]:
        """The property is None."""
        return self._build(Compare("is", self._selector.body, Constant(None)))

    def not_null(self) -> Query[T]:
        """The property is not None."""
        return self._build(Compare("is_not", self._selector.body, Constant(None)))

    # -------------------
    # Sub-queries
    # -------------------
    def satisfying(self, query: PredicateLike) -> Query[T]:
        """The property satisfies the supplied query.

        `query` is a `Query` over the property type, a `Lambda`, or a
        callable such as `lambda child: child.name == "x"`. Its parameter is
        replaced with the selected member path, so the result stays a single
        expression over the subject.
        """
        predicate = as_predicate(query, self.property_type)
        return self._continue_with(Query(with_parameter(predicate, self._selector)))

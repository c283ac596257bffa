"""Sequence lookups for a selected property.

One implementation serves every iterable property type (lists, tuples,
sets, generators of a mapping's values, ...). Element predicates are always
kept symbolic: a callable is captured over a fresh element parameter and a
`Query` contributes its expression, so the element test stays part of the
exported tree.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, TypeVar

from ...exceptions import TypeMismatchError
from ...expressions.inference import element_type, has_capability, types_compatible
from ...expressions.nodes import Call, Constant, Lambda, Not
from ...settings import settings
from ...types import PredicateLike
from ...utils import as_predicate

if TYPE_CHECKING:
    from ..query import Query

__all__ = ("SequenceLookups",)

T = TypeVar("T")


class SequenceLookups:
    """Tests for iterable properties."""

    @property
    def element_type(self) -> Any:
        return element_type(self.property_type)

    def _contains(self, other: Any, lookup: str) -> Call:
        self._require("iterable", lookup)
        if has_capability(self.property_type, "string"):
            operand = self._operand(other, lookup, expected=str)
        else:
            operand = self._operand(other, lookup, expected=self.element_type)
        return Call("contains", (self._selector.body, operand))

    def _element_predicate(self, predicate: PredicateLike, lookup: str) -> Lambda:
        self._require("iterable", lookup)
        element = as_predicate(predicate, self.element_type)
        if settings.QUERY_STRICT_TYPES and not types_compatible(self.element_type, element.parameter.type_):
            raise TypeMismatchError(
                f"Element predicate for '{lookup}' does not match the element type",
                lookup=lookup,
                expected=self.element_type,
                actual=element.parameter.type_,
            )
        return element

    def containing(self, other: Any) -> "Query[T]":
        """The property contains the supplied value.

        Substring test for strings, element membership for other iterables.
        """
        return self._build(self._contains(other, "containing"))

    def not_containing(self, other: Any) -> "Query[T]":
        """The property does not contain the supplied value."""
        return self._build(Not(self._contains(other, "not_containing")))

    def empty(self) -> "Query[T]":
        """The property contains no values."""
        self._require("iterable", "empty")
        return self._build(Call("is_empty", (self._selector.body,)))

    def not_empty(self) -> "Query[T]":
        """The property contains at least one value."""
        self._require("iterable", "not_empty")
        return self._build(Not(Call("is_empty", (self._selector.body,))))

    def with_any(self, predicate: PredicateLike) -> "Query[T]":
        """At least one element satisfies the supplied predicate."""
        element = self._element_predicate(predicate, "with_any")
        return self._build(Call("any", (self._selector.body, element)))

    def without_any(self, predicate: PredicateLike) -> "Query[T]":
        """No element satisfies the supplied predicate."""
        element = self._element_predicate(predicate, "without_any")
        return self._build(Not(Call("any", (self._selector.body, element))))

    def with_all(self, predicate: PredicateLike) -> "Query[T]":
        """Every element satisfies the supplied predicate."""
        element = self._element_predicate(predicate, "with_all")
        return self._build(Call("all", (self._selector.body, element)))

    def with_not_all(self, predicate: PredicateLike) -> "Query[T]":
        """At least one element does not satisfy the supplied predicate."""
        element = self._element_predicate(predicate, "with_not_all")
        return self._build(Not(Call("all", (self._selector.body, element))))

    def equal_to_sequence(self, other: Iterable[Any]) -> "Query[T]":
        """The property holds the same values in the same order."""
        self._require("iterable", "equal_to_sequence")
        return self._build(Call("sequence_equal", (self._selector.body, Constant(tuple(other)))))

    def not_equal_to_sequence(self, other: Iterable[Any]) -> "Query[T]":
        self._require("iterable", "not_equal_to_sequence")
        return self._build(Not(Call("sequence_equal", (self._selector.body, Constant(tuple(other))))))

"""String lookups for a selected property."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from ...expressions.nodes import Call, Not

if TYPE_CHECKING:
    from ..query import Query

__all__ = ("StringLookups",)

T = TypeVar("T")


class StringLookups:
    """Tests for string properties.

    `containing` / `not_containing` live in `SequenceLookups`: for a string
    they test for a substring.
    """

    def _string_call(self, function: str, other: str, lookup: str) -> Call:
        self._require("string", lookup)
        return Call(function, (self._selector.body, self._operand(other, lookup, expected=str)))

    def starting_with(self, other: str) -> "Query[T]":
        """The property starts with the supplied string."""
        return self._build(self._string_call("startswith", other, "starting_with"))

    def not_starting_with(self, other: str) -> "Query[T]":
        """The property does not start with the supplied string."""
        return self._build(Not(self._string_call("startswith", other, "not_starting_with")))

    def ending_with(self, other: str) -> "Query[T]":
        """The property ends with the supplied string."""
        return self._build(self._string_call("endswith", other, "ending_with"))

    def not_ending_with(self, other: str) -> "Query[T]":
        """The property does not end with the supplied string."""
        return self._build(Not(self._string_call("endswith", other, "not_ending_with")))

    def null_or_empty(self) -> "Query[T]":
        """The property is None or the empty string."""
        self._require("string", "null_or_empty")
        return self._build(Call("is_null_or_empty", (self._selector.body,)))

    def not_null_or_empty(self) -> "Query[T]":
        self._require("string", "not_null_or_empty")
        return self._build(Not(Call("is_null_or_empty", (self._selector.body,))))

    def null_or_whitespace(self) -> "Query[T]":
        """The property is None, empty, or only whitespace."""
        self._require("string", "null_or_whitespace")
        return self._build(Call("is_null_or_whitespace", (self._selector.body,)))

    def not_null_or_whitespace(self) -> "Query[T]":
        self._require("string", "not_null_or_whitespace")
        return self._build(Not(Call("is_null_or_whitespace", (self._selector.body,))))

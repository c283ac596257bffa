"""Boolean lookups for a selected property."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from ...expressions.nodes import Compare, Constant

if TYPE_CHECKING:
    from ..query import Query

__all__ = ("BooleanLookups",)

T = TypeVar("T")


class BooleanLookups:
    def _is_bool(self, value: bool, lookup: str) -> "Query[T]":
        self._require("boolean", lookup)
        return self._build(Compare("eq", self._selector.body, Constant(value, bool)))

    def true(self) -> "Query[T]":
        """The property is True."""
        return self._is_bool(True, "true")

    def false(self) -> "Query[T]":
        """The property is False."""
        return self._is_bool(False, "false")

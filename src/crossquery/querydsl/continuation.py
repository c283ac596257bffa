"""Continuation of a query after `and_` / `or_`."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

from ..types import PredicateLike, Selector
from ..utils import as_selector

if TYPE_CHECKING:
    from .builder import QueryBuilder
    from .query import Query

__all__ = ("Continuation",)

T = TypeVar("T")


class Continuation(Generic[T]):
    """Deferred AND/OR awaiting its right-hand side.

    Holds a single function that folds a right-hand query into the query the
    continuation was created from. It keeps no other state and may be reused.

    - `has(selector)` / `is_()` start a leaf that folds back on completion.
    - Calling the continuation with a query (or anything `Query` accepts)
      folds it in directly: `a.and_(b)`.
    """

    __slots__ = ("_continue_with", "_subject_type")

    def __init__(self, continue_with: Callable[["Query[T]"], "Query[T]"], subject_type: Any = None) -> None:
        self._continue_with = continue_with
        self._subject_type = subject_type

    def has(self, selector: Selector) -> "QueryBuilder[T, Any]":
        """Select the property to query against."""
        from .builder import QueryBuilder

        return QueryBuilder(as_selector(selector, self._subject_type), self._continue_with)

    def is_(self) -> "QueryBuilder[T, T]":
        """Query against the subject itself. The equivalent of `has(lambda p: p)`."""
        return self.has(lambda p: p)

    def __call__(self, query: PredicateLike) -> "Query[T]":
        from .query import Query

        if not isinstance(query, Query):
            query = Query(query, self._subject_type)
        return self._continue_with(query)

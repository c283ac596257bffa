"""Helpers that apply queries to plain objects and collections."""

from __future__ import annotations

from typing import Any, Iterable, Iterator, TypeVar

from .query import Query

__all__ = ("satisfies", "where_satisfies")

T = TypeVar("T")


def satisfies(obj: T, query: Query[T]) -> bool:
    """Test an object against a query.

    The same as `query.is_satisfied_by(obj)`, reading subject-first.
    """
    return query.is_satisfied_by(obj)


def where_satisfies(source: Iterable[T], query: Query[T]) -> Any:
    """Filter a source to the items satisfying `query`.

    If the source exposes a callable `where` (a query provider that
    translates expressions itself), it receives the query's expression.
    Otherwise the source is iterated lazily with the compiled predicate.
    """
    where = getattr(source, "where", None)
    if callable(where):
        return where(query.as_expression())
    return _filter(source, query)


def _filter(source: Iterable[T], query: Query[T]) -> Iterator[T]:
    for item in source:
        if query.is_satisfied_by(item):
            yield item

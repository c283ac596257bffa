"""Keyword shorthand for building queries.

`Q(age__gte=18, name__startswith="Jo")` builds the same query as

    Query.has("age").greater_than_or_equal_to(18).and_.has("name").starting_with("Jo")

Keys follow the `field__lookup` convention; `__` also separates nested
members (`info__lang__eq`). A key whose last part is not a known lookup is
taken as a field name with an implicit `eq`.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Tuple

from ..exceptions import InvalidQueryDefinitionError
from .builder import QueryBuilder
from .query import Query

__all__ = ("LOOKUPS", "Q")

LOOKUPS: Dict[str, Callable[[QueryBuilder, Any], Query]] = {
    "eq": lambda b, v: b.equal_to(v),
    "ne": lambda b, v: b.not_equal_to(v),
    "gt": lambda b, v: b.greater_than(v),
    "gte": lambda b, v: b.greater_than_or_equal_to(v),
    "lt": lambda b, v: b.less_than(v),
    "lte": lambda b, v: b.less_than_or_equal_to(v),
    "in": lambda b, v: b.equal_to_any_of(v),
    "nin": lambda b, v: b.not_equal_to_any_of(v),
    "contains": lambda b, v: b.containing(v),
    "startswith": lambda b, v: b.starting_with(v),
    "endswith": lambda b, v: b.ending_with(v),
    "isnull": lambda b, v: b.null() if v else b.not_null(),
}


def _split_lookup(key: str) -> Tuple[str, str]:
    # Split from the right to get the lookup operator
    # e.g., "info__lang__eq" -> field="info__lang", lookup="eq"
    if "__" in key:
        field, lookup = key.rsplit("__", 1)
        if lookup in LOOKUPS:
            return field, lookup
    return key, "eq"


def Q(*, _negate: bool = False, _subject_type: Any = None, **filters: Any) -> Query:
    """Build a query from `field__lookup=value` keywords.

    - _negate: wrap the result in NOT.
    - _subject_type: optional declared type of the subject.
    - filters: one or more lookups, combined with AND in keyword order.

    The options carry a leading underscore so that every public name,
    `negate` included, stays available as a field.
    """
    if not filters:
        raise InvalidQueryDefinitionError("Q requires at least one filter")
    query: Optional[Query] = None
    for key, value in filters.items():
        field, lookup = _split_lookup(key)
        builder = Query.has(field, _subject_type) if query is None else query.and_.has(field)
        query = LOOKUPS[lookup](builder, value)
    return ~query if _negate else query

"""Query builders.

`QueryBuilder` is what `Query.has` / `Query.is_` and continuations return:
the general tests of `BaseQueryBuilder` plus the string, sequence and
boolean lookups. Lookups whose capability the selected type lacks are
rejected at construction when the type is known.
"""

from typing import TypeVar

from .base import BaseQueryBuilder
from .booleans import BooleanLookups
from .sequences import SequenceLookups
from .strings import StringLookups

__all__ = (
    "BaseQueryBuilder",
    "BooleanLookups",
    "QueryBuilder",
    "SequenceLookups",
    "StringLookups",
)

T = TypeVar("T")
TProp = TypeVar("TProp")


class QueryBuilder(StringLookups, SequenceLookups, BooleanLookups, BaseQueryBuilder[T, TProp]):
    """Select a test to perform against the selected property."""

"""
CrossQuery: composable, typed boolean queries over objects.

Queries evaluate directly against subjects and export as symbolic
expression trees for translation into other query languages.
"""

from .expressions import Lambda, Parameter
from .querydsl import Continuation, Q, Query, QueryBuilder, named_query, satisfies, where_satisfies

__version__ = "0.1.0"

__all__ = [
    "Query",
    "Continuation",
    "QueryBuilder",
    "Q",
    "Lambda",
    "Parameter",
    "named_query",
    "satisfies",
    "where_satisfies",
]

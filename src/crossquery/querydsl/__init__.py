"""Query DSL module.

Exports `Query` and its continuation and builder types, the `Q` keyword
shorthand and the helpers applying queries to objects and collections.
Exported representations are handled by the `compilers` subpackage.
"""

from .builder import QueryBuilder
from .continuation import Continuation
from .extensions import satisfies, where_satisfies
from .q import Q
from .query import Query, named_query

__all__ = (
    "Continuation",
    "Q",
    "Query",
    "QueryBuilder",
    "named_query",
    "satisfies",
    "where_satisfies",
)

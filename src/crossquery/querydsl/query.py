"""Query DSL core.

This module defines the `Query` class: a composable boolean predicate over
objects of one type, stored as a single expression `Lambda`. A `Query` can be
evaluated directly against a subject or exported as its expression tree for
a downstream translator.

Typical usage:

- Build leaves: `Query.has(lambda p: p.age).greater_than(18)`
- Continue: `q.and_.has("name").starting_with("Jo")`, `q.or_.is_().null()`
- Combine: `q1 & q2`, `q1 | q2`, negate: `~q`
- Evaluate: `q.is_satisfied_by(person)` or `q(person)`
- Export: `q.as_expression()`, `q.to_where("sql")`
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any, Callable, Dict, Generic, Optional, TypeVar

from ..exceptions import DefinitionConflictError, QueryNotDefinedError
from ..expressions.nodes import BoolOp, Lambda, Not
from ..expressions.visitor import replace_parameter
from ..logger import get_logger
from ..settings import settings
from ..types import BackendType, CompiledPredicate, Connective, PredicateLike, Selector
from ..utils import as_predicate, as_selector
from .continuation import Continuation

if TYPE_CHECKING:
    from .builder import QueryBuilder
    from .compilers.base import BaseWhere

__all__ = ("Query", "named_query")

T = TypeVar("T")

logger = get_logger(__name__)


class Query(Generic[T]):
    """Composable predicate over subjects of type `T`.

    A query is immutable: `and_`, `or_`, `&`, `|` and `~` all return new
    queries. The stored expression always has exactly one parameter, and
    every sub-expression combined into it is rewritten to use that parameter.

    Subclasses may call the constructor without an expression and then
    `_define` the query exactly once:

        class Adult(Query[Person]):
            def __init__(self):
                super().__init__()
                self._define(Query.has("age").greater_than_or_equal_to(18))
    """

    def __init__(
        self,
        expression: Optional[PredicateLike] = None,
        subject_type: Any = None,
        name: Optional[str] = None,
    ) -> None:
        """Initialize a `Query`.

        - expression: a `Lambda`, another `Query` (its expression is reused),
          or a callable taking an expression proxy and returning a condition,
          e.g. `lambda p: p.age > 18`.
        - subject_type: declared type of the subject, used to type the
          parameter of a callable expression.
        - name: optional label shown in `repr`.
        """
        self._expression: Optional[Lambda] = None
        self._compiled: Optional[CompiledPredicate] = None
        self.name = name
        if expression is not None:
            self._expression = as_predicate(expression, subject_type)

    # -------------------
    # Construction
    # -------------------
    @classmethod
    def from_expression(cls, expression: Lambda) -> "Query[T]":
        """Wrap an existing boolean lambda."""
        return Query(expression)

    @classmethod
    def from_query(cls, other: "Query[T]") -> "Query[T]":
        """Copy another query's expression."""
        return Query(other.as_expression(), name=other.name)

    @classmethod
    def has(cls, selector: Selector, subject_type: Any = None) -> "QueryBuilder[T, Any]":
        """Select the property to query against.

        - selector: `lambda p: p.child.name`, a path such as `"child.name"` or
          `"child__name"`, or a `Lambda`.
        - subject_type: optional declared type of the subject.
        """
        from .builder import QueryBuilder

        return QueryBuilder(as_selector(selector, subject_type))

    @classmethod
    def is_(cls, subject_type: Any = None) -> "QueryBuilder[T, T]":
        """Query against the subject itself. The equivalent of `has(lambda p: p)`."""
        return cls.has(lambda p: p, subject_type)

    def _define(self, query: PredicateLike) -> None:
        """Set the expression of a query built through the no-argument constructor.

        Raises:
            DefinitionConflictError: If the expression was already set.
        """
        if self._expression is not None:
            raise DefinitionConflictError("Query already defined", query=type(self).__name__)
        self._expression = as_predicate(query)

    # -------------------
    # Continuations
    # -------------------
    @property
    def and_(self) -> Continuation[T]:
        """Continue with another query that must also be satisfied."""
        return Continuation(lambda right: self._combine(right, "and"), self.subject_type)

    @property
    def or_(self) -> Continuation[T]:
        """Continue with another query, either of which must be satisfied."""
        return Continuation(lambda right: self._combine(right, "or"), self.subject_type)

    def _combine(self, right: "Query[T]", connective: Connective) -> "Query[T]":
        left = self.as_expression()
        right_body = replace_parameter(right.as_expression(), left.parameter)
        combined = Lambda(BoolOp(connective, left.body, right_body), left.parameter)
        logger.debug("Combined query with %s: %s", connective, combined)
        return Query(combined)

    def __and__(self, other: PredicateLike) -> "Query[T]":
        return self.and_(other)

    def __or__(self, other: PredicateLike) -> "Query[T]":
        return self.or_(other)

    def __invert__(self) -> "Query[T]":
        """Return a query satisfied exactly when this one is not."""
        expression = self.as_expression()
        return Query(Lambda(Not(expression.body), expression.parameter))

    # -------------------
    # Expression access and evaluation
    # -------------------
    @property
    def subject_type(self) -> Any:
        if self._expression is None:
            return None
        return self._expression.parameter.type_

    def as_expression(self) -> Lambda:
        """Return the expression this query represents."""
        if self._expression is None:
            raise QueryNotDefinedError("Query not defined", query=type(self).__name__)
        return self._expression

    def is_satisfied_by(self, subject: T) -> bool:
        """Check whether a subject satisfies the query.

        Exceptions raised while evaluating (e.g. a missing attribute on the
        subject) propagate unchanged.
        """
        predicate = self._compiled
        if predicate is None:
            predicate = self.as_expression().compile()
            if settings.QUERY_CACHE_COMPILED:
                self._compiled = predicate
        return predicate(subject)

    def __call__(self, subject: T) -> bool:
        return self.is_satisfied_by(subject)

    # -------------------
    # Export
    # -------------------
    def _get_where_compiler(self, backend: BackendType) -> Optional[BaseWhere]:
        """Return the backend-specific where compiler, if any."""
        if backend == "mongo":
            from .compilers.mongo import mongo_where

            return mongo_where
        elif backend == "sql":
            from .compilers.sql import sql_where

            return sql_where
        else:
            return None

    def to_dict(self) -> Dict[str, Any]:
        """Return the universal filter dict representation of this query."""
        from .compilers.universal import universal_translator

        return universal_translator.translate(self.as_expression())

    def to_where(self, backend: Optional[BackendType] = None) -> Any:
        """Compile to a backend-native "where" representation.

        - `sql` returns a WHERE clause string.
        - `mongo` returns a filter document.
        - `generic` returns the universal dict.
        """
        backend = backend or settings.QUERY_DEFAULT_BACKEND
        node = self.to_dict()
        where_compiler = self._get_where_compiler(backend)
        if where_compiler:
            return where_compiler.to_where(node)
        return node

    def to_expr(self, backend: Optional[BackendType] = None) -> str:
        """Compile to a string expression for debugging."""
        backend = backend or settings.QUERY_DEFAULT_BACKEND
        node = self.to_dict()
        where_compiler = self._get_where_compiler(backend)
        if where_compiler:
            return where_compiler.to_expr(node)
        return str(node)

    def __str__(self) -> str:
        if self._expression is None:
            return "<undefined>"
        return str(self._expression)

    def __repr__(self) -> str:
        label = f" {self.name}" if self.name else ""
        return f"<Query{label}: {self}>"


def named_query(func: Optional[Callable[..., Any]] = None, *, name: Optional[str] = None) -> Any:
    """Turn a query-returning factory into a named, memoized one.

    The composition alternative to subclassing with `_define`:

        @named_query
        def adult(min_age=18):
            return Query.has("age").greater_than_or_equal_to(min_age)

        adult() is adult()  # True

    Factory arguments must be hashable.
    """

    def decorate(fn: Callable[..., Any]) -> Callable[..., Query]:
        label = name or fn.__name__

        @functools.lru_cache(maxsize=None)
        @functools.wraps(fn)
        def factory(*args: Any, **kwargs: Any) -> Query:
            query = Query(fn(*args, **kwargs), name=label)
            logger.message("Defined named query %s: %s", label, query)
            return query

        return factory

    if func is not None:
        return decorate(func)
    return decorate

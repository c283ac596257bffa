"""Expression tree nodes.

A small, immutable expression model for unary predicates and selectors:
a `Parameter` (free variable) plus a tree of comparisons, boolean
connectives, member access and calls of functions from a fixed table.

Nodes are plain values compared by identity. Building them from ordinary
Python lambdas goes through `ExpressionProxy` (see `proxy.py`).
"""

from __future__ import annotations

import itertools
from typing import Any, Callable, Dict, Iterable, NamedTuple, Optional, Tuple

from ..exceptions import InvalidQueryDefinitionError, UnsupportedOperatorError
from ..settings import settings
from .inference import resolve_member_type

__all__ = (
    "BOOL_OPS",
    "COMPARE_OPS",
    "FUNCTIONS",
    "BoolOp",
    "Call",
    "Compare",
    "Constant",
    "Expression",
    "Function",
    "Lambda",
    "Member",
    "Not",
    "Parameter",
)

COMPARE_OPS = ("eq", "ne", "gt", "gte", "lt", "lte", "is", "is_not")
BOOL_OPS = ("and", "or")

_parameter_ids = itertools.count()


class Expression:
    """Base class of every node."""

    __slots__ = ()

    @property
    def type_(self) -> Any:
        """Static type of the value the node evaluates to, None when unknown."""
        return None

    def __repr__(self) -> str:
        from .formatter import format_expression

        return f"<{type(self).__name__}: {format_expression(self)}>"

    def __str__(self) -> str:
        from .formatter import format_expression

        return format_expression(self)


class Parameter(Expression):
    """Free variable of a lambda. Every instance is a distinct variable."""

    __slots__ = ("name", "_type")

    def __init__(self, name: Optional[str] = None, type_: Any = None) -> None:
        self.name = name or f"{settings.QUERY_PARAMETER_PREFIX}{next(_parameter_ids)}"
        self._type = type_

    @property
    def type_(self) -> Any:
        return self._type


class Constant(Expression):
    __slots__ = ("value", "_type")

    def __init__(self, value: Any, type_: Any = None) -> None:
        self.value = value
        if type_ is None and value is not None:
            type_ = type(value)
        self._type = type_

    @property
    def type_(self) -> Any:
        return self._type


class Member(Expression):
    """Attribute access, or key lookup when the target evaluates to a mapping."""

    __slots__ = ("target", "name", "_type")

    def __init__(self, target: Expression, name: str) -> None:
        self.target = target
        self.name = name
        self._type = resolve_member_type(target.type_, name)

    @property
    def type_(self) -> Any:
        return self._type


class Compare(Expression):
    __slots__ = ("op", "left", "right")

    def __init__(self, op: str, left: Expression, right: Expression) -> None:
        if op not in COMPARE_OPS:
            raise UnsupportedOperatorError("Unknown comparison operator", operator=op)
        self.op = op
        self.left = left
        self.right = right

    @property
    def type_(self) -> Any:
        return bool


class BoolOp(Expression):
    """Short-circuit logical connective of two boolean expressions."""

    __slots__ = ("op", "left", "right")

    def __init__(self, op: str, left: Expression, right: Expression) -> None:
        if op not in BOOL_OPS:
            raise UnsupportedOperatorError("Unknown boolean operator", operator=op)
        self.op = op
        self.left = left
        self.right = right

    @property
    def type_(self) -> Any:
        return bool


class Not(Expression):
    __slots__ = ("operand",)

    def __init__(self, operand: Expression) -> None:
        self.operand = operand

    @property
    def type_(self) -> Any:
        return bool


# -------------------
# Function table
# -------------------
class Function(NamedTuple):
    name: str
    arity: int
    impl: Callable[..., Any]


def _sequence_equal(left: Iterable[Any], right: Iterable[Any]) -> bool:
    missing = object()
    for a, b in itertools.zip_longest(left, right, fillvalue=missing):
        if a is missing or b is missing or a != b:
            return False
    return True


def _is_empty(sequence: Iterable[Any]) -> bool:
    for _ in sequence:
        return False
    return True


FUNCTIONS: Dict[str, Function] = {
    f.name: f
    for f in (
        Function("contains", 2, lambda container, item: item in container),
        Function("in", 2, lambda item, values: item in values),
        Function("startswith", 2, lambda s, prefix: s.startswith(prefix)),
        Function("endswith", 2, lambda s, suffix: s.endswith(suffix)),
        Function("is_null_or_empty", 1, lambda s: s is None or len(s) == 0),
        Function("is_null_or_whitespace", 1, lambda s: s is None or not s.strip()),
        Function("is_empty", 1, _is_empty),
        Function("any", 2, lambda sequence, predicate: any(predicate(e) for e in sequence)),
        Function("all", 2, lambda sequence, predicate: all(predicate(e) for e in sequence)),
        Function("sequence_equal", 2, _sequence_equal),
    )
}


class Call(Expression):
    """Call of a function from `FUNCTIONS` with expression arguments."""

    __slots__ = ("function", "args")

    def __init__(self, function: str, args: Tuple[Expression, ...]) -> None:
        entry = FUNCTIONS.get(function)
        if entry is None:
            raise UnsupportedOperatorError("Unknown function", function=function)
        if len(args) != entry.arity:
            raise InvalidQueryDefinitionError(
                "Wrong number of arguments", function=function, expected=entry.arity, actual=len(args)
            )
        self.function = function
        self.args = tuple(args)

    @property
    def type_(self) -> Any:
        return bool


class Lambda(Expression):
    """Unary function: a body closed over a single parameter."""

    __slots__ = ("body", "parameter")

    def __init__(self, body: Expression, parameter: Parameter) -> None:
        if not isinstance(body, Expression):
            raise InvalidQueryDefinitionError("Lambda body must be an expression", got=type(body).__name__)
        if not isinstance(parameter, Parameter):
            raise InvalidQueryDefinitionError("Lambda parameter must be a Parameter", got=type(parameter).__name__)
        self.body = body
        self.parameter = parameter

    @property
    def parameters(self) -> Tuple[Parameter]:
        return (self.parameter,)

    @property
    def type_(self) -> Any:
        return self.body.type_

    def compile(self) -> Callable[[Any], Any]:
        """Compile into a plain Python callable of one argument."""
        from .compiler import compile_lambda

        return compile_lambda(self)

"""Operator-capturing proxy used to build expression trees from plain lambdas.

Calling `lambda p: (p.age >= 18) & p.name.startswith("Jo")` with an
`ExpressionProxy` over a `Parameter` does not evaluate anything; every
attribute access and operator returns a new proxy wrapping the node it
describes. `unwrap()` turns the result back into a node.

Fields whose names clash with the helper methods below (`contains`, `any`,
...) can be reached with item syntax: `p["any"]`.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional

from .nodes import BoolOp, Call, Compare, Constant, Expression, Lambda, Member, Not, Parameter

__all__ = ("ExpressionProxy", "capture", "unwrap")


class ExpressionProxy:
    __slots__ = ("_node",)

    def __init__(self, node: Expression) -> None:
        object.__setattr__(self, "_node", node)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Expression proxies are read-only")

    def __getattr__(self, name: str) -> "ExpressionProxy":
        if name.startswith("__"):
            raise AttributeError(name)
        return ExpressionProxy(Member(self._node, name))

    def __getitem__(self, key: str) -> "ExpressionProxy":
        return ExpressionProxy(Member(self._node, key))

    # Comparisons
    def __eq__(self, other: Any) -> "ExpressionProxy":  # type: ignore[override]
        return self._compare("eq", other)

    def __ne__(self, other: Any) -> "ExpressionProxy":  # type: ignore[override]
        return self._compare("ne", other)

    def __gt__(self, other: Any) -> "ExpressionProxy":
        return self._compare("gt", other)

    def __ge__(self, other: Any) -> "ExpressionProxy":
        return self._compare("gte", other)

    def __lt__(self, other: Any) -> "ExpressionProxy":
        return self._compare("lt", other)

    def __le__(self, other: Any) -> "ExpressionProxy":
        return self._compare("lte", other)

    __hash__ = object.__hash__

    # Boolean connectives
    def __and__(self, other: Any) -> "ExpressionProxy":
        return ExpressionProxy(BoolOp("and", self._node, unwrap(other)))

    def __rand__(self, other: Any) -> "ExpressionProxy":
        return ExpressionProxy(BoolOp("and", unwrap(other), self._node))

    def __or__(self, other: Any) -> "ExpressionProxy":
        return ExpressionProxy(BoolOp("or", self._node, unwrap(other)))

    def __ror__(self, other: Any) -> "ExpressionProxy":
        return ExpressionProxy(BoolOp("or", unwrap(other), self._node))

    def __invert__(self) -> "ExpressionProxy":
        return ExpressionProxy(Not(self._node))

    def __bool__(self) -> bool:
        raise TypeError("Expressions have no truth value; use & | ~ instead of 'and', 'or', 'not'")

    # Named helpers for operations without an operator
    def is_none(self) -> "ExpressionProxy":
        return self._compare("is", None)

    def is_not_none(self) -> "ExpressionProxy":
        return self._compare("is_not", None)

    def contains(self, item: Any) -> "ExpressionProxy":
        return self._call("contains", unwrap(item))

    def in_(self, values: Iterable[Any]) -> "ExpressionProxy":
        return self._call("in", Constant(tuple(values)))

    def startswith(self, prefix: str) -> "ExpressionProxy":
        return self._call("startswith", unwrap(prefix))

    def endswith(self, suffix: str) -> "ExpressionProxy":
        return self._call("endswith", unwrap(suffix))

    def any(self, predicate: Callable[["ExpressionProxy"], Any]) -> "ExpressionProxy":
        return self._call("any", capture(predicate))

    def all(self, predicate: Callable[["ExpressionProxy"], Any]) -> "ExpressionProxy":
        return self._call("all", capture(predicate))

    def _compare(self, op: str, other: Any) -> "ExpressionProxy":
        return ExpressionProxy(Compare(op, self._node, unwrap(other)))

    def _call(self, function: str, *args: Expression) -> "ExpressionProxy":
        return ExpressionProxy(Call(function, (self._node,) + args))

    def __repr__(self) -> str:
        return f"<ExpressionProxy: {self._node}>"


def unwrap(value: Any) -> Expression:
    """Return the node behind a proxy, the node itself, or a constant."""
    if isinstance(value, ExpressionProxy):
        return value._node
    if isinstance(value, Expression):
        return value
    return Constant(value)


def capture(func: Any, type_: Any = None, parameter: Optional[Parameter] = None) -> Lambda:
    """Build a `Lambda` by calling `func` once with a proxy over a fresh parameter."""
    if isinstance(func, Lambda):
        return func
    parameter = parameter or Parameter(type_=type_)
    return Lambda(unwrap(func(ExpressionProxy(parameter))), parameter)

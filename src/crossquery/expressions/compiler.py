"""Compile expression trees into plain Python callables.

Each node becomes a closure taking an environment (parameter -> bound value).
Nested lambdas (element predicates of `any`/`all`) compile to closures that
extend the environment with their own parameter on every call.
"""

from __future__ import annotations

import operator
from collections.abc import Mapping
from typing import Any, Callable, Dict

from ..exceptions import InvalidQueryDefinitionError
from ..logger import get_logger
from .nodes import FUNCTIONS, BoolOp, Call, Compare, Constant, Lambda, Member, Not, Parameter
from .visitor import ExpressionVisitor

__all__ = ("ExpressionCompiler", "compile_lambda")

logger = get_logger(__name__)

Env = Dict[Parameter, Any]
Compiled = Callable[[Env], Any]

_COMPARE = {
    "eq": operator.eq,
    "ne": operator.ne,
    "gt": operator.gt,
    "gte": operator.ge,
    "lt": operator.lt,
    "lte": operator.le,
    "is": operator.is_,
    "is_not": operator.is_not,
}


def _get_member(value: Any, name: str) -> Any:
    if isinstance(value, Mapping):
        return value[name]
    return getattr(value, name)


class ExpressionCompiler(ExpressionVisitor):
    """Turn every node into a closure over the evaluation environment."""

    def visit_Parameter(self, node: Parameter) -> Compiled:
        def parameter(env: Env) -> Any:
            try:
                return env[node]
            except KeyError:
                raise InvalidQueryDefinitionError("Unbound parameter", parameter=node.name) from None

        return parameter

    def visit_Constant(self, node: Constant) -> Compiled:
        value = node.value
        return lambda env: value

    def visit_Member(self, node: Member) -> Compiled:
        target = self.visit(node.target)
        name = node.name
        return lambda env: _get_member(target(env), name)

    def visit_Compare(self, node: Compare) -> Compiled:
        op = _COMPARE[node.op]
        left = self.visit(node.left)
        right = self.visit(node.right)
        return lambda env: op(left(env), right(env))

    def visit_BoolOp(self, node: BoolOp) -> Compiled:
        left = self.visit(node.left)
        right = self.visit(node.right)
        if node.op == "and":
            return lambda env: bool(left(env)) and bool(right(env))
        return lambda env: bool(left(env)) or bool(right(env))

    def visit_Not(self, node: Not) -> Compiled:
        operand = self.visit(node.operand)
        return lambda env: not operand(env)

    def visit_Call(self, node: Call) -> Compiled:
        impl = FUNCTIONS[node.function].impl
        args = tuple(self.visit(arg) for arg in node.args)
        return lambda env: impl(*(arg(env) for arg in args))

    def visit_Lambda(self, node: Lambda) -> Compiled:
        body = self.visit(node.body)
        parameter = node.parameter

        def closure(env: Env) -> Callable[[Any], Any]:
            def invoke(value: Any) -> Any:
                scope = dict(env)
                scope[parameter] = value
                return body(scope)

            return invoke

        return closure


def compile_lambda(expression: Lambda) -> Callable[[Any], Any]:
    """Compile a top-level lambda into a callable of its single argument."""
    logger.debug("Compiling %s", expression)
    body = ExpressionCompiler().visit(expression.body)
    parameter = expression.parameter

    def compiled(subject: Any) -> Any:
        return body({parameter: subject})

    return compiled

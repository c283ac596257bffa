"""Tree visitors and parameter unification.

`ExpressionVisitor` walks a tree depth-first and rebuilds a composite node
only when one of its children changed; untouched subtrees are shared.

Two queries built independently each close over their own `Parameter`.
Combining them requires rewriting one tree so that it refers to the other's
parameter, which is what `ParameterVisitor` does. The same visitor also
substitutes a parameter with an arbitrary expression, used to push a
predicate over a property type down onto a member-access path.
"""

from __future__ import annotations

from typing import Any, Set

from ..exceptions import TypeMismatchError, UnsupportedOperatorError
from ..logger import get_logger
from ..settings import settings
from .inference import types_compatible
from .nodes import BoolOp, Call, Compare, Constant, Expression, Lambda, Member, Not, Parameter

__all__ = (
    "ExpressionVisitor",
    "ParameterVisitor",
    "free_parameters",
    "replace_parameter",
    "with_parameter",
)

logger = get_logger(__name__)


class ExpressionVisitor:
    """Depth-first visitor dispatching on `visit_<NodeClass>`."""

    def visit(self, node: Expression) -> Any:
        method = getattr(self, f"visit_{type(node).__name__}", None)
        if method is None:
            raise UnsupportedOperatorError("No visitor for node", node=type(node).__name__, visitor=type(self).__name__)
        return method(node)

    def visit_Parameter(self, node: Parameter) -> Any:
        return node

    def visit_Constant(self, node: Constant) -> Any:
        return node

    def visit_Member(self, node: Member) -> Any:
        target = self.visit(node.target)
        if target is node.target:
            return node
        return Member(target, node.name)

    def visit_Compare(self, node: Compare) -> Any:
        left = self.visit(node.left)
        right = self.visit(node.right)
        if left is node.left and right is node.right:
            return node
        return Compare(node.op, left, right)

    def visit_BoolOp(self, node: BoolOp) -> Any:
        left = self.visit(node.left)
        right = self.visit(node.right)
        if left is node.left and right is node.right:
            return node
        return BoolOp(node.op, left, right)

    def visit_Not(self, node: Not) -> Any:
        operand = self.visit(node.operand)
        if operand is node.operand:
            return node
        return Not(operand)

    def visit_Call(self, node: Call) -> Any:
        args = tuple(self.visit(arg) for arg in node.args)
        if all(new is old for new, old in zip(args, node.args)):
            return node
        return Call(node.function, args)

    def visit_Lambda(self, node: Lambda) -> Any:
        body = self.visit(node.body)
        if body is node.body:
            return node
        return Lambda(body, node.parameter)


class ParameterVisitor(ExpressionVisitor):
    """Replace every occurrence of one parameter with another expression."""

    def __init__(self, parameter: Parameter, replacement: Expression) -> None:
        self.parameter = parameter
        self.replacement = replacement

    def visit_Parameter(self, node: Parameter) -> Expression:
        if node is self.parameter:
            return self.replacement
        return node


class _FreeParameterCollector(ExpressionVisitor):
    def __init__(self) -> None:
        self.bound: Set[Parameter] = set()
        self.free: Set[Parameter] = set()

    def visit_Parameter(self, node: Parameter) -> Expression:
        if node not in self.bound:
            self.free.add(node)
        return node

    def visit_Lambda(self, node: Lambda) -> Expression:
        # inner lambdas only bind their parameter inside their own body
        shadowed = node.parameter in self.bound
        self.bound.add(node.parameter)
        self.visit(node.body)
        if not shadowed:
            self.bound.discard(node.parameter)
        return node


def free_parameters(node: Expression) -> Set[Parameter]:
    """Parameters referenced by `node` that no enclosing lambda inside it binds."""
    collector = _FreeParameterCollector()
    collector.visit(node)
    return collector.free


def replace_parameter(expression: Lambda, replacement: Expression) -> Expression:
    """Return `expression.body` with its parameter replaced by `replacement`.

    Raises:
        TypeMismatchError: If the parameter and replacement have known,
            incompatible types.
    """
    parameter = expression.parameter
    if settings.QUERY_STRICT_TYPES and not types_compatible(parameter.type_, replacement.type_):
        raise TypeMismatchError(
            "Cannot substitute parameter with an expression of another type",
            parameter=parameter.name,
            expected=parameter.type_,
            actual=replacement.type_,
        )
    if replacement is parameter:
        return expression.body
    return ParameterVisitor(parameter, replacement).visit(expression.body)


def with_parameter(predicate: Lambda, selector: Lambda) -> Lambda:
    """Re-root a predicate over a property onto the object owning the property.

    Given `lambda c: c.name == "x"` and `lambda p: p.child`, returns
    `lambda p: p.child.name == "x"`.
    """
    body = replace_parameter(predicate, selector.body)
    logger.debug("Substituted %s with %s", predicate.parameter.name, selector.body)
    return Lambda(body, selector.parameter)

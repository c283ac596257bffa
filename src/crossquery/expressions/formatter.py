"""Readable text rendering of expression trees."""

from __future__ import annotations

from .nodes import BoolOp, Call, Compare, Constant, Expression, Lambda, Member, Not, Parameter
from .visitor import ExpressionVisitor

__all__ = ("ExpressionFormatter", "format_expression")

_SYMBOLS = {
    "eq": "==",
    "ne": "!=",
    "gt": ">",
    "gte": ">=",
    "lt": "<",
    "lte": "<=",
    "is": "is",
    "is_not": "is not",
}


class ExpressionFormatter(ExpressionVisitor):
    def visit_Parameter(self, node: Parameter) -> str:
        return node.name

    def visit_Constant(self, node: Constant) -> str:
        return repr(node.value)

    def visit_Member(self, node: Member) -> str:
        target = self.visit(node.target)
        if node.name.isidentifier():
            return f"{target}.{node.name}"
        return f"{target}[{node.name!r}]"

    def visit_Compare(self, node: Compare) -> str:
        return f"({self.visit(node.left)} {_SYMBOLS[node.op]} {self.visit(node.right)})"

    def visit_BoolOp(self, node: BoolOp) -> str:
        return f"({self.visit(node.left)} {node.op} {self.visit(node.right)})"

    def visit_Not(self, node: Not) -> str:
        return f"not {self.visit(node.operand)}"

    def visit_Call(self, node: Call) -> str:
        return f"{node.function}({', '.join(self.visit(arg) for arg in node.args)})"

    def visit_Lambda(self, node: Lambda) -> str:
        return f"(lambda {node.parameter.name}: {self.visit(node.body)})"


def format_expression(node: Expression) -> str:
    text = ExpressionFormatter().visit(node)
    if isinstance(node, Lambda):
        # drop the outer parentheses of a top-level lambda
        return text[1:-1]
    return text

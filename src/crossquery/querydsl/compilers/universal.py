"""Universal filter dict translator.

Lowers a query expression into the backend-neutral dict form consumed by the
where compilers:

- Leaves become `{field: {op: value}}` mappings, nested fields dotted.
- Boolean combinations use `{"$and": [...]}`, `{"$or": [...]}`.
- Negation wraps with `{"$not": node}`.

Supported lookups: `$eq`, `$ne`, `$gt`, `$gte`, `$lt`, `$lte`, `$in`, `$nin`,
`$contains`, `$regex` (starts/ends with). Comparisons must put a member path
of the query parameter against a constant; anything else (element
predicates, sequence equality, comparisons between two members) has no
universal form and raises `UnsupportedOperatorError`.
"""

import re
from typing import Any, Dict, List, Optional

from ...exceptions import InvalidFieldError, UnsupportedOperatorError
from ...expressions.nodes import BoolOp, Call, Compare, Constant, Expression, Lambda, Member, Not, Parameter
from ...expressions.visitor import ExpressionVisitor
from ...utils import path_to_field

__all__ = (
    "UniversalTranslator",
    "universal_translator",
)

_OP_MAP = {
    "eq": "$eq",
    "ne": "$ne",
    "gt": "$gt",
    "gte": "$gte",
    "lt": "$lt",
    "lte": "$lte",
    "is": "$eq",
    "is_not": "$ne",
}

# constant on the left flips the comparison
_FLIPPED = {"gt": "lt", "gte": "lte", "lt": "gt", "lte": "gte"}


class UniversalTranslator(ExpressionVisitor):
    """Translate query lambdas into universal filter dicts."""

    def __init__(self) -> None:
        self._parameter: Optional[Parameter] = None

    def translate(self, expression: Lambda) -> Dict[str, Any]:
        translator = UniversalTranslator()
        translator._parameter = expression.parameter
        return translator.visit(expression.body)

    # -------------------
    # Helpers
    # -------------------
    def _field(self, node: Expression) -> Optional[str]:
        """Dotted path of a member chain rooted at the query parameter, else None."""
        parts: List[str] = []
        while isinstance(node, Member):
            parts.append(node.name)
            node = node.target
        if node is not self._parameter:
            return None
        if not parts:
            raise InvalidFieldError(
                "Expression tests the subject itself, not a field", field=node.name, operation="translate"
            )
        return path_to_field(list(reversed(parts)))

    def _leaf(self, field: str, op: str, value: Any) -> Dict[str, Any]:
        return {field: {op: value}}

    def _combine(self, connector: str, left: Dict[str, Any], right: Dict[str, Any]) -> Dict[str, Any]:
        children: List[Dict[str, Any]] = []
        for child in (left, right):
            if list(child) == [connector]:
                children.extend(child[connector])
            else:
                children.append(child)
        return {connector: children}

    def _unsupported(self, node: Expression, reason: str) -> UnsupportedOperatorError:
        return UnsupportedOperatorError(reason, node=type(node).__name__, expression=str(node), operation="translate")

    # -------------------
    # Nodes
    # -------------------
    def visit_BoolOp(self, node: BoolOp) -> Dict[str, Any]:
        return self._combine(f"${node.op}", self.visit(node.left), self.visit(node.right))

    def visit_Not(self, node: Not) -> Dict[str, Any]:
        operand = node.operand
        if isinstance(operand, Call) and operand.function == "in":
            field, values = self._field_and_constant(operand)
            return self._leaf(field, "$nin", list(values))
        return {"$not": self.visit(operand)}

    def visit_Member(self, node: Member) -> Dict[str, Any]:
        # a bare boolean member used as a condition
        field = self._field(node)
        if field is None:
            raise self._unsupported(node, "Member is not rooted at the query parameter")
        return self._leaf(field, "$eq", True)

    def visit_Compare(self, node: Compare) -> Dict[str, Any]:
        op = node.op
        field = self._field(node.left)
        other = node.right
        if field is None:
            field = self._field(node.right)
            other = node.left
            op = _FLIPPED.get(op, op)
        if field is None or not isinstance(other, Constant):
            raise self._unsupported(node, "Comparison must test a field against a constant")
        return self._leaf(field, _OP_MAP[op], other.value)

    def visit_Call(self, node: Call) -> Dict[str, Any]:
        if node.function == "in":
            field, values = self._field_and_constant(node)
            return self._leaf(field, "$in", list(values))
        if node.function == "contains":
            field, value = self._field_and_constant(node)
            return self._leaf(field, "$contains", value)
        if node.function == "startswith":
            field, value = self._field_and_constant(node)
            return self._leaf(field, "$regex", f"^{re.escape(value)}")
        if node.function == "endswith":
            field, value = self._field_and_constant(node)
            return self._leaf(field, "$regex", f"{re.escape(value)}$")
        raise self._unsupported(node, f"Function {node.function} has no universal form")

    def _field_and_constant(self, node: Call) -> Any:
        subject, argument = node.args
        field = self._field(subject)
        if field is None or not isinstance(argument, Constant):
            raise self._unsupported(node, "Call must test a field against a constant")
        return field, argument.value

    def visit_Constant(self, node: Constant) -> Dict[str, Any]:
        raise self._unsupported(node, "Constant condition has no universal form")

    def visit_Parameter(self, node: Parameter) -> Dict[str, Any]:
        raise self._unsupported(node, "Bare parameter has no universal form")

    def visit_Lambda(self, node: Lambda) -> Dict[str, Any]:
        raise self._unsupported(node, "Nested lambda has no universal form")


universal_translator = UniversalTranslator()

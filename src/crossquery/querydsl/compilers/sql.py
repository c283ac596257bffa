"""SQL where compiler.

Transforms universal dicts into SQL WHERE clauses (PostgreSQL dialect).

Supports:
- Comparison: =, !=, >, <, >=, <=
- Null checks: IS NULL, IS NOT NULL
- Range: IN, NOT IN
- String: LIKE for $contains on strings, ~ for $regex
- Arrays: value = ANY(column) for $contains on non-strings
- Logical: AND, OR, NOT

Limitations:
- Values are inlined as literals; use parameterized queries for untrusted input
- Dotted fields are rendered as quoted qualified names ("table"."column")
"""

from typing import Any, Dict, List, Union

from ...exceptions import UnsupportedOperatorError
from .base import BaseWhere
from .utils import escape_like, format_value_sql, normalize_where_input, quote_identifier

__all__ = (
    "SqlWhereCompiler",
    "sql_where",
)


class SqlWhereCompiler(BaseWhere):
    """Compile universal query nodes into SQL WHERE clauses."""

    _OP_MAP = {
        "$eq": "=",
        "$ne": "!=",
        "$gt": ">",
        "$gte": ">=",
        "$lt": "<",
        "$lte": "<=",
        "$in": "IN",
        "$nin": "NOT IN",
        "$regex": "~",
    }

    def to_where(self, where: Union[Dict[str, Any], Any]) -> str:
        """Convert Query object or universal dict to SQL WHERE clause.

        Args:
            where: Query object or universal dict format

        Returns:
            SQL WHERE clause string
        """
        node = normalize_where_input(where)
        return self._node_to_expr(node)

    def to_expr(self, node: Dict[str, Any]) -> str:
        """Convert universal node to SQL WHERE clause (same as to_where)."""
        return self._node_to_expr(normalize_where_input(node))

    def _node_to_expr(self, node: Dict[str, Any], nested: bool = False) -> str:
        """Recursively transform node into SQL WHERE clause."""
        if "$and" in node:
            return self._join(" AND ", node["$and"], nested)
        if "$or" in node:
            return self._join(" OR ", node["$or"], nested)
        if "$not" in node:
            return "NOT (" + self._node_to_expr(node["$not"]) + ")"
        parts: List[str] = []
        for field, expr in node.items():
            ident = quote_identifier(field)
            for op, val in expr.items():
                parts.append(self._condition(field, ident, op, val))
        return " AND ".join(parts)

    def _join(self, separator: str, children: List[Dict[str, Any]], nested: bool) -> str:
        clause = separator.join(self._node_to_expr(child, nested=True) for child in children)
        return f"({clause})" if nested else clause

    def _condition(self, field: str, ident: str, op: str, val: Any) -> str:
        if op == "$contains":
            if isinstance(val, str):
                return f"{ident} LIKE {format_value_sql('%' + escape_like(val) + '%')}"
            return f"{format_value_sql(val)} = ANY({ident})"
        if val is None and op in ("$eq", "$ne"):
            return f"{ident} IS NULL" if op == "$eq" else f"{ident} IS NOT NULL"
        if op in ("$in", "$nin") and not val:
            # empty IN lists are not valid SQL
            return "FALSE" if op == "$in" else "TRUE"
        if op not in self._OP_MAP:
            raise UnsupportedOperatorError(
                f"Operator {op} is not supported. Supported: {', '.join(sorted(self._OP_MAP.keys()))}",
                field=field,
                backend="sql",
            )
        return f"{ident} {self._OP_MAP[op]} {format_value_sql(val)}"


sql_where = SqlWhereCompiler()

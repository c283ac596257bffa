"""MongoDB-style where compiler.

Transforms universal dicts into MongoDB query filter documents. The
universal format is already MongoDB-like, so most of the work is mapping the
operators Mongo spells differently.

MongoDB supports:
- Comparison: $eq, $ne, $gt, $gte, $lt, $lte
- Range: $in, $nin
- Logical: $and, $or, $nor
- Pattern: $regex
- Nested fields via dot notation

Limitations:
- Top-level $not is not a Mongo operator; it is emitted as $nor
- $contains on a string becomes an escaped $regex, on anything else an
  $elemMatch of the value (a list field holding strings cannot be told
  apart from a string field at this level)
"""

import re
from typing import Any, Dict, Union

from ...exceptions import UnsupportedOperatorError
from .base import BaseWhere
from .utils import normalize_where_input

__all__ = (
    "MongoWhereCompiler",
    "mongo_where",
)


class MongoWhereCompiler(BaseWhere):
    """Compile universal query nodes into MongoDB filter documents."""

    _OP_MAP = {
        "$eq": "$eq",
        "$ne": "$ne",
        "$gt": "$gt",
        "$gte": "$gte",
        "$lt": "$lt",
        "$lte": "$lte",
        "$in": "$in",
        "$nin": "$nin",
        "$regex": "$regex",
    }

    def to_where(self, where: Union[Dict[str, Any], Any]) -> Dict[str, Any]:
        """Convert Query object or universal dict to a MongoDB filter document.

        Args:
            where: Query object or universal dict format

        Returns:
            MongoDB filter dict
        """
        node = normalize_where_input(where)
        return self._node_to_dict(node)

    def to_expr(self, node: Dict[str, Any]) -> str:
        """Convert universal node to string representation for debugging."""
        return str(self._node_to_dict(normalize_where_input(node)))

    def _node_to_dict(self, node: Dict[str, Any]) -> Dict[str, Any]:
        if "$and" in node:
            return {"$and": [self._node_to_dict(n) for n in node["$and"]]}
        if "$or" in node:
            return {"$or": [self._node_to_dict(n) for n in node["$or"]]}
        if "$not" in node:
            return {"$nor": [self._node_to_dict(node["$not"])]}

        result: Dict[str, Any] = {}
        for field, expr in node.items():
            compiled: Dict[str, Any] = {}
            for op, val in expr.items():
                if op == "$contains":
                    if isinstance(val, str):
                        compiled["$regex"] = re.escape(val)
                    else:
                        compiled["$elemMatch"] = {"$eq": val}
                    continue
                if op not in self._OP_MAP:
                    raise UnsupportedOperatorError(
                        f"Operator {op} is not supported. Supported: {', '.join(sorted(self._OP_MAP.keys()))}",
                        field=field,
                        backend="mongo",
                    )
                compiled[self._OP_MAP[op]] = list(val) if op in ("$in", "$nin") else val
            result[field] = compiled
        return result


mongo_where = MongoWhereCompiler()

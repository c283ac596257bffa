"""Compiler utility functions.

Provides helpers for normalizing compiler input, quoting identifiers and
formatting SQL values.
"""

from typing import Any, Dict, List, Tuple, Union


def normalize_where_input(where: Any) -> Dict[str, Any]:
    """Normalize Query object or dict to universal dict format.

    Args:
        where: Query object (with .to_dict() method) or dict

    Returns:
        Universal dict format ready for compilation

    Raises:
        TypeError: If input is neither Query object nor dict
    """
    if hasattr(where, "to_dict") and callable(where.to_dict):
        return where.to_dict()
    elif isinstance(where, dict):
        return where
    else:
        raise TypeError(f"where parameter must be a Query object or dict, got {type(where).__name__}")


def quote_identifier(name: str) -> str:
    """Quote SQL identifier with double quotes.

    Handles dotted field paths by quoting each segment separately.
    """
    return ".".join('"' + p.replace('"', '""') + '"' for p in name.split("."))


def format_value_sql(v: Union[None, bool, str, int, float, List[Any], Tuple[Any, ...]]) -> str:
    """Format Python value for SQL literal embedding (basic approach).

    Use parameterized queries in production for safety.
    """
    if v is None:
        return "NULL"
    if isinstance(v, bool):
        return "TRUE" if v else "FALSE"
    if isinstance(v, str):
        return "'" + v.replace("'", "''") + "'"
    if isinstance(v, (list, tuple, set, frozenset)):
        inner = ", ".join(format_value_sql(x) for x in v)
        return f"({inner})"
    return str(v)


def escape_like(value: str) -> str:
    """Escape LIKE wildcards in a literal pattern fragment."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")

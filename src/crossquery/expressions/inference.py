"""Static type helpers for expression nodes.

Types here are best-effort: a node's `type_` is `None` whenever it cannot be
determined, and every check treats `None` as "unknown, allow".
"""

import numbers
import types
from collections.abc import Iterable, Mapping
from typing import Any, Optional, TypeVar, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel

__all__ = (
    "element_type",
    "has_capability",
    "resolve_member_type",
    "runtime_class",
    "types_compatible",
    "unwrap_optional",
)


def unwrap_optional(tp: Any) -> Any:
    """Strip `Optional[...]` from a type; other unions are unknown."""
    origin = get_origin(tp)
    if origin is Union or origin is getattr(types, "UnionType", None):
        args = [a for a in get_args(tp) if a is not type(None)]
        if len(args) == 1:
            return args[0]
        return None
    return tp


def runtime_class(tp: Any) -> Optional[type]:
    """Return the class a type annotation is checked against, or None when unknown."""
    tp = unwrap_optional(tp)
    if tp is None or tp is Any or isinstance(tp, TypeVar):
        return None
    origin = get_origin(tp)
    if origin is not None:
        tp = origin
    if isinstance(tp, type):
        return tp
    return None


def types_compatible(expected: Any, actual: Any) -> bool:
    """Whether a value of type `actual` may stand where `expected` is required."""
    e = runtime_class(expected)
    a = runtime_class(actual)
    if e is None or a is None or e is object or a is object:
        return True
    if issubclass(e, numbers.Number) and issubclass(a, numbers.Number):
        return True
    return issubclass(a, e) or issubclass(e, a)


def resolve_member_type(owner: Any, name: str) -> Any:
    """Resolve the annotated type of `owner.name`.

    Understands pydantic models, dataclasses and annotated classes, read-only
    properties with a return annotation, and `Mapping[str, X]` owners.
    """
    owner = unwrap_optional(owner)
    cls = runtime_class(owner)
    if cls is None:
        return None
    if issubclass(cls, Mapping):
        args = get_args(owner)
        return args[1] if len(args) == 2 else None
    if issubclass(cls, BaseModel):
        field = cls.model_fields.get(name)
        if field is not None:
            return field.annotation
    attr = getattr(cls, name, None)
    if isinstance(attr, property) and attr.fget is not None:
        return _hints(attr.fget).get("return")
    return _hints(cls).get(name)


def _hints(obj: Any) -> dict:
    try:
        return get_type_hints(obj)
    except (NameError, TypeError):
        # unresolved forward references leave the member untyped
        return {}


def element_type(tp: Any) -> Any:
    """Element type of an iterable annotation such as `List[int]`."""
    tp = unwrap_optional(tp)
    cls = runtime_class(tp)
    if cls is None:
        return None
    if issubclass(cls, (str, bytes)):
        return cls
    args = get_args(tp)
    if args and issubclass(cls, Iterable):
        return args[0]
    return None


def has_capability(tp: Any, capability: str) -> Optional[bool]:
    """Check a capability of a type; None means the type is unknown."""
    cls = runtime_class(tp)
    if cls is None or cls is object:
        return None
    if capability == "string":
        return issubclass(cls, str)
    if capability == "boolean":
        return issubclass(cls, bool)
    if capability == "ordering":
        return getattr(cls, "__lt__", None) is not object.__lt__
    if capability == "iterable":
        return issubclass(cls, Iterable)
    raise ValueError(f"Unknown capability: {capability}")

"""Utility functions for crossquery.

Shared helpers for turning user input (selectors, predicates, field paths)
into expression nodes and for construction-time capability checks.
"""

import re
from typing import Any, List, Optional

from .exceptions import InvalidQueryDefinitionError, UnsupportedCapabilityError
from .expressions.inference import has_capability, runtime_class
from .expressions.nodes import Lambda, Member, Parameter
from .expressions.proxy import capture
from .expressions.visitor import free_parameters
from .settings import settings

_PATH_SPLIT = re.compile(r"__|\.")


# ===========================================================================
# Field paths
# ===========================================================================


def field_to_path(field: str) -> List[str]:
    """Split a field reference into member names.

    Both `info.lang` and `info__lang` become `["info", "lang"]`.
    """
    parts = [p for p in _PATH_SPLIT.split(field) if p]
    if not parts:
        raise InvalidQueryDefinitionError("Empty field path", field=field)
    return parts


def path_to_field(parts: List[str]) -> str:
    return ".".join(parts)


# ===========================================================================
# Selector / predicate coercion
# ===========================================================================


def as_selector(selector: Any, subject_type: Any = None) -> Lambda:
    """Normalize a selector into a one-parameter `Lambda`.

    Accepts a built `Lambda`, a field path string, or a callable which is
    invoked once with an expression proxy.
    """
    if isinstance(selector, Lambda):
        return selector
    if isinstance(selector, str):
        parameter = Parameter(type_=subject_type)
        body = parameter
        for name in field_to_path(selector):
            body = Member(body, name)
        return Lambda(body, parameter)
    if callable(selector):
        return capture(selector, type_=subject_type)
    raise InvalidQueryDefinitionError("Selector must be a callable, a field path or a Lambda", got=type(selector).__name__)


def as_predicate(predicate: Any, subject_type: Any = None) -> Lambda:
    """Normalize a predicate into a boolean `Lambda`.

    Accepts anything exposing `as_expression()` (a Query), a built `Lambda`,
    or a callable which is captured over an expression proxy.
    """
    if hasattr(predicate, "as_expression") and callable(predicate.as_expression):
        expression = predicate.as_expression()
    elif isinstance(predicate, Lambda):
        expression = predicate
    elif callable(predicate):
        expression = capture(predicate, type_=subject_type)
    else:
        raise InvalidQueryDefinitionError(
            "Predicate must be a Query, a Lambda or a callable", got=type(predicate).__name__
        )
    validate_predicate(expression)
    return expression


def validate_predicate(expression: Lambda) -> Lambda:
    """Check that a lambda is a boolean predicate closed over its own parameter."""
    result = runtime_class(expression.body.type_)
    if result is not None and not issubclass(result, bool):
        raise InvalidQueryDefinitionError(
            "Predicate must evaluate to a boolean", actual=result.__name__, expression=str(expression)
        )
    unbound = free_parameters(expression.body) - {expression.parameter}
    if unbound:
        raise InvalidQueryDefinitionError(
            "Predicate references parameters it does not bind",
            parameters=sorted(p.name for p in unbound),
        )
    return expression


# ===========================================================================
# Capability checks
# ===========================================================================


def require_capability(selector: Lambda, capability: str, lookup: str) -> None:
    """Reject a lookup whose required capability the selected type lacks.

    Unknown property types always pass; so does everything when
    QUERY_STRICT_TYPES is off.
    """
    if not settings.QUERY_STRICT_TYPES:
        return
    prop_type = selector.body.type_
    if has_capability(prop_type, capability) is False:
        raise UnsupportedCapabilityError(
            f"Lookup '{lookup}' requires a {capability} property",
            lookup=lookup,
            capability=capability,
            actual=_type_name(prop_type),
        )


def _type_name(tp: Any) -> Optional[str]:
    cls = runtime_class(tp)
    return cls.__name__ if cls is not None else repr(tp)

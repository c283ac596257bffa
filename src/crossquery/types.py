"""Type aliases for crossquery package.

This module provides reusable type definitions to ensure consistency
across the codebase and improve code readability.
"""

from typing import Any, Callable, Literal, Union

from .expressions.nodes import Lambda

# Property selector - a lambda over the proxy, a "a.b" / "a__b" path, or a built Lambda
Selector = Union[str, Lambda, Callable[[Any], Any]]

# Predicate input - a Query, a built Lambda, or a lambda over the proxy returning a condition
PredicateLike = Union[Lambda, Callable[[Any], Any], Any]

# Compiled form of a predicate
CompiledPredicate = Callable[[Any], bool]

# Logical connective used by continuations
Connective = Literal["and", "or"]

# Supported export backends
BackendType = Literal["generic", "mongo", "sql"]

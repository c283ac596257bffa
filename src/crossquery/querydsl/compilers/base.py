"""Base compiler interface.

Defines the abstract contract all backend-specific where compilers must follow.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

__all__ = ("BaseWhere",)


class BaseWhere(ABC):
    """Abstract base class for where clause compilers.

    Subclasses implement `to_where` and `to_expr` to produce backend-specific
    filter structures from the universal dict.
    """

    @abstractmethod
    def to_where(self, node: Dict[str, Any]) -> Any:
        """
        Convert a Query or universal dict into backend-native filter representation.
        - dict for document stores (MongoDB-like syntax)
        - string for SQL
        """
        raise NotImplementedError

    @abstractmethod
    def to_expr(self, node: Dict[str, Any]) -> str:
        """Convert a universal dict into a string expression."""
        raise NotImplementedError

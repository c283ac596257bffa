"""Custom exceptions for CrossQuery library.

Construction-time problems (bad definitions, type mismatches, missing
capabilities) and translation problems each have their own branch under
`CrossQueryError`. Exceptions raised while evaluating a compiled query against
a subject are never wrapped; they reach the caller unchanged.
"""

from typing import Any, Dict


# Base exception
class CrossQueryError(Exception):
    """Base exception for all CrossQuery errors.

    Attributes:
        message: Error message
        details: Additional error context as key-value pairs
    """

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        """Initialize exception with message and additional details.

        Args:
            message: Human-readable error message
            **kwargs: Additional context (e.g., expected, actual, lookup)
        """
        self.message = message
        self.details: Dict[str, Any] = kwargs
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the complete error message with details."""
        if not self.details:
            return self.message

        details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
        if self.message:
            return f"{self.message} ({details_str})"
        return details_str

    def __repr__(self) -> str:
        """Return detailed representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# Definition exceptions
class InvalidQueryDefinitionError(CrossQueryError):
    """Raised when a query cannot be constructed from the given parts.

    Example:
        >>> raise InvalidQueryDefinitionError("Expected a boolean expression", got="Member")
    """


class DefinitionConflictError(InvalidQueryDefinitionError):
    """Raised when a query subclass defines its expression a second time.

    Example:
        >>> raise DefinitionConflictError("Query already defined", query="AdultQuery")
    """


class QueryNotDefinedError(InvalidQueryDefinitionError):
    """Raised when an undefined query subclass is exported or evaluated.

    Example:
        >>> raise QueryNotDefinedError("Query not defined", query="AdultQuery")
    """


class TypeMismatchError(InvalidQueryDefinitionError):
    """Raised when a parameter is substituted by an expression of an incompatible type.

    Example:
        >>> raise TypeMismatchError("Cannot substitute parameter", expected="Person", actual="str")
    """


class UnsupportedCapabilityError(InvalidQueryDefinitionError):
    """Raised when a lookup needs a capability the selected property type lacks.

    Example:
        >>> raise UnsupportedCapabilityError("Lookup requires a string", lookup="starting_with", actual="int")
    """


# Translation exceptions
class TranslationError(CrossQueryError):
    """Raised when an expression cannot be lowered into a backend representation.

    Example:
        >>> raise TranslationError("Cannot translate expression", backend="sql")
    """


class UnsupportedOperatorError(TranslationError):
    """Raised when an operator or function is not supported by a backend or the function table.

    Example:
        >>> raise UnsupportedOperatorError("Operator not supported", operator="$regex", backend="mongo")
    """


class InvalidFieldError(TranslationError):
    """Raised when a field path or its filter value is invalid for a backend.

    Example:
        >>> raise InvalidFieldError("Invalid field", field="tags", operation="where")
    """

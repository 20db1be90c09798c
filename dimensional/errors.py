"""
Dimensional Error Taxonomy
==========================

Every failure raised by the engine derives from QuantityError, so callers
can catch one type at the edge (CLI, HTTP) and still branch on the
specific kind when they care.

    NotFoundError            unknown unit symbol or dimension name
    DimensionMismatchError   operation needs equal dimension signatures
    DivisionByZeroError      divisor is zero in base units
    ConsistencyError         base unit re-registered with a non-identity
                             transform or a different owner dimension,
                             or a unit declared with a zero factor

Overwriting an existing dimension or unit symbol is NOT an error: it is
logged as a warning and the later registration wins.
"""

from typing import Any, Optional


class QuantityError(Exception):
    """Base class for all dimensional errors."""
    pass


class NotFoundError(QuantityError, KeyError):
    """
    Raised when a unit symbol or dimension name is not registered.

    Subclasses KeyError so code written against plain dict lookups keeps
    working.
    """

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f'{kind.capitalize()} "{name}" is not defined.')

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class DimensionMismatchError(QuantityError, ValueError):
    """Raised when an operation requires equal dimension signatures."""

    def __init__(self, message: str, left: Optional[Any] = None, right: Optional[Any] = None):
        self.left = left
        self.right = right
        super().__init__(message)


class DivisionByZeroError(QuantityError, ZeroDivisionError):
    """Raised when the divisor's base-unit value is exactly zero."""
    pass


class ConsistencyError(QuantityError):
    """
    Raised when a dimension's base unit is already registered with a
    factor other than 1, an offset other than 0, or under another dimension,
    and when any unit declares a factor of 0.
    """
    pass


__all__ = [
    'QuantityError',
    'NotFoundError',
    'DimensionMismatchError',
    'DivisionByZeroError',
    'ConsistencyError',
]

"""
Error handling for vecmath.

Every failure raised by the library is a VecmathError carrying a numeric
code. Concrete subclasses also derive from the matching builtin exception
(IndexError, ValueError) so callers can catch either.
"""

from __future__ import annotations

import operator
from typing import Optional


# =============================================================================
# Error Codes
# =============================================================================

VECMATH_OK = 0

# Argument errors (10-19)
VECMATH_ERROR_INVALID_ARGUMENT = 10
VECMATH_ERROR_DIMENSION_MISMATCH = 11
VECMATH_ERROR_INDEX_OUT_OF_BOUNDS = 14


_ERROR_MESSAGES = {
    VECMATH_OK: "Success",
    VECMATH_ERROR_INVALID_ARGUMENT: "Invalid argument",
    VECMATH_ERROR_DIMENSION_MISMATCH: "Dimension mismatch",
    VECMATH_ERROR_INDEX_OUT_OF_BOUNDS: "Index out of bounds",
}


# =============================================================================
# Exception Classes
# =============================================================================

class VecmathError(Exception):
    """
    Base exception for all vecmath errors.

    Attributes:
        code: One of the VECMATH_ERROR_* codes.
        message: Human readable description.
    """

    OK = VECMATH_OK
    ERROR_INVALID_ARGUMENT = VECMATH_ERROR_INVALID_ARGUMENT
    ERROR_DIMENSION_MISMATCH = VECMATH_ERROR_DIMENSION_MISMATCH
    ERROR_INDEX_OUT_OF_BOUNDS = VECMATH_ERROR_INDEX_OUT_OF_BOUNDS

    def __init__(self, code: int, message: Optional[str] = None):
        self.code = code
        if message is None:
            message = _ERROR_MESSAGES.get(code, f"Unknown error (code={code})")
        self.message = message
        super().__init__(message)

    @classmethod
    def from_code(cls, code: int, context: str = "") -> "VecmathError":
        """Create exception from error code with optional context."""
        base_msg = _ERROR_MESSAGES.get(code, "Unknown error")
        msg = f"{context}: {base_msg}" if context else base_msg
        return cls(code, msg)


class IndexOutOfRangeError(VecmathError, IndexError):
    """An element, row or column index outside its valid range.

    The offending index is available as ``index``.
    """

    def __init__(self, index: int):
        self.index = index
        super().__init__(VECMATH_ERROR_INDEX_OUT_OF_BOUNDS, f"Index out of range: {index}")


class IterationExhaustedError(IndexOutOfRangeError, StopIteration):
    """Raised when an iterator is advanced past its last element.

    It is an IndexOutOfRangeError carrying the first invalid index, and a
    StopIteration so ``for`` loops and ``list()`` terminate normally.
    """


class DimensionMismatchError(VecmathError, ValueError):
    """Operand shapes are incompatible for the requested operation."""

    def __init__(self, message: str):
        super().__init__(VECMATH_ERROR_DIMENSION_MISMATCH, message)


class InvalidArgumentError(VecmathError, ValueError):
    """An argument is malformed (negative dimension, unknown precision, ...)."""

    def __init__(self, message: str):
        super().__init__(VECMATH_ERROR_INVALID_ARGUMENT, message)


# =============================================================================
# Checking Functions
# =============================================================================

def check_index(k, limit: int) -> int:
    """
    Return ``k`` as an int if ``0 <= k < limit``.

    Negative indices are rejected, they do not count from the end.

    Raises:
        IndexOutOfRangeError: If k lies outside [0, limit).
        TypeError: If k is not an integer.
    """
    k = operator.index(k)
    if k < 0 or k >= limit:
        raise IndexOutOfRangeError(k)
    return k


def check_dimension(dimension, what: str = "dimension") -> int:
    """Validate a non-negative size and return it as an int."""
    dimension = operator.index(dimension)
    if dimension < 0:
        raise InvalidArgumentError(f"{what} must be non-negative, got {dimension}")
    return dimension

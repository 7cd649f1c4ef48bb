"""Storage Abstraction.

Every Vector and Matrix reads and writes its elements through a storage
object. The storage, not the Vector/Matrix, decides whether memory is owned
or shared with another value.

Storage Families:
    - OWNED: Dense storage backed by a private contiguous buffer.
    - VIEW: Storage holding a reference to an owner Vector/Matrix (or a
            sequence of Vectors) and remapping indices before delegating.

Contract:
    Implementations do NOT bounds-check. Vector and Matrix check indices
    once at their public boundary, so a chain of views (the row of a
    transpose of an assembled matrix) pays for a single check per access.

Lifetime:
    A view holds a strong reference to its owner, so the owner stays
    alive for as long as any view over it does.

Example:
    >>> m = Matrix(2, 3)
    >>> m.ownership                    # Ownership.OWNED
    >>> m.transpose_view().ownership   # Ownership.VIEW
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
import numpy as np

from ._errors import check_dimension

__all__ = [
    'Ownership',
    'MatrixDimension',
    'VectorStorage',
    'MatrixStorage',
]


# =============================================================================
# Enumerations
# =============================================================================

class Ownership(Enum):
    """Data ownership model.

    Attributes:
        OWNED: Storage owns its buffer.
               Created by: constructors, copy(), rows(), transposed(), ...
        VIEW: Storage forwards to another value's storage.
              Created by: transpose_view(), rows_view(), columns_view(),
              matrix_of_rows_view(), matrix_of_columns_view()
    """
    OWNED = 'owned'
    VIEW = 'view'


# =============================================================================
# Dimensions
# =============================================================================

@dataclass(frozen=True)
class MatrixDimension:
    """Matrix shape (rows, cols). Immutable."""
    rows: int
    cols: int

    def __post_init__(self):
        object.__setattr__(self, 'rows', check_dimension(self.rows, "rows"))
        object.__setattr__(self, 'cols', check_dimension(self.cols, "cols"))

    @property
    def size(self) -> int:
        """Total number of elements (rows * cols)."""
        return self.rows * self.cols

    @property
    def transposed(self) -> 'MatrixDimension':
        return MatrixDimension(self.cols, self.rows)

    def __iter__(self):
        yield self.rows
        yield self.cols

    def __str__(self) -> str:
        return f"{self.rows} x {self.cols}"


# =============================================================================
# Abstract Storages
# =============================================================================

class VectorStorage(ABC):
    """
    Element access capability for a vector of fixed dimension.

    Required (subclasses must implement):
        dimension: Number of elements
        get(k): Element at k
        set(k, value): Overwrite element at k

    Optional (subclasses may override):
        dtype: Element dtype (defaults to float64)
        ownership: Ownership.OWNED or Ownership.VIEW
    """

    __slots__ = ()

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Number of elements."""
        ...

    @abstractmethod
    def get(self, k: int) -> float:
        """Element at k. k is already bounds-checked."""
        ...

    @abstractmethod
    def set(self, k: int, value: float) -> None:
        """Overwrite element at k. k is already bounds-checked."""
        ...

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(np.float64)

    @property
    def ownership(self) -> Ownership:
        return Ownership.OWNED

    @property
    def is_view(self) -> bool:
        return self.ownership == Ownership.VIEW

    def __repr__(self) -> str:
        return f"{type(self).__name__}(dimension={self.dimension}, ownership={self.ownership.value})"


class MatrixStorage(ABC):
    """
    Element access capability for a matrix of fixed dimension.

    Required (subclasses must implement):
        dimension: MatrixDimension
        get(i, j): Element at row i, column j
        set(i, j, value): Overwrite element at row i, column j
    """

    __slots__ = ()

    @property
    @abstractmethod
    def dimension(self) -> MatrixDimension:
        """Matrix dimension."""
        ...

    @abstractmethod
    def get(self, i: int, j: int) -> float:
        """Element at (i, j). Both indices are already bounds-checked."""
        ...

    @abstractmethod
    def set(self, i: int, j: int, value: float) -> None:
        """Overwrite element at (i, j). Both indices are already bounds-checked."""
        ...

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(np.float64)

    @property
    def ownership(self) -> Ownership:
        return Ownership.OWNED

    @property
    def is_view(self) -> bool:
        return self.ownership == Ownership.VIEW

    def __repr__(self) -> str:
        return f"{type(self).__name__}(dimension={self.dimension}, ownership={self.ownership.value})"

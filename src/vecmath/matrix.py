"""
Matrix - 2-D value type over a pluggable storage.

Like Vector, a Matrix forwards every element access to its storage, so a
matrix over a transpose view is indistinguishable from one over dense
storage to all arithmetic code.

Aliasing vs. copying:

    Aliasing (VIEW)            Copying (OWNED)
    ------------------------------------------------
    transpose_view()           transposed()
    rows_view()                rows()
    columns_view()             columns()

Example:
    >>> m = Matrix(2, 3, lambda i, j: i * 3 + j + 1)
    >>> t = m.transpose_view()
    >>> t[2, 0] = 0.0          # writes m[0, 2]
    >>> m[0, 2]
    0.0
"""

from __future__ import annotations

import logging
import numbers
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Union

import numpy as np

from ._dense import DenseMatrixStorage, DTypeLike
from ._errors import DimensionMismatchError, IterationExhaustedError, check_index
from ._storage import MatrixDimension, MatrixStorage, Ownership
from ._views import ColumnStorage, RowStorage, TransposeStorage
from .vector import Vector

__all__ = ['Matrix', 'MatrixRowsView', 'MatrixColumnsView']

logger = logging.getLogger("vecmath.matrix")


class Matrix:
    """
    Dense matrix of floats backed by a MatrixStorage.

    Construction:
        Matrix(2, 3)                           # zero-filled
        Matrix(MatrixDimension(2, 3))          # zero-filled
        Matrix(2, 3, lambda i, j: i + j)       # generator, row-major order
        Matrix.from_rows([[1, 2], [3, 4]])     # nested lists
        Matrix.wrap(storage)                   # over an existing storage

    Element access uses a pair of indices: ``m[i, j]``.
    """

    __slots__ = ('_storage', '__weakref__')

    __array_ufunc__ = None

    def __init__(
        self,
        rows: Union[int, MatrixDimension],
        cols: Optional[Union[int, Callable[[int, int], float]]] = None,
        init: Optional[Callable[[int, int], float]] = None,
        *,
        dtype: DTypeLike = None
    ):
        if isinstance(rows, MatrixDimension):
            if init is not None:
                raise TypeError("Matrix(dimension, init) takes at most one positional argument after dimension")
            dimension, init = rows, cols
        else:
            if cols is None:
                raise TypeError("Matrix(rows, cols) requires cols")
            dimension = MatrixDimension(rows, cols)
        self._storage: MatrixStorage = DenseMatrixStorage(dimension, init, dtype)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def wrap(cls, storage: MatrixStorage) -> 'Matrix':
        """Create a matrix over ``storage`` without copying it."""
        matrix = cls.__new__(cls)
        matrix._storage = storage
        return matrix

    @classmethod
    def from_rows(cls, rows: List[List[float]], dtype: DTypeLike = None) -> 'Matrix':
        """Matrix holding a copy of a list of equally long rows."""
        rows = [list(r) for r in rows]
        cols = len(rows[0]) if rows else 0
        for i, r in enumerate(rows):
            if len(r) != cols:
                raise DimensionMismatchError(
                    f"Cannot build matrix from rows: row 0 has {cols} elements but row {i} has {len(r)}"
                )
        return cls(len(rows), cols, lambda i, j: rows[i][j], dtype=dtype)

    @classmethod
    def from_numpy(cls, arr: np.ndarray, dtype: DTypeLike = None) -> 'Matrix':
        """Matrix holding a copy of a 2-D numpy array."""
        return cls.wrap(DenseMatrixStorage.from_array(arr, dtype))

    def copy(self) -> 'Matrix':
        """Independent matrix with the same elements, in fresh dense storage."""
        logger.debug(f"Copying {self.dimension} matrix ({self.ownership.value})")
        storage = self._storage
        return Matrix(storage.dimension, storage.get, dtype=storage.dtype)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def storage(self) -> MatrixStorage:
        return self._storage

    @property
    def dimension(self) -> MatrixDimension:
        return self._storage.dimension

    @property
    def row_indices(self) -> range:
        return range(self._storage.dimension.rows)

    @property
    def column_indices(self) -> range:
        return range(self._storage.dimension.cols)

    @property
    def dtype(self) -> np.dtype:
        return self._storage.dtype

    @property
    def ownership(self) -> Ownership:
        return self._storage.ownership

    @property
    def is_view(self) -> bool:
        return self._storage.ownership == Ownership.VIEW

    # -------------------------------------------------------------------------
    # Element Access
    # -------------------------------------------------------------------------

    def get(self, i: int, j: int) -> float:
        """Element at (i, j). Each index is checked against its own axis."""
        dim = self._storage.dimension
        return self._storage.get(check_index(i, dim.rows), check_index(j, dim.cols))

    def set(self, i: int, j: int, value: float) -> None:
        """Overwrite element at (i, j). Each index is checked against its own axis."""
        dim = self._storage.dimension
        self._storage.set(check_index(i, dim.rows), check_index(j, dim.cols), value)

    def __getitem__(self, index):
        i, j = _split_index(index)
        return self.get(i, j)

    def __setitem__(self, index, value: float) -> None:
        i, j = _split_index(index)
        self.set(i, j, value)

    def __iter__(self) -> '_LineIterator':
        return iter(self.rows_view())

    def tolist(self) -> List[List[float]]:
        storage = self._storage
        return [[storage.get(i, j) for j in self.column_indices] for i in self.row_indices]

    def to_numpy(self) -> np.ndarray:
        """Copy of the elements as a (rows, cols) numpy array."""
        rows, cols = self.dimension
        return np.array(self.tolist(), dtype=self.dtype).reshape(rows, cols)

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def transpose_view(self) -> 'Matrix':
        """Transpose sharing this matrix's elements. O(1), no copy."""
        logger.debug(f"Creating transpose view of {self.dimension} matrix")
        return Matrix.wrap(TransposeStorage(self))

    def transposed(self) -> 'Matrix':
        """Independent transposed copy."""
        return self.transpose_view().copy()

    def rows_view(self) -> 'MatrixRowsView':
        """Rows as vectors sharing this matrix's elements."""
        logger.debug(f"Creating rows view of {self.dimension} matrix")
        return MatrixRowsView(self)

    def columns_view(self) -> 'MatrixColumnsView':
        """Columns as vectors sharing this matrix's elements."""
        logger.debug(f"Creating columns view of {self.dimension} matrix")
        return MatrixColumnsView(self)

    def rows(self) -> List[Vector]:
        """Independent copies of every row."""
        view = self.rows_view()
        return [view[i].copy() for i in view.indices]

    def columns(self) -> List[Vector]:
        """Independent copies of every column."""
        view = self.columns_view()
        return [view[j].copy() for j in view.indices]

    # -------------------------------------------------------------------------
    # Unary Operators
    # -------------------------------------------------------------------------

    def __pos__(self) -> 'Matrix':
        return self

    def __neg__(self) -> 'Matrix':
        return self._map(lambda x: -x)

    # -------------------------------------------------------------------------
    # Scalar Operators
    # -------------------------------------------------------------------------

    def _map(self, fn: Callable[[float], float]) -> 'Matrix':
        storage = self._storage
        return Matrix(storage.dimension, lambda i, j: fn(storage.get(i, j)), dtype=storage.dtype)

    def _update(self, fn: Callable[[float], float]) -> None:
        storage = self._storage
        rows, cols = storage.dimension
        for i in range(rows):
            for j in range(cols):
                storage.set(i, j, fn(storage.get(i, j)))

    def __add__(self, other):
        if isinstance(other, numbers.Real):
            return self._map(lambda x: x + other)
        return NotImplemented

    def __radd__(self, other):
        if isinstance(other, numbers.Real):
            return self + other
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, numbers.Real):
            return self._map(lambda x: x - other)
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, numbers.Real):
            return self._map(lambda x: x * other)
        if isinstance(other, Vector):
            return self.times_vector(other)
        if isinstance(other, Matrix):
            return self.times_matrix(other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, numbers.Real):
            return self * other
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, numbers.Real):
            divisor = np.float64(other)
            # IEEE semantics: x / 0 is +-inf or nan
            with np.errstate(divide="ignore", invalid="ignore"):
                return self._map(lambda x: float(np.float64(x) / divisor))
        return NotImplemented

    def __matmul__(self, other):
        if isinstance(other, Vector):
            return self.times_vector(other)
        if isinstance(other, Matrix):
            return self.times_matrix(other)
        return NotImplemented

    def __iadd__(self, other):
        if isinstance(other, numbers.Real):
            self._update(lambda x: x + other)
            return self
        return NotImplemented

    def __isub__(self, other):
        if isinstance(other, numbers.Real):
            self._update(lambda x: x - other)
            return self
        return NotImplemented

    def __imul__(self, other):
        if isinstance(other, numbers.Real):
            self._update(lambda x: x * other)
            return self
        return NotImplemented

    def __itruediv__(self, other):
        if isinstance(other, numbers.Real):
            divisor = np.float64(other)
            with np.errstate(divide="ignore", invalid="ignore"):
                self._update(lambda x: float(np.float64(x) / divisor))
            return self
        return NotImplemented

    # -------------------------------------------------------------------------
    # Products
    # -------------------------------------------------------------------------

    def times_vector(self, vector: Vector) -> Vector:
        """Matrix-vector product, a vector of dimension rows.

        Raises:
            DimensionMismatchError: If vector.dimension != cols.
        """
        rows, cols = self.dimension
        if vector.dimension != cols:
            raise DimensionMismatchError(
                f"Cannot multiply {rows} x {cols} matrix by vector of dimension {vector.dimension}"
            )
        m, v = self._storage, vector.storage

        def row_sum(i: int) -> float:
            total = 0.0
            for j in range(cols):
                total += m.get(i, j) * v.get(j)
            return total

        return Vector.generate(rows, row_sum, dtype=np.result_type(m.dtype, v.dtype))

    def times_matrix(self, other: 'Matrix') -> 'Matrix':
        """Matrix product, (rows x other.cols). Plain triple loop.

        Raises:
            DimensionMismatchError: If cols != other.rows.
        """
        rows, inner = self.dimension
        other_rows, cols = other.dimension
        if other_rows != inner:
            raise DimensionMismatchError(
                f"Cannot multiply {rows} x {inner} matrix by {other_rows} x {cols} matrix"
            )
        a, b = self._storage, other._storage

        def cell(i: int, j: int) -> float:
            total = 0.0
            for k in range(inner):
                total += a.get(i, k) * b.get(k, j)
            return total

        return Matrix(rows, cols, cell, dtype=np.result_type(a.dtype, b.dtype))

    # -------------------------------------------------------------------------
    # Equality and Representation
    # -------------------------------------------------------------------------

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if other.dimension != self.dimension:
            return False
        a, b = self._storage, other._storage
        rows, cols = a.dimension
        return all(a.get(i, j) == b.get(i, j) for i in range(rows) for j in range(cols))

    def __hash__(self) -> int:
        storage = self._storage
        rows, cols = storage.dimension
        total = 0
        for i in range(rows):
            total += i * sum(hash(storage.get(i, j)) for j in range(cols))
        return total

    def __str__(self) -> str:
        return '\n'.join(
            '[' + ' '.join(str(e) for e in row) + ']' for row in self.tolist()
        )

    def __repr__(self) -> str:
        kind = ", view" if self.is_view else ""
        return f"Matrix({self.dimension}{kind}, {self.tolist()})"


# =============================================================================
# Row / Column Collections
# =============================================================================

class _MatrixLinesView(ABC):
    """Indexable, iterable collection of a matrix's rows or columns.

    Indices are checked when a line is accessed, not when the collection is
    created.
    """

    __slots__ = ('_matrix',)

    def __init__(self, matrix: Matrix):
        self._matrix = matrix

    @property
    def matrix(self) -> Matrix:
        return self._matrix

    @property
    @abstractmethod
    def size(self) -> int:
        """Number of lines."""
        ...

    @property
    def indices(self) -> range:
        return range(self.size)

    def __len__(self) -> int:
        return self.size

    @abstractmethod
    def _line(self, index: int) -> Vector:
        """Aliasing vector over line ``index``, already bounds-checked."""
        ...

    @abstractmethod
    def _write(self, index: int, k: int, value: float) -> None:
        """Write element k of line ``index``."""
        ...

    def __getitem__(self, index: int) -> Vector:
        return self._line(check_index(index, self.size))

    def __setitem__(self, index: int, vector: Vector) -> None:
        """Overwrite a whole line with the elements of ``vector``."""
        index = check_index(index, self.size)
        length = self._line_length
        if vector.dimension != length:
            raise DimensionMismatchError(
                f"Cannot assign vector of dimension {vector.dimension} to a line of dimension {length}"
            )
        # Snapshot first: vector may alias the line being written
        for k, value in enumerate(vector.tolist()):
            self._write(index, k, value)

    @property
    @abstractmethod
    def _line_length(self) -> int:
        """Dimension of each line."""
        ...

    def __iter__(self) -> '_LineIterator':
        return _LineIterator(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._matrix.dimension} matrix, size={self.size})"


class MatrixRowsView(_MatrixLinesView):
    """Rows of a matrix as aliasing vectors.

    Example:
        >>> m = Matrix(2, 3)
        >>> m.rows_view()[1] += 1.0     # adds 1.0 to row 1 of m
    """

    __slots__ = ()

    @property
    def size(self) -> int:
        return self._matrix.dimension.rows

    @property
    def _line_length(self) -> int:
        return self._matrix.dimension.cols

    def _line(self, index: int) -> Vector:
        return Vector.wrap(RowStorage(self._matrix, index))

    def _write(self, index: int, k: int, value: float) -> None:
        self._matrix.storage.set(index, k, value)


class MatrixColumnsView(_MatrixLinesView):
    """Columns of a matrix as aliasing vectors."""

    __slots__ = ()

    @property
    def size(self) -> int:
        return self._matrix.dimension.cols

    @property
    def _line_length(self) -> int:
        return self._matrix.dimension.rows

    def _line(self, index: int) -> Vector:
        return Vector.wrap(ColumnStorage(self._matrix, index))

    def _write(self, index: int, k: int, value: float) -> None:
        self._matrix.storage.set(k, index, value)


class _LineIterator:
    """Iterator over a rows/columns collection, yielding aliasing vectors."""

    __slots__ = ('_lines', '_index')

    def __init__(self, lines: _MatrixLinesView):
        self._lines = lines
        self._index = 0

    def has_next(self) -> bool:
        return self._index < self._lines.size

    def __iter__(self) -> '_LineIterator':
        return self

    def __next__(self) -> Vector:
        index = self._index
        if index >= self._lines.size:
            raise IterationExhaustedError(index)
        self._index = index + 1
        return self._lines._line(index)


def _split_index(index):
    if not isinstance(index, tuple) or len(index) != 2:
        raise TypeError(f"Matrix indices must be a pair (i, j), got {index!r}")
    return index

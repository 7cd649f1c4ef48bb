"""
View Storages (Zero-Copy Aliases)

Storages that hold a reference to an owner and remap indices before
delegating to the owner's storage. Reads and writes go straight through, so
a mutation made through any alias is visible through every other alias with
no staleness window.

Views are created on demand and never cached; each one holds only the owner
reference plus any fixed coordinate. Dimensions are captured once, at
creation time.

    Storage                  Owner              get(...) forwards to
    -----------------------------------------------------------------------
    RowStorage               Matrix, row i      owner (i, k)
    ColumnStorage            Matrix, column j   owner (k, j)
    TransposeStorage         Matrix             owner (j, i)
    ColumnsAssemblyStorage   Vectors v0..vn     v_j[i]
    RowsAssemblyStorage      Vectors v0..vn     v_i[j]

Use Cases:
    - Row/column access without copying: m.rows_view()[0] *= 2
    - O(1) transpose: m.transpose_view()
    - Treating existing vectors as a matrix: matrix_of_columns_view(a, b)

Delegation skips the owner's bounds checks: the outer Vector/Matrix has
already checked the index against the view's own dimension, and the
remapping keeps it in range for the owner.
"""

from typing import Sequence, Tuple, TYPE_CHECKING

import numpy as np

from ._config import _resolve_dtype
from ._errors import DimensionMismatchError
from ._storage import MatrixDimension, MatrixStorage, Ownership, VectorStorage

if TYPE_CHECKING:
    from .matrix import Matrix
    from .vector import Vector

__all__ = [
    'RowStorage',
    'ColumnStorage',
    'TransposeStorage',
    'ColumnsAssemblyStorage',
    'RowsAssemblyStorage',
]


# =============================================================================
# Vector views over a matrix
# =============================================================================

class RowStorage(VectorStorage):
    """Row ``row`` of ``matrix`` seen as a vector of dimension cols."""

    __slots__ = ('_matrix', '_row', '_dimension')

    def __init__(self, matrix: 'Matrix', row: int):
        self._matrix = matrix
        self._row = row
        self._dimension = matrix.dimension.cols

    @property
    def source(self) -> 'Matrix':
        return self._matrix

    @property
    def row(self) -> int:
        return self._row

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def dtype(self) -> np.dtype:
        return self._matrix.dtype

    @property
    def ownership(self) -> Ownership:
        return Ownership.VIEW

    def get(self, k: int) -> float:
        return self._matrix.storage.get(self._row, k)

    def set(self, k: int, value: float) -> None:
        self._matrix.storage.set(self._row, k, value)


class ColumnStorage(VectorStorage):
    """Column ``column`` of ``matrix`` seen as a vector of dimension rows."""

    __slots__ = ('_matrix', '_column', '_dimension')

    def __init__(self, matrix: 'Matrix', column: int):
        self._matrix = matrix
        self._column = column
        self._dimension = matrix.dimension.rows

    @property
    def source(self) -> 'Matrix':
        return self._matrix

    @property
    def column(self) -> int:
        return self._column

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def dtype(self) -> np.dtype:
        return self._matrix.dtype

    @property
    def ownership(self) -> Ownership:
        return Ownership.VIEW

    def get(self, k: int) -> float:
        return self._matrix.storage.get(k, self._column)

    def set(self, k: int, value: float) -> None:
        self._matrix.storage.set(k, self._column, value)


# =============================================================================
# Matrix views
# =============================================================================

class TransposeStorage(MatrixStorage):
    """``matrix`` with rows and columns swapped."""

    __slots__ = ('_matrix', '_dimension')

    def __init__(self, matrix: 'Matrix'):
        self._matrix = matrix
        self._dimension = matrix.dimension.transposed

    @property
    def source(self) -> 'Matrix':
        return self._matrix

    @property
    def dimension(self) -> MatrixDimension:
        return self._dimension

    @property
    def dtype(self) -> np.dtype:
        return self._matrix.dtype

    @property
    def ownership(self) -> Ownership:
        return Ownership.VIEW

    def get(self, i: int, j: int) -> float:
        return self._matrix.storage.get(j, i)

    def set(self, i: int, j: int, value: float) -> None:
        self._matrix.storage.set(j, i, value)


class _AssemblyStorage(MatrixStorage):
    """Common part of the assembled-from-vectors storages."""

    __slots__ = ('_vectors', '_dimension')

    def __init__(self, vectors: Sequence['Vector'], dimension: MatrixDimension):
        self._vectors: Tuple['Vector', ...] = tuple(vectors)
        self._dimension = dimension

    @staticmethod
    def _common_dimension(vectors: Sequence['Vector'], kind: str) -> int:
        """Shared dimension of ``vectors``, 0 when there are none."""
        if not vectors:
            return 0
        expected = vectors[0].dimension
        for k, v in enumerate(vectors):
            if v.dimension != expected:
                raise DimensionMismatchError(
                    f"Cannot assemble matrix from {kind}: {kind[:-1]} 0 has dimension "
                    f"{expected} but {kind[:-1]} {k} has dimension {v.dimension}"
                )
        return expected

    @property
    def sources(self) -> Tuple['Vector', ...]:
        return self._vectors

    @property
    def dimension(self) -> MatrixDimension:
        return self._dimension

    @property
    def dtype(self) -> np.dtype:
        if not self._vectors:
            return _resolve_dtype()
        return np.result_type(*[v.dtype for v in self._vectors])

    @property
    def ownership(self) -> Ownership:
        return Ownership.VIEW


class ColumnsAssemblyStorage(_AssemblyStorage):
    """Matrix whose column j is ``vectors[j]``."""

    __slots__ = ()

    def __init__(self, vectors: Sequence['Vector']):
        rows = self._common_dimension(vectors, "columns")
        super().__init__(vectors, MatrixDimension(rows, len(vectors)))

    def get(self, i: int, j: int) -> float:
        return self._vectors[j].storage.get(i)

    def set(self, i: int, j: int, value: float) -> None:
        self._vectors[j].storage.set(i, value)


class RowsAssemblyStorage(_AssemblyStorage):
    """Matrix whose row i is ``vectors[i]``."""

    __slots__ = ()

    def __init__(self, vectors: Sequence['Vector']):
        cols = self._common_dimension(vectors, "rows")
        super().__init__(vectors, MatrixDimension(len(vectors), cols))

    def get(self, i: int, j: int) -> float:
        return self._vectors[i].storage.get(j)

    def set(self, i: int, j: int, value: float) -> None:
        self._vectors[i].storage.set(j, value)

"""
vecmath - Dense vectors and matrices with zero-copy views

Element access goes through a storage layer, so derived values can alias
their source instead of copying it:

- Rows and columns of a matrix as vectors (rows_view / columns_view)
- O(1) transposition (transpose_view)
- Matrices assembled from existing vectors (matrix_of_columns_view, ...)

Every aliasing operation has a copying counterpart (rows, columns,
transposed, matrix_of_columns, ...) that returns fully independent data.

Architecture:
    ┌──────────────────────────────────────────────┐
    │              Vector / Matrix                 │
    ├──────────────────────────────────────────────┤
    │  Storage: Dense (OWNED) | Row, Column,       │
    │           Transpose, Assembly (VIEW)         │
    └──────────────────────────────────────────────┘

Example:
    >>> from vecmath import Matrix, Vector
    >>> m = Matrix(2, 3, lambda i, j: i * 3 + j + 1)
    >>> m * Vector(-0.5, 1.5, 2.5)
    Vector([10.0 20.5])
    >>> row = m.rows_view()[0]
    >>> row *= 2.0              # doubles row 0 of m
"""

import logging

__version__ = '0.1.0'

from ._errors import (
    VecmathError,
    IndexOutOfRangeError,
    IterationExhaustedError,
    DimensionMismatchError,
    InvalidArgumentError,
    check_index,
    VECMATH_OK,
    VECMATH_ERROR_INVALID_ARGUMENT,
    VECMATH_ERROR_DIMENSION_MISMATCH,
    VECMATH_ERROR_INDEX_OUT_OF_BOUNDS,
)

from ._config import (
    RealType,
    get_config,
    get_precision,
)

from ._storage import (
    Ownership,
    MatrixDimension,
    VectorStorage,
    MatrixStorage,
)

from ._dense import DenseVectorStorage, DenseMatrixStorage

from ._views import (
    RowStorage,
    ColumnStorage,
    TransposeStorage,
    ColumnsAssemblyStorage,
    RowsAssemblyStorage,
)

from .vector import Vector, VectorIterator, dot
from .matrix import Matrix, MatrixRowsView, MatrixColumnsView
from .assembly import (
    matrix_of_columns_view,
    matrix_of_rows_view,
    matrix_of_columns,
    matrix_of_rows,
)

__all__ = [
    # Version
    '__version__',

    # Errors
    'VecmathError',
    'IndexOutOfRangeError',
    'IterationExhaustedError',
    'DimensionMismatchError',
    'InvalidArgumentError',
    'check_index',
    'VECMATH_OK',
    'VECMATH_ERROR_INVALID_ARGUMENT',
    'VECMATH_ERROR_DIMENSION_MISMATCH',
    'VECMATH_ERROR_INDEX_OUT_OF_BOUNDS',

    # Configuration
    'RealType',
    'get_config',
    'get_precision',

    # Storage
    'Ownership',
    'MatrixDimension',
    'VectorStorage',
    'MatrixStorage',
    'DenseVectorStorage',
    'DenseMatrixStorage',
    'RowStorage',
    'ColumnStorage',
    'TransposeStorage',
    'ColumnsAssemblyStorage',
    'RowsAssemblyStorage',

    # Values
    'Vector',
    'VectorIterator',
    'dot',
    'Matrix',
    'MatrixRowsView',
    'MatrixColumnsView',

    # Assembly
    'matrix_of_columns_view',
    'matrix_of_rows_view',
    'matrix_of_columns',
    'matrix_of_rows',
]

logging.getLogger("vecmath").addHandler(logging.NullHandler())

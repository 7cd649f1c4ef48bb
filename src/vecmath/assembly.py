"""
Assembling matrices from vectors.

The ``*_view`` functions build a matrix whose cells forward to the supplied
vectors, so writes flow both ways. The plain functions return an
independent copy.

All vectors must share one dimension; with no vectors the result is 0 x 0.

Example:
    >>> a, b = Vector(1, 2, 3), Vector(4, 5, 6)
    >>> m = matrix_of_columns_view(a, b)    # 3 x 2, aliases a and b
    >>> a[0] = 10.0
    >>> m[0, 0]
    10.0
"""

import logging

from ._views import ColumnsAssemblyStorage, RowsAssemblyStorage
from .matrix import Matrix
from .vector import Vector

__all__ = [
    'matrix_of_columns_view',
    'matrix_of_rows_view',
    'matrix_of_columns',
    'matrix_of_rows',
]

logger = logging.getLogger("vecmath.assembly")


def matrix_of_columns_view(*columns: Vector) -> Matrix:
    """Matrix whose column j aliases ``columns[j]``.

    Raises:
        DimensionMismatchError: If the columns differ in dimension.
    """
    matrix = Matrix.wrap(ColumnsAssemblyStorage(columns))
    logger.debug(f"Assembled {matrix.dimension} matrix view from {len(columns)} columns")
    return matrix


def matrix_of_rows_view(*rows: Vector) -> Matrix:
    """Matrix whose row i aliases ``rows[i]``.

    Raises:
        DimensionMismatchError: If the rows differ in dimension.
    """
    matrix = Matrix.wrap(RowsAssemblyStorage(rows))
    logger.debug(f"Assembled {matrix.dimension} matrix view from {len(rows)} rows")
    return matrix


def matrix_of_columns(*columns: Vector) -> Matrix:
    """Independent matrix whose columns are copies of ``columns``."""
    return matrix_of_columns_view(*columns).copy()


def matrix_of_rows(*rows: Vector) -> Matrix:
    """Independent matrix whose rows are copies of ``rows``."""
    return matrix_of_rows_view(*rows).copy()

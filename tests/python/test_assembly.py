"""
Tests for assembling matrices from vectors.
"""

import numpy as np
import pytest

from vecmath import (
    ColumnsAssemblyStorage,
    DimensionMismatchError,
    Matrix,
    MatrixDimension,
    Ownership,
    RowsAssemblyStorage,
    Vector,
    matrix_of_columns,
    matrix_of_columns_view,
    matrix_of_rows,
    matrix_of_rows_view,
)
from assertions import assert_matrix_rows, assert_vector_elements


@pytest.fixture
def a():
    return Vector(1.0, 2.0, 3.0)


@pytest.fixture
def b():
    return Vector(4.0, 5.0, 6.0)


class TestMatrixOfColumnsView:
    """Test matrix_of_columns_view()."""

    def test_layout(self, a, b):
        """Column j of the result is the j-th vector."""
        m = matrix_of_columns_view(a, b)
        assert m.dimension == MatrixDimension(3, 2)
        assert_matrix_rows(m, [1.0, 4.0], [2.0, 5.0], [3.0, 6.0])
        assert m.ownership == Ownership.VIEW
        assert isinstance(m.storage, ColumnsAssemblyStorage)
        assert m.storage.sources == (a, b)

    def test_aliases_both_ways(self, a, b):
        """Writes through the matrix reach the vectors and vice versa."""
        m = matrix_of_columns_view(a, b)
        m[2, 1] = -6.0
        assert_vector_elements(b, 4.0, 5.0, -6.0)
        a *= 10.0
        assert_matrix_rows(m, [10.0, 4.0], [20.0, 5.0], [30.0, -6.0])

    def test_over_row_views(self, m23):
        """Assembling from row views of a matrix yields its transpose, still aliased."""
        rows = m23.rows_view()
        m = matrix_of_columns_view(rows[0], rows[1])
        assert m == m23.transposed()
        m[0, 1] = 0.0
        assert m23[1, 0] == 0.0

    def test_dimension_mismatch(self, a):
        """All columns must share one dimension."""
        with pytest.raises(DimensionMismatchError, match="column 1 has dimension 2"):
            matrix_of_columns_view(a, Vector(1.0, 2.0))

    def test_no_columns(self):
        """No vectors gives a 0 x 0 matrix."""
        m = matrix_of_columns_view()
        assert m.dimension == MatrixDimension(0, 0)
        assert m == Matrix(0, 0)

    def test_products(self, a, b):
        """An assembled matrix multiplies like any other."""
        m = matrix_of_columns_view(a, b)
        assert_vector_elements(m * Vector(1.0, -1.0), -3.0, -3.0, -3.0)
        assert_vector_elements(m.transpose_view() * Vector(1.0, 0.0, 0.0), 1.0, 4.0)


class TestMatrixOfRowsView:
    """Test matrix_of_rows_view()."""

    def test_layout(self, a, b):
        """Row i of the result is the i-th vector."""
        m = matrix_of_rows_view(a, b)
        assert m.dimension == MatrixDimension(2, 3)
        assert_matrix_rows(m, [1.0, 2.0, 3.0], [4.0, 5.0, 6.0])
        assert isinstance(m.storage, RowsAssemblyStorage)
        assert m.is_view

    def test_aliases_both_ways(self, a, b):
        """Writes through the matrix reach the vectors and vice versa."""
        m = matrix_of_rows_view(a, b)
        m /= 2.0
        assert_vector_elements(a, 0.5, 1.0, 1.5)
        b[0] = 0.0
        assert m[1, 0] == 0.0

    def test_same_vector_twice(self, a):
        """A vector may be used for several rows; they alias each other."""
        m = matrix_of_rows_view(a, a)
        m[0, 0] = 9.0
        assert m[1, 0] == 9.0

    def test_dimension_mismatch(self, a):
        """All rows must share one dimension."""
        with pytest.raises(DimensionMismatchError, match="row 0 has dimension 3 but row 2"):
            matrix_of_rows_view(a, a, Vector())

    def test_mixed_precision(self):
        """The dtype of an assembly is the promoted dtype of its vectors."""
        m = matrix_of_rows_view(Vector(1.0, dtype='f32'), Vector(2.0, dtype='f64'))
        assert m.dtype == np.float64
        m32 = matrix_of_rows_view(Vector(1.0, dtype='f32'))
        assert m32.dtype == np.float32


class TestCopyingAssembly:
    """Test matrix_of_columns() and matrix_of_rows()."""

    def test_columns_copy(self, a, b):
        """The copy has the same layout and does not alias."""
        m = matrix_of_columns(a, b)
        assert m == matrix_of_columns_view(a, b)
        assert m.ownership == Ownership.OWNED
        a[0] = 100.0
        m[1, 1] = 100.0
        assert m[0, 0] == 1.0
        assert_vector_elements(b, 4.0, 5.0, 6.0)

    def test_rows_copy(self, a, b):
        """matrix_of_rows() is the transpose of matrix_of_columns()."""
        m = matrix_of_rows(a, b)
        assert_matrix_rows(m, [1.0, 2.0, 3.0], [4.0, 5.0, 6.0])
        assert m == matrix_of_columns(a, b).transposed()
        b *= 0.0
        assert m[1, 2] == 6.0

    def test_copy_dimension_mismatch(self, a):
        """Copying assembly validates like the view variants."""
        with pytest.raises(DimensionMismatchError):
            matrix_of_rows(a, Vector(1.0))
        with pytest.raises(DimensionMismatchError):
            matrix_of_columns(Vector(1.0), a)

    def test_empty(self):
        """No vectors gives an owned 0 x 0 matrix."""
        m = matrix_of_rows()
        assert m.dimension == MatrixDimension(0, 0)
        assert not m.is_view

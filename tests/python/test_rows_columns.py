"""
Tests for row and column views (MatrixRowsView, MatrixColumnsView).
"""

import pytest

from vecmath import (
    DimensionMismatchError,
    IndexOutOfRangeError,
    Matrix,
    MatrixColumnsView,
    MatrixRowsView,
    Ownership,
    Vector,
)
from vecmath.matrix import _MatrixLinesView
from assertions import assert_matrix_rows, assert_vector_elements


class TestRowsView:
    """Test rows_view()."""

    def test_construct(self, m23):
        """The collection exposes size, indices and the rows."""
        view = m23.rows_view()
        assert isinstance(view, MatrixRowsView)
        assert view.matrix is m23
        assert view.size == 2
        assert len(view) == 2
        assert view.indices == range(2)
        assert list(view) == [Vector(1.0, 2.0, 3.0), Vector(4.0, 5.0, 6.0)]

    @pytest.mark.parametrize("index", [-1, 2])
    def test_get_checks_bounds(self, index):
        """Row indices are checked on access."""
        view = Matrix(2, 3).rows_view()
        with pytest.raises(IndexOutOfRangeError, match=f"^Index out of range: {index}$"):
            view[index]

    @pytest.mark.parametrize("index", [-1, 2])
    def test_set_checks_bounds(self, index):
        """Row indices are checked on assignment."""
        view = Matrix(2, 3).rows_view()
        with pytest.raises(IndexOutOfRangeError, match=f"^Index out of range: {index}$"):
            view[index] = Vector(0.0, 0.0, 0.0)

    def test_collection_bounds_checked_lazily(self):
        """Creating the collection of an empty matrix is fine; access is not."""
        view = Matrix(0, 3).rows_view()
        assert view.size == 0
        with pytest.raises(IndexOutOfRangeError):
            view[0]

    def test_iterator(self, m23):
        """The iterator yields every row then fails with the next index."""
        it = iter(m23.rows_view())
        assert it.has_next()
        assert next(it) == Vector(1.0, 2.0, 3.0)
        assert it.has_next()
        assert next(it) == Vector(4.0, 5.0, 6.0)
        assert not it.has_next()
        with pytest.raises(IndexOutOfRangeError, match="Index out of range: 2"):
            next(it)

    def test_matrix_mutation_visible(self, m23):
        """Modifying the matrix is visible through the rows view."""
        view = m23.rows_view()
        m23 *= -1.5
        assert list(view) == [Vector(-1.5, -3.0, -4.5), Vector(-6.0, -7.5, -9.0)]

    def test_row_mutation_visible(self, m23):
        """Modifying a row vector modifies the matrix."""
        row = m23.rows_view()[1]
        assert row.ownership == Ownership.VIEW
        row[0] = 40.0
        row += 1.0
        assert_matrix_rows(m23, [1.0, 2.0, 3.0], [41.0, 6.0, 7.0])

    def test_augmented_assignment_on_item(self, m23):
        """view[i] *= d scales row i of the matrix."""
        view = m23.rows_view()
        view[0] *= 2.0
        assert_matrix_rows(m23, [2.0, 4.0, 6.0], [4.0, 5.0, 6.0])

    def test_set_row(self, m23):
        """Assigning a vector overwrites the whole row."""
        view = m23.rows_view()
        view[0] = Vector(7.0, 8.0, 9.0)
        assert_matrix_rows(m23, [7.0, 8.0, 9.0], [4.0, 5.0, 6.0])

    def test_set_row_dimension_mismatch(self, m23):
        """The assigned vector must have cols elements."""
        with pytest.raises(DimensionMismatchError):
            m23.rows_view()[0] = Vector(1.0, 2.0)

    def test_set_row_from_aliasing_vector(self):
        """Row assignment works when the source aliases the target."""
        m = Matrix.from_rows([[1.0, 2.0], [3.0, 4.0]])
        m.rows_view()[0] = m.columns_view()[0]
        assert_matrix_rows(m, [1.0, 3.0], [3.0, 4.0])

    def test_rows_is_a_copy(self, m23):
        """rows() returns independent vectors."""
        rows = m23.rows()
        assert rows == [Vector(1.0, 2.0, 3.0), Vector(4.0, 5.0, 6.0)]
        rows[0] *= 10.0
        m23[1, 0] = 0.0
        assert_matrix_rows(m23, [1.0, 2.0, 3.0], [0.0, 5.0, 6.0])
        assert_vector_elements(rows[1], 4.0, 5.0, 6.0)
        assert all(r.ownership == Ownership.OWNED for r in rows)


class TestColumnsView:
    """Test columns_view()."""

    def test_construct(self, m23):
        """The collection exposes size, indices and the columns."""
        view = m23.columns_view()
        assert isinstance(view, MatrixColumnsView)
        assert view.size == 3
        assert view.indices == range(3)
        assert list(view) == [Vector(1.0, 4.0), Vector(2.0, 5.0), Vector(3.0, 6.0)]

    @pytest.mark.parametrize("index", [-1, 3])
    def test_get_checks_bounds(self, index):
        """Column indices are checked on access."""
        view = Matrix(2, 3).columns_view()
        with pytest.raises(IndexOutOfRangeError, match=f"^Index out of range: {index}$"):
            view[index]
        with pytest.raises(IndexOutOfRangeError, match=f"^Index out of range: {index}$"):
            view[index] = Vector(0.0, 0.0)

    def test_column_element_bounds(self, m23):
        """A column vector is checked against the row count."""
        column = m23.columns_view()[0]
        assert column.dimension == 2
        with pytest.raises(IndexOutOfRangeError, match="Index out of range: 2"):
            column[2]

    def test_iterator(self, m23):
        """The iterator fails past the last column."""
        it = iter(m23.columns_view())
        assert [next(it) for _ in range(3)] == [Vector(1.0, 4.0), Vector(2.0, 5.0), Vector(3.0, 6.0)]
        with pytest.raises(IndexOutOfRangeError, match="Index out of range: 3"):
            next(it)

    def test_mutation_both_ways(self, m23):
        """Column vectors and the matrix share elements."""
        column = m23.columns_view()[2]
        column -= 3.0
        assert_matrix_rows(m23, [1.0, 2.0, 0.0], [4.0, 5.0, 3.0])
        m23[0, 2] = 11.0
        assert_vector_elements(column, 11.0, 3.0)

    def test_set_column(self, m23):
        """Assigning a vector overwrites the whole column."""
        m23.columns_view()[1] = Vector(-1.0, -2.0)
        assert_matrix_rows(m23, [1.0, -1.0, 3.0], [4.0, -2.0, 6.0])

    def test_columns_is_a_copy(self, m23):
        """columns() returns independent vectors."""
        columns = m23.columns()
        columns[0][0] = 100.0
        assert m23[0, 0] == 1.0

    def test_column_of_transpose_is_row(self, m23):
        """Views compose: column i of the transpose aliases row i."""
        column = m23.transpose_view().columns_view()[1]
        assert column == Vector(4.0, 5.0, 6.0)
        column[2] = 0.5
        assert m23[1, 2] == 0.5

    def test_column_arithmetic(self, m23):
        """Column views take part in products like any vector."""
        assert m23.columns_view()[0].dot(m23.columns_view()[1]) == 1.0 * 2.0 + 4.0 * 5.0
        assert Matrix(2, 2, lambda i, j: 1.0) * m23.columns_view()[2] == Vector(9.0, 9.0)


class TestLinesViewBase:
    """Test the shared base of the rows and columns collections."""

    def test_base_is_abstract(self, m23):
        """Only the concrete rows/columns collections can be created."""
        with pytest.raises(TypeError):
            _MatrixLinesView(m23)

    def test_subclass_must_define_lines(self, m23):
        """A subclass missing the line accessors cannot be instantiated."""

        class SizeOnly(_MatrixLinesView):
            __slots__ = ()

            @property
            def size(self):
                return 1

        with pytest.raises(TypeError):
            SizeOnly(m23)

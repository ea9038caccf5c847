"""Tests for the Matrix entity and matrix multiplication."""
import numpy as np
import pytest

from src.domain.entities.matrix import Matrix, Order
from src.domain.entities.tensor import Tensor
from src.domain.errors import ConstructionError, OutOfBoundsError, ShapeMismatchError


class TestConstruction:
    """Tests for building matrices."""

    def test_from_buffer(self):
        matrix = Matrix.from_buffer(Order.ROW_MAJOR, range(1, 7), 3, 2)
        assert matrix.shape == (3, 2)
        assert matrix.n_rows == 3
        assert matrix.n_cols == 2
        assert matrix.order is Order.ROW_MAJOR

    def test_buffer_length_must_match(self):
        with pytest.raises(ConstructionError):
            Matrix.from_buffer(Order.ROW_MAJOR, range(5), 3, 2)

    @pytest.mark.parametrize("n_rows, n_cols", [(0, 2), (2, 0), (0, 0)])
    def test_dimensions_must_be_positive(self, n_rows, n_cols):
        with pytest.raises(ConstructionError):
            Matrix.zeros(Order.COLUMN_MAJOR, n_rows, n_cols)

    def test_identity(self):
        identity = Matrix.identity(3)
        for i in range(3):
            for j in range(3):
                assert identity.get(i, j) == (1.0 if i == j else 0.0)

    def test_constructor_converts_list(self):
        matrix = Matrix(Order.ROW_MAJOR, [1, 2, 3, 4], 2, 2)
        assert matrix.as_slice().dtype == np.float32
        assert matrix.get(1, 0) == 3.0

    def test_satisfies_tensor_protocol(self):
        assert isinstance(Matrix.zeros(Order.ROW_MAJOR, 1, 1), Tensor)


class TestStorageOrder:
    """Tests for get/set under both storage orders."""

    def test_get_row_major(self):
        rm = Matrix.from_buffer(Order.ROW_MAJOR, range(1, 7), 3, 2)
        assert rm.get(0, 0) == 1.0
        assert rm.get(0, 1) == 2.0
        assert rm.get(1, 0) == 3.0
        assert rm.get(1, 1) == 4.0
        assert rm.get(2, 0) == 5.0
        assert rm.get(2, 1) == 6.0

    def test_get_column_major(self):
        cm = Matrix.from_buffer(Order.COLUMN_MAJOR, range(1, 7), 3, 2)
        assert cm.get(0, 0) == 1.0
        assert cm.get(0, 1) == 4.0
        assert cm.get(1, 0) == 2.0
        assert cm.get(1, 1) == 5.0
        assert cm.get(2, 0) == 3.0
        assert cm.get(2, 1) == 6.0

    @pytest.mark.parametrize(
        "order, expected",
        [
            (Order.ROW_MAJOR, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]),
            (Order.COLUMN_MAJOR, [1.0, 3.0, 5.0, 2.0, 4.0, 6.0]),
        ],
    )
    def test_set_physical_layout(self, order, expected):
        matrix = Matrix.zeros(order, 3, 2)
        matrix.set(0, 0, 1.0)
        matrix.set(0, 1, 2.0)
        matrix.set(1, 0, 3.0)
        matrix.set(1, 1, 4.0)
        matrix.set(2, 0, 5.0)
        matrix.set(2, 1, 6.0)
        np.testing.assert_allclose(matrix.as_slice(), expected, atol=1e-6)

    @pytest.mark.parametrize("order", list(Order))
    def test_set_then_get_round_trip(self, order):
        matrix = Matrix.from_buffer(order, range(12), 3, 4)
        before = {(i, j): matrix.get(i, j) for i in range(3) for j in range(4)}

        matrix.set(1, 2, -7.5)

        for (i, j), value in before.items():
            if (i, j) == (1, 2):
                assert matrix.get(i, j) == -7.5
            else:
                assert matrix.get(i, j) == value

    @pytest.mark.parametrize("order", list(Order))
    def test_out_of_bounds(self, order):
        matrix = Matrix.zeros(order, 3, 2)
        with pytest.raises(OutOfBoundsError, match="Row 3"):
            matrix.get(3, 0)
        with pytest.raises(OutOfBoundsError, match="Column 2"):
            matrix.set(0, 2, 1.0)

    @pytest.mark.parametrize("order", list(Order))
    def test_row(self, order):
        """row() returns the logical row whatever the storage order."""
        matrix = Matrix.zeros(order, 2, 3)
        for j, value in enumerate([7.0, 8.0, 9.0]):
            matrix.set(1, j, value)
        assert matrix.row(1).tolist() == [7.0, 8.0, 9.0]
        assert matrix.row(0).tolist() == [0.0, 0.0, 0.0]

    def test_row_out_of_bounds(self):
        with pytest.raises(OutOfBoundsError):
            Matrix.zeros(Order.ROW_MAJOR, 2, 3).row(2)


class TestMatmul:
    """Tests for the reference matrix multiplication."""

    def test_concrete_example(self, matrix_1_to_9, matrix_1_to_6):
        result = matrix_1_to_9.matmul(matrix_1_to_6)
        assert result.shape == (3, 2)
        assert result.order is Order.ROW_MAJOR
        np.testing.assert_allclose(
            result.as_slice(), [22.0, 28.0, 49.0, 64.0, 76.0, 100.0], atol=1e-6
        )

    def test_matmul_operator(self, matrix_1_to_9, matrix_1_to_6):
        result = matrix_1_to_9 @ matrix_1_to_6
        assert result.get(2, 1) == 100.0

    def test_operand_order_is_irrelevant(self, matrix_1_to_6):
        """A column-major copy of the left operand gives the same product."""
        column_major = Matrix.zeros(Order.COLUMN_MAJOR, 3, 3)
        for i in range(3):
            for j in range(3):
                column_major.set(i, j, float(i * 3 + j + 1))

        result = column_major.matmul(matrix_1_to_6)
        np.testing.assert_allclose(
            result.as_slice(), [22.0, 28.0, 49.0, 64.0, 76.0, 100.0], atol=1e-6
        )

    @pytest.mark.parametrize("order", list(Order))
    def test_identity_property(self, order, rng):
        """matmul(A, I) equals A."""
        a = Matrix.from_buffer(order, rng.standard_normal(4 * 5), 4, 5)
        result = a.matmul(Matrix.identity(5, order))
        for i in range(4):
            for j in range(5):
                assert result.get(i, j) == pytest.approx(a.get(i, j), abs=1e-6)

    def test_agrees_with_numpy(self, rng):
        a = rng.standard_normal((4, 3)).astype(np.float32)
        b = rng.standard_normal((3, 5)).astype(np.float32)
        result = Matrix.from_buffer(Order.ROW_MAJOR, a.ravel(), 4, 3).matmul(
            Matrix.from_buffer(Order.ROW_MAJOR, b.ravel(), 3, 5)
        )
        np.testing.assert_allclose(result.as_slice(), (a @ b).ravel(), atol=1e-4)

    def test_inner_dimension_mismatch(self, matrix_1_to_6):
        with pytest.raises(ShapeMismatchError):
            matrix_1_to_6.matmul(matrix_1_to_6)


class TestElementwiseMultiply:
    """Tests for element-wise matrix products."""

    def test_mul(self, matrix_1_to_6):
        product = matrix_1_to_6 * matrix_1_to_6
        assert product.as_slice().tolist() == [1.0, 4.0, 9.0, 16.0, 25.0, 36.0]

    def test_in_place_mul(self):
        a = Matrix.from_buffer(Order.COLUMN_MAJOR, [1.0, -2.0, -3.0, 4.0], 2, 2)
        b = Matrix.from_buffer(Order.COLUMN_MAJOR, [2.0, 4.0, -2.0, 0.5], 2, 2)
        a *= b
        assert a.as_slice().tolist() == [2.0, -8.0, 6.0, 2.0]

    def test_shape_mismatch(self, matrix_1_to_6):
        with pytest.raises(ShapeMismatchError):
            matrix_1_to_6 * Matrix.zeros(Order.ROW_MAJOR, 2, 3)

    def test_order_mismatch(self, matrix_1_to_6):
        with pytest.raises(ShapeMismatchError, match="Storage orders"):
            matrix_1_to_6 * Matrix.zeros(Order.COLUMN_MAJOR, 3, 2)

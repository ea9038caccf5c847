"""Dense two-dimensional storage with an explicit storage order."""
from __future__ import annotations

from enum import Enum

import numpy as np

from src.domain.entities.array import DTYPE, to_buffer, read_only_view
from src.domain.errors import ConstructionError, OutOfBoundsError, ShapeMismatchError


class Order(Enum):
    """Matrix storage orders."""

    ROW_MAJOR = "row-major"
    COLUMN_MAJOR = "column-major"

    def __str__(self) -> str:
        return self.value


class Matrix:
    """
    A matrix of float32 values stored in row-major or column-major order.

    The order only changes how (row, col) maps onto the buffer; ``get`` and
    ``set`` have the same logical meaning for both orders.
    """

    __slots__ = ("_order", "_data", "_n_rows", "_n_cols")

    def __init__(self, order: Order, data: np.ndarray, n_rows: int, n_cols: int):
        """
        Wrap an owned buffer; prefer ``from_buffer``, ``zeros`` or ``identity``.

        Parameters
        ----------
        order : Order
            Storage order of ``data``.
        data : np.ndarray
            Flat buffer of ``n_rows * n_cols`` elements. Stored without a copy
            when it is already a float32 array, converted otherwise.
        n_rows : int
            Number of rows, strictly positive.
        n_cols : int
            Number of columns, strictly positive.

        Raises
        ------
        ConstructionError
            If a dimension is not positive or the buffer length is wrong.
        """
        if n_rows <= 0 or n_cols <= 0:
            raise ConstructionError(
                f"Matrix dimensions must be positive, got {n_rows}x{n_cols}"
            )
        data = to_buffer(data, copy=False)
        if len(data) != n_rows * n_cols:
            raise ConstructionError(
                f"Matrix size {n_rows * n_cols} does not correspond to buffer size {len(data)}"
            )
        self._order = Order(order)
        self._data = data
        self._n_rows = n_rows
        self._n_cols = n_cols

    @classmethod
    def from_buffer(cls, order: Order, data, n_rows: int, n_cols: int) -> "Matrix":
        """Build a matrix from a flat sequence laid out in ``order``."""
        return cls(order, to_buffer(data), n_rows, n_cols)

    @classmethod
    def zeros(cls, order: Order, n_rows: int, n_cols: int) -> "Matrix":
        """Build a zero-filled matrix."""
        if n_rows <= 0 or n_cols <= 0:
            raise ConstructionError(
                f"Matrix dimensions must be positive, got {n_rows}x{n_cols}"
            )
        return cls(order, np.zeros(n_rows * n_cols, dtype=DTYPE), n_rows, n_cols)

    @classmethod
    def identity(cls, n: int, order: Order = Order.ROW_MAJOR) -> "Matrix":
        """Build the n x n identity matrix."""
        matrix = cls.zeros(order, n, n)
        for i in range(n):
            matrix.set(i, i, 1.0)
        return matrix

    @property
    def order(self) -> Order:
        return self._order

    @property
    def n_rows(self) -> int:
        return self._n_rows

    @property
    def n_cols(self) -> int:
        return self._n_cols

    @property
    def shape(self) -> tuple[int, int]:
        return (self._n_rows, self._n_cols)

    def as_slice(self) -> np.ndarray:
        """Read-only view of the buffer in its physical (storage order) layout."""
        return read_only_view(self._data)

    def _index(self, row: int, col: int) -> int:
        if not 0 <= row < self._n_rows:
            raise OutOfBoundsError(f"Row {row} >= bound {self._n_rows}")
        if not 0 <= col < self._n_cols:
            raise OutOfBoundsError(f"Column {col} >= bound {self._n_cols}")

        if self._order is Order.ROW_MAJOR:
            return row * self._n_cols + col
        return col * self._n_rows + row

    def get(self, row: int, col: int) -> float:
        return float(self._data[self._index(row, col)])

    def set(self, row: int, col: int, value: float) -> None:
        self._data[self._index(row, col)] = value

    def row(self, row: int) -> np.ndarray:
        """
        Copy a logical row out of the matrix.

        Parameters
        ----------
        row : int
            Row number.

        Returns
        -------
        np.ndarray
            float32 vector of length ``n_cols``.
        """
        if not 0 <= row < self._n_rows:
            raise OutOfBoundsError(f"Row {row} >= bound {self._n_rows}")
        if self._order is Order.ROW_MAJOR:
            start = row * self._n_cols
            return self._data[start:start + self._n_cols].copy()
        return self._data[row::self._n_rows].copy()

    def matmul(self, other: "Matrix") -> "Matrix":
        """
        Multiply this matrix by ``other``.

        Cells are read through ``get``, so the storage orders of the
        operands do not affect the result.

        Parameters
        ----------
        other : Matrix
            Right-hand operand with ``other.n_rows == self.n_cols``.

        Returns
        -------
        Matrix
            New row-major matrix of shape ``(self.n_rows, other.n_cols)``.

        Raises
        ------
        ShapeMismatchError
            If the inner dimensions differ.
        """
        if self._n_cols != other._n_rows:
            raise ShapeMismatchError(
                f"Cannot multiply {self._n_rows}x{self._n_cols} matrix by "
                f"{other._n_rows}x{other._n_cols} matrix"
            )

        product = Matrix.zeros(Order.ROW_MAJOR, self._n_rows, other._n_cols)

        for i in range(self._n_rows):
            for j in range(other._n_cols):
                total = DTYPE(0.0)
                for k in range(self._n_cols):
                    total += DTYPE(self.get(i, k)) * DTYPE(other.get(k, j))
                product.set(i, j, total)

        return product

    def __matmul__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.matmul(other)

    def _check_same_layout(self, other: "Matrix") -> None:
        if self.shape != other.shape:
            raise ShapeMismatchError(
                f"Shapes of multiplied matrices should be the same: {self.shape} != {other.shape}"
            )
        # Element-wise products pair buffer positions, not logical cells.
        if self._order is not other._order:
            raise ShapeMismatchError(
                f"Storage orders of multiplied matrices should be the same: "
                f"{self._order} != {other._order}"
            )

    def __mul__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_layout(other)
        return Matrix(
            self._order,
            np.multiply(self._data, other._data, dtype=DTYPE),
            self._n_rows,
            self._n_cols,
        )

    def __imul__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_layout(other)
        np.multiply(self._data, other._data, out=self._data)
        return self

    def __repr__(self) -> str:
        return (
            f"Matrix(order={self._order}, n_rows={self._n_rows}, "
            f"n_cols={self._n_cols}, data={self._data.tolist()})"
        )

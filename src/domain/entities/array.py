"""Dense row-major storage for tensors of rank 0 to 3."""
from __future__ import annotations

from typing import Sequence

import numpy as np

from src.domain.entities.shape import Shape
from src.domain.errors import ConstructionError, LengthMismatchError, ShapeMismatchError

DTYPE = np.float32


def to_buffer(data, copy: bool = True) -> np.ndarray:
    """
    Convert ``data`` to a flat float32 buffer.

    With ``copy=False`` a float32 numpy array is returned as is; any other
    input is still converted into a new buffer.
    """
    buffer = np.array(data, dtype=DTYPE) if copy else np.asarray(data, dtype=DTYPE)
    if buffer.ndim != 1:
        raise ConstructionError(
            f"Buffer must be one-dimensional, got {buffer.ndim} dimensions"
        )
    return buffer


def read_only_view(buffer: np.ndarray) -> np.ndarray:
    view = buffer.view()
    view.flags.writeable = False
    return view


class Array:
    """
    A tensor of rank 0 to 3 backed by one contiguous float32 buffer.

    The shape is fixed once constructed. Elements are laid out in row-major
    order and are mutated only through ``set`` or in-place multiplication.
    """

    __slots__ = ("_dims", "_data")

    def __init__(self, shape: Shape | Sequence[int], data: np.ndarray):
        """
        Wrap an owned buffer; prefer ``from_buffer`` or ``zeros``.

        Parameters
        ----------
        shape : Shape | Sequence[int]
            Extents of the tensor; every extent must be positive.
        data : np.ndarray
            Flat buffer of exactly ``shape.size`` elements. Stored without a
            copy when it is already a float32 array, converted otherwise.

        Raises
        ------
        ConstructionError
            If an extent is zero or the buffer length does not match the shape size.
        """
        dims = Shape.of(shape)
        data = to_buffer(data, copy=False)
        if len(data) != dims.size:
            raise ConstructionError(
                f"Shape size {dims.size} does not correspond to buffer size {len(data)}"
            )
        self._dims = dims
        self._data = data

    @classmethod
    def from_buffer(cls, shape: Shape | Sequence[int], data) -> "Array":
        """
        Build an array from a flat sequence of values in row-major order.

        Parameters
        ----------
        shape : Shape | Sequence[int]
            Extents of the tensor.
        data : Sequence[float] | np.ndarray
            Values; copied into a new float32 buffer.

        Returns
        -------
        Array
            Array owning a copy of ``data``.
        """
        return cls(shape, to_buffer(data))

    @classmethod
    def zeros(cls, shape: Shape | Sequence[int]) -> "Array":
        """Build a zero-filled array of the given shape."""
        dims = Shape.of(shape)
        return cls(dims, np.zeros(dims.size, dtype=DTYPE))

    @property
    def shape(self) -> tuple[int, ...]:
        return self._dims.extents

    @property
    def dims(self) -> Shape:
        return self._dims

    @property
    def rank(self) -> int:
        return self._dims.rank

    @property
    def size(self) -> int:
        return self._dims.size

    def __len__(self) -> int:
        return self.size

    def as_slice(self) -> np.ndarray:
        """Read-only view of the buffer in its physical layout."""
        return read_only_view(self._data)

    def get(self, index: Sequence[int]) -> float:
        """Return the element at ``index``; raises ``OutOfBoundsError`` if invalid."""
        return float(self._data[self._dims.linear_offset(index)])

    def set(self, index: Sequence[int], value: float) -> None:
        """Store ``value`` at ``index``; raises ``OutOfBoundsError`` if invalid."""
        self._data[self._dims.linear_offset(index)] = value

    def _check_same_shape(self, other: "Array") -> None:
        if self._dims != other._dims:
            raise ShapeMismatchError(
                "Shapes of multiplied tensors should be the same: "
                f"{self.shape} != {other.shape}"
            )

    def __mul__(self, other: "Array") -> "Array":
        if not isinstance(other, Array):
            return NotImplemented
        self._check_same_shape(other)
        return Array(self._dims, np.multiply(self._data, other._data, dtype=DTYPE))

    def __imul__(self, other: "Array") -> "Array":
        if not isinstance(other, Array):
            return NotImplemented
        self._check_same_shape(other)
        np.multiply(self._data, other._data, out=self._data)
        return self

    def dot(self, other: "Array") -> "Array":
        """
        Inner product of two vectors, or product of two rank-2 arrays.

        Parameters
        ----------
        other : Array
            Right-hand operand of the same rank, 1 or 2.

        Returns
        -------
        Array
            A rank-0 array holding the inner product of two vectors, or a
            new ``(n, p)`` array for an ``(n, m)`` by ``(m, p)`` product.

        Raises
        ------
        LengthMismatchError
            If two vectors differ in length.
        ShapeMismatchError
            If the ranks differ or are not 1 or 2, or if the inner
            dimensions of a rank-2 product differ.
        """
        if self.rank != other.rank or self.rank not in (1, 2):
            raise ShapeMismatchError(
                f"Cannot take the dot product of shapes {self.shape} and {other.shape}"
            )

        if self.rank == 1:
            if self.size != other.size:
                raise LengthMismatchError(
                    f"Vectors must have the same length, got {self.size} and {other.size}"
                )
            total = DTYPE(0.0)
            for a, b in zip(self._data, other._data):
                total += a * b
            return Array.from_buffer((), [total])

        n_rows, inner = self.shape
        if other.shape[0] != inner:
            raise ShapeMismatchError(
                f"Cannot multiply {self.shape} array by {other.shape} array"
            )
        n_cols = other.shape[1]

        product = Array.zeros((n_rows, n_cols))
        for i in range(n_rows):
            for j in range(n_cols):
                total = DTYPE(0.0)
                for k in range(inner):
                    total += DTYPE(self.get((i, k))) * DTYPE(other.get((k, j)))
                product.set((i, j), total)
        return product

    def __repr__(self) -> str:
        return f"Array(shape={self.shape}, data={self._data.tolist()})"

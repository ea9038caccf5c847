"""Vector norms and Euclidean distances built on the reduction kernels."""
import math
from enum import Enum

import numpy as np

from src.domain.entities.array import Array
from src.domain.entities.matrix import Matrix, Order
from src.domain.errors import ShapeMismatchError
from src.domain.interfaces.reduction_kernel import ReductionKernel
from src.infrastructure.kernels.dispatch import get_default_kernel
from src.infrastructure.kernels.scalar import as_operands, as_vector


class Norm(Enum):
    """Supported vector norms."""

    L1 = "l1"
    L2 = "l2"
    INFINITY = "infinity"


def norm(vector, kind: Norm, kernel: ReductionKernel | None = None) -> float:
    """
    Compute a norm of a vector.

    Arrays and matrices are treated as the flat sequence of their buffer.

    Parameters
    ----------
    vector : Array | Matrix | array-like
        Values to measure.
    kind : Norm
        Which norm to compute.
    kernel : ReductionKernel | None
        Kernel used for the L2 sum of squares; the default kernel when None.

    Returns
    -------
    float
        The norm.

    Raises
    ------
    ValueError
        For the infinity norm of an empty vector.
    """
    values = as_vector(vector)
    kind = Norm(kind)

    if kind is Norm.L1:
        total = np.float32(0.0)
        for value in np.abs(values):
            total += value
        return float(total)

    if kind is Norm.L2:
        if kernel is None:
            kernel = get_default_kernel()
        return math.sqrt(kernel.squared_norm(values))

    if values.size == 0:
        raise ValueError("The infinity norm of an empty vector is undefined")
    return float(np.max(np.abs(values)))


def frobenius_norm(matrix: Matrix, kernel: ReductionKernel | None = None) -> float:
    """
    Compute the Frobenius norm of a matrix.

    The sum of squares does not depend on the storage order, so the buffer
    is reduced as is.
    """
    return norm(matrix.as_slice(), Norm.L2, kernel=kernel)


def euclidean_distance(a, b, kernel: ReductionKernel | None = None):
    """
    Compute Euclidean distances.

    With two vectors, returns the L2 norm of their difference. With a
    matrix (or a rank-2 Array) and a vector, returns the distance from every
    row to the vector.

    Parameters
    ----------
    a : Matrix | Array | array-like
        A matrix of points (one per row), a rank-2 Array read as a row-major
        matrix, or a vector.
    b : Array | array-like
        A vector.
    kernel : ReductionKernel | None
        Kernel used for the sums of squares; the default kernel when None.

    Returns
    -------
    float | Array
        A float for two vectors, or a rank-1 Array with one distance per row.

    Raises
    ------
    LengthMismatchError
        If two vectors have different lengths.
    ShapeMismatchError
        If the matrix column count differs from the vector length.
    """
    if kernel is None:
        kernel = get_default_kernel()

    if isinstance(a, Array) and a.rank == 2:
        a = Matrix.from_buffer(Order.ROW_MAJOR, a.as_slice(), *a.shape)

    if isinstance(a, Matrix):
        query = as_vector(b)
        if a.n_cols != len(query):
            raise ShapeMismatchError(
                f"Matrix has {a.n_cols} columns but the vector has {len(query)} elements"
            )
        distances = [
            norm(a.row(i) - query, Norm.L2, kernel=kernel) for i in range(a.n_rows)
        ]
        return Array.from_buffer((a.n_rows,), distances)

    u, v = as_operands(a, b)
    return norm(u - v, Norm.L2, kernel=kernel)

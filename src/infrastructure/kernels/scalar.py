"""Scalar baseline dot product.

The single left-to-right running sum defined here is the reference
summation order every other kernel is compared against. The accelerated
kernels also route their remainder elements through ``scalar_dot``.
"""
import numpy as np

from src.domain.errors import LengthMismatchError
from src.domain.interfaces.reduction_kernel import ReductionKernel

DTYPE = np.float32


def as_operands(u, v) -> tuple[np.ndarray, np.ndarray]:
    """
    Convert two operands to flat float32 arrays of equal length.

    Parameters
    ----------
    u, v : array-like
        Sequences of numbers, numpy arrays, or objects exposing ``as_slice()``.

    Returns
    -------
    tuple[np.ndarray, np.ndarray]
        The operands as one-dimensional float32 arrays.

    Raises
    ------
    LengthMismatchError
        If the operands do not have the same length.
    """
    u = as_vector(u)
    v = as_vector(v)
    if len(u) != len(v):
        raise LengthMismatchError(
            f"Operands must have the same length, got {len(u)} and {len(v)}"
        )
    return u, v


def as_vector(values) -> np.ndarray:
    """Flatten ``values`` (or its ``as_slice()`` buffer) to a float32 vector."""
    if hasattr(values, "as_slice"):
        values = values.as_slice()
    return np.asarray(values, dtype=DTYPE).reshape(-1)


def scalar_dot(u: np.ndarray, v: np.ndarray) -> np.float32:
    """Left-to-right float32 dot product of two equal-length float32 arrays."""
    total = DTYPE(0.0)
    for a, b in zip(u, v):
        total += a * b
    return total


def dot(u, v) -> float:
    """
    Compute the dot product with a single running sum.

    Parameters
    ----------
    u, v : array-like
        Equal-length sequences.

    Returns
    -------
    float
        The dot product accumulated in float32.
    """
    u, v = as_operands(u, v)
    return float(scalar_dot(u, v))


class ScalarKernel(ReductionKernel):
    """Baseline kernel: one running sum, no unrolling, no lanes."""

    name = "scalar"

    def dot(self, u, v) -> float:
        return dot(u, v)

"""Vector-lane dot products (4-wide and 8-wide).

Each kernel keeps one float32 accumulator per lane. Block ``b`` of the
input adds its products lane by lane into the accumulators, exactly as a
packed ``f32x4``/``f32x8`` register would. The lanes are summed at the end
and the remainder shorter than one block goes through the scalar baseline.
"""
import numpy as np

from src.domain.interfaces.reduction_kernel import ReductionKernel
from src.infrastructure.kernels.scalar import DTYPE, as_operands, scalar_dot


def dot_lanes(u, v, width: int) -> float:
    """
    Compute the dot product with ``width`` parallel lanes.

    Parameters
    ----------
    u, v : array-like
        Equal-length sequences.
    width : int
        Number of lanes.

    Returns
    -------
    float
        The dot product accumulated in float32.
    """
    if width <= 0:
        raise ValueError(f"Lane width must be positive, got {width}")
    u, v = as_operands(u, v)

    head = len(u) - len(u) % width
    if head:
        products = u[:head] * v[:head]
        # axis 0 reduces block after block into each lane.
        sums = np.add.reduce(products.reshape(-1, width), axis=0, dtype=DTYPE)
    else:
        sums = np.zeros(width, dtype=DTYPE)

    total = DTYPE(0.0)
    for lane in sums:
        total += lane
    return float(total + scalar_dot(u[head:], v[head:]))


def dot_f32x4(u, v) -> float:
    """Dot product over four float32 lanes."""
    return dot_lanes(u, v, 4)


def dot_f32x8(u, v) -> float:
    """Dot product over eight float32 lanes."""
    return dot_lanes(u, v, 8)


class LaneKernel(ReductionKernel):
    """Kernel accumulating into a fixed number of float32 lanes."""

    def __init__(self, width: int):
        if width <= 0:
            raise ValueError(f"Lane width must be positive, got {width}")
        self.width = width
        self.name = f"f32x{width}"

    def dot(self, u, v) -> float:
        return dot_lanes(u, v, self.width)

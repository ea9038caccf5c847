"""Loop-unrolled scalar dot product."""
from src.domain.interfaces.reduction_kernel import ReductionKernel
from src.infrastructure.kernels.scalar import DTYPE, as_operands, scalar_dot

BLOCK = 8


def dot_unrolled(u, v) -> float:
    """
    Compute the dot product with eight independent partial sums.

    Position ``i`` of every block of eight feeds partial sum ``i``, which
    breaks the dependency between consecutive additions. The partial sums
    are combined at the end and the last ``len(u) % 8`` elements go through
    the scalar baseline.

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

    dp0 = dp1 = dp2 = dp3 = dp4 = dp5 = dp6 = dp7 = DTYPE(0.0)
    head = len(u) - len(u) % BLOCK

    for i in range(0, head, BLOCK):
        dp0 += u[i] * v[i]
        dp1 += u[i + 1] * v[i + 1]
        dp2 += u[i + 2] * v[i + 2]
        dp3 += u[i + 3] * v[i + 3]
        dp4 += u[i + 4] * v[i + 4]
        dp5 += u[i + 5] * v[i + 5]
        dp6 += u[i + 6] * v[i + 6]
        dp7 += u[i + 7] * v[i + 7]

    total = dp0 + dp1 + dp2 + dp3 + dp4 + dp5 + dp6 + dp7
    return float(total + scalar_dot(u[head:], v[head:]))


class UnrolledKernel(ReductionKernel):
    """Scalar kernel with eight interleaved accumulators."""

    name = "unrolled"

    def dot(self, u, v) -> float:
        return dot_unrolled(u, v)

from src.domain.entities.array import Array
from src.domain.entities.matrix import Matrix
from src.domain.interfaces.metrics import DistanceMetric
from src.domain.interfaces.reduction_kernel import ReductionKernel
from src.infrastructure.kernels.dispatch import get_default_kernel
from src.infrastructure.norms import euclidean_distance


class EuclideanDistanceMetric(DistanceMetric):
    """Concrete implementation using the L2 norm of row/query differences."""

    def __init__(self, kernel: ReductionKernel | None = None):
        """
        Create the metric.

        Parameters:
            kernel (ReductionKernel | None): Kernel computing the sums of squares; the automatically selected kernel when None.
        """
        self.kernel = kernel if kernel is not None else get_default_kernel()

    def compute(self, points: Matrix, query: Array) -> Array:
        """
        Compute the Euclidean distance from every row of `points` to `query`.

        Returns:
            Array: Rank-1 array of distances, one per row of `points`.
        """
        return euclidean_distance(points, query, kernel=self.kernel)

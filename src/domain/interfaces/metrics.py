from abc import ABC, abstractmethod

from src.domain.entities.array import Array
from src.domain.entities.matrix import Matrix


class DistanceMetric(ABC):
    """Abstract interface for point-to-query distance metrics."""

    @abstractmethod
    def compute(self, points: Matrix, query: Array) -> Array:
        """
        Compute the distance between every row of `points` and `query`.

        Parameters:
            points (Matrix): Data points, one per row.
            query (Array): Rank-1 vector with as many elements as `points` has columns.

        Returns:
            Array: Rank-1 array with one distance per row, in row order.
        """
        pass

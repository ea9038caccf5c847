"""
K-Nearest-Neighbour classification.

Training instances are collected by a ``KNNBuilder`` into one row-major
feature matrix. ``KNN.classify`` asks a ``DistanceMetric`` for the distance
from every training row to the query, keeps the k closest in a bounded
max-heap, and votes on their labels.
"""
import heapq
import logging
from collections import Counter
from dataclasses import dataclass

from src.domain.entities.array import Array
from src.domain.entities.instance import Instance
from src.domain.entities.matrix import Matrix, Order
from src.domain.errors import EmptyDatasetError, LengthMismatchError, ShapeMismatchError
from src.domain.interfaces.metrics import DistanceMetric

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Neighbor:
    """A training instance ranked by its distance to a query."""

    distance: float
    label: int
    position: int


class NearestNeighbors:
    """
    Bounded max-heap keeping the k smallest distances seen so far.

    A candidate replaces the current farthest neighbour only when it is
    strictly closer. Among neighbours at equal distance, the most recently
    inserted one is evicted first, so earlier candidates win ties.
    """

    def __init__(self, k: int):
        if k < 1:
            raise ValueError("k should at least be 1")
        self.k = k
        # heapq is a min-heap: the root holds the largest distance and,
        # among equal distances, the latest position.
        self._heap: list[tuple[float, int, int]] = []

    def push(self, distance: float, label: int, position: int) -> None:
        entry = (-distance, -position, label)
        if len(self._heap) < self.k:
            heapq.heappush(self._heap, entry)
        elif distance < -self._heap[0][0]:
            heapq.heapreplace(self._heap, entry)

    def __len__(self) -> int:
        return len(self._heap)

    def neighbors(self) -> list[Neighbor]:
        """Neighbours sorted from closest to farthest, ties in insertion order."""
        return sorted(
            (
                Neighbor(distance=-neg_distance, label=label, position=-neg_position)
                for neg_distance, neg_position, label in self._heap
            ),
            key=lambda neighbor: (neighbor.distance, neighbor.position),
        )


def vote(labels: list[int]) -> int:
    """
    Return the most frequent label.

    Labels are scanned in ascending order and the first maximum wins, so
    frequency ties go to the smallest label.
    """
    if not labels:
        raise ValueError("Cannot vote without labels")
    counts = Counter(labels)
    return max(sorted(counts), key=counts.__getitem__)


class KNN:
    """A K Nearest Neighbour classifier."""

    def __init__(self, labels: list[int], features: Matrix, metric: DistanceMetric):
        """
        Create a classifier over an already assembled training set.

        Parameters
        ----------
        labels : list[int]
            Label of each training instance.
        features : Matrix
            Training feature vectors, one per row.
        metric : DistanceMetric
            Metric computing row-to-query distances.
        """
        if len(labels) != features.n_rows:
            raise LengthMismatchError(
                f"Got {len(labels)} labels for {features.n_rows} feature rows"
            )
        self.labels = labels
        self.features = features
        self.metric = metric

    @property
    def n_features(self) -> int:
        return self.features.n_cols

    def __len__(self) -> int:
        return len(self.labels)

    def nearest_neighbors(self, features: list[float], k: int) -> list[Neighbor]:
        """
        Find the k training instances closest to a query.

        Parameters
        ----------
        features : list[float]
            Feature vector of the query.
        k : int
            Number of neighbours, at least 1.

        Returns
        -------
        list[Neighbor]
            At most k neighbours, closest first.

        Raises
        ------
        ShapeMismatchError
            If the query does not have ``n_features`` values.
        """
        if len(features) != self.n_features:
            raise ShapeMismatchError(
                f"Expected a query of {self.n_features} features, got {len(features)}"
            )
        nearest = NearestNeighbors(k)
        query = Array.from_buffer((len(features),), features)
        distances = self.metric.compute(self.features, query)

        for position, distance in enumerate(distances.as_slice()):
            nearest.push(float(distance), self.labels[position], position)

        return nearest.neighbors()

    def classify(self, features: list[float], k: int) -> int:
        """
        Classify a data point.

        Parameters
        ----------
        features : list[float]
            Feature vector of the data point.
        k : int
            Number of nearest neighbours taking part in the vote.

        Returns
        -------
        int
            The predicted label.
        """
        neighbors = self.nearest_neighbors(features, k)
        return vote([neighbor.label for neighbor in neighbors])


class KNNBuilder:
    """Collects data points for KNN classification."""

    def __init__(self) -> None:
        self.labels: list[int] = []
        self.features: list[float] = []
        self.n_features: int | None = None

    def __len__(self) -> int:
        return len(self.labels)

    def push(self, instance: Instance) -> None:
        """
        Add a training instance.

        Raises
        ------
        LengthMismatchError
            If its feature vector differs in length from the previous ones.
        """
        if self.n_features is not None and len(instance.features) != self.n_features:
            raise LengthMismatchError(
                f"Expected a feature vector of size {self.n_features}, "
                f"got {len(instance.features)}"
            )

        self.n_features = len(instance.features)
        self.features.extend(instance.features)
        self.labels.append(instance.label)

    def build(self, metric: DistanceMetric) -> KNN:
        """
        Assemble the collected instances into a classifier.

        Raises
        ------
        EmptyDatasetError
            If no instance was pushed, or the instances have no features.
        """
        if not self.labels:
            raise EmptyDatasetError("Cannot build a classifier without training instances")
        if not self.n_features:
            raise EmptyDatasetError("Cannot build a classifier from instances without features")

        features = Matrix.from_buffer(
            Order.ROW_MAJOR, self.features, len(self.labels), self.n_features
        )
        logger.info(
            f"Built classifier with {len(self.labels)} instances "
            f"of {self.n_features} features"
        )
        return KNN(list(self.labels), features, metric)

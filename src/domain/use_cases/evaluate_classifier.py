"""
Evaluate Classifier Use-Case.

Builds a KNN classifier from a training set, classifies every instance of a
test set and reports the fraction of correctly predicted labels.
"""
import logging
from dataclasses import dataclass

from src.domain.entities.instance import Instance
from src.domain.errors import EmptyDatasetError
from src.domain.interfaces.evaluation_tracker import EvaluationTracker
from src.domain.interfaces.metrics import DistanceMetric
from src.domain.use_cases.knn import KNNBuilder

logger = logging.getLogger(__name__)


class Evaluator:
    """Counts correct predictions."""

    def __init__(self) -> None:
        self.n_instances = 0
        self.n_correct = 0

    def count(self, correct: int, predicted: int) -> bool:
        """
        Record one prediction.

        Returns
        -------
        bool
            Whether the prediction was correct.
        """
        self.n_instances += 1
        is_correct = predicted == correct
        if is_correct:
            self.n_correct += 1
        return is_correct

    def accuracy(self) -> float:
        """
        Fraction of correct predictions, in [0, 1].

        Raises
        ------
        ValueError
            If no prediction has been recorded.
        """
        if self.n_instances == 0:
            raise ValueError("Accuracy is undefined before any instance is counted")
        return self.n_correct / self.n_instances


@dataclass
class EvaluationResult:
    """Result of evaluating a classifier on a test set."""

    k: int
    kernel: str | None
    n_instances: int
    n_correct: int
    accuracy: float

    @property
    def accuracy_percent(self) -> float:
        return self.accuracy * 100.0


class EvaluateClassifier:
    """
    Use-case for measuring the accuracy of a KNN classifier.

    Attributes
    ----------
    train_instances : list[Instance]
        Instances the classifier votes with.
    test_instances : list[Instance]
        Instances whose labels are predicted.
    k : int
        Number of nearest neighbours taking part in each vote.
    metric : DistanceMetric
        Metric computing training-row-to-query distances.
    tracker : EvaluationTracker | None
        Optional progress observer.
    """

    def __init__(
        self,
        train_instances: list[Instance],
        test_instances: list[Instance],
        k: int,
        metric: DistanceMetric,
        tracker: EvaluationTracker | None = None,
    ) -> None:
        if k < 1:
            raise ValueError("k should at least be 1")
        self.train_instances = train_instances
        self.test_instances = test_instances
        self.k = k
        self.metric = metric
        self.tracker = tracker

    def _kernel_name(self) -> str | None:
        kernel = getattr(self.metric, "kernel", None)
        return getattr(kernel, "name", None)

    def run(self) -> EvaluationResult:
        """
        Build the classifier and evaluate it on the test instances.

        Returns
        -------
        EvaluationResult
            Counts and accuracy of the run.

        Raises
        ------
        EmptyDatasetError
            If the training or test set is empty.
        """
        if not self.test_instances:
            raise EmptyDatasetError("Cannot evaluate a classifier without test instances")

        builder = KNNBuilder()
        for instance in self.train_instances:
            builder.push(instance)
        model = builder.build(self.metric)

        kernel_name = self._kernel_name()
        logger.info(
            f"Evaluating {len(self.test_instances)} instances with k={self.k}"
        )
        if self.tracker is not None:
            self.tracker.on_evaluation_start(len(self.test_instances), self.k, kernel_name)

        evaluator = Evaluator()
        for index, instance in enumerate(self.test_instances):
            predicted = model.classify(instance.features, self.k)
            correct = evaluator.count(instance.label, predicted)
            if self.tracker is not None:
                self.tracker.on_instance_end(index, correct, evaluator.accuracy())

        accuracy = evaluator.accuracy()
        if self.tracker is not None:
            self.tracker.on_evaluation_end(accuracy)

        logger.info(
            f"Classified {evaluator.n_correct}/{evaluator.n_instances} instances correctly"
        )
        return EvaluationResult(
            k=self.k,
            kernel=kernel_name,
            n_instances=evaluator.n_instances,
            n_correct=evaluator.n_correct,
            accuracy=accuracy,
        )

"""
Evaluation Tracker Interface.

This module defines the abstract interface for tracking the progress of a
classifier evaluation. Implementations can provide console progress bars,
silent operation for tests, or other observability solutions.
"""
from abc import ABC, abstractmethod


class EvaluationTracker(ABC):
    """
    Abstract interface for tracking classifier evaluation progress.

    The lifecycle follows:
    1. on_evaluation_start() - called once before the first test instance
    2. on_instance_end() - called after each test instance is classified
    3. on_evaluation_end() - called once after the last test instance
    """

    @abstractmethod
    def on_evaluation_start(
        self,
        total_instances: int,
        k: int,
        kernel_name: str | None = None,
    ) -> None:
        """
        Called when evaluation begins.

        Parameters
        ----------
        total_instances : int
            Number of test instances that will be classified.
        k : int
            Number of nearest neighbours used for voting.
        kernel_name : str | None, optional
            Name of the reduction kernel computing the distances.
        """
        pass

    @abstractmethod
    def on_instance_end(self, index: int, correct: bool, running_accuracy: float) -> None:
        """
        Called after each test instance is classified.

        Parameters
        ----------
        index : int
            Position of the instance in the test set (0-indexed).
        correct : bool
            Whether the predicted label matched the expected one.
        running_accuracy : float
            Accuracy over the instances seen so far, in [0, 1].
        """
        pass

    @abstractmethod
    def on_evaluation_end(self, accuracy: float) -> None:
        """
        Called when evaluation completes.

        Parameters
        ----------
        accuracy : float
            Final accuracy in [0, 1].
        """
        pass

"""
Observability module for classifier evaluation.

This module provides:
- EvaluationTracker implementations (ConsoleTracker, SilentTracker)
- Progress bar integration using tqdm
"""
from tqdm import tqdm

from src.domain.interfaces.evaluation_tracker import EvaluationTracker


class ConsoleTracker(EvaluationTracker):
    """
    Evaluation tracker with a tqdm progress bar.

    Displays one bar over the test instances with the running accuracy as
    postfix, and a summary line when evaluation ends.

    Attributes
    ----------
    update_every : int
        Number of instances between two postfix refreshes.
    """

    def __init__(self, update_every: int = 10) -> None:
        """
        Initialize the ConsoleTracker.

        Parameters
        ----------
        update_every : int, optional
            Number of instances between two postfix refreshes. Default is 10.
        """
        self.update_every = max(1, update_every)
        self._pbar: tqdm | None = None

    def on_evaluation_start(
        self,
        total_instances: int,
        k: int,
        kernel_name: str | None = None,
    ) -> None:
        """
        Called when evaluation begins. Initializes the progress bar.

        Parameters
        ----------
        total_instances : int
            Number of test instances that will be classified.
        k : int
            Number of nearest neighbours used for voting.
        kernel_name : str | None, optional
            Name of the reduction kernel computing the distances.
        """
        desc = f"Classifying (k={k})"
        if kernel_name:
            desc = f"Classifying (k={k}, {kernel_name})"

        self._pbar = tqdm(
            total=total_instances,
            desc=desc,
            unit="instance",
            leave=True,
        )

    def on_instance_end(self, index: int, correct: bool, running_accuracy: float) -> None:
        """Called after each test instance. Advances the progress bar."""
        if self._pbar is None:
            return
        if index % self.update_every == 0:
            self._pbar.set_postfix({"accuracy": f"{running_accuracy * 100:.1f}%"})
        self._pbar.update(1)

    def on_evaluation_end(self, accuracy: float) -> None:
        """Called when evaluation completes. Closes the progress bar."""
        if self._pbar is not None:
            self._pbar.set_postfix({"accuracy": f"{accuracy * 100:.1f}%"})
            self._pbar.close()
            self._pbar = None


class SilentTracker(EvaluationTracker):
    """
    Evaluation tracker that produces no output.

    Useful for testing or when running in non-interactive environments
    where progress output is not desired.
    """

    def on_evaluation_start(
        self,
        total_instances: int,
        k: int,
        kernel_name: str | None = None,
    ) -> None:
        """No-op implementation."""
        pass

    def on_instance_end(self, index: int, correct: bool, running_accuracy: float) -> None:
        """No-op implementation."""
        pass

    def on_evaluation_end(self, accuracy: float) -> None:
        """No-op implementation."""
        pass

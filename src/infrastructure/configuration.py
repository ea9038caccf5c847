import os
import tomllib
from dataclasses import dataclass

from src.infrastructure.kernels.dispatch import AUTO, KERNEL_NAMES


@dataclass
class ClassifierConfiguration:
    """Configuration for one classifier evaluation."""

    train: str
    test: str
    k: int = 3
    kernel: str = AUTO
    show_progress: bool = True

    def __post_init__(self):
        """Validate the neighbour count and kernel name."""
        if self.k < 1:
            raise ValueError(f"k should at least be 1, got {self.k}")
        if self.kernel != AUTO and self.kernel not in KERNEL_NAMES:
            raise ValueError(
                f"Unknown kernel {self.kernel!r}. "
                f"Expected one of {[AUTO, *KERNEL_NAMES]}"
            )

    @classmethod
    def load(cls, config_path: str) -> "ClassifierConfiguration":
        """
        Load classifier configuration from a TOML file.

        Parameters
        ----------
        config_path : str
            Filesystem path to a TOML file containing a "classifier" table.

        Returns
        -------
        ClassifierConfiguration
            Instance populated from the "classifier" table.

        Raises
        ------
        FileNotFoundError
            If no file exists at `config_path`.
        """
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file not found at {config_path}")

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        classifier_data = data.get("classifier", {})
        return cls(**classifier_data)


@dataclass
class BatchEvaluationConfiguration:
    """Configuration for running several evaluations in a row."""

    evaluations: list[ClassifierConfiguration]

    @classmethod
    def load(cls, config_path: str) -> "BatchEvaluationConfiguration":
        """
        Load batch evaluation configuration from a TOML file.

        The file should contain a [batch] section with [[batch.evaluations]] entries.
        Global defaults can be set in [batch.defaults].

        Parameters
        ----------
        config_path : str
            Filesystem path to a TOML file.

        Returns
        -------
        BatchEvaluationConfiguration
            Instance with list of ClassifierConfiguration objects.

        Raises
        ------
        FileNotFoundError
            If no file exists at `config_path`.
        """
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file not found at {config_path}")

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        batch_data = data.get("batch", {})
        defaults = batch_data.get("defaults", {})
        evaluations_data = batch_data.get("evaluations", [])

        evaluations = []
        for evaluation_data in evaluations_data:
            # Entry values override the defaults
            merged = {**defaults, **evaluation_data}
            evaluations.append(ClassifierConfiguration(**merged))

        return cls(evaluations=evaluations)

"""Line-based dataset parsing.

Each line holds a label followed by the feature values, separated by
whitespace::

    1 1.0 -1.0 0.0 2.0
    0 -1.0 1.0 1.0 -1.0
"""
import os
from typing import Iterable, Iterator

from src.domain.entities.instance import Instance
from src.domain.errors import InstanceParseError
from src.domain.interfaces.dataset_loader import InstanceLoader


def parse_instance(line: str, line_number: int | None = None) -> Instance:
    """
    Parse one dataset line.

    Parameters
    ----------
    line : str
        A label followed by zero or more feature values.
    line_number : int | None
        Position of the line in its file, used in error messages.

    Returns
    -------
    Instance
        The parsed instance.

    Raises
    ------
    InstanceParseError
        If the label is missing or not a non-negative integer, or if a
        feature is not a number.
    """
    fields = line.split()
    if not fields:
        raise InstanceParseError("Line is missing label", line_number)

    label_str, *feature_strs = fields
    try:
        label = int(label_str)
    except ValueError:
        raise InstanceParseError(f"Invalid label {label_str!r}", line_number) from None
    if label < 0:
        raise InstanceParseError(f"Label must be non-negative, got {label}", line_number)

    features = []
    for feature_str in feature_strs:
        try:
            features.append(float(feature_str))
        except ValueError:
            raise InstanceParseError(
                f"Invalid feature value {feature_str!r}", line_number
            ) from None

    return Instance(label=label, features=features)


def iter_instances(lines: Iterable[str]) -> Iterator[Instance]:
    """Lazily parse an iterable of dataset lines."""
    for line_number, line in enumerate(lines, start=1):
        yield parse_instance(line, line_number)


class TextInstanceLoader(InstanceLoader):
    """Concrete implementation for loading whitespace-separated text datasets."""

    def load(self, path: str) -> list[Instance]:
        """
        Load all instances from a text file.

        Parameters:
            path (str): Path to a file with one instance per line.

        Returns:
            list[Instance]: Parsed instances in file order.

        Raises:
            FileNotFoundError: If no file exists at `path`.
            InstanceParseError: If a line is malformed.
        """
        if not os.path.exists(path):
            raise FileNotFoundError(f"Dataset file not found at {path}")

        with open(path, "r", encoding="utf-8") as f:
            return list(iter_instances(f))

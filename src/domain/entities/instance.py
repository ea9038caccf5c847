"""Instance entity - a labeled feature vector."""
from dataclasses import dataclass, field


@dataclass
class Instance:
    """A data point: a class label and its feature values."""

    label: int
    features: list[float] = field(default_factory=list)

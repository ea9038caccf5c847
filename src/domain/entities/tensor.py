"""Tensor entity - storage-independent abstraction."""
from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class Tensor(Protocol):
    """Dense tensor abstraction consumed by the reduction kernels."""

    @property
    def shape(self) -> tuple[int, ...]:
        """
        Get the tensor's shape.

        Returns:
            shape (tuple[int, ...]): Tuple of integers representing the size of each dimension.
        """
        ...

    def as_slice(self) -> np.ndarray:
        """
        Get the tensor's buffer in its physical layout.

        Returns:
            np.ndarray: Read-only one-dimensional float32 view of every element.
        """
        ...

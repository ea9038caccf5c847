from abc import ABC, abstractmethod

import numpy as np


class ReductionKernel(ABC):
    """Abstract interface for dot-product reduction kernels."""

    #: Short identifier used for configuration and logging.
    name: str = ""

    @abstractmethod
    def dot(self, u: np.ndarray, v: np.ndarray) -> float:
        """
        Compute the dot product of two equal-length float32 sequences.

        Parameters:
            u (np.ndarray): Left operand.
            v (np.ndarray): Right operand, same length as `u`.

        Returns:
            float: Sum of the element-wise products.

        Raises:
            LengthMismatchError: If the operands have different lengths.
        """
        pass

    def squared_norm(self, v: np.ndarray) -> float:
        """
        Compute the sum of squares of a sequence as its dot product with itself.

        Parameters:
            v (np.ndarray): Input sequence.

        Returns:
            float: Sum of `v_i ** 2`.
        """
        return self.dot(v, v)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"

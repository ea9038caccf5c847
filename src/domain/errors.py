"""Error taxonomy for the kernel library.

Every error raised by the core signals a caller bug (a violated
precondition) and is never retried or recovered internally. Only
``InstanceParseError`` and ``EmptyDatasetError`` are expected to reach the
process boundary as user-facing failures.
"""


class KernelError(Exception):
    """Base class for all errors raised by this package."""


class ConstructionError(KernelError, ValueError):
    """Raised when an array or matrix is built from an invalid shape or buffer."""


class RankError(ConstructionError):
    """Raised when a shape has an unsupported number of axes."""


class OutOfBoundsError(KernelError, IndexError):
    """Raised when a multi-index falls outside the extents of a shape."""


class ShapeMismatchError(KernelError, ValueError):
    """Raised when two operands have incompatible shapes."""


class LengthMismatchError(KernelError, ValueError):
    """Raised when two sequences that must have equal length do not."""


class InstanceParseError(KernelError, ValueError):
    """Raised when a dataset line cannot be turned into an instance."""

    def __init__(self, message: str, line_number: int | None = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class EmptyDatasetError(KernelError, ValueError):
    """Raised when a training or test set holds no usable instance."""

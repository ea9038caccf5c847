"""Shape entity - fixed-rank extents and multi-index arithmetic."""
import math
import operator
from typing import Sequence

from src.domain.errors import ConstructionError, OutOfBoundsError, RankError

MAX_RANK = 3


class Shape:
    """
    Extents of a tensor with rank 0 (scalar) up to 3.

    The rank is fixed at construction. Offsets are recomputed on every call
    to ``linear_offset``; no strides are cached.

    Attributes
    ----------
    extents : tuple[int, ...]
        Size of each axis, outermost first.
    """

    __slots__ = ("_extents",)

    def __init__(self, extents: Sequence[int]):
        """
        Create a shape from its extents.

        Parameters
        ----------
        extents : Sequence[int]
            One strictly positive integer per axis.

        Raises
        ------
        RankError
            If more than ``MAX_RANK`` extents are given.
        ConstructionError
            If an extent is zero or negative.
        TypeError
            If an extent is not an integer.
        """
        extents = tuple(operator.index(extent) for extent in extents)
        if len(extents) > MAX_RANK:
            raise RankError(
                f"Rank {len(extents)} is not supported (maximum rank is {MAX_RANK})"
            )
        if any(extent <= 0 for extent in extents):
            raise ConstructionError(f"All extents must be positive, got {extents}")
        self._extents = extents

    @classmethod
    def of(cls, shape: "Shape | Sequence[int]") -> "Shape":
        """Return ``shape`` unchanged if it is a Shape, otherwise wrap it."""
        if isinstance(shape, Shape):
            return shape
        return cls(shape)

    @property
    def extents(self) -> tuple[int, ...]:
        return self._extents

    @property
    def rank(self) -> int:
        return len(self._extents)

    @property
    def size(self) -> int:
        """Total number of elements; 1 for a scalar."""
        return math.prod(self._extents)

    def valid_index(self, index: Sequence[int]) -> bool:
        """
        Check a multi-index against this shape.

        Parameters
        ----------
        index : Sequence[int]
            Candidate multi-index.

        Returns
        -------
        bool
            True iff the index has the same rank and ``0 <= index[k] < extents[k]``
            on every axis.
        """
        if len(index) != self.rank:
            return False
        return all(
            0 <= position < extent for position, extent in zip(index, self._extents)
        )

    def linear_offset(self, index: Sequence[int]) -> int:
        """
        Compute the row-major buffer offset of a multi-index.

        offset = sum_k index[k] * prod_{j > k} extents[j]

        Parameters
        ----------
        index : Sequence[int]
            Multi-index to linearize.

        Returns
        -------
        int
            Position of the element in a row-major buffer.

        Raises
        ------
        OutOfBoundsError
            If the index is not valid for this shape.
        """
        index = tuple(operator.index(position) for position in index)
        if not self.valid_index(index):
            raise OutOfBoundsError(
                f"Index {index} is out of bounds for shape {self._extents}"
            )

        offset = 0
        for axis, position in enumerate(index):
            offset += position * math.prod(self._extents[axis + 1:])
        return offset

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Shape):
            return self._extents == other._extents
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._extents)

    def __iter__(self):
        return iter(self._extents)

    def __len__(self) -> int:
        return self.rank

    def __repr__(self) -> str:
        return f"Shape({self._extents})"

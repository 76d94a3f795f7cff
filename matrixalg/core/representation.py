# matrixalg/core/representation.py
"""
MatrixRepresentation contract.

Every concrete matrix type (pattern-only, numeric, symbolic) subclasses
`MatrixRepresentation` and supplies the kernels below. Concatenation and
product kernels check shapes themselves and raise DimensionMismatchError.
Split kernels receive boundaries already validated by
`matrixalg.core.algebra`.
"""
from abc import ABC, abstractmethod
from typing import Any, List, Sequence, Tuple

from matrixalg.core.exceptions import RepresentationMismatchError


class MatrixRepresentation(ABC):
    """
    Abstract base class for immutable rectangular matrix values.
    """
    # Higher priority wins when operands of different representations meet.
    priority: int = 0

    @property
    @abstractmethod
    def n_rows(self) -> int:
        """Number of rows (>= 0)."""
        pass

    @property
    @abstractmethod
    def n_cols(self) -> int:
        """Number of columns (>= 0)."""
        pass

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.n_rows, self.n_cols)

    @property
    @abstractmethod
    def sparsity(self) -> "MatrixRepresentation":
        """Structural non-zero pattern as a SparsityPattern."""
        pass

    @classmethod
    @abstractmethod
    def zeros(cls, n_rows: int, n_cols: int) -> "MatrixRepresentation":
        """Value of the given shape with no structural non-zeros."""
        pass

    @classmethod
    @abstractmethod
    def concatenate_horizontally(cls, items: Sequence[Any]) -> "MatrixRepresentation":
        """
        Place `items` side by side. All items share a row count; column
        indices of item k are shifted by the widths of items 0..k-1.

        Raises:
            DimensionMismatchError: If row counts differ.
        """
        pass

    @classmethod
    @abstractmethod
    def concatenate_vertically(cls, items: Sequence[Any]) -> "MatrixRepresentation":
        """
        Stack `items` on top of each other.

        Raises:
            DimensionMismatchError: If column counts differ.
        """
        pass

    @abstractmethod
    def split_horizontally(self, boundaries: Sequence[int]) -> List["MatrixRepresentation"]:
        """
        Return one value per column group [boundaries[i], boundaries[i+1]),
        each keeping the full row count and re-indexed from zero.
        """
        pass

    @abstractmethod
    def split_vertically(self, boundaries: Sequence[int]) -> List["MatrixRepresentation"]:
        """Row-axis analogue of `split_horizontally`."""
        pass

    @classmethod
    @abstractmethod
    def block_diagonal(cls, items: Sequence[Any]) -> "MatrixRepresentation":
        """
        Place `items` along the diagonal; every position outside the blocks is
        structurally absent.
        """
        pass

    @abstractmethod
    def multiply(self, other: Any) -> "MatrixRepresentation":
        """
        Matrix product self @ other.

        Raises:
            DimensionMismatchError: If self.n_cols != other.n_rows.
        """
        pass

    @abstractmethod
    def multiply_into_pattern(self, other: Any, target: Any) -> "MatrixRepresentation":
        """
        Return target + (self @ other) restricted to target's pattern.
        Product entries outside that pattern are discarded.
        """
        pass

    @abstractmethod
    def transpose(self) -> "MatrixRepresentation":
        """Swap rows and columns."""
        pass

    @classmethod
    def coerce(cls, value: Any) -> "MatrixRepresentation":
        """
        Convert `value` into this representation. The default only accepts
        instances of the class itself.
        """
        if isinstance(value, cls):
            return value
        raise RepresentationMismatchError(
            f"Cannot convert {type(value).__name__} to {cls.__name__}."
        )

    @property
    def T(self) -> "MatrixRepresentation":
        from matrixalg.core.algebra import transpose
        return transpose(self)

    def __matmul__(self, other: Any) -> "MatrixRepresentation":
        if not isinstance(other, MatrixRepresentation):
            return NotImplemented
        from matrixalg.core.algebra import mul
        return mul(self, other)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.n_rows}x{self.n_cols}, nnz={self.sparsity.nnz})"

# matrixalg/core/algebra.py
"""
Representation-independent matrix algebra.

Every function validates and normalises its arguments and then delegates to
the operand's MatrixRepresentation kernels:

    horzcat(horzsplit(x, ...)) == x
    vertcat(vertsplit(x, ...)) == x
"""
import numbers
from typing import Any, List, Optional, Sequence, Type, Union

from matrixalg.core.exceptions import InvalidArgumentError
from matrixalg.core.representation import MatrixRepresentation
from matrixalg.core.validation import (
    check_boundaries,
    check_increment,
    check_operand,
    check_product,
    check_same_extent,
    check_target,
    increment_boundaries,
    resolve_kind,
    unify,
)

Matrix = MatrixRepresentation
Offsets = Union[int, Sequence[int]]


def _as_list(first: Any, second: Any, op: str) -> List[Any]:
    if second is not None:
        return [first, second]
    if isinstance(first, MatrixRepresentation):
        raise InvalidArgumentError(f"{op}: expected a list of matrices or two matrices.")
    try:
        return list(first)
    except TypeError:
        raise InvalidArgumentError(f"{op}: expected a list of matrices or two matrices.")


def horzcat(first: Any, second: Optional[Matrix] = None, *,
            kind: Optional[Type[Matrix]] = None) -> Matrix:
    """
    Concatenate matrices horizontally ([a b], hstack).

    Accepts either a list ``horzcat([a, b, c])`` or a pair ``horzcat(a, b)``.
    All operands must share a row count.
    """
    cls, items = resolve_kind(_as_list(first, second, "horzcat"), kind, "horzcat")
    if not items:
        return cls.zeros(0, 0)
    check_same_extent(items, 0, "horzcat")
    return cls.concatenate_horizontally(items)


def vertcat(first: Any, second: Optional[Matrix] = None, *,
            kind: Optional[Type[Matrix]] = None) -> Matrix:
    """
    Concatenate matrices vertically ([a; b], vstack).
    All operands must share a column count.
    """
    cls, items = resolve_kind(_as_list(first, second, "vertcat"), kind, "vertcat")
    if not items:
        return cls.zeros(0, 0)
    check_same_extent(items, 1, "vertcat")
    return cls.concatenate_vertically(items)


def horzsplit(x: Matrix, offsets: Offsets = 1) -> List[Matrix]:
    """
    Split into groups of columns.

    ``offsets`` is either a full boundary list (starting at 0 and ending at
    ``x.n_cols``) or a positive integer group width; with a width the last
    group absorbs the remainder.
    """
    x = check_operand(x, "horzsplit")
    if isinstance(offsets, numbers.Integral):
        inc = check_increment(offsets, "horzsplit")
        boundaries = increment_boundaries(x.n_cols, inc)
    else:
        boundaries = check_boundaries(offsets, x.n_cols, "horzsplit")
    return x.split_horizontally(boundaries)


def vertsplit(x: Matrix, offsets: Offsets = 1) -> List[Matrix]:
    """Split into groups of rows; same conventions as `horzsplit`."""
    x = check_operand(x, "vertsplit")
    if isinstance(offsets, numbers.Integral):
        inc = check_increment(offsets, "vertsplit")
        boundaries = increment_boundaries(x.n_rows, inc)
    else:
        boundaries = check_boundaries(offsets, x.n_rows, "vertsplit")
    return x.split_vertically(boundaries)


def blkdiag(first: Any, second: Optional[Matrix] = None, *,
            kind: Optional[Type[Matrix]] = None) -> Matrix:
    """Construct a matrix with the given blocks on the diagonal."""
    cls, items = resolve_kind(_as_list(first, second, "blkdiag"), kind, "blkdiag")
    if not items:
        return cls.zeros(0, 0)
    return cls.block_diagonal(items)


def mul(first: Any, second: Optional[Matrix] = None, third: Optional[Matrix] = None) -> Matrix:
    """
    Matrix product.

    * ``mul(x, y)``     -- x @ y
    * ``mul(x, y, z)``  -- z + (x @ y) restricted to the sparsity of z; the
      result has exactly z's pattern and other entries of x @ y are ignored
    * ``mul([a, b, c])`` -- ((a @ b) @ c), left to right
    """
    if second is None:
        if third is not None:
            raise InvalidArgumentError("mul: a target requires two factors.")
        args = _as_list(first, None, "mul")
        if not args:
            raise InvalidArgumentError("mul(args): supplied list must not be empty.")
        ret = check_operand(args[0], "mul")
        for arg in args[1:]:
            ret = mul(ret, arg)
        return ret

    if third is None:
        x, y = unify([first, second], "mul")
        check_product(x, y)
        return x.multiply(y)

    x, y, z = unify([first, second, third], "mul")
    check_target(x, y, z)
    return x.multiply_into_pattern(y, z)


def transpose(x: Matrix) -> Matrix:
    """Transpose; (r, c) becomes (c, r)."""
    return check_operand(x, "transpose").transpose()

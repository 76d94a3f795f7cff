# matrixalg/core/validation.py
"""
Argument checks shared by the generic algebra and the representation kernels.
Every representation reports shape and partition errors the same way.
"""
import numbers
from typing import Any, List, Optional, Sequence, Type

from matrixalg.core.exceptions import (
    DimensionMismatchError,
    InvalidArgumentError,
    RepresentationMismatchError,
)
from matrixalg.core.representation import MatrixRepresentation
from matrixalg.utils.logging_config import get_logger

logger = get_logger(__name__)


def check_operand(value: Any, op: str) -> MatrixRepresentation:
    if not isinstance(value, MatrixRepresentation):
        raise InvalidArgumentError(
            f"{op}: expected a matrix value, got {type(value).__name__}."
        )
    return value


def unify(items: Sequence[Any], op: str) -> List[MatrixRepresentation]:
    """
    Bring all operands to one representation.

    The representation with the highest `priority` is chosen and asked to
    coerce the others. Operands that already share a class pass through.

    Raises:
        InvalidArgumentError: If an operand is not a matrix value.
        RepresentationMismatchError: If an operand cannot be coerced.
    """
    values = [check_operand(v, op) for v in items]
    kinds = {type(v) for v in values}
    if len(kinds) <= 1:
        return values

    target = max(kinds, key=lambda k: k.priority)
    logger.debug("%s: promoting %s to %s", op,
                 sorted(k.__name__ for k in kinds if k is not target), target.__name__)
    try:
        return [target.coerce(v) for v in values]
    except RepresentationMismatchError as exc:
        raise RepresentationMismatchError(f"{op}: {exc}") from exc


def resolve_kind(items: Sequence[Any], kind: Optional[Type[MatrixRepresentation]], op: str):
    """
    Return (representation class, unified operands) for a list-form operation.
    An empty list needs an explicit `kind`.
    """
    if kind is not None and not (isinstance(kind, type) and issubclass(kind, MatrixRepresentation)):
        raise InvalidArgumentError(f"{op}: kind must be a matrix representation class.")
    if not items:
        if kind is None:
            raise InvalidArgumentError(
                f"{op}: cannot infer a representation from an empty list; pass kind=..."
            )
        return kind, []
    values = unify(list(items) if kind is None else [kind.coerce(v) for v in items], op)
    return type(values[0]), values


def check_same_extent(items: Sequence[MatrixRepresentation], axis: int, op: str) -> None:
    """Raise DimensionMismatchError unless all items share the extent on `axis`."""
    if not items:
        return
    extents = [v.shape[axis] for v in items]
    if any(e != extents[0] for e in extents):
        what = "row" if axis == 0 else "column"
        shapes = ", ".join(f"{v.n_rows}x{v.n_cols}" for v in items)
        raise DimensionMismatchError(f"{op}: {what} counts differ ({shapes}).")


def check_product(x: MatrixRepresentation, y: MatrixRepresentation, op: str = "mul") -> None:
    if x.n_cols != y.n_rows:
        raise DimensionMismatchError(
            f"{op}: inner dimensions differ ({x.n_rows}x{x.n_cols} times {y.n_rows}x{y.n_cols})."
        )


def check_target(x: MatrixRepresentation, y: MatrixRepresentation, z: MatrixRepresentation,
                 op: str = "mul") -> None:
    check_product(x, y, op)
    if z.shape != (x.n_rows, y.n_cols):
        raise DimensionMismatchError(
            f"{op}: target is {z.n_rows}x{z.n_cols}, product is {x.n_rows}x{y.n_cols}."
        )


def check_increment(increment: Any, op: str) -> int:
    if isinstance(increment, bool) or not isinstance(increment, numbers.Integral):
        raise InvalidArgumentError(f"{op}: increment must be an integer, got {increment!r}.")
    if increment < 1:
        raise InvalidArgumentError(f"{op}: increment must be >= 1, got {increment}.")
    return int(increment)


def increment_boundaries(extent: int, increment: int) -> List[int]:
    """[0, inc, 2*inc, ...] below `extent`, then `extent` itself."""
    boundaries = list(range(0, extent, increment))
    boundaries.append(extent)
    return boundaries


def check_boundaries(boundaries: Sequence[Any], extent: int, op: str) -> List[int]:
    """
    Validate a full partition-boundary list.

    The list must start at 0, end at `extent` and be non-decreasing; it
    defines len(boundaries) - 1 groups.

    Raises:
        InvalidArgumentError: On any violation.
    """
    try:
        values = list(boundaries)
    except TypeError:
        raise InvalidArgumentError(f"{op}: boundaries must be a sequence of integers.")
    if not values:
        raise InvalidArgumentError(f"{op}: boundaries must not be empty.")
    for b in values:
        if isinstance(b, bool) or not isinstance(b, numbers.Integral):
            raise InvalidArgumentError(f"{op}: boundary {b!r} is not an integer.")
    values = [int(b) for b in values]
    if values[0] != 0:
        raise InvalidArgumentError(f"{op}: first boundary must be 0, got {values[0]}.")
    if values[-1] != extent:
        raise InvalidArgumentError(
            f"{op}: last boundary must equal the extent {extent}, got {values[-1]}."
        )
    for lo, hi in zip(values, values[1:]):
        if hi < lo:
            raise InvalidArgumentError(f"{op}: boundaries must be non-decreasing, got {values}.")
    return values

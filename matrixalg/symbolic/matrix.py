# matrixalg/symbolic/matrix.py
"""
Symbolic sparse matrix: a SparsityPattern plus one sympy expression per
structural non-zero.

The pattern is structural, not value-based: a product keeps every position
the boolean product of the factor patterns reaches, even when the entry
cancels to zero. This makes symbolic patterns a conservative superset of the
numeric pattern obtained after evaluation.
"""
from __future__ import annotations
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import sympy

from matrixalg.core.exceptions import ExpressionError
from matrixalg.core.representation import MatrixRepresentation
from matrixalg.core.validation import check_product, check_same_extent, check_target
from matrixalg.numeric.matrix import NumericMatrix
from matrixalg.sparsity.pattern import SparsityPattern
from matrixalg.symbolic.expressions import (
    is_structural_zero,
    make_numeric_fn,
    parse_expr,
    sort_symbols,
)

Entries = Dict[Tuple[int, int], sympy.Expr]


def _sympy_number(v: complex) -> sympy.Expr:
    if isinstance(v, float) and v.is_integer():
        return sympy.Integer(int(v))
    return sympy.sympify(v, strict=True)


class SymbolicMatrix(MatrixRepresentation):
    __slots__ = ("_pattern", "_values")
    priority = 2

    def __init__(self, pattern: SparsityPattern, values: Sequence):
        values = tuple(parse_expr(v) for v in values)
        if len(values) != pattern.nnz:
            raise ValueError(f"Expected {pattern.nnz} entries, got {len(values)}.")
        self._pattern = pattern
        self._values = values

    # ------------------------------------------------------------------
    # constructors
    # ------------------------------------------------------------------
    @classmethod
    def from_entries(cls, n_rows: int, n_cols: int,
                     entries: Mapping[Tuple[int, int], object]) -> "SymbolicMatrix":
        """Entries keyed by (row, col); every key becomes structurally non-zero."""
        for (r, c) in entries:
            if not (0 <= r < n_rows and 0 <= c < n_cols):
                raise ValueError(f"Entry ({r}, {c}) outside a {n_rows}x{n_cols} matrix.")
        pattern = SparsityPattern.from_coords(n_rows, n_cols, entries.keys())
        return cls(pattern, [entries[rc] for rc in pattern.coords()])

    @classmethod
    def from_dense(cls, rows: Iterable[Iterable[object]]) -> "SymbolicMatrix":
        """
        Build from nested rows. Literal zeros are dropped from the pattern;
        everything else, including expressions that might vanish, is kept.
        """
        grid = [[parse_expr(v) for v in row] for row in rows]
        n_rows = len(grid)
        n_cols = len(grid[0]) if grid else 0
        if any(len(row) != n_cols for row in grid):
            raise ValueError("All rows must have the same length.")
        entries = {(r, c): e for r, row in enumerate(grid) for c, e in enumerate(row)
                   if not is_structural_zero(e)}
        return cls.from_entries(n_rows, n_cols, entries)

    @classmethod
    def sym(cls, name: str, n_rows: int = 1, n_cols: int = 1,
            pattern: Optional[SparsityPattern] = None) -> "SymbolicMatrix":
        """Fresh symbols ``name_0, name_1, ...``, one per non-zero of `pattern` (dense by default)."""
        if pattern is None:
            pattern = SparsityPattern.dense(n_rows, n_cols)
        elif pattern.shape != (n_rows, n_cols):
            raise ValueError(f"Pattern is {pattern.n_rows}x{pattern.n_cols}, expected {n_rows}x{n_cols}.")
        return cls(pattern, [sympy.Symbol(f"{name}_{k}") for k in range(pattern.nnz)])

    @classmethod
    def from_numeric(cls, M: NumericMatrix) -> "SymbolicMatrix":
        """
        Same pattern (explicit zeros included), values as sympy numbers.
        Integral real values become sympy Integers, so 2.0 reads back as 2.
        """
        return cls(M.sparsity, [_sympy_number(v.item()) for v in M.values])

    @classmethod
    def zeros(cls, n_rows: int, n_cols: int) -> "SymbolicMatrix":
        return cls(SparsityPattern.empty(n_rows, n_cols), ())

    @classmethod
    def coerce(cls, value) -> "SymbolicMatrix":
        if isinstance(value, NumericMatrix):
            return cls.from_numeric(value)
        return super().coerce(value)

    # ------------------------------------------------------------------
    # accessors
    # ------------------------------------------------------------------
    @property
    def n_rows(self) -> int:
        return self._pattern.n_rows

    @property
    def n_cols(self) -> int:
        return self._pattern.n_cols

    @property
    def sparsity(self) -> SparsityPattern:
        return self._pattern

    @property
    def nnz(self) -> int:
        return self._pattern.nnz

    @property
    def values(self) -> Tuple[sympy.Expr, ...]:
        """Entry expressions, column-major."""
        return self._values

    def entries(self) -> Entries:
        return dict(zip(self._pattern.coords(), self._values))

    def entry(self, row: int, col: int) -> sympy.Expr:
        """Entry at (row, col); structurally absent positions read as zero."""
        k = self._pattern.position(row, col)
        return sympy.S.Zero if k is None else self._values[k]

    @property
    def free_symbols(self) -> set:
        return set().union(*(v.free_symbols for v in self._values))

    def to_sympy(self) -> sympy.ImmutableSparseMatrix:
        return sympy.ImmutableSparseMatrix(self.n_rows, self.n_cols, self.entries())

    def evaluate(self, substitutions: Mapping[str, complex]) -> NumericMatrix:
        """
        Numeric value at the given symbol values. The pattern is kept as is,
        so entries that evaluate to zero become explicit zeros.

        :raises ExpressionError: If a free symbol has no value.
        """
        symbols = sort_symbols(self.free_symbols)
        missing = [str(s) for s in symbols if str(s) not in substitutions]
        if missing:
            raise ExpressionError(f"No value supplied for symbol(s): {', '.join(missing)}")
        if not self._values:
            return NumericMatrix.from_pattern(self._pattern, np.zeros(0))
        fn = make_numeric_fn(self._values, symbols)
        result = np.asarray(fn(*(substitutions[str(s)] for s in symbols)))
        if np.iscomplexobj(result) and not np.any(result.imag):
            result = result.real
        return NumericMatrix.from_pattern(self._pattern, result.astype(
            np.complex128 if np.iscomplexobj(result) else np.float64))

    def __eq__(self, other) -> bool:
        if not isinstance(other, SymbolicMatrix):
            return NotImplemented
        return self._pattern == other._pattern and self._values == other._values

    def __hash__(self) -> int:
        return hash((self._pattern, self._values))

    # ------------------------------------------------------------------
    # kernels
    # ------------------------------------------------------------------
    @classmethod
    def _assemble(cls, pattern: SparsityPattern, entries: Entries) -> "SymbolicMatrix":
        return cls(pattern, [entries.get(rc, sympy.S.Zero) for rc in pattern.coords()])

    @classmethod
    def concatenate_horizontally(cls, items: Sequence["SymbolicMatrix"]) -> "SymbolicMatrix":
        check_same_extent(items, 0, "concatenate_horizontally")
        pattern = SparsityPattern.concatenate_horizontally([m._pattern for m in items])
        # column-major storage: horizontal concatenation is plain concatenation
        return cls(pattern, [v for m in items for v in m._values])

    @classmethod
    def concatenate_vertically(cls, items: Sequence["SymbolicMatrix"]) -> "SymbolicMatrix":
        check_same_extent(items, 1, "concatenate_vertically")
        pattern = SparsityPattern.concatenate_vertically([m._pattern for m in items])
        entries: Entries = {}
        offset = 0
        for m in items:
            for (r, c), v in m.entries().items():
                entries[(r + offset, c)] = v
            offset += m.n_rows
        return cls._assemble(pattern, entries)

    def split_horizontally(self, boundaries: Sequence[int]) -> List["SymbolicMatrix"]:
        entries = self.entries()
        out = []
        for lo, hi, pattern in zip(boundaries, boundaries[1:],
                                   self._pattern.split_horizontally(boundaries)):
            out.append(self._assemble(pattern, {(r, c - lo): v for (r, c), v in entries.items()
                                                if lo <= c < hi}))
        return out

    def split_vertically(self, boundaries: Sequence[int]) -> List["SymbolicMatrix"]:
        entries = self.entries()
        out = []
        for lo, hi, pattern in zip(boundaries, boundaries[1:],
                                   self._pattern.split_vertically(boundaries)):
            out.append(self._assemble(pattern, {(r - lo, c): v for (r, c), v in entries.items()
                                                if lo <= r < hi}))
        return out

    @classmethod
    def block_diagonal(cls, items: Sequence["SymbolicMatrix"]) -> "SymbolicMatrix":
        pattern = SparsityPattern.block_diagonal([m._pattern for m in items])
        entries: Entries = {}
        r0 = c0 = 0
        for m in items:
            for (r, c), v in m.entries().items():
                entries[(r + r0, c + c0)] = v
            r0 += m.n_rows
            c0 += m.n_cols
        return cls._assemble(pattern, entries)

    def _product_entries(self, other: "SymbolicMatrix") -> Entries:
        by_row: Dict[int, List[Tuple[int, sympy.Expr]]] = {}
        for (k, j), v in other.entries().items():
            by_row.setdefault(k, []).append((j, v))
        terms: Dict[Tuple[int, int], List[sympy.Expr]] = {}
        for (i, k), a in self.entries().items():
            for j, b in by_row.get(k, ()):
                terms.setdefault((i, j), []).append(a * b)
        return {rc: sympy.Add(*ts) for rc, ts in terms.items()}

    def multiply(self, other: "SymbolicMatrix") -> "SymbolicMatrix":
        check_product(self, other, "multiply")
        pattern = self._pattern.multiply(other._pattern)
        return self._assemble(pattern, self._product_entries(other))

    def multiply_into_pattern(self, other: "SymbolicMatrix",
                              target: "SymbolicMatrix") -> "SymbolicMatrix":
        check_target(self, other, target, "multiply_into_pattern")
        prod = self._product_entries(other)
        values = [z + prod[rc] if rc in prod else z
                  for rc, z in zip(target._pattern.coords(), target._values)]
        return SymbolicMatrix(target._pattern, values)

    def transpose(self) -> "SymbolicMatrix":
        pattern = self._pattern.transpose()
        return self._assemble(pattern, {(c, r): v for (r, c), v in self.entries().items()})

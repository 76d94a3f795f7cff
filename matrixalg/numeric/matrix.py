# matrixalg/numeric/matrix.py
from __future__ import annotations
from typing import Sequence, List

import numpy as np
import scipy.sparse as sp

from matrixalg.core.representation import MatrixRepresentation
from matrixalg.core.validation import check_product, check_same_extent, check_target
from matrixalg.sparsity.pattern import SparsityPattern


def _freeze(M: sp.csc_matrix) -> sp.csc_matrix:
    """Canonicalise CSC storage in place and mark its buffers read-only."""
    M.sum_duplicates()                      # also sorts indices, keeps explicit zeros
    for arr in (M.data, M.indices, M.indptr):
        arr.flags.writeable = False
    return M


class NumericMatrix(MatrixRepresentation):
    """
    Numeric sparse matrix backed by a canonical ``scipy.sparse.csc_matrix``.

    Every stored entry, explicit zeros included, is structurally non-zero.
    Products keep the pattern scipy computes, which is exact.
    """
    __slots__ = ("_csc",)
    priority = 1

    def __init__(self, M: "np.ndarray|sp.spmatrix"):
        if sp.issparse(M):
            csc = sp.csc_matrix(M, copy=True)
        else:
            arr = np.atleast_2d(np.asarray(M))
            if arr.ndim != 2:
                raise ValueError(f"Expected a 2-D array, got shape {arr.shape}.")
            csc = sp.csc_matrix(arr)        # drops zeros; use `dense` to keep them
        if csc.dtype.kind not in "fc":
            csc = csc.astype(np.float64)
        self._csc = _freeze(csc)

    # ------------------------------------------------------------------
    # constructors
    # ------------------------------------------------------------------
    @classmethod
    def from_triplets(cls, n_rows: int, n_cols: int, rows: Sequence[int],
                      cols: Sequence[int], values: Sequence[complex]) -> "NumericMatrix":
        """COO-style construction; duplicate coordinates are summed."""
        values = np.asarray(values)
        rows = np.asarray(rows, dtype=np.int64)
        cols = np.asarray(cols, dtype=np.int64)
        return cls(sp.coo_matrix((values, (rows, cols)),
                                 shape=(n_rows, n_cols)))

    @classmethod
    def from_pattern(cls, pattern: SparsityPattern, values: Sequence[complex]) -> "NumericMatrix":
        """One value per non-zero of `pattern`, column-major."""
        values = np.asarray(values)
        if values.shape != (pattern.nnz,):
            raise ValueError(f"Expected {pattern.nnz} values, got shape {values.shape}.")
        return cls(sp.coo_matrix((values, (pattern.rows, pattern.cols)), shape=pattern.shape))

    @classmethod
    def dense(cls, M: "np.ndarray") -> "NumericMatrix":
        """Fully dense pattern; zero entries are stored explicitly."""
        arr = np.atleast_2d(np.asarray(M))
        pattern = SparsityPattern.dense(*arr.shape)
        return cls.from_pattern(pattern, arr.ravel(order="F"))

    @classmethod
    def zeros(cls, n_rows: int, n_cols: int) -> "NumericMatrix":
        return cls(sp.csc_matrix((n_rows, n_cols), dtype=np.float64))

    @classmethod
    def eye(cls, n: int) -> "NumericMatrix":
        return cls(sp.eye(n, format="csc"))

    @classmethod
    def coerce(cls, value) -> "NumericMatrix":
        if isinstance(value, np.ndarray) or sp.issparse(value):
            return cls(value)
        return super().coerce(value)

    # ------------------------------------------------------------------
    # accessors
    # ------------------------------------------------------------------
    @property
    def n_rows(self) -> int:
        return self._csc.shape[0]

    @property
    def n_cols(self) -> int:
        return self._csc.shape[1]

    @property
    def sparsity(self) -> SparsityPattern:
        return SparsityPattern(self._csc)

    @property
    def nnz(self) -> int:
        return self._csc.nnz

    @property
    def dtype(self) -> np.dtype:
        return self._csc.dtype

    @property
    def values(self) -> np.ndarray:
        """Stored values, column-major (read-only view)."""
        return self._csc.data

    def entry(self, row: int, col: int):
        return self._csc[row, col]

    def to_scipy(self) -> sp.csc_matrix:
        """Writable copy of the underlying CSC matrix."""
        return self._csc.copy()

    def to_dense(self) -> np.ndarray:
        return self._csc.toarray()

    def __eq__(self, other) -> bool:
        if not isinstance(other, NumericMatrix):
            return NotImplemented
        a, b = self._csc, other._csc
        return (a.shape == b.shape
                and np.array_equal(a.indptr, b.indptr)
                and np.array_equal(a.indices, b.indices)
                and np.array_equal(a.data, b.data))

    def __hash__(self) -> int:
        # adding 0.0 folds -0.0 into 0.0, matching np.array_equal in __eq__
        return hash((self.sparsity.fingerprint(), (self._csc.data + 0.0).tobytes()))

    # ------------------------------------------------------------------
    # kernels
    # ------------------------------------------------------------------
    @classmethod
    def concatenate_horizontally(cls, items: Sequence["NumericMatrix"]) -> "NumericMatrix":
        check_same_extent(items, 0, "concatenate_horizontally")
        return cls(sp.hstack([m._csc for m in items], format="csc"))

    @classmethod
    def concatenate_vertically(cls, items: Sequence["NumericMatrix"]) -> "NumericMatrix":
        check_same_extent(items, 1, "concatenate_vertically")
        return cls(sp.vstack([m._csc for m in items], format="csc"))

    def split_horizontally(self, boundaries: Sequence[int]) -> List["NumericMatrix"]:
        return [NumericMatrix(self._csc[:, lo:hi]) for lo, hi in zip(boundaries, boundaries[1:])]

    def split_vertically(self, boundaries: Sequence[int]) -> List["NumericMatrix"]:
        csr = self._csc.tocsr()             # row slices are cheap in CSR
        return [NumericMatrix(csr[lo:hi, :]) for lo, hi in zip(boundaries, boundaries[1:])]

    @classmethod
    def block_diagonal(cls, items: Sequence["NumericMatrix"]) -> "NumericMatrix":
        return cls(sp.block_diag([m._csc for m in items], format="csc"))

    def multiply(self, other: "NumericMatrix") -> "NumericMatrix":
        check_product(self, other, "multiply")
        return NumericMatrix(self._csc @ other._csc)

    def multiply_into_pattern(self, other: "NumericMatrix",
                              target: "NumericMatrix") -> "NumericMatrix":
        check_target(self, other, target, "multiply_into_pattern")
        prod = (self._csc @ other._csc).tocsr()
        rows, cols = target.sparsity.rows, target.sparsity.cols
        if rows.size:
            picked = np.asarray(prod[rows, cols]).ravel()
        else:
            picked = np.zeros(0, dtype=prod.dtype)
        dtype = np.result_type(target.dtype, prod.dtype)
        data = target.values.astype(dtype) + picked.astype(dtype)
        return NumericMatrix(sp.csc_matrix((data, target._csc.indices.copy(),
                                            target._csc.indptr.copy()), shape=target.shape))

    def transpose(self) -> "NumericMatrix":
        return NumericMatrix(self._csc.T)

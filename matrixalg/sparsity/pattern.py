# matrixalg/sparsity/pattern.py
from __future__ import annotations
import hashlib
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
import scipy.sparse as sp

from matrixalg.core.representation import MatrixRepresentation
from matrixalg.core.validation import check_product, check_same_extent, check_target


def _canonical(M: "sp.spmatrix") -> sp.csc_matrix:
    """Boolean CSC copy with sorted indices, no duplicates and every entry True."""
    M = sp.csc_matrix(M, copy=True)
    M.sum_duplicates()
    M.data = np.ones(M.nnz, dtype=bool)
    return M


class SparsityPattern(MatrixRepresentation):
    """
    Immutable structural pattern: the (row, col) positions that are
    structurally non-zero. Values are implicit.

    Stored as a boolean CSC matrix, so coordinates iterate column-major.
    The pattern also implements the matrix contract; a product of patterns is
    the structural (boolean) product.
    """
    __slots__ = ("_csc", "_key")
    priority = 0

    def __init__(self, M: "sp.spmatrix|np.ndarray"):
        csc = _canonical(M if sp.issparse(M) else sp.csc_matrix(np.asarray(M) != 0))
        for arr in (csc.data, csc.indices, csc.indptr):
            arr.flags.writeable = False
        self._csc = csc
        self._key = None

    # ------------------------------------------------------------------
    # constructors
    # ------------------------------------------------------------------
    @classmethod
    def from_coords(cls, n_rows: int, n_cols: int,
                    coords: Iterable[Tuple[int, int]]) -> "SparsityPattern":
        coords = list(coords)
        rows = np.fromiter((r for r, _ in coords), dtype=np.int64, count=len(coords))
        cols = np.fromiter((c for _, c in coords), dtype=np.int64, count=len(coords))
        data = np.ones(len(coords), dtype=bool)
        return cls(sp.coo_matrix((data, (rows, cols)), shape=(n_rows, n_cols)))

    @classmethod
    def from_matrix(cls, M: "sp.spmatrix|np.ndarray") -> "SparsityPattern":
        """Stored entries of a sparse matrix, or non-zero entries of a dense array."""
        return cls(M)

    @classmethod
    def dense(cls, n_rows: int, n_cols: int) -> "SparsityPattern":
        return cls(sp.csc_matrix(np.ones((n_rows, n_cols), dtype=bool)))

    @classmethod
    def empty(cls, n_rows: int, n_cols: int) -> "SparsityPattern":
        return cls(sp.csc_matrix((n_rows, n_cols), dtype=bool))

    @classmethod
    def diagonal(cls, n: int) -> "SparsityPattern":
        return cls(sp.eye(n, dtype=bool, format="csc"))

    @classmethod
    def zeros(cls, n_rows: int, n_cols: int) -> "SparsityPattern":
        return cls.empty(n_rows, n_cols)

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
    def sparsity(self) -> "SparsityPattern":
        return self

    @property
    def nnz(self) -> int:
        return self._csc.nnz

    @property
    def rows(self) -> np.ndarray:
        """Row index of every non-zero, column-major order."""
        return self._csc.indices

    @property
    def cols(self) -> np.ndarray:
        """Column index of every non-zero, column-major order."""
        return np.repeat(np.arange(self.n_cols), np.diff(self._csc.indptr))

    def coords(self) -> List[Tuple[int, int]]:
        return list(zip(self.rows.tolist(), self.cols.tolist()))

    def position(self, row: int, col: int) -> Optional[int]:
        """Column-major index of (row, col) among the non-zeros, or None if absent."""
        if not (0 <= row < self.n_rows and 0 <= col < self.n_cols):
            return None
        lo, hi = self._csc.indptr[col], self._csc.indptr[col + 1]
        k = lo + int(np.searchsorted(self._csc.indices[lo:hi], row))
        if k < hi and self._csc.indices[k] == row:
            return int(k)
        return None

    def contains(self, row: int, col: int) -> bool:
        return self.position(row, col) is not None

    def to_csc(self) -> sp.csc_matrix:
        """Writable boolean copy."""
        return self._csc.copy()

    def fingerprint(self) -> bytes:
        """Order-independent digest of the pattern only."""
        if self._key is None:
            h = hashlib.blake2b(digest_size=16)
            h.update(np.asarray(self.shape, dtype=np.int64).tobytes())
            h.update(self._csc.indptr.astype(np.int64).tobytes())
            h.update(self._csc.indices.astype(np.int64).tobytes())
            self._key = h.digest()
        return self._key

    def __eq__(self, other) -> bool:
        if not isinstance(other, SparsityPattern):
            return NotImplemented
        return self.fingerprint() == other.fingerprint()

    def __hash__(self) -> int:
        return hash(self.fingerprint())

    # ------------------------------------------------------------------
    # kernels
    # ------------------------------------------------------------------
    @classmethod
    def concatenate_horizontally(cls, items: Sequence["SparsityPattern"]) -> "SparsityPattern":
        check_same_extent(items, 0, "concatenate_horizontally")
        return cls(sp.hstack([p._csc for p in items], format="csc"))

    @classmethod
    def concatenate_vertically(cls, items: Sequence["SparsityPattern"]) -> "SparsityPattern":
        check_same_extent(items, 1, "concatenate_vertically")
        return cls(sp.vstack([p._csc for p in items], format="csc"))

    def split_horizontally(self, boundaries: Sequence[int]) -> List["SparsityPattern"]:
        return [SparsityPattern(self._csc[:, lo:hi]) for lo, hi in zip(boundaries, boundaries[1:])]

    def split_vertically(self, boundaries: Sequence[int]) -> List["SparsityPattern"]:
        csr = self._csc.tocsr()
        return [SparsityPattern(csr[lo:hi, :]) for lo, hi in zip(boundaries, boundaries[1:])]

    @classmethod
    def block_diagonal(cls, items: Sequence["SparsityPattern"]) -> "SparsityPattern":
        return cls(sp.block_diag([p._csc for p in items], format="csc", dtype=bool))

    def multiply(self, other: "SparsityPattern") -> "SparsityPattern":
        check_product(self, other, "multiply")
        # integer path counts: a position is structural iff at least one k pairs up
        a = self._csc.astype(np.int64)
        b = other._csc.astype(np.int64)
        return SparsityPattern((a @ b).tocsc())

    def multiply_into_pattern(self, other: "SparsityPattern",
                              target: "SparsityPattern") -> "SparsityPattern":
        check_target(self, other, target, "multiply_into_pattern")
        # the restricted product never leaves the target's pattern
        return target

    def transpose(self) -> "SparsityPattern":
        return SparsityPattern(self._csc.T)

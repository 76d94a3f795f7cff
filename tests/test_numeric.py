import numpy as np
import pytest
import scipy.sparse as sp
from matrixalg.core.exceptions import DimensionMismatchError
from matrixalg.core.algebra import blkdiag, horzcat, horzsplit, mul, transpose, vertcat, vertsplit
from matrixalg.numeric.matrix import NumericMatrix
from matrixalg.sparsity.pattern import SparsityPattern


def test_dense_input_drops_zeros():
    M = NumericMatrix(np.array([[1, 0], [0, 2]]))
    assert M.nnz == 2
    assert M.dtype == np.float64
    np.testing.assert_array_equal(M.to_dense(), [[1.0, 0.0], [0.0, 2.0]])


def test_dense_constructor_keeps_zeros():
    M = NumericMatrix.dense(np.array([[1.0, 0.0], [0.0, 2.0]]))
    assert M.nnz == 4
    assert M.sparsity == SparsityPattern.dense(2, 2)


def test_from_triplets_sums_duplicates():
    M = NumericMatrix.from_triplets(2, 3, [0, 0, 1], [2, 2, 0], [1.0, 2.5, -1.0])
    assert M.nnz == 2
    assert M.entry(0, 2) == 3.5
    assert M.entry(1, 0) == -1.0


def test_from_pattern_checks_length():
    with pytest.raises(ValueError, match="Expected 2 values"):
        NumericMatrix.from_pattern(SparsityPattern.diagonal(2), [1.0])


def test_explicit_zeros_survive_concatenation_and_splitting():
    z = NumericMatrix.dense(np.zeros((2, 2)))
    e = NumericMatrix.eye(2)
    h = horzcat(z, e)
    assert h.nnz == 6
    left, right = horzsplit(h, 2)
    assert left == z
    assert right == e
    v = vertcat(z, e)
    top, bottom = vertsplit(v, [0, 2, 4])
    assert top.nnz == 4
    assert bottom == e


def test_blkdiag_values():
    a = NumericMatrix(np.array([[1.0, 2.0]]))
    b = NumericMatrix(np.array([[3.0]]))
    np.testing.assert_array_equal(blkdiag(a, b).to_dense(), [[1.0, 2.0, 0.0], [0.0, 0.0, 3.0]])


def test_product_matches_numpy():
    rng = np.random.default_rng(0)
    A = rng.standard_normal((3, 4))
    B = rng.standard_normal((4, 2))
    P = mul(NumericMatrix(A), NumericMatrix(B))
    np.testing.assert_allclose(P.to_dense(), A @ B)


def test_complex_values():
    A = NumericMatrix(np.array([[1j, 0.0], [0.0, 2.0]]))
    assert A.dtype == np.complex128
    np.testing.assert_array_equal(transpose(A).to_dense(), A.to_dense().T)
    R = mul(A, A, NumericMatrix.dense(np.ones((2, 2))))
    np.testing.assert_array_equal(R.to_dense(), np.array([[0.0, 1.0], [1.0, 5.0]]))


def test_values_are_immutable():
    M = NumericMatrix.eye(2)
    with pytest.raises(ValueError):
        M.values[0] = 5.0
    copy = M.to_scipy()
    copy.data[0] = 5.0
    assert M.entry(0, 0) == 1.0


def test_coerce_accepts_arrays_and_scipy():
    assert NumericMatrix.coerce(np.eye(2)) == NumericMatrix.eye(2)
    assert NumericMatrix.coerce(sp.eye(2)) == NumericMatrix.eye(2)


def test_equality_considers_values_and_pattern():
    a = NumericMatrix(np.array([[1.0, 2.0]]))
    assert a == NumericMatrix(np.array([[1.0, 2.0]]))
    assert a != NumericMatrix(np.array([[1.0, 3.0]]))
    assert a != NumericMatrix.dense(np.array([[1.0, 2.0, 0.0]]))
    assert hash(a) == hash(NumericMatrix(np.array([[1.0, 2.0]])))


def test_signed_zeros_hash_alike():
    pos = NumericMatrix.dense(np.array([[0.0, 1.0]]))
    neg = NumericMatrix.dense(np.array([[-0.0, 1.0]]))
    assert pos == neg
    assert hash(pos) == hash(neg)
    assert len({pos, neg}) == 1


def test_kernels_check_shapes():
    a = NumericMatrix(np.ones((2, 2)))
    b = NumericMatrix(np.ones((3, 2)))
    with pytest.raises(DimensionMismatchError, match="row counts differ"):
        NumericMatrix.concatenate_horizontally([a, b])
    with pytest.raises(DimensionMismatchError, match="column counts differ"):
        NumericMatrix.concatenate_vertically([a, NumericMatrix(np.ones((2, 3)))])
    with pytest.raises(DimensionMismatchError, match="inner dimensions differ"):
        b.multiply(b)
    with pytest.raises(DimensionMismatchError, match="target is 2x2"):
        b.multiply_into_pattern(a, a)

import numpy as np
import pytest
from matrixalg.numeric.matrix import NumericMatrix
from matrixalg.sparsity.pattern import SparsityPattern
from matrixalg.symbolic.matrix import SymbolicMatrix


def _make_pattern(arr, name):
    return SparsityPattern.from_matrix(np.asarray(arr))

def _make_numeric(arr, name):
    return NumericMatrix(np.asarray(arr, dtype=float))

def _make_symbolic(arr, name):
    # one fresh symbol per non-zero of the template
    pattern = SparsityPattern.from_matrix(np.asarray(arr))
    return SymbolicMatrix.sym(name, *pattern.shape, pattern=pattern)


MAKERS = {
    "pattern": _make_pattern,
    "numeric": _make_numeric,
    "symbolic": _make_symbolic,
}


@pytest.fixture(params=sorted(MAKERS))
def make(request):
    """Build a matrix value of the parametrised representation from a dense template."""
    return MAKERS[request.param]


@pytest.fixture
def wide_template():
    # 3x7 with a few structural holes and an all-zero column
    return np.array([
        [1, 0, 2, 0, 3, 0, 4],
        [0, 5, 0, 0, 6, 7, 0],
        [8, 0, 0, 0, 0, 9, 1],
    ])


@pytest.fixture
def tall_template(wide_template):
    return wide_template.T


@pytest.fixture
def dummy_logger(caplog):
    caplog.set_level("DEBUG")
    caplog.set_level("DEBUG", logger="matrixalg")
    return caplog

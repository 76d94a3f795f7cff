import numpy as np
import pytest
import sympy
import yaml
from matrixalg.core.algebra import horzcat
from matrixalg.core.exceptions import DocumentParseError
from matrixalg.inout.matrix_reader import read_matrix
from matrixalg.numeric.matrix import NumericMatrix
from matrixalg.sparsity.pattern import SparsityPattern
from matrixalg.symbolic.matrix import SymbolicMatrix


def _write_yaml(path, matrix):
    path.write_text(yaml.safe_dump({"matrix": matrix}))
    return str(path)


def test_numeric_yaml(tmp_path):
    path = _write_yaml(tmp_path / "m.yaml", {
        "rows": 2, "cols": 3,
        "entry": [{"row": 0, "col": 1, "value": 2.5},
                  {"row": 1, "col": 2, "value": 0.0}],
    })
    M = read_matrix(path)
    assert isinstance(M, NumericMatrix)
    assert M.nnz == 2                       # explicit zero kept
    np.testing.assert_array_equal(M.to_dense(), [[0.0, 2.5, 0.0], [0.0, 0.0, 0.0]])


def test_symbolic_xml(tmp_path):
    path = tmp_path / "m.xml"
    path.write_text(
        '<matrix rows="2" cols="2" kind="symbolic">'
        '<entry row="0" col="0" value="x + 1"/>'
        '<entry row="1" col="1" value="sin(y)"/>'
        '</matrix>'
    )
    M = read_matrix(str(path))
    assert isinstance(M, SymbolicMatrix)
    x, y = sympy.symbols("x y")
    assert M.entry(0, 0) == x + 1
    assert M.entry(1, 1) == sympy.sin(y)


def test_pattern_xml_nested_in_root(tmp_path):
    path = tmp_path / "p.xml"
    path.write_text('<doc><matrix rows="2" cols="2" kind="pattern">'
                    '<entry row="0" col="1"/></matrix></doc>')
    P = read_matrix(str(path))
    assert P == SparsityPattern.from_coords(2, 2, [(0, 1)])


def test_complex_values(tmp_path):
    path = tmp_path / "c.xml"
    path.write_text('<matrix rows="1" cols="1"><entry row="0" col="0" value="1+2j"/></matrix>')
    assert read_matrix(str(path)).entry(0, 0) == 1 + 2j


def test_read_matrices_compose(tmp_path):
    a = read_matrix(_write_yaml(tmp_path / "a.yaml", {
        "rows": 1, "cols": 1, "entry": [{"row": 0, "col": 0, "value": 1.0}]}))
    b = read_matrix(_write_yaml(tmp_path / "b.yaml", {
        "rows": 1, "cols": 1, "entry": [{"row": 0, "col": 0, "value": 2.0}]}))
    np.testing.assert_array_equal(horzcat(a, b).to_dense(), [[1.0, 2.0]])


@pytest.mark.parametrize("matrix, message", [
    ({"cols": 2}, "validation failed"),
    ({"rows": 1, "cols": 1, "kind": "tensor"}, "validation failed"),
    ({"rows": 1, "cols": 1, "entry": [{"row": 1, "col": 0, "value": 1}]}, "outside"),
    ({"rows": 1, "cols": 1, "entry": [{"row": 0, "col": 0}]}, "has no value"),
    ({"rows": 1, "cols": 1, "entry": [{"row": 0, "col": 0, "value": 1},
                                      {"row": 0, "col": 0, "value": 2}]}, "Duplicate"),
    ({"rows": 1, "cols": 1, "entry": [{"row": 0, "col": 0, "value": "abc"}]}, "not a number"),
    ({"rows": 1, "cols": 1, "kind": "symbolic",
      "entry": [{"row": 0, "col": 0, "value": "1 +* 2"}]}, "Bad expression"),
])
def test_invalid_matrix_documents(tmp_path, matrix, message):
    path = _write_yaml(tmp_path / "bad.yaml", matrix)
    with pytest.raises(DocumentParseError, match=message):
        read_matrix(path)


def test_wrong_root(tmp_path):
    path = tmp_path / "x.xml"
    path.write_text("<vector/>")
    with pytest.raises(DocumentParseError, match="Expected a 'matrix' node"):
        read_matrix(str(path))


def test_unknown_suffix(tmp_path):
    with pytest.raises(DocumentParseError, match="Cannot infer a document backend"):
        read_matrix(str(tmp_path / "m.json"))


def test_symbolic_document_cannot_run_code(tmp_path):
    marker = tmp_path / "marker"
    path = tmp_path / "evil.xml"
    path.write_text(
        '<matrix rows="1" cols="1" kind="symbolic">'
        f'<entry row="0" col="0" value="__import__(&quot;pathlib&quot;).Path({str(marker)!r}).touch()"/>'
        '</matrix>'
    )
    with pytest.raises(DocumentParseError, match="Bad expression"):
        read_matrix(str(path))
    assert not marker.exists()

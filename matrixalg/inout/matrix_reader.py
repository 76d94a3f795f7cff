# matrixalg/inout/matrix_reader.py
"""
Build matrix values from parsed documents.

Format (XML shown, YAML maps onto the same tree)::

    <matrix rows="2" cols="3" kind="numeric">
      <entry row="0" col="1" value="2.5"/>
    </matrix>

`kind` is one of numeric (default), symbolic or pattern. Pattern matrices
ignore `value`; the other kinds require it on every entry.
"""
from pathlib import Path
from typing import Any, Dict, Optional

from cerberus import Validator

from matrixalg.core.exceptions import DocumentParseError, ExpressionError
from matrixalg.core.representation import MatrixRepresentation
from matrixalg.inout.document import DocumentLoader, DocumentNode
from matrixalg.numeric.matrix import NumericMatrix
from matrixalg.sparsity.pattern import SparsityPattern
from matrixalg.symbolic.matrix import SymbolicMatrix
from matrixalg.utils.logging_config import get_logger

logger = get_logger(__name__)

MATRIX_SCHEMA: Dict[str, Any] = {
    'rows': {'type': 'integer', 'coerce': int, 'min': 0, 'required': True},
    'cols': {'type': 'integer', 'coerce': int, 'min': 0, 'required': True},
    'kind': {
        'type': 'string',
        'allowed': ['numeric', 'symbolic', 'pattern'],
        'default': 'numeric',
    },
    'entry': {
        'type': 'list',
        'default': [],
        'schema': {
            'type': 'dict',
            'schema': {
                'row': {'type': 'integer', 'coerce': int, 'min': 0, 'required': True},
                'col': {'type': 'integer', 'coerce': int, 'min': 0, 'required': True},
                'value': {'type': 'string', 'nullable': True, 'default': None},
            },
        },
    },
}

SUFFIX_BACKENDS = {".yaml": "yaml", ".yml": "yaml", ".xml": "xml"}


def _node_to_dict(node: DocumentNode) -> Dict[str, Any]:
    data: Dict[str, Any] = {k: node.value(k) for k in ("rows", "cols", "kind")
                            if node.value(k) is not None}
    data['entry'] = [{k: e.value(k) for k in ("row", "col", "value") if e.value(k) is not None}
                     for e in node.find_all("entry")]
    return data


def _numeric_value(src: str) -> complex:
    try:
        return float(src)
    except ValueError:
        pass
    try:
        return complex(src.replace(" ", ""))
    except ValueError as exc:
        raise DocumentParseError(f"Entry value {src!r} is not a number.") from exc


def matrix_from_node(node: DocumentNode) -> MatrixRepresentation:
    """
    Convert a `matrix` node into a NumericMatrix, SymbolicMatrix or SparsityPattern.

    Raises:
        DocumentParseError: If the node does not describe a valid matrix.
    """
    if node.name != "matrix":
        inner = node.child("matrix")
        if inner is None:
            raise DocumentParseError(f"Expected a 'matrix' node, got '{node.name}'.")
        node = inner

    validator = Validator(MATRIX_SCHEMA)
    if not validator.validate(_node_to_dict(node)):
        logger.error("Matrix document validation errors: %s", validator.errors)
        raise DocumentParseError("Matrix document validation failed: " + str(validator.errors))
    doc = validator.document
    n_rows, n_cols, kind = doc['rows'], doc['cols'], doc['kind']

    seen = set()
    for e in doc['entry']:
        rc = (e['row'], e['col'])
        if e['row'] >= n_rows or e['col'] >= n_cols:
            raise DocumentParseError(f"Entry {rc} outside a {n_rows}x{n_cols} matrix.")
        if rc in seen:
            raise DocumentParseError(f"Duplicate entry {rc}.")
        if kind != 'pattern' and e['value'] is None:
            raise DocumentParseError(f"Entry {rc} has no value.")
        seen.add(rc)

    if kind == 'pattern':
        return SparsityPattern.from_coords(n_rows, n_cols, [(e['row'], e['col']) for e in doc['entry']])
    if kind == 'symbolic':
        try:
            return SymbolicMatrix.from_entries(
                n_rows, n_cols, {(e['row'], e['col']): e['value'] for e in doc['entry']})
        except ExpressionError as exc:
            raise DocumentParseError(str(exc)) from exc
    return NumericMatrix.from_triplets(
        n_rows, n_cols,
        [e['row'] for e in doc['entry']],
        [e['col'] for e in doc['entry']],
        [_numeric_value(e['value']) for e in doc['entry']],
    )


def read_matrix(path: str, backend: Optional[str] = None,
                options: Optional[Dict[str, Any]] = None) -> MatrixRepresentation:
    """
    Parse `path` and build the matrix it describes.
    The backend defaults to the one matching the file suffix.
    """
    if backend is None:
        suffix = Path(path).suffix.lower()
        backend = SUFFIX_BACKENDS.get(suffix)
        if backend is None:
            raise DocumentParseError(f"Cannot infer a document backend for '{path}'; pass backend=...")
    loader = DocumentLoader(backend, options)
    logger.debug("Reading matrix from '%s' with backend '%s'", path, backend)
    return matrix_from_node(loader.parse(path))

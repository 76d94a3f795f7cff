# matrixalg/symbolic/expressions.py
import ast
from typing import Any, Callable, Sequence

import numpy as np
import sympy

from matrixalg.core.exceptions import ExpressionError
from matrixalg.utils.logging_config import get_logger

logger = get_logger(__name__)

_ALLOWED_FUNCS = {
    # scalars
    "sin": sympy.sin, "cos": sympy.cos, "tan": sympy.tan, "asin": sympy.asin,
    "acos": sympy.acos, "atan": sympy.atan, "exp": sympy.exp, "log": sympy.log,
    "sqrt": sympy.sqrt, "abs": sympy.Abs,
    # constants
    "pi": sympy.pi, "e": sympy.E, "I": sympy.I,
}

_NUMPY_FUNCS = {
    "sqrt": np.sqrt, "abs": np.abs,
    **{n: getattr(np, n) for n in ("sin", "cos", "tan", "arcsin", "arccos", "arctan", "log", "exp")},
}


_ALLOWED_NODES = (
    ast.Expression, ast.BinOp, ast.UnaryOp, ast.Constant, ast.Name, ast.Call, ast.Load,
    ast.Add, ast.Sub, ast.Mult, ast.Div, ast.Pow, ast.BitXor, ast.Mod,
    ast.UAdd, ast.USub,
)


def _check_syntax(src: str) -> None:
    """Reject anything but arithmetic, names and calls of whitelisted functions."""
    try:
        tree = ast.parse(src.strip(), mode="eval")
    except SyntaxError as exc:
        raise ExpressionError(f"Bad expression {src!r}: {exc.msg}") from exc
    for node in ast.walk(tree):
        if not isinstance(node, _ALLOWED_NODES):
            raise ExpressionError(f"Bad expression {src!r}: {type(node).__name__} is not allowed")
        if isinstance(node, ast.Constant) and not isinstance(node.value, (int, float, complex)):
            raise ExpressionError(f"Bad expression {src!r}: only numeric literals are allowed")
        if isinstance(node, ast.Name) and "__" in node.id:
            raise ExpressionError(f"Bad expression {src!r}: name {node.id!r} is not allowed")
        if isinstance(node, ast.Call):
            if not (isinstance(node.func, ast.Name) and node.func.id in _ALLOWED_FUNCS) or node.keywords:
                raise ExpressionError(f"Bad expression {src!r}: call is not allowed")


def parse_expr(src: Any) -> sympy.Expr:
    """
    Turn a matrix entry into a sympy expression.

    Strings are parsed as pure maths: arithmetic, numeric literals, symbol
    names and calls of the functions in ``_ALLOWED_FUNCS``. The syntax tree is
    checked before sympy evaluates anything. Numbers and existing sympy
    objects pass through a strict ``sympify``.

    :raises ExpressionError: If the entry cannot be parsed.
    """
    if isinstance(src, sympy.Basic):
        return src
    if isinstance(src, str):
        try:
            _check_syntax(src)
        except ExpressionError as exc:
            logger.error("Rejected entry %r: %s", src, exc)
            raise
    try:
        if isinstance(src, str):
            return sympy.sympify(src, locals=_ALLOWED_FUNCS, convert_xor=True)
        return sympy.sympify(src, strict=True)
    except (sympy.SympifyError, SyntaxError, TypeError) as exc:
        logger.error("Could not parse entry %r: %s", src, exc)
        raise ExpressionError(f"Bad expression {src!r}: {exc}") from exc


def make_numeric_fn(exprs: Sequence[sympy.Expr], symbols: Sequence[sympy.Symbol]) -> Callable[..., list]:
    """Return a NumPy lambda mapping symbol values to the list of entry values."""
    return sympy.lambdify(tuple(symbols), list(exprs), modules=[_NUMPY_FUNCS, "numpy"])


def sort_symbols(symbols) -> list:
    """Deterministic ordering by name."""
    return sorted(symbols, key=lambda s: str(s))


def is_structural_zero(expr: sympy.Expr) -> bool:
    """True only for the literal zero; `x - x` style cancellation is not checked."""
    return expr.is_zero is True and expr.is_number



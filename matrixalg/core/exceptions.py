# matrixalg/core/exceptions.py

class MatrixAlgebraError(Exception):
    """Base exception for matrixalg errors."""
    pass

class InvalidArgumentError(MatrixAlgebraError):
    """Raised when an argument is malformed or out of range."""
    pass

class DimensionMismatchError(MatrixAlgebraError):
    """Raised when operand shapes are incompatible."""
    pass

class RepresentationMismatchError(MatrixAlgebraError):
    """Raised when operands cannot be brought to a common representation."""
    pass

class ExpressionError(MatrixAlgebraError):
    """Raised when a symbolic entry cannot be parsed."""
    pass

class PluginNotFoundError(MatrixAlgebraError):
    """Raised when no document backend matches a name."""
    pass

class DocumentParseError(MatrixAlgebraError):
    """Raised when a document is malformed."""
    pass

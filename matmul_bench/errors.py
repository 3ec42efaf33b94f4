"""
Exceptions raised by the matrix benchmark.

Every error is raised where the violation is detected and aborts the
whole multiplication; nothing here is retried.
"""


class MatrixBenchError(Exception):
    """Base class for all benchmark errors."""


class DimensionMismatchError(MatrixBenchError, ValueError):
    """Operand sizes disagree."""


class InvalidSizeError(MatrixBenchError, ValueError):
    """Size is non-positive, or not a power of two where one is required."""


class OutOfBoundsError(MatrixBenchError, IndexError):
    """A split, merge or element access falls outside the parent matrix."""


class NullOperandError(MatrixBenchError, TypeError):
    """A required matrix argument is missing."""


class InvalidStateError(MatrixBenchError, RuntimeError):
    """The metrics timer was stopped without being started."""


class InvalidArgumentError(MatrixBenchError, ValueError):
    """An argument value is out of its allowed range."""


class MatrixFileError(MatrixBenchError, ValueError):
    """An input file could not be parsed into matrix pairs."""

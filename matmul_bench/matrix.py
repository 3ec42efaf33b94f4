"""
Square matrix container and the elementwise operations the recursive
multipliers are built from.

Matrices are structurally immutable: every operation returns a new Matrix,
with the single exception of ``merge``, which writes a submatrix into a
pre-allocated result in place.
"""
import numpy as np

from matmul_bench.errors import (
    DimensionMismatchError,
    InvalidArgumentError,
    InvalidSizeError,
    NullOperandError,
    OutOfBoundsError,
)

INT64_MAX = np.iinfo(np.int64).max


class Matrix:
    """
    Fixed-size square numeric matrix.
    data: nested sequence or 2-D array (n x n) of real numbers
    """

    __slots__ = ("_values",)

    def __init__(self, data):
        if data is None:
            raise NullOperandError("Matrix data cannot be None.")

        values = np.array(data)
        if values.ndim != 2 or values.shape[0] != values.shape[1]:
            raise DimensionMismatchError(
                f"Matrix must be square (n x n), but got shape {values.shape}"
            )
        if values.shape[0] == 0:
            raise InvalidSizeError("Matrix size must be a positive integer.")
        if values.dtype.kind not in "iuf":
            raise InvalidArgumentError(
                f"Matrix values must be real numbers, not {values.dtype}"
            )
        if values.dtype.kind in "iu" and values.dtype != np.int64:
            # Integer matrices are always stored as int64
            if values.max() > INT64_MAX:
                raise InvalidArgumentError(
                    f"Matrix value {values.max()} does not fit in a 64-bit integer."
                )
            values = values.astype(np.int64)

        self._values = values

    @classmethod
    def _wrap(cls, values):
        # Adopt an already validated array without copying it
        matrix = cls.__new__(cls)
        matrix._values = values
        return matrix

    @property
    def size(self):
        return self._values.shape[0]

    @property
    def dtype(self):
        return self._values.dtype

    def get(self, row, col):
        """Return the value at (row, col), checking both indices."""
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise OutOfBoundsError(
                f"Invalid indices ({row}, {col}) in a {self.size}x{self.size} matrix."
            )
        return self._values[row, col].item()

    def to_array(self):
        """Return a copy of the values as a 2-D numpy array."""
        return self._values.copy()

    def tolist(self):
        return self._values.tolist()

    def is_zero(self):
        return not self._values.any()

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.size == other.size and np.array_equal(self._values, other._values)

    __hash__ = None

    def __repr__(self):
        return f"Matrix(size={self.size}, dtype={self.dtype}, values={self.tolist()!r})"


def is_power_of_two(n):
    """True if n is 2^k for some non-negative integer k."""
    return n > 0 and (n & (n - 1)) == 0


def check_power_of_two(size):
    if not is_power_of_two(size):
        raise InvalidSizeError(f"Matrix size must be a power of two, but got {size}")


def require_operands(*operands):
    if any(operand is None for operand in operands):
        raise NullOperandError("One or more matrix operands are None.")


def require_same_size(a, b):
    require_operands(a, b)
    if a.size != b.size:
        raise DimensionMismatchError(
            f"Matrices must be the same size, but got {a.size} and {b.size}"
        )


def add(a, b):
    """Elementwise sum of two same-size matrices."""
    require_same_size(a, b)
    return Matrix._wrap(a._values + b._values)


def subtract(a, b):
    """Elementwise difference a - b of two same-size matrices."""
    require_same_size(a, b)
    return Matrix._wrap(a._values - b._values)


def split(source, row_offset, col_offset, new_size):
    """
    Copy a new_size x new_size block of source starting at the given offsets.
    """
    require_operands(source)
    if new_size < 1:
        raise InvalidSizeError(f"Submatrix size must be positive, but got {new_size}")
    if (
        row_offset < 0
        or col_offset < 0
        or row_offset + new_size > source.size
        or col_offset + new_size > source.size
    ):
        raise OutOfBoundsError(
            f"Block of size {new_size} at ({row_offset}, {col_offset}) "
            f"does not fit in a {source.size}x{source.size} matrix."
        )

    block = source._values[row_offset:row_offset + new_size, col_offset:col_offset + new_size]
    return Matrix._wrap(block.copy())


def merge(target, sub, row_offset, col_offset):
    """
    Write sub into target at the given offsets.

    This is the only operation that mutates a Matrix. It is meant for
    filling a freshly allocated result, never a matrix anyone else holds.
    """
    require_operands(target, sub)
    if (
        row_offset < 0
        or col_offset < 0
        or row_offset + sub.size > target.size
        or col_offset + sub.size > target.size
    ):
        raise OutOfBoundsError(
            f"Submatrix of size {sub.size} at ({row_offset}, {col_offset}) "
            f"does not fit in a {target.size}x{target.size} matrix."
        )

    target._values[row_offset:row_offset + sub.size, col_offset:col_offset + sub.size] = sub._values


def split_quadrants(source):
    """Return the (top-left, top-right, bottom-left, bottom-right) quadrants."""
    require_operands(source)
    if source.size % 2:
        raise InvalidSizeError(f"Cannot split a matrix of odd size {source.size}")

    half = source.size // 2
    return (
        split(source, 0, 0, half),
        split(source, 0, half, half),
        split(source, half, 0, half),
        split(source, half, half, half),
    )


def merge_quadrants(c11, c12, c21, c22):
    """Assemble four equal quadrants into a new matrix of twice their size."""
    require_operands(c11, c12, c21, c22)
    half = c11.size
    for quadrant in (c12, c21, c22):
        require_same_size(c11, quadrant)

    dtype = np.result_type(c11.dtype, c12.dtype, c21.dtype, c22.dtype)
    result = Matrix._wrap(np.zeros((2 * half, 2 * half), dtype=dtype))
    merge(result, c11, 0, 0)
    merge(result, c12, 0, half)
    merge(result, c21, half, 0)
    merge(result, c22, half, half)
    return result


def zeros(size, dtype=np.int64):
    check_power_of_two(size)
    return Matrix(np.zeros((size, size), dtype=dtype))


def identity(size, dtype=np.int64):
    check_power_of_two(size)
    return Matrix(np.eye(size, dtype=dtype))


def random_matrix(size, low=-10, high=10, seed=None):
    """
    Matrix of uniformly drawn integers in [low, high].
    seed: anything accepted by numpy.random.default_rng
    """
    if size < 1:
        raise InvalidSizeError(f"Matrix size must be a positive integer, but got {size}")
    if low > high:
        raise InvalidArgumentError("Minimum value cannot be greater than maximum value.")

    rng = np.random.default_rng(seed)
    return Matrix._wrap(rng.integers(low, high + 1, size=(size, size), dtype=np.int64))


def matrices_equal(a, b, tolerance=0.0):
    """
    Compare two matrices. Integer matrices must match exactly; when either
    holds floats the comparison allows the given absolute/relative tolerance.
    """
    require_operands(a, b)
    if a.size != b.size:
        return False
    if tolerance and (a.dtype.kind == "f" or b.dtype.kind == "f"):
        return bool(np.allclose(a._values, b._values, rtol=tolerance, atol=tolerance))
    return bool(np.array_equal(a._values, b._values))


def format_matrix(matrix):
    """Render a matrix as fixed-width rows, one line per row."""
    cell = "{:4d}" if matrix.dtype.kind in "iu" else "{:10.3f}"
    return "\n".join(
        " ".join(cell.format(value) for value in row) for row in matrix.tolist()
    )


def zero_product(a, b):
    """The all-zero result of multiplying a by b, without multiplying."""
    require_same_size(a, b)
    return Matrix._wrap(np.zeros((a.size, a.size), dtype=np.result_type(a.dtype, b.dtype)))


def largest_magnitude(matrix):
    return max(abs(int(matrix._values.max())), abs(int(matrix._values.min())))


def check_integer_range(a, b):
    """
    Reject integer operands whose product could leave the int64 range.

    Every intermediate of the naive loop and of both divide-and-conquer
    schemes is bounded by 4 * n^4 * max|a| * max|b|, so operands under that
    bound give exact products on every path. Float operands are not checked.
    """
    if a.dtype.kind not in "iu" or b.dtype.kind not in "iu":
        return
    n = a.size
    bound = 4 * n ** 4 * largest_magnitude(a) * largest_magnitude(b)
    if bound > INT64_MAX:
        raise InvalidArgumentError(
            f"Integer products of these {n}x{n} matrices may overflow 64 bits "
            f"(largest magnitudes {largest_magnitude(a)} and {largest_magnitude(b)})."
        )

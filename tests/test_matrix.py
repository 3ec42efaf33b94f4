"""Unit tests for matmul_bench.matrix."""

from __future__ import annotations

import numpy as np
import pytest

from matmul_bench.errors import (
    DimensionMismatchError,
    InvalidArgumentError,
    InvalidSizeError,
    NullOperandError,
    OutOfBoundsError,
)
from matmul_bench.matrix import (
    Matrix,
    add,
    check_integer_range,
    format_matrix,
    identity,
    is_power_of_two,
    matrices_equal,
    merge,
    merge_quadrants,
    random_matrix,
    split,
    split_quadrants,
    subtract,
    zero_product,
    zeros,
)


class TestMatrix:
    """Tests for the Matrix container."""

    def test_size_and_values(self) -> None:
        m = Matrix([[1, 2], [3, 4]])
        assert m.size == 2
        assert m.get(1, 0) == 3
        assert m.tolist() == [[1, 2], [3, 4]]

    def test_input_is_copied(self) -> None:
        data = np.array([[1, 2], [3, 4]])
        m = Matrix(data)
        data[0, 0] = 99
        assert m.get(0, 0) == 1

    def test_to_array_is_a_copy(self) -> None:
        m = Matrix([[1, 2], [3, 4]])
        values = m.to_array()
        values[0, 0] = 99
        assert m.get(0, 0) == 1

    def test_non_power_of_two_size_allowed(self) -> None:
        m = Matrix([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
        assert m.size == 3

    @pytest.mark.parametrize(
        ("row", "col"), [(-1, 0), (0, -1), (2, 0), (0, 2)]
    )
    def test_get_out_of_bounds(self, row: int, col: int) -> None:
        m = Matrix([[1, 2], [3, 4]])
        with pytest.raises(OutOfBoundsError):
            m.get(row, col)

    def test_non_square_rejected(self) -> None:
        with pytest.raises(DimensionMismatchError):
            Matrix([[1, 2, 3], [4, 5, 6]])

    def test_empty_rejected(self) -> None:
        with pytest.raises(InvalidSizeError):
            Matrix(np.zeros((0, 0)))

    def test_none_rejected(self) -> None:
        with pytest.raises(NullOperandError):
            Matrix(None)

    def test_non_numeric_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            Matrix([["a", "b"], ["c", "d"]])

    def test_equality(self) -> None:
        assert Matrix([[1, 2], [3, 4]]) == Matrix([[1, 2], [3, 4]])
        assert Matrix([[1, 2], [3, 4]]) != Matrix([[1, 2], [3, 5]])
        assert Matrix([[1]]) != Matrix([[1, 0], [0, 0]])

    def test_is_zero(self) -> None:
        assert Matrix([[0, 0], [0, 0]]).is_zero()
        assert not Matrix([[0, 0], [0, 1]]).is_zero()

    @pytest.mark.parametrize("dtype", [np.int8, np.int32, np.uint16, np.uint64])
    def test_integer_dtypes_stored_as_int64(self, dtype: type) -> None:
        m = Matrix(np.array([[100, 1], [1, 100]], dtype=dtype))
        assert m.dtype == np.int64
        assert m.tolist() == [[100, 1], [1, 100]]

    def test_unsigned_value_beyond_int64_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            Matrix(np.array([[2 ** 63]], dtype=np.uint64))

    def test_float_dtype_kept(self) -> None:
        assert Matrix(np.ones((2, 2), dtype=np.float32)).dtype == np.float32


class TestElementwise:
    """Tests for add and subtract."""

    def test_add(self) -> None:
        result = add(Matrix([[1, 2], [3, 4]]), Matrix([[5, 6], [7, 8]]))
        assert result.tolist() == [[6, 8], [10, 12]]

    def test_subtract(self) -> None:
        result = subtract(Matrix([[5, 6], [7, 8]]), Matrix([[1, 2], [3, 4]]))
        assert result.tolist() == [[4, 4], [4, 4]]

    def test_operands_unchanged(self) -> None:
        a = Matrix([[1, 2], [3, 4]])
        b = Matrix([[5, 6], [7, 8]])
        add(a, b)
        subtract(a, b)
        assert a.tolist() == [[1, 2], [3, 4]]
        assert b.tolist() == [[5, 6], [7, 8]]

    def test_size_mismatch(self) -> None:
        with pytest.raises(DimensionMismatchError):
            add(Matrix([[1]]), Matrix([[1, 2], [3, 4]]))
        with pytest.raises(DimensionMismatchError):
            subtract(Matrix([[1]]), Matrix([[1, 2], [3, 4]]))

    def test_none_operand(self) -> None:
        with pytest.raises(NullOperandError):
            add(Matrix([[1]]), None)


class TestSplitMerge:
    """Tests for split, merge and their quadrant helpers."""

    def test_split_block(self) -> None:
        m = Matrix([[r * 4 + c for c in range(4)] for r in range(4)])
        block = split(m, 2, 0, 2)
        assert block.tolist() == [[8, 9], [12, 13]]

    def test_split_copies(self) -> None:
        m = Matrix([[1, 2], [3, 4]])
        target = Matrix([[0, 0], [0, 0]])
        block = split(m, 0, 0, 1)
        merge(target, block, 0, 0)
        assert m.get(0, 0) == 1

    @pytest.mark.parametrize(
        ("row", "col", "size"), [(1, 0, 4), (0, 3, 2), (-1, 0, 1), (0, 0, 5)]
    )
    def test_split_out_of_bounds(self, row: int, col: int, size: int) -> None:
        m = Matrix(np.zeros((4, 4)))
        with pytest.raises(OutOfBoundsError):
            split(m, row, col, size)

    def test_split_non_positive_size(self) -> None:
        with pytest.raises(InvalidSizeError):
            split(Matrix([[1, 2], [3, 4]]), 0, 0, 0)

    def test_merge_in_place(self) -> None:
        target = Matrix(np.zeros((4, 4), dtype=int))
        merge(target, Matrix([[1, 2], [3, 4]]), 2, 2)
        assert target.tolist() == [
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 1, 2],
            [0, 0, 3, 4],
        ]

    def test_merge_out_of_bounds(self) -> None:
        target = Matrix(np.zeros((4, 4)))
        with pytest.raises(OutOfBoundsError):
            merge(target, Matrix([[1, 2], [3, 4]]), 3, 0)

    def test_merge_none(self) -> None:
        with pytest.raises(NullOperandError):
            merge(None, Matrix([[1]]), 0, 0)
        with pytest.raises(NullOperandError):
            merge(Matrix([[1]]), None, 0, 0)

    def test_quadrants_round_trip(self) -> None:
        m = random_matrix(8, seed=3)
        quadrants = split_quadrants(m)
        assert [q.size for q in quadrants] == [4, 4, 4, 4]
        assert merge_quadrants(*quadrants) == m

    def test_manual_round_trip(self) -> None:
        m = Matrix([[r * 4 + c for c in range(4)] for r in range(4)])
        rebuilt = Matrix(np.zeros((4, 4), dtype=int))
        for row, col in [(0, 0), (0, 2), (2, 0), (2, 2)]:
            merge(rebuilt, split(m, row, col, 2), row, col)
        assert rebuilt == m

    def test_split_quadrants_odd_size(self) -> None:
        with pytest.raises(InvalidSizeError):
            split_quadrants(Matrix(np.ones((3, 3))))


class TestConstructors:
    """Tests for zeros, identity, random_matrix and helpers."""

    def test_zeros(self) -> None:
        assert zeros(4).is_zero()
        assert zeros(4).size == 4

    def test_identity(self) -> None:
        assert identity(2).tolist() == [[1, 0], [0, 1]]

    @pytest.mark.parametrize("size", [0, 3, 6])
    def test_constructors_require_power_of_two(self, size: int) -> None:
        with pytest.raises(InvalidSizeError):
            zeros(size)
        with pytest.raises(InvalidSizeError):
            identity(size)

    def test_random_range(self) -> None:
        m = random_matrix(16, low=-3, high=3, seed=0)
        values = m.to_array()
        assert values.min() >= -3
        assert values.max() <= 3

    def test_random_seed_is_reproducible(self) -> None:
        assert random_matrix(4, seed=42) == random_matrix(4, seed=42)

    def test_random_invalid_range(self) -> None:
        with pytest.raises(InvalidArgumentError):
            random_matrix(4, low=5, high=1)

    @pytest.mark.parametrize(
        ("n", "expected"), [(1, True), (2, True), (64, True), (0, False), (-4, False), (12, False)]
    )
    def test_is_power_of_two(self, n: int, expected: bool) -> None:
        assert is_power_of_two(n) is expected

    def test_zero_product(self) -> None:
        product = zero_product(Matrix([[1.5, 2.0], [0.0, 1.0]]), Matrix([[1, 2], [3, 4]]))
        assert product.is_zero()
        assert product.dtype.kind == "f"


class TestComparison:
    """Tests for matrices_equal and format_matrix."""

    def test_exact_for_integers(self) -> None:
        assert matrices_equal(Matrix([[1, 2], [3, 4]]), Matrix([[1, 2], [3, 4]]))
        assert not matrices_equal(Matrix([[1, 2], [3, 4]]), Matrix([[1, 2], [3, 5]]), tolerance=1.0)

    def test_tolerance_for_floats(self) -> None:
        a = Matrix([[1.0, 2.0], [3.0, 4.0]])
        b = Matrix([[1.0 + 1e-12, 2.0], [3.0, 4.0]])
        assert not matrices_equal(a, b)
        assert matrices_equal(a, b, tolerance=1e-9)

    def test_different_sizes(self) -> None:
        assert not matrices_equal(Matrix([[1]]), identity(2))

    def test_format_integers(self) -> None:
        assert format_matrix(Matrix([[1, 22], [333, 4]])) == "   1   22\n 333    4"


class TestIntegerRange:
    """Tests for the int64 overflow guard on integer operands."""

    def test_small_values_pass(self, cyclic_8x8: Matrix) -> None:
        check_integer_range(cyclic_8x8, cyclic_8x8)

    def test_large_values_rejected(self) -> None:
        big = Matrix([[4_000_000_000, 0], [0, 4_000_000_000]])
        with pytest.raises(InvalidArgumentError, match="overflow"):
            check_integer_range(big, big)

    def test_bound_grows_with_size(self) -> None:
        # 4 * 2^4 * 2^28 * 2^28 stays below 2^63, 4 * 4^4 * 2^28 * 2^28 does not
        small = Matrix(np.full((2, 2), 2 ** 28))
        check_integer_range(small, small)
        large = Matrix(np.full((4, 4), 2 ** 28))
        with pytest.raises(InvalidArgumentError):
            check_integer_range(large, large)

    def test_negative_extreme_counts(self) -> None:
        A = Matrix([[-(2 ** 62), 0], [0, 1]])
        with pytest.raises(InvalidArgumentError):
            check_integer_range(A, identity(2))

    def test_floats_not_checked(self) -> None:
        big = Matrix([[1e300, 0.0], [0.0, 1e300]])
        check_integer_range(big, big)

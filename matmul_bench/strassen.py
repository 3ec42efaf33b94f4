"""
Divide-and-conquer matrix multiplication for power-of-two sizes.

Both schemes split A and B into quadrants, form seven half-size products and
rebuild the result from them; they differ only in how many quadrant
additions they spend doing so (18 for Strassen, 15 for Winograd). A scheme
is a pair of functions:

    operands(A, B) -> seven (left, right) pairs to multiply
    combine(products) -> the full-size result

so the sequential recursion here and the pool-based recursion in
``shared_memory`` run the exact same arithmetic.
"""
from collections import namedtuple

from matmul_bench.errors import InvalidArgumentError
from matmul_bench.matrix import (
    Matrix,
    add,
    check_integer_range,
    check_power_of_two,
    merge_quadrants,
    require_same_size,
    split_quadrants,
    subtract,
    zero_product,
)
from matmul_bench.metrics import MetricsCollector

Scheme = namedtuple("Scheme", ["name", "operands", "combine"])


def strassen_operands(A, B):
    a11, a12, a21, a22 = split_quadrants(A)
    b11, b12, b21, b22 = split_quadrants(B)

    return [
        (add(a11, a22), add(b11, b22)),        # P1
        (add(a21, a22), b11),                  # P2
        (a11, subtract(b12, b22)),             # P3
        (a22, subtract(b21, b11)),             # P4
        (add(a11, a12), b22),                  # P5
        (subtract(a21, a11), add(b11, b12)),   # P6
        (subtract(a12, a22), add(b21, b22)),   # P7
    ]


def strassen_combine(products):
    p1, p2, p3, p4, p5, p6, p7 = products

    c11 = add(subtract(add(p1, p4), p5), p7)
    c12 = add(p3, p5)
    c21 = add(p2, p4)
    c22 = add(subtract(add(p1, p3), p2), p6)

    return merge_quadrants(c11, c12, c21, c22)


def winograd_operands(A, B):
    a11, a12, a21, a22 = split_quadrants(A)
    b11, b12, b21, b22 = split_quadrants(B)

    # Shared sub-terms, each one reused by a later term or product
    s1 = add(a21, a22)
    s2 = subtract(s1, a11)
    s3 = subtract(a11, a21)
    s4 = subtract(a12, s2)
    t1 = subtract(b12, b11)
    t2 = subtract(b22, t1)
    t3 = subtract(b22, b12)
    t4 = subtract(t2, b21)

    return [
        (a11, b11),
        (a12, b21),
        (s4, b22),
        (a22, t4),
        (s1, t1),
        (s2, t2),
        (s3, t3),
    ]


def winograd_combine(products):
    p1, p2, p3, p4, p5, p6, p7 = products

    u2 = add(p1, p6)
    u3 = add(u2, p7)

    c11 = add(p1, p2)
    c12 = add(add(u2, p5), p3)
    c21 = subtract(u3, p4)
    c22 = add(u3, p5)

    return merge_quadrants(c11, c12, c21, c22)


STRASSEN = Scheme("strassen", strassen_operands, strassen_combine)
WINOGRAD = Scheme("winograd", winograd_operands, winograd_combine)

SCHEMES = {scheme.name: scheme for scheme in (STRASSEN, WINOGRAD)}


def get_scheme(name):
    try:
        return SCHEMES[name]
    except KeyError:
        raise InvalidArgumentError(
            f"Unknown divide-and-conquer scheme {name!r}, expected one of {sorted(SCHEMES)}"
        ) from None


def validate_operands(A, B):
    """Both matrices present and of one power-of-two size, with integer products in range."""
    require_same_size(A, B)
    check_power_of_two(A.size)
    check_integer_range(A, B)


def scalar_product(A, B, metrics):
    # Every leaf costs exactly one multiplication, zero operands included
    metrics.increment_multiplication_count()
    return Matrix._wrap(A._values * B._values)


def recursive_multiply(A, B, scheme, metrics):
    """
    Sequential recursion on the calling thread.
    A, B: same-size power-of-two matrices (already validated)
    """
    if A.size == 1:
        return scalar_product(A, B, metrics)

    products = [
        recursive_multiply(left, right, scheme, metrics)
        for left, right in scheme.operands(A, B)
    ]
    return scheme.combine(products)


def strassen_matrix_multiplication(A, B, metrics=None, scheme="strassen", skip_zero_operands=False):
    """
    Sequential divide-and-conquer matrix multiplication.
    A: matrix (n x n), n a power of two
    B: matrix (n x n)
    metrics: MetricsCollector charged with one multiplication per 1x1 product
    scheme: "strassen" or "winograd"
    skip_zero_operands: return a zero matrix without multiplying when A or B is all zeros
    Returns: result matrix C (n x n)
    """
    validate_operands(A, B)
    scheme = get_scheme(scheme)
    if metrics is None:
        metrics = MetricsCollector()

    if skip_zero_operands and (A.is_zero() or B.is_zero()):
        return zero_product(A, B)

    return recursive_multiply(A, B, scheme, metrics)


def multiplication_count(n):
    """Scalar multiplications used for size n: 7^log2(n)."""
    check_power_of_two(n)
    return 7 ** (n.bit_length() - 1)

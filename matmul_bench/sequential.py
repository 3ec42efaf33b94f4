import numpy as np

from matmul_bench.matrix import Matrix, check_integer_range, require_same_size, zero_product
from matmul_bench.metrics import MetricsCollector


def sequential_matrix_multiplication(A, B, metrics=None, skip_zero_operands=False):
    """
    Sequential (triple loop) matrix multiplication.
    A: matrix (n x n)
    B: matrix (n x n)
    metrics: MetricsCollector charged with one multiplication per scalar product
    skip_zero_operands: return a zero matrix without multiplying when A or B is all zeros
    Returns: result matrix C (n x n)
    """
    require_same_size(A, B)
    check_integer_range(A, B)
    if metrics is None:
        metrics = MetricsCollector()

    n = A.size
    dtype = np.result_type(A.dtype, B.dtype)

    if skip_zero_operands and (A.is_zero() or B.is_zero()):
        return zero_product(A, B)

    a = A.tolist()
    b = B.tolist()
    C = np.zeros((n, n), dtype=dtype)

    for i in range(n):
        row = a[i]
        for j in range(n):
            total = 0
            for k in range(n):
                total += row[k] * b[k][j]
            C[i][j] = total
        # One row costs n * n scalar products
        metrics.add_multiplications(n * n)

    return Matrix._wrap(C)

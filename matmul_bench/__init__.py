"""
Naive vs. Strassen matrix multiplication benchmark.
"""
from matmul_bench.algorithms import ALGORITHMS, multiply, run_multiplication
from matmul_bench.errors import (
    DimensionMismatchError,
    InvalidArgumentError,
    InvalidSizeError,
    InvalidStateError,
    MatrixBenchError,
    MatrixFileError,
    NullOperandError,
    OutOfBoundsError,
)
from matmul_bench.fitting import NAIVE_EXPONENT, STRASSEN_EXPONENT, fit_constant
from matmul_bench.matrix import (
    Matrix,
    add,
    identity,
    merge,
    random_matrix,
    split,
    subtract,
    zeros,
)
from matmul_bench.metrics import MetricsCollector
from matmul_bench.records import PerformanceRecord
from matmul_bench.sequential import sequential_matrix_multiplication
from matmul_bench.shared_memory import shared_memory_strassen_multiplication
from matmul_bench.strassen import strassen_matrix_multiplication

__version__ = "0.1.0"

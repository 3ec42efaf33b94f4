"""
Algorithm selection and instrumented runs.
"""
from collections import namedtuple

from matmul_bench.errors import InvalidArgumentError
from matmul_bench.metrics import MetricsCollector
from matmul_bench.sequential import sequential_matrix_multiplication
from matmul_bench.shared_memory import PARALLEL_THRESHOLD, shared_memory_strassen_multiplication
from matmul_bench.strassen import strassen_matrix_multiplication

NAIVE = "naive"
STRASSEN = "strassen"
WINOGRAD = "winograd"

ALGORITHMS = (NAIVE, STRASSEN, WINOGRAD)

MultiplicationResult = namedtuple("MultiplicationResult", ["product", "elapsed_ms", "multiplications"])


def multiply(
    A,
    B,
    algorithm=STRASSEN,
    metrics=None,
    parallel=False,
    threshold=PARALLEL_THRESHOLD,
    num_processes=None,
    skip_zero_operands=False,
):
    """
    Multiply A by B with the named algorithm.
    parallel, threshold, num_processes: only used by the divide-and-conquer algorithms
    """
    if algorithm == NAIVE:
        return sequential_matrix_multiplication(A, B, metrics, skip_zero_operands=skip_zero_operands)
    if algorithm not in ALGORITHMS:
        raise InvalidArgumentError(f"Unknown algorithm {algorithm!r}, expected one of {list(ALGORITHMS)}")

    if parallel:
        return shared_memory_strassen_multiplication(
            A,
            B,
            metrics,
            scheme=algorithm,
            threshold=threshold,
            num_processes=num_processes,
            skip_zero_operands=skip_zero_operands,
        )
    return strassen_matrix_multiplication(
        A, B, metrics, scheme=algorithm, skip_zero_operands=skip_zero_operands
    )


def run_multiplication(A, B, algorithm=STRASSEN, metrics=None, **options):
    """
    Reset, time and count one multiplication.
    options: passed through to multiply()
    Returns: MultiplicationResult(product, elapsed_ms, multiplications)
    """
    if metrics is None:
        metrics = MetricsCollector()

    metrics.reset_all()
    metrics.start_timer()
    product = multiply(A, B, algorithm, metrics, **options)
    metrics.stop_timer()

    return MultiplicationResult(product, metrics.elapsed_time_ms(), metrics.multiplication_count)

import logging
from collections import namedtuple

import numpy as np

from matmul_bench.algorithms import NAIVE, run_multiplication
from matmul_bench.config import BenchmarkConfig
from matmul_bench.matrix import format_matrix, matrices_equal, random_matrix
from matmul_bench.metrics import MetricsCollector
from matmul_bench.records import PerformanceRecord, with_fitted_constants

logger = logging.getLogger(__name__)

SEPARATOR = "=" * 52

ComparisonResult = namedtuple("ComparisonResult", ["details", "records", "mismatches"])


def describe_run(label, result):
    return (
        f"{label} Multiplication Result:\n"
        f"{format_matrix(result.product)}\n"
        f"{label} Time (ms): {result.elapsed_ms:.3f}\n"
        f"{label} Multiplications: {result.multiplications}\n\n"
    )


def run_comparison(pairs, config=None):
    """
    Compare the naive and divide-and-conquer algorithms on every matrix pair.
    pairs: sequence of (A, B) same-size matrices
    Returns: ComparisonResult(details, records, mismatches) where mismatches
             lists the 1-based numbers of pairs whose products disagree and
             every record carries the constants fitted over all of them
    """
    if config is None:
        config = BenchmarkConfig()
    options = config.multiply_options()
    label = config.algorithm.capitalize()

    details = []
    records = []
    mismatches = []
    metrics = MetricsCollector()

    for number, (A, B) in enumerate(pairs, start=1):
        n = A.size
        logger.debug("Pair #%d: multiplying %dx%d matrices", number, n, n)

        naive = run_multiplication(A, B, NAIVE, metrics, skip_zero_operands=config.skip_zero_operands)
        fast = run_multiplication(A, B, config.algorithm, metrics, **options)

        same = matrices_equal(naive.product, fast.product, config.tolerance)
        if not same:
            logger.warning("Pair #%d: naive and %s products differ", number, config.algorithm)
            mismatches.append(number)

        details.append(
            f"{SEPARATOR}\n"
            f"Matrix Pair #{number}\n"
            f"Matrix A (size {n}):\n{format_matrix(A)}\n"
            f"Matrix B (size {n}):\n{format_matrix(B)}\n"
            + describe_run("Naive", naive)
            + describe_run(label, fast)
            + f"Naive vs. {label} same? {same}\n"
            f"{SEPARATOR}\n\n"
        )

        records.append(PerformanceRecord(
            size=n,
            naive_time_ms=naive.elapsed_ms,
            strassen_time_ms=fast.elapsed_ms,
            naive_multiplications=naive.multiplications,
            strassen_multiplications=fast.multiplications,
        ))
        logger.debug("Pair #%d: %s", number, records[-1])

    records = with_fitted_constants(records, config.noise_floor_ms)
    return ComparisonResult("".join(details), records, mismatches)


def random_pairs(sizes, low=-10, high=10, seed=None):
    """One pair of random integer matrices per size."""
    rng = np.random.default_rng(seed)
    return [
        (random_matrix(size, low, high, seed=rng), random_matrix(size, low, high, seed=rng))
        for size in sizes
    ]


def run_benchmarks(sizes, config=None, seed=None):
    """Run the comparison on freshly generated random matrices of each size."""
    if config is None:
        config = BenchmarkConfig()
    low, high = config.random_range
    logger.info("Benchmarking sizes %s with %s", list(sizes), config.algorithm)
    return run_comparison(random_pairs(sizes, low, high, seed), config)

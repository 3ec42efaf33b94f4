"""
Parallel divide-and-conquer multiplication on a process pool.

Every frame larger than the threshold forks its seven products: products
still above the threshold are expanded further by the caller, the rest are
submitted to the pool and computed sequentially in a worker. Each frame
then joins its seven children before combining them, so all leaf tasks are
queued before the first join blocks and no worker ever waits on another.
"""
import multiprocessing as mp

from matmul_bench.errors import InvalidArgumentError
from matmul_bench.metrics import MetricsCollector
from matmul_bench.matrix import zero_product
from matmul_bench.strassen import get_scheme, recursive_multiply, validate_operands

PARALLEL_THRESHOLD = 64


def multiply_block(A, B, scheme_name):
    """
    Compute one forked product in a worker process.
    Returns: (product matrix, scalar multiplications it took)
    """
    metrics = MetricsCollector()
    product = recursive_multiply(A, B, get_scheme(scheme_name), metrics)
    return product, metrics.multiplication_count


def submit_block(pool, A, B, scheme, metrics):
    task = pool.apply_async(multiply_block, args=(A, B, scheme.name))

    def join():
        # Re-raises any error from the worker
        product, count = task.get()
        metrics.add_multiplications(count)
        return product

    return join


def fork(pool, A, B, scheme, metrics, threshold):
    """
    Fork the seven products of a frame larger than threshold.
    Returns: a function that joins them and combines the result
    """
    joins = []
    for left, right in scheme.operands(A, B):
        if left.size > threshold:
            joins.append(fork(pool, left, right, scheme, metrics, threshold))
        else:
            joins.append(submit_block(pool, left, right, scheme, metrics))

    def join():
        return scheme.combine([child() for child in joins])

    return join


def shared_memory_strassen_multiplication(
    A,
    B,
    metrics=None,
    scheme="strassen",
    threshold=PARALLEL_THRESHOLD,
    num_processes=None,
    skip_zero_operands=False,
):
    """
    Parallel divide-and-conquer matrix multiplication using a process pool.
    A: matrix (n x n), n a power of two
    B: matrix (n x n)
    metrics: MetricsCollector charged with one multiplication per 1x1 product
    scheme: "strassen" or "winograd"
    threshold: frames of this size or smaller are not forked
    num_processes: number of processes (default is number of CPU cores)
    Returns: result matrix C (n x n), identical to the sequential result
    """
    validate_operands(A, B)
    scheme = get_scheme(scheme)
    if threshold < 1:
        raise InvalidArgumentError(f"Parallel threshold must be at least 1, but got {threshold}")
    if num_processes is not None and num_processes < 1:
        raise InvalidArgumentError(f"Number of processes must be at least 1, but got {num_processes}")
    if metrics is None:
        metrics = MetricsCollector()

    if skip_zero_operands and (A.is_zero() or B.is_zero()):
        return zero_product(A, B)

    # Small problems never touch the pool
    if A.size <= threshold:
        return recursive_multiply(A, B, scheme, metrics)

    # Use all CPU cores if not specified
    if num_processes is None:
        num_processes = mp.cpu_count()

    with mp.Pool(processes=num_processes) as pool:
        join = fork(pool, A, B, scheme, metrics, threshold)
        return join()

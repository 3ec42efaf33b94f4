from dataclasses import asdict, dataclass, replace
from typing import Optional

from matmul_bench.errors import InvalidArgumentError, InvalidSizeError
from matmul_bench.fitting import NAIVE_EXPONENT, STRASSEN_EXPONENT, fit_constant


@dataclass(frozen=True)
class PerformanceRecord:
    """
    Timings and multiplication counts of both algorithms for one (A, B) pair.

    Attributes:
        size: Matrix size n
        naive_time_ms: Elapsed time of the naive run
        strassen_time_ms: Elapsed time of the divide-and-conquer run
        naive_multiplications: Scalar multiplications of the naive run
        strassen_multiplications: Scalar multiplications of the divide-and-conquer run
        naive_constant: Fitted c in c * n^3, once known
        strassen_constant: Fitted c in c * n^log2(7), once known
    """

    size: int
    naive_time_ms: float
    strassen_time_ms: float
    naive_multiplications: int
    strassen_multiplications: int
    naive_constant: Optional[float] = None
    strassen_constant: Optional[float] = None

    def __post_init__(self):
        if self.size < 1:
            raise InvalidSizeError(f"Record size must be positive, but got {self.size}")
        if self.naive_time_ms < 0 or self.strassen_time_ms < 0:
            raise InvalidArgumentError("Elapsed times cannot be negative.")
        if self.naive_multiplications < 0 or self.strassen_multiplications < 0:
            raise InvalidArgumentError("Multiplication counts cannot be negative.")

    def to_dict(self):
        return asdict(self)

    def __str__(self):
        return (
            f"Size: {self.size} | Naive Time: {self.naive_time_ms:.3f} ms | "
            f"Strassen Time: {self.strassen_time_ms:.3f} ms | "
            f"Naive Multiplications: {self.naive_multiplications} | "
            f"Strassen Multiplications: {self.strassen_multiplications}"
        )


def fit_records(records, noise_floor_ms=0.0):
    """
    Fit both complexity constants over all records.
    Returns: (naive constant, strassen constant)
    """
    naive = fit_constant(
        [(r.size, r.naive_time_ms) for r in records], NAIVE_EXPONENT, noise_floor_ms
    )
    strassen = fit_constant(
        [(r.size, r.strassen_time_ms) for r in records], STRASSEN_EXPONENT, noise_floor_ms
    )
    return naive, strassen


def with_fitted_constants(records, noise_floor_ms=0.0):
    """Copies of the records carrying the constants fitted over all of them."""
    naive, strassen = fit_records(records, noise_floor_ms)
    return [replace(r, naive_constant=naive, strassen_constant=strassen) for r in records]


def ensure_fitted(records, noise_floor_ms=0.0):
    """The records as given if all carry fitted constants, otherwise fitted copies."""
    if records and all(
        r.naive_constant is not None and r.strassen_constant is not None for r in records
    ):
        return list(records)
    return with_fitted_constants(records, noise_floor_ms)

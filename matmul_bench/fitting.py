"""
Empirical complexity fitting.

Fits T(n) = c * n^exponent to observed (size, time) samples by least squares:

    c = sum(T(n) * n^exponent) / sum(n^(2 * exponent))
"""
import math

import numpy as np

NAIVE_EXPONENT = 3.0
STRASSEN_EXPONENT = math.log2(7)

# Below this the fitted constant is meaningless
DENOMINATOR_EPSILON = 1e-12


def fit_constant(samples, exponent, noise_floor_ms=0.0):
    """
    Least-squares constant c for T(n) = c * n^exponent.
    samples: iterable of (size, elapsed time in ms)
    noise_floor_ms: samples at or below this time are dropped
    Returns: c, or 0.0 when no usable sample remains
    """
    pairs = [(float(size), float(elapsed)) for size, elapsed in samples]
    if not pairs:
        return 0.0

    sizes, times = np.array(pairs).T
    usable = np.isfinite(sizes) & np.isfinite(times) & (sizes > 0) & (times > noise_floor_ms)
    if not usable.any():
        return 0.0

    powers = sizes[usable] ** exponent
    denominator = np.sum(powers ** 2)
    if not np.isfinite(denominator) or denominator < DENOMINATOR_EPSILON:
        return 0.0

    return float(np.sum(times[usable] * powers) / denominator)


def predicted_time(constant, size, exponent):
    return constant * size ** exponent


def classify_growth(actual_time, naive_fit, strassen_fit):
    """
    Label an observed time by which fitted curve it sits closest to.
    naive_fit, strassen_fit: predicted times from the O(n^3) and O(n^2.81) fits
    """
    if naive_fit > 0 and 0.7 < actual_time / naive_fit < 1.3:
        return "O(n^3)"
    if strassen_fit > 0 and 0.7 < actual_time / strassen_fit < 1.3:
        return "O(n^2.81)"
    if strassen_fit < actual_time < naive_fit:
        return "Θ(n^2.9)"
    if actual_time < strassen_fit * 0.9:
        return "Ω(n^2.8)"
    return "Uncertain"

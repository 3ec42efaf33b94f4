"""
Per-run instrumentation: wall-clock timer and scalar multiplication counter.
"""
import threading
import time

from matmul_bench.errors import InvalidArgumentError, InvalidStateError


class MetricsCollector:
    """
    Timer and multiplication counter for one multiplication run.

    A collector is passed explicitly down the recursive call tree. The
    counter is guarded by a lock, so concurrent branches may share it.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._start_ns = None
        self._stop_ns = None
        self._multiplications = 0

    def start_timer(self):
        self._start_ns = time.perf_counter_ns()
        self._stop_ns = None

    def stop_timer(self):
        if self._start_ns is None:
            raise InvalidStateError("stop_timer() invoked without a matching start_timer() call.")
        self._stop_ns = time.perf_counter_ns()

    def increment_multiplication_count(self):
        with self._lock:
            self._multiplications += 1

    def add_multiplications(self, amount):
        if amount < 0:
            raise InvalidArgumentError("Cannot add a negative number of multiplications.")
        with self._lock:
            self._multiplications += amount

    @property
    def multiplication_count(self):
        with self._lock:
            return self._multiplications

    def elapsed_time_ms(self):
        """Duration of the last completed start/stop pair, 0 if there is none."""
        if self._start_ns is None or self._stop_ns is None:
            return 0.0
        return (self._stop_ns - self._start_ns) / 1e6

    def reset_all(self):
        with self._lock:
            self._start_ns = None
            self._stop_ns = None
            self._multiplications = 0

    def __repr__(self):
        return (
            f"MetricsCollector(multiplications={self.multiplication_count}, "
            f"elapsed_ms={self.elapsed_time_ms():.3f})"
        )

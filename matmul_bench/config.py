import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from matmul_bench.algorithms import STRASSEN, WINOGRAD
from matmul_bench.errors import InvalidArgumentError
from matmul_bench.shared_memory import PARALLEL_THRESHOLD


@dataclass
class BenchmarkConfig:
    algorithm: str = STRASSEN
    parallel: bool = False
    parallel_threshold: int = PARALLEL_THRESHOLD
    num_processes: Optional[int] = None
    skip_zero_operands: bool = False
    tolerance: float = 1e-9
    noise_floor_ms: float = 0.0
    output_dir: str = "output"
    plot: bool = False
    random_range: Tuple[int, int] = (-10, 10)

    def validate(self):
        check_type("algorithm", self.algorithm, (str,))
        check_type("parallel", self.parallel, (bool,))
        check_type("parallel_threshold", self.parallel_threshold, (int,))
        if self.num_processes is not None:
            check_type("num_processes", self.num_processes, (int,))
        check_type("skip_zero_operands", self.skip_zero_operands, (bool,))
        check_type("tolerance", self.tolerance, (int, float))
        check_type("noise_floor_ms", self.noise_floor_ms, (int, float))
        check_type("output_dir", self.output_dir, (str,))
        check_type("plot", self.plot, (bool,))
        check_type("random_range", self.random_range, (list, tuple))
        if len(self.random_range) != 2:
            raise InvalidArgumentError("random_range must hold exactly two values [min, max]")
        for bound in self.random_range:
            check_type("random_range", bound, (int,))
        self.random_range = tuple(self.random_range)

        if self.algorithm not in (STRASSEN, WINOGRAD):
            raise InvalidArgumentError(
                f"algorithm must be {STRASSEN!r} or {WINOGRAD!r}, not {self.algorithm!r}"
            )
        if self.parallel_threshold < 1:
            raise InvalidArgumentError("parallel_threshold must be at least 1")
        if self.num_processes is not None and self.num_processes < 1:
            raise InvalidArgumentError("num_processes must be at least 1")
        if self.tolerance < 0 or self.noise_floor_ms < 0:
            raise InvalidArgumentError("tolerance and noise_floor_ms cannot be negative")
        low, high = self.random_range
        if low > high:
            raise InvalidArgumentError("random_range minimum cannot be greater than its maximum")
        return self

    def multiply_options(self):
        """Keyword arguments for algorithms.run_multiplication."""
        return {
            "parallel": self.parallel,
            "threshold": self.parallel_threshold,
            "num_processes": self.num_processes,
            "skip_zero_operands": self.skip_zero_operands,
        }


def check_type(name, value, expected):
    # bool is an int subclass, so it only passes where a flag is expected
    if not isinstance(value, expected) or (isinstance(value, bool) and bool not in expected):
        names = " or ".join(t.__name__ for t in expected)
        raise InvalidArgumentError(f"{name} must be {names}, not {value!r}")


def config_table(data, name):
    table = data.get(name, {})
    if not isinstance(table, dict):
        raise InvalidArgumentError(f"[{name}] must be a table in the configuration file")
    return table


def load_config(config_path):
    """Load configuration from a TOML file."""
    with open(Path(config_path), "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise InvalidArgumentError(f"Invalid TOML in {config_path}: {e}") from e

    cfg = BenchmarkConfig()

    algorithm = config_table(data, "algorithm")
    cfg.algorithm = algorithm.get("name", cfg.algorithm)
    cfg.skip_zero_operands = algorithm.get("skip_zero_operands", cfg.skip_zero_operands)

    parallel = config_table(data, "parallel")
    cfg.parallel = parallel.get("enabled", cfg.parallel)
    cfg.parallel_threshold = parallel.get("threshold", cfg.parallel_threshold)
    cfg.num_processes = parallel.get("num_processes", cfg.num_processes)

    benchmark = config_table(data, "benchmark")
    cfg.tolerance = benchmark.get("tolerance", cfg.tolerance)
    cfg.noise_floor_ms = benchmark.get("noise_floor_ms", cfg.noise_floor_ms)
    cfg.random_range = benchmark.get("random_range", cfg.random_range)

    output = config_table(data, "output")
    cfg.output_dir = output.get("directory", cfg.output_dir)
    cfg.plot = output.get("plot", cfg.plot)

    return cfg.validate()

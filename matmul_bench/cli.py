"""
Command line entry point.

Usage:
    matmul-bench input.txt                  compare naive and Strassen on every pair in the file
    matmul-bench --sizes 2 4 8 16 32        compare on random matrices of the given sizes
    matmul-bench input.txt --parallel --plot --debug
"""
import argparse
import logging
import sys
from pathlib import Path

from matmul_bench.comparison import run_benchmarks, run_comparison
from matmul_bench.config import BenchmarkConfig, load_config
from matmul_bench.errors import MatrixBenchError
from matmul_bench.io import read_matrix_pairs, write_text
from matmul_bench.report import format_table, to_csv

logger = logging.getLogger("matmul_bench")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="matmul-bench",
        description="Compare naive and Strassen matrix multiplication.",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("input", nargs="?", help="file of matrix pairs")
    source.add_argument("--sizes", type=int, nargs="+", help="benchmark random matrices of these sizes")

    parser.add_argument("--seed", type=int, default=None, help="seed for --sizes")
    parser.add_argument("--config", help="TOML configuration file")
    parser.add_argument("--algorithm", choices=["strassen", "winograd"], default=None)
    parser.add_argument("--parallel", action="store_true", default=None, help="fork products onto a process pool")
    parser.add_argument("--threshold", type=int, default=None, help="smallest size that is forked")
    parser.add_argument("--processes", type=int, default=None, help="pool size (default: CPU count)")
    parser.add_argument("--skip-zero", action="store_true", default=None,
                        help="skip multiplying when an operand is all zeros")
    parser.add_argument("--output-dir", default=None)
    parser.add_argument("--plot", action="store_true", default=None, help="save performance plots")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    return parser


def apply_arguments(cfg, args):
    overrides = {
        "algorithm": args.algorithm,
        "parallel": args.parallel,
        "parallel_threshold": args.threshold,
        "num_processes": args.processes,
        "skip_zero_operands": args.skip_zero,
        "output_dir": args.output_dir,
        "plot": args.plot,
    }
    for name, value in overrides.items():
        if value is not None:
            setattr(cfg, name, value)
    return cfg.validate()


def run(args):
    cfg = load_config(args.config) if args.config else BenchmarkConfig()
    cfg = apply_arguments(cfg, args)

    if args.input:
        result = run_comparison(read_matrix_pairs(args.input), cfg)
    else:
        result = run_benchmarks(args.sizes, cfg, seed=args.seed)

    table = format_table(result.records, cfg.noise_floor_ms)
    print("\nPerformance Comparison Table:")
    print(table)

    output_dir = Path(cfg.output_dir)
    write_text(output_dir / "matrix_comparison.txt", result.details + table)
    write_text(output_dir / "matrix_comparison.csv", to_csv(result.records, cfg.noise_floor_ms))

    if cfg.plot:
        # Imported here so runs without --plot do not need a plotting backend
        from matmul_bench.plotting import save_plots
        for path in save_plots(result.records, output_dir):
            print(f"Plot saved to {path}")

    if result.mismatches:
        logger.error("Products differ for matrix pairs %s", result.mismatches)
        return 1

    print(f"Execution complete. Results saved to {output_dir / 'matrix_comparison.txt'}")
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return run(args)
    except (MatrixBenchError, OSError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""Tests for the matmul-bench command line."""

from __future__ import annotations

from pathlib import Path

import pytest

from matmul_bench.cli import build_parser, main


class TestMain:
    """End-to-end runs of the command line."""

    def test_input_file(self, sample_input: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(sample_input), "--output-dir", str(tmp_path)]) == 0

        out = capsys.readouterr().out
        assert "Performance Comparison Table:" in out
        assert "Execution complete." in out

        details = (tmp_path / "matrix_comparison.txt").read_text()
        assert details.count("Naive vs. Strassen same? True") == 3
        assert "Fitted constants" in details

        csv_lines = (tmp_path / "matrix_comparison.csv").read_text().splitlines()
        assert csv_lines[0].startswith("Size,")
        assert len(csv_lines) == 4

    def test_random_sizes(self, tmp_path: Path) -> None:
        assert main(["--sizes", "2", "4", "--seed", "1", "--output-dir", str(tmp_path)]) == 0
        assert (tmp_path / "matrix_comparison.txt").exists()
        assert (tmp_path / "matrix_comparison.csv").exists()

    def test_winograd_parallel(self, sample_input: Path, tmp_path: Path) -> None:
        argv = [
            str(sample_input),
            "--algorithm", "winograd",
            "--parallel", "--threshold", "2", "--processes", "2",
            "--output-dir", str(tmp_path),
        ]
        assert main(argv) == 0
        assert "Naive vs. Winograd same? True" in (tmp_path / "matrix_comparison.txt").read_text()

    def test_plot(self, tmp_path: Path) -> None:
        assert main(["--sizes", "2", "4", "8", "--plot", "--output-dir", str(tmp_path)]) == 0
        assert (tmp_path / "matrix_performance.png").exists()
        assert (tmp_path / "matrix_execution_time.png").exists()

    def test_config_file(self, tmp_path: Path) -> None:
        config = tmp_path / "config.toml"
        config.write_text(f'[algorithm]\nname = "winograd"\n\n[output]\ndirectory = "{(tmp_path / "out").as_posix()}"\n')
        assert main(["--sizes", "4", "--config", str(config)]) == 0
        assert "Winograd" in (tmp_path / "out" / "matrix_comparison.txt").read_text()

    def test_missing_input_file(self, tmp_path: Path) -> None:
        assert main([str(tmp_path / "missing.txt"), "--output-dir", str(tmp_path)]) == 1

    def test_malformed_input_file(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.txt"
        path.write_text("2\n1 2\n3 4\n")
        assert main([str(path), "--output-dir", str(tmp_path)]) == 1

    def test_invalid_threshold(self, tmp_path: Path) -> None:
        assert main(["--sizes", "2", "--threshold", "0", "--output-dir", str(tmp_path)]) == 1

    def test_overflowing_input_file(self, tmp_path: Path) -> None:
        path = tmp_path / "big.txt"
        path.write_text("2\n4000000000 0\n0 4000000000\n4000000000 0\n0 4000000000\n")
        assert main([str(path), "--output-dir", str(tmp_path)]) == 1

    @pytest.mark.parametrize(
        "text",
        ["[parallel\nthreshold = 16\n", 'algorithm = "winograd"\n', '[parallel]\nthreshold = "64"\n'],
    )
    def test_bad_config_file(self, tmp_path: Path, text: str) -> None:
        config = tmp_path / "config.toml"
        config.write_text(text)
        assert main(["--sizes", "2", "--config", str(config), "--output-dir", str(tmp_path)]) == 1


class TestParser:
    """Tests for argument parsing."""

    def test_requires_a_source(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_sources_are_exclusive(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["input.txt", "--sizes", "2"])

    def test_unset_flags_are_none(self) -> None:
        args = build_parser().parse_args(["--sizes", "2"])
        assert args.parallel is None
        assert args.plot is None
        assert args.algorithm is None
        assert args.input is None

"""Shared fixtures for the matmul_bench tests."""

from __future__ import annotations

from pathlib import Path

import matplotlib
import pytest

from matmul_bench.matrix import Matrix

matplotlib.use("Agg")

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def sample_input() -> Path:
    """Input file holding a 2x2, a 4x4 and an 8x8 matrix pair."""
    return DATA_DIR / "sample_input.txt"


@pytest.fixture
def small_pair() -> tuple[Matrix, Matrix]:
    return Matrix([[2, 1], [1, 5]]), Matrix([[6, 7], [4, 3]])


@pytest.fixture
def cyclic_8x8() -> Matrix:
    """8x8 matrix whose rows are successive rotations of 1..8."""
    return Matrix([[(i + j) % 8 + 1 for j in range(8)] for i in range(8)])

"""
Reading matrix pairs from text files and writing results.

Input format: blank lines are ignored; each pair starts with a line holding
the size n, followed by n rows of A and n rows of B, whitespace separated.

    2
    2 1
    1 5
    6 7
    4 3
"""
import logging
from pathlib import Path

from matmul_bench.errors import MatrixFileError
from matmul_bench.matrix import Matrix

logger = logging.getLogger(__name__)


def parse_number(token):
    try:
        return int(token)
    except ValueError:
        return float(token)


def read_matrix(lines, n, name):
    """
    Read n rows of n numbers from an iterator of (line number, text).
    """
    rows = []
    for i in range(n):
        try:
            line_number, text = next(lines)
        except StopIteration:
            raise MatrixFileError(f"Unexpected end of file while reading matrix {name}.") from None

        tokens = text.split()
        if len(tokens) != n:
            raise MatrixFileError(
                f"Incorrect number of columns in row {i + 1} of matrix {name} (line {line_number})."
            )
        try:
            rows.append([parse_number(token) for token in tokens])
        except ValueError:
            raise MatrixFileError(
                f"Invalid number in matrix {name} at row {i + 1}: '{text.strip()}'"
            ) from None

    return Matrix(rows)


def parse_matrix_pairs(text):
    """Parse every (A, B) pair from the contents of an input file."""
    lines = (
        (number, line) for number, line in enumerate(text.splitlines(), start=1) if line.strip()
    )

    pairs = []
    for line_number, line in lines:
        try:
            n = int(line.strip())
        except ValueError:
            raise MatrixFileError(
                f"Invalid matrix size on line {line_number}: '{line.strip()}'. Expected a positive integer."
            ) from None
        if n <= 0:
            raise MatrixFileError(f"Matrix size must be a positive integer (line {line_number}).")

        A = read_matrix(lines, n, "A")
        B = read_matrix(lines, n, "B")
        pairs.append((A, B))
        logger.debug("Read matrix pair #%d (size %d)", len(pairs), n)

    return pairs


def read_matrix_pairs(file_path):
    with open(file_path) as f:
        pairs = parse_matrix_pairs(f.read())
    logger.info("Read %d matrix pairs from %s", len(pairs), file_path)
    return pairs


def write_text(file_path, text):
    """Write text to file_path, creating parent directories as needed."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    logger.info("Results saved to %s", path)
    return path

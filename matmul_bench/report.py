import pandas as pd

from matmul_bench.fitting import (
    NAIVE_EXPONENT,
    STRASSEN_EXPONENT,
    classify_growth,
    predicted_time,
)
from matmul_bench.records import ensure_fitted

COLUMNS = [
    "Size",
    "Naive Time (ms)",
    "Naive Count",
    "Strassen Time (ms)",
    "Strassen Count",
    "Big-O",
]

NO_DATA = "No performance data available.\n"


def create_comparison_table(records, noise_floor_ms=0.0):
    """
    Create a comparison table with times, counts and the empirical growth
    class of each naive time. Constants already on the records are used as
    they are; otherwise they are fitted over all records.
    """
    table_df = pd.DataFrame(columns=COLUMNS)
    if not records:
        return table_df

    rows = []
    for r in ensure_fitted(records, noise_floor_ms):
        naive_fit = predicted_time(r.naive_constant, r.size, NAIVE_EXPONENT)
        strassen_fit = predicted_time(r.strassen_constant, r.size, STRASSEN_EXPONENT)
        rows.append([
            r.size,
            r.naive_time_ms,
            r.naive_multiplications,
            r.strassen_time_ms,
            r.strassen_multiplications,
            classify_growth(r.naive_time_ms, naive_fit, strassen_fit),
        ])

    return pd.DataFrame(rows, columns=COLUMNS)


def format_table(records, noise_floor_ms=0.0):
    """Plain-text comparison table, followed by the fitted constants."""
    if not records:
        return NO_DATA

    records = ensure_fitted(records, noise_floor_ms)
    table_df = create_comparison_table(records)
    c_naive, c_strassen = records[0].naive_constant, records[0].strassen_constant

    text = table_df.to_string(index=False, float_format=lambda value: f"{value:.3f}")
    return (
        f"{text}\n"
        f"Fitted constants: naive c = {c_naive:.6g} (n^3), "
        f"strassen c = {c_strassen:.6g} (n^{STRASSEN_EXPONENT:.4f})\n"
    )


def to_csv(records, noise_floor_ms=0.0):
    if not records:
        return ""
    return create_comparison_table(records, noise_floor_ms).to_csv(index=False)

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns
from matplotlib.ticker import ScalarFormatter

from matmul_bench.strassen import multiplication_count

logger = logging.getLogger(__name__)


def counts_frame(records):
    """Measured and theoretical multiplication counts per power-of-two size, in long form."""
    wide_df = pd.DataFrame({
        'Size': [r.size for r in records],
        'Expected O(n³)': [float(r.size) ** 3 for r in records],
        'Actual Naive': [r.naive_multiplications for r in records],
        'Expected O(n^2.8074)': [multiplication_count(r.size) for r in records],
        'Actual Strassen': [r.strassen_multiplications for r in records],
    })
    return pd.melt(wide_df, id_vars=['Size'], var_name='Series', value_name='Multiplications')


def times_frame(records):
    wide_df = pd.DataFrame({
        'Size': [r.size for r in records],
        'Naive': [r.naive_time_ms for r in records],
        'Strassen': [r.strassen_time_ms for r in records],
    })
    return pd.melt(wide_df, id_vars=['Size'], var_name='Implementation', value_name='Time (ms)')


def plot_multiplication_counts(records, output_path):
    """Plot expected vs. actual scalar multiplication counts"""
    plot_df = counts_frame(records)

    plt.figure(figsize=(12, 8))
    sns.lineplot(data=plot_df, x='Size', y='Multiplications',
                 hue='Series', style='Series', marker='o', linewidth=2.5)

    plt.xscale('log', base=2)
    plt.yscale('log')
    plt.grid(True, which="both", ls="--", alpha=0.7)

    plt.title('Matrix Multiplication Performance', fontsize=16)
    plt.xlabel('Matrix Size (n × n)', fontsize=14)
    plt.ylabel('Multiplication Count', fontsize=14)

    # Label the measured points with their counts
    for r in records:
        plt.annotate(f'Naive: {r.naive_multiplications}', (r.size, r.naive_multiplications),
                     ha='right', va='bottom', fontsize=8, color='tab:blue')
        plt.annotate(f'Strassen: {r.strassen_multiplications}', (r.size, r.strassen_multiplications),
                     ha='left', va='bottom', fontsize=8, color='tab:orange')

    plt.gca().xaxis.set_major_formatter(ScalarFormatter())

    plt.legend(title='Series', bbox_to_anchor=(1.05, 1), loc='upper left')
    plt.tight_layout()
    plt.savefig(output_path, dpi=300)
    plt.close()
    logger.info("Multiplication count plot saved to %s", output_path)
    return Path(output_path)


def plot_execution_times(records, output_path):
    """Plot execution times of both algorithms"""
    plot_df = times_frame(records)

    plt.figure(figsize=(12, 8))
    sns.lineplot(data=plot_df, x='Size', y='Time (ms)',
                 hue='Implementation', marker='o', linewidth=2.5)

    plt.xscale('log', base=2)
    plt.grid(True, which="both", ls="--", alpha=0.7)

    plt.title('Matrix Multiplication Execution Time', fontsize=16)
    plt.xlabel('Matrix Size (n × n)', fontsize=14)
    plt.ylabel('Execution Time (ms)', fontsize=14)

    plt.gca().xaxis.set_major_formatter(ScalarFormatter())

    plt.legend(title='Implementation', bbox_to_anchor=(1.05, 1), loc='upper left')
    plt.tight_layout()
    plt.savefig(output_path, dpi=300)
    plt.close()
    logger.info("Execution time plot saved to %s", output_path)
    return Path(output_path)


def save_plots(records, output_dir):
    """Write both charts into output_dir and return their paths."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    return [
        plot_multiplication_counts(records, output_dir / 'matrix_performance.png'),
        plot_execution_times(records, output_dir / 'matrix_execution_time.png'),
    ]

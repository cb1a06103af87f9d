"""
Percolation threshold analysis utilities.

Includes sweeps over grid sizes and aggregation of per-experiment .stats files
written by the batch worker into a single CSV.
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import numpy as np
import pandas as pd

from .stats import PercolationStats

STATS_COLUMNS = ['n', 'trials', 'mean', 'stddev', 'confidence_lo', 'confidence_hi', 'elapsed_seconds']


def format_stats_line(stats: PercolationStats) -> str:
    """Tab-separated .stats record for one experiment."""
    summary = stats.summary()
    return "\t".join(str(summary[col]) for col in STATS_COLUMNS) + "\n"


def parse_stats_line(line: str) -> Dict[str, Any]:
    """
    Parse a record written by format_stats_line().

    Raises:
        ValueError: if the record does not have one field per column
    """
    parts = line.strip().split('\t')
    if len(parts) != len(STATS_COLUMNS):
        raise ValueError(f"Expected {len(STATS_COLUMNS)} fields, got {len(parts)}: {line!r}")

    record = dict(zip(STATS_COLUMNS, parts))
    record['n'] = int(record['n'])
    record['trials'] = int(record['trials'])
    for col in STATS_COLUMNS[2:]:
        record[col] = float(record[col])
    return record


def thresholds_frame(stats: PercolationStats) -> pd.DataFrame:
    """One row per trial with its threshold estimate."""
    return pd.DataFrame({
        'n': stats.n,
        'trial': np.arange(1, stats.trials + 1),
        'threshold': stats.thresholds,
    })


def run_sweep(
    sizes: Iterable[int],
    trials: int,
    seed: Optional[int] = None,
    verbose: bool = False,
) -> pd.DataFrame:
    """
    Estimate the threshold for several grid sizes.

    Each size gets an independent random stream spawned from `seed`, so a
    sweep is reproducible and adding a size does not change the others.

    Args:
        sizes: Grid sizes to evaluate
        trials: Number of trials per size
        seed: Root seed (None for fresh entropy)
        verbose: Print one line per size

    Returns:
        DataFrame with one row per size and STATS_COLUMNS as columns
    """
    sizes = list(sizes)
    child_seeds = np.random.SeedSequence(seed).spawn(len(sizes))

    rows = []
    for n, child_seed in zip(sizes, child_seeds):
        stats = PercolationStats(n, trials, seed=child_seed)
        rows.append(stats.summary())
        if verbose:
            print(f"  n={n}: mean={stats.mean():.6f} stddev={stats.stddev():.6f} "
                  f"({stats.elapsed_seconds:.2f}s)")

    return pd.DataFrame(rows, columns=STATS_COLUMNS)


def load_stats_results(base_dir: Union[str, Path]) -> pd.DataFrame:
    """
    Read every .stats file under base_dir.

    Files that are empty or malformed are skipped and counted.

    Returns:
        DataFrame with STATS_COLUMNS plus 'file_path', sorted by n and trials
    """
    base_dir = Path(base_dir)
    if not base_dir.exists():
        raise FileNotFoundError(f"Results directory not found: {base_dir}")

    stats_files = sorted(base_dir.rglob("*.stats"))
    print(f"Found {len(stats_files)} .stats files")

    results: List[Dict[str, Any]] = []
    failed_count = 0

    for stats_file in stats_files:
        content = stats_file.read_text().strip()
        if not content:
            failed_count += 1
            continue
        try:
            record = parse_stats_line(content)
        except ValueError:
            failed_count += 1
            continue
        record['file_path'] = str(stats_file.relative_to(base_dir))
        results.append(record)

    if failed_count:
        print(f"Warning: Failed to parse {failed_count} files")

    if not results:
        return pd.DataFrame(columns=STATS_COLUMNS + ['file_path'])

    df = pd.DataFrame(results)
    return df.sort_values(['n', 'trials']).reset_index(drop=True)


def aggregate_stats_files(
    base_dir: Union[str, Path],
    output_csv: Union[str, Path],
) -> pd.DataFrame:
    """
    Aggregate .stats files into a CSV.

    Args:
        base_dir: Directory containing .stats files (searched recursively)
        output_csv: Output CSV file path

    Returns:
        Aggregated DataFrame
    """
    output_csv = Path(output_csv)
    df = load_stats_results(base_dir)

    output_csv.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_csv, index=False)

    print("\n=== AGGREGATION SUMMARY ===")
    print(f"Experiments: {len(df)}")
    if len(df):
        print(f"Grid sizes: {df['n'].min()} to {df['n'].max()}")
        weighted_mean = np.average(df['mean'], weights=df['trials'])
        print(f"Trial-weighted mean threshold: {weighted_mean:.6f}")
    print(f"\nSaved to: {output_csv}")

    return df

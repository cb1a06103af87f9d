"""
Percolation worker for running configured threshold experiments.

This worker runs one experiment and saves its results, and drives a whole
run defined by a RunConfig.
"""

from pathlib import Path
from typing import Any, List, Optional, Union

import numpy as np

from .stats import PercolationStats
from .analysis import format_stats_line, thresholds_frame, aggregate_stats_files
from ..run.manifest import ExperimentSpec, RunConfig
from ..utils.timing import format_duration


def process_experiment(
    spec: ExperimentSpec,
    output_dir: Union[str, Path],
    seed: Optional[Any] = None,
) -> Path:
    """
    Run one threshold experiment and save its results.

    Writes {name}.npz (every trial threshold), {name}_thresholds.csv (one
    row per trial) and {name}.stats (one tab-separated summary line) into
    output_dir.

    Args:
        spec: Experiment to run
        output_dir: Output directory for results
        seed: Anything accepted by numpy.random.default_rng

    Returns:
        Path to the .stats file
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    stats = PercolationStats(spec.n, spec.trials, seed=seed)

    stats.save(output_dir / f"{spec.name}.npz")
    thresholds_frame(stats).to_csv(output_dir / f"{spec.name}_thresholds.csv", index=False)
    stats_file = output_dir / f"{spec.name}.stats"
    stats_file.write_text(format_stats_line(stats))

    print(f"  {spec.name}: mean={stats.mean():.6f} "
          f"[{stats.confidence_lo():.6f}, {stats.confidence_hi():.6f}] "
          f"in {format_duration(stats.elapsed_seconds)}")
    return stats_file


def run_config(config: RunConfig, resume: bool = False):
    """
    Run every experiment of a config, then aggregate results to CSV.

    Experiment seeds are spawned from the config seed in experiment order,
    so resuming a run reproduces the seeds of the experiments it skips.

    Args:
        config: Loaded run configuration
        resume: Skip experiments whose .stats file already exists

    Returns:
        Aggregated DataFrame
    """
    experiments = config.experiments
    child_seeds = np.random.SeedSequence(config.seed).spawn(len(experiments))
    pending = {spec.name for spec in config.pending_experiments()} if resume else None

    print(f"Run '{config.run_name}': {len(experiments)} experiments")

    written: List[Path] = []
    for spec, child_seed in zip(experiments, child_seeds):
        if pending is not None and spec.name not in pending:
            print(f"  Skipping completed experiment: {spec.name}")
            continue
        written.append(process_experiment(spec, config.results_dir, seed=child_seed))

    print(f"✓ Ran {len(written)}/{len(experiments)} experiments")
    return aggregate_stats_files(config.results_dir, config.summary_csv)

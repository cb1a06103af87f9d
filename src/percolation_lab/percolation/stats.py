"""
Monte-Carlo estimation of the percolation threshold.

Each trial opens sites of a fresh n-by-n model in uniformly random order until
the system percolates. The fraction of open sites at that moment is one sample
of the threshold p*. Repeating the experiment T times gives the sample mean,
the sample standard deviation and a 95% confidence interval for p*.
"""

import math
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np

from .model import Percolation
from ..utils.timing import Stopwatch

# z-score of the two-sided 95% confidence interval
CONFIDENCE_Z = 1.96


def run_trial(n: int, rng: np.random.Generator) -> float:
    """
    Run one percolation experiment.

    Sites are opened following a random permutation of the grid, which is the
    same as repeatedly drawing a uniformly random closed site.

    Args:
        n: Grid size
        rng: Random generator

    Returns:
        Fraction of sites open when the system first percolates
    """
    model = Percolation(n)
    n_sites = n * n

    for site in rng.permutation(n_sites):
        row, col = divmod(int(site), n)
        model.open(row + 1, col + 1)
        if model.percolates():
            break

    return model.number_of_open_sites() / n_sites


class PercolationStats:
    """
    Threshold statistics over repeated percolation trials.

    All trials run in the constructor.

    Example:
        stats = PercolationStats(200, 100, seed=0)
        print(stats.mean(), stats.confidence_lo(), stats.confidence_hi())
    """

    def __init__(self, n: int, trials: int, seed: Optional[Any] = None):
        """
        Run `trials` independent experiments on an n-by-n grid.

        Args:
            n: Grid size (must be positive)
            trials: Number of experiments (must be positive)
            seed: Anything accepted by numpy.random.default_rng
        """
        for name, value in (('n', n), ('trials', trials)):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if n <= 0 or trials <= 0:
            raise ValueError(f"Grid size and trials must be positive, got n={n}, trials={trials}")

        self.n = int(n)
        self.trials = int(trials)
        self.thresholds = np.empty(self.trials, dtype=np.float64)

        rng = np.random.default_rng(seed)
        watch = Stopwatch()
        for trial in range(self.trials):
            self.thresholds[trial] = run_trial(self.n, rng)
        self.elapsed_seconds = watch.elapsed()

    def mean(self) -> float:
        """Sample mean of the percolation threshold."""
        return float(np.mean(self.thresholds))

    def stddev(self) -> float:
        """
        Sample standard deviation of the percolation threshold.

        Undefined (NaN) for a single trial.
        """
        if self.trials < 2:
            return float('nan')
        return float(np.std(self.thresholds, ddof=1))

    def _half_width(self) -> float:
        return CONFIDENCE_Z * self.stddev() / math.sqrt(self.trials)

    def confidence_lo(self) -> float:
        """Low endpoint of the 95% confidence interval."""
        return self.mean() - self._half_width()

    def confidence_hi(self) -> float:
        """High endpoint of the 95% confidence interval."""
        return self.mean() + self._half_width()

    def summary(self) -> Dict[str, float]:
        return {
            'n': self.n,
            'trials': self.trials,
            'mean': self.mean(),
            'stddev': self.stddev(),
            'confidence_lo': self.confidence_lo(),
            'confidence_hi': self.confidence_hi(),
            'elapsed_seconds': self.elapsed_seconds,
        }

    def format_results(self) -> str:
        """Three-line report of mean, stddev and confidence interval."""
        return (
            f"mean                      = {self.mean()}\n"
            f"stddev                    = {self.stddev()}\n"
            f"95% confidence interval   = {self.confidence_lo()}, {self.confidence_hi()}"
        )

    def save(self, filename: Union[str, Path]) -> None:
        """
        Save trial results to file.

        Args:
            filename: Path to output .npz file
        """
        np.savez(
            filename,
            n=self.n,
            trials=self.trials,
            thresholds=self.thresholds,
            elapsed_seconds=self.elapsed_seconds,
        )

    @classmethod
    def load(cls, filename: Union[str, Path]) -> 'PercolationStats':
        """
        Load trial results saved with save(), without rerunning any trial.

        Args:
            filename: Path to input .npz file
        """
        filename = Path(filename)
        if not filename.exists():
            raise FileNotFoundError(f"Results file not found: {filename}")

        with np.load(filename) as dump:
            stats = cls.__new__(cls)
            stats.n = int(dump['n'])
            stats.trials = int(dump['trials'])
            stats.thresholds = dump['thresholds']
            stats.elapsed_seconds = float(dump['elapsed_seconds'])
        return stats

"""Site percolation models and threshold estimation."""

from .model import Percolation
from .stats import PercolationStats, run_trial
from .analysis import run_sweep, aggregate_stats_files

__all__ = ['Percolation', 'PercolationStats', 'run_trial', 'run_sweep', 'aggregate_stats_files']

"""
Timing utilities for percolation experiments.

Experiments are timed with wall-clock time so that sweeps over grid sizes can
report how the cost of a run grows with n.
"""

import time
from typing import Optional


class Stopwatch:
    """
    Wall-clock stopwatch started at construction.

    Example:
        watch = Stopwatch()
        run_experiment()
        print(format_duration(watch.elapsed()))
    """

    def __init__(self):
        self.start_time = time.perf_counter()

    def elapsed(self) -> float:
        """Seconds since the stopwatch was created."""
        return time.perf_counter() - self.start_time


def format_duration(seconds: Optional[float]) -> str:
    """Format duration in seconds to human-readable string."""
    if seconds is None:
        return 'N/A'

    if seconds < 1:
        return f"{seconds * 1000:.1f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        minutes = seconds / 60
        return f"{minutes:.1f}m"
    else:
        hours = seconds / 3600
        return f"{hours:.2f}h"

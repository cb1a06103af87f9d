"""Tests for percolation threshold statistics."""

import math

import pytest
import numpy as np

from percolation_lab.percolation import PercolationStats, run_trial
from percolation_lab.percolation.stats import CONFIDENCE_Z


class TestRunTrial:
    """Tests for a single percolation trial."""

    def test_single_site_threshold(self):
        """A 1x1 grid percolates exactly when its only site opens."""
        rng = np.random.default_rng(0)

        assert run_trial(1, rng) == 1.0

    def test_two_by_two_thresholds(self):
        """A 2x2 grid percolates after two or three openings."""
        rng = np.random.default_rng(1)
        thresholds = {run_trial(2, rng) for _ in range(50)}

        assert thresholds <= {0.5, 0.75}

    def test_threshold_in_range(self):
        rng = np.random.default_rng(2)
        for _ in range(10):
            threshold = run_trial(10, rng)
            assert 0.1 <= threshold <= 1.0


class TestPercolationStats:
    """Tests for PercolationStats."""

    def test_small_grid_statistics(self):
        """Mean lies in (0, 1) and the confidence interval brackets it."""
        stats = PercolationStats(2, 100, seed=42)

        assert stats.thresholds.shape == (100,)
        assert 0 < stats.mean() < 1
        assert stats.confidence_lo() <= stats.mean() <= stats.confidence_hi()

    def test_confidence_interval_formula(self):
        stats = PercolationStats(5, 30, seed=7)
        half_width = CONFIDENCE_Z * stats.stddev() / math.sqrt(30)

        assert stats.mean() == pytest.approx(np.mean(stats.thresholds))
        assert stats.stddev() == pytest.approx(np.std(stats.thresholds, ddof=1))
        assert stats.confidence_lo() == pytest.approx(stats.mean() - half_width)
        assert stats.confidence_hi() == pytest.approx(stats.mean() + half_width)

    def test_reproducible_with_seed(self):
        a = PercolationStats(6, 20, seed=123)
        b = PercolationStats(6, 20, seed=123)

        np.testing.assert_array_equal(a.thresholds, b.thresholds)

    def test_single_trial_stddev_undefined(self):
        stats = PercolationStats(3, 1, seed=0)

        assert math.isnan(stats.stddev())
        assert math.isnan(stats.confidence_lo())

    @pytest.mark.parametrize("n,trials", [
        (0, 10), (10, 0), (-1, 5),
        (2.5, 10), (3, 0.5), (True, 5), (3, "4"),
    ])
    def test_invalid_arguments(self, n, trials):
        with pytest.raises(ValueError):
            PercolationStats(n, trials)

    def test_summary(self):
        stats = PercolationStats(4, 10, seed=5)
        summary = stats.summary()

        assert summary['n'] == 4
        assert summary['trials'] == 10
        assert summary['mean'] == stats.mean()
        assert summary['elapsed_seconds'] >= 0

    def test_format_results(self):
        stats = PercolationStats(3, 10, seed=9)
        lines = stats.format_results().splitlines()

        assert len(lines) == 3
        assert lines[0].startswith("mean")
        assert lines[1].startswith("stddev")
        assert lines[2].startswith("95% confidence interval")
        assert all(line.index("=") == 26 for line in lines)

    def test_save_load(self, tmp_path):
        """Saved results load back without rerunning trials."""
        stats = PercolationStats(4, 12, seed=11)
        path = tmp_path / "stats.npz"
        stats.save(path)

        loaded = PercolationStats.load(path)

        assert loaded.n == 4
        assert loaded.trials == 12
        np.testing.assert_array_equal(loaded.thresholds, stats.thresholds)
        assert loaded.mean() == stats.mean()

    def test_load_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            PercolationStats.load(tmp_path / "missing.npz")

"""Tests for the percolation model."""

from collections import deque

import pytest
import numpy as np

from percolation_lab.percolation import Percolation


def flood_fill_full(open_grid: np.ndarray) -> np.ndarray:
    """Full sites by breadth-first search from the open sites of the top row."""
    n = open_grid.shape[0]
    full = np.zeros_like(open_grid, dtype=bool)
    queue = deque((0, c) for c in range(n) if open_grid[0, c])
    for r, c in queue:
        full[r, c] = True

    while queue:
        r, c = queue.popleft()
        for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            rr, cc = r + dr, c + dc
            if 0 <= rr < n and 0 <= cc < n and open_grid[rr, cc] and not full[rr, cc]:
                full[rr, cc] = True
                queue.append((rr, cc))
    return full


def build_model(open_grid: np.ndarray) -> Percolation:
    model = Percolation(open_grid.shape[0])
    for r, c in zip(*np.nonzero(open_grid)):
        model.open(int(r) + 1, int(c) + 1)
    return model


class TestConstruction:
    """Tests for model construction."""

    @pytest.mark.parametrize("n", [1, 2, 5])
    def test_fresh_model_closed(self, n):
        """A fresh model has every site closed and does not percolate."""
        model = Percolation(n)

        assert model.n == n
        assert not model.percolates()
        assert model.number_of_open_sites() == 0
        for row in range(1, n + 1):
            for col in range(1, n + 1):
                assert not model.is_open(row, col)
                assert not model.is_full(row, col)

    @pytest.mark.parametrize("n", [0, -3])
    def test_non_positive_size(self, n):
        with pytest.raises(ValueError):
            Percolation(n)

    @pytest.mark.parametrize("n", [2.5, "3", True])
    def test_non_integer_size(self, n):
        with pytest.raises(ValueError):
            Percolation(n)


class TestOpen:
    """Tests for opening sites."""

    def test_open_is_idempotent(self):
        model = Percolation(3)
        model.open(2, 2)
        model.open(2, 2)

        assert model.is_open(2, 2)
        assert model.number_of_open_sites() == 1
        np.testing.assert_array_equal(
            model.open_mask(),
            [[False, False, False], [False, True, False], [False, False, False]],
        )

    def test_open_is_monotone(self):
        """Once open, a site stays open while others are opened."""
        model = Percolation(4)
        model.open(1, 1)
        for row in range(1, 5):
            for col in range(1, 5):
                model.open(row, col)
                assert model.is_open(1, 1)

        assert model.number_of_open_sites() == 16

    def test_open_mask_is_copy(self):
        model = Percolation(2)
        mask = model.open_mask()
        mask[0, 0] = True

        assert not model.is_open(1, 1)

    @pytest.mark.parametrize("row,col", [(0, 1), (1, 0), (4, 1), (1, 4), (0, 0), (4, 4)])
    def test_out_of_range(self, row, col):
        """Row or column outside [1, n] raises IndexError for every query."""
        model = Percolation(3)

        with pytest.raises(IndexError):
            model.open(row, col)
        with pytest.raises(IndexError):
            model.is_open(row, col)
        with pytest.raises(IndexError):
            model.is_full(row, col)


class TestPercolates:
    """Tests for percolation and fullness queries."""

    def test_single_site(self):
        """The only site of a 1x1 grid is in both the top and bottom rows."""
        model = Percolation(1)
        model.open(1, 1)

        assert model.is_full(1, 1)
        assert model.percolates()

    def test_two_by_two_diagonal(self):
        """Diagonal sites are not adjacent."""
        model = Percolation(2)
        model.open(1, 1)
        model.open(2, 2)

        assert not model.percolates()
        assert model.is_full(1, 1)
        assert not model.is_full(2, 2)

        model.open(1, 2)
        assert model.percolates()
        assert model.is_full(2, 2)

    def test_two_by_two_all_open(self):
        model = Percolation(2)
        for row, col in [(1, 1), (1, 2), (2, 1), (2, 2)]:
            model.open(row, col)

        assert model.percolates()
        assert model.full_mask().all()

    def test_vertical_column(self):
        model = Percolation(5)
        for row in range(1, 6):
            assert not model.percolates()
            model.open(row, 3)

        assert model.percolates()

    def test_no_backwash(self):
        """A bottom site reaching the top only through the virtual bottom is not full."""
        model = Percolation(3)
        for row in range(1, 4):
            model.open(row, 1)
        model.open(3, 3)

        assert model.percolates()
        assert model.is_open(3, 3)
        assert not model.is_full(3, 3)

    def test_full_implies_open(self):
        rng = np.random.default_rng(3)
        model = Percolation(6)
        for site in rng.permutation(36)[:20]:
            model.open(int(site) // 6 + 1, int(site) % 6 + 1)

        for row in range(1, 7):
            for col in range(1, 7):
                if model.is_full(row, col):
                    assert model.is_open(row, col)

    @pytest.mark.parametrize("n", [1, 2, 3, 4, 5])
    @pytest.mark.parametrize("p_open", [0.3, 0.55, 0.8])
    def test_matches_flood_fill(self, n, p_open):
        """percolates() and is_full() agree with a brute-force flood fill."""
        rng = np.random.default_rng(n * 100 + int(p_open * 100))

        for _ in range(20):
            open_grid = rng.random((n, n)) < p_open
            model = build_model(open_grid)
            expected_full = flood_fill_full(open_grid)

            assert model.percolates() == bool(expected_full[n - 1].any())
            np.testing.assert_array_equal(model.full_mask(), expected_full)
            for r in range(n):
                for c in range(n):
                    assert model.is_full(r + 1, c + 1) == expected_full[r, c]

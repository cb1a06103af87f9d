"""
Site percolation on an n-by-n grid.

Sites are opened one at a time and connectivity is tracked incrementally with
weighted quick-union. Two virtual sites sit above the top row and below the
bottom row, so "does the system percolate" reduces to a single connected()
query between them.
"""

import numpy as np

from ..unionfind import WeightedQuickUnionUF


class Percolation:
    """
    Model of a percolation system.

    Rows and columns are 1-indexed, from (1, 1) in the top-left corner to
    (n, n) in the bottom-right corner. Every site starts closed; open() is
    the only mutation and sites never close again.

    Two union-find structures are kept: one with both virtual sites for
    percolates(), and one with only the virtual top for is_full(). The second
    prevents an open bottom-row site from looking full through the virtual
    bottom once the system percolates.
    """

    def __init__(self, n: int):
        """
        Create an n-by-n grid with all sites closed.

        Args:
            n: Grid size (must be a positive integer)
        """
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
            raise ValueError(f"Grid size must be an integer, got {n!r}")
        if n <= 0:
            raise ValueError(f"Grid size must be positive, got {n}")

        self._n = int(n)
        self._n_sites = self._n * self._n
        self._open = np.zeros(self._n_sites, dtype=bool)
        self._n_open = 0

        self._virtual_top = self._n_sites
        self._virtual_bottom = self._n_sites + 1
        self._uf = WeightedQuickUnionUF(self._n_sites + 2)
        self._uf_full = WeightedQuickUnionUF(self._n_sites + 1)

    @property
    def n(self) -> int:
        return self._n

    def _index(self, row: int, col: int) -> int:
        """Flat 0-based site index; raises IndexError outside (1, 1)..(n, n)."""
        if not (1 <= row <= self._n and 1 <= col <= self._n):
            raise IndexError(
                f"Site ({row}, {col}) is outside the grid (1, 1) to ({self._n}, {self._n})"
            )
        return (row - 1) * self._n + (col - 1)

    def _connect(self, p: int, q: int) -> None:
        self._uf.union(p, q)
        self._uf_full.union(p, q)

    def open(self, row: int, col: int) -> None:
        """
        Open site (row, col) if it is not open already.

        Args:
            row: Row number in [1, n]
            col: Column number in [1, n]
        """
        site = self._index(row, col)
        if self._open[site]:
            return

        self._open[site] = True
        self._n_open += 1

        n = self._n
        if row > 1 and self._open[site - n]:
            self._connect(site, site - n)
        if row < n and self._open[site + n]:
            self._connect(site, site + n)
        if col > 1 and self._open[site - 1]:
            self._connect(site, site - 1)
        if col < n and self._open[site + 1]:
            self._connect(site, site + 1)

        # A 1x1 grid's only site is both in the top and the bottom row
        if row == 1:
            self._connect(site, self._virtual_top)
        if row == n:
            self._uf.union(site, self._virtual_bottom)

    def is_open(self, row: int, col: int) -> bool:
        """Whether site (row, col) is open."""
        return bool(self._open[self._index(row, col)])

    def is_full(self, row: int, col: int) -> bool:
        """Whether site (row, col) is open and connected to the top row."""
        site = self._index(row, col)
        if not self._open[site]:
            return False
        return self._uf_full.connected(site, self._virtual_top)

    def percolates(self) -> bool:
        """Whether some open path connects the top row to the bottom row."""
        return self._uf.connected(self._virtual_top, self._virtual_bottom)

    def number_of_open_sites(self) -> int:
        return self._n_open

    def open_mask(self) -> np.ndarray:
        """Boolean array of shape (n, n), True where a site is open."""
        return self._open.reshape(self._n, self._n).copy()

    def full_mask(self) -> np.ndarray:
        """Boolean array of shape (n, n), True where a site is full."""
        roots = self._uf_full.get_roots()
        full = self._open & (roots[:self._n_sites] == roots[self._virtual_top])
        return full.reshape(self._n, self._n)

    def __repr__(self) -> str:
        return (f"Percolation(n={self._n}, open_sites={self._n_open}, "
                f"percolates={self.percolates()})")

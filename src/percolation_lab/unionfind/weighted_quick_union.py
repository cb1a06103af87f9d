"""
Weighted quick-union with path compression.

Elements are the integers 0..n-1. The structure is an index arena: a parent
array and a size array, both numpy int arrays, so that the whole forest can be
read back in one vectorized pass with get_roots().
"""

import numpy as np


class WeightedQuickUnionUF:
    """
    Union-find over a fixed number of elements.

    Union by size keeps trees shallow and path halving during find() flattens
    them further, giving near-constant amortized cost per operation.

    Example:
        >>> uf = WeightedQuickUnionUF(4)
        >>> uf.union(0, 1)
        >>> uf.connected(0, 1)
        True
        >>> uf.count()
        3
    """

    def __init__(self, n: int):
        """
        Initialize n singleton sets.

        Args:
            n: Number of elements (must be non-negative)
        """
        if n < 0:
            raise ValueError(f"Number of elements must be non-negative, got {n}")

        self.n = int(n)
        self._parent = np.arange(self.n, dtype=np.int64)
        self._size = np.ones(self.n, dtype=np.int64)
        self._count = self.n

    def _validate(self, p: int) -> None:
        if p < 0 or p >= self.n:
            raise IndexError(f"Index {p} is not between 0 and {self.n - 1}")

    def count(self) -> int:
        """Number of disjoint sets."""
        return self._count

    def find(self, p: int) -> int:
        """
        Return the root of the set containing p.

        Args:
            p: Element index

        Returns:
            Index of the root element
        """
        self._validate(p)
        parent = self._parent
        while parent[p] != p:
            # Path halving
            parent[p] = parent[parent[p]]
            p = parent[p]
        return int(p)

    def connected(self, p: int, q: int) -> bool:
        """Whether p and q are in the same set."""
        return self.find(p) == self.find(q)

    def union(self, p: int, q: int) -> None:
        """
        Merge the sets containing p and q.

        The smaller tree is attached under the root of the larger one.
        """
        root_p = self.find(p)
        root_q = self.find(q)
        if root_p == root_q:
            return

        if self._size[root_p] < self._size[root_q]:
            self._parent[root_p] = root_q
            self._size[root_q] += self._size[root_p]
        else:
            self._parent[root_q] = root_p
            self._size[root_p] += self._size[root_q]
        self._count -= 1

    def get_roots(self) -> np.ndarray:
        """
        Root of every element, as an array of shape (n,).

        Pointer jumping is applied to the whole parent array until it stops
        changing; the compressed forest is kept.
        """
        parent = self._parent
        while True:
            grandparent = parent[parent]
            if np.array_equal(grandparent, parent):
                break
            parent = grandparent
        self._parent = parent
        return parent.copy()

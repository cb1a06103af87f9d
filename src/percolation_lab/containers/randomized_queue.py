"""
Randomized queue: removal and retrieval pick a uniformly random item.

Items live in a Python list. dequeue() swaps the chosen item with the last
one before popping, so every operation except iteration is O(1) amortized.
Each iterator walks its own random permutation of the items.
"""

from typing import Any, Generic, Iterator, List, Optional, TypeVar

import numpy as np

Item = TypeVar('Item')


class RandomizedQueue(Generic[Item]):
    """
    Queue whose dequeue() and sample() choose an item uniformly at random.

    None is not a valid item. dequeue() or sample() on an empty queue raises
    IndexError.

    Example:
        rq = RandomizedQueue(seed=7)
        for i in range(5):
            rq.enqueue(i)
        rq.sample()        # some item, still in the queue
        rq.dequeue()       # some item, now removed
    """

    def __init__(self, seed: Optional[Any] = None):
        """
        Args:
            seed: Anything accepted by numpy.random.default_rng
        """
        self._items: List[Item] = []
        self._rng = np.random.default_rng(seed)

    def is_empty(self) -> bool:
        return not self._items

    def size(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def enqueue(self, item: Item) -> None:
        """Add an item."""
        if item is None:
            raise ValueError("Cannot add None to a RandomizedQueue")
        self._items.append(item)

    def _random_index(self) -> int:
        if self.is_empty():
            raise IndexError("RandomizedQueue underflow")
        return int(self._rng.integers(len(self._items)))

    def dequeue(self) -> Item:
        """Remove and return a random item."""
        i = self._random_index()
        items = self._items
        items[i], items[-1] = items[-1], items[i]
        return items.pop()

    def sample(self) -> Item:
        """Return a random item without removing it."""
        return self._items[self._random_index()]

    def __iter__(self) -> Iterator[Item]:
        # Snapshot so the permutation stays valid if the queue changes
        items = list(self._items)
        for i in self._rng.permutation(len(items)):
            yield items[i]

    def __repr__(self) -> str:
        return f"RandomizedQueue(size={len(self._items)})"

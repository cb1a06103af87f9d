"""
Double-ended queue backed by a doubly-linked list.

Items can be added to and removed from both ends in constant time. Iteration
runs from the front to the back.
"""

from typing import Any, Generic, Iterator, Optional, TypeVar

Item = TypeVar('Item')


class _Node:
    __slots__ = ('item', 'next', 'prev')

    def __init__(self, item: Any):
        self.item = item
        self.next: Optional['_Node'] = None
        self.prev: Optional['_Node'] = None


class Deque(Generic[Item]):
    """
    Generalization of a stack and a queue.

    None is not a valid item. Removing from an empty deque raises IndexError.

    Example:
        >>> dq = Deque()
        >>> dq.add_first(1)
        >>> dq.add_last(2)
        >>> list(dq)
        [1, 2]
        >>> dq.remove_last()
        2
    """

    def __init__(self):
        self._first: Optional[_Node] = None
        self._last: Optional[_Node] = None
        self._size = 0

    def is_empty(self) -> bool:
        return self._size == 0

    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    @staticmethod
    def _check_item(item: Any) -> None:
        if item is None:
            raise ValueError("Cannot add None to a Deque")

    def add_first(self, item: Item) -> None:
        """Add an item to the front."""
        self._check_item(item)
        node = _Node(item)
        node.next = self._first

        if self.is_empty():
            self._last = node
        else:
            self._first.prev = node

        self._first = node
        self._size += 1

    def add_last(self, item: Item) -> None:
        """Add an item to the back."""
        self._check_item(item)
        node = _Node(item)
        node.prev = self._last

        if self.is_empty():
            self._first = node
        else:
            self._last.next = node

        self._last = node
        self._size += 1

    def remove_first(self) -> Item:
        """Remove and return the item at the front."""
        if self.is_empty():
            raise IndexError("Deque underflow")

        node = self._first
        self._first = node.next
        self._size -= 1

        if self.is_empty():
            self._last = None
        else:
            self._first.prev = None

        return node.item

    def remove_last(self) -> Item:
        """Remove and return the item at the back."""
        if self.is_empty():
            raise IndexError("Deque underflow")

        node = self._last
        self._last = node.prev
        self._size -= 1

        if self.is_empty():
            self._first = None
        else:
            self._last.next = None

        return node.item

    def __iter__(self) -> Iterator[Item]:
        node = self._first
        while node is not None:
            yield node.item
            node = node.next

    def __repr__(self) -> str:
        return f"Deque({list(self)!r})"

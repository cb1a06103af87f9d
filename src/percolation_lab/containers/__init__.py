"""Generic linear containers."""

from .deque import Deque
from .randomized_queue import RandomizedQueue

__all__ = ['Deque', 'RandomizedQueue']

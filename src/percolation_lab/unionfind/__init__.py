"""Disjoint-set structures used by the percolation models."""

from .weighted_quick_union import WeightedQuickUnionUF

__all__ = ['WeightedQuickUnionUF']

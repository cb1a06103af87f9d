"""
Percolation Lab - Site percolation models and Monte-Carlo threshold estimation.

This package provides tools for:
- Dynamic connectivity with a weighted quick-union structure
- Site percolation on n-by-n grids (open / full / percolates queries)
- Monte-Carlo estimation of the percolation threshold
- Generic deque and randomized queue containers
- YAML-configured batch runs with CSV aggregation
"""

__version__ = "1.0.0"

"""
SOFIA Data Package (Imperative Shell)

File I/O for stock time series.  Nothing here classifies or plots.

Modules:
- reader: CSV loading and method discovery
"""

from .reader import read_timeseries, available_methods

__all__ = [
    'read_timeseries',
    'available_methods',
]

"""
SOFIA - State of World Fisheries and Aquaculture stock status plots

Classifies stock-assessment time series (B/Bmsy, F/Fmsy per stock and
year) into status categories and plots them with Plotly, using the
Functional Core, Imperative Shell architecture.

Structure:
- analysis/ : Functional Core (classification, labels)
- plotting/ : Functional Core (figures)
- data/     : Imperative Shell (file I/O)
- utils/    : logging helpers
"""

from .analysis.categories import calc_cat, MissingColumnError
from .plotting.categories import plot_cat, plot_prop, UnsupportedChartTypeError

__version__ = "0.1.0"

__all__ = [
    'calc_cat',
    'plot_cat',
    'plot_prop',
    'MissingColumnError',
    'UnsupportedChartTypeError',
]

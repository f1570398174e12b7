"""
SOFIA Plotting Package (Functional Core)

Pure plotting functions only – no file I/O, no side effects.
Every public plotting function accepts a DataFrame and returns a
``plotly.graph_objects.Figure``.

Modules:
    categories: Stock status categories by year, as stacked count bars
                or a stock-by-year raster.  ``plot_prop`` is the
                deprecated name of ``plot_cat``.
"""

from .categories import (
    UnsupportedChartTypeError,
    plot_cat,
    plot_prop,
    build_category_table,
)

__all__ = [
    'UnsupportedChartTypeError',
    'plot_cat',
    'plot_prop',
    'build_category_table',
]

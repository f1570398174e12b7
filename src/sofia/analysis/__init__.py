"""
SOFIA Analysis Package (Functional Core)

This package contains pure transformation functions with no I/O.
All functions accept data structures (DataFrames, Series) and
return transformed data.

Modules:
- categories: Column lookup, stock status classification and labels
"""

from .categories import (
    DEFAULT_METHOD,
    LABELS_3,
    COLORS_3,
    LABELS_4,
    COLORS_4,
    MissingColumnError,
    rename_stock_year,
    method_column,
    get_method_columns,
    cat3,
    cat4,
    calc_cat,
    category_scheme,
    label_categories,
)

__all__ = [
    # Constants
    'DEFAULT_METHOD',
    'LABELS_3',
    'COLORS_3',
    'LABELS_4',
    'COLORS_4',
    # Columns
    'MissingColumnError',
    'rename_stock_year',
    'method_column',
    'get_method_columns',
    # Classification
    'cat3',
    'cat4',
    'calc_cat',
    # Labels
    'category_scheme',
    'label_categories',
]

"""
Stock Status Categories (Functional Core)

Pure functions only. No I/O, no plotting, no side effects.
Input/output is DataFrames, Series and plain tuples.

Package Location: src/sofia/analysis/categories.py

Column Contract:
    The first two columns of every stock time series are interpreted
    positionally as ``stock`` and ``year``, whatever they are actually
    called (``Stock``/``yr`` in older SOFIA tables).  ``rename_stock_year``
    makes that reinterpretation explicit; nothing else in the package
    relies on column order.

    Ratio columns are looked up by constructed name: ``bbmsy.<method>`` and
    ``ffmsy.<method>``, e.g. ``bbmsy.cmsy.naive``.  An absent column raises
    ``MissingColumnError`` rather than silently producing empty categories.

Category Codes:
    3-class (biomass only)::

        1  b > 1.2
        2  0.8 <= b <= 1.2
        3  b < 0.8

    4-class (biomass and fishing mortality, threshold 1.0 on both)::

        1  b >= 1, f <= 1
        2  b >= 1, f > 1
        3  b < 1,  f <= 1
        4  b < 1,  f > 1

    Missing ratios give a missing code (``pd.NA`` in an ``Int64`` column).
    Code ``i`` maps to the label at position ``i`` of the fixed label array;
    the label order and colours never depend on the input data.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_METHOD: str = "cmsy.naive"

BBMSY_PREFIX: str = "bbmsy"
FFMSY_PREFIX: str = "ffmsy"

# 3-class thresholds on B/Bmsy
_B_HIGH: float = 1.2
_B_LOW: float = 0.8

# 4-class thresholds on B/Bmsy and F/Fmsy
_B_MSY: float = 1.0
_F_MSY: float = 1.0

LABELS_3: Tuple[str, ...] = ("b>1.2", "0.8<b<1.2", "b<0.8")
COLORS_3: Tuple[str, ...] = ("darkgreen", "yellow", "red")

LABELS_4: Tuple[str, ...] = ("b>1,f<1", "b>1,f>1", "b<1,f<1", "b<1,f>1")
COLORS_4: Tuple[str, ...] = ("darkgreen", "orange", "yellow", "red")


class MissingColumnError(ValueError):
    """
    Raised when a ratio column for the requested method is not present.

    Attributes:
        missing: Names of the absent columns.
        method: Method suffix that was looked up.
    """

    def __init__(self, missing: Sequence[str], method: str) -> None:
        self.missing = list(missing)
        self.method = method
        super().__init__(
            f"No columns {self.missing} for method '{method}'"
        )


# ---------------------------------------------------------------------------
# Public API – column handling
# ---------------------------------------------------------------------------

def rename_stock_year(df: pd.DataFrame) -> pd.DataFrame:
    """
    Return a copy of *df* with its first two columns named ``stock``/``year``.

    The rename is strictly positional: a table whose first columns are
    ``Stock`` and ``yr`` (or anything else) comes back as ``stock`` and
    ``year``.  Remaining columns keep their names.

    Args:
        df: Stock time series.

    Returns:
        Renamed copy; *df* itself is not modified.

    Raises:
        ValueError: If *df* has fewer than two columns.
    """
    if df.shape[1] < 2:
        raise ValueError(
            f"Expected at least 2 columns (stock, year), got {df.shape[1]}"
        )
    out = df.copy()
    out.columns = ["stock", "year"] + list(df.columns[2:])
    return out


def method_column(prefix: str, method: str) -> str:
    """Build the ratio column name for *method*, e.g. ``bbmsy.cmsy.naive``."""
    return f"{prefix}.{method}"


def get_method_columns(
    df: pd.DataFrame,
    method: str = DEFAULT_METHOD,
) -> Tuple[pd.Series, pd.Series]:
    """
    Look up the B/Bmsy and F/Fmsy columns estimated by *method*.

    Args:
        df: Stock time series.
        method: Method suffix of the ratio columns.

    Returns:
        Tuple ``(bbmsy, ffmsy)`` of Series aligned with *df*'s index.

    Raises:
        MissingColumnError: If either column is absent.
    """
    wanted = [method_column(BBMSY_PREFIX, method),
              method_column(FFMSY_PREFIX, method)]
    missing = [c for c in wanted if c not in df.columns]
    if missing:
        raise MissingColumnError(missing, method)
    return df[wanted[0]], df[wanted[1]]


# ---------------------------------------------------------------------------
# Public API – classification
# ---------------------------------------------------------------------------

def cat3(bbmsy: Iterable[float]) -> pd.Series:
    """
    Classify B/Bmsy values into the 3-class biomass categories.

    Args:
        bbmsy: B/Bmsy values (Series, array or list).

    Returns:
        ``Int64`` Series of codes 1-3; missing where *bbmsy* is missing.
    """
    b = _as_float_series(bbmsy)
    codes = np.select(
        [b > _B_HIGH, b >= _B_LOW, b < _B_LOW],
        [1, 2, 3],
        default=0,
    )
    return _to_codes(codes, valid=b.notna(), index=b.index)


def cat4(bbmsy: Iterable[float], ffmsy: Iterable[float]) -> pd.Series:
    """
    Classify B/Bmsy and F/Fmsy pairs into the 4-class status categories.

    Args:
        bbmsy: B/Bmsy values.
        ffmsy: F/Fmsy values, same length as *bbmsy*.

    Returns:
        ``Int64`` Series of codes 1-4 indexed like *bbmsy*; missing where
        either ratio is missing.

    Raises:
        ValueError: If the inputs differ in length.
    """
    b = _as_float_series(bbmsy)
    f = _as_float_series(ffmsy, index=b.index)

    high_b = b >= _B_MSY
    low_f = f <= _F_MSY
    codes = np.select(
        [high_b & low_f, high_b & ~low_f, ~high_b & low_f],
        [1, 2, 3],
        default=4,
    )
    return _to_codes(codes, valid=b.notna() & f.notna(), index=b.index)


def calc_cat(df: pd.DataFrame, method: str = DEFAULT_METHOD) -> pd.DataFrame:
    """
    Append 3-class and 4-class stock status codes to a stock time series.

    Args:
        df: Stock time series containing ``bbmsy.<method>`` and
            ``ffmsy.<method>`` columns.
        method: Method suffix selecting the ratio columns.

    Returns:
        Copy of *df* with ``estCat3`` and ``estCat4`` (``Int64``) columns.

    Raises:
        MissingColumnError: If the ratio columns for *method* are absent.
    """
    bbmsy, ffmsy = get_method_columns(df, method)

    out = df.copy()
    out["estCat3"] = cat3(bbmsy)
    out["estCat4"] = cat4(bbmsy, ffmsy)

    logger.debug(
        f"Classified {len(out)} rows using method '{method}'",
        extra={"method": method, "rows": len(out)},
    )
    return out


# ---------------------------------------------------------------------------
# Public API – display labels
# ---------------------------------------------------------------------------

def category_scheme(cats: int = 4) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    """
    Return the fixed ``(labels, colors)`` pair for a category granularity.

    ``cats == 3`` selects the biomass-only scheme; every other value selects
    the 4-class scheme.  Values other than 3 or 4 are accepted for
    compatibility with older scripts but logged as a warning.

    Args:
        cats: Number of categories, normally 3 or 4.

    Returns:
        Tuple ``(labels, colors)`` of equal length, order-matched.
    """
    if cats == 3:
        return LABELS_3, COLORS_3
    if cats != 4:
        logger.warning(
            f"Unsupported number of categories {cats!r}; using 4 categories.",
            extra={"cats": cats},
        )
    return LABELS_4, COLORS_4


def label_categories(codes: Iterable, cats: int = 4) -> pd.Categorical:
    """
    Map integer category codes to display labels.

    Code ``i`` selects ``labels[i - 1]``.  Categories of the result are the
    full label array in its fixed order, so unused labels are kept and the
    ordering never follows the input data.  Missing or out-of-range codes
    become missing values.

    Args:
        codes: Integer category codes (1-based).
        cats: Number of categories, see :func:`category_scheme`.

    Returns:
        ``pandas.Categorical`` with the fixed label categories.
    """
    labels, _ = category_scheme(cats)
    arr = _as_float_series(codes).to_numpy()

    with np.errstate(invalid="ignore"):
        valid = (
            np.isfinite(arr)
            & (arr >= 1)
            & (arr <= len(labels))
            & (arr == np.floor(arr))
        )
    positions = np.where(valid, np.nan_to_num(arr) - 1, -1).astype(int)
    return pd.Categorical.from_codes(positions, categories=list(labels))


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------

def _as_float_series(
    values: Iterable,
    index: Optional[pd.Index] = None,
) -> pd.Series:
    """
    Coerce *values* to a float Series, missing values as ``NaN``.

    Args:
        values: Series, array or list.  Non-numeric entries become ``NaN``.
        index: Index to attach.  When ``None``, a Series input keeps its own
            index and other inputs get a default range index.

    Returns:
        ``float64`` Series.

    Raises:
        ValueError: If *index* is given and its length differs from *values*.
    """
    if isinstance(values, pd.Series):
        own_index = values.index
        numeric = pd.to_numeric(values, errors="coerce")
    else:
        numeric = pd.to_numeric(pd.Series(list(values), dtype=object),
                                errors="coerce")
        own_index = None

    arr = numeric.to_numpy(dtype=float, na_value=np.nan)
    if index is not None and len(index) != len(arr):
        raise ValueError(
            f"Length mismatch: {len(arr)} values for {len(index)} rows"
        )
    return pd.Series(arr, index=index if index is not None else own_index)


def _to_codes(codes: np.ndarray, valid: pd.Series, index: pd.Index) -> pd.Series:
    """Wrap raw integer codes as ``Int64``, masking rows that are not *valid*."""
    out = pd.Series(codes, index=index, dtype="Int64")
    out[~valid.to_numpy()] = pd.NA
    return out

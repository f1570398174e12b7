"""
SOFIA Time Series Reader (Imperative Shell)

Loads stock time series tables from disk into the DataFrame layout
expected by ``sofia.analysis`` and ``sofia.plotting``.

Package Location: src/sofia/data/reader.py

Expected layout (CSV, header row)::

    Stock,yr,bbmsy.cmsy.naive,ffmsy.cmsy.naive,bbmsy.effEdepP,ffmsy.effEdepP
    Cod,2000,1.31,0.62,1.18,0.70
    ...

The first two columns are the stock identifier and year whatever their
names; every remaining column is a ratio estimate named
``<bbmsy|ffmsy>.<method>``.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Union

import pandas as pd

logger = logging.getLogger(__name__)

# ``bbmsy.<method>`` / ``ffmsy.<method>``; the method may itself contain dots
_RATIO_COLUMN = re.compile(r"^(bbmsy|ffmsy)\.(.+)$")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def read_timeseries(path: Union[str, Path]) -> pd.DataFrame:
    """
    Read a stock time series CSV.

    Args:
        path: Path to a CSV file with a header row.

    Returns:
        DataFrame with the file's columns in file order.  The stock column
        is read as string.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If the table has fewer than three columns (stock, year
            and at least one ratio column).
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Time series file not found: {path}")

    header = pd.read_csv(path, nrows=0)
    if header.shape[1] < 3:
        raise ValueError(
            f"{path.name}: expected stock, year and ratio columns, "
            f"got {list(header.columns)}"
        )

    # stock identifiers such as '001' must not be parsed as numbers
    df = pd.read_csv(path, dtype={header.columns[0]: str})

    logger.info(
        f"Read {len(df)} rows from {path.name}",
        extra={"path": str(path), "rows": len(df)},
    )
    return df


def available_methods(df: pd.DataFrame) -> List[str]:
    """
    List method suffixes that have both a B/Bmsy and an F/Fmsy column.

    Args:
        df: Stock time series.

    Returns:
        Sorted list of method names, e.g. ``['cmsy.naive', 'effEdepP']``.
    """
    found: dict[str, set] = {}
    for col in df.columns[2:]:
        match = _RATIO_COLUMN.match(str(col))
        if match:
            prefix, method = match.groups()
            found.setdefault(method, set()).add(prefix)
    return sorted(m for m, prefixes in found.items() if len(prefixes) == 2)

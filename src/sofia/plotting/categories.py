"""
Stock Status Category Plot (Functional Core)

Pure function – no file I/O, no side effects.
Input: stock time series DataFrame.
Output: plotly.graph_objects.Figure.

Package Location: src/sofia/plotting/categories.py

Chart Types:
    ``count`` (legacy alias ``prop``)
        Stacked bars of the number of stocks in each status category per
        year.  One trace per category, always in the fixed label order, so
        legend entries and colours are identical whatever the data holds.

    ``stock`` (legacy alias ``all``)
        Raster of status category by year (x) and stock (y).  Categories
        are drawn as their position in the label array on a stepped,
        discrete colour scale; stock-years with no observation are left blank.

Column Contract:
    The first two columns are reinterpreted as ``stock`` and ``year`` (see
    ``sofia.analysis.categories.rename_stock_year``).

Missing Categories:
    An observation whose category is missing (a missing ratio) is still
    counted.  It is drawn as a trailing grey ``NA`` bar segment and as a
    grey raster cell, so yearly totals equal the number of stocks assessed.
    The ``NA`` entry only appears when such observations exist.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from ..analysis.categories import (
    DEFAULT_METHOD,
    calc_cat,
    category_scheme,
    label_categories,
    rename_stock_year,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Accepted chart types → canonical chart type
_CHART_TYPES: Dict[str, str] = {
    'count': 'count',
    'prop':  'count',
    'stock': 'stock',
    'all':   'stock',
}

_BAR_WIDTH: float = 0.5
_TEMPLATE: str = 'plotly_white'
_CATEGORY_COLUMN: str = 'estCat'

_NA_LABEL: str = 'NA'
_NA_COLOR: str = '#7f7f7f'   # grey50

Classifier = Callable[..., pd.DataFrame]


class UnsupportedChartTypeError(ValueError):
    """Raised when the chart type is not one of count/prop/stock/all."""

    def __init__(self, chart_type: Any) -> None:
        self.chart_type = chart_type
        super().__init__(
            f"Unsupported chart type {chart_type!r}; "
            f"expected one of {sorted(_CHART_TYPES)}"
        )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def plot_cat(
    df: pd.DataFrame,
    method: str = DEFAULT_METHOD,
    cats: int = 4,
    chart_type: str = 'count',
    classifier: Classifier = calc_cat,
    title: Optional[str] = None,
    *,
    type: Optional[str] = None,
) -> go.Figure:
    """
    Plot stock status categories by year.

    Stocks are underfished (green), fully fished (yellow/orange) or
    overfished (red), based on biomass only (``cats=3``) or on biomass and
    fishing mortality (``cats=4``).

    Args:
        df: Stock time series.  The first two columns are treated as
            ``stock`` and ``year`` regardless of their names; the ratio
            columns must be named ``bbmsy.<method>`` and ``ffmsy.<method>``.
        method: Suffix of the ratio columns, e.g. ``'effEdepP'``.
        cats: ``3`` or ``4``.  Any other value falls back to 4 categories.
        chart_type: ``'count'`` (or ``'prop'``) for stacked bars of counts
            per year; ``'stock'`` (or ``'all'``) for a stock-by-year raster.
        classifier: Callable ``classifier(df, method=...)`` returning *df*
            with ``estCat3`` and ``estCat4`` columns.  Default
            :func:`~sofia.analysis.categories.calc_cat`.
        title: Optional figure title.
        type: Keyword alias of *chart_type*, matching the ``type`` argument
            of older SOFIA scripts.  Takes precedence when given.

    Returns:
        ``plotly.graph_objects.Figure`` ready for ``fig.show()`` or
        serialisation.

    Raises:
        UnsupportedChartTypeError: If *chart_type* is not recognised.
        MissingColumnError: If the ratio columns for *method* are absent.
    """
    if type is not None:
        chart_type = type
    kind = _resolve_chart_type(chart_type)

    table = build_category_table(df, method=method, cats=cats,
                                 classifier=classifier)
    labels, colors = category_scheme(cats)

    logger.debug(
        f"Plotting {len(table)} observations as '{kind}' chart",
        extra={"chart_type": kind, "cats": cats, "method": method},
    )

    if kind == 'count':
        fig = _count_figure(table, labels, colors)
    else:
        fig = _stock_figure(table, labels, colors)

    if title:
        fig.update_layout(title=title)
    return fig


def plot_prop(*args: Any, **kwargs: Any) -> go.Figure:
    """
    Deprecated name of :func:`plot_cat`, kept for older SOFIA scripts.

    Accepts exactly the same arguments and returns the same figure.
    """
    return plot_cat(*args, **kwargs)


def build_category_table(
    df: pd.DataFrame,
    method: str = DEFAULT_METHOD,
    cats: int = 4,
    classifier: Classifier = calc_cat,
) -> pd.DataFrame:
    """
    Classify a stock time series into display categories.

    Args:
        df: Stock time series, see :func:`plot_cat`.
        method: Suffix of the ratio columns.
        cats: ``3`` or ``4``.
        classifier: Callable appending ``estCat3`` / ``estCat4``.

    Returns:
        DataFrame with columns ``[stock, year, estCat]``.  ``estCat`` is a
        categorical whose categories are the fixed label array for *cats*.
    """
    classified = classifier(rename_stock_year(df), method=method)
    code_col = 'estCat3' if cats == 3 else 'estCat4'

    table = classified[['stock', 'year']].copy()
    table[_CATEGORY_COLUMN] = label_categories(classified[code_col], cats=cats)
    return table.reset_index(drop=True)


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------

def _resolve_chart_type(chart_type: str) -> str:
    """
    Map a chart type or legacy alias to ``'count'`` or ``'stock'``.

    Raises:
        UnsupportedChartTypeError: If *chart_type* is not recognised.
    """
    try:
        return _CHART_TYPES[chart_type]
    except (KeyError, TypeError):
        raise UnsupportedChartTypeError(chart_type) from None


def _count_figure(
    table: pd.DataFrame,
    labels: Sequence[str],
    colors: Sequence[str],
) -> go.Figure:
    """
    Build stacked bars of category counts per year.

    Bar outlines are drawn in the fill colour of their category rather than
    a separate outline palette.

    Args:
        table: Output of :func:`build_category_table`.
        labels: Fixed label array.
        colors: Colours order-matched to *labels*.

    Returns:
        Figure with one ``go.Bar`` trace per label, plus a trailing
        ``NA`` trace when some categories are missing.
    """
    years = sorted(table['year'].dropna().unique().tolist())
    counts = pd.DataFrame(0, index=years, columns=list(labels))

    missing = table[table[_CATEGORY_COLUMN].isna()].dropna(subset=['year'])
    if not missing.empty:
        counts[_NA_LABEL] = missing.groupby('year').size()
        counts[_NA_LABEL] = counts[_NA_LABEL].fillna(0).astype(int)
        labels = list(labels) + [_NA_LABEL]
        colors = list(colors) + [_NA_COLOR]

    grouped = table.groupby(['year', _CATEGORY_COLUMN], observed=True).size()
    for (year, label), n in grouped.items():
        counts.loc[year, label] = int(n)

    fig = go.Figure()
    for label, color in zip(labels, colors):
        fig.add_trace(go.Bar(
            x=years,
            y=[int(v) for v in counts[label]],
            name=label,
            width=_BAR_WIDTH,
            marker=dict(color=color, line=dict(color=color, width=1)),
            hovertemplate=(
                f"<b>{label}</b><br>"
                "Year: %{x}<br>"
                "Count: %{y}<extra></extra>"
            ),
        ))

    fig.update_layout(
        barmode='stack',
        xaxis=dict(title='year'),
        yaxis=dict(title='count'),
        legend=dict(title=dict(text=_CATEGORY_COLUMN), traceorder='normal'),
        template=_TEMPLATE,
    )
    return fig


def _stock_figure(
    table: pd.DataFrame,
    labels: Sequence[str],
    colors: Sequence[str],
) -> go.Figure:
    """
    Build a stock × year raster of status categories.

    Cell values are the label's position (0-based) in *labels*; observations
    with a missing category take the position after the last label and a
    grey band.  The colour scale is stepped so each position gets exactly
    its colour; the colour bar ticks show the labels.

    Args:
        table: Output of :func:`build_category_table`.
        labels: Fixed label array.
        colors: Colours order-matched to *labels*.

    Returns:
        Figure with a single ``go.Heatmap`` trace.
    """
    labels = list(labels)
    colors = list(colors)
    years = sorted(table['year'].dropna().unique().tolist())
    stocks = sorted(table['stock'].dropna().astype(str).unique().tolist())

    grid = pd.DataFrame(np.nan, index=stocks, columns=years)
    valid = table.dropna(subset=['stock', 'year'])
    if valid[_CATEGORY_COLUMN].isna().any():
        labels.append(_NA_LABEL)
        colors.append(_NA_COLOR)
    na_position = len(labels) - 1

    for row in valid.itertuples(index=False):
        # later rows win, as with overplotted raster cells
        position = (
            na_position if pd.isna(row.estCat) else labels.index(row.estCat)
        )
        grid.loc[str(row.stock), row.year] = position

    z: List[List[Optional[int]]] = [
        [None if pd.isna(v) else int(v) for v in grid_row]
        for grid_row in grid.to_numpy()
    ]
    text = [[labels[v] if v is not None else '' for v in z_row] for z_row in z]

    n = len(labels)
    fig = go.Figure(go.Heatmap(
        x=years,
        y=stocks,
        z=z,
        text=text,
        zmin=-0.5,
        zmax=n - 0.5,
        colorscale=_discrete_colorscale(colors),
        colorbar=dict(
            title=dict(text=_CATEGORY_COLUMN),
            tickmode='array',
            tickvals=list(range(n)),
            ticktext=labels,
        ),
        hoverongaps=False,
        hovertemplate=(
            "Stock: %{y}<br>"
            "Year: %{x}<br>"
            "<b>%{text}</b><extra></extra>"
        ),
    ))

    fig.update_layout(
        xaxis=dict(title='year'),
        yaxis=dict(title='stock', type='category'),
        template=_TEMPLATE,
    )
    return fig


def _discrete_colorscale(colors: Sequence[str]) -> List[List[Any]]:
    """
    Build a stepped Plotly colorscale with one equal-width band per colour.

    Args:
        colors: Colours in label order.

    Returns:
        List of ``[fraction, colour]`` stops, two per colour.
    """
    n = len(colors)
    scale: List[List[Any]] = []
    for i, color in enumerate(colors):
        scale.append([i / n, color])
        scale.append([(i + 1) / n, color])
    return scale

"""
SOFIA Command-Line Interface

Exposes three subcommands:

    sofia methods  --input <csv>                      List available methods
    sofia classify --input <csv> [--output <csv>]     Append status codes
    sofia plot     --input <csv> --output <html> [...] Plot status categories

The package must be installed (``pip install -e .``) for the ``sofia``
entry point to be available.

Package Location: src/sofia/cli.py
"""

from __future__ import annotations

import argparse
import sys
import traceback
from pathlib import Path
from typing import List, Optional

import pandas as pd

from .analysis.categories import DEFAULT_METHOD, calc_cat, rename_stock_year
from .data.reader import available_methods, read_timeseries
from .plotting.categories import plot_cat
from .utils.logging import configure_logging


# ===========================================================================
# Shared helpers
# ===========================================================================

def _die(message: str) -> None:
    """Print an error message and exit with status 1.

    Args:
        message: Human-readable error text.
    """
    print(f"\n❌  Error: {message}", file=sys.stderr)
    sys.exit(1)


def _load(path: str) -> pd.DataFrame:
    """Read the input time series, exiting with a message on failure."""
    try:
        return read_timeseries(path)
    except (FileNotFoundError, ValueError, pd.errors.ParserError) as exc:
        _die(str(exc))


# ===========================================================================
# Subcommand handlers
# ===========================================================================

def handle_methods(args: argparse.Namespace) -> None:
    """Print the method suffixes that have both B/Bmsy and F/Fmsy columns.

    Args:
        args: Parsed CLI arguments.  Required field: ``args.input``.
    """
    df = _load(args.input)
    methods = available_methods(df)
    if not methods:
        _die(f"No bbmsy.<method>/ffmsy.<method> column pairs in {args.input}")
    for method in methods:
        print(method)


def handle_classify(args: argparse.Namespace) -> None:
    """Append ``estCat3`` / ``estCat4`` to the input and write it as CSV.

    The first two columns are renamed to ``stock`` / ``year`` in the output.

    Args:
        args: Parsed CLI arguments.
    """
    df = _load(args.input)
    try:
        result = calc_cat(rename_stock_year(df), method=args.method)
    except ValueError as exc:
        _die(str(exc))

    if args.output:
        out_path = Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        result.to_csv(out_path, index=False)
        print(f"✅  {len(result)} rows classified → {out_path}")
    else:
        result.to_csv(sys.stdout, index=False)


def handle_plot(args: argparse.Namespace) -> None:
    """Plot stock status categories and save the figure as HTML.

    Args:
        args: Parsed CLI arguments.
    """
    df = _load(args.input)
    try:
        fig = plot_cat(
            df,
            method=args.method,
            cats=args.cats,
            chart_type=args.type,
            title=args.title,
        )
    except ValueError as exc:
        if args.verbose:
            traceback.print_exc()
        _die(str(exc))

    out_path = Path(args.output)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(str(out_path), include_plotlyjs="cdn")
    print(f"✅  {args.type} plot ({args.cats} categories) → {out_path}")


# ===========================================================================
# Argument parser construction
# ===========================================================================

def _build_parser() -> argparse.ArgumentParser:
    """Construct and return the top-level argument parser.

    Returns:
        Configured ``ArgumentParser`` with ``methods``, ``classify`` and
        ``plot`` subcommands attached.
    """
    parser = argparse.ArgumentParser(
        prog="sofia",
        description=(
            "SOFIA – stock status categories\n"
            "Classify B/Bmsy and F/Fmsy time series and plot them."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        metavar="LEVEL",
        help="Logging level, e.g. INFO or DEBUG (default: WARNING).",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        default=False,
        help="Emit log records as single-line JSON.",
    )
    subs = parser.add_subparsers(dest="command", metavar="<command>")
    subs.required = True

    # ------------------------------------------------------------------
    # methods
    # ------------------------------------------------------------------
    p_meth = subs.add_parser(
        "methods",
        help="List estimation methods present in a time series CSV.",
    )
    p_meth.add_argument(
        "--input",
        required=True,
        metavar="CSV",
        help="Stock time series CSV.",
    )
    p_meth.set_defaults(func=handle_methods)

    # ------------------------------------------------------------------
    # classify
    # ------------------------------------------------------------------
    p_cls = subs.add_parser(
        "classify",
        help="Append estCat3/estCat4 status codes to a time series CSV.",
        description=(
            "Classify every stock-year into 3-class (biomass) and 4-class\n"
            "(biomass and fishing mortality) status codes.\n\n"
            "The first two columns are treated as stock and year."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p_cls.add_argument(
        "--input",
        required=True,
        metavar="CSV",
        help="Stock time series CSV.",
    )
    p_cls.add_argument(
        "--method",
        default=DEFAULT_METHOD,
        metavar="NAME",
        help=(
            "Suffix of the bbmsy.<NAME>/ffmsy.<NAME> columns "
            f"(default: {DEFAULT_METHOD})."
        ),
    )
    p_cls.add_argument(
        "--output",
        default=None,
        metavar="CSV",
        help="Output CSV (default: write to stdout).",
    )
    p_cls.set_defaults(func=handle_classify)

    # ------------------------------------------------------------------
    # plot
    # ------------------------------------------------------------------
    p_plot = subs.add_parser(
        "plot",
        help="Plot stock status categories to an HTML file.",
        description=(
            "Plot stock status categories by year.\n\n"
            "  count (alias prop): stacked bars of stocks per category\n"
            "  stock (alias all):  stock-by-year raster of categories"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p_plot.add_argument(
        "--input",
        required=True,
        metavar="CSV",
        help="Stock time series CSV.",
    )
    p_plot.add_argument(
        "--output",
        required=True,
        metavar="HTML",
        help="Output HTML file.",
    )
    p_plot.add_argument(
        "--method",
        default=DEFAULT_METHOD,
        metavar="NAME",
        help=f"Ratio column suffix (default: {DEFAULT_METHOD}).",
    )
    p_plot.add_argument(
        "--cats",
        type=int,
        choices=[3, 4],
        default=4,
        help="3 (biomass only) or 4 (biomass and F) categories (default: 4).",
    )
    p_plot.add_argument(
        "--type",
        choices=["count", "prop", "stock", "all"],
        default="count",
        help="Chart type (default: count).",
    )
    p_plot.add_argument(
        "--title",
        default=None,
        help="Optional figure title.",
    )
    p_plot.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Print full tracebacks on errors.",
    )
    p_plot.set_defaults(func=handle_plot)

    return parser


# ===========================================================================
# Entry point
# ===========================================================================

def main(argv: Optional[List[str]] = None) -> None:
    """Parse CLI arguments and dispatch to the appropriate handler.

    This function is registered as the ``sofia`` console script entry point
    in ``pyproject.toml``.

    Args:
        argv: Argument list; defaults to ``sys.argv[1:]``.
    """
    parser = _build_parser()
    args   = parser.parse_args(argv)

    try:
        configure_logging(args.log_level, json_format=args.log_json)
    except ValueError as exc:
        _die(str(exc))

    args.func(args)


if __name__ == "__main__":
    main()

"""
Tests for time series file loading.
"""

import pandas as pd
import pytest

from sofia.data.reader import available_methods, read_timeseries


@pytest.fixture
def csv_path(tmp_path):
    path = tmp_path / "timeseries.csv"
    path.write_text(
        "Stock,yr,bbmsy.cmsy.naive,ffmsy.cmsy.naive,bbmsy.effEdepP,ffmsy.effEdepP\n"
        "001,2000,1.5,0.5,1.1,0.9\n"
        "002,2000,0.7,1.2,0.6,1.4\n"
    )
    return path


def test_read_timeseries(csv_path):
    df = read_timeseries(csv_path)
    assert list(df.columns)[:2] == ["Stock", "yr"]
    assert df.shape == (2, 6)
    # leading zeros survive
    assert df["Stock"].tolist() == ["001", "002"]
    assert df["yr"].tolist() == [2000, 2000]


def test_read_timeseries_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_timeseries(tmp_path / "nope.csv")


def test_read_timeseries_too_few_columns(tmp_path):
    path = tmp_path / "short.csv"
    path.write_text("stock,year\nA,2000\n")
    with pytest.raises(ValueError):
        read_timeseries(path)


def test_available_methods(csv_path):
    assert available_methods(read_timeseries(csv_path)) == ["cmsy.naive", "effEdepP"]


def test_available_methods_needs_both_ratios():
    df = pd.DataFrame(
        columns=["stock", "year", "bbmsy.a", "ffmsy.a", "bbmsy.b", "ffmsy", "catch"]
    )
    assert available_methods(df) == ["a"]


def test_available_methods_ignores_positional_columns():
    # first two columns are stock/year even if named like ratio columns
    df = pd.DataFrame(columns=["bbmsy.x", "ffmsy.x", "bbmsy.y", "ffmsy.y"])
    assert available_methods(df) == ["y"]

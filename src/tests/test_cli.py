"""
Tests for the sofia command-line interface.
"""

import pandas as pd
import pytest

from sofia.cli import main


@pytest.fixture
def csv_path(tmp_path, timeseries):
    path = tmp_path / "timeseries.csv"
    timeseries.rename(columns={"stock": "Stock", "year": "yr"}).to_csv(
        path, index=False
    )
    return path


def test_methods(csv_path, capsys):
    main(["methods", "--input", str(csv_path)])
    assert capsys.readouterr().out.split() == ["m"]


def test_classify_to_file(csv_path, tmp_path):
    out = tmp_path / "out" / "cats.csv"
    main(["classify", "--input", str(csv_path), "--method", "m", "--output", str(out)])

    result = pd.read_csv(out)
    assert list(result.columns[:2]) == ["stock", "year"]
    assert result["estCat3"].tolist() == [1, 3, 2, 2]
    assert result["estCat4"].tolist() == [1, 4, 2, 3]


def test_classify_to_stdout(csv_path, capsys):
    main(["classify", "--input", str(csv_path), "--method", "m"])
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0].endswith("estCat3,estCat4")
    assert len(lines) == 5


@pytest.mark.parametrize("chart_type", ["count", "prop", "stock", "all"])
def test_plot_writes_html(csv_path, tmp_path, chart_type):
    out = tmp_path / f"{chart_type}.html"
    main([
        "plot",
        "--input", str(csv_path),
        "--method", "m",
        "--cats", "3",
        "--type", chart_type,
        "--output", str(out),
    ])
    html = out.read_text()
    assert "plotly" in html.lower()
    assert "0.8<b<1.2" in html or "0.8\\u003cb\\u003c1.2" in html


def test_plot_missing_method_exits(csv_path, tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([
            "plot",
            "--input", str(csv_path),
            "--method", "effEdepP",
            "--output", str(tmp_path / "x.html"),
        ])
    assert excinfo.value.code == 1
    assert "effEdepP" in capsys.readouterr().err


def test_missing_input_exits(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(["methods", "--input", str(tmp_path / "missing.csv")])
    assert excinfo.value.code == 1


def test_rejects_unknown_chart_type(csv_path, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main([
            "plot",
            "--input", str(csv_path),
            "--type", "pie",
            "--output", str(tmp_path / "x.html"),
        ])
    assert excinfo.value.code == 2

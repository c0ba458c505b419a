"""Tests for numkit console formatting and gnuplot export."""
import io
import math
import os

import numpy as np
import pytest

from numkit.functions import Function, Result
from numkit.matrix import Matrix
from numkit.report import (
    result_precision, format_result, report_result, format_polynomial, format_matrix,
    sample_pairs, export_gnuplot,
)


LINE = Function("2x", lambda x, _: 2.0 * x, vectorized=True)
SQUARE = Function("x**2", lambda x, _: x * x, vectorized=True)


@pytest.mark.parametrize("error,expected", [
    (0.0, 8),
    (math.nan, 8),
    (math.inf, 8),
    (5e-8, 8),
    (0.04, 2),
    (-0.04, 2),
    (0.5, 1),
    (50.0, 0),
])
def test_result_precision(error, expected):
    assert result_precision(error) == expected


def test_format_result():
    line = format_result(Result(1.23456789, 0.04, 12, 1))
    assert line == "result: 1.23 ± 4.0E-02, iterations: 12, convergence rate: 1"


def test_format_result_without_rate():
    line = format_result(Result(2.0, 0.0, 0, None))
    assert line == "result: 2.00000000 ± 0.0E+00, iterations: 0"


def test_format_result_nan():
    line = format_result(Result(math.nan, math.nan, 0, None))
    assert line.startswith("result: nan ± NAN")


def test_report_result_stream():
    stream = io.StringIO()
    report_result(Result(1.0, 0.5, 3, 2), stream=stream)
    assert stream.getvalue() == "result: 1.0 ± 5.0E-01, iterations: 3, convergence rate: 2\n"


def test_format_polynomial():
    assert format_polynomial([1.0, -2.0, 0.5]) == \
        "5.0000E-01 x**2 - 2.0000E+00 x**1 + 1.0000E+00 x**0"
    assert format_polynomial([-3.0]) == "3.0000E+00 x**0"


def test_format_matrix():
    text = format_matrix(Matrix.from_array([[1.0, 2.0], [3.0, 4.5]]))
    assert text.splitlines() == [
        "Matrix: 2 × 2",
        "----BEGIN MATRIX----",
        "[ 1.000 2.000 ]",
        "[ 3.000 4.500 ]",
        "-----END MATRIX-----",
    ]


def test_sample_pairs_half_open():
    xs, ys = sample_pairs(LINE, 0.0, 1.0, 4)
    assert np.allclose(xs, [0.0, 0.25, 0.5, 0.75])
    assert np.allclose(ys, 2.0 * xs)


# ============================================================
# Export
# ============================================================

def test_export_gnuplot(tmp_path):
    paths = export_gnuplot("demo", [LINE, SQUARE], 0.0, 2.0, 16, directory=str(tmp_path))
    assert [os.path.basename(p) for p in paths] == \
        ["demo___d0.csv", "demo___d1.csv", "demo.gnuplot"]

    data = np.loadtxt(paths[1], delimiter=",")
    assert data.shape == (16, 2)
    assert np.allclose(data[:, 1], data[:, 0] ** 2, atol=1e-6)

    script = (tmp_path / "demo.gnuplot").read_text()
    assert script.startswith("set datafile separator \",\";plot ")
    assert "\"demo___d0.csv\" using 1:2 title '2x' with lines" in script
    assert "\"demo___d1.csv\" using 1:2 title 'x**2' with lines" in script


def test_export_gnuplot_creates_directory(tmp_path):
    target = tmp_path / "nested" / "out"
    export_gnuplot("one", [LINE], -1.0, 1.0, 8, directory=str(target))
    assert (target / "one___d0.csv").exists()


def test_export_gnuplot_verbose(tmp_path, capsys):
    export_gnuplot("v", [LINE], 0.0, 1.0, 8, directory=str(tmp_path), verbose=True)
    assert "[Export] v: 1 curves" in capsys.readouterr().out


def test_export_gnuplot_empty(tmp_path):
    with pytest.raises(ValueError, match="No functions provided"):
        export_gnuplot("empty", [], 0.0, 1.0, 8, directory=str(tmp_path))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

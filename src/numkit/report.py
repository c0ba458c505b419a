"""
numkit Report: console formatting and gnuplot export.

Console lines show a result as value ± error, with as many decimals as
the error justifies. Plots are exported as one CSV per function plus a
gnuplot script that draws them together:

    <base>___d0.csv, <base>___d1.csv, ...   x,y rows
    <base>.gnuplot                           plot script

Author: Ricardo Vieitez Parra
"""

import math
import os
import sys

import numpy as np

DEFAULT_PRECISION = 8


def result_precision(error):
    """Decimals needed to show a value with uncertainty ``error``:
    1 - ceil(log10(|error|)), never negative, 8 for zero or non-finite
    errors."""
    if error == 0.0 or not math.isfinite(error):
        return DEFAULT_PRECISION
    return max(0, 1 - math.ceil(math.log10(abs(error))))


def format_result(result):
    precision = result_precision(result.error)
    line = (f"result: {result.value:.{precision}f} ± {result.error:.1E}, "
            f"iterations: {result.iterations}")
    if result.convergence_rate is not None:
        line += f", convergence rate: {result.convergence_rate}"
    return line


def report_result(result, stream=None):
    """Print ``format_result(result)`` to ``stream`` (stdout by default)."""
    print(format_result(result), file=stream or sys.stdout)


def format_polynomial(coefficients):
    """
    Render ascending coefficients highest power first.

    Examples
    --------
    >>> format_polynomial([1.0, -2.0, 0.5])
    '5.0000E-01 x**2 - 2.0000E+00 x**1 + 1.0000E+00 x**0'
    """
    terms = []
    for j in range(len(coefficients) - 1, -1, -1):
        term = f"{abs(coefficients[j]):.4E} x**{j}"
        if j != 0:
            term += " - " if coefficients[j - 1] < 0.0 else " + "
        terms.append(term)
    return "".join(terms)


def format_matrix(matrix):
    lines = [f"Matrix: {matrix.rows} × {matrix.cols}", "----BEGIN MATRIX----"]
    for row in matrix.elements:
        lines.append("[ " + "".join(f"{v:.3f} " for v in row) + "]")
    lines.append("-----END MATRIX-----")
    return "\n".join(lines)


# ============================================================
# Plot export
# ============================================================

def sample_pairs(function, start, end, points):
    """(xs, ys) over [start, end) with spacing (end - start) / points."""
    step = (end - start) / points
    xs = start + step * np.arange(points, dtype=np.float64)
    return xs, function.evaluate(xs)


def export_gnuplot(base, functions, start, end, points, directory=".", verbose=False):
    """
    Write one CSV per function and a gnuplot script plotting them.

    Parameters
    ----------
    base : str
        File name prefix.
    functions : sequence of Function
        Curves to export, in plot order.
    start, end : float
        Plot range.
    points : int
        Samples per curve.
    directory : str
        Output directory, created if missing.
    verbose : bool
        Print the written paths.

    Returns
    -------
    list of str
        CSV paths followed by the script path.
    """
    if not functions:
        raise ValueError("No functions provided")
    os.makedirs(directory, exist_ok=True)

    paths = []
    plots = []
    for i, function in enumerate(functions):
        filename = f"{base}___d{i}.csv"
        path = os.path.join(directory, filename)
        xs, ys = sample_pairs(function, start, end, points)
        np.savetxt(path, np.column_stack((xs, ys)), fmt="%f", delimiter=",")
        paths.append(path)
        plots.append(f"\"{filename}\" using 1:2 title '{function.name}' with lines")

    script_path = os.path.join(directory, f"{base}.gnuplot")
    with open(script_path, "w", encoding="utf-8") as fp:
        fp.write("set datafile separator \",\";")
        fp.write("plot " + ", ".join(plots) + "\n")
    paths.append(script_path)

    if verbose:
        print(f"  [Export] {base}: {len(functions)} curves x {points:,} points -> {directory}")
        sys.stdout.flush()
    return paths

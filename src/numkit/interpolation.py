"""
numkit Interpolation: approximate a function from its samples.

Methods:
  - lagrange_interpolation: polynomial through order + 1 equispaced knots
  - piecewise_linear_interpolation: straight lines between knots
  - raised_cosine_interpolation: 1 + cos(pi t) blend between knots
  - least_squares_interpolation: degree-order polynomial fitted to a dense
    grid through the normal equations (XᵗX)⁻¹Xᵗy on the matrix engine

Each Interpolation keeps its coefficients in a method-specific form:
ascending polynomial coefficients for Lagrange and least squares, scaled
sample amplitudes for the piecewise kinds. Only the matching value
function interprets them.

Usage:
    from numkit.interpolation import lagrange_interpolation
    p = lagrange_interpolation(h, -5.0, 5.0, 10)
    p.value(0.3), p.error()

Author: Ricardo Vieitez Parra
"""

import math
import sys
from dataclasses import dataclass
from typing import Optional

import numpy as np

from numkit.functions import Function
from numkit.matrix import (
    Matrix, create_matrix, transpose_matrix, matrix_multiply, matrix_inverse,
)
from numkit.sampling import sample_values, function_error

LEAST_SQUARES_POINTS = 524288
POLYNOMIAL_ERROR_POINT_MULTIPLIER = 524288

# Overshoot past ``end`` below this fraction of the domain is grid noise.
_END_SLACK = 1e-9


@dataclass
class Interpolation:
    """Interpolant of ``function`` on [start, end].

    Fields
    ------
    function : Function
        Source function (shared, not owned).
    name : str or None
        Label for reports and plots.
    kind : str
        "lagrange", "piecewise_linear", "raised_cosine" or "least_squares".
    start, end : float
        Domain.
    order : int
        Polynomial degree, or number of sample intervals for the
        piecewise kinds.
    coefficients : numpy.ndarray
        order + 1 method-specific coefficients.
    sampling_interval : float or None
        Knot spacing, piecewise kinds only.
    """
    function: Function
    name: Optional[str]
    kind: str
    start: float
    end: float
    order: int
    coefficients: np.ndarray
    sampling_interval: Optional[float] = None

    def value(self, x):
        return _VALUE_FUNCTIONS[self.kind](x, self)

    def error(self, multiplier=None):
        return _ERROR_FUNCTIONS[self.kind](self, multiplier=multiplier)

    def as_function(self):
        """Wrap the interpolant as a vectorized Function."""
        return Function(self.name, _VALUE_FUNCTIONS[self.kind], self, vectorized=True)

    def release(self):
        """Drop the coefficient buffer."""
        self.coefficients = None


def _describe(method, function, order):
    if function.name is None:
        return None
    return f"{method} Interpolation of {function.name} (order {order})"


def _sample_knots(function, x0, x1, order, caller, verbose):
    if not x0 < x1 or order < 1:
        if verbose:
            print(f"  [{caller}] Invalid domain [{x0}, {x1}] or order {order}")
            sys.stdout.flush()
        return None
    sampled = sample_values(function, x0, x1, (x1 - x0) / order, verbose=verbose)
    if sampled is None and verbose:
        print(f"  [{caller}] Unable to take samples.")
        sys.stdout.flush()
    return sampled


# ============================================================
# Constructors
# ============================================================

def lagrange_interpolation(function, x0, x1, order, verbose=False):
    """
    Polynomial of degree ``order`` through order + 1 equispaced samples.

    Each Lagrange basis polynomial y_i * prod_{j != i} (x - x_j) is
    expanded by multiplying in one linear factor at a time, then divided
    by prod_{j != i} (x_i - x_j) = h**order * prod_{j != i} (i - j) and
    accumulated. Coefficients are stored in ascending powers.

    Ill-conditioned for large orders: the coefficients grow quickly and
    cancel when evaluated.

    Returns
    -------
    Interpolation or None
        None if x0 >= x1, order < 1 or sampling fails.
    """
    sampled = _sample_knots(function, x0, x1, order, "Lagrange", verbose)
    if sampled is None:
        return None

    order = sampled.n_samples - 1
    h = sampled.sampling_interval
    samples = sampled.samples
    coefficients = np.zeros(order + 1, dtype=np.float64)
    temp = np.empty(order + 1, dtype=np.float64)

    for i in range(order + 1):
        denominator = h ** order
        temp[:] = 0.0
        temp[0] = samples[i]
        for j in range(order + 1):
            if i == j:
                continue
            denominator *= float(i - j)
            degree = j - (1 if j > i else 0)
            xj = -(x0 + h * j)
            # temp <- temp * (x + xj), temp currently of degree ``degree``
            temp[degree + 1] = temp[degree]
            temp[1:degree + 1] = temp[1:degree + 1] * xj + temp[0:degree]
            temp[0] *= xj
        coefficients += temp / denominator

    sampled.release()
    return Interpolation(
        function=function,
        name=_describe("Lagrange", function, order),
        kind="lagrange",
        start=x0,
        end=x1,
        order=order,
        coefficients=coefficients,
    )


def piecewise_linear_interpolation(function, x0, x1, order, verbose=False):
    """
    Piecewise-linear interpolant on order + 1 equispaced knots.

    Coefficients are the samples divided by the knot spacing.

    Returns
    -------
    Interpolation or None
        None if x0 >= x1, order < 1 or sampling fails.
    """
    sampled = _sample_knots(function, x0, x1, order, "PiecewiseLinear", verbose)
    if sampled is None:
        return None

    interpolation = Interpolation(
        function=function,
        name=_describe("Piecewise Linear", function, sampled.n_samples - 1),
        kind="piecewise_linear",
        start=x0,
        end=x1,
        order=sampled.n_samples - 1,
        coefficients=sampled.samples / sampled.sampling_interval,
        sampling_interval=sampled.sampling_interval,
    )
    sampled.release()
    return interpolation


def raised_cosine_interpolation(function, x0, x1, order, verbose=False):
    """
    Raised-cosine interpolant on order + 1 equispaced knots.

    Coefficients are half the samples: the two window weights
    1 + cos(pi t) and 1 - cos(pi t) add up to 2.

    Returns
    -------
    Interpolation or None
        None if x0 >= x1, order < 1 or sampling fails.
    """
    sampled = _sample_knots(function, x0, x1, order, "RaisedCosine", verbose)
    if sampled is None:
        return None

    interpolation = Interpolation(
        function=function,
        name=_describe("Raised Cosine", function, sampled.n_samples - 1),
        kind="raised_cosine",
        start=x0,
        end=x1,
        order=sampled.n_samples - 1,
        coefficients=sampled.samples / 2.0,
        sampling_interval=sampled.sampling_interval,
    )
    sampled.release()
    return interpolation


def least_squares_interpolation(function, x0, x1, order, points=None, verbose=False):
    """
    Least-squares polynomial of degree ``order``.

    Samples ``function`` at points + 1 equispaced abscissae and solves
    the normal equations with the matrix engine:

        Xᵗ  (order+1 x n)   rows 1, x, x**2, ..., x**order
        X = transpose(Xᵗ)
        c = (XᵗX)⁻¹ Xᵗ y

    Parameters
    ----------
    function : Function
        Function to fit.
    x0, x1 : float
        Domain, x0 < x1.
    order : int
        Degree of the fitted polynomial.
    points : int, optional
        Number of sampling intervals. Default LEAST_SQUARES_POINTS.
    verbose : bool
        Print progress and the failing stage.

    Returns
    -------
    Interpolation or None
        None if the domain or order is invalid, sampling fails, or any
        matrix operation fails (e.g. a singular normal matrix). All
        intermediate matrices are released either way.
    """
    if points is None:
        points = LEAST_SQUARES_POINTS
    if not x0 < x1 or order < 0 or points < 1:
        if verbose:
            print(f"  [LeastSquares] Invalid domain [{x0}, {x1}], order {order} or points {points}")
            sys.stdout.flush()
        return None

    sampled = sample_values(function, x0, x1, (x1 - x0) / points, verbose=verbose)
    if sampled is None:
        if verbose:
            print("  [LeastSquares] Unable to take samples.")
            sys.stdout.flush()
        return None

    stages = []

    def stage(label, matrix):
        if matrix is None:
            if verbose:
                print(f"  [LeastSquares] {label} failed for order {order}")
                sys.stdout.flush()
            return None
        stages.append(matrix)
        return matrix

    try:
        n = sampled.n_samples
        sample_vector = stage("Sample vector", Matrix(n, 1, sampled.samples))
        design_transpose = stage("Design matrix", create_matrix(order + 1, n))
        if design_transpose is None:
            return None
        xs = sampled.xs()
        design_transpose.set_row(0, 1.0)
        for power in range(1, order + 1):
            design_transpose.set_row_vector_power(power, xs, float(power))
        del xs

        design = stage("Transpose", transpose_matrix(design_transpose))
        if design is None:
            return None
        normal = stage("Normal matrix", matrix_multiply(design_transpose, design, verbose=verbose))
        if normal is None:
            return None
        normal_inverse = stage("Inverse", matrix_inverse(normal, verbose=verbose))
        if normal_inverse is None:
            return None
        projector = stage("Projection", matrix_multiply(normal_inverse, design_transpose, verbose=verbose))
        if projector is None:
            return None
        solution = stage("Solution", matrix_multiply(projector, sample_vector, verbose=verbose))
        if solution is None or solution.cols != 1:
            return None

        coefficients = solution.elements[:, 0].copy()
        if verbose:
            print(f"  [LeastSquares] order {order} fitted on {n:,} samples")
            sys.stdout.flush()
        return Interpolation(
            function=function,
            name=_describe("Least Squares", function, order),
            kind="least_squares",
            start=x0,
            end=x1,
            order=order,
            coefficients=coefficients,
        )
    finally:
        for matrix in reversed(stages):
            matrix.release()
        sampled.release()


# ============================================================
# Evaluation
# ============================================================

def polynomial_value(x, interpolation):
    """Evaluate sum_i c_i x**i (scalar or array x)."""
    return np.polynomial.polynomial.polyval(x, interpolation.coefficients)


def _bracket(x, interpolation):
    """Knot position of x, its bracketing indices and an out-of-range mask."""
    x = np.asarray(x, dtype=np.float64)
    start = interpolation.start
    end = interpolation.end
    slack = _END_SLACK * (end - start)
    outside = (x < start) | (x > end + slack) | np.isnan(x)
    x_sample = np.where(outside, start, np.minimum(x, end)) - start
    position = x_sample / interpolation.sampling_interval
    last = interpolation.order
    i0 = np.minimum(np.floor(position), last).astype(np.int64)
    i1 = np.minimum(np.ceil(position), last).astype(np.int64)
    return x, x_sample, position, i0, i1, outside


def piecewise_linear_value(x, interpolation):
    """
    Linear blend of the two knots bracketing x.

    Returns NaN outside [start, end].
    """
    x, x_sample, _, i0, i1, outside = _bracket(x, interpolation)
    h = interpolation.sampling_interval
    c = interpolation.coefficients
    a = h * (i0 + 1.0) - x_sample
    b = h * i0 - x_sample
    y = c[i0] * a - c[i1] * b
    y = np.where(outside, np.nan, y)
    return float(y) if y.ndim == 0 else y


def raised_cosine_value(x, interpolation):
    """
    Raised-cosine blend of the two knots bracketing x.

    Returns NaN outside [start, end].
    """
    x, _, position, i0, i1, outside = _bracket(x, interpolation)
    c = interpolation.coefficients
    a = position - i0
    b = position - (i0 + 1.0)
    y = c[i0] * (1.0 + np.cos(math.pi * a)) + c[i1] * (1.0 + np.cos(math.pi * b))
    y = np.where(outside, np.nan, y)
    return float(y) if y.ndim == 0 else y


# ============================================================
# Error
# ============================================================

def _interpolation_error(interpolation, multiplier):
    if multiplier is None:
        multiplier = POLYNOMIAL_ERROR_POINT_MULTIPLIER
    points = interpolation.order * multiplier + 1
    return function_error(interpolation.function, interpolation.as_function(),
                          interpolation.start, interpolation.end, points)


def polynomial_error(interpolation, multiplier=None):
    """Relative error of a polynomial interpolant against its source
    over order * multiplier + 1 points."""
    return _interpolation_error(interpolation, multiplier)


def piecewise_linear_error(interpolation, multiplier=None):
    return _interpolation_error(interpolation, multiplier)


def raised_cosine_error(interpolation, multiplier=None):
    return _interpolation_error(interpolation, multiplier)


_VALUE_FUNCTIONS = {
    "lagrange": polynomial_value,
    "least_squares": polynomial_value,
    "piecewise_linear": piecewise_linear_value,
    "raised_cosine": raised_cosine_value,
}

_ERROR_FUNCTIONS = {
    "lagrange": polynomial_error,
    "least_squares": polynomial_error,
    "piecewise_linear": piecewise_linear_error,
    "raised_cosine": raised_cosine_error,
}

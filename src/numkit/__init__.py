"""
numkit - Numerical Analysis Toolkit
===================================

Root finding, interpolation and a minimal dense matrix engine.

Quick start:
    import numkit
    from numkit.study import F, F_DERIVATIVE, H

    # Bracket, then polish
    r = numkit.bisection_method(F, 0.5, 1.5, 1e-7)
    r = numkit.newtons_method(F, F_DERIVATIVE, r.value, 50, 1e-12)

    # Interpolate Runge's function
    p = numkit.lagrange_interpolation(H, -5.0, 5.0, 10)
    p.value(0.3), p.error()

    # Dense matrices
    from numkit.matrix import Matrix
    inv = numkit.matrix_inverse(Matrix.from_array([[2.0, 1.0], [1.0, 3.0]]))

Author: Ricardo Vieitez Parra
License: MIT
"""

__version__ = "0.2.0"
__author__ = "Ricardo Vieitez Parra"

from numkit.functions import Function, Result
from numkit.matrix import (
    Matrix, create_matrix, transpose_matrix, matrix_multiply, matrix_inverse,
)
from numkit.sampling import (
    SampledFunction, sample_values, sample_derivative, function_error,
)
from numkit.roots import (
    bisection_method, newtons_method, altered_newtons_method,
    adjusting_newtons_method, square_root,
)
from numkit.interpolation import (
    Interpolation, lagrange_interpolation, piecewise_linear_interpolation,
    raised_cosine_interpolation, least_squares_interpolation,
)
from numkit import matrix

__all__ = [
    "Function", "Result",
    "Matrix", "create_matrix", "transpose_matrix", "matrix_multiply", "matrix_inverse",
    "SampledFunction", "sample_values", "sample_derivative", "function_error",
    "bisection_method", "newtons_method", "altered_newtons_method",
    "adjusting_newtons_method", "square_root",
    "Interpolation", "lagrange_interpolation", "piecewise_linear_interpolation",
    "raised_cosine_interpolation", "least_squares_interpolation",
    "matrix",
]

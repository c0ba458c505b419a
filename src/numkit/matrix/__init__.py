"""
numkit Matrix: minimal dense matrix engine.

Supports allocation, row assignment, transpose, multiplication and
Gauss-Jordan inversion. Hot loops are numba kernels (see ``fast``).

Example:
    from numkit.matrix import Matrix, matrix_multiply, matrix_inverse

    a = Matrix.from_array([[2.0, 1.0], [1.0, 3.0]])
    identity = matrix_multiply(matrix_inverse(a), a)

Author: Ricardo Vieitez Parra
"""

from numkit.matrix import fast
from numkit.matrix.dense import (
    Matrix,
    create_matrix,
    transpose_matrix,
    matrix_multiply,
    matrix_inverse,
)

__all__ = [
    "Matrix", "create_matrix", "transpose_matrix", "matrix_multiply",
    "matrix_inverse", "fast",
]

"""
Matrix Fast: Numba JIT-compiled kernels for the dense matrix engine.

The least-squares fit multiplies design matrices with half a million
columns, so the triple loops and the row operations of Gauss-Jordan
elimination are compiled with numba instead of running as Python loops.

Kernels work on C-contiguous float64 arrays with 0-based indices and
report failure through an integer status (0 = ok, 1 = failed) instead of
raising.

Author: Ricardo Vieitez Parra
"""

import numpy as np
from numba import njit


# ============================================================
# Products
# ============================================================

@njit(cache=True)
def transpose_kernel(a):
    """Return the transpose of a 2D array as a new contiguous array."""
    rows, cols = a.shape
    out = np.empty((cols, rows), dtype=np.float64)
    for i in range(rows):
        for j in range(cols):
            out[j, i] = a[i, j]
    return out


@njit(cache=True)
def multiply_kernel(a, b):
    """Triple-loop product of a (m x n) and b (n x p).

    The k loop sits outside j so both operands are read row-wise; each
    out[i, j] still accumulates its terms in increasing k.
    """
    m, n = a.shape
    p = b.shape[1]
    out = np.zeros((m, p), dtype=np.float64)
    for i in range(m):
        for k in range(n):
            aik = a[i, k]
            for j in range(p):
                out[i, j] += aik * b[k, j]
    return out


# ============================================================
# Gauss-Jordan row operations
# ============================================================

@njit(cache=True)
def scale_row(matrix, secondary, row, col, scale_to):
    """Scale ``row`` of both matrices so that matrix[row, col] == scale_to.

    A zero pivot is repaired by accumulating the first row below it with a
    nonzero entry in ``col``. Rows above the pivot are never added: they
    carry entries in already-reduced columns.

    Returns
    -------
    int
        0 on success, 1 if the pivot stays zero or the scale is not finite.
    """
    rows, cols = matrix.shape
    element = matrix[row, col]
    if element == 0.0:
        for i in range(row + 1, rows):
            if matrix[i, col] != 0.0:
                for j in range(cols):
                    matrix[row, j] += matrix[i, j]
                    secondary[row, j] += secondary[i, j]
                break
        element = matrix[row, col]
        if element == 0.0:
            return 1
    scale = scale_to / element
    if not np.isfinite(scale):
        return 1
    if scale != 1.0:
        for j in range(cols):
            matrix[row, j] *= scale
            secondary[row, j] *= scale
    return 0


@njit(cache=True)
def reduce_row(matrix, secondary, row_dst, row_src, col):
    """Subtract ``row_src`` from ``row_dst`` to clear matrix[row_dst, col].

    ``row_src`` must already hold a unit pivot in ``col``.

    Returns
    -------
    int
        0 on success, 1 on a zero source pivot or bad row pair.
    """
    if row_src == row_dst:
        return 1
    if matrix[row_src, col] == 0.0:
        return 1
    scale = matrix[row_dst, col]
    if scale != 0.0:
        cols = matrix.shape[1]
        for j in range(cols):
            matrix[row_dst, j] -= scale * matrix[row_src, j]
            secondary[row_dst, j] -= scale * secondary[row_src, j]
    return 0


@njit(cache=True)
def gauss_jordan(matrix, secondary):
    """Reduce ``matrix`` to the identity, mirroring every row operation
    on ``secondary``. Both arrays are modified in place.

    Returns
    -------
    int
        0 when ``secondary`` now holds the inverse, 1 on failure.
    """
    n = matrix.shape[0]
    status = 0
    # Forward pass: unit pivots, zeros below.
    for i in range(n):
        status = scale_row(matrix, secondary, i, i, 1.0)
        if status != 0:
            return status
        for j in range(i + 1, n):
            status = reduce_row(matrix, secondary, j, i, i)
            if status != 0:
                return status
    # Backward pass: zeros above.
    for i in range(n - 1, 0, -1):
        for j in range(i - 1, -1, -1):
            status = reduce_row(matrix, secondary, j, i, i)
            if status != 0:
                return status
    return status


def warmup():
    """Trigger JIT compilation with a small dummy call.

    Call this once before timing-sensitive work to avoid compilation
    overhead during the first real computation.
    """
    dummy = np.eye(2, dtype=np.float64)
    transpose_kernel(dummy)
    multiply_kernel(dummy, dummy)
    gauss_jordan(dummy.copy(), dummy.copy())

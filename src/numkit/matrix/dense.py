"""
Matrix Dense: row-major dense matrices with Gauss-Jordan inversion.

Every operation that can fail (zero dimension, dimension mismatch,
non-square or singular input) returns None instead of a partially valid
matrix.

Usage:
    from numkit.matrix import create_matrix, matrix_inverse
    m = create_matrix(2, 2)
    m.set_row_vector(0, [4.0, 7.0])
    m.set_row_vector(1, [2.0, 6.0])
    inv = matrix_inverse(m)

Author: Ricardo Vieitez Parra
"""

import sys

import numpy as np

from numkit.matrix import fast as _fast


class Matrix:
    """
    Dense matrix of float64 stored row-major.

    Parameters
    ----------
    rows, cols : int
        Dimensions, both > 0. Use ``create_matrix`` for the checked
        constructor.
    elements : array-like, optional
        Initial contents of shape (rows, cols). Zero-filled if omitted.

    Examples
    --------
    >>> m = Matrix(2, 3)
    >>> m.set_row(0, 1.0)
    >>> m.set_row_vector_power(1, [1.0, 2.0, 3.0], 2)
    >>> m.elements
    array([[1., 1., 1.],
           [1., 4., 9.]])
    """

    def __init__(self, rows, cols, elements=None):
        self.rows = rows
        self.cols = cols
        if elements is None:
            self.elements = np.zeros((rows, cols), dtype=np.float64)
        else:
            self.elements = np.ascontiguousarray(elements, dtype=np.float64).reshape(rows, cols)

    @classmethod
    def from_array(cls, array):
        """Build a matrix from a 2D array-like (copied)."""
        arr = np.array(array, dtype=np.float64, ndmin=2)
        if arr.ndim != 2:
            raise ValueError(f"Expected a 2D array, got {arr.ndim} dimensions")
        return cls(arr.shape[0], arr.shape[1], arr)

    @property
    def shape(self):
        return (self.rows, self.cols)

    def _check_row(self, row):
        if not 0 <= row < self.rows:
            raise IndexError(f"Row {row} out of range for {self.rows} x {self.cols} matrix")

    def _check_vector(self, vector):
        vector = np.asarray(vector, dtype=np.float64)
        if vector.shape != (self.cols,):
            raise ValueError(f"Row vector of length {self.cols} expected, got shape {vector.shape}")
        return vector

    def set_row(self, row, value):
        """Broadcast a scalar across ``row``."""
        self._check_row(row)
        self.elements[row, :] = value

    def set_row_vector(self, row, vector):
        """Copy ``vector`` (length cols) into ``row``."""
        self._check_row(row)
        self.elements[row, :] = self._check_vector(vector)

    def set_row_vector_power(self, row, vector, power):
        """Copy ``vector`` raised elementwise to ``power`` into ``row``."""
        self._check_row(row)
        self.elements[row, :] = np.power(self._check_vector(vector), power)

    def release(self):
        """Drop the element buffer. The matrix is unusable afterwards."""
        self.elements = None

    def __repr__(self):
        return f"Matrix({self.rows} x {self.cols})"


# ============================================================
# Operations
# ============================================================

def create_matrix(rows, cols):
    """
    Allocate a zero-filled rows x cols matrix.

    Returns
    -------
    Matrix or None
        None if either dimension is not positive.
    """
    if rows <= 0 or cols <= 0:
        return None
    return Matrix(rows, cols)


def transpose_matrix(matrix):
    """Return the transpose as a new matrix."""
    return Matrix(matrix.cols, matrix.rows, _fast.transpose_kernel(matrix.elements))


def matrix_multiply(a, b, verbose=False):
    """
    Compute the product a @ b.

    Parameters
    ----------
    a, b : Matrix
        Operands; ``a.cols`` must equal ``b.rows``.
    verbose : bool
        Print the dimensions on mismatch.

    Returns
    -------
    Matrix or None
        The (a.rows x b.cols) product, or None on dimension mismatch.
    """
    if a.cols != b.rows:
        if verbose:
            print(f"  [Matrix] Dimensions mismatch: A: {a.rows} x {a.cols}, "
                  f"B: {b.rows} x {b.cols}")
            sys.stdout.flush()
        return None
    return Matrix(a.rows, b.cols, _fast.multiply_kernel(a.elements, b.elements))


def matrix_inverse(matrix, verbose=False):
    """
    Invert a square matrix by Gauss-Jordan elimination.

    The elimination runs on a working copy of ``matrix`` and on an
    identity matrix in parallel; when the copy has been reduced to the
    identity, the second matrix holds the inverse. A zero pivot is
    repaired by adding a lower row with a nonzero entry in the pivot
    column (no row swaps).

    Parameters
    ----------
    matrix : Matrix
        Square matrix to invert. Left untouched.
    verbose : bool
        Print the reason for a failure.

    Returns
    -------
    Matrix or None
        The inverse, or None if the matrix is not square, a pivot cannot
        be repaired, or a pivot scale factor is not finite.
    """
    if matrix.rows != matrix.cols:
        if verbose:
            print(f"  [Matrix] Cannot invert non-square {matrix.rows} x {matrix.cols} matrix")
            sys.stdout.flush()
        return None

    temp = np.array(matrix.elements, dtype=np.float64, copy=True, order="C")
    inverse = np.eye(matrix.rows, dtype=np.float64)

    status = _fast.gauss_jordan(temp, inverse)
    del temp

    if status != 0:
        if verbose:
            print(f"  [Matrix] Gauss-Jordan elimination failed on "
                  f"{matrix.rows} x {matrix.cols} matrix (singular or overflowing pivot)")
            sys.stdout.flush()
        return None
    return Matrix(matrix.rows, matrix.cols, inverse)

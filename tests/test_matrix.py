"""Tests for the numkit dense matrix engine."""
import numpy as np
import pytest

from numkit.matrix import (
    Matrix, create_matrix, transpose_matrix, matrix_multiply, matrix_inverse, fast,
)


# ============================================================
# Allocation and row assignment
# ============================================================

def test_create_matrix():
    m = create_matrix(3, 4)
    assert m.shape == (3, 4)
    assert m.elements.shape == (3, 4)
    assert np.all(m.elements == 0.0)


def test_create_matrix_zero_dimension():
    assert create_matrix(0, 4) is None
    assert create_matrix(3, 0) is None


def test_set_row():
    m = create_matrix(2, 3)
    m.set_row(1, 7.5)
    assert np.array_equal(m.elements, [[0, 0, 0], [7.5, 7.5, 7.5]])


def test_set_row_vector_and_power():
    m = create_matrix(2, 3)
    m.set_row_vector(0, [1.0, 2.0, 3.0])
    m.set_row_vector_power(1, [1.0, 2.0, 3.0], 3)
    assert np.array_equal(m.elements, [[1, 2, 3], [1, 8, 27]])


def test_set_row_out_of_range():
    m = create_matrix(2, 2)
    with pytest.raises(IndexError):
        m.set_row(2, 1.0)
    with pytest.raises(IndexError):
        m.set_row_vector(-1, [1.0, 2.0])


def test_set_row_vector_wrong_length():
    m = create_matrix(2, 2)
    with pytest.raises(ValueError):
        m.set_row_vector(0, [1.0, 2.0, 3.0])


def test_release():
    m = create_matrix(2, 2)
    m.release()
    assert m.elements is None


# ============================================================
# Transpose and multiply
# ============================================================

def test_transpose():
    m = Matrix.from_array([[1, 2, 3], [4, 5, 6]])
    t = transpose_matrix(m)
    assert t.shape == (3, 2)
    assert np.array_equal(t.elements, [[1, 4], [2, 5], [3, 6]])


def test_transpose_twice_is_identity():
    np.random.seed(7)
    original = Matrix.from_array(np.random.randn(5, 9))
    back = transpose_matrix(transpose_matrix(original))
    assert back.shape == original.shape
    assert np.array_equal(back.elements, original.elements)


def test_multiply_matches_numpy():
    np.random.seed(1)
    a = np.random.randn(4, 6)
    b = np.random.randn(6, 3)
    product = matrix_multiply(Matrix.from_array(a), Matrix.from_array(b))
    assert product.shape == (4, 3)
    assert np.allclose(product.elements, a @ b)


@pytest.mark.parametrize("a_shape,b_shape", [
    ((2, 3), (3, 2)),
    ((2, 3), (2, 3)),
    ((1, 5), (5, 1)),
    ((4, 4), (3, 4)),
])
def test_multiply_fails_iff_dimensions_mismatch(a_shape, b_shape):
    a = create_matrix(*a_shape)
    b = create_matrix(*b_shape)
    product = matrix_multiply(a, b)
    if a_shape[1] == b_shape[0]:
        assert product is not None
        assert product.shape == (a_shape[0], b_shape[1])
    else:
        assert product is None


def test_multiply_mismatch_verbose(capsys):
    assert matrix_multiply(create_matrix(2, 3), create_matrix(2, 3), verbose=True) is None
    assert "Dimensions mismatch" in capsys.readouterr().out


def test_multiply_kernel():
    a = np.arange(6, dtype=np.float64).reshape(2, 3)
    b = np.arange(12, dtype=np.float64).reshape(3, 4)
    assert np.array_equal(fast.multiply_kernel(a, b), a @ b)


# ============================================================
# Inverse
# ============================================================

def test_inverse_2x2():
    inv = matrix_inverse(Matrix.from_array([[4.0, 7.0], [2.0, 6.0]]))
    assert np.allclose(inv.elements, [[0.6, -0.7], [-0.2, 0.4]])


@pytest.mark.parametrize("n", [1, 2, 5, 12])
def test_inverse_times_matrix_is_identity(n):
    """Diagonally dominant matrices are well conditioned."""
    np.random.seed(n)
    a = np.random.randn(n, n) + n * np.eye(n)
    m = Matrix.from_array(a)
    inv = matrix_inverse(m)
    product = matrix_multiply(inv, m)
    assert np.allclose(product.elements, np.eye(n), atol=1e-10)


def test_inverse_leaves_input_untouched():
    a = np.array([[2.0, 1.0], [1.0, 3.0]])
    m = Matrix.from_array(a)
    matrix_inverse(m)
    assert np.array_equal(m.elements, a)


def test_inverse_non_square():
    assert matrix_inverse(create_matrix(2, 3)) is None


def test_inverse_singular():
    assert matrix_inverse(Matrix.from_array([[1.0, 2.0], [2.0, 4.0]])) is None
    assert matrix_inverse(create_matrix(3, 3)) is None


def test_inverse_singular_verbose(capsys):
    matrix_inverse(Matrix.from_array([[1.0, 2.0], [2.0, 4.0]]), verbose=True)
    assert "Gauss-Jordan elimination failed" in capsys.readouterr().out


def test_inverse_zero_pivot_repair():
    """A zero leading pivot is repaired by adding a lower row."""
    inv = matrix_inverse(Matrix.from_array([[0.0, 1.0], [1.0, 0.0]]))
    assert np.array_equal(inv.elements, [[0.0, 1.0], [1.0, 0.0]])


def test_inverse_zero_pivot_repair_3x3():
    a = np.array([[0.0, 2.0, 1.0], [1.0, 1.0, 0.0], [2.0, 0.0, 1.0]])
    inv = matrix_inverse(Matrix.from_array(a))
    assert np.allclose(inv.elements, np.linalg.inv(a))


def test_inverse_non_finite_scale():
    """A subnormal pivot needs a scale factor that overflows."""
    assert matrix_inverse(Matrix.from_array([[1e-320, 0.0], [0.0, 1.0]])) is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

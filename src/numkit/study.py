"""
numkit Study: the fixed functions examined by the driver.

    f(x) = e^(-x/5) - sin x         roots in [0.5,1.5], [2,3], [6,7], [9,10]
    g(x) = (x-3)^4 sin x            root of multiplicity 4 at x = 3
    (x-4)^2 sin x, (x-4)^3 sin x    roots of multiplicity 2 and 3 at x = 4
    h(x) = 1 / (1 + x^2)            Runge's function, for interpolation

Derivatives are written by hand. All functions accept numpy arrays.

Author: Ricardo Vieitez Parra
"""

import numpy as np

from numkit.functions import Function


def _f(x, _):
    return np.exp(-x / 5.0) - np.sin(x)


def _f_derivative(x, _):
    return -np.exp(-x / 5.0) / 5.0 - np.cos(x)


def _f_second_derivative(x, _):
    return np.exp(-x / 5.0) / 25.0 + np.sin(x)


def _g(x, _):
    return (x - 3.0) ** 4 * np.sin(x)


def _g_derivative(x, _):
    return (x - 3.0) ** 3 * (4.0 * np.sin(x) + (x - 3.0) * np.cos(x))


def _g_second_derivative(x, _):
    u = x - 3.0
    return u ** 2 * (12.0 * np.sin(x) + 8.0 * u * np.cos(x) - u ** 2 * np.sin(x))


def _bonus(x, power):
    return (x - 4.0) ** power * np.sin(x)


def _bonus_derivative(x, power):
    return (x - 4.0) ** (power - 1) * (power * np.sin(x) + (x - 4.0) * np.cos(x))


def _h(x, _):
    return 1.0 / (x ** 2 + 1.0)


F = Function("e**(-x/5)-sin(x)", _f, vectorized=True)
F_DERIVATIVE = Function("(e**(-x/5)-sin(x))'", _f_derivative, vectorized=True)
F_SECOND_DERIVATIVE = Function("(e**(-x/5)-sin(x))''", _f_second_derivative, vectorized=True)

G = Function("(x-3)**4*sin(x)", _g, vectorized=True)
G_DERIVATIVE = Function("((x-3)**4*sin(x))'", _g_derivative, vectorized=True)
G_SECOND_DERIVATIVE = Function("((x-3)**4*sin(x))''", _g_second_derivative, vectorized=True)

BONUS_FUNCTIONS = (
    Function("(x-4)**2*sin(x)", _bonus, 2, vectorized=True),
    Function("(x-4)**3*sin(x)", _bonus, 3, vectorized=True),
)
BONUS_DERIVATIVES = (
    Function("((x-4)**2*sin(x))'", _bonus_derivative, 2, vectorized=True),
    Function("((x-4)**3*sin(x))'", _bonus_derivative, 3, vectorized=True),
)

H = Function("1/(1+x**2)", _h, vectorized=True)

"""
numkit Functions: scalar function abstraction and method results.

A Function pairs a callable ``f(x, context)`` with an immutable captured
context, so parametrised functions (e.g. ``x**2 - k`` for a fixed ``k``)
need no globals. A Result is what every root finder returns.

Usage:
    from numkit.functions import Function
    square = Function("x**2-k", lambda x, k: x * x - k, context=2.0)
    square(1.5)   # 0.25

Author: Ricardo Vieitez Parra
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

import numpy as np


@dataclass(frozen=True)
class Function:
    """Real-valued function of one real variable.

    Fields
    ------
    name : str or None
        Label used in reports and plot titles.
    f : callable
        ``f(x, context) -> float``.
    context : any
        Captured parameter handed to ``f`` on every call. May be None.
    vectorized : bool
        True if ``f`` accepts a numpy array for ``x`` and returns an array
        of the same shape. Grid evaluation then takes a single call.
    """
    name: Optional[str]
    f: Callable[[Any, Any], Any]
    context: Any = None
    vectorized: bool = False

    def __call__(self, x):
        return self.f(x, self.context)

    def evaluate(self, xs):
        """Evaluate on a 1D grid, returning a float64 array."""
        xs = np.asarray(xs, dtype=np.float64)
        if self.vectorized:
            return np.asarray(self.f(xs, self.context), dtype=np.float64)
        return np.fromiter((self.f(x, self.context) for x in xs),
                           dtype=np.float64, count=len(xs))


@dataclass(frozen=True)
class Result:
    """Outcome of a root-finding method.

    Fields
    ------
    value : float
        Approximated root, NaN when the method could not run.
    error : float
        Half-width of the uncertainty bound (value ± error).
    iterations : int
        Iterations performed.
    convergence_rate : int or None
        Empirical order of convergence, None when undefined.
    """
    value: float
    error: float
    iterations: int
    convergence_rate: Optional[int] = None

    @property
    def failed(self):
        return bool(np.isnan(self.value))

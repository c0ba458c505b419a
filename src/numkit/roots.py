"""
numkit Roots: bracketing and Newton-type root finders.

Methods:
  - bisection_method: guaranteed linear convergence on a sign change
  - newtons_method: x <- x - f/f'
  - altered_newtons_method: x <- x - f f' / (f'^2 - f f''), quadratic
    near roots of any multiplicity
  - adjusting_newtons_method: x <- x - m f/f' with m raised while the
    measured order stays below 2
  - square_root: bisection-seeded Newton on x^2 - k

Newton-type methods stop when the relative step |dx / x| falls below the
tolerance and estimate the order of convergence from the last three
relative steps. Numerical failures show up as NaN values or an undefined
(None) convergence rate, never as exceptions.

Author: Ricardo Vieitez Parra
"""

import math
import sys
from collections import deque
from dataclasses import replace

import numpy as np

from numkit.functions import Function, Result

SQUARE_ROOT_TOLERANCE = 1e-7
SQUARE_ROOT_MAX_ITERATIONS = 256


# ============================================================
# Convergence-rate estimation
# ============================================================

class ConvergenceTracker:
    """Ring of the last three relative errors e0, e1, e2 (oldest first).

    The order of convergence p satisfies e2 / e1 ~ (e1 / e0)**p, so
    p ~ log(e2 / e1) / log(e1 / e0).
    """

    def __init__(self):
        self.errors = deque([0.0, 0.0, 0.0], maxlen=3)

    def push(self, error):
        self.errors.append(error)

    def rate(self):
        """Rounded order estimate, or None if a logarithm is undefined."""
        e0, e1, e2 = self.errors
        with np.errstate(divide="ignore", invalid="ignore"):
            ratio_new = np.float64(e2) / np.float64(e1)
            ratio_old = np.float64(e1) / np.float64(e0)
        if not (np.isfinite(ratio_new) and np.isfinite(ratio_old)):
            return None
        if ratio_new <= 0.0 or ratio_old <= 0.0 or ratio_old == 1.0:
            return None
        estimate = math.log(ratio_new) / math.log(ratio_old)
        if not math.isfinite(estimate):
            return None
        return int(round(estimate))


def _relative_step(value, previous):
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.abs((np.float64(value) - previous) / np.float64(value)))


def _newton_iteration(step, x0, max_iterations, tolerance, on_error=None):
    """Shared driver loop of the Newton-type methods.

    ``step(x)`` returns the next iterate. ``on_error(iteration, tracker)``
    runs after each non-final relative error is recorded.
    """
    tracker = ConvergenceTracker()
    x = float(x0)
    value = x
    error = math.nan
    iterations = 0
    while iterations != max_iterations:
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            value = float(step(np.float64(x)))
        error = _relative_step(value, x)
        if error < tolerance:
            break
        tracker.push(error)
        if on_error is not None:
            on_error(iterations, tracker)
        x = value
        iterations += 1

    rate = tracker.rate() if iterations >= 3 else None
    return Result(value=value, error=error / 2.0, iterations=iterations,
                  convergence_rate=rate)


# ============================================================
# Methods
# ============================================================

def bisection_method(function, x0, x1, tolerance, verbose=False):
    """
    Find a root of ``function`` in [x0, x1] by repeated halving.

    Parameters
    ----------
    function : Function
        Continuous on [x0, x1].
    x0, x1 : float
        Bracket, x0 < x1, with f(x0) * f(x1) <= 0.
    tolerance : float
        Width of the final bracket; the reported ± error ends at or
        below tolerance / 2.
    verbose : bool
        Print the outcome.

    Returns
    -------
    Result
        Midpoint of the final bracket and its half-width. NaN value and
        error if the bracket is empty or f does not change sign.
        convergence_rate is always 1.
    """
    if not x0 < x1:
        return Result(math.nan, math.nan, 0, None)

    y0 = function(x0)
    y1 = function(x1)
    error = (x1 - x0) / 2.0
    value = (x0 + x1) / 2.0

    if y0 * y1 > 0:
        if verbose:
            print(f"  [Bisection] No sign change of {function.name} on [{x0}, {x1}]")
            sys.stdout.flush()
        return Result(math.nan, math.nan, 0, None)

    # Compared against the ± error, which is itself a half-width.
    tolerance = tolerance / 2.0
    iterations = 0

    while error > tolerance:
        error /= 2.0
        iterations += 1
        if y0 == 0.0:
            error = 0.0
            value = x0
            break
        elif y1 == 0.0:
            error = 0.0
            value = x1
            break
        ym = function(value)
        if y0 * ym < 0.0:
            x1, y1 = value, ym
        else:
            x0, y0 = value, ym
        value = (x0 + x1) / 2.0

    if verbose:
        print(f"  [Bisection] {function.name}: {value} ± {error:.1e} "
              f"after {iterations} iterations")
        sys.stdout.flush()

    return Result(value=value, error=error, iterations=iterations, convergence_rate=1)


def newtons_method(function, derivative, x0, max_iterations, tolerance, verbose=False):
    """
    Newton-Raphson iteration x <- x - f(x) / f'(x).

    Parameters
    ----------
    function, derivative : Function
        f and f'.
    x0 : float
        Starting point.
    max_iterations : int
        Iteration budget.
    tolerance : float
        Stop once |dx / x_new| < tolerance.
    verbose : bool
        Print the outcome.

    Returns
    -------
    Result
        Last iterate, half the final relative step as error, and the
        empirical order (None before three iterations).
    """
    def step(x):
        f = np.float64(function(x))
        if f == 0.0:
            return x
        return x - f / np.float64(derivative(x))

    result = _newton_iteration(step, x0, max_iterations, tolerance)
    if verbose:
        _print_result("Newton", function, result)
    return result


def altered_newtons_method(function, derivative, second_derivative, x0,
                           max_iterations, tolerance, verbose=False):
    """
    Newton's method applied to u = f / f', which has only simple roots:
    x <- x - f f' / (f'^2 - f f'').

    Keeps quadratic convergence at roots of higher multiplicity, where
    plain Newton degrades to linear. Same contract as ``newtons_method``.
    """
    def step(x):
        f = np.float64(function(x))
        if f == 0.0:
            # Landed on the root; f' and f'' may vanish there too.
            return x
        fd = np.float64(derivative(x))
        fdd = np.float64(second_derivative(x))
        return x - (f * fd) / (fd * fd - f * fdd)

    result = _newton_iteration(step, x0, max_iterations, tolerance)
    if verbose:
        _print_result("AlteredNewton", function, result)
    return result


def adjusting_newtons_method(function, derivative, x0, max_iterations, tolerance,
                             verbose=False):
    """
    Newton's method with an integer step multiplier m: x <- x - m f / f'.

    m starts at 1. On every third iteration past the second, a measured
    order below 2 increments m (a root of multiplicity m needs the step
    scaled by m to converge quadratically); any other measurement stops
    the adjustment for the rest of the run. Same contract as
    ``newtons_method``.
    """
    state = {"m": 1.0, "adjusting": True}

    def step(x):
        f = np.float64(function(x))
        if f == 0.0:
            return x
        return x - state["m"] * f / np.float64(derivative(x))

    def adjust(iteration, tracker):
        if not state["adjusting"] or iteration <= 2 or iteration % 3 != 0:
            return
        rate = tracker.rate()
        if rate is not None and rate < 2:
            state["m"] += 1.0
            if verbose:
                print(f"  [AdjustingNewton] iter {iteration}: order {rate}, m -> {state['m']:.0f}")
                sys.stdout.flush()
        else:
            state["adjusting"] = False

    result = _newton_iteration(step, x0, max_iterations, tolerance, on_error=adjust)
    if verbose:
        _print_result("AdjustingNewton", function, result)
    return result


def _square_root_helper(x, k):
    return x * x - k


def _square_root_helper_derivative(x, k):
    return 2.0 * x


def square_root(k, verbose=False):
    """
    Square root of k from a coarse bisection seed refined by Newton.

    Bisection on x^2 - k over [0, max(k, 1)] with tolerance k / 16 gives a
    cheap starting point; Newton (tolerance SQUARE_ROOT_TOLERANCE) then
    converges quadratically. The iteration count covers both phases. The
    error is floored at two units in the last place of the value.

    Returns
    -------
    Result
        NaN value for k < 0; exactly 0 or 1 (error 0) for k in {0, 1}.
    """
    if k < 0:
        return Result(math.nan, 0.0, 0, None)
    if k == 0.0:
        return Result(0.0, 0.0, 0, None)
    if k == 1.0:
        return Result(1.0, 0.0, 0, None)

    f = Function(None, _square_root_helper, k, vectorized=True)
    df = Function(None, _square_root_helper_derivative, k, vectorized=True)

    seed = bisection_method(f, 0.0, max(k, 1.0), k / 16.0)
    if seed.error == 0.0:
        return seed

    result = newtons_method(f, df, seed.value, SQUARE_ROOT_MAX_ITERATIONS,
                            SQUARE_ROOT_TOLERANCE)
    result = replace(result,
                     iterations=result.iterations + seed.iterations,
                     error=max(result.error, 2.0 * math.ulp(result.value)))
    if verbose:
        print(f"  [SquareRoot] sqrt({k}) = {result.value} ± {result.error:.1e} "
              f"({seed.iterations} bisection + {result.iterations - seed.iterations} Newton)")
        sys.stdout.flush()
    return result


def square_root_sweep(start, stop, step, verbose=False):
    """
    Check ``square_root`` against math.sqrt for k = start, start + step,
    ... up to and including stop.

    Returns
    -------
    list of (k, Result)
        Cases where |value - sqrt(k)| exceeds the reported error.
    """
    failures = []
    count = int(math.floor((stop - start) / step)) + 1
    for i in range(count):
        k = start + i * step
        result = square_root(k)
        real_sqrt = math.sqrt(k)
        if not abs(result.value - real_sqrt) <= result.error:
            failures.append((k, result))
            if verbose:
                print(f"  [SquareRoot] Error for square root of {k} "
                      f"({result.value} ± {result.error:.6e} not {real_sqrt})")
                sys.stdout.flush()
    return failures


def _print_result(method, function, result):
    print(f"  [{method}] {function.name}: {result.value} ± {result.error:.1e}, "
          f"iters={result.iterations}, order={result.convergence_rate}")
    sys.stdout.flush()

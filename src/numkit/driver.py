"""
numkit Driver: run the fixed sequence of coursework experiments.

  1. export f(x) = e^(-x/5) - sin x on [0, 10] for visual inspection
  2. bisection on the four brackets of f
  3. Newton on f, budget 4x the bisection iterations
  4. Newton vs altered Newton on the quadruple root of g
  5. Lagrange, piecewise-linear, raised-cosine and least-squares
     interpolation of 1/(1+x^2) on [-5, 5] at orders 5, 10, 20
  6. square-root acceptance sweep over k in [10, 10000]
  7. Newton vs adjusting Newton on the bonus multiple roots

Usage:
  numkit --output-dir results
  numkit --export-points 4096 --error-multiplier 256 --sqrt-step 0.5

Author: Ricardo Vieitez Parra
"""

import argparse
import sys
import time

from numkit import interpolation as _interp
from numkit import report, roots, study

# ── Config ──
TOLERANCE = 1e-7
TOLERANCE_3 = 1.0 / 35184372088832.0  # 2**-45
EXPORT_POINTS = 524288
SQUARE_ROOT_SWEEP_START = 10.0
SQUARE_ROOT_SWEEP_STOP = 10000.0
SQUARE_ROOT_SWEEP_STEP = 1.0 / 8192.0
INTERPOLATION_DOMAIN = (-5.0, 5.0)
INTERPOLATION_ORDERS = (5, 10, 20)
BISECTION_BRACKETS = ((0.5, 1.5), (2.0, 3.0), (6.0, 7.0), (9.0, 10.0))
NEWTON_STARTS = (1.0, 2.5, 6.5, 9.9)


def _interpolation_batch(title, base, constructor, polynomial, output_dir,
                         export_points, error_multiplier, orders, verbose, **kwargs):
    """Build, export, report and release one batch of interpolations."""
    start, end = INTERPOLATION_DOMAIN
    batch = []
    for order in orders:
        interpolation = constructor(study.H, start, end, order, verbose=verbose, **kwargs)
        if interpolation is None:
            print(f"{title}: order {order} failed")
            continue
        batch.append(interpolation)

    if batch:
        report.export_gnuplot(base, [study.H] + [i.as_function() for i in batch],
                              start, end, export_points, directory=output_dir,
                              verbose=verbose)

    print(f"{title} coefficients for {study.H.name}")
    errors = []
    for interpolation in batch:
        error = interpolation.error(multiplier=error_multiplier)
        errors.append((interpolation.order, error))
        prefix = report.format_polynomial(interpolation.coefficients) if polynomial else ""
        print(f"{prefix} order: {interpolation.order}, error: {error:.2E}")
        interpolation.release()
    return errors


def run_experiments(output_dir=".", export_points=EXPORT_POINTS,
                    error_multiplier=None, least_squares_points=None,
                    sqrt_step=SQUARE_ROOT_SWEEP_STEP, orders=INTERPOLATION_ORDERS,
                    verbose=False):
    """
    Run every experiment, printing the report to stdout.

    Parameters
    ----------
    output_dir : str
        Directory for the CSV and gnuplot files.
    export_points : int
        Samples per exported curve.
    error_multiplier : int, optional
        Interpolation error grid is order * multiplier + 1 points.
        Default POLYNOMIAL_ERROR_POINT_MULTIPLIER.
    least_squares_points : int, optional
        Sampling intervals of the least-squares fit. Default
        LEAST_SQUARES_POINTS.
    sqrt_step : float
        Step of the square-root sweep.
    orders : sequence of int
        Interpolation orders.
    verbose : bool
        Forward progress output from every method.

    Returns
    -------
    dict
        Results keyed by experiment: bisection, newton, newton_3,
        altered_newton_3, interpolation errors, square_root_failures,
        bonus.
    """
    t0 = time.time()
    out = {}

    report.export_gnuplot("1_visual_inspection", [study.F], 0.0, 10.0, export_points,
                          directory=output_dir, verbose=verbose)

    out["bisection"] = [roots.bisection_method(study.F, a, b, TOLERANCE, verbose=verbose)
                        for a, b in BISECTION_BRACKETS]
    print(f"Bisection Method: {study.F.name}")
    for result in out["bisection"]:
        report.report_result(result)

    out["newton"] = [
        roots.newtons_method(study.F, study.F_DERIVATIVE, x0, bisection.iterations * 4,
                             TOLERANCE, verbose=verbose)
        for x0, bisection in zip(NEWTON_STARTS, out["bisection"])
    ]
    print(f"Newton's Method: {study.F.name}")
    for result in out["newton"]:
        report.report_result(result)

    out["newton_3"] = roots.newtons_method(study.G, study.G_DERIVATIVE, 2.0, 256,
                                           TOLERANCE_3, verbose=verbose)
    print(f"Newton's Method (part 3): {study.G.name}")
    report.report_result(out["newton_3"])

    out["altered_newton_3"] = roots.altered_newtons_method(
        study.G, study.G_DERIVATIVE, study.G_SECOND_DERIVATIVE, 2.0, 256, TOLERANCE_3,
        verbose=verbose)
    print(f"Altered Newton's Method (part 3): {study.G.name}")
    report.report_result(out["altered_newton_3"])

    common = dict(output_dir=output_dir, export_points=export_points,
                  error_multiplier=error_multiplier, orders=orders, verbose=verbose)
    out["lagrange"] = _interpolation_batch(
        "Lagrange interpolation", "lagrange", _interp.lagrange_interpolation, True, **common)
    out["piecewise_linear"] = _interpolation_batch(
        "Piecewise linear interpolation", "piecewise_linear",
        _interp.piecewise_linear_interpolation, False, **common)
    out["raised_cosine"] = _interpolation_batch(
        "Raised cosine interpolation", "raised_cosine",
        _interp.raised_cosine_interpolation, False, **common)
    out["least_squares"] = _interpolation_batch(
        "Least squares interpolation", "least_squares",
        _interp.least_squares_interpolation, True, points=least_squares_points, **common)

    failures = roots.square_root_sweep(SQUARE_ROOT_SWEEP_START, SQUARE_ROOT_SWEEP_STOP,
                                       sqrt_step)
    out["square_root_failures"] = failures
    for k, result in failures:
        print(f"Error for square root of {k:.0f} "
              f"({result.value:f} ± {result.error:E} not {k ** 0.5:f})")
    if not failures:
        print("Success for square root")

    out["bonus"] = []
    print("Bonus Problem 2: Adjusting Newton's Method")
    for function, derivative in zip(study.BONUS_FUNCTIONS, study.BONUS_DERIVATIVES):
        plain = roots.newtons_method(function, derivative, 5.0, 256, TOLERANCE,
                                     verbose=verbose)
        adjusting = roots.adjusting_newtons_method(function, derivative, 5.0, 256,
                                                   TOLERANCE, verbose=verbose)
        out["bonus"].append((plain, adjusting))
        print(f"function {function.name}:")
        report.report_result(plain)
        report.report_result(adjusting)

    if verbose:
        print(f"  [Driver] done [{time.time() - t0:.1f}s]")
        sys.stdout.flush()
    return out


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Root finding and interpolation coursework experiments")
    parser.add_argument("--output-dir", type=str, default=".",
                        help="Directory for CSV and gnuplot output")
    parser.add_argument("--export-points", type=int, default=EXPORT_POINTS,
                        help="Samples per exported curve")
    parser.add_argument("--error-multiplier", type=int, default=None,
                        help="Interpolation error grid: order * multiplier + 1 points")
    parser.add_argument("--least-squares-points", type=int, default=None,
                        help="Sampling intervals for the least-squares fit")
    parser.add_argument("--sqrt-step", type=float, default=SQUARE_ROOT_SWEEP_STEP,
                        help="Step of the square-root sweep over [10, 10000]")
    parser.add_argument("--orders", type=str, default=None,
                        help="Comma-separated interpolation orders (default 5,10,20)")
    parser.add_argument("--verbose", action="store_true",
                        help="Print progress from every method")
    args = parser.parse_args(argv)

    orders = INTERPOLATION_ORDERS
    if args.orders:
        orders = tuple(int(o) for o in args.orders.split(","))

    run_experiments(
        output_dir=args.output_dir,
        export_points=args.export_points,
        error_multiplier=args.error_multiplier,
        least_squares_points=args.least_squares_points,
        sqrt_step=args.sqrt_step,
        orders=orders,
        verbose=args.verbose,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())

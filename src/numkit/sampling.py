"""
numkit Sampling: evaluate functions over evenly spaced grids.

Provides the sample buffers that the interpolation methods are built
from, forward-difference derivatives of a sample set, and the normalised
root-sum-square error used to grade interpolations.

Usage:
    from numkit.sampling import sample_values, function_error
    s = sample_values(fn, -5.0, 5.0, 0.5)     # 21 samples
    err = function_error(fn, approx, -5.0, 5.0, 1000)

Author: Ricardo Vieitez Parra
"""

import math
import sys
from dataclasses import dataclass
from typing import Optional

import numpy as np

# Relative gap below the next integer that still counts as reaching it.
_COUNT_SNAP = 4.0 * sys.float_info.epsilon


@dataclass
class SampledFunction:
    """Samples of a function on the grid start + i * sampling_interval.

    Fields
    ------
    name : str or None
        Label inherited from the sampled function.
    start : float
        First abscissa.
    end : float
        start + n_samples * sampling_interval.
    sampling_interval : float
        Grid spacing, > 0.
    samples : numpy.ndarray
        Function values, one per grid point.
    """
    name: Optional[str]
    start: float
    end: float
    sampling_interval: float
    samples: np.ndarray

    @property
    def n_samples(self):
        return 0 if self.samples is None else len(self.samples)

    def xs(self):
        """Abscissae of the samples."""
        return self.start + self.sampling_interval * np.arange(self.n_samples, dtype=np.float64)

    def release(self):
        """Drop the sample buffer."""
        self.samples = None


def sample_count(start, end, sampling_interval):
    """Number of grid points floor((end - start) / interval) + 1."""
    quotient = (end - start) / sampling_interval
    count = math.floor(quotient)
    if math.isclose(quotient, count + 1, rel_tol=_COUNT_SNAP):
        count += 1
    return int(count) + 1


def sample_values(function, start, end, sampling_interval, verbose=False):
    """
    Sample ``function`` at start, start + h, start + 2h, ...

    Parameters
    ----------
    function : Function
        Function to sample.
    start, end : float
        Domain bounds, start < end.
    sampling_interval : float
        Grid spacing h > 0.
    verbose : bool
        Print the grid size and any failure.

    Returns
    -------
    SampledFunction or None
        None if start >= end or the interval is not a positive finite
        number. The returned ``end`` is start + n * h, which may exceed
        the requested end by less than one interval.
    """
    if not start < end:
        if verbose:
            print(f"  [Sampling] Empty domain [{start}, {end}] for {function.name}")
            sys.stdout.flush()
        return None
    if not (math.isfinite(sampling_interval) and sampling_interval > 0.0):
        if verbose:
            print(f"  [Sampling] Invalid sampling interval {sampling_interval} for {function.name}")
            sys.stdout.flush()
        return None

    n_samples = sample_count(start, end, sampling_interval)
    xs = start + sampling_interval * np.arange(n_samples, dtype=np.float64)
    samples = function.evaluate(xs)

    if verbose:
        print(f"  [Sampling] {function.name}: {n_samples:,} samples on "
              f"[{start}, {end}], h={sampling_interval:.3e}")
        sys.stdout.flush()

    return SampledFunction(
        name=function.name,
        start=start,
        end=start + n_samples * sampling_interval,
        sampling_interval=sampling_interval,
        samples=samples,
    )


def sample_derivative(sampled_function):
    """
    Forward first differences of a sample set.

    Returns
    -------
    SampledFunction or None
        n - 1 samples of (s[i+1] - s[i]) / h on the same grid start, or
        None if fewer than two samples exist.
    """
    if sampled_function.n_samples < 2:
        return None
    name = None
    if sampled_function.name is not None:
        name = f"({sampled_function.name})'"
    h = sampled_function.sampling_interval
    return SampledFunction(
        name=name,
        start=sampled_function.start,
        end=sampled_function.end - h,
        sampling_interval=h,
        samples=np.diff(sampled_function.samples) / h,
    )


def function_error(function1, function2, start, end, points, verbose=False):
    """
    Normalised root-sum-square difference between two functions.

    Both functions are sampled on the same grid of spacing
    (end - start) / points, and the result is
    sqrt(sum((s1 - s2)**2) / sum(s1**2)).

    Returns
    -------
    float
        The relative error, NaN if end <= start or sampling fails.
    """
    if end <= start:
        return math.nan
    sampling_interval = (end - start) / points
    sampled1 = sample_values(function1, start, end, sampling_interval, verbose=verbose)
    if sampled1 is None:
        return math.nan
    sampled2 = sample_values(function2, start, end, sampling_interval, verbose=verbose)
    if sampled2 is None:
        sampled1.release()
        return math.nan

    n = min(sampled1.n_samples, sampled2.n_samples)
    s1 = sampled1.samples[:n]
    s2 = sampled2.samples[:n]
    difference2 = float(np.sum((s1 - s2) ** 2))
    f2 = float(np.sum(s1 ** 2))
    sampled1.release()
    sampled2.release()

    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.sqrt(np.float64(difference2) / np.float64(f2)))

"""Kernel density estimates built from Gaussian kernels.

Both ``mean`` and ``x`` are expected in ascending order; kernels are
evaluated only inside a window around each sample.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from .kernels import GaussianKernel


def _accumulate(
    mean: Sequence[float],
    x: Sequence[float],
    window: float,
    width_for: Callable[[float], float],
) -> list[float]:
    y = [0.0] * len(x)
    n = len(mean)
    start = 0
    for m in mean:
        kernel = GaussianKernel(m, width_for(m), n)
        first = start
        for i, xi in enumerate(x[first:], start=first):
            if xi > m + window:
                break
            if xi < m - window:
                start += 1
                continue
            y[i] += kernel.pdf(xi)
    return y


def kde_gaussian_estimate(
    mean: Sequence[float],
    bandwidth: float,
    x: Sequence[float],
    bandwidth_factor: float,
) -> list[float]:
    """Density at points ``x`` from samples ``mean``, windowed to two bandwidths."""
    sigma = bandwidth_factor * bandwidth
    return _accumulate(mean, x, 2.0 * bandwidth, lambda m: sigma)


def kde_gaussian_bounded_estimate(
    mean: Sequence[float],
    bandwidth: float,
    x: Sequence[float],
    bandwidth_factor: float,
    bound_trigger: float,
) -> list[float]:
    """Density for non-negative data, narrowing kernels of samples near zero.

    A sample closer to zero than ``bound_trigger * bandwidth`` uses its own
    value, times ``bandwidth_factor``, as kernel width.
    """

    def width_for(m: float) -> float:
        if m - bound_trigger * bandwidth > 0.0:
            return bandwidth_factor * bandwidth
        return bandwidth_factor * m

    return _accumulate(mean, x, 4.0 * bandwidth, width_for)
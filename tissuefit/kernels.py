"""Smoothing kernels for kernel density estimation.

Each kernel is centred on ``mean`` and scaled by ``1/n`` so that the sum
over ``n`` kernels integrates to one.
"""

from __future__ import annotations

import math


class _WidthKernel:
    """Kernel centred on ``mean`` with a width, normalised for ``n`` samples."""

    __slots__ = ("mean", "n", "_inv_width", "_scaling")
    _COEFFICIENT = 1.0

    def __init__(self, mean: float, width: float, n: int) -> None:
        self.mean = mean
        self.n = n
        self._inv_width = 1.0 / width
        self._scaling = self._COEFFICIENT * self._inv_width / float(n)

    def _standardise(self, x: float) -> float:
        return (x - self.mean) * self._inv_width


class TriweightKernel(_WidthKernel):
    """Triweight kernel with support ``[mean - bandwidth, mean + bandwidth]``."""

    __slots__ = ()
    _COEFFICIENT = 1.09375

    def __init__(self, mean: float, bandwidth: float, n: int) -> None:
        super().__init__(mean, bandwidth, n)

    def pdf(self, x: float) -> float:
        """Kernel density at ``x``."""
        y = self._standardise(x)
        if abs(y) > 1.0:
            return 0.0
        v = 1.0 - y * y
        return self._scaling * v * v * v


class GaussianKernel(_WidthKernel):
    """Normal kernel with standard deviation ``sigma``."""

    __slots__ = ()
    _COEFFICIENT = 0.5 * math.sqrt(0.5) * (2.0 / math.sqrt(math.pi))

    def __init__(self, mean: float, sigma: float, n: int) -> None:
        super().__init__(mean, sigma, n)

    def pdf(self, x: float) -> float:
        """Kernel density at ``x``."""
        y = self._standardise(x)
        return self._scaling * math.exp(-0.5 * y * y)


class GammaKernel:
    """Gamma-distribution kernel with rate ``10 * mean / sigma**2``."""

    __slots__ = ("mean", "n", "_a", "_b", "_scaling")

    def __init__(self, mean: float, sigma: float, n: int) -> None:
        self.mean = mean
        self.n = n
        self._b = 10.0 * mean / sigma / sigma
        self._a = self._b * mean
        self._scaling = math.pow(self._b, self._a) / math.gamma(self._a)

    def pdf(self, x: float) -> float:
        """Kernel density at ``x``; zero for non-positive ``x``."""
        if x > 0.0:
            return math.pow(x, self._a - 1.0) * math.exp(-self._b * x) * self._scaling
        return 0.0
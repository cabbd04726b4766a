"""Simulation and objective for one-dimensional trabeculae tests.

Stress carries a linear drift term, scaled by ``1/sqrt(strain)``.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence

from .kinematics import deformation_1d
from .templates import MaterialLaw

Vector = Sequence[float]
ResidualNorm = Callable[[float, float, float], float]
PenaltyFunction = Callable[[Vector, Vector, Vector], float]


def quadratic_residual(sim: float, data: float, strain: float) -> float:
    """Squared difference."""
    difference = sim - data
    return difference * difference


def cubic_residual(sim: float, data: float, strain: float) -> float:
    """Absolute cubed difference."""
    difference = sim - data
    return abs(difference) * difference * difference


def quartic_residual(sim: float, data: float, strain: float) -> float:
    """Fourth power of the difference."""
    difference = sim - data
    return difference**4


def _penalty_factor(*terms: tuple[float, float]) -> float:
    """Penalty factor ``1 + sum(weight * deviation**2)``."""
    return 1.0 + sum((w * d * d for w, d in terms), 0.0)


def penalty_function_null(pars: Vector, fiber: Vector, visco: Vector) -> float:
    """Neutral penalty factor: no deviation is penalised."""
    return _penalty_factor()


def simulate_general(
    law: MaterialLaw, drift: Vector, strain: Vector, dt: Vector
) -> list[float]:
    """Stress history for ``strain``; the first step is left at zero.

    ``drift`` holds the initial offset and its rate of change per unit time.
    """
    n = len(strain)
    if len(dt) < n:
        raise ValueError(f"dt needs at least {n} entries, got {len(dt)}")
    offset, rate = drift[0], drift[1]
    out = [0.0] * n
    for i in range(1, n):
        kin = deformation_1d(strain[i])
        offset += dt[i] * rate
        values = law.stress(kin, dt[i])
        out[i] = values[0] + offset / math.sqrt(strain[i])
    return out


def residual_body_general(
    norm: ResidualNorm,
    strain: Vector,
    stress: Vector,
    weight: Vector,
    index: Sequence[int],
    select: Sequence[int],
    sims: Vector,
) -> float:
    """Weighted residual over selected protocols, each spanning its bounds inclusive.

    Protocol ``p`` runs from ``index[p]`` to ``index[p + 1]``; the ``k``-th
    selected protocol is weighted by ``weight[k]``.
    """
    total = 0.0
    for w, protocol in zip(weight, select):
        total += w * sum(
            norm(sims[i], stress[i], strain[i])
            for i in range(index[protocol], index[protocol + 1] + 1)
        )
    return total


def calc_objective_general(
    law: MaterialLaw,
    norm: ResidualNorm,
    penalty: PenaltyFunction,
    pars: Vector,
    fiber: Vector,
    visco: Vector,
    drift: Vector,
    strain: Vector,
    stress: Vector,
    dt: Vector,
    weight: Vector,
    index: Sequence[int],
    select: Sequence[int],
) -> float:
    """Residual of a simulated history against data, times the penalty factor."""
    sims = simulate_general(law, drift, strain, dt)
    res = residual_body_general(norm, strain, stress, weight, index, select, sims)
    return res * penalty(pars, fiber, visco)
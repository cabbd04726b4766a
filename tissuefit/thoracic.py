"""Penalties, residuals and the equibiaxial ensemble objective for thoracic aorta fits.

The ensemble model is driven by equibiaxial stretch: one strain value per
time step, with the simulated response taken as the trace of the planar
stress tensor.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence

from .kinematics import deformation_ensemble_2d
from .templates import MaterialLaw

P_FIBER = 0.001
P_ALPHA = 1.0
P_ELASTIN = 1e-3
P_COLLAGEN = 1e-1
B_VISCO = 0.01
B_MODULUS = 0.01

W_HYST = 0.1
W_VISCO = 10.0

KIP = 0.155
KOP = 0.424285714285714

IDEAL_ALPHA = math.pi / 4

ENSEMBLE_W_HYST = 10.0

Vector = Sequence[float]
NormFunction = Callable[[float, float, float], float]
HysteresisFunction = Callable[[Vector, Vector, float], float]
PenaltyFunction = Callable[[Vector, Vector, Vector], float]


def _weighted_squares(*terms: tuple[float, float]) -> float:
    """Sum of ``weight * deviation**2`` over ``terms``."""
    return sum((w * d * d for w, d in terms), 0.0)


def quart_quad_residual(sim: float, stress: float, strain: float) -> float:
    """Squared error below the data, sixth power above it, divided by ``strain``."""
    residual = sim - stress
    r2 = residual * residual
    mult = r2 * r2 if residual > 0 else 1.0
    return r2 * mult / strain


def quadratic_residual(sim: float, stress: float, strain: float) -> float:
    """Squared difference."""
    residual = sim - stress
    return residual * residual


def penalty_body_null(pars: Vector, fiber: Vector, visco: Vector, data: Vector) -> float:
    """Penalty switched off: a sum over no deviations."""
    return _weighted_squares()


def penalty_body_standard(
    pars: Vector, fiber: Vector, visco: Vector, data: Vector
) -> float:
    """Penalty on fiber rotation, fiber angle and the circumferential fractional order."""
    v_c = visco[1] - 0.5 * data[1]
    d_alpha = fiber[1] - IDEAL_ALPHA
    return _weighted_squares((P_FIBER, fiber[0]), (P_ALPHA, d_alpha), (W_VISCO, v_c))


def penalty_ensemble_null(pars: Vector, visco: Vector, data: Vector) -> float:
    """Ensemble penalty switched off: a sum over no deviations."""
    return _weighted_squares()


def penalty_ensemble3(pars: Vector, visco: Vector, data: Vector) -> float:
    """Penalty on the mismatch of the summed fractional orders."""
    v_c = visco[0] + visco[1] - data[0] - data[1]
    return _weighted_squares((W_VISCO, v_c))


def hysteresis_body(sims: Vector, delta_cg: Vector, hysteresis: float) -> float:
    """Squared error between the simulated loop area and ``hysteresis``."""
    area = sum(s * d for s, d in zip(sims, delta_cg, strict=True))
    return _weighted_squares((1.0, area - hysteresis))


def hysteresis_body_null(sims: Vector, delta_cg: Vector, hysteresis: float) -> float:
    """Hysteresis term switched off: a sum over no deviations."""
    return _weighted_squares()


def ensemble_simulate(law: MaterialLaw, strain: Vector, dt: Vector) -> list[float]:
    """Trace of the stress response for every equibiaxial stretch in ``strain``."""
    n = len(strain)
    if len(dt) < n:
        raise ValueError(f"dt needs at least {n} entries, got {len(dt)}")
    out = []
    for stretch, step in zip(strain, dt):
        values = law.stress(deformation_ensemble_2d(stretch), step)
        out.append(values[0] + values[3])
    return out


def ensemble_residual(
    norm: NormFunction, strain: Vector, stress: Vector, sims: Vector
) -> float:
    """Sum of ``norm`` over every simulated point."""
    n = len(sims)
    if len(stress) < n or len(strain) < n:
        raise ValueError(f"strain and stress need at least {n} entries")
    return sum(norm(s, d, e) for s, d, e in zip(sims, stress, strain))


def calc_ensemble_objective(
    law: MaterialLaw,
    norm: NormFunction,
    hysteresis_func: HysteresisFunction,
    penalty: PenaltyFunction,
    pars: Vector,
    visco: Vector,
    data: Vector,
    strain: Vector,
    stress: Vector,
    dt: Vector,
    delta_cg: Vector,
    hysteresis: float,
) -> float:
    """Residual plus weighted hysteresis error, scaled by one plus the penalty."""
    sims = ensemble_simulate(law, strain, dt)
    res = ensemble_residual(norm, strain, stress, sims)
    hyst = hysteresis_func(sims, delta_cg, hysteresis)
    return (res + ENSEMBLE_W_HYST * hyst) * (1.0 + penalty(pars, visco, data))
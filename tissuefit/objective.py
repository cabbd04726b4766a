"""Residual, hysteresis and penalty terms for fitting planar tissue models.

Stress and deformation histories are flat: ``dim`` components per time step,
with the diagonal components at offsets ``0`` and ``3``. Protocol ``p`` spans
rows ``index[p]`` to ``index[p + 1]``, and ``select`` lists the protocols to
use.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator, Sequence

from .kinematics import deformation_2d
from .templates import MaterialLaw
from .templates import simulate as _simulate_tensor

__all__ = [
    "simulate",
    "top_sided_residual",
    "quadratic_residual",
    "cubic_residual",
    "quartic_residual",
    "residual_general",
    "residual_body",
    "residual_body_below",
    "residual_body_below2",
    "hysteresis_body",
    "hysteresis_body_null",
    "penalty_body_kappa",
    "penalty_body_kappa_2",
    "calculate_viscopart_body_null",
    "calculate_viscopart_body",
    "calculate_viscopart_body1",
    "calculate_viscopart_body2",
    "calculate_viscopart_body3",
    "lowerbound",
    "calc_residual_general",
]

Vector = Sequence[float]
ResidualNorm = Callable[[float, float, float], float]
ResidualCalculation = Callable[..., float]
HysteresisCalculation = Callable[..., float]
PenaltyCalculation = Callable[[Vector, Vector, Vector], float]
ViscoCalculation = Callable[[Vector, Vector, float], float]

_DIAGONAL_STEP = 3


def simulate(law: MaterialLaw, args: Vector, dt: Vector, dim: int) -> list[float]:
    """Stress history of ``law`` for the planar deformations in ``args``.

    The first time step is the reference state and is left at zero stress.
    """
    side = math.isqrt(dim) if dim > 0 else 0
    if side == 0 or side * side != dim:
        raise ValueError(f"dim {dim} is not the size of a square tensor")
    return _simulate_tensor(law, deformation_2d, args, dt, side)


def top_sided_residual(sim: float, data: float, strain: float) -> float:
    """Fourth power of the difference."""
    difference = sim - data
    difference = difference * difference
    weight = difference if difference > 0 else 1.0
    return weight * difference


def quadratic_residual(sim: float, data: float, strain: float) -> float:
    """Square of the difference."""
    difference = sim - data
    return difference * difference


def cubic_residual(sim: float, data: float, strain: float) -> float:
    """Absolute cube of the difference."""
    difference = sim - data
    return abs(difference) * difference * difference


def quartic_residual(sim: float, data: float, strain: float) -> float:
    """Fourth power of the difference."""
    difference = sim - data
    return difference * difference * difference * difference


def _diagonal_sums(
    term: Callable[[int, int], float],
    index: Sequence[int],
    select: Sequence[int],
    dim: int,
    skip: int,
    inclusive: bool,
) -> Iterator[tuple[int, float]]:
    """Yield ``(weight position, summed term)`` for each diagonal of each protocol.

    ``term`` receives the position of the protocol in ``select`` and the flat
    position of the component.
    """
    extra = 1 if inclusive else 0
    for k, protocol in enumerate(select):
        rows = range(index[protocol], index[protocol + 1] + extra, skip)
        for j in range(0, dim, _DIAGONAL_STEP):
            yield dim * protocol + j, sum(term(k, i * dim + j) for i in rows)


def residual_general(
    norm: ResidualNorm,
    strain: Vector,
    stress: Vector,
    weights: Vector,
    index: Sequence[int],
    select: Sequence[int],
    dim: int,
    skip: int,
    sims: Vector,
) -> float:
    """Weighted norm of diagonal residuals, each protocol's bounds inclusive."""
    sums = _diagonal_sums(
        lambda k, pos: norm(sims[pos], stress[pos], strain[pos]),
        index, select, dim, skip, inclusive=True,
    )
    return sum((weights[w] * eps for w, eps in sums), 0.0)


def residual_body(
    strain: Vector,
    stress: Vector,
    weights: Vector,
    index: Sequence[int],
    select: Sequence[int],
    dim: int,
    skip: int,
    sims: Vector,
) -> float:
    """Weighted sum of squared diagonal residuals, each protocol's bounds inclusive."""
    return residual_general(
        quadratic_residual, strain, stress, weights, index, select, dim, skip, sims
    )


def _residual_below(
    over_factor: float,
    strain: Vector,
    stress: Vector,
    index: Sequence[int],
    select: Sequence[int],
    dim: int,
    skip: int,
    sims: Vector,
) -> float:
    def term(k: int, pos: int) -> float:
        ds = sims[pos] - stress[pos]
        ds = over_factor * ds**4 if ds > 0.0 else ds * ds
        return ds / math.pow(strain[k], 4)

    sums = _diagonal_sums(term, index, select, dim, skip, inclusive=False)
    return sum((eps for _, eps in sums), 0.0)


def residual_body_below(
    strain: Vector,
    stress: Vector,
    weights: Vector,
    index: Sequence[int],
    select: Sequence[int],
    dim: int,
    skip: int,
    sims: Vector,
) -> float:
    """Residual penalising overshoot by its fourth power, undershoot by its square.

    Each protocol's rows run up to, not including, its end; the ``k``-th
    selected protocol is divided by ``strain[k] ** 4``. Weights are not used.
    """
    return _residual_below(1.0, strain, stress, index, select, dim, skip, sims)


def residual_body_below2(
    strain: Vector,
    stress: Vector,
    weights: Vector,
    index: Sequence[int],
    select: Sequence[int],
    dim: int,
    skip: int,
    sims: Vector,
) -> float:
    """Like :func:`residual_body_below` with overshoot weighted ten times."""
    return _residual_below(10.0, strain, stress, index, select, dim, skip, sims)


def hysteresis_body(
    sims: Vector,
    delta_cg: Vector,
    hysteresis: Vector,
    weights: Vector,
    index: Sequence[int],
    select: Sequence[int],
    dim: int,
    skip: int,
) -> float:
    """Squared error of each diagonal loop area, each protocol's bounds inclusive."""
    sums = _diagonal_sums(
        lambda k, pos: sims[pos] * delta_cg[pos],
        index, select, dim, skip, inclusive=True,
    )
    total = 0.0
    for w, area in sums:
        ds = area - hysteresis[w]
        total += ds * ds
    return total


def hysteresis_body_null(
    sims: Vector,
    delta_cg: Vector,
    hysteresis: Vector,
    weights: Vector,
    index: Sequence[int],
    select: Sequence[int],
    dim: int,
    skip: int,
) -> float:
    """Hysteresis term switched off: the loop error over no protocols."""
    return hysteresis_body(sims, delta_cg, hysteresis, weights, index, (), dim, skip)


def penalty_body_kappa(pars: Vector, fiber: Vector, visco: Vector) -> float:
    """Penalty on the fiber angle and on the dispersion away from one half."""
    d_kappa = fiber[1] - 0.5
    return 1.0 + 0.1 * fiber[0] * fiber[0] + 0.1 * d_kappa * d_kappa


def penalty_body_kappa_2(pars: Vector, fiber: Vector, visco: Vector) -> float:
    """Penalty pulling angle, dispersion and elastin modulus toward reference values.

    The references are ``fiber[4]`` (angle), ``fiber[5]`` (dispersion),
    ``fiber[3]`` (elastin modulus) and one half for the second dispersion.
    """
    d_kappa2 = fiber[2] - 0.5
    d_elastin = pars[1] - fiber[3]
    d_fiber = fiber[0] - fiber[4]
    d_kappa = fiber[1] - fiber[5]
    return (
        1.0
        + 1.0 * d_fiber * d_fiber
        + 0.1 * d_elastin * d_elastin
        + 40.0 * d_kappa * d_kappa
        + 10.0 * (d_kappa2 * d_kappa2)
    )


def _sum_of_squares(*deltas: float) -> float:
    return sum((d * d for d in deltas), 0.0)


def calculate_viscopart_body_null(visco: Vector, datas: Vector, alpha: float) -> float:
    """Viscous penalty switched off: a sum over no mismatches."""
    return _sum_of_squares()


def calculate_viscopart_body(visco: Vector, datas: Vector, alpha: float) -> float:
    """Squared mismatch of longitudinal and circumferential fractional orders."""
    delta_l = visco[0] - datas[0]
    delta_c = 0.5 * (visco[0] + visco[1]) - datas[1]
    return _sum_of_squares(delta_l, delta_c)


def calculate_viscopart_body1(visco: Vector, datas: Vector, alpha: float) -> float:
    """Mismatch of one fractional order projected on the fiber angle."""
    delta_l = 0.5 * (math.cos(alpha) * visco[0]) - datas[0]
    delta_c = 0.5 * (math.sin(alpha) * visco[0]) - datas[1]
    return _sum_of_squares(delta_c, delta_l)


def calculate_viscopart_body2(visco: Vector, datas: Vector, alpha: float) -> float:
    """Mismatch of a projected fiber order plus an isotropic order."""
    delta_l = 0.5 * (math.cos(alpha) * visco[0] + visco[1]) - datas[0]
    delta_c = 0.5 * (math.sin(alpha) * visco[0] + visco[1]) - datas[1]
    return _sum_of_squares(delta_c, delta_l)


def calculate_viscopart_body3(visco: Vector, datas: Vector, alpha: float) -> float:
    """Squared difference between the two fractional orders."""
    return _sum_of_squares(visco[0] - visco[1])


def lowerbound(var: float, value: float) -> float:
    """Barrier ``1 / (exp(r) - exp(-r))`` with ``r = var / value``."""
    rat = var / value
    return 1.0 / (math.exp(rat) - math.exp(-rat))


def calc_residual_general(
    law: MaterialLaw,
    residual: ResidualCalculation,
    hysteresis_func: HysteresisCalculation,
    penalty: PenaltyCalculation,
    visco_part: ViscoCalculation,
    pars: Vector,
    fiber: Vector,
    visco: Vector,
    args: Vector,
    stress: Vector,
    dt: Vector,
    weights: Vector,
    delta_cg: Vector,
    hysteresis: Vector,
    alphas: Vector,
    index: Sequence[int],
    select: Sequence[int],
    dim: int,
    skip: int,
    w_hyst: float,
    w_visco: float,
) -> float:
    """Full objective: residual plus scaled hysteresis, times penalty plus viscous term.

    The hysteresis term is divided by the larger diagonal weight of the last
    selected protocol.
    """
    if not select:
        raise ValueError("select must name at least one protocol")
    sims = simulate(law, args, dt, dim)
    res = residual(args, stress, weights, index, select, dim, skip, sims)
    hyst = hysteresis_func(sims, delta_cg, hysteresis, weights, index, select, dim, skip)
    alp = visco_part(visco, alphas, fiber[0])
    last = dim * select[-1]
    scale = 1.0 / max(weights[last], weights[last + 3])
    return (res + w_hyst * scale * hyst) * (penalty(pars, fiber, visco) + w_visco * alp)
"""Simulation and objective building blocks for tensor-valued material laws.

Tensors are stored flat, ``dim * dim`` components per time step. Protocol
bounds live in ``index``: protocol ``p`` spans rows ``index[2*p]`` to
``index[2*p + 1]``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from typing import Protocol

from .kinematics import Kinematics

Vector = Sequence[float]


class MaterialLaw(Protocol):
    """A material law that turns a deformation state and time step into stress."""

    def stress(self, kin: Kinematics, dt: float) -> Sequence[float]: ...


ResidualNorm = Callable[[float, float], float]
KinematicsFactory = Callable[[Vector], Kinematics]
HysteresisFunc = Callable[..., float]
Penalty = Callable[[Vector, Vector, Vector, Vector], float]


def simulate(
    law: MaterialLaw,
    kinematics_factory: KinematicsFactory,
    args: Vector,
    dt: Vector,
    dim: int,
) -> list[float]:
    """Run ``law`` over every deformation in ``args``.

    The first time step is the reference state and is left at zero stress.
    """
    size = dim * dim
    if len(args) % size:
        raise ValueError(f"args length {len(args)} is not a multiple of {size}")
    n = len(args) // size
    if len(dt) < n:
        raise ValueError(f"dt needs at least {n} entries, got {len(dt)}")
    stress = [0.0] * (n * size)
    for i in range(1, n):
        row = slice(i * size, (i + 1) * size)
        values = list(law.stress(kinematics_factory(args[row]), dt[i]))
        if len(values) != size:
            raise ValueError(f"law returned {len(values)} components, expected {size}")
        stress[row] = values
    return stress


def compute_residual_difference(sims: Vector, stress: Vector) -> list[float]:
    """Component-wise difference between simulated and measured stress."""
    return [s - d for s, d in zip(sims, stress, strict=True)]


def normalize_residuals(res: Vector, start: int, end: int, dim: int) -> list[float]:
    """Remove the mean of rows ``start:end`` from the leading rows.

    The mean is taken over ``end - start`` rows and subtracted from rows
    ``1`` to ``end - start - 1``; row ``0`` and later rows are kept.
    """
    size = dim * dim
    count = end - start
    if count <= 0:
        raise ValueError(f"empty range {start}:{end}")
    rows = [res[i * size : (i + 1) * size] for i in range(start, end)]
    mean = [sum(column) / count for column in zip(*rows)]
    out = list(res)
    for i in range(1, count):
        base = i * size
        for j, m in enumerate(mean):
            out[base + j] -= m
    return out


def _diagonal_sums(
    term: Callable[[int], float],
    index: Sequence[int],
    select: Sequence[int],
    skip: int,
    dim: int,
    inclusive: bool,
) -> Iterator[tuple[int, float]]:
    """Yield ``(weight position, summed term)`` for each diagonal of each protocol."""
    size = dim * dim
    extra = 1 if inclusive else 0
    for protocol in select:
        rows = range(index[2 * protocol], index[2 * protocol + 1] + extra, skip)
        for j in range(0, size, dim + 1):
            yield size * protocol + j, sum(term(i * size + j) for i in rows)


def residual_term_general(
    norm: ResidualNorm,
    strain: Vector,
    residual: Vector,
    weights: Vector,
    index: Sequence[int],
    select: Sequence[int],
    skip: int,
    dim: int,
) -> float:
    """Weighted norm of the diagonal residual components over selected protocols.

    Each protocol's rows run from its start to its end inclusive.
    """
    sums = _diagonal_sums(
        lambda k: norm(residual[k], strain[k]), index, select, skip, dim, inclusive=True
    )
    return sum((weights[w] * eps for w, eps in sums), 0.0)


def quart_quad_residual(residual: float, strain: float) -> float:
    """Quadratic below the data, sixth power above it."""
    r2 = residual * residual
    mult = r2 * r2 if residual > 0 else 1.0
    return r2 * mult


def quadratic_residual(residual: float, strain: float) -> float:
    """Square of the residual."""
    return residual * residual


def hysteresis_body(
    sims: Vector,
    delta_cg: Vector,
    hysteresis: Vector,
    weights: Vector,
    index: Sequence[int],
    select: Sequence[int],
    skip: int,
    dim: int,
) -> float:
    """Weighted squared error of the loop area of each diagonal component.

    Each protocol's rows run from its start up to, not including, its end.
    """
    sums = _diagonal_sums(
        lambda k: sims[k] * delta_cg[k], index, select, skip, dim, inclusive=False
    )
    total = 0.0
    for w, area in sums:
        ds = area - hysteresis[w]
        total += weights[w] * ds * ds
    return total


def hysteresis_body_null(
    sims: Vector,
    delta_cg: Vector,
    hysteresis: Vector,
    weights: Vector,
    index: Sequence[int],
    select: Sequence[int],
    skip: int,
    dim: int,
) -> float:
    """Hysteresis term switched off: the loop error over no protocols."""
    return hysteresis_body(sims, delta_cg, hysteresis, weights, index, (), skip, dim)


def calc_residual(
    law: MaterialLaw,
    kinematics_factory: KinematicsFactory,
    norm: ResidualNorm,
    hysteresis_func: HysteresisFunc,
    penalty: Penalty,
    pars: Vector,
    fiber: Vector,
    visco: Vector,
    data: Vector,
    args: Vector,
    stress: Vector,
    dt: Vector,
    weights: Vector,
    delta_cg: Vector,
    hysteresis: Vector,
    index: Sequence[int],
    select: Sequence[int],
    skip: int,
    w_hyst: float,
    dim: int,
) -> float:
    """Full objective: normalised residual plus hysteresis, scaled by the penalty."""
    sims = simulate(law, kinematics_factory, args, dt, dim)
    diff = compute_residual_difference(sims, stress[: len(sims)])
    for protocol in select:
        diff = normalize_residuals(
            diff, index[2 * protocol], index[2 * protocol + 1], dim
        )
    res = residual_term_general(norm, args, diff, weights, index, select, skip, dim)
    hyst = hysteresis_func(sims, delta_cg, hysteresis, weights, index, select, skip, dim)
    return (res + w_hyst * hyst) * (1.0 + penalty(pars, fiber, visco, data))
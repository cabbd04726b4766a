"""Deformation kinematics for 1D, planar (2D) and 3D right Cauchy-Green tensors.

Tensors are stored flat in row-major order: a 2D tensor as four values
``(C11, C12, C21, C22)`` and a 3D tensor as nine values.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

ID_2D: tuple[float, ...] = (1.0, 0.0, 0.0, 1.0)
ID_3D: tuple[float, ...] = (1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0)


@dataclass(frozen=True)
class Kinematics:
    """Precomputed quantities of a deformation state.

    ``i_n`` is the out-of-plane component (or the incompressibility factor),
    ``i_1`` the first invariant.
    """

    det: float
    c: tuple[float, ...]
    cinv: tuple[float, ...]
    i_n: float
    i_1: float

    @property
    def i_1m3(self) -> float:
        """First invariant minus three."""
        return self.i_1 - 3.0

    @property
    def size(self) -> int:
        """Number of stored tensor components."""
        return len(self.c)


def _as_components(values: Sequence[float], size: int, name: str) -> tuple[float, ...]:
    components = tuple(float(v) for v in values)
    if len(components) != size:
        raise ValueError(f"{name} needs {size} components, got {len(components)}")
    return components


def deformation_1d(stretch: float) -> Kinematics:
    """Kinematics of a uniaxial, incompressible deformation with ``C = stretch``."""
    stretch = float(stretch)
    i_n = 1.0 / math.sqrt(stretch)
    return Kinematics(
        det=stretch,
        c=(stretch,),
        cinv=(1.0 / stretch,),
        i_n=i_n,
        i_1=stretch + i_n + i_n,
    )


def deformation_2d(c: Sequence[float]) -> Kinematics:
    """Kinematics of a planar, incompressible deformation from a 2x2 tensor."""
    c11, c12, c21, c22 = _as_components(c, 4, "c")
    det = c11 * c22 - c12 * c21
    i_n = 1.0 / det
    return Kinematics(
        det=det,
        c=(c11, c12, c21, c22),
        cinv=(c22 * i_n, -c12 * i_n, -c21 * i_n, c11 * i_n),
        i_n=i_n,
        i_1=c11 + c22 + i_n,
    )


def deformation_ensemble_2d(eb_strain: float) -> Kinematics:
    """Kinematics of an equibiaxial planar deformation."""
    e = float(eb_strain)
    det = e * e
    i_n = 1.0 / det
    return Kinematics(
        det=det,
        c=(e, 0.0, 0.0, e),
        cinv=(1.0 / e, 0.0, 0.0, 1.0 / e),
        i_n=i_n,
        i_1=e + e + i_n,
    )


def determinant_3d_tensor(tensor: Sequence[float]) -> float:
    """Determinant of a symmetric 3x3 tensor, using its upper triangle."""
    t = _as_components(tensor, 9, "tensor")
    return (
        -t[2] * t[2] * t[4]
        + 2 * t[1] * t[2] * t[5]
        - t[0] * t[5] * t[5]
        - t[1] * t[1] * t[8]
        + t[0] * t[4] * t[8]
    )


def deformation_3d(c: Sequence[float]) -> Kinematics:
    """Kinematics of a 3D deformation from a symmetric 3x3 tensor."""
    a = _as_components(c, 9, "c")
    det = determinant_3d_tensor(a)
    i_n = 1.0 / det
    c0 = i_n * (-a[5] * a[5] + a[4] * a[8])
    c1 = i_n * (a[2] * a[5] - a[1] * a[8])
    c2 = i_n * (-a[2] * a[4] + a[1] * a[5])
    c4 = i_n * (-a[2] * a[2] + a[0] * a[8])
    c5 = i_n * (a[1] * a[2] - a[0] * a[5])
    c8 = i_n * (-a[1] * a[1] + a[0] * a[4])
    return Kinematics(
        det=det,
        c=a,
        cinv=(c0, c1, c2, c1, c4, c5, c2, c5, c8),
        i_n=i_n,
        i_1=a[0] + a[4] + a[8],
    )


def ddot(a: Sequence[float], b: Sequence[float]) -> float:
    """Double contraction of two flat tensors of equal size."""
    return sum(x * y for x, y in zip(a, b, strict=True))


def addto(a: Sequence[float], b: Sequence[float]) -> list[float]:
    """Component-wise sum of two flat tensors of equal size."""
    return [x + y for x, y in zip(a, b, strict=True)]
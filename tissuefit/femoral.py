"""Fitting constants and the parameter penalty for femoral artery models."""

from __future__ import annotations

import math
from collections.abc import Sequence

P_FIBER = 0.001
P_ALPHA = 0.2
P_SMC_B = 0.2
P_COLLAGEN = 0.1
B_VISCO = 0.01
B_MODULUS = 0.01

W_HYST = 0.01
W_VISCO = 10.0

KIP = 0.155
KOP = 0.424285714285714

IDEAL_ALPHA = math.pi / 4


def penalty_body_4(
    pars: Sequence[float],
    fiber: Sequence[float],
    visco: Sequence[float],
    data: Sequence[float],
) -> float:
    """Penalty on fiber rotation and angle, the muscle exponent and the fractional orders.

    ``data`` holds the measured longitudinal and circumferential orders.
    """
    d_alpha = fiber[1] - IDEAL_ALPHA
    delta_l = visco[1] - data[0]
    delta_c = 0.5 * (visco[0] + visco[1]) - data[1]
    frac_alpha_weight = delta_l * delta_l + delta_c * delta_c
    return (
        P_FIBER * fiber[0] * fiber[0]
        + P_ALPHA * d_alpha * d_alpha
        + P_SMC_B * pars[3] * pars[3]
        + P_COLLAGEN * pars[3] * pars[3]
        + W_VISCO * frac_alpha_weight
    )
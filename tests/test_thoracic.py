import math

import pytest

from tissuefit import thoracic


class TraceLaw:
    """Returns the deformation tensor itself as stress."""

    def stress(self, kin, dt):
        return list(kin.c)


def test_quart_quad_below_data_is_scaled_square():
    assert thoracic.quart_quad_residual(1.0, 3.0, 2.0) == pytest.approx(
        thoracic.quadratic_residual(1.0, 3.0, 2.0) / 2.0
    )


def test_quart_quad_above_data_is_sixth_power():
    sq = thoracic.quadratic_residual(3.0, 1.0, 2.0)
    assert thoracic.quart_quad_residual(3.0, 1.0, 2.0) == pytest.approx(sq**3 / 2.0)


def test_quadratic_residual_is_symmetric():
    assert thoracic.quadratic_residual(1.5, 0.5, 9.0) == thoracic.quadratic_residual(
        0.5, 1.5, 1.0
    )


def test_penalty_body_null_is_zero():
    assert thoracic.penalty_body_null([1.0], [1.0, 2.0], [0.1, 0.2], [0.3, 0.4]) == 0.0


def test_penalty_body_standard_vanishes_at_ideal_values():
    fiber = [0.0, math.pi / 4]
    visco = [0.0, 0.2]
    data = [0.0, 0.4]
    assert thoracic.penalty_body_standard([], fiber, visco, data) == pytest.approx(0.0)


def test_penalty_body_standard_grows_with_fiber_rotation():
    data = [0.0, 0.4]
    visco = [0.0, 0.2]
    low = thoracic.penalty_body_standard([], [0.1, math.pi / 4], visco, data)
    high = thoracic.penalty_body_standard([], [0.5, math.pi / 4], visco, data)
    assert high > low > 0.0


def test_penalty_ensemble_null_is_zero():
    assert thoracic.penalty_ensemble_null([1.0], [0.3, 0.4], [0.1, 0.2]) == 0.0


def test_penalty_ensemble3_vanishes_when_orders_match():
    assert thoracic.penalty_ensemble3([], [0.3, 0.2], [0.1, 0.4]) == pytest.approx(0.0)


def test_penalty_ensemble3_is_symmetric_in_mismatch():
    plus = thoracic.penalty_ensemble3([], [0.5, 0.2], [0.1, 0.4])
    minus = thoracic.penalty_ensemble3([], [0.1, 0.2], [0.1, 0.4])
    assert plus == pytest.approx(minus)
    assert plus > 0.0


def test_hysteresis_body_matches_area():
    assert thoracic.hysteresis_body([1.0, 2.0], [3.0, 4.0], 11.0) == pytest.approx(0.0)


def test_hysteresis_body_squares_error():
    assert thoracic.hysteresis_body([1.0, 2.0], [3.0, 4.0], 10.0) == pytest.approx(1.0)


def test_hysteresis_body_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        thoracic.hysteresis_body([1.0, 2.0], [3.0], 0.0)


def test_hysteresis_body_null_is_zero():
    assert thoracic.hysteresis_body_null([1.0], [2.0], 5.0) == 0.0


def test_ensemble_simulate_uses_every_step_and_trace():
    strain = [1.0, 1.1, 1.2]
    out = thoracic.ensemble_simulate(TraceLaw(), strain, [0.0, 0.1, 0.1])
    assert out == pytest.approx([2.0 * s for s in strain])


def test_ensemble_simulate_requires_enough_dt():
    with pytest.raises(ValueError):
        thoracic.ensemble_simulate(TraceLaw(), [1.0, 1.1], [0.0])


def test_ensemble_residual_sums_norm():
    res = thoracic.ensemble_residual(
        thoracic.quadratic_residual, [1.0, 1.0], [0.0, 1.0], [1.0, 3.0]
    )
    assert res == pytest.approx(
        thoracic.quadratic_residual(1.0, 0.0, 1.0)
        + thoracic.quadratic_residual(3.0, 1.0, 1.0)
    )


def test_calc_ensemble_objective_zero_for_perfect_fit():
    strain = [1.0, 1.1, 1.2]
    stress = [2.0 * s for s in strain]
    value = thoracic.calc_ensemble_objective(
        TraceLaw(),
        thoracic.quadratic_residual,
        thoracic.hysteresis_body,
        thoracic.penalty_ensemble3,
        [1.0],
        [0.3, 0.2],
        [0.1, 0.4],
        strain,
        stress,
        [0.0, 0.1, 0.1],
        [0.0, 0.0, 0.0],
        0.0,
    )
    assert value == pytest.approx(0.0)


def test_calc_ensemble_objective_weights_hysteresis_by_ten():
    strain = [1.0, 1.1]
    stress = [2.0 * s for s in strain]
    value = thoracic.calc_ensemble_objective(
        TraceLaw(),
        thoracic.quadratic_residual,
        thoracic.hysteresis_body,
        thoracic.penalty_ensemble_null,
        [1.0],
        [0.0, 0.0],
        [0.0, 0.0],
        strain,
        stress,
        [0.0, 0.1],
        [0.0, 0.0],
        1.0,
    )
    assert value == pytest.approx(10.0)


def test_calc_ensemble_objective_scales_with_penalty():
    strain = [1.0, 1.1]
    stress = [0.0, 0.0]
    args = (
        [1.0],
        [0.5, 0.2],
        [0.1, 0.4],
        strain,
        stress,
        [0.0, 0.1],
        [0.0, 0.0],
        0.0,
    )
    base = thoracic.calc_ensemble_objective(
        TraceLaw(),
        thoracic.quadratic_residual,
        thoracic.hysteresis_body_null,
        thoracic.penalty_ensemble_null,
        *args,
    )
    penalised = thoracic.calc_ensemble_objective(
        TraceLaw(),
        thoracic.quadratic_residual,
        thoracic.hysteresis_body_null,
        thoracic.penalty_ensemble3,
        *args,
    )
    factor = 1.0 + thoracic.penalty_ensemble3([1.0], [0.5, 0.2], [0.1, 0.4])
    assert penalised == pytest.approx(base * factor)
    assert penalised > base
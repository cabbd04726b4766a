import math

import pytest

from tissuefit.kinematics import (
    ID_2D,
    ID_3D,
    addto,
    ddot,
    deformation_1d,
    deformation_2d,
    deformation_3d,
    deformation_ensemble_2d,
    determinant_3d_tensor,
)


def _matmul(a, b, n):
    return [sum(a[i * n + k] * b[k * n + j] for k in range(n)) for i in range(n) for j in range(n)]


def test_identity_2d_is_undeformed():
    kin = deformation_2d(ID_2D)
    assert kin.det == 1.0
    assert kin.cinv == ID_2D
    assert kin.i_n == 1.0
    assert kin.i_1m3 == pytest.approx(0.0)


def test_2d_inverse_is_inverse():
    c = (1.3, 0.2, 0.2, 0.9)
    kin = deformation_2d(c)
    assert _matmul(c, kin.cinv, 2) == pytest.approx(list(ID_2D))
    assert kin.i_n * kin.det == pytest.approx(1.0)
    assert kin.i_1 == pytest.approx(c[0] + c[3] + kin.i_n)


def test_ensemble_matches_equibiaxial_2d():
    e = 1.2
    ens = deformation_ensemble_2d(e)
    full = deformation_2d((e, 0.0, 0.0, e))
    assert ens.det == pytest.approx(full.det)
    assert ens.cinv == pytest.approx(full.cinv)
    assert ens.i_1 == pytest.approx(full.i_1)
    assert ens.c == full.c


def test_1d_incompressibility():
    kin = deformation_1d(1.44)
    assert kin.i_n ** 2 * kin.det == pytest.approx(1.0)
    assert kin.c[0] * kin.cinv[0] == pytest.approx(1.0)
    assert kin.i_1 == pytest.approx(1.44 + 2 * kin.i_n)
    assert kin.size == 1


def test_3d_inverse_of_symmetric_tensor():
    c = (2.0, 0.3, 0.1, 0.3, 1.5, 0.2, 0.1, 0.2, 1.1)
    kin = deformation_3d(c)
    assert _matmul(c, kin.cinv, 3) == pytest.approx(list(ID_3D))
    assert kin.i_1 == pytest.approx(c[0] + c[4] + c[8])


def test_determinant_diagonal():
    assert determinant_3d_tensor((2, 0, 0, 0, 3, 0, 0, 0, 4)) == pytest.approx(24.0)
    assert determinant_3d_tensor(ID_3D) == 1.0


def test_ddot_with_identity_is_trace():
    a = (1.5, 0.4, 0.4, 2.5)
    assert ddot(a, ID_2D) == pytest.approx(a[0] + a[3])


def test_addto_sums_componentwise():
    a = (1.0, 2.0, 3.0, 4.0)
    assert addto(a, ID_2D) == [2.0, 2.0, 3.0, 5.0]


def test_wrong_lengths_raise():
    with pytest.raises(ValueError):
        deformation_2d((1.0, 0.0, 1.0))
    with pytest.raises(ValueError):
        deformation_3d(ID_2D)
    with pytest.raises(ValueError):
        ddot((1.0, 2.0), (1.0,))


def test_singular_2d_raises():
    with pytest.raises(ZeroDivisionError):
        deformation_2d((1.0, 1.0, 1.0, 1.0))


def test_1d_stretch_sqrt_used():
    kin = deformation_1d(4.0)
    assert kin.i_n == pytest.approx(1.0 / math.sqrt(4.0))
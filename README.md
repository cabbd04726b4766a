# tissuefit

Building blocks for fitting constitutive models of soft biological tissue,
such as arterial wall or cardiac trabeculae, to mechanical test data.

The package uses only the standard library. It contains these modules:

- `tissuefit.kinematics`: the frozen dataclass `Kinematics`, which holds a
  precomputed deformation state. Its fields are `det`, `c`, `cinv`, `i_n`
  and `i_1`, and it has the properties `i_1m3` and `size`. You build one with
  `deformation_1d(stretch)`, `deformation_2d(c)`,
  `deformation_ensemble_2d(eb_strain)` or `deformation_3d(c)`. Tensors are
  flat and row-major: four values for 2D and nine for 3D. A `ValueError` is
  raised when the number of components is wrong. The module also has the
  helpers `determinant_3d_tensor`, `ddot` and `addto`.
- `tissuefit.kernels`: three density kernels, `TriweightKernel`,
  `GaussianKernel` and `GammaKernel`. Each takes `mean`, a width and `n`,
  and has a `pdf(x)` method.
- `tissuefit.kde`: `kde_gaussian_estimate(mean, bandwidth, x,
  bandwidth_factor)` and `kde_gaussian_bounded_estimate(mean, bandwidth, x,
  bandwidth_factor, bound_trigger)`. Both return the density at the points
  `x` as a list. Both `mean` and `x` must be sorted in ascending order.
- `tissuefit.templates`: tensor simulation with `simulate`, residual
  differences, per-protocol mean removal, weighted diagonal residual norms
  and hysteresis terms. These are combined in `calc_residual`.
- `tissuefit.trabeculae`: 1D simulation with a linear baseline drift
  (`simulate_general`), residual norms, and the objective
  `calc_objective_general`.
- `tissuefit.objective`: planar residual norms, penalty terms
  (`penalty_body_kappa` and `penalty_body_kappa_2`), fractional-order
  mismatch terms (`calculate_viscopart_body*`) and `lowerbound`. These are
  combined in `calc_residual_general`.
- `tissuefit.thoracic`: fitting constants, penalties, and the equibiaxial
  ensemble objective for the thoracic aorta. The ensemble functions are
  `ensemble_simulate`, `ensemble_residual` and `calc_ensemble_objective`.
- `tissuefit.femoral`: fitting constants and `penalty_body_4` for the
  femoral artery.

## Material laws

You supply the material law. A material law is any object with a
`stress(kin, dt)` method. The method receives a `Kinematics` and a time
step, and returns the stress components:

- 1 component for 1D tests.
- 4 components for planar tests.
- `dim * dim` components in general.

The package does not include any constitutive laws, such as neo-Hookean or
fiber models. It has no command-line program, and it has no optimiser. You
pass the objective functions to a minimiser of your choice.

## Installation

```
pip install .
```

To install with the test dependencies and run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from tissuefit.kinematics import deformation_2d
from tissuefit.templates import simulate


class NeoHookean:
    def __init__(self, mu):
        self.mu = mu

    def stress(self, kin, dt):
        return [self.mu * (a - kin.i_n * c) for a, c in zip((1, 0, 0, 1), kin.cinv)]


args = [1.0, 0.0, 0.0, 1.0, 1.1, 0.0, 0.0, 1.05]
stress = simulate(NeoHookean(10.0), deformation_2d, args, dt=[0.0, 0.1], dim=2)
```

The first time step is taken as the reference state, so its stress is left
at zero.
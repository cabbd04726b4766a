[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tissuefit"
version = "0.1.0"
description = "Kinematics, kernel density estimates and objective functions for fitting soft-tissue constitutive models"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "biomechanics",
    "constitutive models",
    "viscoelasticity",
    "parameter fitting",
    "kernel density estimation",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Medical Science Apps.",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tissuefit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true

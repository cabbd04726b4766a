"""Kinematics, density kernels and objective functions for fitting soft-tissue models."""

__version__ = "0.1.0"

__all__ = [
    "kinematics",
    "kernels",
    "kde",
    "templates",
    "trabeculae",
    "objective",
    "thoracic",
    "femoral",
]
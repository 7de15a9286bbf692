from .base import BasePriceSolver
from .iterative import IterativePriceSolver
from .piecewise import PiecewisePriceSolver

__all__ = [
    "BasePriceSolver",
    "IterativePriceSolver",
    "PiecewisePriceSolver",
]

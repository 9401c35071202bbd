"""Fitting algorithms: windowed error metric and exhaustive grid search.

This package hosts the numerical core used by the fitting pipeline.
"""

from .fit_error import REGULARIZATION, compute_error, residuals
from .grid_search import FitResult, grid_search, grid_search_from_config

__all__ = [
    "REGULARIZATION",
    "compute_error",
    "residuals",
    "FitResult",
    "grid_search",
    "grid_search_from_config",
]

"""Drude free-electron fits to tabulated metal optical constants."""

from .algorithms import FitResult, compute_error, grid_search, grid_search_from_config
from .config import FitConfig, FitWindow, ParameterGrid
from .dielectric.models.drude import drude_evaluator, drude_nk
from .errors import DomainError, DrudeFitError, EmptySearchSpaceError, InvalidInputError
from .file_utils import read_nk_table, write_nk_table
from .samples import OpticalSampleSet

__version__ = "0.1.0"

__all__ = [
    "FitResult",
    "compute_error",
    "grid_search",
    "grid_search_from_config",
    "FitConfig",
    "FitWindow",
    "ParameterGrid",
    "drude_evaluator",
    "drude_nk",
    "DomainError",
    "DrudeFitError",
    "EmptySearchSpaceError",
    "InvalidInputError",
    "read_nk_table",
    "write_nk_table",
    "OpticalSampleSet",
]

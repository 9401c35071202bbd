"""Pytest configuration and fixtures for drudefit tests."""

import numpy as np
import pytest

from drudefit.config import FitWindow, ParameterGrid
from drudefit.dielectric.models.drude import drude_nk
from drudefit.samples import OpticalSampleSet


@pytest.fixture
def example_triples():
    """Three silver-like (λ, n, k) rows."""
    return [(400.0, 0.05, 2.4), (500.0, 0.05, 3.0), (600.0, 0.05, 3.6)]


@pytest.fixture
def example_samples(example_triples):
    return OpticalSampleSet.from_triples(example_triples, name="Silver")


@pytest.fixture
def example_window():
    return FitWindow(1e15, 4e15)


@pytest.fixture
def example_grid():
    """2 x 2 grid: omega_p in {1e15, 2e15}, gamma in {1e13, 2e13}."""
    return ParameterGrid(
        omega_p_min=1e15, omega_p_max=2e15, omega_p_step=1e15,
        gamma_min=1e13, gamma_max=2e13, gamma_step=1e13,
    )


@pytest.fixture
def recovery_grid():
    """Grid bracketing silver with the generating parameters on grid nodes."""
    return ParameterGrid(
        omega_p_min=1.30e16, omega_p_max=1.40e16, omega_p_step=1e14,
        gamma_min=1e13, gamma_max=6e13, gamma_step=5e12,
    )


@pytest.fixture
def drude_truth(recovery_grid):
    """Generating parameters, taken from the grid so they are hit exactly."""
    return {
        "eps_inf": 4.3,
        "omega_p": float(recovery_grid.omega_p_values()[6]),
        "gamma": float(recovery_grid.gamma_values()[4]),
    }


@pytest.fixture
def synthetic_silver(drude_truth):
    """Noise-free Drude metal tabulated from 400 to 900 nm."""
    wavelength = np.arange(400.0, 901.0, 10.0)
    probe = OpticalSampleSet(wavelength, np.ones_like(wavelength), np.ones_like(wavelength))
    n, k = drude_nk(probe.omega, drude_truth["eps_inf"], drude_truth["omega_p"], drude_truth["gamma"])
    return OpticalSampleSet(wavelength, n, k, name="synthetic Ag")


@pytest.fixture
def wide_window():
    """Covers the whole 400-900 nm range."""
    return FitWindow(1e15, 5e15)


@pytest.fixture
def nk_file(tmp_path, example_triples):
    path = tmp_path / "Ag_test.txt"
    path.write_text("".join(f"{wl},{n},{k}\n" for wl, n, k in example_triples))
    return path


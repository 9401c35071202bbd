"""
Windowed, normalized least-squares error between a dispersion model and data.

For every sample whose ω lies inside the fit window (inclusive bounds):

    r_i = [(Re ε_model − ε₁)² + (Im ε_model − ε₂)²] / (ε₁² + ε₂² + 1e-12)

and the error is Σ r_i. It is a sum, not a mean: errors computed over windows
holding different numbers of samples are not directly comparable. A window
that holds no samples gives 0.0, which callers must not read as a good fit.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from drudefit.config import FitWindow
from drudefit.dielectric import get_model
from drudefit.samples import OpticalSampleSet

logger = logging.getLogger(__name__)

# Keeps the normalization finite for samples with ε ≈ 0.
REGULARIZATION = 1e-12


def residuals(
    samples: OpticalSampleSet,
    eps_inf: float,
    omega_p: float,
    gamma: float,
    window: FitWindow,
    model: str = "Drude",
) -> NDArray[np.float64]:
    """
    Per-sample normalized squared residuals.

    Parameters
    ----------
    samples : OpticalSampleSet
        Measured data.
    eps_inf, omega_p, gamma : float
        Model parameters.
    window : FitWindow
        Only samples with ω inside the window are compared.
    model : str
        Registered dispersion model name.

    Returns
    -------
    np.ndarray
        Array aligned with ``samples``; entries outside the window are 0.
    """
    evaluator = get_model(model).evaluator
    out = np.zeros(len(samples), dtype=float)
    omega = samples.omega
    mask = window.contains(omega)

    # Evaluated even for an empty window so bad parameters are still rejected.
    eps_model = np.asarray(evaluator(omega[mask], eps_inf, omega_p, gamma), dtype=complex)
    if not np.any(mask):
        return out

    eps1 = samples.eps1[mask]
    eps2 = samples.eps2[mask]

    d1 = eps_model.real - eps1
    d2 = eps_model.imag - eps2
    out[mask] = (d1 * d1 + d2 * d2) / (eps1 * eps1 + eps2 * eps2 + REGULARIZATION)
    return out


def compute_error(
    samples: OpticalSampleSet,
    eps_inf: float,
    omega_p: float,
    gamma: float,
    window: FitWindow,
    model: str = "Drude",
) -> float:
    """Sum of normalized squared residuals over the fit window (0.0 if the window is empty)."""
    return float(np.sum(residuals(samples, eps_inf, omega_p, gamma, window, model=model)))


__all__ = ["REGULARIZATION", "residuals", "compute_error"]

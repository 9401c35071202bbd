from __future__ import annotations

from typing import Tuple, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from drudefit.dielectric.model_registry import ModelSpec, ParameterSpec, register_model
from drudefit.errors import DomainError


def _check_positive(name: str, value: float) -> None:
    if not np.isfinite(value) or value <= 0:
        raise DomainError(f"{name} must be a finite positive number, got {value!r}")


def drude_evaluator(
    omega: ArrayLike, eps_inf: float, omega_p: float, gamma: float
) -> Union[complex, NDArray[np.complex128]]:
    """Free-electron permittivity: ε(ω) = ε∞ − ωp² / (ω² + iγω).

    Scalar ``omega`` returns a Python complex, arrays return a complex array.
    Raises DomainError for ω ≤ 0 or any non-positive parameter.
    """
    _check_positive("eps_inf", eps_inf)
    _check_positive("omega_p", omega_p)
    _check_positive("gamma", gamma)

    w = np.asarray(omega, dtype=float)
    if np.any(~np.isfinite(w)) or np.any(w <= 0):
        raise DomainError("Drude model is only defined for finite omega > 0")

    den = w * w + 1j * gamma * w
    eps = eps_inf - (omega_p * omega_p) / den
    if w.ndim == 0:
        return complex(eps)
    return eps


def drude_nk(
    omega: ArrayLike, eps_inf: float, omega_p: float, gamma: float
) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Refractive index (n, k) of the Drude permittivity, for overlay on measured n, k."""
    eps = np.asarray(drude_evaluator(omega, eps_inf, omega_p, gamma), dtype=complex)
    mag = np.abs(eps)
    n = np.sqrt((mag + eps.real) / 2.0)
    k = np.sqrt((mag - eps.real) / 2.0)
    return n, k


register_model(
    ModelSpec(
        name="Drude",
        parameters=[
            ParameterSpec("eps_inf", "", (1.0, 20.0), fixed=True),
            ParameterSpec("omega_p", "rad/s", (1e14, 1e17)),
            ParameterSpec("gamma", "1/s", (1e11, 1e16)),
        ],
        evaluator=drude_evaluator,
        description="Free-electron (Drude) metal permittivity.",
    )
)

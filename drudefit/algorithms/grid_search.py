"""
Exhaustive grid search for the Drude plasma frequency and damping rate.

Candidates are enumerated row-major: ω_p ascending in the outer loop, γ
ascending in the inner loop. The incumbent is only replaced on a strictly
smaller error, so among equal errors the first enumerated candidate wins.

The search is embarrassingly parallel. With ``workers > 1`` the ω_p rows are
split into contiguous blocks, each block reports its local best as
``(error, enumeration_index, omega_p, gamma)``, and the global winner is the
lexicographic minimum of ``(error, enumeration_index)``. Parallel and
sequential runs therefore select the same candidate.
"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, replace
from typing import Optional, Tuple

import numpy as np
import pandas as pd
from numpy.typing import NDArray
from scipy.constants import e, hbar

from drudefit.algorithms.fit_error import compute_error
from drudefit.config import FitConfig, FitWindow, ParameterGrid
from drudefit.dielectric import get_model
from drudefit.errors import DomainError, EmptySearchSpaceError, InvalidInputError
from drudefit.samples import OpticalSampleSet

logger = logging.getLogger(__name__)

# (error, enumeration_index, omega_p, gamma)
Candidate = Tuple[float, int, float, float]


@dataclass(frozen=True, eq=False)
class FitResult:
    """Best-fit parameters plus the model curve at every sample's ω (not just the window)."""

    best_omega_p: float
    best_gamma: float
    best_error: float
    model_eps1: NDArray[np.float64]
    model_eps2: NDArray[np.float64]
    eps_inf: float
    n_candidates: int
    n_in_window: int
    model: str = "Drude"

    def __post_init__(self) -> None:
        for name in ("model_eps1", "model_eps2"):
            arr = np.array(getattr(self, name), dtype=float)
            arr.flags.writeable = False
            object.__setattr__(self, name, arr)

    @property
    def model_epsilon(self) -> NDArray[np.complex128]:
        return self.model_eps1 + 1j * self.model_eps2

    @property
    def omega_p_ev(self) -> float:
        """ħω_p in eV."""
        return float(hbar * self.best_omega_p / e)

    @property
    def gamma_ev(self) -> float:
        """ħγ in eV."""
        return float(hbar * self.best_gamma / e)

    @property
    def is_degenerate(self) -> bool:
        """True when no sample fell inside the fit window (error is trivially 0)."""
        return self.n_in_window == 0

    def to_dataframe(self, samples: OpticalSampleSet) -> pd.DataFrame:
        """Measured and model permittivity side by side, one row per sample."""
        if len(samples) != self.model_eps1.size:
            raise InvalidInputError(
                f"Sample set has {len(samples)} points but the fit curve has {self.model_eps1.size}"
            )
        df = samples.to_dataframe()
        df["model_eps1"] = self.model_eps1
        df["model_eps2"] = self.model_eps2
        return df

    def get_report(self) -> str:
        report = (
            f"\n{' Drude Fit Report ':=^50}\n"
            f" ▸ Model:               {self.model} (eps_inf = {self.eps_inf:g})\n"
            f" ▸ Plasma frequency:    {self.best_omega_p:.4e} rad/s ({self.omega_p_ev:.3f} eV)\n"
            f" ▸ Damping rate:        {self.best_gamma:.4e} 1/s ({self.gamma_ev:.4f} eV)\n"
            f" ▸ Error (sum):         {self.best_error:.6g}\n"
            f" ▸ Samples in window:   {self.n_in_window}\n"
            f" ▸ Candidates searched: {self.n_candidates}\n"
            f"{'=' * 50}"
        )
        return report


def _search_rows(
    samples: OpticalSampleSet,
    eps_inf: float,
    window: FitWindow,
    omega_p_values: NDArray[np.float64],
    gamma_values: NDArray[np.float64],
    row_offset: int,
    model: str,
) -> Optional[Candidate]:
    """Best candidate over a block of ω_p rows; ``None`` if no error was finite."""
    n_gamma = gamma_values.size
    best: Optional[Candidate] = None
    best_error = np.inf
    for i, omega_p in enumerate(omega_p_values):
        for j, gamma in enumerate(gamma_values):
            err = compute_error(samples, eps_inf, float(omega_p), float(gamma), window, model=model)
            if err < best_error:
                best_error = err
                best = (err, (row_offset + i) * n_gamma + j, float(omega_p), float(gamma))
        logger.debug(f"Row {row_offset + i}: omega_p={omega_p:.4e}, incumbent error={best_error:.6g}")
    return best


def _search_parallel(
    samples: OpticalSampleSet,
    eps_inf: float,
    window: FitWindow,
    omega_p_values: NDArray[np.float64],
    gamma_values: NDArray[np.float64],
    model: str,
    workers: int,
) -> Optional[Candidate]:
    blocks = [b for b in np.array_split(np.arange(omega_p_values.size), workers) if b.size]
    logger.debug(f"Splitting {omega_p_values.size} omega_p rows into {len(blocks)} blocks")

    with ProcessPoolExecutor(max_workers=len(blocks)) as executor:
        futures = [
            executor.submit(
                _search_rows, samples, eps_inf, window,
                omega_p_values[block], gamma_values, int(block[0]), model,
            )
            for block in blocks
        ]
        local_bests = [f.result() for f in futures]

    found = [c for c in local_bests if c is not None]
    if not found:
        return None
    return min(found, key=lambda cand: (cand[0], cand[1]))


def grid_search(
    samples: OpticalSampleSet,
    eps_inf: float,
    window: FitWindow,
    grid: ParameterGrid,
    model: str = "Drude",
    workers: Optional[int] = None,
) -> FitResult:
    """
    Exhaustively search ``grid`` for the (ω_p, γ) pair with minimum fit error.

    Parameters
    ----------
    samples : OpticalSampleSet
        Measured optical constants.
    eps_inf : float
        Fixed high-frequency permittivity.
    window : FitWindow
        Angular-frequency window used by the error metric.
    grid : ParameterGrid
        Candidate (ω_p, γ) values.
    model : str
        Registered dispersion model name.
    workers : int, optional
        Number of worker processes. ``None`` or 1 runs sequentially.

    Returns
    -------
    FitResult

    Raises
    ------
    EmptySearchSpaceError
        If the grid enumerates no candidates.
    DomainError
        If ``eps_inf`` is not positive, or no candidate produced a finite error.
    """
    if not np.isfinite(eps_inf) or eps_inf <= 0:
        raise DomainError(f"eps_inf must be a finite positive number, got {eps_inf!r}")
    if workers is not None and workers < 1:
        raise InvalidInputError(f"workers must be >= 1, got {workers!r}")

    omega_p_values = grid.omega_p_values()
    gamma_values = grid.gamma_values()
    n_candidates = omega_p_values.size * gamma_values.size
    if n_candidates == 0:
        raise EmptySearchSpaceError(
            f"Parameter grid is empty (omega_p: {omega_p_values.size} values, gamma: {gamma_values.size} values)"
        )

    spec = get_model(model)
    covered = {
        "eps_inf": (eps_inf, eps_inf),
        "omega_p": (float(omega_p_values[0]), float(omega_p_values[-1])),
        "gamma": (float(gamma_values[0]), float(gamma_values[-1])),
    }
    for name, (lo, hi) in covered.items():
        if spec.out_of_bounds(name, lo, hi):
            logger.warning(
                f"{name} range [{lo:.4e}, {hi:.4e}] is outside the registered bounds of the {model} model"
            )

    n_in_window = int(np.count_nonzero(samples.in_window(window)))
    if n_in_window == 0:
        logger.warning(
            f"No samples inside fit window [{window.omega_min:.3e}, {window.omega_max:.3e}] rad/s; "
            f"every candidate scores 0.0"
        )

    label = samples.name or "sample set"
    logger.info(
        f"Grid search on {label}: {n_candidates} candidates "
        f"({omega_p_values.size} omega_p x {gamma_values.size} gamma), {n_in_window} samples in window"
    )

    if workers is None or workers == 1:
        best = _search_rows(samples, eps_inf, window, omega_p_values, gamma_values, 0, model)
    else:
        best = _search_parallel(samples, eps_inf, window, omega_p_values, gamma_values, model, workers)

    if best is None:
        raise DomainError("No candidate in the parameter grid produced a finite fit error")

    best_error, best_index, best_omega_p, best_gamma = best
    row, col = divmod(best_index, gamma_values.size)
    if row in (0, omega_p_values.size - 1) or col in (0, gamma_values.size - 1):
        logger.warning(
            f"Best candidate (omega_p={best_omega_p:.4e}, gamma={best_gamma:.4e}) lies on the grid edge; "
            f"consider widening the search range"
        )

    eps_model = np.asarray(
        spec.evaluator(samples.omega, eps_inf, best_omega_p, best_gamma), dtype=complex
    )
    logger.info(f"Best fit: omega_p={best_omega_p:.4e} rad/s, gamma={best_gamma:.4e} 1/s, error={best_error:.6g}")

    return FitResult(
        best_omega_p=best_omega_p,
        best_gamma=best_gamma,
        best_error=float(best_error),
        model_eps1=eps_model.real,
        model_eps2=eps_model.imag,
        eps_inf=float(eps_inf),
        n_candidates=int(n_candidates),
        n_in_window=n_in_window,
        model=model,
    )


def grid_search_from_config(
    samples: OpticalSampleSet, config: FitConfig, workers: Optional[int] = None
) -> FitResult:
    """Run :func:`grid_search` with the c, window, grid and ε∞ of ``config``."""
    if samples.speed_of_light != config.speed_of_light:
        samples = replace(samples, speed_of_light=config.speed_of_light)
    return grid_search(samples, config.eps_inf, config.window, config.grid, workers=workers)


__all__ = ["Candidate", "FitResult", "grid_search", "grid_search_from_config"]

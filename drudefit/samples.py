"""
Measured optical constants of a metal and the quantities derived from them.

An :class:`OpticalSampleSet` wraps one tabulated (λ, n, k) data set. The
angular frequency, photon energy and complex permittivity are derived on
access from the stored arrays, so index ``i`` always refers to the same
physical sample in every sequence:

    ω  = 2π c / (λ · 1e-9)      [rad/s]
    E  = 1240 / λ               [eV]
    ε₁ = n² − k²,  ε₂ = 2nk
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np
import pandas as pd
from numpy.typing import ArrayLike, NDArray
from scipy.constants import c

from drudefit.config import FitWindow
from drudefit.errors import InvalidInputError

# hc in eV·nm, rounded the way spectroscopists usually quote it.
HC_EV_NM = 1240.0


def _frozen_array(values: ArrayLike, name: str) -> NDArray[np.float64]:
    try:
        arr = np.array(values, dtype=float).reshape(-1)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"{name} is not numeric: {e}") from e
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class OpticalSampleSet:
    """
    Immutable, index-aligned table of measured optical constants.

    Parameters
    ----------
    wavelength : array_like
        Vacuum wavelength in nm, strictly positive. Callers usually pass it in
        increasing order; that is assumed but not enforced.
    n : array_like
        Refractive index, non-negative.
    k : array_like
        Extinction coefficient, non-negative.
    name : str
        Material label used in logs and reports.
    speed_of_light : float
        Value of c (m/s) used for the angular frequency.
    """

    wavelength: NDArray[np.float64]
    n: NDArray[np.float64]
    k: NDArray[np.float64]
    name: str = ""
    speed_of_light: float = c

    def __post_init__(self) -> None:
        wavelength = _frozen_array(self.wavelength, "wavelength")
        n = _frozen_array(self.n, "n")
        k = _frozen_array(self.k, "k")

        if wavelength.size == 0:
            raise InvalidInputError("Sample set is empty")
        if not (wavelength.size == n.size == k.size):
            raise InvalidInputError(
                f"Input arrays must have the same length "
                f"(wavelength={wavelength.size}, n={n.size}, k={k.size})"
            )
        for label, arr in (("wavelength", wavelength), ("n", n), ("k", k)):
            if np.any(~np.isfinite(arr)):
                raise InvalidInputError(f"{label} contains non-finite values")
        if np.any(wavelength <= 0):
            raise InvalidInputError("Wavelengths must be positive")
        if np.any(n < 0) or np.any(k < 0):
            raise InvalidInputError("n and k must be non-negative")
        if not np.isfinite(self.speed_of_light) or self.speed_of_light <= 0:
            raise InvalidInputError(f"speed_of_light must be positive, got {self.speed_of_light!r}")

        object.__setattr__(self, "wavelength", wavelength)
        object.__setattr__(self, "n", n)
        object.__setattr__(self, "k", k)
        object.__setattr__(self, "speed_of_light", float(self.speed_of_light))

    # ------------------
    # Constructors
    # ------------------

    @classmethod
    def from_triples(
        cls,
        triples: Iterable[Tuple[float, float, float]],
        name: str = "",
        speed_of_light: float = c,
    ) -> "OpticalSampleSet":
        """Build from an iterable of ``(wavelength_nm, n, k)`` rows."""
        rows = [tuple(row) for row in triples]
        if not rows:
            raise InvalidInputError("Sample set is empty")
        bad = [i for i, row in enumerate(rows) if len(row) != 3]
        if bad:
            raise InvalidInputError(f"Rows must be (wavelength, n, k) triples; row {bad[0]} has {len(rows[bad[0]])} fields")
        wavelength, n, k = zip(*rows)
        return cls(wavelength, n, k, name=name, speed_of_light=speed_of_light)

    @classmethod
    def from_dataframe(
        cls,
        df: pd.DataFrame,
        wavelength_column: str = "wavelength",
        n_column: str = "n",
        k_column: str = "k",
        name: str = "",
        speed_of_light: float = c,
    ) -> "OpticalSampleSet":
        """
        Build from a pandas DataFrame.

        Columns are coerced to numbers; any non-numeric cell is an error rather
        than a silently dropped row.
        """
        for col in (wavelength_column, n_column, k_column):
            if col not in df.columns:
                raise InvalidInputError(f"Column '{col}' not found in DataFrame")

        wavelength = pd.to_numeric(df[wavelength_column], errors="coerce").to_numpy()
        n = pd.to_numeric(df[n_column], errors="coerce").to_numpy()
        k = pd.to_numeric(df[k_column], errors="coerce").to_numpy()

        if np.any(np.isnan(wavelength)) or np.any(np.isnan(n)) or np.any(np.isnan(k)):
            raise InvalidInputError("DataFrame contains non-numeric or NaN values")

        return cls(wavelength, n, k, name=name, speed_of_light=speed_of_light)

    # ------------------
    # Derived quantities
    # ------------------

    def __len__(self) -> int:
        return int(self.wavelength.size)

    @property
    def omega(self) -> NDArray[np.float64]:
        """Angular frequency in rad/s."""
        return 2.0 * np.pi * self.speed_of_light / (self.wavelength * 1e-9)

    @property
    def energy(self) -> NDArray[np.float64]:
        """Photon energy in eV."""
        return HC_EV_NM / self.wavelength

    @property
    def eps1(self) -> NDArray[np.float64]:
        return self.n * self.n - self.k * self.k

    @property
    def eps2(self) -> NDArray[np.float64]:
        return 2.0 * self.n * self.k

    @property
    def epsilon(self) -> NDArray[np.complex128]:
        return self.eps1 + 1j * self.eps2

    @property
    def min_wavelength(self) -> float:
        return float(np.min(self.wavelength))

    @property
    def max_wavelength(self) -> float:
        return float(np.max(self.wavelength))

    def in_window(self, window: FitWindow) -> NDArray[np.bool_]:
        """Boolean mask of samples whose ω lies inside ``window`` (inclusive)."""
        return window.contains(self.omega)

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame({
            "wavelength": self.wavelength,
            "n": self.n,
            "k": self.k,
            "omega": self.omega,
            "energy": self.energy,
            "eps1": self.eps1,
            "eps2": self.eps2,
        })


__all__ = ["OpticalSampleSet", "HC_EV_NM"]

"""Immutable fit configuration: physical constants, fit window and parameter grid.

Nothing in here is module-level mutable state, so several fits (different
metals, different windows) can run side by side with their own ``FitConfig``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Iterator, Mapping, Tuple

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.constants import c

from drudefit.errors import DomainError, InvalidInputError

# Relative slack on (max - min) / step so that a max reached by exact
# multiples of the step is still enumerated.
_STEP_SLACK = 1e-9

# Upper limit on values along one grid axis.
MAX_AXIS_POINTS = 1_000_000


def _require_positive(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise DomainError(f"{name} must be a finite positive number, got {value!r}")
    return value


def _axis_values(start: float, stop: float, step: float) -> NDArray[np.float64]:
    if start >= stop:
        return np.empty(0, dtype=float)
    ratio = (stop - start) / step
    if not math.isfinite(ratio) or ratio >= MAX_AXIS_POINTS:
        raise DomainError(
            f"Grid axis [{start!r}, {stop!r}] with step {step!r} exceeds {MAX_AXIS_POINTS} points"
        )
    count = int(math.floor(ratio + _STEP_SLACK)) + 1
    return start + np.arange(count, dtype=float) * step


@dataclass(frozen=True)
class FitWindow:
    """Inclusive angular-frequency interval [omega_min, omega_max] in rad/s."""

    omega_min: float
    omega_max: float

    def __post_init__(self) -> None:
        lo, hi = float(self.omega_min), float(self.omega_max)
        if not (math.isfinite(lo) and math.isfinite(hi)):
            raise InvalidInputError(f"Fit window bounds must be finite, got [{lo!r}, {hi!r}]")
        if lo >= hi:
            raise InvalidInputError(f"Fit window requires omega_min < omega_max, got [{lo!r}, {hi!r}]")
        object.__setattr__(self, "omega_min", lo)
        object.__setattr__(self, "omega_max", hi)

    def contains(self, omega: ArrayLike) -> NDArray[np.bool_]:
        omega = np.asarray(omega, dtype=float)
        return (omega >= self.omega_min) & (omega <= self.omega_max)


@dataclass(frozen=True)
class ParameterGrid:
    """
    Fixed-step grid over plasma frequency and damping rate.

    Parameters
    ----------
    omega_p_min, omega_p_max, omega_p_step : float
        Plasma frequency range and increment (rad/s). ``max`` is inclusive.
    gamma_min, gamma_max, gamma_step : float
        Damping rate range and increment (1/s). ``max`` is inclusive.

    Notes
    -----
    A range with ``min >= max`` enumerates nothing; the grid search turns that
    into :class:`~drudefit.errors.EmptySearchSpaceError`. Steps and minima must
    be strictly positive, otherwise :class:`~drudefit.errors.DomainError`.
    """

    omega_p_min: float
    omega_p_max: float
    omega_p_step: float
    gamma_min: float
    gamma_max: float
    gamma_step: float

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name.endswith("_max"):
                value = float(value)
                if not math.isfinite(value):
                    raise DomainError(f"{f.name} must be finite, got {value!r}")
            else:
                value = _require_positive(f.name, value)
            object.__setattr__(self, f.name, value)

    def omega_p_values(self) -> NDArray[np.float64]:
        return _axis_values(self.omega_p_min, self.omega_p_max, self.omega_p_step)

    def gamma_values(self) -> NDArray[np.float64]:
        return _axis_values(self.gamma_min, self.gamma_max, self.gamma_step)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.omega_p_values().size, self.gamma_values().size

    @property
    def size(self) -> int:
        rows, cols = self.shape
        return rows * cols

    def candidates(self) -> Iterator[Tuple[int, float, float]]:
        """Yield ``(index, omega_p, gamma)`` with omega_p outer, gamma inner, both ascending."""
        gammas = self.gamma_values()
        index = 0
        for omega_p in self.omega_p_values():
            for gamma in gammas:
                yield index, float(omega_p), float(gamma)
                index += 1


def _default_window() -> FitWindow:
    return FitWindow(1.0e15, 4.0e15)


def _default_grid() -> ParameterGrid:
    # Brackets the free-electron response of silver (ħωp ≈ 9 eV).
    return ParameterGrid(
        omega_p_min=1.0e16, omega_p_max=1.6e16, omega_p_step=1.0e13,
        gamma_min=1.0e13, gamma_max=1.0e14, gamma_step=1.0e12,
    )


_WINDOW_KEYS = ("omega_min", "omega_max")
_GRID_KEYS = tuple(f.name for f in fields(ParameterGrid))
_SCALAR_KEYS = ("speed_of_light", "eps_inf")


@dataclass(frozen=True)
class FitConfig:
    """Everything a grid search needs besides the samples themselves."""

    speed_of_light: float = c
    eps_inf: float = 4.3
    window: FitWindow = field(default_factory=_default_window)
    grid: ParameterGrid = field(default_factory=_default_grid)

    def __post_init__(self) -> None:
        object.__setattr__(self, "speed_of_light", _require_positive("speed_of_light", self.speed_of_light))
        object.__setattr__(self, "eps_inf", _require_positive("eps_inf", self.eps_inf))

    @classmethod
    def from_dict(cls, options: Mapping[str, Any]) -> "FitConfig":
        """Build a config from flat option names; missing options keep their defaults."""
        known = set(_SCALAR_KEYS) | set(_WINDOW_KEYS) | set(_GRID_KEYS)
        unknown = sorted(set(options) - known)
        if unknown:
            raise InvalidInputError(f"Unknown configuration option(s): {', '.join(unknown)}")

        defaults = cls()
        window_args = {k: options.get(k, getattr(defaults.window, k)) for k in _WINDOW_KEYS}
        grid_args = {k: options.get(k, getattr(defaults.grid, k)) for k in _GRID_KEYS}
        return cls(
            speed_of_light=options.get("speed_of_light", defaults.speed_of_light),
            eps_inf=options.get("eps_inf", defaults.eps_inf),
            window=FitWindow(**window_args),
            grid=ParameterGrid(**grid_args),
        )

    def to_dict(self) -> Dict[str, float]:
        out: Dict[str, float] = {"speed_of_light": self.speed_of_light, "eps_inf": self.eps_inf}
        out.update({k: getattr(self.window, k) for k in _WINDOW_KEYS})
        out.update({k: getattr(self.grid, k) for k in _GRID_KEYS})
        return out


__all__ = ["FitWindow", "ParameterGrid", "FitConfig"]

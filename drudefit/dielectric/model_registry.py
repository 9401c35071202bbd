from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple


"""
Dispersion model registry

Models register a ``ModelSpec`` at import time; the grid search looks the
evaluator up by name. Only the Drude model ships with the package.
Parameter bounds mark the physically sensible range; the grid search warns
when a grid leaves them.
"""

@dataclass(frozen=True)
class ParameterSpec:
    name: str
    units: str
    bounds: Tuple[float, float]
    fixed: bool = False


@dataclass(frozen=True)
class ModelSpec:
    name: str
    parameters: List[ParameterSpec]
    evaluator: Callable[..., complex]
    description: str

    @property
    def free_parameters(self) -> List[str]:
        return [p.name for p in self.parameters if not p.fixed]

    def out_of_bounds(self, name: str, lo: float, hi: float) -> bool:
        """True if [lo, hi] leaves the registered bounds of parameter ``name``."""
        for p in self.parameters:
            if p.name == name:
                return lo < p.bounds[0] or hi > p.bounds[1]
        return False


REGISTRY: Dict[str, ModelSpec] = {}


def register_model(spec: ModelSpec) -> None:
    REGISTRY[spec.name] = spec


def get_model(name: str) -> ModelSpec:
    try:
        return REGISTRY[name]
    except KeyError:
        raise KeyError(f"Unknown dispersion model {name!r}; registered: {sorted(REGISTRY)}") from None

"""Dispersion models and their registry."""

from .model_registry import REGISTRY, ModelSpec, ParameterSpec, get_model, register_model
from .models import drude  # noqa: F401  (registers "Drude")

__all__ = ["REGISTRY", "ModelSpec", "ParameterSpec", "get_model", "register_model"]

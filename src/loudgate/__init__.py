"""Public package exports for loudgate with lazy imports."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = [
    "ConfigurationError",
    "FilterClass",
    "FilterShape",
    "IIRFilterSpec",
    "Loudness",
    "LoudnessReport",
    "LoudnessValidationError",
    "current_peak",
    "generate_coefficients",
    "measure",
    "normalize_loudness",
    "normalize_loudness_scale",
    "normalize_peak",
    "normalize_peak_scale",
    "stages_for",
]

_EXPORT_MODULES: dict[str, str] = {
    "ConfigurationError": "loudgate.errors",
    "FilterClass": "loudgate.filters",
    "FilterShape": "loudgate.filters",
    "IIRFilterSpec": "loudgate.filters",
    "Loudness": "loudgate.analyzer",
    "LoudnessReport": "loudgate.core",
    "LoudnessValidationError": "loudgate.errors",
    "current_peak": "loudgate.normalization",
    "generate_coefficients": "loudgate.filters",
    "measure": "loudgate.core",
    "normalize_loudness": "loudgate.normalization",
    "normalize_loudness_scale": "loudgate.normalization",
    "normalize_peak": "loudgate.normalization",
    "normalize_peak_scale": "loudgate.normalization",
    "stages_for": "loudgate.filters",
}


def __getattr__(name: str) -> Any:
    if name not in _EXPORT_MODULES:
        raise AttributeError(f"module 'loudgate' has no attribute {name!r}")

    module = import_module(_EXPORT_MODULES[name])
    value = getattr(module, name)
    globals()[name] = value
    return value

from .biquad import BiquadFilter, BiquadState
from .coefficients import FilterShape, IIRFilterSpec, generate_coefficients
from .presets import FilterClass, StageMap, UNSUPPORTED_FILTER_CLASSES, stages_for

__all__ = [
    "BiquadFilter",
    "BiquadState",
    "FilterClass",
    "FilterShape",
    "IIRFilterSpec",
    "StageMap",
    "UNSUPPORTED_FILTER_CLASSES",
    "generate_coefficients",
    "stages_for",
]

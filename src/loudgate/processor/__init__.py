from .base import BaseProcessor
from .loudness_comp import LoudnessCompProcessor
from .peak_normalize import PeakNormalizeProcessor

__all__ = [
    "BaseProcessor",
    "LoudnessCompProcessor",
    "PeakNormalizeProcessor",
]

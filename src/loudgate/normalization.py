"""Peak and loudness normalization of channel-first buffers.

Every function here is a pure scalar or buffer transform: no weighting filters
are applied and input buffers are never modified. Callers normalizing from a
measured value must make sure it is finite (and that the peak is non-zero)
before computing a gain.
"""

from __future__ import annotations

import numpy as np

from .audio_contract import BufferLike, as_loudness_buffer
from .errors import LoudnessValidationError


def db_to_amplitude(db: float) -> float:
    if db == 0:
        return 1.0
    if db == -np.inf:
        return 0.0
    return float(10.0 ** (db / 20.0))


def amplitude_to_db(amplitude: float) -> float:
    with np.errstate(divide="ignore"):
        return float(20.0 * np.log10(amplitude))


def current_peak(data: BufferLike) -> float:
    """Largest absolute sample value across all channels."""

    buffer = as_loudness_buffer(data)
    if buffer.size == 0:
        raise LoudnessValidationError("empty_buffer", "Cannot measure the peak of an empty buffer.")
    return float(np.max(np.abs(buffer)))


def sample_peak_db(data: BufferLike) -> float:
    return amplitude_to_db(current_peak(data))


def normalize_peak_scale(data: BufferLike, target_db: float) -> float:
    """Gain that brings the sample peak of ``data`` to ``target_db`` dBFS."""

    return float(10.0 ** (target_db / 20.0)) / current_peak(data)


def normalize_peak(data: BufferLike, target_db: float) -> np.ndarray:
    buffer = as_loudness_buffer(data)
    return buffer * normalize_peak_scale(buffer, target_db)


def normalize_loudness_scale(input_loudness: float, target_loudness: float) -> float:
    """Linear gain that moves ``input_loudness`` to ``target_loudness``."""

    delta_loudness = target_loudness - input_loudness
    return float(10.0 ** (delta_loudness / 20.0))


def normalize_loudness(data: BufferLike, input_loudness: float, target_loudness: float) -> np.ndarray:
    buffer = as_loudness_buffer(data)
    return buffer * normalize_loudness_scale(input_loudness, target_loudness)

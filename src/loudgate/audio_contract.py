"""Buffer contract shared by the meter and the normalization utilities.

Invariants
----------
* Buffers are channel-first float64 arrays shaped ``(channels, samples)``.
* Loudness analysis accepts between ``MIN_CHANNEL_COUNT`` and
  ``MAX_CHANNEL_COUNT`` channels.
* Channels beyond the first three are surround channels and are weighted up.
"""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

from .errors import LoudnessValidationError

MIN_CHANNEL_COUNT = 1
MAX_CHANNEL_COUNT = 5

# Per-channel weighting: L, R, C, Ls, Rs.
CHANNEL_GAINS: tuple[float, ...] = (1.0, 1.0, 1.0, 1.41, 1.41)

DEFAULT_BLOCK_SIZE_S = 0.4
DEFAULT_TARGET_LUFS = -14.0

BufferLike = Union[np.ndarray, Sequence[Sequence[float]], Sequence[float]]


def as_loudness_buffer(data: BufferLike) -> np.ndarray:
    """Coerce ``data`` into a channel-first float64 array without mutating it."""

    buffer = np.array(data, dtype=np.float64)
    if buffer.ndim == 1:
        if buffer.size == 0:
            return buffer.reshape(0, 0)
        return buffer[np.newaxis, :]
    if buffer.ndim != 2:
        raise LoudnessValidationError(
            "invalid_shape",
            f"Audio must be a 1D mono or 2D channel-first array, got {buffer.ndim} dimensions.",
        )
    return buffer


def ensure_channel_count(buffer: np.ndarray) -> None:
    """Validate the channel count of a channel-first buffer."""

    channel_count = buffer.shape[0]
    if not (MIN_CHANNEL_COUNT <= channel_count <= MAX_CHANNEL_COUNT):
        raise LoudnessValidationError(
            "invalid_channel_count",
            f"Audio must have five channels or less and at least one, got {channel_count}.",
        )

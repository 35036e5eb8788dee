"""Integrated (gated) loudness measurement after ITU-R BS.1770."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import numpy as np

from ..audio_contract import (
    CHANNEL_GAINS,
    DEFAULT_BLOCK_SIZE_S,
    BufferLike,
    as_loudness_buffer,
    ensure_channel_count,
)
from ..errors import LoudnessValidationError
from ..filters import FilterClass, StageMap, stages_for

if TYPE_CHECKING:
    from ..utils.config import MeterConfig

logger = logging.getLogger(__name__)

ABSOLUTE_GATE_LUFS = -70.0
RELATIVE_GATE_OFFSET_LU = -10.0
BLOCK_OVERLAP = 0.75
LOUDNESS_OFFSET = -0.691


def _round_half_away_from_zero(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def block_count(sample_count: int, sample_rate: float, block_size: float = DEFAULT_BLOCK_SIZE_S) -> int:
    """Number of overlapping gating blocks covering ``sample_count`` samples."""

    step = 1.0 - BLOCK_OVERLAP
    duration = sample_count / sample_rate
    return int(_round_half_away_from_zero((duration - block_size) / (block_size * step))) + 1


def block_bounds(
    index: int,
    sample_count: int,
    sample_rate: float,
    block_size: float = DEFAULT_BLOCK_SIZE_S,
) -> tuple[int, int]:
    """Half-open sample range of gating block ``index``, clamped to the buffer end."""

    step = 1.0 - BLOCK_OVERLAP
    lower = min(int(block_size * (index * step) * sample_rate), sample_count)
    upper = min(int(block_size * (index * step + 1) * sample_rate), sample_count)
    return lower, upper


def block_energies(filtered: np.ndarray, sample_rate: float, block_size: float = DEFAULT_BLOCK_SIZE_S) -> np.ndarray:
    """Mean-square energy ``z[channel, block]`` of a weighted channel-first buffer.

    Trailing blocks that run past the end are kept and still normalized by the
    full block length.
    """

    channel_count, sample_count = filtered.shape
    blocks = block_count(sample_count, sample_rate, block_size)
    scale = 1.0 / (block_size * sample_rate)

    energies = np.zeros((channel_count, blocks), dtype=np.float64)
    for block in range(blocks):
        lower, upper = block_bounds(block, sample_count, sample_rate, block_size)
        if upper <= lower:
            continue
        # Sequential accumulation in sample order; np.sum would sum pairwise.
        energies[:, block] = scale * np.cumsum(np.square(filtered[:, lower:upper]), axis=1)[:, -1]
    return energies


def _weighted_sum(values: np.ndarray) -> np.ndarray:
    gains = np.asarray(CHANNEL_GAINS[: values.shape[0]], dtype=np.float64)
    if values.ndim == 1:
        return np.sum(gains * values)
    return np.sum(gains[:, np.newaxis] * values, axis=0)


def _gated_mean(energies: np.ndarray, gate: np.ndarray) -> np.ndarray:
    kept = int(np.count_nonzero(gate))
    if kept == 0:
        return np.full(energies.shape[0], np.nan)
    return np.sum(energies[:, gate], axis=1) / kept


def gated_loudness(energies: np.ndarray) -> float:
    """Two-pass gated loudness in LUFS from per-channel block energies.

    Silent or fully gated material yields ``-inf`` (or ``nan``); that is a valid
    measurement, not an error.
    """

    with np.errstate(divide="ignore", invalid="ignore"):
        block_loudness = LOUDNESS_OFFSET + 10.0 * np.log10(_weighted_sum(energies))

        absolute_gate = block_loudness >= ABSOLUTE_GATE_LUFS
        absolute_mean = _gated_mean(energies, absolute_gate)

        relative_threshold = (
            LOUDNESS_OFFSET + 10.0 * np.log10(_weighted_sum(absolute_mean)) + RELATIVE_GATE_OFFSET_LU
        )

        relative_gate = (block_loudness > relative_threshold) & (block_loudness > ABSOLUTE_GATE_LUFS)
        relative_mean = _gated_mean(energies, relative_gate)
        # Only the final average is clamped; an empty absolute gate stays nan.
        relative_mean = np.where(np.isfinite(relative_mean), relative_mean, 0.0)

        loudness = float(LOUDNESS_OFFSET + 10.0 * np.log10(_weighted_sum(relative_mean)))

    logger.debug(
        "Gated %d block(s): %d above absolute gate, %d above relative gate %.2f LUFS.",
        block_loudness.size,
        int(np.count_nonzero(absolute_gate)),
        int(np.count_nonzero(relative_gate)),
        float(relative_threshold),
    )
    return loudness


class Loudness:
    """Loudness meter configuration and the weighting stages derived from it.

    The stage map is rebuilt whenever ``sample_rate`` or ``filter_class`` changes.
    """

    def __init__(
        self,
        sample_rate: float,
        filter_class: FilterClass | str = FilterClass.K_WEIGHTING,
        block_size: float = DEFAULT_BLOCK_SIZE_S,
    ) -> None:
        filter_class = FilterClass(filter_class)
        self._stages = stages_for(filter_class, sample_rate)
        self._sample_rate = float(sample_rate)
        self._filter_class = filter_class
        self.block_size = float(block_size)

    @classmethod
    def from_config(cls, config: "MeterConfig") -> "Loudness":
        return cls(config.sample_rate, filter_class=config.filter_class, block_size=config.block_size)

    @property
    def sample_rate(self) -> float:
        return self._sample_rate

    @sample_rate.setter
    def sample_rate(self, value: float) -> None:
        self._stages = stages_for(self._filter_class, value)
        self._sample_rate = float(value)

    @property
    def filter_class(self) -> FilterClass:
        return self._filter_class

    @filter_class.setter
    def filter_class(self, value: FilterClass | str) -> None:
        value = FilterClass(value)
        self._stages = stages_for(value, self._sample_rate)
        self._filter_class = value

    @property
    def stages(self) -> StageMap:
        return dict(self._stages)

    def apply_weighting(self, buffer: np.ndarray) -> np.ndarray:
        """Run every weighting stage over every channel, one full pass per stage."""

        weighted = np.array(buffer, dtype=np.float64)
        for stage in self._stages.values():
            for channel in range(weighted.shape[0]):
                weighted[channel] = stage.apply_filter(weighted[channel])
        return weighted

    def integrated_loudness(self, data: BufferLike) -> float:
        """Measure integrated loudness of channel-first ``data`` in LUFS.

        Raises :class:`LoudnessValidationError` for buffers with no channels, more
        than five channels, or fewer samples than one gating block.
        """

        buffer = as_loudness_buffer(data)
        ensure_channel_count(buffer)
        sample_count = buffer.shape[1]
        if sample_count < self.block_size * self._sample_rate:
            raise LoudnessValidationError(
                "buffer_too_short",
                "Audio must have length greater than the block size.",
            )

        weighted = self.apply_weighting(buffer)
        energies = block_energies(weighted, self._sample_rate, self.block_size)
        loudness = gated_loudness(energies)

        if not math.isfinite(loudness):
            logger.debug("Integrated loudness is degenerate (%s); material is silent or fully gated.", loudness)
        return loudness

from __future__ import annotations

import logging
import math

import numpy as np

from .base import BaseProcessor
from ..analyzer.loudness import Loudness
from ..audio_contract import DEFAULT_BLOCK_SIZE_S, DEFAULT_TARGET_LUFS, as_loudness_buffer
from ..filters import FilterClass
from ..normalization import normalize_loudness_scale

logger = logging.getLogger(__name__)


class LoudnessCompProcessor(BaseProcessor):
    """Apply gain to reach a target integrated loudness.

    With ``attenuate_only`` material already at or below the target is passed
    through untouched.
    """

    def __init__(
        self,
        target_lufs: float = DEFAULT_TARGET_LUFS,
        max_gain_db: float = 20.0,
        attenuate_only: bool = False,
        filter_class: FilterClass | str = FilterClass.K_WEIGHTING,
        block_size: float = DEFAULT_BLOCK_SIZE_S,
    ) -> None:
        self.target_lufs = float(target_lufs)
        self.max_gain_db = float(max_gain_db)
        self.attenuate_only = bool(attenuate_only)
        self.filter_class = FilterClass(filter_class)
        self.block_size = float(block_size)

    def gain_for(self, input_lufs: float) -> float:
        """Linear gain for a measured loudness, ``1.0`` when no change applies."""

        if not math.isfinite(input_lufs):
            logger.warning("Skipping loudness gain: measured loudness is %s.", input_lufs)
            return 1.0
        if self.attenuate_only and input_lufs <= self.target_lufs:
            return 1.0

        target = float(np.clip(self.target_lufs, input_lufs - self.max_gain_db, input_lufs + self.max_gain_db))
        return normalize_loudness_scale(input_lufs, target)

    def process(self, audio: np.ndarray, sample_rate: float) -> np.ndarray:
        buffer = as_loudness_buffer(audio)
        meter = Loudness(sample_rate, filter_class=self.filter_class, block_size=self.block_size)
        current_lufs = meter.integrated_loudness(buffer)
        gain = self.gain_for(current_lufs)
        logger.debug("Loudness %.2f LUFS -> target %.2f LUFS, gain %.4f.", current_lufs, self.target_lufs, gain)
        return buffer * gain

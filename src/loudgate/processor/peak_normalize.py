from __future__ import annotations

import logging

import numpy as np

from .base import BaseProcessor
from ..audio_contract import as_loudness_buffer
from ..normalization import current_peak, normalize_peak

logger = logging.getLogger(__name__)


class PeakNormalizeProcessor(BaseProcessor):
    """Scale audio so its sample peak lands on ``target_db`` dBFS."""

    def __init__(self, target_db: float = -1.0) -> None:
        self.target_db = float(target_db)

    def process(self, audio: np.ndarray, sample_rate: float) -> np.ndarray:
        buffer = as_loudness_buffer(audio)
        if buffer.size == 0 or current_peak(buffer) == 0.0:
            logger.warning("Skipping peak normalization: buffer is silent.")
            return buffer
        return normalize_peak(buffer, self.target_db)

"""Processor interface shared by the gain-staging chain."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np


class BaseProcessor(ABC):
    """Base class for all gain-staging processors."""

    @abstractmethod
    def process(self, audio: np.ndarray, sample_rate: float) -> np.ndarray:
        """Process channel-first audio and return a new buffer."""
        raise NotImplementedError

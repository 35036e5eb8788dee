"""Cascaded second-order IIR sections with explicit, caller-owned state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from scipy.signal import lfilter, lfiltic


@dataclass(slots=True)
class BiquadState:
    """Direct-form I history for every section and channel of a cascade.

    ``history[section, channel]`` holds ``(x[n-1], x[n-2], y[n-1], y[n-2])``.
    A state belongs to one filtering pass; allocate a new one (or ``reset``) before
    filtering unrelated material.
    """

    history: np.ndarray

    @classmethod
    def zeros(cls, section_count: int, channel_count: int = 1) -> "BiquadState":
        return cls(history=np.zeros((section_count, channel_count, 4), dtype=np.float64))

    @property
    def section_count(self) -> int:
        return self.history.shape[0]

    @property
    def channel_count(self) -> int:
        return self.history.shape[1]

    def reset(self) -> None:
        self.history.fill(0.0)


class BiquadFilter:
    """Apply fixed ``(b0, b1, b2, a1, a2)`` coefficients through ``section_count`` identical sections.

    Each section evaluates ``y[n] = b0*x[n] + b1*x[n-1] + b2*x[n-2] - a1*y[n-1] - a2*y[n-2]``.
    The cascaded output is scaled by ``passband_gain``.
    """

    def __init__(
        self,
        coefficients: Sequence[float],
        section_count: int = 1,
        passband_gain: float = 1.0,
    ) -> None:
        if len(coefficients) != 5:
            raise ValueError("Biquad coefficients must be (b0, b1, b2, a1, a2).")
        if section_count < 1:
            raise ValueError("A biquad cascade needs at least one section.")

        b0, b1, b2, a1, a2 = (float(value) for value in coefficients)
        self.coefficients = (b0, b1, b2, a1, a2)
        self.section_count = int(section_count)
        self.passband_gain = float(passband_gain)
        self._b = np.array([b0, b1, b2], dtype=np.float64)
        self._a = np.array([1.0, a1, a2], dtype=np.float64)

    def new_state(self, channel_count: int = 1) -> BiquadState:
        return BiquadState.zeros(self.section_count, channel_count)

    def apply(self, samples: np.ndarray | Sequence[float], state: BiquadState | None = None) -> np.ndarray:
        """Filter mono ``(samples,)`` or channel-first ``(channels, samples)`` input.

        Without ``state`` a fresh zeroed state is used and discarded afterwards. A
        caller-supplied state is updated in place so a later call continues where
        this one stopped.
        """

        data = np.array(samples, dtype=np.float64)
        if data.ndim > 2:
            raise ValueError("Biquad input must be 1D or 2D channel-first.")
        is_mono = data.ndim == 1
        channels = np.atleast_2d(data)

        if state is None:
            state = self.new_state(channels.shape[0])
        elif state.section_count != self.section_count or state.channel_count != channels.shape[0]:
            raise ValueError(
                f"Filter state is shaped for {state.section_count} sections x {state.channel_count} channels, "
                f"input needs {self.section_count} x {channels.shape[0]}."
            )

        for section in range(self.section_count):
            for channel in range(channels.shape[0]):
                channels[channel] = self._run_section(channels[channel], state.history[section, channel])

        filtered = channels * self.passband_gain
        return filtered[0] if is_mono else filtered

    def _run_section(self, x: np.ndarray, history: np.ndarray) -> np.ndarray:
        x1, x2, y1, y2 = (float(value) for value in history)
        zi = lfiltic(self._b, self._a, y=[y1, y2], x=[x1, x2])
        y, _ = lfilter(self._b, self._a, x, zi=zi)

        if x.size:
            tail_x = np.concatenate(([x2, x1], x))[-2:]
            tail_y = np.concatenate(([y2, y1], y))[-2:]
            history[:] = (tail_x[1], tail_x[0], tail_y[1], tail_y[0])
        return y

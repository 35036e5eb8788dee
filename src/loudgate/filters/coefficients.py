"""Closed-form biquad coefficient derivation for the weighting filter shapes.

The standard shapes follow the RBJ audio EQ cookbook. The two DeMan shapes use a
bilinear-transform formulation with a slightly detuned band gain and are kept
as separate branches so their formulas stay exactly as published.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

from .biquad import BiquadFilter

# Exponent applied to the high-frequency gain to derive the DeMan band gain.
_DEMAN_BAND_GAIN_EXPONENT = 0.499666774155


class FilterShape(str, Enum):
    """Filter response shapes understood by :func:`generate_coefficients`."""

    HIGH_SHELF = "high_shelf"
    LOW_SHELF = "low_shelf"
    HIGH_PASS = "high_pass"
    LOW_PASS = "low_pass"
    PEAKING = "peaking"
    NOTCH = "notch"
    HIGH_SHELF_DEMAN = "high_shelf_deman"
    HIGH_PASS_DEMAN = "high_pass_deman"


@dataclass(frozen=True, slots=True)
class IIRFilterSpec:
    """Parameters that fully determine one weighting biquad."""

    gain_db: float
    q: float
    corner_freq_hz: float
    sample_rate_hz: float
    shape: FilterShape
    passband_gain: float = 1.0

    @property
    def coefficients(self) -> tuple[float, float, float, float, float]:
        return generate_coefficients(self)

    def build_filter(self, section_count: int = 1) -> BiquadFilter:
        return BiquadFilter(self.coefficients, section_count=section_count, passband_gain=self.passband_gain)

    def apply_filter(self, samples: np.ndarray) -> np.ndarray:
        """Filter ``samples`` with a freshly allocated filter state."""

        return self.build_filter().apply(samples)


def generate_coefficients(spec: IIRFilterSpec) -> tuple[float, float, float, float, float]:
    """Return ``(b0, b1, b2, a1, a2)`` normalized so that ``a0 == 1``."""

    big_a = 10.0 ** (spec.gain_db / 40.0)
    w0 = 2.0 * math.pi * (spec.corner_freq_hz / spec.sample_rate_hz)
    alpha = math.sin(w0) / (2.0 * spec.q)
    cos_w0 = math.cos(w0)
    sqrt_a = math.sqrt(big_a)

    shape = FilterShape(spec.shape)
    if shape is FilterShape.HIGH_SHELF:
        b0 = big_a * ((big_a + 1) + (big_a - 1) * cos_w0 + 2 * sqrt_a * alpha)
        b1 = -2 * big_a * ((big_a - 1) + (big_a + 1) * cos_w0)
        b2 = big_a * ((big_a + 1) + (big_a - 1) * cos_w0 - 2 * sqrt_a * alpha)
        a0 = (big_a + 1) - (big_a - 1) * cos_w0 + 2 * sqrt_a * alpha
        a1 = 2 * ((big_a - 1) - (big_a + 1) * cos_w0)
        a2 = (big_a + 1) - (big_a - 1) * cos_w0 - 2 * sqrt_a * alpha
    elif shape is FilterShape.LOW_SHELF:
        b0 = big_a * ((big_a + 1) - (big_a - 1) * cos_w0 + 2 * sqrt_a * alpha)
        b1 = 2 * big_a * ((big_a - 1) - (big_a + 1) * cos_w0)
        b2 = big_a * ((big_a + 1) - (big_a - 1) * cos_w0 - 2 * sqrt_a * alpha)
        a0 = (big_a + 1) + (big_a - 1) * cos_w0 + 2 * sqrt_a * alpha
        a1 = -2 * ((big_a - 1) + (big_a + 1) * cos_w0)
        a2 = (big_a + 1) + (big_a - 1) * cos_w0 - 2 * sqrt_a * alpha
    elif shape is FilterShape.HIGH_PASS:
        b0 = (1 + cos_w0) / 2
        b1 = -(1 + cos_w0)
        b2 = (1 + cos_w0) / 2
        a0 = 1 + alpha
        a1 = -2 * cos_w0
        a2 = 1 - alpha
    elif shape is FilterShape.LOW_PASS:
        b0 = (1 - cos_w0) / 2
        b1 = 1 - cos_w0
        b2 = (1 - cos_w0) / 2
        a0 = 1 + alpha
        a1 = -2 * cos_w0
        a2 = 1 - alpha
    elif shape is FilterShape.PEAKING:
        b0 = 1 + alpha * big_a
        b1 = -2 * cos_w0
        b2 = 1 - alpha * big_a
        a0 = 1 + alpha / big_a
        a1 = -2 * cos_w0
        a2 = 1 - alpha / big_a
    elif shape is FilterShape.NOTCH:
        b0 = 1.0
        b1 = -2 * cos_w0
        b2 = 1.0
        a0 = 1 + alpha
        a1 = -2 * cos_w0
        a2 = 1 - alpha
    elif shape is FilterShape.HIGH_SHELF_DEMAN:
        k = math.tan(math.pi * spec.corner_freq_hz / spec.sample_rate_hz)
        vh = 10.0 ** (spec.gain_db / 20.0)
        vb = vh**_DEMAN_BAND_GAIN_EXPONENT
        a0_ = 1.0 + k / spec.q + k * k
        b0 = (vh + vb * k / spec.q + k * k) / a0_
        b1 = 2.0 * (k * k - vh) / a0_
        b2 = (vh - vb * k / spec.q + k * k) / a0_
        a0 = 1.0
        a1 = 2.0 * (k * k - 1.0) / a0_
        a2 = (1.0 - k / spec.q + k * k) / a0_
    else:
        # FilterShape.HIGH_PASS_DEMAN
        k = math.tan(math.pi * spec.corner_freq_hz / spec.sample_rate_hz)
        a0 = 1.0
        a1 = 2.0 * (k * k - 1.0) / (1.0 + k / spec.q + k * k)
        a2 = (1.0 - k / spec.q + k * k) / (1.0 + k / spec.q + k * k)
        b0 = 1.0
        b1 = -2.0
        b2 = 1.0

    return (b0 / a0, b1 / a0, b2 / a0, a1 / a0, a2 / a0)

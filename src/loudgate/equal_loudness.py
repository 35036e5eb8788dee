"""Piecewise-linear approximation of the 40-phon equal-loudness contour."""

from __future__ import annotations

import numpy as np

# (frequency Hz, sound pressure level dB) control points of the contour.
DB40_PHON_POINTS: tuple[tuple[float, float], ...] = (
    (60.0, 70.0),
    (80.0, 60.0),
    (200.0, 50.0),
    (1000.0, 40.0),
    (1400.0, 45.0),
    (1600.0, 45.0),
    (3000.0, 35.0),
    (4000.0, 35.0),
    (9000.0, 55.0),
    (12500.0, 55.0),
    (15000.0, 52.0),
)
DB40_PHON_MAX_DB = 70.0


def db40_phon(freq_hz: float) -> float:
    """Level in dB SPL perceived as loud as 40 phon at ``freq_hz``.

    Below the first control point the curve rises from 0 Hz, where it starts at the
    level of the last point. At or above the last point it stays flat.
    """

    previous_freq, previous_db = 0.0, DB40_PHON_POINTS[-1][1]
    for point_freq, point_db in DB40_PHON_POINTS:
        if freq_hz < point_freq:
            t = (freq_hz - previous_freq) / (point_freq - previous_freq)
            return float(previous_db + (point_db - previous_db) * t)
        previous_freq, previous_db = point_freq, point_db
    return DB40_PHON_POINTS[-1][1]


def db40_phon_scale(freq_hz: float) -> float:
    """:func:`db40_phon` scaled so the loudest point of the contour is ``1.0``."""

    return db40_phon(freq_hz) / DB40_PHON_MAX_DB


def db40_phon_curve(freqs_hz: np.ndarray) -> np.ndarray:
    return np.array([db40_phon(float(freq)) for freq in np.ravel(freqs_hz)], dtype=np.float64).reshape(
        np.shape(freqs_hz)
    )

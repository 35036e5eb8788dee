import math

import numpy as np
import pytest

from loudgate.analyzer import Loudness
from loudgate.errors import LoudnessValidationError
from loudgate.normalization import (
    amplitude_to_db,
    current_peak,
    db_to_amplitude,
    normalize_loudness,
    normalize_loudness_scale,
    normalize_peak,
    normalize_peak_scale,
    sample_peak_db,
)


def test_current_peak_spans_all_channels():
    audio = np.array([[0.1, -0.2, 0.3], [0.05, -0.75, 0.0]])

    assert current_peak(audio) == 0.75


def test_current_peak_accepts_nested_lists():
    assert current_peak([[0.5, -0.25], [0.1, 0.2]]) == 0.5


def test_current_peak_of_empty_buffer_fails():
    with pytest.raises(LoudnessValidationError) as excinfo:
        current_peak(np.zeros((2, 0)))

    assert excinfo.value.code == "empty_buffer"


def test_normalize_peak_scale():
    audio = np.array([[0.5, -0.25]])

    assert normalize_peak_scale(audio, 0.0) == pytest.approx(2.0)
    assert normalize_peak_scale(audio, -6.0) == pytest.approx(10 ** (-6.0 / 20) / 0.5)


def test_normalize_peak_reaches_target(stereo_noise):
    target_db = -1.0

    normalized = normalize_peak(stereo_noise["audio"], target_db)

    assert normalized.shape == stereo_noise["audio"].shape
    assert current_peak(normalized) == pytest.approx(10 ** (target_db / 20))


def test_normalize_peak_applies_one_gain_to_every_channel():
    audio = np.array([[0.5, -0.25], [0.1, 0.2]])

    normalized = normalize_peak(audio, 0.0)

    assert np.allclose(normalized, audio * 2.0)
    assert np.array_equal(audio, np.array([[0.5, -0.25], [0.1, 0.2]]))


def test_normalize_loudness_scale():
    assert normalize_loudness_scale(-20.0, -14.0) == pytest.approx(10 ** (6 / 20))
    assert normalize_loudness_scale(-14.0, -14.0) == 1.0
    assert normalize_loudness_scale(-8.0, -14.0) == pytest.approx(10 ** (-6 / 20))


def test_normalize_loudness_round_trip(stereo_noise):
    meter = Loudness(stereo_noise["sample_rate"])
    input_lufs = meter.integrated_loudness(stereo_noise["audio"])

    normalized = normalize_loudness(stereo_noise["audio"], input_lufs, -23.0)

    assert meter.integrated_loudness(normalized) == pytest.approx(-23.0, abs=0.1)


def test_normalize_loudness_from_degenerate_measurement_is_not_finite():
    gain = normalize_loudness_scale(float("-inf"), -14.0)

    assert not math.isfinite(gain)


def test_level_conversions():
    assert db_to_amplitude(0.0) == 1.0
    assert db_to_amplitude(float("-inf")) == 0.0
    assert db_to_amplitude(-20.0) == pytest.approx(0.1)
    assert amplitude_to_db(0.1) == pytest.approx(-20.0)
    assert amplitude_to_db(0.0) == float("-inf")


def test_sample_peak_db():
    assert sample_peak_db(np.array([[0.5, -1.0]])) == pytest.approx(0.0)
    assert sample_peak_db(np.zeros((1, 8))) == float("-inf")

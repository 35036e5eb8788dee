import contextlib
import math

import numpy as np
import pytest

from loudgate.analyzer import Loudness
from loudgate.errors import ConfigurationError, LoudnessValidationError
from loudgate.filters import FilterClass, FilterShape

# Integrated loudness of a full-scale 1 kHz sine, mono, 48 kHz, K-weighting.
FULL_SCALE_1K_LUFS = -3.01


def test_loudness_analyzer_monotonic(sine_wave):
    meter = Loudness(sine_wave["sample_rate"])
    quiet_lufs = meter.integrated_loudness(sine_wave["quiet"])
    loud_lufs = meter.integrated_loudness(sine_wave["loud"])

    assert loud_lufs > quiet_lufs


def test_full_scale_sine_reference_level(full_scale_1k):
    meter = Loudness(full_scale_1k["sample_rate"])

    lufs = meter.integrated_loudness(full_scale_1k["audio"])

    assert math.isfinite(lufs)
    assert lufs == pytest.approx(FULL_SCALE_1K_LUFS, abs=0.05)


def test_scaling_shifts_loudness_by_gain_in_db(stereo_noise):
    meter = Loudness(stereo_noise["sample_rate"])
    k = 0.3

    base = meter.integrated_loudness(stereo_noise["audio"])
    scaled = meter.integrated_loudness(stereo_noise["audio"] * k)

    assert scaled - base == pytest.approx(20 * math.log10(k), abs=1e-6)


def test_measurement_is_deterministic(stereo_noise):
    meter = Loudness(stereo_noise["sample_rate"])

    first = meter.integrated_loudness(stereo_noise["audio"])
    second = meter.integrated_loudness(stereo_noise["audio"])

    assert first == second


def test_input_buffer_is_not_modified(stereo_noise):
    audio = stereo_noise["audio"]
    snapshot = audio.copy()

    Loudness(stereo_noise["sample_rate"]).integrated_loudness(audio)

    assert np.array_equal(audio, snapshot)


def test_digital_silence_is_a_degenerate_result_not_an_error():
    lufs = Loudness(48000).integrated_loudness(np.zeros((1, 48000)))

    assert lufs == float("-inf")


def test_silent_second_channel_matches_mono(full_scale_1k):
    mono = full_scale_1k["audio"]
    stereo = np.vstack([mono, np.zeros_like(mono)])
    meter = Loudness(full_scale_1k["sample_rate"])

    assert meter.integrated_loudness(stereo) == meter.integrated_loudness(mono)


def test_surround_channels_are_weighted_up(full_scale_1k):
    mono = full_scale_1k["audio"][0]
    silent = np.zeros_like(mono)
    meter = Loudness(full_scale_1k["sample_rate"])

    front = meter.integrated_loudness(np.vstack([mono, silent, silent, silent]))
    surround = meter.integrated_loudness(np.vstack([silent, silent, silent, mono]))

    assert surround - front == pytest.approx(10 * math.log10(1.41), abs=1e-9)


def test_nested_lists_and_mono_vectors_are_accepted():
    t = np.arange(24000) / 48000
    tone = 0.5 * np.sin(2 * np.pi * 440.0 * t)
    meter = Loudness(48000)

    from_vector = meter.integrated_loudness(tone)
    from_lists = meter.integrated_loudness([tone.tolist()])

    assert from_vector == from_lists


@pytest.mark.parametrize("channel_count", [0, 6, 8])
def test_channel_count_outside_supported_range_fails(channel_count):
    with pytest.raises(LoudnessValidationError) as excinfo:
        Loudness(48000).integrated_loudness(np.ones((channel_count, 48000)))

    assert excinfo.value.code == "invalid_channel_count"


def test_empty_list_has_no_channels():
    with pytest.raises(LoudnessValidationError) as excinfo:
        Loudness(48000).integrated_loudness([])

    assert excinfo.value.code == "invalid_channel_count"


def test_channel_count_is_checked_before_length():
    with pytest.raises(LoudnessValidationError) as excinfo:
        Loudness(48000).integrated_loudness(np.ones((6, 10)))

    assert excinfo.value.code == "invalid_channel_count"


def test_buffer_shorter_than_one_block_fails():
    with pytest.raises(LoudnessValidationError) as excinfo:
        Loudness(48000).integrated_loudness(np.ones((2, 19199)))

    assert excinfo.value.code == "buffer_too_short"
    assert isinstance(excinfo.value, ValueError)
    assert "block size" in str(excinfo.value)


def test_buffer_of_exactly_one_block_is_measured():
    lufs = Loudness(48000).integrated_loudness(0.5 * np.ones((1, 19200)))

    assert not math.isnan(lufs)


def test_three_dimensional_input_is_rejected():
    with pytest.raises(LoudnessValidationError) as excinfo:
        Loudness(48000).integrated_loudness(np.zeros((1, 2, 48000)))

    assert excinfo.value.code == "invalid_shape"


def test_stages_are_rebuilt_when_sample_rate_changes():
    meter = Loudness(44100)
    before = meter.stages[FilterShape.HIGH_SHELF]

    meter.sample_rate = 48000

    after = meter.stages[FilterShape.HIGH_SHELF]
    assert after.sample_rate_hz == 48000.0
    assert after.coefficients != before.coefficients


def test_stages_are_rebuilt_when_filter_class_changes():
    meter = Loudness(48000)

    meter.filter_class = "DeMan"

    assert meter.filter_class is FilterClass.DEMAN
    assert list(meter.stages) == [FilterShape.HIGH_SHELF_DEMAN, FilterShape.HIGH_PASS_DEMAN]


def test_stage_map_cannot_be_mutated_through_accessor():
    meter = Loudness(48000)

    meter.stages.clear()

    assert len(meter.stages) == 2


def test_fenton_lee_2_fails_at_configuration():
    with pytest.raises(ConfigurationError):
        Loudness(48000, filter_class=FilterClass.FENTON_LEE_2)


def test_failed_class_change_keeps_previous_configuration():
    meter = Loudness(48000)

    with pytest.raises(ConfigurationError):
        meter.filter_class = FilterClass.FENTON_LEE_2

    assert meter.filter_class is FilterClass.K_WEIGHTING
    assert list(meter.stages) == [FilterShape.HIGH_SHELF, FilterShape.HIGH_PASS]


def test_custom_class_measures_unweighted_energy():
    # One block of constant 1.0: mean square 1.0 -> the bare loudness offset.
    lufs = Loudness(1000, filter_class=FilterClass.CUSTOM).integrated_loudness(np.ones((1, 400)))

    assert lufs == pytest.approx(-0.691)


def test_validation_error_propagates_through_context_managers():
    @contextlib.contextmanager
    def scope():
        yield

    with pytest.raises(LoudnessValidationError) as excinfo:
        with scope():
            Loudness(48000).integrated_loudness(np.ones((6, 48000)))

    assert excinfo.value.code == "invalid_channel_count"
    assert excinfo.value.as_dict()["code"] == "invalid_channel_count"

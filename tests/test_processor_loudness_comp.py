import numpy as np
import pytest

from loudgate.analyzer import Loudness
from loudgate.processor import LoudnessCompProcessor


def test_loudness_comp_moves_toward_target(sine_wave):
    meter = Loudness(sine_wave["sample_rate"])
    processor = LoudnessCompProcessor(target_lufs=-12.0)

    before = meter.integrated_loudness(sine_wave["quiet"])
    after = meter.integrated_loudness(processor.process(sine_wave["quiet"], sine_wave["sample_rate"]))

    assert abs(after - processor.target_lufs) < abs(before - processor.target_lufs)
    assert after == pytest.approx(-12.0, abs=0.1)


def test_loudness_comp_clamps_gain_change():
    processor = LoudnessCompProcessor(target_lufs=-14.0, max_gain_db=6.0)

    assert processor.gain_for(-40.0) == pytest.approx(10 ** (6.0 / 20))
    assert processor.gain_for(0.0) == pytest.approx(10 ** (-6.0 / 20))


def test_attenuate_only_leaves_quiet_material_alone():
    processor = LoudnessCompProcessor(target_lufs=-14.0, attenuate_only=True)

    assert processor.gain_for(-20.0) == 1.0
    assert processor.gain_for(-14.0) == 1.0
    assert processor.gain_for(-8.0) == pytest.approx(10 ** (-6.0 / 20))


@pytest.mark.parametrize("measured", [float("-inf"), float("nan")])
def test_degenerate_measurement_skips_gain(measured, caplog):
    processor = LoudnessCompProcessor()

    with caplog.at_level("WARNING"):
        assert processor.gain_for(measured) == 1.0

    assert "Skipping loudness gain" in caplog.text


def test_silent_buffer_passes_through_unchanged():
    silent = np.zeros((2, 48000))

    result = LoudnessCompProcessor().process(silent, 48000)

    assert np.array_equal(result, silent)

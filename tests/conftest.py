import numpy as np
import pytest


@pytest.fixture
def sine_wave():
    sample_rate = 44100
    duration_s = 5.0
    t = np.linspace(0.0, duration_s, int(sample_rate * duration_s), endpoint=False)
    base = np.sin(2 * np.pi * 440.0 * t)
    return {
        "sample_rate": sample_rate,
        "quiet": 0.1 * base[np.newaxis, :],
        "loud": 0.5 * base[np.newaxis, :],
    }


@pytest.fixture
def full_scale_1k():
    sample_rate = 48000
    duration_s = 2.0
    t = np.arange(int(sample_rate * duration_s)) / sample_rate
    return {
        "sample_rate": sample_rate,
        "audio": np.sin(2 * np.pi * 1000.0 * t)[np.newaxis, :],
    }


@pytest.fixture
def stereo_noise():
    rng = np.random.default_rng(1770)
    sample_rate = 44100
    audio = 0.25 * rng.standard_normal((2, int(sample_rate * 3.0)))
    return {"sample_rate": sample_rate, "audio": audio}

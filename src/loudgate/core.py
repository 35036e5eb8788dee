"""Entry points tying the meter, normalization utilities and processors together."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .analyzer.loudness import Loudness
from .audio_contract import BufferLike, as_loudness_buffer
from .normalization import amplitude_to_db, current_peak
from .processor import BaseProcessor, LoudnessCompProcessor, PeakNormalizeProcessor
from .utils.config import ChainConfig, EngineConfig, LoudnessCompConfig, MeterConfig, PeakNormalizeConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LoudnessReport:
    """Loudness and sample-peak measurements of one buffer."""

    integrated_lufs: float
    sample_peak: float
    sample_peak_db: float
    channel_count: int
    sample_count: int
    sample_rate: float


def measure(data: BufferLike, meter_config: MeterConfig) -> LoudnessReport:
    """Measure integrated loudness and sample peak of ``data``."""

    buffer = as_loudness_buffer(data)
    meter = Loudness.from_config(meter_config)
    integrated = meter.integrated_loudness(buffer)
    peak = current_peak(buffer)
    return LoudnessReport(
        integrated_lufs=integrated,
        sample_peak=peak,
        sample_peak_db=amplitude_to_db(peak),
        channel_count=buffer.shape[0],
        sample_count=buffer.shape[1],
        sample_rate=meter_config.sample_rate,
    )


def build_chain_from_config(config: ChainConfig, meter_config: MeterConfig | None = None) -> list[BaseProcessor]:
    """Instantiate processors in configured order.

    Loudness processors measure with ``meter_config``'s weighting and block size
    when given, otherwise with K-weighting.
    """

    chain: list[BaseProcessor] = []
    for processor_config in config.processors:
        if isinstance(processor_config, LoudnessCompConfig):
            meter_kwargs = {}
            if meter_config is not None:
                meter_kwargs = {
                    "filter_class": meter_config.filter_class,
                    "block_size": meter_config.block_size,
                }
            chain.append(
                LoudnessCompProcessor(
                    target_lufs=processor_config.target_lufs,
                    max_gain_db=processor_config.max_gain_db,
                    attenuate_only=processor_config.attenuate_only,
                    **meter_kwargs,
                )
            )
        elif isinstance(processor_config, PeakNormalizeConfig):
            chain.append(PeakNormalizeProcessor(target_db=processor_config.target_db))
        else:
            raise ValueError(f"Unsupported processor config: {processor_config!r}")
    return chain


def apply_chain(audio: BufferLike, sample_rate: float, chain: Sequence[BaseProcessor]) -> np.ndarray:
    processed = as_loudness_buffer(audio)
    for processor in chain:
        logger.debug("Applying %s.", type(processor).__name__)
        processed = processor.process(processed, sample_rate)
    return processed


def process_with_config(audio: BufferLike, config: EngineConfig) -> np.ndarray:
    """Run the configured chain over ``audio`` at the meter's sample rate."""

    chain = build_chain_from_config(config.chain, config.meter)
    return apply_chain(audio, config.meter.sample_rate, chain)

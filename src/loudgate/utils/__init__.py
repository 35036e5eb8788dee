from .config import (
    ChainConfig,
    EngineConfig,
    LoudnessCompConfig,
    MeterConfig,
    PeakNormalizeConfig,
    ProcessorConfig,
    load_chain_config,
    load_engine_config,
)

__all__ = [
    "ChainConfig",
    "EngineConfig",
    "LoudnessCompConfig",
    "MeterConfig",
    "PeakNormalizeConfig",
    "ProcessorConfig",
    "load_chain_config",
    "load_engine_config",
]

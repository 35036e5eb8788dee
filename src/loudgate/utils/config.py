from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal, Union

import json

from pydantic import BaseModel, Field, field_validator

from ..audio_contract import DEFAULT_BLOCK_SIZE_S, DEFAULT_TARGET_LUFS
from ..filters import UNSUPPORTED_FILTER_CLASSES, FilterClass


class MeterConfig(BaseModel):
    sample_rate: float = Field(..., gt=0.0)
    filter_class: FilterClass = FilterClass.K_WEIGHTING
    block_size: float = Field(DEFAULT_BLOCK_SIZE_S, gt=0.0)

    @field_validator("filter_class")
    @classmethod
    def _validate_filter_class(cls, value: FilterClass) -> FilterClass:
        if value in UNSUPPORTED_FILTER_CLASSES:
            raise ValueError(f"filter_class '{value.value}' is not implemented.")
        return value


class LoudnessCompConfig(BaseModel):
    type: Literal["loudness_comp"] = "loudness_comp"
    target_lufs: float = Field(DEFAULT_TARGET_LUFS)
    max_gain_db: float = Field(20.0, ge=0.0, le=60.0)
    attenuate_only: bool = False

    @field_validator("target_lufs")
    @classmethod
    def _validate_target_lufs(cls, value: float) -> float:
        if value > 0.0:
            raise ValueError("target_lufs must be <= 0.0.")
        return value


class PeakNormalizeConfig(BaseModel):
    type: Literal["peak_normalize"] = "peak_normalize"
    target_db: float = Field(-1.0, le=0.0)


ProcessorConfig = Annotated[
    Union[LoudnessCompConfig, PeakNormalizeConfig],
    Field(discriminator="type"),
]


class ChainConfig(BaseModel):
    processors: list[ProcessorConfig]


class EngineConfig(BaseModel):
    meter: MeterConfig
    chain: ChainConfig = Field(default_factory=lambda: ChainConfig(processors=[]))


def load_chain_config(path: Path) -> ChainConfig:
    data = _load_config_data(path)
    return ChainConfig.model_validate(data)


def load_engine_config(path: Path) -> EngineConfig:
    data = _load_config_data(path)
    return EngineConfig.model_validate(data)


def _load_config_data(path: Path) -> dict:
    if path.suffix.lower() in {".yaml", ".yml"}:
        try:
            import yaml
        except ImportError as exc:
            raise ImportError("PyYAML is required to load YAML configs.") from exc

        with path.open("r", encoding="utf-8") as handle:
            return yaml.safe_load(handle) or {}

    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)
